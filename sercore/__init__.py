"""Building blocks for long-running services: logging, timers, tables, tries, TLV coding and line de-duplication."""

__version__ = "0.1.0"
__all__ = [
    "listsort",
    "logger",
    "muniq",
    "ring",
    "table",
    "task",
    "text",
    "thread_pool",
    "timer_list",
    "timer_wheel",
    "tlv",
    "trie",
]