"""Levelled logging to the console and to a size-bounded log file."""

from __future__ import annotations

import enum
import sys
import threading
import time

MAX_LOG_MSG = 2047
DEFAULT_MAX_SIZE = 81920
TRIM_DROP = 1024

_LABELS = ("", "Error", "Warn", "Info", "Debug")


class LogLevel(enum.IntEnum):
    """Severity of a log message; higher values are more verbose."""

    NO = 0
    ERROR = 1
    WARN = 2
    INFO = 3
    DEBUG = 4

    @property
    def label(self) -> str:
        return _LABELS[self]


def level_from_name(name: str) -> LogLevel:
    """Return the level whose label matches ``name``, ignoring case."""
    wanted = name.casefold()
    for level in LogLevel:
        if level.label.casefold() == wanted:
            return level
    raise ValueError(f"unknown log level {name!r}")


def trim_file(path, max_size: int, drop: int) -> int:
    """Shrink the file at ``path`` when it grows past ``max_size`` bytes.

    The first ``drop`` bytes and the rest of the line they end in are
    discarded. Returns the size of the file afterwards.
    """
    with open(path, "r+b") as fh:
        data = fh.read()
        if len(data) <= max_size:
            return len(data)
        cut = data.find(b"\n", drop)
        kept = b"" if cut < 0 else data[cut + 1:]
        fh.seek(0)
        fh.write(kept)
        fh.truncate()
        return len(kept)


def _timestamp() -> str:
    now = time.time_ns()
    seconds, nanos = divmod(now, 1_000_000_000)
    stamp = time.strftime("%Y-%m-%d %H:%M:%S", time.localtime(seconds))
    return f"{stamp}.{nanos:09d}"


class Logger:
    """Writes timestamped messages up to ``max_level`` to stdout and/or a file."""

    def __init__(self, max_level=LogLevel.NO, max_size=DEFAULT_MAX_SIZE):
        self.max_level = LogLevel(max_level)
        self.max_size = max_size
        self.console = False
        self.path = None
        self._file = None
        self._lock = threading.Lock()

    def __enter__(self) -> "Logger":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def enable_console(self) -> None:
        self.console = True

    def open_file(self, path) -> None:
        """Append messages to ``path``; ``None`` only closes the current file."""
        self.close()
        if path is None:
            return
        self._file = open(path, "a", encoding="utf-8")
        self.path = path

    def close(self) -> None:
        if self._file is not None:
            self._file.close()
        self._file = None
        self.path = None

    def log(self, level, message) -> None:
        if level > self.max_level:
            return
        if not LogLevel.ERROR <= level <= LogLevel.DEBUG:
            raise ValueError(f"invalid log level {level!r}")
        level = LogLevel(level)
        if not self.console and self._file is None:
            return

        text = str(message)[:MAX_LOG_MSG]
        line = f"[{level.label}] {_timestamp()}: {text}"
        with self._lock:
            if self.console:
                print(line, file=sys.stdout)
            if self._file is not None:
                self._file.flush()
                try:
                    trim_file(self.path, self.max_size, TRIM_DROP)
                except OSError as err:
                    print(f"trim_file failed: {err}", file=sys.stderr)
                self._file.write(line + "\n")
                self._file.flush()

    def error(self, message) -> None:
        self.log(LogLevel.ERROR, message)

    def warn(self, message) -> None:
        self.log(LogLevel.WARN, message)

    def info(self, message) -> None:
        self.log(LogLevel.INFO, message)

    def debug(self, message) -> None:
        self.log(LogLevel.DEBUG, message)


_DEFAULT = Logger()


def default_logger() -> Logger:
    """Return the process-wide logger."""
    return _DEFAULT