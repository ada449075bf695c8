"""Substring search within a bounded range of start positions."""

from __future__ import annotations


def find(haystack, needle, start, end):
    """Return the first index in ``[start, end)`` where ``needle`` begins.

    The bounds may be given in either order. Returns -1 when there is no
    match. Works on ``str`` and ``bytes`` alike.
    """
    if not haystack:
        raise ValueError("haystack must not be empty")
    if not needle:
        raise ValueError("needle must not be empty")
    if start > end:
        start, end = end, start
    if start == end:
        raise ValueError("search range is empty")
    return haystack.find(needle, start, end + len(needle) - 1)