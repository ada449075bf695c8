"""Stable bottom-up merge sort driven by a three-way comparison function."""

from __future__ import annotations


def _merge(left, right, cmp):
    merged = []
    i = j = 0
    while i < len(left) and j < len(right):
        if cmp(left[i], right[j]) <= 0:
            merged.append(left[i])
            i += 1
        else:
            merged.append(right[j])
            j += 1
    merged.extend(left[i:])
    merged.extend(right[j:])
    return merged


def merge_sort(items, cmp):
    """Return a new list of ``items`` sorted by ``cmp``.

    ``cmp(a, b)`` returns a negative, zero or positive number. Equal
    elements keep their original order.
    """
    runs = [[item] for item in items]
    while len(runs) > 1:
        merged = [_merge(left, right, cmp) for left, right in zip(runs[::2], runs[1::2])]
        if len(runs) % 2:
            merged.append(runs[-1])
        runs = merged
    return runs[0] if runs else []