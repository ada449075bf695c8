"""Growable circular buffer."""

from __future__ import annotations


class Ring:
    """FIFO ring that doubles its capacity when a push finds it full."""

    def __init__(self, capacity=10):
        if capacity < 1:
            raise ValueError("capacity must be at least 1")
        self._slots = [None] * capacity
        self._begin = 0
        self._end = 0
        self._count = 0

    @property
    def capacity(self) -> int:
        return len(self._slots)

    def __len__(self) -> int:
        return self._count

    def __iter__(self):
        cap = self.capacity
        for offset in range(self._count):
            yield self._slots[(self._begin + offset) % cap]

    def __repr__(self) -> str:
        return f"Ring({list(self)!r}, capacity={self.capacity})"

    def _expand(self) -> None:
        cap = self.capacity
        old = self._slots
        slots = [None] * (cap * 2)
        if self._begin < self._end:
            slots[self._begin:self._end] = old[self._begin:self._end]
        else:
            slots[self._begin:cap] = old[self._begin:cap]
            slots[cap:cap + self._end] = old[:self._end]
            self._end += cap
        self._slots = slots

    def push(self, value) -> None:
        """Append ``value`` at the tail."""
        if self._count == self.capacity:
            self._expand()
        self._slots[self._end] = value
        self._end = (self._end + 1) % self.capacity
        self._count += 1

    def tighten(self, step: int) -> None:
        """Drop ``step`` elements from the head (all of them if fewer remain)."""
        if step < 0:
            raise ValueError("step must not be negative")
        self._count = max(0, self._count - step)
        if self._count == 0:
            self._begin = self._end
        else:
            self._begin = (self._begin + step) % self.capacity