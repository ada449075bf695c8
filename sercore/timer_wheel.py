"""Hashed timer wheel: timers are bucketed by trigger tick modulo the slot count."""

from __future__ import annotations

import threading
from dataclasses import dataclass, field


@dataclass(eq=False)
class TimerNode:
    """A timer that calls ``call(arg)`` ``cycle`` ticks after it was scheduled."""

    call: object
    arg: object
    cycle: int
    repeat: bool
    trigger_ts: int = 0
    deleted: bool = field(default=False)

    def cancel(self) -> None:
        """Mark the timer deleted; the wheel drops it when it next visits its slot."""
        self.deleted = True


class _Slot:
    __slots__ = ("nodes", "lock")

    def __init__(self):
        self.nodes = []
        self.lock = threading.Lock()


class TimerWheel:
    """A wheel of ``slot_count`` slots advanced one slot per tick.

    ``tick_interval`` is the time between ticks in milliseconds, used by
    :meth:`start` to drive the wheel from a background thread. Nodes are
    owned by the wheel: a one-shot node is forgotten once it fires, a
    repeating one is rescheduled until it is deleted.
    """

    def __init__(self, slot_count=10, tick_interval=1000):
        if slot_count < 1:
            raise ValueError("slot_count must be at least 1")
        if tick_interval < 0:
            raise ValueError("tick_interval must not be negative")
        self.slot_count = slot_count
        self.tick_interval = tick_interval
        self._slots = [_Slot() for _ in range(slot_count)]
        self._cur_ts = 0
        self._ts_lock = threading.Lock()
        self._thread = None
        self._stop_event = None

    def __enter__(self) -> "TimerWheel":
        return self

    def __exit__(self, *exc_info) -> None:
        self.stop()

    @property
    def current_ts(self) -> int:
        """Number of ticks performed so far."""
        with self._ts_lock:
            return self._cur_ts

    def _schedule(self, node: TimerNode) -> TimerNode:
        with self._ts_lock:
            node.trigger_ts = self._cur_ts + node.cycle
        slot = self._slots[node.trigger_ts % self.slot_count]
        with slot.lock:
            for index, other in enumerate(slot.nodes):
                if other.trigger_ts >= node.trigger_ts:
                    slot.nodes.insert(index, node)
                    break
            else:
                slot.nodes.append(node)
        return node

    def add(self, cycle, repeat, call, arg=None) -> TimerNode:
        """Schedule ``call(arg)`` ``cycle`` ticks from now and return its node."""
        if cycle < 0:
            raise ValueError("cycle must not be negative")
        node = TimerNode(call=call, arg=arg, cycle=cycle, repeat=bool(repeat))
        return self._schedule(node)

    def delete(self, node: TimerNode) -> None:
        """Ask the wheel to drop ``node``; removal happens lazily during ticks."""
        node.cancel()

    def tick(self) -> int:
        """Advance the wheel one slot and fire the timers now due.

        Returns the number of callbacks run.
        """
        with self._ts_lock:
            self._cur_ts += 1
            cur = self._cur_ts
        slot = self._slots[cur % self.slot_count]

        due = []
        with slot.lock:
            remaining = []
            for index, node in enumerate(slot.nodes):
                if node.deleted:
                    continue
                if node.trigger_ts > cur:
                    remaining.extend(slot.nodes[index:])
                    break
                due.append(node)
            slot.nodes = remaining

        due.reverse()
        for node in due:
            node.call(node.arg)
            if node.repeat:
                self._schedule(node)
        return len(due)

    def pending(self) -> int:
        """Number of scheduled timers that have not been deleted."""
        count = 0
        for slot in self._slots:
            with slot.lock:
                count += sum(1 for node in slot.nodes if not node.deleted)
        return count

    def start(self) -> None:
        """Tick every ``tick_interval`` ms on a background thread."""
        if self.tick_interval <= 0:
            raise ValueError("tick_interval must be positive to start ticking")
        self._halt()
        stop_event = threading.Event()
        interval = self.tick_interval / 1000

        def run():
            while not stop_event.wait(interval):
                self.tick()

        self._stop_event = stop_event
        self._thread = threading.Thread(target=run, name="timer-wheel", daemon=True)
        self._thread.start()

    def _halt(self) -> None:
        if self._stop_event is not None:
            self._stop_event.set()
        thread = self._thread
        if thread is not None and thread is not threading.current_thread():
            thread.join()
        self._thread = None
        self._stop_event = None

    def stop(self) -> None:
        """Stop ticking and discard every scheduled timer."""
        self._halt()
        for slot in self._slots:
            with slot.lock:
                slot.nodes = []