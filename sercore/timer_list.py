"""Sorted list of one-shot and repeating timers driven by a periodic tick."""

from __future__ import annotations

import threading
import time
from dataclasses import dataclass, field

from .logger import default_logger


@dataclass(eq=False)
class Timer:
    """A scheduled call of ``call(arg)`` ``msec`` milliseconds after ``ts``."""

    call: object
    arg: object
    msec: int
    repeat: bool
    ts: float
    discard: bool = field(default=False)
    exec_on_discard: bool = field(default=False)

    @property
    def due(self) -> float:
        return self.ts + self.msec / 1000


def _insert(timers: list, timer: Timer) -> None:
    for index, other in enumerate(timers):
        if timer.due <= other.due:
            timers.insert(index, timer)
            return
    timers.append(timer)


class TimerList:
    """Keeps timers ordered by due time; ``tick`` fires those that are due."""

    def __init__(self, clock=time.time):
        self._clock = clock
        self._timers = []
        self._lock = threading.Lock()
        self._thread = None
        self._stop_event = None

    def __len__(self) -> int:
        with self._lock:
            return len(self._timers)

    def create(self, msec, repeat, call, arg) -> Timer:
        """Schedule ``call(arg)`` after ``msec`` ms, repeating if ``repeat``."""
        if msec < 0:
            raise ValueError("msec must not be negative")
        default_logger().debug(f"timer create arg {arg!r}")
        timer = Timer(call=call, arg=arg, msec=msec, repeat=bool(repeat), ts=self._clock())
        with self._lock:
            _insert(self._timers, timer)
        return timer

    def tick(self) -> None:
        """Fire every due timer; discarded timers are dropped."""
        now = self._clock()
        if not self._lock.acquire(blocking=False):
            default_logger().debug("timer tick: list busy, skipped")
            return
        try:
            fired = []
            remaining = []
            for timer in self._timers:
                if timer.discard or timer.due <= now:
                    _insert(fired, timer)
                else:
                    remaining.append(timer)
            self._timers = remaining
        finally:
            self._lock.release()

        for timer in fired:
            if not timer.discard or timer.exec_on_discard:
                timer.call(timer.arg)

        for timer in fired:
            if not timer.discard and timer.repeat:
                timer.ts = now
                with self._lock:
                    _insert(self._timers, timer)

    def discard_target(self, target, exec_on_discard=False) -> int:
        """Mark every timer whose ``arg`` is ``target`` for removal.

        With ``exec_on_discard`` the callback still runs once at the next
        tick. Returns the number of timers marked.
        """
        marked = 0
        with self._lock:
            for timer in self._timers:
                if timer.arg is target:
                    timer.discard = True
                    timer.exec_on_discard = bool(exec_on_discard)
                    marked += 1
        default_logger().debug(f"timer discard_target marked {marked}")
        return marked

    def start(self, msec) -> None:
        """Tick every ``msec`` ms on a background thread; 0 stops ticking."""
        if msec < 0:
            raise ValueError("msec must not be negative")
        self.stop()
        if msec == 0:
            return
        stop_event = threading.Event()
        interval = msec / 1000

        def run():
            while not stop_event.wait(interval):
                self.tick()

        self._stop_event = stop_event
        self._thread = threading.Thread(target=run, name="timer-list", daemon=True)
        self._thread.start()

    def stop(self) -> None:
        """Stop the background ticking thread, if any."""
        if self._stop_event is not None:
            self._stop_event.set()
        thread = self._thread
        if thread is not None and thread is not threading.current_thread():
            thread.join()
        self._thread = None
        self._stop_event = None