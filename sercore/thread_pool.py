"""Fixed set of worker threads draining a bounded request queue."""

from __future__ import annotations

import collections
import threading

from .logger import default_logger


class PoolFullError(RuntimeError):
    """Raised when the pool already holds its maximum of pending requests."""


class ThreadPool:
    """Runs ``process(arg)`` requests on ``threads`` worker threads."""

    def __init__(self, threads, max_requests, init_worker=None, init_arg=None):
        if threads < 1:
            raise ValueError("threads must be at least 1")
        if max_requests < 1:
            raise ValueError("max_requests must be at least 1")
        self.max_requests = max_requests
        self._requests = collections.deque()
        self._cond = threading.Condition()
        self._stopped = False
        self._init_worker = init_worker
        self._init_arg = init_arg
        self._threads = [
            threading.Thread(target=self._worker, name=f"pool-worker-{n}", daemon=True)
            for n in range(threads)
        ]
        for thread in self._threads:
            thread.start()

    def __enter__(self) -> "ThreadPool":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def append(self, process, arg=None) -> None:
        """Queue ``process(arg)``; raises PoolFullError when the queue is full."""
        with self._cond:
            if self._stopped:
                raise RuntimeError("thread pool is closed")
            if len(self._requests) >= self.max_requests:
                default_logger().warn("thread pool is full !")
                raise PoolFullError("thread pool is full")
            self._requests.append((process, arg))
            self._cond.notify()

    def _worker(self) -> None:
        if self._init_worker is not None:
            self._init_worker(self._init_arg)
        while True:
            with self._cond:
                while not self._requests and not self._stopped:
                    self._cond.wait()
                if self._stopped:
                    return
                process, arg = self._requests.popleft()
            try:
                process(arg)
            except Exception as err:
                default_logger().error(f"thread pool request failed: {err!r}")

    def close(self) -> None:
        """Stop the workers; requests not yet started are dropped."""
        with self._cond:
            self._stopped = True
            self._cond.notify_all()
        current = threading.current_thread()
        for thread in self._threads:
            if thread is not current:
                thread.join()