"""Run a function in a child process and restart it until it exits cleanly."""

from __future__ import annotations

import os
import signal
import sys
import threading
import time
import traceback

from .logger import default_logger

DEFAULT_RUN_DIR = "/var/run"

_HANDLED_SIGNALS = tuple(
    getattr(signal, name)
    for name in ("SIGINT", "SIGABRT", "SIGQUIT", "SIGTERM")
    if hasattr(signal, name)
)


def save_pid(prgname, run_dir=DEFAULT_RUN_DIR) -> str:
    """Write the current process id to ``<run_dir>/<prgname>.pid``; return the path."""
    path = os.path.join(run_dir, f"{prgname}.pid")
    try:
        with open(path, "w", encoding="ascii") as fh:
            fh.write(str(os.getpid()))
    except OSError as err:
        default_logger().error(f"save_pid : {err}")
        raise
    return path


def _run_child(func, arg) -> None:
    for sig in _HANDLED_SIGNALS:
        signal.signal(sig, signal.SIG_DFL)
    code = 1
    try:
        result = func(arg)
        code = 0 if result is None else int(result) & 0xFF
    except BaseException:
        traceback.print_exc()
    finally:
        sys.stdout.flush()
        sys.stderr.flush()
        os._exit(code)


def run_supervised(func, arg, prgname, run_dir=DEFAULT_RUN_DIR, restart_delay=1.0) -> int:
    """Run ``func(arg)`` in a forked child, restarting it after a failure.

    The child's return value is its exit status; the loop ends once a child
    exits with status 0. The pid file is removed and a running child is sent
    SIGTERM when the supervisor is stopped by a signal. Returns 0.
    """
    log = default_logger()
    try:
        pid_path = save_pid(prgname, run_dir)
    except OSError:
        pid_path = None
    child = {"pid": -1}

    def cleanup():
        if pid_path is not None:
            try:
                os.unlink(pid_path)
            except FileNotFoundError:
                pass
        if child["pid"] > 0:
            try:
                os.kill(child["pid"], signal.SIGTERM)
            except ProcessLookupError:
                pass
            log.debug(f"kill {child['pid']}")
            child["pid"] = -1

    def on_signal(signum, frame):
        log.info(f"signal {signum}")
        cleanup()
        raise SystemExit(0)

    previous = {}
    if threading.current_thread() is threading.main_thread():
        for sig in _HANDLED_SIGNALS:
            previous[sig] = signal.signal(sig, on_signal)

    try:
        while True:
            pid = os.fork()
            if pid == 0:
                _run_child(func, arg)
            child["pid"] = pid
            _, status = os.waitpid(pid, 0)
            if os.WIFEXITED(status):
                code = os.WEXITSTATUS(status)
                if code == 0:
                    child["pid"] = -1
                    break
                log.info(f"child exit '{code}'")
            elif os.WIFSIGNALED(status):
                log.info(f"child exit by signal '{os.WTERMSIG(status)}'")
            child["pid"] = -1
            log.info("restart child")
            time.sleep(restart_delay)
    finally:
        cleanup()
        for sig, handler in previous.items():
            signal.signal(sig, handler)
    return 0