import os

import pytest

from sercore.task import run_supervised, save_pid


def test_save_pid_writes_current_pid(tmp_path):
    path = save_pid("demo", str(tmp_path))
    assert path == os.path.join(str(tmp_path), "demo.pid")
    with open(path, encoding="ascii") as fh:
        assert fh.read() == str(os.getpid())


def test_save_pid_missing_dir_raises(tmp_path):
    with pytest.raises(OSError):
        save_pid("demo", str(tmp_path / "absent"))


def _count_and_fail(counter_path):
    with open(counter_path, "a", encoding="ascii") as fh:
        fh.write("x")
    with open(counter_path, encoding="ascii") as fh:
        attempts = len(fh.read())
    return 0 if attempts >= 3 else 1


def test_child_restarted_until_clean_exit(tmp_path):
    counter = tmp_path / "counter"
    result = run_supervised(_count_and_fail, str(counter), "demo", str(tmp_path), 0)
    assert result == 0
    assert counter.read_text(encoding="ascii") == "xxx"
    assert not (tmp_path / "demo.pid").exists()


def _raise_once(counter_path):
    with open(counter_path, "a", encoding="ascii") as fh:
        fh.write("y")
    with open(counter_path, encoding="ascii") as fh:
        if len(fh.read()) == 1:
            raise RuntimeError("first run fails")
    return None


def test_exception_in_child_counts_as_failure(tmp_path):
    counter = tmp_path / "counter"
    run_supervised(_raise_once, str(counter), "demo", str(tmp_path), 0)
    assert counter.read_text(encoding="ascii") == "yy"