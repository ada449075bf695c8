import pytest

from sercore.ring import Ring


def test_push_and_iterate():
    ring = Ring(10)
    for n in range(10):
        ring.push(n)
    assert list(ring) == list(range(10))
    assert len(ring) == 10
    assert ring.capacity == 10


def test_worked_example_tighten_then_grow():
    ring = Ring(10)
    for n in range(10):
        ring.push(n)
    offset = next(i for i, value in enumerate(ring) if value == 3)
    ring.tighten(offset + 1)
    assert list(ring) == [4, 5, 6, 7, 8, 9]
    for n in range(10):
        ring.push(n)
    assert list(ring) == [4, 5, 6, 7, 8, 9] + list(range(10))
    assert ring.capacity == 20


def test_grows_when_full():
    ring = Ring(2)
    for n in range(5):
        ring.push(n)
    assert list(ring) == list(range(5))
    assert ring.capacity >= 5


def test_order_kept_across_wrap_and_expand():
    ring = Ring(4)
    for n in "abcd":
        ring.push(n)
    ring.tighten(2)
    ring.push("e")
    ring.push("f")
    assert list(ring) == ["c", "d", "e", "f"]
    ring.push("g")
    assert list(ring) == ["c", "d", "e", "f", "g"]
    assert ring.capacity == 8


def test_tighten_past_length_empties():
    ring = Ring(3)
    ring.push(1)
    ring.push(2)
    ring.tighten(5)
    assert len(ring) == 0
    assert list(ring) == []
    ring.push(3)
    assert list(ring) == [3]


def test_tighten_zero_keeps_contents():
    ring = Ring(3)
    ring.push("x")
    ring.tighten(0)
    assert list(ring) == ["x"]


def test_negative_step_raises():
    with pytest.raises(ValueError):
        Ring(3).tighten(-1)


def test_zero_capacity_raises():
    with pytest.raises(ValueError):
        Ring(0)