import threading

import pytest

from sercore.table import Table, string_cmp, string_hash


def test_put_get_and_length():
    table = Table(100)
    assert table.put("alpha", 1) is None
    assert table.put("beta", 2) is None
    assert table.get("alpha") == 1
    assert table.get("beta") == 2
    assert len(table) == 2


def test_put_existing_key_keeps_old_value():
    table = Table(10)
    table.put("key", "first")
    assert table.put("key", "second") == "first"
    assert table.get("key") == "first"
    assert len(table) == 1


def test_get_missing_returns_none():
    table = Table(10)
    table.put("a", 1)
    assert table.get("missing") is None


def test_remove():
    table = Table(10)
    table.put("a", 1)
    table.put("b", 2)
    assert table.remove("a") == 1
    assert table.get("a") is None
    assert len(table) == 1
    assert table.remove("a") is None
    assert len(table) == 1


@pytest.mark.parametrize("hint,size", [(0, 1), (1, 1), (100, 11), (5000, 4093)])
def test_bucket_count_from_hint(hint, size):
    assert Table(hint).size == size


def test_negative_hint_rejected():
    with pytest.raises(ValueError):
        Table(-1)


def test_to_list_holds_all_values():
    table = Table(20)
    words = ["one", "two", "three", "four", "five"]
    for number, word in enumerate(words):
        table.put(word, number)
    assert sorted(table.to_list()) == list(range(len(words)))


def test_map_replaces_values():
    table = Table(20)
    for word in ("x", "yy", "zzz"):
        table.put(word, word)
    table.map(lambda key, value: value.upper())
    assert table.get("yy") == "YY"
    assert sorted(table.to_list()) == ["X", "YY", "ZZZ"]


def test_map_none_keeps_values():
    table = Table(20)
    table.put("a", 5)
    seen = []
    table.map(lambda key, value: seen.append((key, value)))
    assert seen == [("a", 5)]
    assert table.get("a") == 5


def test_custom_int_keys_and_concurrent_writers():
    table = Table(1, lambda a, b: 0 if a == b else 1, lambda k: k)
    per_writer = 500
    writers = 4

    def write(start):
        for n in range(start * per_writer, (start + 1) * per_writer):
            table.put(n, n)

    threads = [threading.Thread(target=write, args=(i,)) for i in range(writers)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert len(table) == per_writer * writers
    assert sorted(table.to_list()) == list(range(per_writer * writers))


def test_string_cmp():
    assert string_cmp("a", "b") < 0
    assert string_cmp("b", "a") > 0
    assert string_cmp("same", "same") == 0


def test_string_hash_properties():
    assert string_hash("ab", 7) == string_hash("ba", 7)
    assert 0 <= string_hash("hello world", 13) < 13
    with pytest.raises(ValueError):
        string_hash("x", 0)