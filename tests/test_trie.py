import pytest

from sercore.trie import DomainTrie, split_domain

DOMAINS = [
    ("www.aaa.com", "192.168.3.1"),
    ("www.bbb.com", "192.168.3.2"),
    ("*.ccc.com", "192.168.3.3"),
    ("www.ddd.com", "192.168.3.4"),
    ("*.ddd.com", "192.168.3.5"),
    ("aaa.www.ddd.com", "192.168.3.6"),
]


@pytest.fixture
def trie():
    t = DomainTrie()
    for name, ip in DOMAINS:
        assert t.insert(name, ip) is None
    return t


def test_split_domain():
    assert split_domain("www.aaa.com") == ["www", "aaa", "com"]
    assert split_domain("a..b") == ["a", "", "b"]


def test_exact_lookup(trie):
    assert trie.get("www.ddd.com") == "192.168.3.4"
    assert trie.get("www.aaa.com") == "192.168.3.1"
    assert trie.get("aaa.www.ddd.com") == "192.168.3.6"


def test_wildcard_lookup(trie):
    assert trie.get("foo.ccc.com") == "192.168.3.3"
    assert trie.get("zzz.ddd.com") == "192.168.3.5"
    assert trie.get("deep.zzz.ddd.com") == "192.168.3.5"


def test_wildcard_after_failed_descent(trie):
    assert trie.get("bbb.www.ddd.com") == "192.168.3.5"


def test_missing_lookup(trie):
    assert trie.get("nothing.org") is None
    assert trie.get("ftp.aaa.com") is None


def test_duplicate_insert_keeps_old(trie):
    assert trie.insert("www.aaa.com", "other") == "192.168.3.1"
    assert trie.get("www.aaa.com") == "192.168.3.1"


def test_insert_none_rejected():
    with pytest.raises(ValueError):
        DomainTrie().insert("a.b", None)


def test_values_preorder(trie):
    assert list(trie.values()) == [
        "192.168.3.1",
        "192.168.3.2",
        "192.168.3.3",
        "192.168.3.4",
        "192.168.3.6",
        "192.168.3.5",
    ]


def test_remove(trie):
    assert trie.remove("www.bbb.com") == "192.168.3.2"
    assert trie.get("www.bbb.com") is None
    assert trie.remove("www.bbb.com") is None
    assert "192.168.3.2" not in list(trie.values())


def test_remove_keeps_descendants(trie):
    assert trie.remove("www.ddd.com") == "192.168.3.4"
    assert trie.get("aaa.www.ddd.com") == "192.168.3.6"


def test_remove_keeps_ancestor_value():
    t = DomainTrie()
    t.insert("ddd.com", "parent")
    t.insert("www.ddd.com", "child")
    assert t.remove("www.ddd.com") == "child"
    assert t.get("ddd.com") == "parent"


def test_remove_all_prunes(trie):
    for name, ip in DOMAINS:
        assert trie.remove(name) == ip
    assert list(trie.values()) == []
    assert trie.dump() == ""


def test_dump_single():
    t = DomainTrie()
    t.insert("www.aaa.com", "x")
    assert t.dump() == "com aaa www  child[0]\n\n--------\n"