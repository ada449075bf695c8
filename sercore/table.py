"""Thread-safe chained hash table with caller-supplied comparison and hash."""

from __future__ import annotations

import threading

_INT_MAX = 2**31 - 1
_PRIMES = (1, 3, 11, 509, 1021, 2053, 4093, 8191, 16381, 32771, 65521, _INT_MAX)


def string_cmp(a, b) -> int:
    """Three-way comparison of two strings: negative, zero or positive."""
    return (a > b) - (a < b)


def string_hash(key, bucket_size: int) -> int:
    """Sum of the key's UTF-8 bytes, reduced modulo ``bucket_size``."""
    if bucket_size < 1:
        raise ValueError("bucket_size must be positive")
    data = key.encode("utf-8") if isinstance(key, str) else bytes(key)
    return sum(data) % bucket_size


def _bucket_count(hint: int) -> int:
    index = 1
    while _PRIMES[index] < hint:
        index += 1
    return _PRIMES[index - 1]


class _Bucket:
    __slots__ = ("entries", "lock")

    def __init__(self):
        self.entries = []
        self.lock = threading.Lock()


class Table:
    """Fixed-size hash table; each bucket is guarded by its own lock.

    ``cmp(stored_key, key)`` returns 0 when the keys are equal.
    ``hash_func(key)`` returns an integer; it is reduced modulo the bucket
    count. Keys are unique: putting an existing key leaves it unchanged.
    """

    def __init__(self, hint=0, cmp=string_cmp, hash_func=None):
        if cmp is None:
            raise ValueError("cmp must be given")
        if hint < 0:
            raise ValueError("hint must not be negative")
        self.size = _bucket_count(hint)
        self._cmp = cmp
        self._hash = hash_func if hash_func is not None else self._default_hash
        self._buckets = [_Bucket() for _ in range(self.size)]
        self._length = 0
        self._length_lock = threading.Lock()

    def _default_hash(self, key) -> int:
        return string_hash(key, self.size)

    def _bucket(self, key) -> _Bucket:
        return self._buckets[self._hash(key) % self.size]

    def _find(self, bucket: _Bucket, key):
        for entry in bucket.entries:
            if self._cmp(entry[0], key) == 0:
                return entry
        return None

    def _adjust_length(self, delta: int) -> None:
        with self._length_lock:
            self._length += delta

    def put(self, key, value):
        """Insert ``key``; returns ``None`` if added, else the existing value."""
        bucket = self._bucket(key)
        with bucket.lock:
            entry = self._find(bucket, key)
            if entry is not None:
                return entry[1]
            bucket.entries.insert(0, [key, value])
        self._adjust_length(1)
        return None

    def get(self, key):
        """Return the value stored for ``key``, or ``None``."""
        bucket = self._bucket(key)
        with bucket.lock:
            entry = self._find(bucket, key)
            return None if entry is None else entry[1]

    def remove(self, key):
        """Remove ``key`` and return its value, or ``None`` if it is absent."""
        bucket = self._bucket(key)
        with bucket.lock:
            for index, entry in enumerate(bucket.entries):
                if self._cmp(entry[0], key) == 0:
                    del bucket.entries[index]
                    break
            else:
                return None
        self._adjust_length(-1)
        return entry[1]

    def __len__(self) -> int:
        with self._length_lock:
            return self._length

    def map(self, apply) -> None:
        """Call ``apply(key, value)`` for every entry.

        A return value other than ``None`` replaces the stored value.
        ``apply`` runs with the bucket locked and should not block.
        """
        for bucket in self._buckets:
            with bucket.lock:
                for entry in bucket.entries:
                    result = apply(entry[0], entry[1])
                    if result is not None:
                        entry[1] = result

    def to_list(self) -> list:
        """Return every stored value, bucket by bucket."""
        values = []
        for bucket in self._buckets:
            with bucket.lock:
                values.extend(entry[1] for entry in bucket.entries)
        return values