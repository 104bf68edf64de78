"""Chained hash map with prime bucket counts and FNV-1a hashing."""

from __future__ import annotations

from collections.abc import Callable, Hashable, Iterator, MutableMapping
from dataclasses import dataclass
from typing import Any

__all__ = [
    "DEFAULT_LOAD_FACTOR",
    "HashMap",
    "HashMapStats",
    "fnv1a32",
    "next_prime",
]

FNV_32_INIT = 0x811C9DC5
FNV_32_PRIME = 0x01000193

DEFAULT_LOAD_FACTOR = 2.0

_PRIMES = (
    5, 11, 23, 53, 97, 193, 389, 769, 1543, 3079, 6151, 12289, 24593, 49157,
    98317, 196613, 393241, 786433, 1572869, 3145739, 6291469, 12582917,
    25165843, 50331653, 100663319, 201326611, 402653189, 805306457,
    1610612741, 3221225549, 6442451111,
)


def fnv1a32(data: bytes | bytearray | memoryview) -> int:
    """Return the 32-bit FNV-1a hash of ``data``."""
    hval = FNV_32_INIT
    for byte in bytes(data):
        hval ^= byte
        hval = (hval * FNV_32_PRIME) & 0xFFFFFFFF
    return hval


def next_prime(n: int) -> int:
    """Return the first tabled prime not below ``n``, or ``2 * n`` past the table."""
    for prime in _PRIMES:
        if prime >= n:
            return prime
    return 2 * n


def _default_hash(key: Hashable) -> int:
    """Hash bytes, text and integers with FNV-1a; other keys with ``hash``."""
    if isinstance(key, (bytes, bytearray, memoryview)):
        return fnv1a32(key)
    if isinstance(key, str):
        return fnv1a32(key.encode("utf-8"))
    if isinstance(key, int):
        try:
            raw = key.to_bytes(8, "little", signed=True)
        except OverflowError:
            raw = str(key).encode("ascii")
        return fnv1a32(raw)
    return hash(key) & 0xFFFFFFFF


@dataclass(frozen=True)
class HashMapStats:
    """Bucket occupancy figures for a :class:`HashMap`."""

    nbuckets: int
    count: int
    empty: int
    links: int
    max_chain: int
    min_chain: int
    avg_chain: float
    load_factor: float


class _Entry:
    __slots__ = ("key", "value")

    def __init__(self, key: Any, value: Any) -> None:
        self.key = key
        self.value = value


class HashMap(MutableMapping):
    """Mapping stored in chained buckets, grown when the load factor is reached.

    Iteration follows bucket order and, within a bucket, insertion order.
    """

    def __init__(
        self,
        nbuckets: int = 0,
        hash_key: Callable[[Any], int] | None = None,
        load_factor: float = DEFAULT_LOAD_FACTOR,
    ) -> None:
        if nbuckets < 0:
            raise ValueError("nbuckets must not be negative")
        if load_factor <= 0:
            raise ValueError("load_factor must be positive")
        self._hash = hash_key if hash_key is not None else _default_hash
        self._load_factor = load_factor
        self._buckets: list[list[_Entry]] = [[] for _ in range(next_prime(nbuckets))]
        self._count = 0

    @property
    def nbuckets(self) -> int:
        """Current number of buckets."""
        return len(self._buckets)

    def _bucket(self, key: Any) -> list[_Entry]:
        return self._buckets[self._hash(key) % len(self._buckets)]

    def _find(self, key: Any) -> _Entry | None:
        for entry in self._bucket(key):
            if entry.key == key:
                return entry
        return None

    def _check_resize(self) -> None:
        if self._count + 1 < len(self._buckets) * self._load_factor:
            return
        buckets: list[list[_Entry]] = [
            [] for _ in range(next_prime(len(self._buckets) + 1))
        ]
        for bucket in self._buckets:
            for entry in bucket:
                buckets[self._hash(entry.key) % len(buckets)].append(entry)
        self._buckets = buckets

    def __setitem__(self, key: Any, value: Any) -> None:
        self._check_resize()
        bucket = self._bucket(key)
        for entry in bucket:
            if entry.key == key:
                entry.value = value
                return
        bucket.append(_Entry(key, value))
        self._count += 1

    def __getitem__(self, key: Any) -> Any:
        entry = self._find(key)
        if entry is None:
            raise KeyError(key)
        return entry.value

    def get(self, key: Any, default: Any = None) -> Any:
        entry = self._find(key)
        return default if entry is None else entry.value

    def __delitem__(self, key: Any) -> None:
        if not self.delete(key):
            raise KeyError(key)

    def delete(self, key: Any) -> bool:
        """Remove ``key``; return whether it was present."""
        bucket = self._bucket(key)
        for pos, entry in enumerate(bucket):
            if entry.key == key:
                del bucket[pos]
                self._count -= 1
                return True
        return False

    def __contains__(self, key: object) -> bool:
        return self._find(key) is not None

    def __len__(self) -> int:
        return self._count

    def __iter__(self) -> Iterator[Any]:
        for _, entry in self._entries():
            yield entry.key

    def _entries(self) -> Iterator[tuple[int, _Entry]]:
        for index, bucket in enumerate(self._buckets):
            for entry in bucket:
                yield index, entry

    def items(self) -> Iterator[tuple[Any, Any]]:  # type: ignore[override]
        """Yield ``(key, value)`` pairs in iteration order."""
        for _, entry in self._entries():
            yield entry.key, entry.value

    def clear(self) -> None:
        """Remove every entry, keeping the current number of buckets."""
        for bucket in self._buckets:
            bucket.clear()
        self._count = 0

    def stats(self) -> HashMapStats:
        """Return occupancy statistics of the buckets."""
        count = empty = links = max_chain = 0
        min_chain: int | None = None
        for bucket in self._buckets:
            if not bucket:
                min_chain = 0
                empty += 1
                continue
            count += len(bucket)
            chains = len(bucket) - 1
            if chains == 0:
                min_chain = 0
                continue
            links += chains
            max_chain = max(max_chain, chains)
            min_chain = chains if min_chain is None else min(min_chain, chains)
        nbuckets = len(self._buckets)
        return HashMapStats(
            nbuckets=nbuckets,
            count=count,
            empty=empty,
            links=links,
            max_chain=max_chain,
            min_chain=min_chain if min_chain is not None else 0,
            avg_chain=links / count if count else 0.0,
            load_factor=count / nbuckets,
        )

    def __repr__(self) -> str:
        body = ", ".join(f"{k!r}: {v!r}" for k, v in self.items())
        return f"{type(self).__name__}({{{body}}})"