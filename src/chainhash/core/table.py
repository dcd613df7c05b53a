from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

from .chain import Chain

logger = logging.getLogger("chainhash")

DEFAULT_CAPACITY: int = 16
LOAD_FACTOR: float = 0.75
_HASH_PRIME: int = 31


def rolling_hash(key: str, capacity: int) -> int:
    """Polynomial rolling hash of ``key``, reduced modulo ``capacity`` at every step."""

    code = 0
    for ch in key:
        code = (_HASH_PRIME * code + ord(ch)) % capacity
    return code


def _is_power_of_two(value: int) -> bool:
    return value >= 1 and (value & (value - 1)) == 0


def _coerce_pair(pair: Any, index: int) -> tuple[str, str]:
    if isinstance(pair, (str, bytes)):
        raise TypeError(f"pairs[{index}] must be a (key, value) pair, got {pair!r}")
    try:
        key, value = pair
    except (TypeError, ValueError) as exc:
        raise TypeError(f"pairs[{index}] must be a (key, value) pair, got {pair!r}") from exc
    if not isinstance(key, str) or not isinstance(value, str):
        raise TypeError(
            f"pairs[{index}] must hold strings, got ({type(key).__name__}, {type(value).__name__})"
        )
    return key, value


class HashTable:
    """String-to-string hash table using separate chaining.

    Buckets are :class:`Chain` instances indexed by :func:`rolling_hash`. The
    table doubles its bucket count as soon as ``size`` exceeds
    ``capacity * load_factor`` and never shrinks, except that :meth:`clear`
    returns it to the default capacity.
    """

    __slots__ = ("_buckets", "_capacity", "_size", "_default_capacity", "_load_factor")

    def __init__(
        self,
        pairs: Iterable[Any] = (),
        *,
        default_capacity: int = DEFAULT_CAPACITY,
        load_factor: float = LOAD_FACTOR,
    ) -> None:
        if not _is_power_of_two(default_capacity):
            raise ValueError("default_capacity must be a power of two")
        if not 0.0 < load_factor <= 1.0:
            raise ValueError("load_factor must be in (0, 1]")
        self._default_capacity = default_capacity
        self._load_factor = load_factor
        self._capacity = default_capacity
        self._buckets: list[Chain] = [Chain() for _ in range(self._capacity)]
        self._size = 0
        for index, pair in enumerate(pairs):
            key, value = _coerce_pair(pair, index)
            self.set(key, value)

    def __len__(self) -> int:
        return self._size

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.has(key)

    def __repr__(self) -> str:  # pragma: no cover - debugging aid
        return f"HashTable(capacity={self._capacity}, size={self._size})"

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def default_capacity(self) -> int:
        return self._default_capacity

    @property
    def max_load_factor(self) -> float:
        return self._load_factor

    def _hash(self, key: str) -> int:
        return rolling_hash(key, self._capacity)

    def _bucket(self, key: str) -> Chain:
        return self._buckets[self._hash(key)]

    def set(self, key: str, value: str) -> None:
        bucket = self._bucket(key)
        if not bucket.has(key):
            self._size += 1
        bucket.set(key, value)
        if self._size > self._capacity * self._load_factor:
            self._resize()

    def get(self, key: str) -> str | None:
        return self._bucket(key).get(key)

    def has(self, key: str) -> bool:
        return self._bucket(key).has(key)

    def remove(self, key: str) -> bool:
        if self._bucket(key).remove(key):
            self._size -= 1
            return True
        return False

    def length(self) -> int:
        return self._size

    def clear(self) -> None:
        self._capacity = self._default_capacity
        self._buckets = [Chain() for _ in range(self._capacity)]
        self._size = 0
        logger.debug("Cleared table (capacity reset to %d)", self._capacity)

    def keys(self) -> list[str]:
        return [key for bucket in self._buckets for key in bucket.keys()]

    def values(self) -> list[str]:
        return [value for bucket in self._buckets for value in bucket.values()]

    def entries(self) -> list[tuple[str, str]]:
        return [entry for bucket in self._buckets for entry in bucket.entries()]

    def load_factor(self) -> float:
        return self._size / self._capacity

    def bucket_lengths(self) -> list[int]:
        return [len(bucket) for bucket in self._buckets]

    def max_chain_len(self) -> int:
        return max(self.bucket_lengths(), default=0)

    def _resize(self) -> None:
        old = self._buckets
        old_capacity = self._capacity
        self._capacity *= 2
        self._size = 0
        self._buckets = [Chain() for _ in range(self._capacity)]
        for bucket in old:
            for key, value in bucket.entries():
                self.set(key, value)
        logger.debug(
            "Resized table %d -> %d buckets (size=%d)", old_capacity, self._capacity, self._size
        )


def verify_table(table: HashTable, verbose: bool = False) -> tuple[bool, list[str]]:
    """Check the structural invariants of ``table``.

    Returns ``(ok, messages)``; messages describe every violation found, plus a
    summary line when ``verbose`` is set.
    """

    msgs: list[str] = []
    buckets = table._buckets
    capacity = table.capacity

    if not _is_power_of_two(capacity):
        msgs.append(f"Capacity {capacity} is not a power of two")
    if len(buckets) != capacity:
        msgs.append(f"Bucket count {len(buckets)} != capacity {capacity}")

    seen: set[str] = set()
    total = 0
    for index, bucket in enumerate(buckets):
        entries = bucket.entries()
        if len(entries) != bucket.size:
            msgs.append(f"Bucket {index}: walked {len(entries)} nodes, size={bucket.size}")
        total += len(entries)
        for key, _ in entries:
            if key in seen:
                msgs.append(f"Duplicate key {key!r} (bucket {index})")
            seen.add(key)
            expected = rolling_hash(key, capacity)
            if expected != index:
                msgs.append(f"Key {key!r} in bucket {index}, hashes to {expected}")

    if total != len(table):
        msgs.append(f"Size mismatch: size={len(table)}, summed={total}")

    ok = not msgs
    if verbose:
        msgs.append(
            f"Capacity={capacity}, Size={len(table)}, LF={table.load_factor():.3f}, "
            f"MaxChainLen={table.max_chain_len()}"
        )
    return ok, msgs


__all__ = [
    "DEFAULT_CAPACITY",
    "LOAD_FACTOR",
    "HashTable",
    "rolling_hash",
    "verify_table",
]
