"""Key-value dictionaries: a plain one and a sharded thread-safe one."""

from __future__ import annotations

import random
import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Callable

Consumer = Callable[[str, Any], bool]

_OFFSET32 = 2166136261
_PRIME32 = 16777619
_MASK32 = 0xFFFFFFFF
_MAX_INT32 = (1 << 31) - 1


def fnv32(key: str) -> int:
    """32-bit FNV-1 hash of the UTF-8 bytes of ``key``."""
    value = _OFFSET32
    for byte in key.encode():
        value = (value * _PRIME32) & _MASK32
        value ^= byte
    return value


def _compute_capacity(param: int) -> int:
    if param <= 16:
        return 16
    size = 1 << (param - 1).bit_length()
    return _MAX_INT32 if size > _MAX_INT32 else size


class Dict(ABC):
    """A mapping from string keys to arbitrary values."""

    @abstractmethod
    def get(self, key: str) -> Any:
        """Return the value bound to ``key``, or None when absent."""

    @abstractmethod
    def __contains__(self, key: object) -> bool:
        """Return whether ``key`` is present."""

    @abstractmethod
    def __len__(self) -> int:
        """Return the number of entries."""

    @abstractmethod
    def put(self, key: str, val: Any) -> int:
        """Bind ``val`` to ``key``; return 1 if the key is new, else 0."""

    @abstractmethod
    def put_if_absent(self, key: str, val: Any) -> int:
        """Bind only a new key; return the number of entries inserted."""

    @abstractmethod
    def put_if_exists(self, key: str, val: Any) -> int:
        """Rebind only an existing key; return the number of entries updated."""

    @abstractmethod
    def remove(self, key: str) -> int:
        """Delete ``key``; return the number of entries removed."""

    @abstractmethod
    def for_each(self, consumer: Consumer) -> None:
        """Call ``consumer(key, value)`` per entry until it returns false."""

    def keys(self) -> list[str]:
        """Return all keys."""
        result: list[str] = []

        def collect(key: str, _val: Any) -> bool:
            result.append(key)
            return True

        self.for_each(collect)
        return result

    @abstractmethod
    def random_keys(self, limit: int) -> list[str]:
        """Return ``limit`` random keys, possibly repeated."""

    @abstractmethod
    def random_distinct_keys(self, limit: int) -> list[str]:
        """Return up to ``limit`` random keys without repetition."""

    @abstractmethod
    def clear(self) -> None:
        """Remove every entry."""


@dataclass
class _Shard:
    data: dict[str, Any] = field(default_factory=dict)
    lock: threading.Lock = field(default_factory=threading.Lock)

    def random_key(self) -> str | None:
        with self.lock:
            if not self.data:
                return None
            return random.choice(list(self.data))


class ConcurrentDict(Dict):
    """Thread-safe dictionary split into independently locked shards."""

    def __init__(self, shard_count: int) -> None:
        self._shard_count = _compute_capacity(shard_count)
        self._table = self._make_table()

    def _make_table(self) -> list[_Shard]:
        return [_Shard() for _ in range(self._shard_count)]

    def _shard(self, key: str) -> _Shard:
        table = self._table
        return table[(len(table) - 1) & fnv32(key)]

    def get(self, key: str) -> Any:
        shard = self._shard(key)
        with shard.lock:
            return shard.data.get(key)

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, str):
            return False
        shard = self._shard(key)
        with shard.lock:
            return key in shard.data

    def __len__(self) -> int:
        return sum(len(shard.data) for shard in self._table)

    def put(self, key: str, val: Any) -> int:
        shard = self._shard(key)
        with shard.lock:
            existed = key in shard.data
            shard.data[key] = val
            return 0 if existed else 1

    def put_if_absent(self, key: str, val: Any) -> int:
        shard = self._shard(key)
        with shard.lock:
            if key in shard.data:
                return 0
            shard.data[key] = val
            return 1

    def put_if_exists(self, key: str, val: Any) -> int:
        shard = self._shard(key)
        with shard.lock:
            if key in shard.data:
                shard.data[key] = val
                return 1
            return 0

    def remove(self, key: str) -> int:
        shard = self._shard(key)
        with shard.lock:
            if key in shard.data:
                del shard.data[key]
                return 1
            return 0

    def for_each(self, consumer: Consumer) -> None:
        """Visit entries shard by shard; entries added meanwhile may be missed."""
        for shard in self._table:
            with shard.lock:
                snapshot = list(shard.data.items())
            for key, value in snapshot:
                if not consumer(key, value):
                    return

    def keys(self) -> list[str]:
        result: list[str] = []
        for shard in self._table:
            with shard.lock:
                result.extend(shard.data)
        return result

    def random_keys(self, limit: int) -> list[str]:
        if limit >= len(self):
            return self.keys()
        result: list[str] = []
        while len(result) < limit:
            key = random.choice(self._table).random_key()
            if key is not None:
                result.append(key)
        return result

    def random_distinct_keys(self, limit: int) -> list[str]:
        if limit >= len(self):
            return self.keys()
        result: set[str] = set()
        while len(result) < limit:
            key = random.choice(self._table).random_key()
            if key is not None:
                result.add(key)
        return list(result)

    def clear(self) -> None:
        self._table = self._make_table()


class SimpleDict(Dict):
    """Dictionary over a plain ``dict``; not thread safe."""

    def __init__(self) -> None:
        self._m: dict[str, Any] = {}

    def get(self, key: str) -> Any:
        return self._m.get(key)

    def __contains__(self, key: object) -> bool:
        return key in self._m

    def __len__(self) -> int:
        return len(self._m)

    def put(self, key: str, val: Any) -> int:
        existed = key in self._m
        self._m[key] = val
        return 0 if existed else 1

    def put_if_absent(self, key: str, val: Any) -> int:
        if key in self._m:
            return 0
        self._m[key] = val
        return 1

    def put_if_exists(self, key: str, val: Any) -> int:
        if key in self._m:
            self._m[key] = val
            return 1
        return 0

    def remove(self, key: str) -> int:
        if key in self._m:
            del self._m[key]
            return 1
        return 0

    def keys(self) -> list[str]:
        return list(self._m)

    def for_each(self, consumer: Consumer) -> None:
        for key, value in list(self._m.items()):
            if not consumer(key, value):
                break

    def random_keys(self, limit: int) -> list[str]:
        if not self._m:
            return []
        return random.choices(list(self._m), k=limit)

    def random_distinct_keys(self, limit: int) -> list[str]:
        size = min(limit, len(self._m))
        return random.sample(list(self._m), size)

    def clear(self) -> None:
        self._m = {}