"""Consistent hashing ring with hash-tag support."""

from __future__ import annotations

import bisect
import zlib
from typing import Callable

HashFunc = Callable[[bytes], int]


def get_partition_key(key: str) -> str:
    """Return the hash tag inside ``{...}`` if present, else the key itself."""
    beg = key.find("{")
    if beg == -1:
        return key
    end = key.find("}")
    if end == -1 or end == beg + 1:
        return key
    return key[beg + 1:end]


class ConsistentHash:
    """Maps keys onto nodes placed on a hash ring."""

    def __init__(self, replicas: int, hash_func: HashFunc | None = None) -> None:
        self._replicas = replicas
        self._hash_func: HashFunc = hash_func or zlib.crc32
        self._keys: list[int] = []
        self._hash_map: dict[int, str] = {}

    def is_empty(self) -> bool:
        """Return whether no node has been added."""
        return not self._keys

    def add_node(self, *args: str) -> None:
        """Add nodes to the ring; empty names are ignored."""
        for key in args:
            if not key:
                continue
            for i in range(self._replicas):
                hash_code = int(self._hash_func(f"{i}{key}".encode()))
                self._keys.append(hash_code)
                self._hash_map[hash_code] = key
        self._keys.sort()

    def pick_node(self, key: str) -> str:
        """Return the node closest on the ring to ``key``, or '' if empty."""
        if self.is_empty():
            return ""
        hash_code = int(self._hash_func(get_partition_key(key).encode()))
        idx = bisect.bisect_left(self._keys, hash_code)
        if idx == len(self._keys):
            idx = 0
        return self._hash_map[self._keys[idx]]