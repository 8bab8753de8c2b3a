"""Snowflake-style unique 64-bit ID generation."""

from __future__ import annotations

import threading
import time

_EPOCH0_MS = 1288834974657
_TIME_LEFT = 22
_NODE_LEFT = 10
_MAX_SEQUENCE = (1 << _NODE_LEFT) - 1
_NODE_MASK = (1 << (_TIME_LEFT - _NODE_LEFT)) - 1

_FNV64_OFFSET = 14695981039346656037
_FNV64_PRIME = 1099511628211
_MASK64 = (1 << 64) - 1


def _fnv64(data: bytes) -> int:
    value = _FNV64_OFFSET
    for byte in data:
        value = (value * _FNV64_PRIME) & _MASK64
        value ^= byte
    return value


class IDGenerator:
    """Generates unique, increasing IDs for one node."""

    def __init__(self, node: str) -> None:
        self._lock = threading.Lock()
        self._node_id = _fnv64(node.encode()) & _NODE_MASK
        self._last_stamp = -1
        self._sequence = 1
        # a wall-clock start point advanced by a monotonic clock
        self._base_ms = time.time_ns() // 1_000_000 - _EPOCH0_MS
        self._base_mono = time.monotonic_ns()

    def _now(self) -> int:
        return self._base_ms + (time.monotonic_ns() - self._base_mono) // 1_000_000

    def next_id(self) -> int:
        """Return the next unique ID."""
        with self._lock:
            timestamp = self._now()
            if timestamp < self._last_stamp:
                raise RuntimeError("can not generate id")
            if timestamp == self._last_stamp:
                self._sequence = (self._sequence + 1) & _MAX_SEQUENCE
                if self._sequence == 0:
                    while timestamp <= self._last_stamp:
                        timestamp = self._now()
            else:
                self._sequence = 0
            self._last_stamp = timestamp
            return (timestamp << _TIME_LEFT) | (self._node_id << _NODE_LEFT) | self._sequence