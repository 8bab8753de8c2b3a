"""A fixed table of read-write locks addressed by key hash."""

from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import Iterable, Iterator

from rediskit.datastruct.dict import fnv32


class RWLock:
    """A read-write lock: many readers or one writer; waiting writers go first."""

    def __init__(self) -> None:
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False
        self._waiting_writers = 0

    def acquire_read(self) -> None:
        """Take a shared lock."""
        with self._cond:
            while self._writer or self._waiting_writers:
                self._cond.wait()
            self._readers += 1

    def release_read(self) -> None:
        """Release a shared lock."""
        with self._cond:
            if self._readers <= 0:
                raise RuntimeError("release of unlocked read lock")
            self._readers -= 1
            if self._readers == 0:
                self._cond.notify_all()

    def acquire_write(self) -> None:
        """Take the exclusive lock."""
        with self._cond:
            self._waiting_writers += 1
            try:
                while self._writer or self._readers:
                    self._cond.wait()
            finally:
                self._waiting_writers -= 1
            self._writer = True

    def release_write(self) -> None:
        """Release the exclusive lock."""
        with self._cond:
            if not self._writer:
                raise RuntimeError("release of unlocked write lock")
            self._writer = False
            self._cond.notify_all()


class Locks:
    """Read-write locks for keys; keys share locks by hash slot."""

    def __init__(self, table_size: int) -> None:
        if table_size <= 0:
            raise ValueError("table size must be positive")
        self._table = [RWLock() for _ in range(table_size)]

    def _index(self, key: str) -> int:
        return (len(self._table) - 1) & fnv32(key)

    def _indices(self, keys: Iterable[str], reverse: bool) -> list[int]:
        return sorted({self._index(key) for key in keys}, reverse=reverse)

    def lock(self, key: str) -> None:
        """Take the exclusive lock for ``key``."""
        self._table[self._index(key)].acquire_write()

    def rlock(self, key: str) -> None:
        """Take a shared lock for ``key``."""
        self._table[self._index(key)].acquire_read()

    def unlock(self, key: str) -> None:
        """Release the exclusive lock for ``key``."""
        self._table[self._index(key)].release_write()

    def runlock(self, key: str) -> None:
        """Release a shared lock for ``key``."""
        self._table[self._index(key)].release_read()

    def locks(self, *args: str) -> None:
        """Take exclusive locks for several keys in a deadlock-free order."""
        for index in self._indices(args, reverse=False):
            self._table[index].acquire_write()

    def rlocks(self, *args: str) -> None:
        """Take shared locks for several keys in a deadlock-free order."""
        for index in self._indices(args, reverse=False):
            self._table[index].acquire_read()

    def unlocks(self, *args: str) -> None:
        """Release exclusive locks taken with :meth:`locks`."""
        for index in self._indices(args, reverse=True):
            self._table[index].release_write()

    def runlocks(self, *args: str) -> None:
        """Release shared locks taken with :meth:`rlocks`."""
        for index in self._indices(args, reverse=True):
            self._table[index].release_read()

    def rw_locks(self, write_keys: Iterable[str], read_keys: Iterable[str]) -> None:
        """Lock write keys exclusively and read keys shared; duplicates are allowed."""
        write_keys = list(write_keys)
        write_set = set(self._indices(write_keys, reverse=False))
        for index in self._indices([*write_keys, *read_keys], reverse=False):
            if index in write_set:
                self._table[index].acquire_write()
            else:
                self._table[index].acquire_read()

    def rw_unlocks(self, write_keys: Iterable[str], read_keys: Iterable[str]) -> None:
        """Release locks taken with :meth:`rw_locks`."""
        write_keys = list(write_keys)
        write_set = set(self._indices(write_keys, reverse=True))
        for index in self._indices([*write_keys, *read_keys], reverse=True):
            if index in write_set:
                self._table[index].release_write()
            else:
                self._table[index].release_read()

    @contextmanager
    def locked(self, *args: str) -> Iterator[None]:
        """Hold exclusive locks for the given keys within a ``with`` block."""
        self.locks(*args)
        try:
            yield
        finally:
            self.unlocks(*args)