"""Set of strings backed by a hash table."""

from __future__ import annotations

from typing import Callable, Iterator

from rediskit.datastruct.dict import SimpleDict


class Set:
    """An unordered collection of distinct strings."""

    def __init__(self, *args: str) -> None:
        self._dict = SimpleDict()
        for member in args:
            self.add(member)

    def add(self, val: str) -> int:
        """Add a member; return 1 if it was new, else 0."""
        return self._dict.put(val, None)

    def remove(self, val: str) -> int:
        """Remove a member; return 1 if it was present, else 0."""
        return self._dict.remove(val)

    def has(self, val: str) -> bool:
        """Return whether ``val`` is a member."""
        return val in self._dict

    def __contains__(self, val: object) -> bool:
        return val in self._dict

    def __len__(self) -> int:
        return len(self._dict)

    def __iter__(self) -> Iterator[str]:
        return iter(self._dict.keys())

    def to_list(self) -> list[str]:
        """Return the members as a list."""
        return self._dict.keys()

    def for_each(self, consumer: Callable[[str], bool]) -> None:
        """Call ``consumer(member)`` per member until it returns false."""
        self._dict.for_each(lambda key, _val: consumer(key))

    def intersect(self, another: Set) -> Set:
        """Return members present in both sets."""
        return Set(*(member for member in another if member in self))

    def union(self, another: Set) -> Set:
        """Return members present in either set."""
        return Set(*another, *self)

    def diff(self, another: Set) -> Set:
        """Return members of this set missing from ``another``."""
        return Set(*(member for member in self if member not in another))

    def random_members(self, limit: int) -> list[str]:
        """Return ``limit`` random members, possibly repeated."""
        return self._dict.random_keys(limit)

    def random_distinct_members(self, limit: int) -> list[str]:
        """Return up to ``limit`` random members without repetition."""
        return self._dict.random_distinct_keys(limit)