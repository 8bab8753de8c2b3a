"""Glob-style patterns as used by the KEYS command."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum


class _Kind(IntEnum):
    NORMAL = 0
    ALL = 1  # *
    ANY = 2  # ?
    SET = 3  # [abc]
    RANGE = 4  # [a-b]
    NEGATE = 5  # [^a]


@dataclass
class _Item:
    kind: _Kind
    character: str = ""
    members: set[str] = field(default_factory=set)

    def contains(self, c: str) -> bool:
        if self.kind is _Kind.SET:
            return c in self.members
        if self.kind is _Kind.RANGE:
            if c in self.members:
                return True
            if not self.members:
                return False
            return min(self.members) <= c <= max(self.members)
        return c not in self.members

    def matches(self, c: str) -> bool:
        if self.kind is _Kind.ANY:
            return True
        if self.kind is _Kind.NORMAL:
            return c == self.character
        return self.contains(c)


class Pattern:
    """A compiled wildcard pattern."""

    def __init__(self, items: list[_Item]) -> None:
        self._items = items

    def is_match(self, s: str) -> bool:
        """Return whether the whole of ``s`` matches the pattern."""
        items = self._items
        if not items:
            return len(s) == 0
        # previous[j]: whether s[:i-1] matches items[:j]
        previous = [True]
        for item in items:
            previous.append(previous[-1] and item.kind is _Kind.ALL)
        for c in s:
            current = [False]
            for j, item in enumerate(items, start=1):
                if item.kind is _Kind.ALL:
                    current.append(previous[j] or current[j - 1])
                else:
                    current.append(previous[j - 1] and item.matches(c))
            previous = current
        return previous[-1]


def compile_pattern(src: str) -> Pattern:
    """Compile a wildcard string into a :class:`Pattern`."""
    items: list[_Item] = []
    escape = False
    in_set = False
    members: set[str] = set()
    for c in src:
        if escape:
            items.append(_Item(_Kind.NORMAL, character=c))
            escape = False
        elif c == "*":
            items.append(_Item(_Kind.ALL))
        elif c == "?":
            items.append(_Item(_Kind.ANY))
        elif c == "\\":
            escape = True
        elif c == "[":
            if not in_set:
                in_set = True
                members = set()
            else:
                members.add(c)
        elif c == "]":
            if in_set:
                in_set = False
                kind = _Kind.SET
                if "-" in members:
                    kind = _Kind.RANGE
                    members.discard("-")
                if "^" in members:
                    kind = _Kind.NEGATE
                    members.discard("^")
                items.append(_Item(kind, members=members))
            else:
                items.append(_Item(_Kind.NORMAL, character=c))
        elif in_set:
            members.add(c)
        else:
            items.append(_Item(_Kind.NORMAL, character=c))
    return Pattern(items)