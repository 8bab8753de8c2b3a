"""Sorted set: members with scores, ordered by score."""

from __future__ import annotations

from typing import Callable, Iterator

from rediskit.datastruct.sortedset.border import ScoreBorder
from rediskit.datastruct.sortedset.skiplist import Element, Skiplist, _Node

ElementConsumer = Callable[[Element], bool]


def _step(node: _Node, desc: bool) -> _Node | None:
    return node.backward if desc else node.level[0].forward


class SortedSet:
    """A set of members kept in order of their scores."""

    def __init__(self) -> None:
        self._dict: dict[str, Element] = {}
        self._skiplist = Skiplist()

    def add(self, member: str, score: float) -> bool:
        """Set the score of a member; return whether the member is new."""
        element = self._dict.get(member)
        self._dict[member] = Element(member, score)
        if element is not None:
            if score != element.score:
                self._skiplist.remove(member, element.score)
                self._skiplist.insert(member, score)
            return False
        self._skiplist.insert(member, score)
        return True

    def __len__(self) -> int:
        return len(self._dict)

    def get(self, member: str) -> Element | None:
        """Return the element of a member, or None."""
        return self._dict.get(member)

    def remove(self, member: str) -> bool:
        """Remove a member; return whether it was present."""
        element = self._dict.pop(member, None)
        if element is None:
            return False
        self._skiplist.remove(member, element.score)
        return True

    def get_rank(self, member: str, desc: bool = False) -> int:
        """Return the 0-based rank of a member, or -1 when it is absent."""
        element = self._dict.get(member)
        if element is None:
            return -1
        rank = self._skiplist.get_rank(member, element.score)
        if desc:
            return len(self._skiplist) - rank
        return rank - 1

    def for_each(self, start: int, stop: int, desc: bool, consumer: ElementConsumer) -> None:
        """Visit members with rank in ``[start, stop)`` until ``consumer`` returns false."""
        size = len(self)
        if start < 0 or start >= size:
            raise IndexError(f"illegal start {start}")
        if stop < start or stop > size:
            raise IndexError(f"illegal end {stop}")

        skiplist = self._skiplist
        if desc:
            node = skiplist.get_by_rank(size - start) if start > 0 else skiplist.tail
        else:
            node = skiplist.get_by_rank(start + 1) if start > 0 else skiplist.header.level[0].forward

        for _ in range(stop - start):
            if not consumer(node.element):
                break
            node = _step(node, desc)

    def range(self, start: int, stop: int, desc: bool = False) -> list[Element]:
        """Return members with rank in ``[start, stop)``."""
        result: list[Element] = []

        def collect(element: Element) -> bool:
            result.append(element)
            return True

        self.for_each(start, stop, desc, collect)
        return result

    def _ascending(self) -> Iterator[Element]:
        node = self._skiplist.header.level[0].forward
        while node is not None:
            yield node.element
            node = node.level[0].forward

    def count(self, min_border: ScoreBorder, max_border: ScoreBorder) -> int:
        """Return the number of members whose score lies within the borders."""
        total = 0
        for element in self._ascending():
            if not min_border.less(element.score):
                continue
            if not max_border.greater(element.score):
                break
            total += 1
        return total

    def for_each_by_score(
        self,
        min_border: ScoreBorder,
        max_border: ScoreBorder,
        offset: int,
        limit: int,
        desc: bool,
        consumer: ElementConsumer,
    ) -> None:
        """Visit members within the borders, skipping ``offset``; negative ``limit`` means all."""
        if desc:
            node = self._skiplist.get_last_in_score_range(min_border, max_border)
        else:
            node = self._skiplist.get_first_in_score_range(min_border, max_border)

        while node is not None and offset > 0:
            node = _step(node, desc)
            offset -= 1

        visited = 0
        while (visited < limit or limit < 0) and node is not None:
            if not consumer(node.element):
                break
            node = _step(node, desc)
            if node is None:
                break
            if not min_border.less(node.score) or not max_border.greater(node.score):
                break
            visited += 1

    def range_by_score(
        self,
        min_border: ScoreBorder,
        max_border: ScoreBorder,
        offset: int = 0,
        limit: int = -1,
        desc: bool = False,
    ) -> list[Element]:
        """Return members within the borders; a negative ``limit`` means no limit."""
        if limit == 0 or offset < 0:
            return []
        result: list[Element] = []

        def collect(element: Element) -> bool:
            result.append(element)
            return True

        self.for_each_by_score(min_border, max_border, offset, limit, desc, collect)
        return result

    def remove_by_score(self, min_border: ScoreBorder, max_border: ScoreBorder) -> int:
        """Remove members within the borders; return how many were removed."""
        removed = self._skiplist.remove_range_by_score(min_border, max_border)
        for element in removed:
            del self._dict[element.member]
        return len(removed)

    def remove_by_rank(self, start: int, stop: int) -> int:
        """Remove members with 0-based rank in ``[start, stop)``; return how many."""
        removed = self._skiplist.remove_range_by_rank(start + 1, stop + 1)
        for element in removed:
            del self._dict[element.member]
        return len(removed)