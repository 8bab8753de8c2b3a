"""Skip list ordered by (score, member) with span bookkeeping for ranks."""

from __future__ import annotations

import random
from dataclasses import dataclass

from rediskit.datastruct.sortedset.border import ScoreBorder

_MAX_LEVEL = 16


@dataclass
class Element:
    """A member with its score."""

    member: str
    score: float


class _Level:
    __slots__ = ("forward", "span")

    def __init__(self) -> None:
        self.forward: _Node | None = None
        self.span = 0


class _Node:
    __slots__ = ("element", "backward", "level")

    def __init__(self, level: int, score: float, member: str) -> None:
        self.element = Element(member, score)
        self.backward: _Node | None = None
        self.level = [_Level() for _ in range(level)]

    @property
    def member(self) -> str:
        return self.element.member

    @property
    def score(self) -> float:
        return self.element.score


def _random_level() -> int:
    level = 1
    while random.getrandbits(16) < 0.25 * 0xFFFF:
        level += 1
    return min(level, _MAX_LEVEL)


def _before(node: _Node | None, member: str, score: float) -> bool:
    return node is not None and (
        node.score < score or (node.score == score and node.member < member)
    )


class Skiplist:
    """Elements ordered by ascending score, then by member."""

    def __init__(self) -> None:
        self.header = _Node(_MAX_LEVEL, 0.0, "")
        self.tail: _Node | None = None
        self.length = 0
        self.level = 1

    def __len__(self) -> int:
        return self.length

    def insert(self, member: str, score: float) -> _Node:
        """Insert a new node; the member must not already be present."""
        update: list[_Node] = [self.header] * _MAX_LEVEL
        rank = [0] * _MAX_LEVEL

        node = self.header
        for i in range(self.level - 1, -1, -1):
            rank[i] = 0 if i == self.level - 1 else rank[i + 1]
            while _before(node.level[i].forward, member, score):
                rank[i] += node.level[i].span
                node = node.level[i].forward
            update[i] = node

        level = _random_level()
        if level > self.level:
            for i in range(self.level, level):
                rank[i] = 0
                update[i] = self.header
                update[i].level[i].span = self.length
            self.level = level

        node = _Node(level, score, member)
        for i in range(level):
            node.level[i].forward = update[i].level[i].forward
            update[i].level[i].forward = node
            node.level[i].span = update[i].level[i].span - (rank[0] - rank[i])
            update[i].level[i].span = (rank[0] - rank[i]) + 1

        for i in range(level, self.level):
            update[i].level[i].span += 1

        node.backward = None if update[0] is self.header else update[0]
        if node.level[0].forward is not None:
            node.level[0].forward.backward = node
        else:
            self.tail = node
        self.length += 1
        return node

    def _remove_node(self, node: _Node, update: list[_Node]) -> None:
        for i in range(self.level):
            if update[i].level[i].forward is node:
                update[i].level[i].span += node.level[i].span - 1
                update[i].level[i].forward = node.level[i].forward
            else:
                update[i].level[i].span -= 1
        if node.level[0].forward is not None:
            node.level[0].forward.backward = node.backward
        else:
            self.tail = node.backward
        while self.level > 1 and self.header.level[self.level - 1].forward is None:
            self.level -= 1
        self.length -= 1

    def remove(self, member: str, score: float) -> bool:
        """Remove the node with this member and score; return whether it was found."""
        update: list[_Node] = [self.header] * _MAX_LEVEL
        node = self.header
        for i in range(self.level - 1, -1, -1):
            while _before(node.level[i].forward, member, score):
                node = node.level[i].forward
            update[i] = node
        target = node.level[0].forward
        if target is not None and target.score == score and target.member == member:
            self._remove_node(target, update)
            return True
        return False

    def get_rank(self, member: str, score: float) -> int:
        """Return the 1-based rank of the member, or 0 when it is not found."""
        rank = 0
        node = self.header
        for i in range(self.level - 1, -1, -1):
            while True:
                forward = node.level[i].forward
                if forward is None or not (
                    forward.score < score
                    or (forward.score == score and forward.member <= member)
                ):
                    break
                rank += node.level[i].span
                node = forward
            if node.member == member:
                return rank
        return 0

    def get_by_rank(self, rank: int) -> _Node | None:
        """Return the node with the given 1-based rank, or None."""
        i = 0
        node = self.header
        for level in range(self.level - 1, -1, -1):
            while node.level[level].forward is not None and i + node.level[level].span <= rank:
                i += node.level[level].span
                node = node.level[level].forward
            if i == rank:
                return node
        return None

    def has_in_range(self, min_border: ScoreBorder, max_border: ScoreBorder) -> bool:
        """Return whether any element may lie between the two borders."""
        if min_border.value > max_border.value or (
            min_border.value == max_border.value and (min_border.exclude or max_border.exclude)
        ):
            return False
        tail = self.tail
        if tail is None or not min_border.less(tail.score):
            return False
        first = self.header.level[0].forward
        if first is None or not max_border.greater(first.score):
            return False
        return True

    def get_first_in_score_range(
        self, min_border: ScoreBorder, max_border: ScoreBorder
    ) -> _Node | None:
        """Return the lowest node within the borders, or None."""
        if not self.has_in_range(min_border, max_border):
            return None
        node = self.header
        for level in range(self.level - 1, -1, -1):
            while (
                node.level[level].forward is not None
                and not min_border.less(node.level[level].forward.score)
            ):
                node = node.level[level].forward
        node = node.level[0].forward
        if node is None or not max_border.greater(node.score):
            return None
        return node

    def get_last_in_score_range(
        self, min_border: ScoreBorder, max_border: ScoreBorder
    ) -> _Node | None:
        """Return the highest node within the borders, or None."""
        if not self.has_in_range(min_border, max_border):
            return None
        node = self.header
        for level in range(self.level - 1, -1, -1):
            while (
                node.level[level].forward is not None
                and max_border.greater(node.level[level].forward.score)
            ):
                node = node.level[level].forward
        if not min_border.less(node.score):
            return None
        return node

    def remove_range_by_score(
        self, min_border: ScoreBorder, max_border: ScoreBorder
    ) -> list[Element]:
        """Remove every element within the borders and return them in order."""
        update: list[_Node] = [self.header] * _MAX_LEVEL
        removed: list[Element] = []
        node = self.header
        for i in range(self.level - 1, -1, -1):
            while node.level[i].forward is not None:
                if min_border.less(node.level[i].forward.score):
                    break
                node = node.level[i].forward
            update[i] = node

        current = node.level[0].forward
        while current is not None:
            if not max_border.greater(current.score):
                break
            following = current.level[0].forward
            removed.append(current.element)
            self._remove_node(current, update)
            current = following
        return removed

    def remove_range_by_rank(self, start: int, stop: int) -> list[Element]:
        """Remove elements with 1-based rank in ``[start, stop)`` and return them."""
        i = 0
        update: list[_Node] = [self.header] * _MAX_LEVEL
        removed: list[Element] = []
        node = self.header
        for level in range(self.level - 1, -1, -1):
            while node.level[level].forward is not None and i + node.level[level].span < start:
                i += node.level[level].span
                node = node.level[level].forward
            update[level] = node

        i += 1
        current = node.level[0].forward
        while current is not None and i < stop:
            following = current.level[0].forward
            removed.append(current.element)
            self._remove_node(current, update)
            current = following
            i += 1
        return removed