"""Doubly linked list."""

from __future__ import annotations

from typing import Any, Callable, Iterator

from rediskit.lib.utils import equals


class _Node:
    __slots__ = ("val", "prev", "next")

    def __init__(self, val: Any, prev: _Node | None = None, next_: _Node | None = None) -> None:
        self.val = val
        self.prev = prev
        self.next = next_


class LinkedList:
    """A doubly linked list supporting index access and removal by value."""

    def __init__(self, *args: Any) -> None:
        self._first: _Node | None = None
        self._last: _Node | None = None
        self._size = 0
        for val in args:
            self.add(val)

    def add(self, val: Any) -> None:
        """Append ``val`` to the tail."""
        node = _Node(val, prev=self._last)
        if self._last is None:
            self._first = node
        else:
            self._last.next = node
        self._last = node
        self._size += 1

    def _find(self, index: int) -> _Node:
        if index < self._size // 2:
            node = self._first
            for _ in range(index):
                node = node.next
        else:
            node = self._last
            for _ in range(self._size - 1 - index):
                node = node.prev
        return node

    def _check_index(self, index: int) -> None:
        if index < 0 or index >= self._size:
            raise IndexError("index out of bound")

    def get(self, index: int) -> Any:
        """Return the value at ``index``."""
        self._check_index(index)
        return self._find(index).val

    def set(self, index: int, val: Any) -> None:
        """Replace the value at ``index``."""
        self._check_index(index)
        self._find(index).val = val

    def insert(self, index: int, val: Any) -> None:
        """Insert ``val`` before the element at ``index``; ``index == len`` appends."""
        if index < 0 or index > self._size:
            raise IndexError("index out of bound")
        if index == self._size:
            self.add(val)
            return
        pivot = self._find(index)
        node = _Node(val, prev=pivot.prev, next_=pivot)
        if pivot.prev is None:
            self._first = node
        else:
            pivot.prev.next = node
        pivot.prev = node
        self._size += 1

    def _remove_node(self, node: _Node) -> None:
        if node.prev is None:
            self._first = node.next
        else:
            node.prev.next = node.next
        if node.next is None:
            self._last = node.prev
        else:
            node.next.prev = node.prev
        node.prev = None
        node.next = None
        self._size -= 1

    def remove(self, index: int) -> Any:
        """Remove and return the value at ``index``."""
        self._check_index(index)
        node = self._find(index)
        self._remove_node(node)
        return node.val

    def remove_last(self) -> Any:
        """Remove and return the last value, or None if the list is empty."""
        node = self._last
        if node is None:
            return None
        self._remove_node(node)
        return node.val

    def remove_all_by_val(self, val: Any) -> int:
        """Remove every element equal to ``val``; return how many were removed."""
        removed = 0
        node = self._first
        while node is not None:
            following = node.next
            if equals(node.val, val):
                self._remove_node(node)
                removed += 1
            node = following
        return removed

    def remove_by_val(self, val: Any, count: int) -> int:
        """Remove up to ``count`` elements equal to ``val``, scanning from the head."""
        removed = 0
        node = self._first
        while node is not None:
            following = node.next
            if equals(node.val, val):
                self._remove_node(node)
                removed += 1
            if removed == count:
                break
            node = following
        return removed

    def reverse_remove_by_val(self, val: Any, count: int) -> int:
        """Remove up to ``count`` elements equal to ``val``, scanning from the tail."""
        removed = 0
        node = self._last
        while node is not None:
            preceding = node.prev
            if equals(node.val, val):
                self._remove_node(node)
                removed += 1
            if removed == count:
                break
            node = preceding
        return removed

    def __len__(self) -> int:
        return self._size

    def __iter__(self) -> Iterator[Any]:
        node = self._first
        while node is not None:
            following = node.next
            yield node.val
            node = following

    def for_each(self, consumer: Callable[[int, Any], bool]) -> None:
        """Call ``consumer(index, value)`` per element until it returns false."""
        for i, val in enumerate(self):
            if not consumer(i, val):
                break

    def contains(self, val: Any) -> bool:
        """Return whether some element equals ``val``."""
        return any(actual == val for actual in self)

    def range(self, start: int, stop: int) -> list[Any]:
        """Return the values with index in ``[start, stop)``."""
        if start < 0 or start >= self._size:
            raise IndexError("`start` out of range")
        if stop < start or stop > self._size:
            raise IndexError("`stop` out of range")
        result: list[Any] = []
        for i, val in enumerate(self):
            if i >= stop:
                break
            if i >= start:
                result.append(val)
        return result