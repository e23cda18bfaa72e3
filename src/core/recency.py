"""Recency ordering for cache entries.

A doubly linked list of Nodes ordered from most recently used (head) to
least recently used (tail). The list has no key index: callers always hold
the Node they want to move or remove (the entry store is the only lookup).
"""

from __future__ import annotations

from typing import Generic, Iterator, Optional, TypeVar

from core.models import CacheEntry

T = TypeVar("T")


class Node(Generic[T]):
    __slots__ = ("entry", "prev", "next")

    def __init__(self, entry: CacheEntry[T]) -> None:
        self.entry = entry
        self.prev: Optional[Node[T]] = None
        self.next: Optional[Node[T]] = None

    @property
    def key(self) -> str:
        return self.entry.key


class RecencyList(Generic[T]):
    def __init__(self) -> None:
        self._head: Optional[Node[T]] = None
        self._tail: Optional[Node[T]] = None
        self._len = 0

    def __len__(self) -> int:
        return self._len

    def __iter__(self) -> Iterator[Node[T]]:
        # Head (MRU) to tail (LRU)
        node = self._head
        while node is not None:
            yield node
            node = node.next

    @property
    def head(self) -> Optional[Node[T]]:
        return self._head

    @property
    def tail(self) -> Optional[Node[T]]:
        return self._tail

    def add_first(self, node: Node[T]) -> None:
        node.prev = None
        node.next = self._head
        if self._head is not None:
            self._head.prev = node
        self._head = node
        if self._tail is None:
            self._tail = node
        self._len += 1

    def remove(self, node: Node[T]) -> None:
        # node must currently be linked into this list
        if node.prev is not None:
            node.prev.next = node.next
        else:
            self._head = node.next

        if node.next is not None:
            node.next.prev = node.prev
        else:
            self._tail = node.prev

        node.prev = node.next = None
        self._len -= 1

    def move_to_front(self, node: Node[T]) -> None:
        if node is self._head:
            return
        self.remove(node)
        self.add_first(node)

    def remove_last(self) -> Optional[Node[T]]:
        node = self._tail
        if node is None:
            return None
        self.remove(node)
        return node

    def clear(self) -> None:
        # Break links so detached nodes don't keep each other alive
        node = self._head
        while node is not None:
            nxt = node.next
            node.prev = node.next = None
            node = nxt
        self._head = self._tail = None
        self._len = 0
