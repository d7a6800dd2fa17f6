"""Doubly linked list with node handles."""

from __future__ import annotations

from typing import Any, Iterable, Iterator, Optional

from corelib.errors import ArgumentError, IndexOutOfRangeError, InvalidOperationError


class LinkedNode:
    """A node of a :class:`LinkedList`, holding ``value``."""

    __slots__ = ("value", "_owner", "_prev", "_next")

    def __init__(self, owner: Optional["LinkedList"], value: Any = None) -> None:
        self.value = value
        self._owner = owner
        self._prev: Optional[LinkedNode] = None
        self._next: Optional[LinkedNode] = None

    def previous(self) -> Optional["LinkedNode"]:
        return self._prev

    def next(self) -> Optional["LinkedNode"]:
        return self._next

    def _require_owner(self) -> "LinkedList":
        if self._owner is None:
            raise InvalidOperationError("LinkedNode does not belong to a list.")
        return self._owner

    def _detach(self) -> None:
        self._owner = None
        self._prev = None
        self._next = None

    def insert_after(self, value: Any) -> "LinkedNode":
        owner = self._require_owner()
        node = LinkedNode(owner, value)
        node._prev = self
        node._next = self._next
        if node._next is not None:
            node._next._prev = node
        else:
            owner._tail = node
        self._next = node
        owner._count += 1
        return node

    def insert_before(self, value: Any) -> "LinkedNode":
        owner = self._require_owner()
        node = LinkedNode(owner, value)
        node._prev = self._prev
        node._next = self
        if node._prev is not None:
            node._prev._next = node
        else:
            owner._head = node
        self._prev = node
        owner._count += 1
        return node

    def delete(self) -> None:
        """Unlink this node from its list."""
        owner = self._require_owner()
        if self._prev is not None:
            self._prev._next = self._next
        if self._next is not None:
            self._next._prev = self._prev
        owner._count -= 1
        if owner._head is self:
            owner._head = self._next
        if owner._tail is self:
            owner._tail = self._prev
        self._detach()

    def __repr__(self) -> str:
        return f"LinkedNode({self.value!r})"


class LinkedList:
    """Doubly linked list whose nodes can be kept and edited in place."""

    def __init__(self, iterable: Iterable[Any] = ()) -> None:
        self._head: Optional[LinkedNode] = None
        self._tail: Optional[LinkedNode] = None
        self._count = 0
        for value in iterable:
            self.add_last(value)

    def __iter__(self) -> Iterator[Any]:
        node = self._head
        while node is not None:
            following = node._next
            yield node.value
            node = following

    def __len__(self) -> int:
        return self._count

    def add_last(self, value: Any = None) -> LinkedNode:
        node = LinkedNode(self, value)
        node._prev = self._tail
        if self._tail is not None:
            self._tail._next = node
        self._tail = node
        if self._head is None:
            self._head = node
        self._count += 1
        return node

    def add_first(self, value: Any) -> LinkedNode:
        node = LinkedNode(self, value)
        node._next = self._head
        if self._head is not None:
            self._head._prev = node
        self._head = node
        if self._tail is None:
            self._tail = node
        self._count += 1
        return node

    def get_node(self, index: int) -> Optional[LinkedNode]:
        """Walk ``index`` steps from the head.

        Returns ``None`` when the walk ends exactly past the tail and raises
        when it would go further.
        """
        node = self._head
        for _ in range(index):
            if node is None:
                raise IndexOutOfRangeError("Index out of range")
            node = node._next
        return node

    def find(self, value: Any) -> Optional[LinkedNode]:
        node = self._head
        while node is not None:
            if node.value == value:
                return node
            node = node._next
        return None

    def first_node(self) -> Optional[LinkedNode]:
        return self._head

    def last_node(self) -> Optional[LinkedNode]:
        return self._tail

    def first(self) -> Any:
        if self._head is None:
            raise IndexOutOfRangeError("LinkedList: index out of range.")
        return self._head.value

    def last(self) -> Any:
        if self._tail is None:
            raise IndexOutOfRangeError("LinkedList: index out of range.")
        return self._tail.value

    def delete(self, node: LinkedNode, count: int = 1) -> None:
        """Remove ``count`` nodes starting at ``node``, stopping at the tail."""
        if node._owner is not self:
            raise InvalidOperationError("Node does not belong to this list.")
        if count < 1:
            raise ArgumentError("Delete count must be positive.")
        before = node._prev
        current: Optional[LinkedNode] = node
        after: Optional[LinkedNode] = None
        deleted = 0
        while current is not None and deleted < count:
            after = current._next
            current._detach()
            current = after
            deleted += 1
        if before is not None:
            before._next = after
        else:
            self._head = after
        if after is not None:
            after._prev = before
        else:
            self._tail = before
        self._count -= deleted

    def clear(self) -> None:
        node = self._head
        while node is not None:
            following = node._next
            node._detach()
            node = following
        self._head = None
        self._tail = None
        self._count = 0

    def to_list(self) -> list[Any]:
        return list(self)

    def copy(self) -> "LinkedList":
        return LinkedList(self)

    def __repr__(self) -> str:
        return f"LinkedList({self.to_list()!r})"