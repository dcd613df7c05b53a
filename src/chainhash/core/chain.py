from __future__ import annotations

from collections.abc import Iterable, Iterator


class _Node:
    __slots__ = ("key", "value", "next")

    def __init__(self, key: str, value: str) -> None:
        self.key = key
        self.value = value
        self.next: _Node | None = None


class Chain:
    """Singly-linked bucket of key/value entries kept in insertion order."""

    __slots__ = ("_head", "_tail", "_size")

    def __init__(self, pairs: Iterable[tuple[str, str]] = ()) -> None:
        self._head: _Node | None = None
        self._tail: _Node | None = None
        self._size = 0
        for key, value in pairs:
            self.set(key, value)

    def __len__(self) -> int:
        return self._size

    @property
    def size(self) -> int:
        return self._size

    def _nodes(self) -> Iterator[_Node]:
        current = self._head
        while current is not None:
            yield current
            current = current.next

    def _find(self, key: str) -> _Node | None:
        for node in self._nodes():
            if node.key == key:
                return node
        return None

    def set(self, key: str, value: str) -> bool:
        """Overwrite ``key`` in place, or append it at the tail.

        Returns True when a new node was appended.
        """
        node = self._find(key)
        if node is not None:
            node.value = value
            return False
        node = _Node(key, value)
        if self._tail is None:
            self._head = node
        else:
            self._tail.next = node
        self._tail = node
        self._size += 1
        return True

    def get(self, key: str) -> str | None:
        node = self._find(key)
        return node.value if node is not None else None

    def has(self, key: str) -> bool:
        return self._find(key) is not None

    def remove(self, key: str) -> bool:
        previous: _Node | None = None
        current = self._head
        while current is not None:
            if current.key == key:
                if previous is None:
                    self._head = current.next
                else:
                    previous.next = current.next
                if current is self._tail:
                    self._tail = previous
                self._size -= 1
                return True
            previous = current
            current = current.next
        return False

    def keys(self) -> list[str]:
        return [node.key for node in self._nodes()]

    def values(self) -> list[str]:
        return [node.value for node in self._nodes()]

    def entries(self) -> list[tuple[str, str]]:
        return [(node.key, node.value) for node in self._nodes()]

    def __repr__(self) -> str:  # pragma: no cover - debugging aid
        return f"Chain({self.entries()!r})"


__all__ = ["Chain"]
