"""A shared, resizable list with wrap-around item access."""

from __future__ import annotations

from typing import Any, Generic, Iterable, Iterator, TypeVar

T = TypeVar("T")


class RefList(Generic[T]):
    """A mutable list; copies of a reference share the same contents."""

    def __init__(self, items: Iterable[T] = ()) -> None:
        self._items: list[Any] = list(items)

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[T]:
        return iter(self._items)

    def __getitem__(self, index: int) -> T:
        return self._items[index]

    def __setitem__(self, index: int, value: T) -> None:
        self._items[index] = value

    def __contains__(self, item: object) -> bool:
        return item in self._items

    def __eq__(self, other: object) -> bool:
        if isinstance(other, RefList):
            return self._items == other._items
        return NotImplemented

    def __repr__(self) -> str:
        return f"RefList({self._items!r})"

    def index_of(self, item: T) -> int:
        """Index of the first occurrence of *item*, or -1."""
        try:
            return self._items.index(item)
        except ValueError:
            return -1

    def last(self) -> T:
        """The final item; IndexError if empty."""
        if not self._items:
            raise IndexError("last() on empty list")
        return self._items[-1]

    def add(self, item: T) -> None:
        self._items.append(item)

    def clear(self) -> None:
        self._items.clear()

    def insert(self, item: T, index: int) -> None:
        """Insert *item* before position *index* (0..len inclusive)."""
        if not 0 <= index <= len(self._items):
            raise IndexError(f"insert index {index} out of range")
        self._items.insert(index, item)

    def remove_at(self, index: int) -> None:
        if not 0 <= index < len(self._items):
            raise IndexError(f"index {index} out of range")
        del self._items[index]

    def remove_range(self, start_index: int, count: int) -> None:
        """Remove *count* items starting at *start_index*."""
        for _ in range(count):
            self.remove_at(start_index)

    def reposition(self, index_from: int, index_to: int) -> None:
        """Move the item at *index_from* so that it ends up at *index_to*."""
        item = self._items.pop(index_from)
        self._items.insert(index_to, item)

    def pop(self) -> T:
        if not self._items:
            raise IndexError("pop from empty list")
        return self._items.pop()

    def resize(self, new_length: int) -> None:
        """Set the length, padding with None or truncating."""
        if new_length < 0:
            raise ValueError("length must be non-negative")
        if new_length < len(self._items):
            del self._items[new_length:]
        else:
            self._items.extend([None] * (new_length - len(self._items)))

    def resize_buffer(self, new_buf_size: int) -> None:
        """Set the capacity; items beyond it are dropped, the length never grows."""
        if new_buf_size < 0:
            raise ValueError("buffer size must be non-negative")
        del self._items[new_buf_size:]

    def reverse(self) -> None:
        self._items.reverse()

    def item(self, index: int) -> T:
        """Item at *index*, wrapping around so -1 is the last item."""
        if not self._items:
            raise IndexError("item() on empty list")
        return self._items[index % len(self._items)]

    def set_item(self, index: int, value: T) -> None:
        """Set the item at *index*, wrapping around like item()."""
        if not self._items:
            raise IndexError("set_item() on empty list")
        self._items[index % len(self._items)] = value