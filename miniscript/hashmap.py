"""A chained hash table with a fixed number of bins and pluggable hashing."""

from __future__ import annotations

from typing import Any, Callable, Generic, Hashable, Iterator, TypeVar

K = TypeVar("K")
V = TypeVar("V")

TABLE_SIZE = 251
_MASK32 = 0xFFFFFFFF

AssignOverride = Callable[["Dictionary[Any, Any]", Any, Any], bool]
EvalOverride = Callable[["Dictionary[Any, Any]", Any], "tuple[bool, Any]"]


def hash_uint(x: int) -> int:
    """Mix the bits of an unsigned 32-bit integer."""
    x &= _MASK32
    x = (((x >> 16) ^ x) * 0x45D9F3B) & _MASK32
    x = (((x >> 16) ^ x) * 0x45D9F3B) & _MASK32
    return ((x >> 16) ^ x) & _MASK32


def hash_int(x: int) -> int:
    """Hash a signed integer by reinterpreting it as unsigned 32-bit."""
    return hash_uint(x & _MASK32)


def _default_hash(key: Hashable) -> int:
    return hash(key)


class Dictionary(Generic[K, V]):
    """A hash map of TABLE_SIZE chained bins.

    Iteration visits bins in ascending order; within a bin the most recently
    added key comes first.  Optional override callbacks let a host intercept
    assignment and evaluation.
    """

    def __init__(self, hash_func: Callable[[K], int] = _default_hash) -> None:
        self._hash_func = hash_func
        self._bins: list[list[list[Any]]] = [[] for _ in range(TABLE_SIZE)]
        self._size = 0
        self._assign_override: AssignOverride | None = None
        self._eval_override: EvalOverride | None = None

    def _bin(self, key: K) -> list[list[Any]]:
        return self._bins[(self._hash_func(key) & _MASK32) % TABLE_SIZE]

    def _find(self, key: K) -> list[Any] | None:
        for entry in self._bin(key):
            if entry[0] == key:
                return entry
        return None

    def __setitem__(self, key: K, value: V) -> None:
        entry = self._find(key)
        if entry is not None:
            entry[1] = value
            return
        self._bin(key).insert(0, [key, value])
        self._size += 1

    def __getitem__(self, key: K) -> V:
        entry = self._find(key)
        if entry is None:
            raise KeyError(key)
        return entry[1]

    def __delitem__(self, key: K) -> None:
        if not self.remove(key):
            raise KeyError(key)

    def __contains__(self, key: object) -> bool:
        return self._find(key) is not None  # type: ignore[arg-type]

    def __len__(self) -> int:
        return self._size

    def __iter__(self) -> Iterator[K]:
        return (key for key, _ in self.items())

    def __repr__(self) -> str:
        inner = ", ".join(f"{k!r}: {v!r}" for k, v in self.items())
        return f"Dictionary({{{inner}}})"

    def remove(self, key: K) -> bool:
        """Remove *key*; return True if it was present."""
        chain = self._bin(key)
        for position, entry in enumerate(chain):
            if entry[0] == key:
                del chain[position]
                self._size -= 1
                return True
        return False

    def clear(self) -> None:
        """Remove every entry."""
        for chain in self._bins:
            chain.clear()
        self._size = 0

    def lookup(self, key: K, default: V | None = None) -> V | None:
        """Return the value for *key*, or *default* if absent."""
        entry = self._find(key)
        return default if entry is None else entry[1]

    def keys(self) -> list[K]:
        """All keys in iteration order."""
        return [key for key, _ in self.items()]

    def values(self) -> list[V]:
        """All values in iteration order."""
        return [value for _, value in self.items()]

    def items(self) -> Iterator[tuple[K, V]]:
        """Yield (key, value) pairs in iteration order."""
        for chain in self._bins:
            for key, value in list(chain):
                yield key, value

    def bin_entries(self, bin_num: int) -> int:
        """Number of entries in bin *bin_num*."""
        return len(self._bins[bin_num])

    def set_assign_override(self, callback: AssignOverride | None) -> None:
        """Install a callback ``callback(dict, key, value) -> bool``."""
        self._assign_override = callback

    def apply_assign_override(self, key: K, value: V) -> bool:
        """Run the assign override; True means it handled the assignment."""
        if self._assign_override is None:
            return False
        return bool(self._assign_override(self, key, value))

    def set_eval_override(self, callback: EvalOverride | None) -> None:
        """Install a callback ``callback(dict, key) -> (handled, value)``."""
        self._eval_override = callback

    def apply_eval_override(self, key: K) -> tuple[bool, Any]:
        """Run the eval override, returning ``(handled, value)``."""
        if self._eval_override is None:
            return False, None
        handled, value = self._eval_override(self, key)
        return bool(handled), value