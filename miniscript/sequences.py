"""Built-in functions over strings, lists and maps.

Values follow the MiniScript model in plain Python: ``None`` is null,
``int``/``float`` are numbers, ``str`` is a string, ``list`` is a list and
``dict`` is a map.  Truth values come back as the numbers 1 and 0.
"""

from __future__ import annotations

import math
import re
from functools import cmp_to_key
from typing import Any, Optional

from .numeric import rnd

MAX_LIST_SIZE = 16777215

_FLOAT_RE = re.compile(r"\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float))


def _int_value(value: Any) -> int:
    if _is_number(value) and math.isfinite(value):
        return int(value)
    return 0


def _double_value(value: Any) -> float:
    return float(value) if _is_number(value) else 0.0


def _bool_value(value: Any) -> bool:
    if value is None:
        return False
    if _is_number(value):
        return value != 0
    return bool(value)


def _truth(flag: bool) -> int:
    return 1 if flag else 0


def _equal(a: Any, b: Any) -> bool:
    if _is_number(a) and _is_number(b):
        return float(a) == float(b)
    if type(a) is not type(b):
        return False
    return a == b


def _check_range(idx: int, low: int, high: int) -> None:
    if idx < low or idx > high:
        raise IndexError(f"Index Error (index {idx} out of range)")


def _format_number(x: float) -> str:
    if isinstance(x, int):
        return str(x)
    if math.isfinite(x) and math.fmod(x, 1.0) == 0.0:
        return "%.0f" % x
    magnitude = abs(x)
    if magnitude > 1e10 or magnitude < 1e-6:
        return "%.6E" % x
    text = "%f" % x
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def _code_form(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, str):
        return '"' + value.replace('"', '""') + '"'
    return to_str(value)


def to_str(value: Any) -> str:
    """String form of a value, as ``str`` and ``print`` show it."""
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if _is_number(value):
        return _format_number(value)
    if isinstance(value, list):
        return "[" + ", ".join(_code_form(item) for item in value) + "]"
    if isinstance(value, dict):
        inner = ", ".join(f"{_code_form(k)}: {_code_form(v)}" for k, v in value.items())
        return "{" + inner + "}"
    return str(value)


def has_index(seq: Any, index: Any) -> Optional[int]:
    """1 if *index* is valid for *seq*, 0 if not; None for other types."""
    if isinstance(seq, (list, str)):
        if not _is_number(index):
            return 0
        i = _int_value(index)
        return _truth(-len(seq) <= i < len(seq))
    if isinstance(seq, dict):
        try:
            return _truth(index in seq)
        except TypeError:
            return 0
    return None


def indexes(seq: Any) -> Optional[list]:
    """Keys of a map, or the valid indexes of a list or string."""
    if isinstance(seq, dict):
        return list(seq.keys())
    if isinstance(seq, (list, str)):
        return list(range(len(seq)))
    return None


def index_of(seq: Any, value: Any, after: Any = None) -> Any:
    """Index (or key) of the first match of *value* after *after*, or None."""
    if isinstance(seq, list):
        count = len(seq)
        after_idx = -1 if after is None else _int_value(after)
        if after_idx < -1:
            after_idx += count
        if after_idx < -1 or after_idx > count - 1:
            return None
        for i in range(after_idx + 1, count):
            if _equal(seq[i], value):
                return i
    elif isinstance(seq, str):
        needle = to_str(value)
        after_idx = -1 if after is None else _int_value(after)
        if after_idx < -1:
            after_idx += len(seq)
        idx = seq.find(needle, max(0, after_idx + 1))
        if idx >= 0:
            return idx
    elif isinstance(seq, dict):
        saw_after = after is None
        for key, item in seq.items():
            if not saw_after:
                if _equal(key, after):
                    saw_after = True
            elif _equal(item, value):
                return key
    return None


def insert(seq: Any, index: Any, value: Any) -> Any:
    """Insert *value* before *index*; lists change in place, strings are rebuilt."""
    if index is None:
        raise ValueError("insert: index argument required")
    if not _is_number(index):
        raise TypeError("insert: number required for index argument")
    idx = _int_value(index)
    if isinstance(seq, list):
        count = len(seq)
        if idx < 0:
            idx += count + 1
        _check_range(idx, 0, count)
        seq.insert(idx, value)
        return seq
    if isinstance(seq, str):
        if idx < 0:
            idx += len(seq) + 1
        _check_range(idx, 0, len(seq))
        return seq[:idx] + to_str(value) + seq[idx:]
    raise TypeError("insert called on invalid type")


def join(seq: Any, delimiter: Any = " ") -> Any:
    """Join the string forms of a list's items; other values come back unchanged."""
    if not isinstance(seq, list):
        return seq
    return to_str(delimiter).join(to_str(item) for item in seq)


def length(seq: Any) -> Optional[int]:
    if isinstance(seq, (list, str, dict)):
        return len(seq)
    return None


def lower(value: Any) -> Any:
    return value.lower() if isinstance(value, str) else value


def upper(value: Any) -> Any:
    return value.upper() if isinstance(value, str) else value


def _take_first_key(seq: dict) -> Any:
    if not seq:
        return None
    key = next(iter(seq))
    del seq[key]
    return key


def pop(seq: Any) -> Any:
    """Remove and return the last list item, or a key of a map."""
    if isinstance(seq, list):
        return seq.pop() if seq else None
    if isinstance(seq, dict):
        return _take_first_key(seq)
    return None


def pull(seq: Any) -> Any:
    """Remove and return the first list item, or a key of a map."""
    if isinstance(seq, list):
        return seq.pop(0) if seq else None
    if isinstance(seq, dict):
        return _take_first_key(seq)
    return None


def push(seq: Any, value: Any) -> Any:
    """Append to a list, or add *value* as a key (mapped to 1) to a map."""
    if isinstance(seq, list):
        seq.append(value)
        return seq
    if isinstance(seq, dict):
        seq[value] = 1
        return seq
    return None


def range_values(start: Any = 0, stop: Any = 0, step: Any = None) -> list:
    """Numbers from *start* to *stop* inclusive, by *step* (default +1 or -1)."""
    from_val = start if _is_number(start) else 0
    to_val = stop if _is_number(stop) else 0
    increment: Any = 1 if to_val >= from_val else -1
    if _is_number(step):
        increment = step
    if increment == 0:
        raise ValueError("range() error (step==0)")
    count = int((to_val - from_val) / increment) + 1
    if count > MAX_LIST_SIZE:
        raise OverflowError("list too large")
    values = []
    v = from_val
    while (v <= to_val) if increment > 0 else (v >= to_val):
        values.append(v)
        v += increment
    return values


def ref_equals(a: Any, b: Any) -> int:
    """1 if *a* and *b* are the same object (or equal numbers, or both null)."""
    if a is None:
        return _truth(b is None)
    if _is_number(a):
        return _truth(_is_number(b) and float(a) == float(b))
    return _truth(a is b)


def remove(seq: Any, k: Any) -> Any:
    """Remove a map key, a list index, or the first occurrence of a substring."""
    if seq is None:
        raise ValueError("argument to 'remove' must not be null")
    if isinstance(seq, dict):
        if k in seq:
            del seq[k]
            return 1
        return 0
    if isinstance(seq, list):
        if k is None:
            raise ValueError("argument to 'remove' must not be null")
        idx = _int_value(k)
        if idx < 0:
            idx += len(seq)
        _check_range(idx, 0, len(seq) - 1)
        del seq[idx]
        return None
    if isinstance(seq, str):
        if k is None:
            raise ValueError("argument to 'remove' must not be null")
        sub = to_str(k)
        found = seq.find(sub)
        if found < 0:
            return seq
        return seq[:found] + seq[found + len(sub):]
    raise TypeError("Type Error: 'remove' requires map, list, or string")


def replace(seq: Any, oldval: Any, newval: Any, max_count: Any = None) -> Any:
    """Replace occurrences of *oldval* with *newval*, at most *max_count* times."""
    if seq is None:
        raise ValueError("argument to 'replace' must not be null")
    limit = -1
    if max_count is not None:
        limit = _int_value(max_count)
        if limit < 1:
            return seq
    count = 0
    if isinstance(seq, dict):
        for key, item in list(seq.items()):
            if _equal(item, oldval):
                seq[key] = newval
                count += 1
                if limit > 0 and count == limit:
                    break
        return seq
    if isinstance(seq, list):
        for i, item in enumerate(seq):
            if _equal(item, oldval):
                seq[i] = newval
                count += 1
                if limit > 0 and count == limit:
                    break
        return seq
    if isinstance(seq, str):
        old = to_str(oldval)
        if not old:
            raise ValueError("replace: oldval argument is empty")
        new = to_str(newval)
        text = seq
        idx = 0
        while True:
            idx = text.find(old, idx)
            if idx < 0:
                break
            text = text[:idx] + new + text[idx + len(old):]
            idx += len(new)
            count += 1
            if limit > 0 and count == limit:
                break
        return text
    raise TypeError("Type Error: 'replace' requires map, list, or string")


def slice_seq(seq: Any, start: Any = 0, stop: Any = None) -> Any:
    """The part of a list or string from *start* up to (not including) *stop*."""
    from_idx = _int_value(start)
    to_idx = 0 if stop is None else _int_value(stop)
    if isinstance(seq, list):
        count = len(seq)
        if from_idx < 0:
            from_idx += count
        if from_idx < 0:
            from_idx = 0
        if stop is None:
            to_idx = count
        if to_idx < 0:
            to_idx += count
        if to_idx > count:
            to_idx = count
        if from_idx < count and to_idx > from_idx:
            return seq[from_idx:to_idx]
        return []
    if isinstance(seq, str):
        size = len(seq)
        if from_idx < 0:
            from_idx += size
        if from_idx < 0:
            from_idx = 0
        if stop is None:
            to_idx = size
        elif to_idx < 0:
            to_idx += size
        if to_idx > size:
            to_idx = size
        if to_idx - from_idx <= 0:
            return ""
        return seq[from_idx:to_idx]
    return None


def _sort_lesser(a: Any, b: Any) -> bool:
    if a is None:
        return False
    if b is None:
        return True
    if isinstance(a, str) or isinstance(b, str):
        return to_str(a) < to_str(b)
    if _is_number(a) and _is_number(b):
        return a < b
    return False


def _compare(a: Any, b: Any) -> int:
    if _sort_lesser(a, b):
        return -1
    if _sort_lesser(b, a):
        return 1
    return 0


def sort_values(seq: Any, by_key: Any = None, ascending: Any = 1) -> Any:
    """Sort a list in place (nulls last), optionally by a map key or list index."""
    if not isinstance(seq, list) or len(seq) < 2:
        return seq
    direction = 1 if _bool_value(ascending) else -1

    if by_key is None:
        seq[:] = sorted(seq, key=cmp_to_key(lambda a, b: direction * _compare(a, b)))
        return seq

    key_int = _int_value(by_key)

    def sort_key(item: Any) -> Any:
        if isinstance(item, dict):
            try:
                return item.get(by_key)
            except TypeError:
                return None
        if isinstance(item, list):
            if -len(item) < key_int < len(item):
                return item[key_int]
            return None
        return item

    keyed = [(sort_key(item), item) for item in seq]
    keyed.sort(key=cmp_to_key(lambda a, b: direction * _compare(a[0], b[0])))
    seq[:] = [item for _, item in keyed]
    return seq


def split(s: Any, delimiter: Any = " ", max_count: Any = -1) -> list:
    """Split the string form of *s* on *delimiter* into at most *max_count* parts."""
    text = to_str(s)
    delim = to_str(delimiter)
    limit = _int_value(max_count)
    result: list = []
    pos = 0
    size = len(text)
    while pos < size:
        if limit >= 0 and len(result) == limit - 1:
            next_pos = size
        elif not delim:
            next_pos = pos + 1
        else:
            next_pos = text.find(delim, pos)
        if next_pos < 0:
            next_pos = size
        result.append(text[pos:next_pos])
        pos = next_pos + len(delim)
        if pos == size and delim:
            result.append("")
    return result


def sum_values(seq: Any) -> float:
    """Sum of the numeric items of a list or values of a map."""
    total = 0.0
    if isinstance(seq, list):
        for item in reversed(seq):
            total += _double_value(item)
    elif isinstance(seq, dict):
        for item in seq.values():
            total += _double_value(item)
    return total


def shuffle(seq: Any) -> None:
    """Randomly reorder a list, or the values of a map among its keys, in place."""
    if isinstance(seq, list):
        for i in range(len(seq) - 1, 0, -1):
            j = int(rnd() * (i + 1))
            seq[i], seq[j] = seq[j], seq[i]
    elif isinstance(seq, dict):
        keys = list(seq.keys())
        for i in range(len(keys) - 1, 0, -1):
            j = int(rnd() * (i + 1))
            ki, kj = keys[i], keys[j]
            seq[ki], seq[kj] = seq[kj], seq[ki]
    return None


def val(value: Any) -> Any:
    """Numeric value of a number or of the leading number in a string."""
    if _is_number(value):
        return value
    if isinstance(value, str):
        match = _FLOAT_RE.match(value)
        return float(match.group(1)) if match else 0.0
    return None


def values_of(seq: Any) -> Any:
    """Values of a map, or characters of a string; anything else unchanged."""
    if isinstance(seq, dict):
        return list(seq.values())
    if isinstance(seq, str):
        return list(seq)
    return seq