"""Formatting and parsing of date/time values given as epoch seconds."""

from __future__ import annotations

import math
import re
import time
from datetime import datetime, timedelta
from typing import Callable

DEFAULT_FORMAT = "yyyy-MM-dd HH:mm:ss"

_STANDARD_FORMATS = {
    "D": "dddd, dd MMMM yyyy",
    "f": "dddd, dd MMMM yyyy HH:mm",
    "F": "dddd, dd MMMM yyyy HH:mm:ss",
    "M": "d MMMM",
    "m": "d MMMM",
    "O": "yyyy'-'MM'-'dd'T'HH':'mm':'ss'.'fffffffK",
    "o": "yyyy'-'MM'-'dd'T'HH':'mm':'ss'.'fffffffK",
    "R": "ddd, dd MMM yyyy HH':'mm':'ss 'GMT'",
    "r": "ddd, dd MMM yyyy HH':'mm':'ss 'GMT'",
    "s": "yyyy'-'MM'-'dd'T'HH':'mm':'ss",
    "t": "HH:mm",
    "T": "HH:mm:ss",
    "u": "yyyy'-'MM'-'dd HH':'mm':'ss'Z'",
    "U": "dddd, dd MMMM yyyy HH:mm:ss",
    "Y": "yyyy MMMM",
    "y": "yyyy MMMM",
}

_Field = Callable[[time.struct_time, float], str]


def _twelve_hour(tm: time.struct_time) -> int:
    return 12 if tm.tm_hour == 0 else (tm.tm_hour - 1) % 12 + 1


def _fraction(frac: float, digits: int) -> str:
    return f"{frac:.{digits}f}"[2:]


def _optional_fraction(frac: float, digits: int) -> str:
    text = _fraction(frac, digits)
    return "" if text == "0" * digits else text


def _fraction_fields() -> list[tuple[str, _Field]]:
    fields: list[tuple[str, _Field]] = []
    for digits in range(6, 0, -1):
        fields.append(("f" * digits, lambda tm, fr, n=digits: _fraction(fr, n)))
    for digits in range(6, 0, -1):
        fields.append(("F" * digits, lambda tm, fr, n=digits: _optional_fraction(fr, n)))
    return fields


_FIELDS: list[tuple[str, _Field]] = [
    ("yyyy", lambda tm, fr: f"{tm.tm_year:04d}"),
    ("yyy", lambda tm, fr: f"{tm.tm_year:03d}"),
    ("yy", lambda tm, fr: f"{tm.tm_year % 100:02d}"),
    ("MMMM", lambda tm, fr: time.strftime("%B", tm)),
    ("MMM", lambda tm, fr: time.strftime("%b", tm)),
    ("MM", lambda tm, fr: f"{tm.tm_mon:02d}"),
    ("M", lambda tm, fr: str(tm.tm_mon)),
    ("dddd", lambda tm, fr: time.strftime("%A", tm)),
    ("ddd", lambda tm, fr: time.strftime("%a", tm)),
    ("dd", lambda tm, fr: f"{tm.tm_mday:02d}"),
    ("d", lambda tm, fr: str(tm.tm_mday)),
    ("hh", lambda tm, fr: f"{_twelve_hour(tm):02d}"),
    ("h", lambda tm, fr: str(_twelve_hour(tm))),
    ("HH", lambda tm, fr: f"{tm.tm_hour:02d}"),
    ("H", lambda tm, fr: str(tm.tm_hour)),
    ("mm", lambda tm, fr: f"{tm.tm_min:02d}"),
    ("m", lambda tm, fr: str(tm.tm_min)),
    ("ss", lambda tm, fr: f"{tm.tm_sec:02d}"),
    ("s", lambda tm, fr: str(tm.tm_sec)),
    *_fraction_fields(),
    ("tt", lambda tm, fr: time.strftime("%p", tm)),
    ("t", lambda tm, fr: time.strftime("%p", tm)[:1]),
    ("gg", lambda tm, fr: "A.D." if tm.tm_year > 0 else "B.C."),
    ("g", lambda tm, fr: "A.D." if tm.tm_year > 0 else "B.C."),
    (":", lambda tm, fr: ":"),
    ("/", lambda tm, fr: "/"),
]


def _quoted_end(spec: str, start: int, quote: str) -> int:
    end = start + 1
    while end < len(spec) and spec[end] != quote:
        if spec[end] == "\\":
            end += 1
        end += 1
    return end


def _format_parts(spec: str, pos: int, tm: time.struct_time, frac: float) -> str:
    result: list[str] = []
    length = len(spec)
    while pos < length:
        for pattern, render in _FIELDS:
            if spec.startswith(pattern, pos):
                result.append(render(tm, frac))
                pos += len(pattern)
                break
        else:
            char = spec[pos]
            if char in "\"'":
                end = _quoted_end(spec, pos, char)
                result.append(spec[pos + 1:end])
                pos = end + 1
            elif char == "\\":
                pos += 1
                if pos < length:
                    result.append(spec[pos])
                    pos += 1
            else:
                result.append(char)
                pos += 1
    return "".join(result)


def format_date(t: float, format_spec: str = DEFAULT_FORMAT) -> str:
    """Format epoch seconds *t* in local time according to *format_spec*.

    Returns an empty string if *t* is out of range or the spec is an
    unknown single-character standard format.
    """
    try:
        tm = time.localtime(t)
    except (OverflowError, OSError, ValueError):
        return ""

    if not format_spec:
        return time.strftime("%c", tm)

    pos = 0
    if format_spec[0] == "%":
        pos = 1
    elif format_spec == "d":
        return time.strftime("%x", tm)
    elif format_spec == "g":
        return f"{time.strftime('%x ', tm)}{tm.tm_hour}:{time.strftime('%H %p', tm)}"
    elif format_spec == "G":
        return time.strftime("%x %X", tm)
    elif format_spec in _STANDARD_FORMATS:
        format_spec = _STANDARD_FORMATS[format_spec]
    elif len(format_spec.encode("utf-8")) == 1:
        return ""

    frac = abs(math.modf(t)[0])
    return _format_parts(format_spec, pos, tm, frac)


_INT_RE = re.compile(r"\s*([+-]?\d+)")
_FLOAT_RE = re.compile(r"\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


def _int_value(text: str) -> int:
    match = _INT_RE.match(text)
    return int(match.group(1)) if match else 0


def _float_value(text: str) -> float:
    match = _FLOAT_RE.match(text)
    return float(match.group(1)) if match else 0.0


def parse_date(date_str: str) -> int:
    """Parse a date, a time, or both (space separated) into local epoch seconds.

    Dates are ``year[-month[-day]]``; times are ``hour[:minute[:second]]``.
    A separate ``P`` or ``PM`` part adds 12 to an hour below 12.  Without a
    date, today's date is used.  Out-of-range fields are normalised.
    Raises ValueError if the result cannot be represented.
    """
    year, month, day = 1900, 0, 0
    hour = minute = second = 0
    got_date = False
    pm_time = False

    for part in date_str.split():
        if "-" in part:
            fields = part.split("-")
            year = _int_value(fields[0])
            if len(fields) > 1:
                month = _int_value(fields[1]) - 1
            if len(fields) > 2:
                day = _int_value(fields[2])
            got_date = True
        elif ":" in part:
            fields = part.split(":")
            hour = _int_value(fields[0])
            if len(fields) > 1:
                minute = _int_value(fields[1])
            if len(fields) > 2:
                second = int(_float_value(fields[2]))
        elif part.upper() in ("P", "PM"):
            pm_time = True

    if pm_time and hour < 12:
        hour += 12

    if not got_date:
        today = datetime.now()
        year, month, day = today.year, today.month - 1, today.day

    year += month // 12
    month %= 12
    try:
        moment = datetime(year, month + 1, 1) + timedelta(
            days=day - 1, hours=hour, minutes=minute, seconds=second
        )
        return int(moment.timestamp())
    except (OverflowError, OSError, ValueError) as exc:
        raise ValueError(f"cannot represent date: {date_str!r}") from exc