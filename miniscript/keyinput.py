"""Non-blocking keyboard input with translation of special keys."""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, List, Optional

_WINDOWS = os.name == "nt"

ScanMap = Dict[Any, Any]


@dataclass(frozen=True)
class InputBufferEntry:
    """One key press: a character code point, or 0 and a scan code."""

    c: int = 0
    scan_code: int = 0


def default_scan_map() -> ScanMap:
    """Map of platform key sequences (or scan codes) to the values ``get`` returns."""
    if _WINDOWS:
        return {
            83: "\x7f",  # delete
            72: "\x13",  # up
            80: "\x14",  # down
            77: "\x12",  # right
            75: "\x11",  # left
            71: "\x01",  # home
            79: "\x05",  # end
        }
    return {
        "\x7f": "\x08",  # backspace
        "\x1b[3~": "\x7f",  # delete
        "\x1b[A": "\x13",  # up
        "\x1b[B": "\x14",  # down
        "\x1b[C": "\x12",  # right
        "\x1b[D": "\x11",  # left
        "\x1b[H": "\x01",  # home
        "\x1b[F": "\x05",  # end
    }


def optimize_scan_map(scan_map: ScanMap) -> None:
    """Add ``(codepoint, scan_code)`` keys to *scan_map*, nesting multi-character sequences."""
    for key, value in list(scan_map.items()):
        if isinstance(key, bool):
            continue
        if isinstance(key, (int, float)):
            scan_map[(0, int(key))] = value
        elif isinstance(key, str):
            if not key:
                continue
            first, rest = key[0], key[1:]
            optimized = (ord(first), 0)
            if not rest:
                scan_map[optimized] = value
                continue
            sub = scan_map.get(optimized)
            if not isinstance(sub, dict):
                sub = {}
                scan_map[optimized] = sub
            sub[rest] = value
            optimize_scan_map(sub)


def _stdin_fd() -> Optional[int]:
    try:
        return sys.stdin.fileno()
    except (AttributeError, OSError, ValueError):
        return None


def _read_console_entries() -> List[InputBufferEntry]:
    import msvcrt

    entries: List[InputBufferEntry] = []
    while msvcrt.kbhit():
        ch = msvcrt.getwch()
        if ch in ("\x00", "\xe0"):
            entries.append(InputBufferEntry(0, ord(msvcrt.getwch())))
        else:
            entries.append(InputBufferEntry(ord(ch)))
    return entries


def _read_tty_entries() -> List[InputBufferEntry]:
    import select
    import termios

    fd = _stdin_fd()
    if fd is None:
        return []
    try:
        saved = termios.tcgetattr(fd)
        attrs = termios.tcgetattr(fd)
    except termios.error:
        return []
    attrs[3] &= ~termios.ICANON
    attrs[6][termios.VMIN] = 0
    attrs[6][termios.VTIME] = 0
    try:
        termios.tcsetattr(fd, termios.TCSANOW, attrs)
    except termios.error:
        return []

    data = bytearray()
    try:
        while True:
            ready, _, _ = select.select([fd], [], [], 0)
            if not ready:
                break
            chunk = os.read(fd, 1)
            if not chunk:
                break
            data += chunk
    except OSError:
        pass
    finally:
        termios.tcsetattr(fd, termios.TCSANOW, saved)
    return [InputBufferEntry(ord(ch)) for ch in data.decode("utf-8", errors="replace")]


def read_stdin_entries() -> List[InputBufferEntry]:
    """Read every key press waiting on standard input, without blocking."""
    if _WINDOWS:
        return _read_console_entries()
    return _read_tty_entries()


def get_echo() -> bool:
    """Whether the terminal echoes typed characters."""
    if _WINDOWS:
        return False
    import termios

    fd = _stdin_fd()
    if fd is None:
        return False
    try:
        attrs = termios.tcgetattr(fd)
    except termios.error:
        return False
    return bool(attrs[3] & termios.ECHO)


def set_echo(on: bool) -> None:
    """Turn terminal echo on or off (no effect where unsupported)."""
    if _WINDOWS:
        return
    import termios

    fd = _stdin_fd()
    if fd is None:
        return
    try:
        attrs = termios.tcgetattr(fd)
    except termios.error:
        return
    if on:
        attrs[3] |= termios.ECHO
    else:
        attrs[3] &= ~termios.ECHO
    try:
        termios.tcsetattr(fd, termios.TCSANOW, attrs)
    except termios.error:
        pass


class KeyboardBuffer:
    """A queue of key presses fed by *reader* and by explicit puts."""

    def __init__(
        self, reader: Callable[[], Iterable[InputBufferEntry]] = read_stdin_entries
    ) -> None:
        self._reader = reader
        self._entries: List[InputBufferEntry] = []
        self._default_map: Optional[ScanMap] = None

    def __len__(self) -> int:
        return len(self._entries)

    def _slurp(self) -> None:
        self._entries.extend(self._reader())

    def _optimized_default(self) -> ScanMap:
        if self._default_map is None:
            self._default_map = default_scan_map()
            optimize_scan_map(self._default_map)
        return self._default_map

    def available(self) -> bool:
        """True if at least one key press is waiting."""
        self._slurp()
        return bool(self._entries)

    def get(self, scan_map: Optional[ScanMap] = None) -> Optional[str]:
        """Take the next key, translating known sequences via an optimized *scan_map*.

        Returns None when nothing is waiting.  Unmapped special keys come back
        as ``"<scancode>"``.
        """
        self._slurp()
        if not self._entries:
            return None
        if scan_map is None:
            scan_map = self._optimized_default()
        initial = self._entries.pop(0)
        entry = initial
        scanned = 0
        current = scan_map
        while True:
            found = current.get((entry.c, entry.scan_code))
            if isinstance(found, str):
                del self._entries[:scanned]
                return found
            if isinstance(found, dict) and scanned < len(self._entries):
                current = found
                entry = self._entries[scanned]
                scanned += 1
                continue
            break
        if initial.c == 0:
            return f"<{initial.scan_code}>"
        return chr(initial.c)

    def put_codepoint(self, codepoint: int, in_front: bool = False) -> None:
        """Enqueue one character by code point."""
        entry = InputBufferEntry(int(codepoint))
        if in_front:
            self._entries.insert(0, entry)
        else:
            self._entries.append(entry)

    def put_string(self, s: str, in_front: bool = False) -> None:
        """Enqueue each character of *s*, keeping their order."""
        entries = [InputBufferEntry(ord(ch)) for ch in s]
        if in_front:
            self._entries[0:0] = entries
        else:
            self._entries.extend(entries)

    def clear(self) -> None:
        """Drop every waiting key press, including any unread input."""
        self._slurp()
        self._entries.clear()