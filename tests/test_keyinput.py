import pytest

from miniscript.keyinput import (
    InputBufferEntry,
    KeyboardBuffer,
    default_scan_map,
    optimize_scan_map,
)


def _no_input():
    return []


@pytest.fixture
def buf():
    return KeyboardBuffer(_no_input)


@pytest.fixture
def scan_map():
    m = {"\x1b[A": "\x13", "\x1b[B": "\x14", "\x7f": "\x08", 72: "\x13"}
    optimize_scan_map(m)
    return m


def test_get_on_empty_returns_none(buf):
    assert buf.get({}) is None
    assert buf.available() is False


def test_put_string_preserves_order(buf):
    buf.put_string("abc")
    assert buf.available() is True
    assert [buf.get({}) for _ in range(3)] == ["a", "b", "c"]
    assert buf.get({}) is None


def test_put_string_in_front(buf):
    buf.put_string("xy")
    buf.put_string("ab", in_front=True)
    assert [buf.get({}) for _ in range(4)] == ["a", "b", "x", "y"]


def test_put_codepoint(buf):
    buf.put_codepoint(ord("z"))
    buf.put_codepoint(ord("q"), in_front=True)
    assert buf.get({}) == "q"
    assert buf.get({}) == "z"


def test_non_ascii_character_round_trips(buf):
    buf.put_string("é")
    assert buf.get({}) == "é"


def test_clear(buf):
    buf.put_string("hello")
    buf.clear()
    assert len(buf) == 0
    assert buf.get({}) is None


def test_escape_sequence_translated(buf, scan_map):
    buf.put_string("\x1b[Ax")
    assert buf.get(scan_map) == "\x13"
    assert buf.get(scan_map) == "x"
    assert buf.get(scan_map) is None


def test_single_char_mapping(buf, scan_map):
    buf.put_string("\x7f")
    assert buf.get(scan_map) == "\x08"


def test_unknown_sequence_passes_through(buf, scan_map):
    buf.put_string("\x1b[Z")
    assert [buf.get(scan_map) for _ in range(3)] == ["\x1b", "[", "Z"]


def test_incomplete_sequence_returns_first_char(buf, scan_map):
    buf.put_string("\x1b[")
    assert buf.get(scan_map) == "\x1b"
    assert buf.get(scan_map) == "["


def test_scan_code_entries():
    pending = [[InputBufferEntry(0, 72), InputBufferEntry(0, 99)]]

    def reader():
        return pending.pop() if pending else []

    m = {72: "\x13"}
    optimize_scan_map(m)
    kb = KeyboardBuffer(reader)
    assert kb.get(m) == "\x13"
    assert kb.get(m) == "<99>"
    assert kb.get(m) is None


def test_reader_entries_are_queued():
    calls = [[InputBufferEntry(ord("k"))]]

    def reader():
        return calls.pop() if calls else []

    kb = KeyboardBuffer(reader)
    assert kb.available() is True
    assert kb.get({}) == "k"


def test_optimize_structure():
    m = {"\x1b[A": "\x13", 5: "\x01", "": "ignored"}
    optimize_scan_map(m)
    assert m[(0, 5)] == "\x01"
    nested = m[(0x1B, 0)]
    assert isinstance(nested, dict)
    assert nested[(ord("["), 0)][(ord("A"), 0)] == "\x13"
    assert all(not (isinstance(k, tuple) and k[0] == 0 and k[1] == 0) for k in m)


def test_unoptimized_map_does_not_translate(buf):
    buf.put_string("\x1b[A")
    assert buf.get({"\x1b[A": "\x13"}) == "\x1b"


def test_default_scan_map_values_are_strings():
    m = default_scan_map()
    assert len(m) >= 7
    assert all(isinstance(v, str) for v in m.values())
    assert "\x13" in m.values()


def test_default_map_used_when_none():
    kb = KeyboardBuffer(_no_input)
    kb.put_string("q")
    assert kb.get() == "q"