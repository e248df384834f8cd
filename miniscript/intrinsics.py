"""Registry of the built-in functions and the machinery to invoke them."""

from __future__ import annotations

import math
import os
import sys
import time
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Callable, ClassVar, Dict, List, Optional, Tuple

from . import numeric, sequences
from .sequences import to_str

VERSION = "0.1.0"

TextOutput = Callable[[str, bool], None]


@dataclass(frozen=True)
class IntrinsicResult:
    """Outcome of one intrinsic step: a final value, or in-progress data when not done."""

    result: Any = None
    done: bool = True

    NULL: ClassVar["IntrinsicResult"]
    EMPTY_STRING: ClassVar["IntrinsicResult"]


IntrinsicResult.NULL = IntrinsicResult()
IntrinsicResult.EMPTY_STRING = IntrinsicResult("")


def _write_stdout(text: str, add_newline: bool) -> None:
    sys.stdout.write(text + ("\n" if add_newline else ""))


@dataclass
class CallContext:
    """State an intrinsic sees: its arguments plus the host machine's state."""

    variables: Dict[str, Any] = field(default_factory=dict)
    globals: Dict[str, Any] = field(default_factory=dict)
    standard_output: TextOutput = _write_stdout
    stack: List[Optional[Tuple[str, int]]] = field(default_factory=list)
    host_name: str = ""
    host_info: str = ""
    host_version: float = 0
    yielding: bool = False
    version_map: Optional[Dict[str, Any]] = None
    _start: float = field(default_factory=time.monotonic)
    _type_cache: Dict[str, Dict[str, Any]] = field(default_factory=dict)

    def run_time(self) -> float:
        """Seconds since this context was created."""
        return time.monotonic() - self._start

    def get_var(self, name: str) -> Any:
        return self.variables.get(name)


IntrinsicCode = Callable[[CallContext, IntrinsicResult], IntrinsicResult]


@dataclass(eq=False)
class Intrinsic:
    """A built-in function: a name, parameters with defaults, and the code it runs."""

    name: str
    numeric_id: int
    params: List[Tuple[str, Any]] = field(default_factory=list)
    code: Optional[IntrinsicCode] = None

    def add_param(self, name: str, default: Any = None) -> None:
        self.params.append((name, default))

    def signature(self) -> Tuple[Tuple[str, Any], ...]:
        """The parameters as ``(name, default)`` pairs, in order."""
        return tuple(self.params)

    def __repr__(self) -> str:
        return f"Intrinsic({self.name!r}, id={self.numeric_id})"


_all: List[Intrinsic] = []
_name_map: Dict[str, Intrinsic] = {}
_initialized = False


def create_intrinsic(name: str) -> Intrinsic:
    """Create and register a new intrinsic; add its params and code afterwards."""
    result = Intrinsic(name=name, numeric_id=len(_all))
    _all.append(result)
    if name:
        _name_map[name] = result
    return result


def get_by_name(name: str) -> Optional[Intrinsic]:
    init_if_needed()
    return _name_map.get(name)


def get_by_id(numeric_id: int) -> Intrinsic:
    if not 0 <= numeric_id < len(_all):
        raise IndexError(f"no intrinsic with id {numeric_id}")
    return _all[numeric_id]


def execute(
    numeric_id: int,
    context: CallContext,
    partial_result: Optional[IntrinsicResult] = None,
) -> IntrinsicResult:
    """Run one step of the intrinsic with the given id."""
    item = get_by_id(numeric_id)
    if item.code is None:
        raise RuntimeError(f"intrinsic {item.name!r} has no code")
    return item.code(context, partial_result or IntrinsicResult.NULL)


def call(name: str, *args: Any, context: Optional[CallContext] = None) -> Any:
    """Call the named intrinsic with positional *args*, running it to completion."""
    item = get_by_name(name)
    if item is None:
        raise KeyError(name)
    if len(args) > len(item.params):
        raise TypeError(f"Too many arguments to {name}")
    if context is None:
        context = CallContext()
    bound = {pname: default for pname, default in item.params}
    for (pname, _), value in zip(item.params, args):
        bound[pname] = value
    context.variables = bound
    partial = IntrinsicResult.NULL
    while True:
        partial = execute(item.numeric_id, context, partial)
        if partial.done:
            return partial.result
        time.sleep(0.001)


def _num(value: Any) -> float:
    return float(value) if isinstance(value, (int, float)) else 0.0


def _int(value: Any) -> int:
    if isinstance(value, (int, float)) and math.isfinite(value):
        return int(value)
    return 0


def _value_hash(value: Any) -> int:
    if value is None:
        return 0
    if isinstance(value, (int, float)):
        return hash(float(value))
    if isinstance(value, list):
        result = len(value)
        for item in value:
            result = (result * 31 + _value_hash(item)) & 0xFFFFFFFFFFFF
        return result
    if isinstance(value, dict):
        result = len(value)
        for key, item in value.items():
            result ^= _value_hash(key) * 7 + _value_hash(item)
        return result
    try:
        return hash(value)
    except TypeError:
        return id(value)


def _simple(func: Callable[..., Any], *names: str, convert=_num) -> IntrinsicCode:
    def run(ctx: CallContext, partial: IntrinsicResult) -> IntrinsicResult:
        return IntrinsicResult(func(*(convert(ctx.get_var(n)) for n in names)))

    return run


def _passthrough(func: Callable[..., Any], *names: str) -> IntrinsicCode:
    def run(ctx: CallContext, partial: IntrinsicResult) -> IntrinsicResult:
        return IntrinsicResult(func(*(ctx.get_var(n) for n in names)))

    return run


def _type_getter(key: str, source: Callable[[], Dict[str, Any]]) -> IntrinsicCode:
    def run(ctx: CallContext, partial: IntrinsicResult) -> IntrinsicResult:
        if key not in ctx._type_cache:
            ctx._type_cache[key] = dict(source())
        return IntrinsicResult(ctx._type_cache[key])

    return run


def _char(ctx: CallContext, partial: IntrinsicResult) -> IntrinsicResult:
    return IntrinsicResult(numeric.char(_int(ctx.get_var("codePoint"))))


def _first_code_point(ctx: CallContext, partial: IntrinsicResult) -> IntrinsicResult:
    value = ctx.get_var("self")
    if value is None:
        return IntrinsicResult(0)
    text = to_str(value)
    return IntrinsicResult(ord(text[0]) if text else 0)


def _hash(ctx: CallContext, partial: IntrinsicResult) -> IntrinsicResult:
    return IntrinsicResult(_value_hash(ctx.get_var("obj")))


def _intrinsics(ctx: CallContext, partial: IntrinsicResult) -> IntrinsicResult:
    return IntrinsicResult(intrinsics_map())


def _pi(ctx: CallContext, partial: IntrinsicResult) -> IntrinsicResult:
    return IntrinsicResult(math.pi)


def _print(ctx: CallContext, partial: IntrinsicResult) -> IntrinsicResult:
    value = ctx.get_var("s")
    text = "null" if value is None else to_str(value)
    delimiter = ctx.get_var("delimiter")
    if delimiter is None:
        ctx.standard_output(text, False)
    elif delimiter == "\n":
        ctx.standard_output(text, True)
    else:
        ctx.standard_output(text + to_str(delimiter), False)
    return IntrinsicResult.NULL


def _round(ctx: CallContext, partial: IntrinsicResult) -> IntrinsicResult:
    return IntrinsicResult(
        numeric.round_to(_num(ctx.get_var("x")), _int(ctx.get_var("decimalPlaces")))
    )


def _rnd(ctx: CallContext, partial: IntrinsicResult) -> IntrinsicResult:
    seed = ctx.get_var("seed")
    return IntrinsicResult(numeric.rnd(None if seed is None else _int(seed)))


def stack_list(ctx: CallContext) -> List[str]:
    """Readable lines for the context's call stack, innermost first as stored."""
    lines = []
    for loc in ctx.stack:
        if loc is None:
            continue
        where, line_num = loc
        lines.append(f"{where or '(current program)'} line {line_num}")
    return lines


def _stack_trace(ctx: CallContext, partial: IntrinsicResult) -> IntrinsicResult:
    if "_stackAtBreak" in ctx.globals:
        return IntrinsicResult(ctx.globals["_stackAtBreak"])
    return IntrinsicResult(stack_list(ctx))


def _time(ctx: CallContext, partial: IntrinsicResult) -> IntrinsicResult:
    return IntrinsicResult(ctx.run_time())


def _version(ctx: CallContext, partial: IntrinsicResult) -> IntrinsicResult:
    if ctx.version_map is None:
        ctx.version_map = version_info(ctx.host_name, ctx.host_info, ctx.host_version)
    return IntrinsicResult(ctx.version_map)


def _wait(ctx: CallContext, partial: IntrinsicResult) -> IntrinsicResult:
    now = ctx.run_time()
    if partial.done:
        return IntrinsicResult(now + _num(ctx.get_var("seconds")), done=False)
    if now > _num(partial.result):
        return IntrinsicResult.NULL
    return partial


def _yield(ctx: CallContext, partial: IntrinsicResult) -> IntrinsicResult:
    ctx.yielding = True
    return IntrinsicResult.NULL


def _define(name: str, params: List[Tuple[str, Any]], run: IntrinsicCode) -> None:
    item = create_intrinsic(name)
    for pname, default in params:
        item.add_param(pname, default)
    item.code = run


def init_if_needed() -> None:
    """Register the standard intrinsics once."""
    global _initialized
    if _initialized:
        return
    _initialized = True
    s = sequences
    n = numeric
    table: List[Tuple[str, List[Tuple[str, Any]], IntrinsicCode]] = [
        ("abs", [("x", 0)], _simple(n.abs_value, "x")),
        ("acos", [("x", 0)], _simple(n.acos, "x")),
        ("asin", [("x", 0)], _simple(n.asin, "x")),
        ("atan", [("y", 0), ("x", 1)], _simple(n.atan, "y", "x")),
        ("bitAnd", [("i", 0), ("j", 0)], _simple(n.bit_and, "i", "j")),
        ("bitOr", [("i", 0), ("j", 0)], _simple(n.bit_or, "i", "j")),
        ("bitXor", [("i", 0), ("j", 0)], _simple(n.bit_xor, "i", "j")),
        ("char", [("codePoint", 65)], _char),
        ("ceil", [("x", 0)], _simple(n.ceil, "x")),
        ("code", [("self", None)], _first_code_point),
        ("cos", [("radians", 0)], _simple(n.cos, "radians")),
        ("floor", [("x", 0)], _simple(n.floor, "x")),
        ("funcRef", [], _type_getter("function", function_type)),
        ("hash", [("obj", None)], _hash),
        ("hasIndex", [("self", None), ("index", None)], _passthrough(s.has_index, "self", "index")),
        ("indexes", [("self", None)], _passthrough(s.indexes, "self")),
        (
            "indexOf",
            [("self", None), ("value", None), ("after", None)],
            _passthrough(s.index_of, "self", "value", "after"),
        ),
        (
            "insert",
            [("self", None), ("index", None), ("value", None)],
            _passthrough(s.insert, "self", "index", "value"),
        ),
        ("intrinsics", [], _intrinsics),
        ("join", [("self", None), ("delimiter", " ")], _passthrough(s.join, "self", "delimiter")),
        ("len", [("self", None)], _passthrough(s.length, "self")),
        ("list", [], _type_getter("list", list_type)),
        ("log", [("x", None), ("base", 10)], _simple(n.log, "x", "base")),
        ("lower", [("self", None)], _passthrough(s.lower, "self")),
        ("map", [], _type_getter("map", map_type)),
        ("number", [], _type_getter("number", number_type)),
        ("pi", [], _pi),
        ("print", [("s", ""), ("delimiter", "\n")], _print),
        ("pop", [("self", None)], _passthrough(s.pop, "self")),
        ("pull", [("self", None)], _passthrough(s.pull, "self")),
        ("push", [("self", None), ("value", None)], _passthrough(s.push, "self", "value")),
        (
            "range",
            [("from", 0), ("to", 0), ("step", None)],
            _passthrough(s.range_values, "from", "to", "step"),
        ),
        ("refEquals", [("a", None), ("b", None)], _passthrough(s.ref_equals, "a", "b")),
        ("remove", [("self", None), ("k", None)], _passthrough(s.remove, "self", "k")),
        (
            "replace",
            [("self", None), ("oldval", None), ("newval", None), ("maxCount", None)],
            _passthrough(s.replace, "self", "oldval", "newval", "maxCount"),
        ),
        ("round", [("x", 0), ("decimalPlaces", 0)], _round),
        ("rnd", [("seed", None)], _rnd),
        ("sign", [("x", 0)], _simple(n.sign, "x")),
        ("sin", [("radians", 0)], _simple(n.sin, "radians")),
        (
            "slice",
            [("seq", None), ("from", 0), ("to", None)],
            _passthrough(s.slice_seq, "seq", "from", "to"),
        ),
        (
            "sort",
            [("self", 0), ("byKey", None), ("ascending", 1)],
            _passthrough(s.sort_values, "self", "byKey", "ascending"),
        ),
        (
            "split",
            [("self", None), ("delimiter", " "), ("maxCount", -1)],
            _passthrough(s.split, "self", "delimiter", "maxCount"),
        ),
        ("sqrt", [("x", 0)], _simple(n.sqrt, "x")),
        ("stackTrace", [], _stack_trace),
        ("str", [("x", 0)], _passthrough(to_str, "x")),
        ("string", [], _type_getter("string", string_type)),
        ("shuffle", [("self", None)], _passthrough(s.shuffle, "self")),
        ("sum", [("self", None)], _passthrough(s.sum_values, "self")),
        ("tan", [("radians", 0)], _simple(n.tan, "radians")),
        ("time", [], _time),
        ("upper", [("self", None)], _passthrough(s.upper, "self")),
        ("val", [("self", 0)], _passthrough(s.val, "self")),
        ("values", [("self", None)], _passthrough(s.values_of, "self")),
        ("version", [], _version),
        ("wait", [("seconds", 1)], _wait),
        ("yield", [], _yield),
    ]
    for name, params, run in table:
        _define(name, params, run)


def intrinsics_map() -> Dict[str, Intrinsic]:
    """Every named intrinsic, by name."""
    init_if_needed()
    return {item.name: item for item in _all if item.name}


def _methods(*names: str) -> Dict[str, Intrinsic]:
    init_if_needed()
    return {name: _name_map[name] for name in names}


_type_maps: Dict[str, Dict[str, Any]] = {}


def _cached(key: str, build: Callable[[], Dict[str, Any]]) -> Dict[str, Any]:
    if key not in _type_maps:
        _type_maps[key] = build()
    return _type_maps[key]


def function_type() -> Dict[str, Any]:
    return _cached("function", dict)


def list_type() -> Dict[str, Any]:
    return _cached(
        "list",
        lambda: _methods(
            "hasIndex", "indexes", "indexOf", "insert", "join", "len", "pop", "pull",
            "push", "shuffle", "sort", "sum", "remove", "replace", "values",
        ),
    )


def map_type() -> Dict[str, Any]:
    return _cached(
        "map",
        lambda: _methods(
            "hasIndex", "indexes", "indexOf", "len", "pop", "pull", "push",
            "shuffle", "sum", "remove", "replace", "values",
        ),
    )


def number_type() -> Dict[str, Any]:
    return _cached("number", dict)


def string_type() -> Dict[str, Any]:
    return _cached(
        "string",
        lambda: _methods(
            "hasIndex", "indexes", "indexOf", "insert", "code", "len", "lower",
            "val", "remove", "replace", "split", "upper", "values",
        ),
    )


def _build_date() -> str:
    try:
        return date.fromtimestamp(os.path.getmtime(__file__)).isoformat()
    except OSError:
        return date.today().isoformat()


def version_info(host_name: str = "", host_info: str = "", host_version: float = 0) -> Dict[str, Any]:
    """The map the ``version`` intrinsic reports."""
    return {
        "miniscript": VERSION,
        "buildDate": _build_date(),
        "host": host_version,
        "hostName": host_name,
        "hostInfo": host_info,
    }