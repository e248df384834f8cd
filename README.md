# miniscript

Building blocks for a MiniScript runtime, in plain Python with no
third-party dependencies.

## What is inside

- `miniscript.keywords`: the reserved words of the language (`KEYWORDS`,
  `is_keyword`), plus `TokenType` and the frozen `Token` dataclass
  (`type`, `text`, `after_space`) for use by a lexer.
- `miniscript.dateformat`: `format_date(t, format_spec)` renders epoch
  seconds in local time with patterns such as `"yyyy-MM-dd HH:mm:ss"` (the
  default) or one-letter standard formats (`"D"`, `"s"`, `"u"`, ...).
  `"d"`, `"g"` and `"G"` use the platform's locale formats. An unknown
  one-letter format or an out-of-range time gives `""`.
  `parse_date(date_str)` reads `year[-month[-day]]` and/or
  `hour[:minute[:second]]`, with an optional separate `P`/`PM` part, back
  into epoch seconds; without a date, today is used. It raises `ValueError`
  if the result cannot be represented.
- `miniscript.hashmap`: `Dictionary`, a chained hash table of
  `TABLE_SIZE` (251) bins with a pluggable hash function (`hash_int`,
  `hash_uint`). Besides the mapping protocol it has `lookup`, `remove`,
  `bin_entries`, and optional assign and evaluation overrides
  (`set_assign_override`/`apply_assign_override`,
  `set_eval_override`/`apply_eval_override`, the latter returning
  `(handled, value)`).
- `miniscript.reflist`: `RefList`, a resizable list with wrap-around
  `item`/`set_item`, `reposition`, `remove_range`, `resize`,
  `resize_buffer`, `index_of` and friends.
- `miniscript.keyinput`: `KeyboardBuffer(reader)`, a key-press queue that
  translates escape sequences into single key codes through a scan map
  (`default_scan_map`, `optimize_scan_map`). `get()` returns `None` when
  nothing is waiting and `"<scancode>"` for unmapped special keys.
  `read_stdin_entries` reads pending terminal input without blocking;
  `get_echo`/`set_echo` control terminal echo.
- `miniscript.numeric`: math, bit and character intrinsics (`bit_and`,
  `bit_or`, `bit_xor`, `round_to`, `log`, `atan`, `sign`, `char`, `code`,
  `rnd`, `init_rand`, ...).
- `miniscript.sequences`: string, list and map intrinsics over plain Python
  values (`None`, numbers, `str`, `list`, `dict`): `split`, `replace`,
  `slice_seq`, `sort_values`, `index_of`, `insert`, `remove`, `range_values`,
  `to_str` and more. Truth values come back as `1` and `0`.
- `miniscript.intrinsics`: the registry of named intrinsics with their
  parameters and defaults (`get_by_name`, `get_by_id`, `execute`, `call`,
  `intrinsics_map`), the `CallContext` an intrinsic runs in, the type maps
  (`list_type`, `map_type`, `string_type`, `number_type`, `function_type`)
  and `version_info`.

## Installation

```
pip install .
```

## Examples

```python
from miniscript.keywords import is_keyword
from miniscript.sequences import split, slice_seq
from miniscript.numeric import bit_and
from miniscript.dateformat import format_date, parse_date

is_keyword("while")                 # True
split("a,b,,c", ",", -1)            # ['a', 'b', '', 'c']
slice_seq("hello", 1, -1)           # 'ell'
bit_and(12, 10)                     # 8.0

t = parse_date("2023-02-01 15:30:00")
format_date(t, "yyyy-MM-dd HH:mm")  # '2023-02-01 15:30'
```

Calling an intrinsic through the registry applies its declared defaults:

```python
from miniscript.intrinsics import call, CallContext

ctx = CallContext()
call("split", "one two three", context=ctx)   # ['one', 'two', 'three']
```

## What this package does not do

There is no lexer, parser or virtual machine here, and no command-line
tool: the package cannot run MiniScript source. `Token` and `TokenType`
only describe tokens, and the intrinsics are called directly from Python
through `call` or `execute`.

## Running the tests

```
pip install .[test]
pytest
```