import math
import re
import time

import pytest

from miniscript.intrinsics import (
    CallContext,
    IntrinsicResult,
    call,
    create_intrinsic,
    execute,
    function_type,
    get_by_id,
    get_by_name,
    init_if_needed,
    intrinsics_map,
    list_type,
    map_type,
    number_type,
    string_type,
    version_info,
)


def test_get_by_name_and_id_agree():
    item = get_by_name("abs")
    assert item.name == "abs"
    assert get_by_id(item.numeric_id) is item


def test_unknown_name_returns_none_and_call_raises():
    assert get_by_name("noSuchIntrinsic") is None
    with pytest.raises(KeyError):
        call("noSuchIntrinsic")


def test_signature_defaults():
    assert get_by_name("atan").signature() == (("y", 0), ("x", 1))
    assert get_by_name("split").signature() == (("self", None), ("delimiter", " "), ("maxCount", -1))


def test_call_numeric():
    assert call("abs", -3) == 3
    assert call("atan", 1) == math.atan(1)
    assert call("bitAnd", 12, 10) == 8
    assert call("sign", -5) == -1


def test_call_uses_defaults():
    assert call("char") == "A"
    assert call("str") == "0"


def test_call_sequences():
    assert call("len", [1, 2, 3]) == 3
    assert call("split", "a b c") == ["a", "b", "c"]
    assert call("range", 1, 3) == [1, 2, 3]
    assert call("join", ["a", "b"], "-") == "a-b"


def test_code_of_null_is_zero():
    assert call("code", None) == 0
    assert call("code", "A") == 65


def test_too_many_arguments():
    with pytest.raises(TypeError):
        call("abs", 1, 2)


def test_insert_errors_propagate():
    with pytest.raises(ValueError):
        call("insert", [1], None, 5)


def test_print_default_newline():
    out = []
    ctx = CallContext(standard_output=lambda text, nl: out.append((text, nl)))
    assert call("print", "hi", context=ctx) is None
    assert out == [("hi", True)]


def test_print_custom_and_null_delimiter():
    out = []
    ctx = CallContext(standard_output=lambda text, nl: out.append((text, nl)))
    call("print", "a", ",", context=ctx)
    call("print", None, None, context=ctx)
    assert out == [("a,", False), ("null", False)]


def test_type_maps():
    assert "push" in list_type()
    assert "insert" not in map_type()
    assert "split" in string_type()
    assert function_type() == {}
    assert number_type() == {}
    assert list_type()["push"] is get_by_name("push")


def test_type_intrinsics_return_copies_per_context():
    ctx = CallContext()
    first = call("list", context=ctx)
    second = call("list", context=ctx)
    assert first is second
    assert set(first) == set(list_type())


def test_intrinsics_map():
    mapping = intrinsics_map()
    assert mapping["abs"] is get_by_name("abs")
    assert call("intrinsics")["len"] is get_by_name("len")


def test_hash_of_equal_lists():
    first = [1, "a"]
    second = [1, "a"]
    assert first is not second
    assert call("hash", first) == call("hash", second)
    assert call("hash", None) == 0


def test_rnd_seeded_repeatable():
    a = call("rnd", 42)
    b = call("rnd", 42)
    assert a == b
    assert 0 <= a < 1


def test_wait_partial_then_done():
    init_if_needed()
    ctx = CallContext(variables={"seconds": 0.01})
    wid = get_by_name("wait").numeric_id
    first = execute(wid, ctx)
    assert first.done is False
    assert first.result >= 0.01
    time.sleep(0.02)
    assert execute(wid, ctx, first).done is True


def test_wait_via_call_blocks():
    ctx = CallContext()
    start = time.monotonic()
    assert call("wait", 0.01, context=ctx) is None
    assert time.monotonic() - start >= 0.01


def test_yield_sets_flag():
    ctx = CallContext()
    call("yield", context=ctx)
    assert ctx.yielding is True


def test_stack_trace():
    ctx = CallContext(stack=[("", 3), None, ("foo", 7)])
    assert call("stackTrace", context=ctx) == ["(current program) line 3", "foo line 7"]
    ctx.globals["_stackAtBreak"] = ["saved"]
    assert call("stackTrace", context=ctx) == ["saved"]


def test_time_is_nonnegative_and_increases():
    ctx = CallContext()
    t1 = call("time", context=ctx)
    t2 = call("time", context=ctx)
    assert 0 <= t1 <= t2


def test_version_info():
    info = version_info("host", "info", 2)
    assert info["hostName"] == "host"
    assert info["hostInfo"] == "info"
    assert info["host"] == 2
    assert re.fullmatch(r"\d{4}-\d{2}-\d{2}", info["buildDate"])


def test_version_intrinsic_cached():
    ctx = CallContext(host_name="h")
    first = call("version", context=ctx)
    assert first["hostName"] == "h"
    assert call("version", context=ctx) is first


def test_custom_intrinsic():
    init_if_needed()
    item = create_intrinsic("customDouble")
    item.add_param("n", 4)
    item.code = lambda ctx, partial: IntrinsicResult(ctx.get_var("n") * 2)
    assert call("customDouble") == 8
    assert call("customDouble", 5) == 10


def test_intrinsic_without_code_raises():
    item = create_intrinsic("")
    with pytest.raises(RuntimeError):
        execute(item.numeric_id, CallContext())


def test_get_by_id_out_of_range():
    with pytest.raises(IndexError):
        get_by_id(10**6)


def test_result_constants():
    init_if_needed()
    yid = get_by_name("yield").numeric_id
    outcome = execute(yid, CallContext())
    assert outcome is IntrinsicResult.NULL
    assert outcome.result is None and outcome.done
    assert call("slice", "abc", 2, 1) == IntrinsicResult.EMPTY_STRING.result