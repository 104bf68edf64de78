import io
import json

import pytest

from cxkit.json_build import build, to_json


def test_scalars():
    assert to_json(None) == "null"
    assert to_json(True) == "true"
    assert to_json(False) == "false"
    assert to_json(42) == str(42)


def test_float_has_six_decimals():
    assert to_json(1.5) == "1.500000"


def test_empty_containers():
    assert to_json([]) == "[]"
    assert to_json({}) == "{}"


def test_array_round_trip():
    assert json.loads(to_json([1, 2, 3])) == [1, 2, 3]


def test_tuple_is_array():
    assert json.loads(to_json((1, "a"))) == [1, "a"]


def test_nested_round_trip():
    doc = {"a": [1, 2.5, None], "b": {"c": True, "d": "text"}, "e": -7}
    assert json.loads(to_json(doc)) == doc


def test_string_escapes_round_trip():
    text = 'a"b\\c\n\t\r\b\f'
    assert json.loads(to_json(text)) == text


def test_non_ascii_written_raw():
    text = "ação"
    out = to_json(text)
    assert text in out
    assert json.loads(out) == text


def test_map_order_preserved():
    out = to_json({"b": 1, "a": 2})
    assert out.index('"b"') < out.index('"a"')


def test_replacer_applies_to_every_value():
    def times_ten(value):
        if isinstance(value, int) and not isinstance(value, bool):
            return value * 10
        return value

    assert json.loads(to_json([1, 2], replacer=times_ten)) == [10, 20]


def test_replacer_applies_to_root():
    replacement = {"k": [True]}
    assert json.loads(to_json("ignored", replacer=lambda v: replacement if v == "ignored" else v)) == replacement


def test_build_writes_to_stream():
    doc = {"x": [1, "y", None]}
    out = io.StringIO()
    build(doc, out)
    assert out.getvalue() == to_json(doc)


def test_unsupported_type():
    with pytest.raises(TypeError):
        to_json({1, 2})


def test_non_str_key():
    with pytest.raises(TypeError):
        to_json({1: "a"})