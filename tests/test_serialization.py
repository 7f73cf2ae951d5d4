"""
Tests for serialization and deserialization of parsed scripts.

These tests ensure lossless JSON/YAML round-trip using the explicit
serialization functions in `scriptstr.serialization`.
"""

import pytest
from scriptstr.examples import build_example_script
from scriptstr.expressions import StringLiteral
from scriptstr.model import LetStatement
from scriptstr.parser import parse_script
from scriptstr.serialization import (
    expr_from_dict,
    script_from_dict,
    script_from_json,
    script_from_yaml,
    script_to_dict,
    script_to_json,
    script_to_yaml,
)
from scriptstr.value import StringValue


def test_json_roundtrip():
    script = build_example_script()
    before = script_to_dict(script)
    restored = script_from_json(script_to_json(script))
    assert script_to_dict(restored) == before
    assert restored == script


def test_yaml_roundtrip():
    script = build_example_script()
    before = script_to_dict(script)
    restored = script_from_yaml(script_to_yaml(script))
    assert script_to_dict(restored) == before
    assert restored == script


def test_string_literals_stored_decoded():
    script = parse_script(r'let s = "tab:\there \U0001F603";')
    d = script_to_dict(script)
    assert d["statements"][0]["value"] == {"type": "string", "value": "tab:\there \U0001F603"}


def test_control_characters_survive_yaml():
    script = parse_script(r'let s = "nul:\0 cr:\r";')
    restored = script_from_yaml(script_to_yaml(script))
    assert restored.statements[0] == LetStatement("s", StringLiteral(StringValue("nul:\0 cr:\r")))


def test_unknown_types_rejected():
    with pytest.raises(TypeError):
        expr_from_dict({"type": "lambda"})
    with pytest.raises(TypeError):
        script_from_dict({"statements": [{"type": "while"}]})


def test_const_and_function_calls_roundtrip():
    script = parse_script('const limit = 3; let s = pad("ab", limit); print(s.len());')
    d = script_to_dict(script)
    assert d["statements"][0]["type"] == "const"
    assert d["statements"][1]["value"]["type"] == "fn_call"
    assert script_from_json(script_to_json(script)) == script
    assert script_from_yaml(script_to_yaml(script)) == script
