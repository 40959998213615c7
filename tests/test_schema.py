"""Tests for the check file JSON Schema."""

from __future__ import annotations

import json

from verdict.schema import check_kinds, generate_json_schema, render_json_schema


def test_check_kinds_lists_every_check():
    assert check_kinds() == [
        "equal",
        "deep_equal",
        "length",
        "contains",
        "nil",
        "equal_multi_line",
    ]


def test_schema_describes_check_file_format():
    schema = generate_json_schema()
    assert schema["$schema"] == "https://json-schema.org/draft/2020-12/schema"
    assert schema["title"] == "verdict check file"
    assert "equal_multi_line" in schema["description"]
    assert set(schema["properties"]) == {"settings", "checks"}


def test_schema_defs_are_sorted_by_name():
    defs = list(generate_json_schema()["$defs"])
    assert defs == sorted(defs)
    assert "EqualCheck" in defs


def test_rendered_schema_is_json_with_trailing_newline():
    text = render_json_schema()
    assert text.endswith("}\n")
    assert json.loads(text)["title"] == "verdict check file"
