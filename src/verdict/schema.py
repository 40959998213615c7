"""Generate the JSON Schema of the check file format."""

from __future__ import annotations

import json
from pathlib import Path
from typing import get_args

from verdict.config import Check, CheckFile

JSON_SCHEMA_DIALECT = "https://json-schema.org/draft/2020-12/schema"


def check_kinds() -> list[str]:
    """Keys that select a check in a check file, in declaration order."""
    return [model.kind for model in get_args(Check)]


def generate_json_schema() -> dict:
    body = CheckFile.model_json_schema()
    schema = {
        "$schema": JSON_SCHEMA_DIALECT,
        "title": "verdict check file",
        "description": "Checks run by `verdict check`. Each entry of `checks` holds "
        "exactly one of: " + ", ".join(check_kinds()) + ".",
    }
    schema.update((key, value) for key, value in body.items() if key not in schema)
    if "$defs" in schema:
        schema["$defs"] = dict(sorted(schema["$defs"].items()))
    return schema


def render_json_schema() -> str:
    return json.dumps(generate_json_schema(), indent=2) + "\n"


def write_json_schema(path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(render_json_schema())
