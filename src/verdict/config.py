"""Check file models and loading.

A check file is YAML with optional `settings` and a non-empty `checks` list.
Each check is a mapping with one key naming its kind, plus an optional
`name`. String values may use `${VAR}` and `${VAR:-default}`.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, ClassVar

import yaml
from expandvars import ExpandvarsException, expandvars
from pydantic import BaseModel, ConfigDict, field_validator, model_validator


class Settings(BaseModel):
    model_config = ConfigDict(extra="forbid")
    diff_context: int = 3
    from_label: str = "left"
    to_label: str = "right"

    @field_validator("diff_context")
    @classmethod
    def context_must_not_be_negative(cls, v: int) -> int:
        if v < 0:
            raise ValueError("diff_context must not be negative")
        return v


class _Check(BaseModel):
    model_config = ConfigDict(extra="forbid")
    kind: ClassVar[str]
    name: str | None = None

    def display_name(self, index: int) -> str:
        return self.name or f"{self.kind}[{index}]"


class EqualSpec(BaseModel):
    model_config = ConfigDict(extra="forbid")
    actual: Any
    expected: Any


class EqualCheck(_Check):
    kind: ClassVar[str] = "equal"
    equal: EqualSpec


class DeepEqualSpec(BaseModel):
    model_config = ConfigDict(extra="forbid")
    actual: Any
    expected: Any
    sort_sequences: bool = False
    equate_empty: bool = False
    float_tolerance: float | None = None


class DeepEqualCheck(_Check):
    kind: ClassVar[str] = "deep_equal"
    deep_equal: DeepEqualSpec


class LengthSpec(BaseModel):
    model_config = ConfigDict(extra="forbid")
    value: Any
    expected: int


class LengthCheck(_Check):
    kind: ClassVar[str] = "length"
    length: LengthSpec


class ContainsSpec(BaseModel):
    model_config = ConfigDict(extra="forbid")
    collection: Any
    item: Any


class ContainsCheck(_Check):
    kind: ClassVar[str] = "contains"
    contains: ContainsSpec


class NilSpec(BaseModel):
    model_config = ConfigDict(extra="forbid")
    value: Any = None


class NilCheck(_Check):
    kind: ClassVar[str] = "nil"
    nil: NilSpec


class EqualMultiLineSpec(BaseModel):
    model_config = ConfigDict(extra="forbid")
    left: str
    right: str


class EqualMultiLineCheck(_Check):
    kind: ClassVar[str] = "equal_multi_line"
    equal_multi_line: EqualMultiLineSpec


Check = (
    EqualCheck
    | DeepEqualCheck
    | LengthCheck
    | ContainsCheck
    | NilCheck
    | EqualMultiLineCheck
)


class CheckFile(BaseModel):
    model_config = ConfigDict(extra="forbid")
    settings: Settings = Settings()
    checks: list[Check]

    @field_validator("checks")
    @classmethod
    def checks_must_not_be_empty(cls, v: list[Check]) -> list[Check]:
        if not v:
            raise ValueError("checks must not be empty")
        return v

    @model_validator(mode="after")
    def check_names_must_be_unique(self) -> CheckFile:
        seen: set[str] = set()
        for check in self.checks:
            if check.name is None:
                continue
            if check.name in seen:
                raise ValueError(f"Duplicate check name '{check.name}'")
            seen.add(check.name)
        return self


def _expand(value: Any, missing: list[str]) -> Any:
    """Expand ``${VAR}`` references in every string of a loaded YAML tree."""
    if isinstance(value, str):
        try:
            return expandvars(value, nounset=True)
        except ExpandvarsException:
            # Variable is missing and has no default
            missing.append(f"  {value}")
            return value
    if isinstance(value, dict):
        return {key: _expand(item, missing) for key, item in value.items()}
    if isinstance(value, list):
        return [_expand(item, missing) for item in value]
    return value


def load_config(path: Path) -> CheckFile:
    """Load and validate a check file from YAML.

    Raises ValueError listing every unset environment variable so the user can
    fix them all at once.
    """
    config_dir = path.parent.resolve()

    with open(path) as f:
        raw = yaml.safe_load(f)

    if not isinstance(raw, dict):
        raise ValueError(f"{path}: expected a mapping at the top level")

    missing: list[str] = []
    raw = _expand(raw, missing)
    if missing:
        details = "\n".join(missing)
        raise ValueError(f"{path} has missing environment variables:\n{details}")

    config = CheckFile(**raw)

    # Resolve relative file paths relative to the check file location
    for check in config.checks:
        if isinstance(check, EqualMultiLineCheck):
            spec = check.equal_multi_line
            for attr in ("left", "right"):
                file_path = Path(getattr(spec, attr))
                if not file_path.is_absolute():
                    setattr(spec, attr, str((config_dir / file_path).resolve()))

    return config
