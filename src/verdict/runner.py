"""Turn configured checks into comparisons and evaluate them."""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any

from verdict import compare, structdiff
from verdict.compare import Comparison
from verdict.config import (
    Check,
    CheckFile,
    ContainsCheck,
    DeepEqualCheck,
    EqualCheck,
    EqualMultiLineCheck,
    LengthCheck,
    NilCheck,
    Settings,
)


@dataclass
class CheckOutcome:
    """Result of evaluating one configured check."""

    name: str
    kind: str
    passed: bool
    message: str

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def _deep_equal_options(check: DeepEqualCheck) -> list[structdiff.Option]:
    spec = check.deep_equal
    options: list[structdiff.Option] = []
    if spec.sort_sequences:
        options.append(structdiff.SortSequences(key=repr))
    if spec.equate_empty:
        options.append(structdiff.EquateEmpty())
    if spec.float_tolerance is not None:
        options.append(structdiff.EquateApprox(abs=spec.float_tolerance))
    return options


def build_comparison(check: Check, settings: Settings) -> tuple[Comparison, tuple[str, ...]]:
    """Turn a configured check into a comparison and its argument labels.

    Raises:
        FileNotFoundError: If an ``equal_multi_line`` input file is missing.
    """
    if isinstance(check, EqualCheck):
        return compare.equal(check.equal.actual, check.equal.expected), ("actual", "expected")
    if isinstance(check, DeepEqualCheck):
        spec = check.deep_equal
        return compare.deep_equal(spec.actual, spec.expected, *_deep_equal_options(check)), ()
    if isinstance(check, LengthCheck):
        return compare.length(check.length.value, check.length.expected), ()
    if isinstance(check, ContainsCheck):
        return compare.contains(check.contains.collection, check.contains.item), ()
    if isinstance(check, NilCheck):
        return compare.nil(check.nil.value), ()
    if isinstance(check, EqualMultiLineCheck):
        spec = check.equal_multi_line
        left = Path(spec.left).read_text()
        right = Path(spec.right).read_text()
        comparison = compare.equal_multi_line(
            left,
            right,
            context=settings.diff_context,
            from_file=settings.from_label,
            to_file=settings.to_label,
        )
        return comparison, ()
    raise ValueError(f"Unknown check type: {type(check).__name__}")


def run_checks(config: CheckFile, logger: logging.Logger) -> list[CheckOutcome]:
    """Evaluate every check in *config* once, in order."""
    outcomes: list[CheckOutcome] = []
    for index, check in enumerate(config.checks):
        name = check.display_name(index)
        logger.info(f"Evaluating {check.kind} check: {name}")
        try:
            comparison, args = build_comparison(check, config.settings)
        except FileNotFoundError as e:
            logger.warning(f"Check {name}: {e.filename} not found")
            outcomes.append(
                CheckOutcome(name=name, kind=check.kind, passed=False, message=f"{e.filename} not found")
            )
            continue

        passed, message = compare.evaluate(comparison, args)
        logger.info(f"Check {name} passed={passed}")
        if message:
            logger.debug(f"Check {name} message: {message}")
        outcomes.append(CheckOutcome(name=name, kind=check.kind, passed=passed, message=message))
    return outcomes
