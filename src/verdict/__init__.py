"""Composable comparisons for test assertions."""

from verdict.compare import (
    Comparison,
    contains,
    deep_equal,
    equal,
    equal_multi_line,
    error,
    error_contains,
    length,
    nil,
    nil_error,
    nil_error_pair,
    panics,
    raises,
)
from verdict.result import (
    SUCCESS,
    Result,
    failure,
    failure_template,
    result_from_error,
    success,
)

__all__ = [
    "Comparison",
    "Result",
    "SUCCESS",
    "contains",
    "deep_equal",
    "equal",
    "equal_multi_line",
    "error",
    "error_contains",
    "failure",
    "failure_template",
    "length",
    "nil",
    "nil_error",
    "nil_error_pair",
    "panics",
    "raises",
    "result_from_error",
    "success",
]
