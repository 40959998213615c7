"""Unified line diffs of multi-line text."""

from __future__ import annotations

import difflib
from typing import Sequence


class DiffError(Exception):
    """The diff could not be produced."""


def split_lines(text: str) -> list[str]:
    """Split *text* after every newline, terminating the last line too.

    ``"a\\nb\\n"`` becomes ``["a\\n", "b\\n", "\\n"]`` so that a missing final
    newline shows up in the diff.
    """
    return [line + "\n" for line in text.split("\n")]


def unified_diff(
    a: Sequence[str],
    b: Sequence[str],
    *,
    from_file: str = "left",
    to_file: str = "right",
    context: int = 3,
) -> str:
    """Return the unified diff of two sequences of newline-terminated lines.

    Raises:
        DiffError: If *context* is negative or a line is not a string.
    """
    if context < 0:
        raise DiffError(f"context must not be negative, got {context}")
    try:
        return "".join(
            difflib.unified_diff(a, b, fromfile=from_file, tofile=to_file, n=context)
        )
    except TypeError as exc:
        raise DiffError(str(exc)) from exc
