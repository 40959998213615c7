"""Comparisons: deferred checks over captured values that produce a Result.

Each function here returns a :data:`Comparison`, a zero-argument callable.
Nothing is inspected until the comparison is called, so the caller decides
when the work happens and can attach call-site context to the result.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Sequence

from verdict import kinds, linediff, structdiff
from verdict.format import format_error, type_name
from verdict.kinds import Kind
from verdict.result import SUCCESS, Result, failure, failure_template, to_result

logger = logging.getLogger(__name__)

Comparison = Callable[[], Result]

DeepDiffer = Callable[..., str]
LineDiffer = Callable[..., str]


def deep_equal(
    x: Any,
    y: Any,
    *options: structdiff.Option,
    differ: DeepDiffer = structdiff.diff,
) -> Comparison:
    """Succeeds if *x* and *y* are structurally equal.

    The comparison is customised with :mod:`verdict.structdiff` options. On
    failure the message is the diff report. Reaching a private attribute that
    no option covers fails the comparison with the differ's message; any
    other error raised by the differ propagates.
    """

    def comparison() -> Result:
        try:
            report = differ(x, y, *options)
        except Exception as exc:
            message = str(exc)
            if not message.startswith(structdiff.UNEXPORTED_FIELD_PREFIX):
                raise
            logger.debug(f"deep_equal stopped at a private attribute: {message}")
            return failure(message)
        return to_result(report == "", "\n" + report)

    return comparison


_EQUAL_TEMPLATE = (
    "{{ data['x'] }} ("
    "{%- if args[0] %}{{ args[0] }} {% endif -%}"
    "{{ data['x'] | typename }}"
    ") != {{ data['y'] }} ("
    "{%- if args[1] %}{{ args[1] }} {% endif -%}"
    "{{ data['y'] | typename }}"
    ")"
)


def equal(x: Any, y: Any) -> Comparison:
    """Succeeds if ``x == y``.

    The failure message shows both values with their types, and the source
    text of the arguments when the caller passes it to ``failure_message``.
    """

    def comparison() -> Result:
        if x == y:
            return SUCCESS
        return failure_template(_EQUAL_TEMPLATE, {"x": x, "y": y})

    return comparison


def length(seq: Any, expected: int) -> Comparison:
    """Succeeds if *seq* has the expected length.

    Anything supporting ``len()`` has a length; queues report the number of
    items waiting.
    """

    def comparison() -> Result:
        no_length = f"type {type_name(seq)} does not have a length"
        if not kinds.has_length(seq):
            return failure(no_length)
        try:
            actual = kinds.length_of(seq)
        except Exception as exc:
            logger.debug(f"Measuring length of {type_name(seq)} failed: {exc}")
            return failure(no_length)
        if actual == expected:
            return SUCCESS
        return failure(f"expected {seq} (length {actual}) to have length {expected}")

    return comparison


def _error_not_nil(value: Any) -> str:
    return f"error is not nil: {format_error(value)}"


def nil_error(err: BaseException | None) -> Comparison:
    """Succeeds if *err* is ``None``."""
    return is_nil(err, _error_not_nil)


def nil_error_pair(value: Any, err: BaseException | None) -> Comparison:
    """Succeeds if the error of a ``(value, err)`` pair is ``None``.

    Only *err* is checked; *value* is accepted so a function returning a
    result and an error can be checked in one call.
    """
    return is_nil(err, _error_not_nil)


def contains(collection: Any, item: Any) -> Comparison:
    """Succeeds if *item* is in *collection*.

    If *collection* is a string, *item* must also be a string and is looked
    up as a substring. If *collection* is a mapping, *item* must be a key of
    it, and its type must exactly match the type of a key present. Sets
    follow the same rule for their members. If *collection* is any other
    sequence, each element is compared to *item* with
    :func:`verdict.kinds.deep_equal`.
    """

    def comparison() -> Result:
        kind = kinds.kind_of(collection)
        if kind is Kind.NONE:
            return failure("nil does not contain items")
        message = f"{collection} does not contain {item}"

        if kind is Kind.STRING:
            if not isinstance(item, str):
                return failure("string may only contain strings")
            return to_result(
                item in collection,
                f"string {collection!r} does not contain {item!r}",
            )

        if kind in (Kind.MAPPING, Kind.SET):
            member_types = kinds.member_types(collection)
            if not member_types:
                return failure(message)
            noun = "key" if kind is Kind.MAPPING else "member"
            if type(item) not in member_types:
                return failure(
                    f"{kinds.type_label(collection)} can not contain a {type_name(item)} {noun}"
                )
            try:
                hash(item)
            except TypeError:
                return failure(
                    f"{kinds.type_label(collection)} can not contain an unhashable {type_name(item)} {noun}"
                )
            return to_result((type(item), item) in kinds.typed_members(collection), message)

        if kind is Kind.SEQUENCE:
            for element in collection:
                if kinds.deep_equal(element, item):
                    return SUCCESS
            return failure(message)

        return failure(f"type {type_name(collection)} does not contain items")

    return comparison


def panics(f: Callable[[], Any]) -> Comparison:
    """Succeeds if calling *f* raises an exception.

    The exception is discarded. ``KeyboardInterrupt``, ``SystemExit`` and
    other ``BaseException`` subclasses outside ``Exception`` propagate.
    """

    def comparison() -> Result:
        try:
            f()
        except Exception as exc:
            logger.debug(f"panics: {type_name(exc)} raised: {exc}")
            return SUCCESS
        return failure("did not panic")

    return comparison


def raises(f: Callable[[], Any], *exc_types: type[BaseException]) -> Comparison:
    """Succeeds if calling *f* raises one of *exc_types*.

    Exceptions of other types propagate.
    """
    expected = exc_types or (Exception,)

    def comparison() -> Result:
        try:
            f()
        except expected:
            return SUCCESS
        names = ", ".join(t.__name__ for t in expected)
        return failure(f"did not raise {names}")

    return comparison


def equal_multi_line(
    x: str,
    y: str,
    *,
    context: int = 3,
    from_file: str = "left",
    to_file: str = "right",
    differ: LineDiffer = linediff.unified_diff,
) -> Comparison:
    """Succeeds if the two strings are equal.

    If they are not, the failure message is the unified diff between them.
    """

    def comparison() -> Result:
        if x == y:
            return SUCCESS
        try:
            diff = differ(
                linediff.split_lines(x),
                linediff.split_lines(y),
                from_file=from_file,
                to_file=to_file,
                context=context,
            )
        except linediff.DiffError as exc:
            return failure(f"failed to produce diff: {exc}")
        return failure("\n" + diff)

    return comparison


def error(err: BaseException | None, message: str) -> Comparison:
    """Succeeds if *err* is an exception whose message equals *message*."""

    def comparison() -> Result:
        if err is None:
            return failure("expected an error, got nil")
        if str(err) != message:
            return failure(f"expected error {message!r}, got {format_error(err)}")
        return SUCCESS

    return comparison


def error_contains(err: BaseException | None, substring: str) -> Comparison:
    """Succeeds if *err* is an exception whose message contains *substring*."""

    def comparison() -> Result:
        if err is None:
            return failure("expected an error, got nil")
        if substring not in str(err):
            return failure(
                f"expected error to contain {substring!r}, got {format_error(err)}"
            )
        return SUCCESS

    return comparison


def nil(obj: Any) -> Comparison:
    """Succeeds if *obj* is ``None`` or a weak reference to a collected object.

    Use :func:`nil_error` for errors. Use ``length(obj, 0)`` to check that a
    list, mapping or queue is empty.
    """

    def not_nil(value: Any) -> str:
        return f"{value} (type {type_name(value)}) is not nil"

    return is_nil(obj, not_nil)


def is_nil(obj: Any, message_fn: Callable[[Any], str]) -> Comparison:
    """Shared nil check; *message_fn* words the failure for nilable values."""

    def comparison() -> Result:
        if obj is None:
            return SUCCESS
        if kinds.can_be_nil(obj):
            if kinds.is_nil(obj):
                return SUCCESS
            return failure(message_fn(obj))
        return failure(f"{obj} (type {type_name(obj)}) can not be nil")

    return comparison


def evaluate(comparison: Comparison, args: Sequence[str] = ()) -> tuple[bool, str]:
    """Invoke *comparison* once and return ``(passed, message)``."""
    result = comparison()
    if result.success:
        return True, ""
    return False, result.failure_message(args)
