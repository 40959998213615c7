"""Runtime kinds of compared values and the capability checks on them."""

from __future__ import annotations

import dataclasses
import datetime
import decimal
import numbers
import uuid
import weakref
from collections.abc import Mapping, Sequence, Set
from enum import Enum
from typing import Any, Iterable

from verdict.format import type_name


class Kind(str, Enum):
    NONE = "none"
    STRING = "string"
    SEQUENCE = "sequence"
    MAPPING = "mapping"
    SET = "set"
    REFERENCE = "reference"
    VALUE = "value"


_VALUE_TYPES = (
    numbers.Number,
    decimal.Decimal,
    Enum,
    datetime.date,
    datetime.time,
    datetime.timedelta,
    uuid.UUID,
)

# Sequences and sets that are values: they have no identity worth checking
# for nil and are never None.
_IMMUTABLE_CONTAINERS = (tuple, bytes, range, frozenset)

# Sequences whose elements are not walked by structural comparisons.
SCALAR_SEQUENCES = (bytes, bytearray, range, memoryview)


def kind_of(value: Any) -> Kind:
    """Classify *value* into one of the kinds comparisons dispatch on."""
    if value is None:
        return Kind.NONE
    if isinstance(value, str):
        return Kind.STRING
    if isinstance(value, Mapping):
        return Kind.MAPPING
    if isinstance(value, Set):
        return Kind.SET
    if isinstance(value, Sequence):
        return Kind.SEQUENCE
    if isinstance(value, _VALUE_TYPES):
        return Kind.VALUE
    return Kind.REFERENCE


def has_length(value: Any) -> bool:
    """True if *value* exposes a length, either ``len()`` or a queue size."""
    if hasattr(type(value), "__len__"):
        return True
    return callable(getattr(value, "qsize", None))


def length_of(value: Any) -> int:
    """Length of *value*; queues report the number of items waiting.

    Raises:
        TypeError: If *value* has no notion of length.
    """
    if hasattr(type(value), "__len__"):
        return len(value)
    qsize = getattr(value, "qsize", None)
    if callable(qsize):
        return qsize()
    raise TypeError(f"object of type '{type_name(value)}' has no len()")


def can_be_nil(value: Any) -> bool:
    """True for references that may stand in for "nothing".

    Scalars, strings and immutable containers are values and can never be
    nil.
    """
    if kind_of(value) in (Kind.VALUE, Kind.STRING):
        return False
    return not isinstance(value, _IMMUTABLE_CONTAINERS)


def is_nil(value: Any) -> bool:
    """The nil flag: ``None`` itself, or a weak reference whose referent is gone."""
    if value is None:
        return True
    if isinstance(value, weakref.ref):
        return value() is None
    return False


def member_types(collection: Mapping | Set) -> set[type]:
    """Exact runtime types of the keys of a mapping or members of a set."""
    return {type(member) for member in collection}


def _union(types: Iterable[type]) -> str:
    names = sorted({t.__name__ for t in types})
    return " | ".join(names) if names else "?"


def type_label(value: Any) -> str:
    """Type name of *value*, parameterised by member types for collections.

    ``{"a": 1}`` is labelled ``dict[str, int]`` and ``{1, 2}`` ``set[int]``.
    """
    name = type_name(value)
    kind = kind_of(value)
    if kind is Kind.MAPPING and value:
        return f"{name}[{_union(map(type, value.keys()))}, {_union(map(type, value.values()))}]"
    if kind is Kind.SET and value:
        return f"{name}[{_union(map(type, value))}]"
    if kind is Kind.SEQUENCE and value and not isinstance(value, SCALAR_SEQUENCES):
        return f"{name}[{_union(map(type, value))}]"
    return name


def _uses_default_eq(value: Any) -> bool:
    return type(value).__eq__ is object.__eq__


def _attributes(value: Any) -> dict[str, Any] | None:
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {f.name: getattr(value, f.name) for f in dataclasses.fields(value)}
    if isinstance(value, BaseException):
        attrs = {k: v for k, v in vars(value).items() if not k.startswith("__")}
        return {"args": value.args, **attrs}
    if callable(value):
        return None
    if _uses_default_eq(value) and hasattr(value, "__dict__"):
        return vars(value)
    return None


def typed_members(items: Iterable[Any]) -> set[tuple[type, Any]]:
    """Pair each item with its exact type, so ``1`` and ``1.0`` stay distinct."""
    return {(type(item), item) for item in items}


def deep_equal(x: Any, y: Any) -> bool:
    """Recursive structural equality.

    Values must have exactly the same type at every level, so ``1`` and
    ``1.0`` differ, and so do the mapping keys ``1`` and ``1.0``. Mappings
    compare by key, sequences element-wise, exceptions by ``args`` and
    attributes, and instances without their own ``__eq__`` by their
    attributes. Other values fall back to ``==``.
    """
    return _deep_equal(x, y, set())


def _deep_equal(x: Any, y: Any, seen: set[tuple[int, int]]) -> bool:
    if type(x) is not type(y):
        return False
    if x is y:
        return True

    kind = kind_of(x)
    if kind in (Kind.MAPPING, Kind.SEQUENCE, Kind.REFERENCE):
        pair = (id(x), id(y))
        if pair in seen:
            return True
        seen.add(pair)

    if kind is Kind.MAPPING:
        if len(x) != len(y):
            return False
        if typed_members(x) != typed_members(y):
            return False
        return all(_deep_equal(value, y[key], seen) for key, value in x.items())

    if kind is Kind.SET:
        return typed_members(x) == typed_members(y)

    if kind is Kind.SEQUENCE and not isinstance(x, SCALAR_SEQUENCES):
        if len(x) != len(y):
            return False
        return all(_deep_equal(a, b, seen) for a, b in zip(x, y))

    if kind is Kind.REFERENCE:
        x_attrs, y_attrs = _attributes(x), _attributes(y)
        if x_attrs is not None and y_attrs is not None:
            return _deep_equal(x_attrs, y_attrs, seen)

    return bool(x == y)
