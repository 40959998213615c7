"""Structural diff of two values, reported as a list of differing paths.

The report lists one entry per difference::

    {dict[str, list]}['a'][1]:
    	-: 2
    	+: 3

An empty report means the values are equal under the given options.
"""

from __future__ import annotations

import dataclasses
import math
from collections.abc import Mapping, Sequence, Set
from typing import Any, Callable, Iterable

from verdict.format import type_name
from verdict.kinds import SCALAR_SEQUENCES, type_label, typed_members

UNEXPORTED_FIELD_PREFIX = "cannot handle unexported field"


class UnexportedFieldError(Exception):
    """Raised when a private attribute is reached without an option covering it."""


class _Missing:
    def __repr__(self) -> str:
        return "<non-existent>"


MISSING = _Missing()


class Option:
    """Base class for diff customisations."""


class IgnoreFields(Option):
    """Skip the named attributes on instances of *cls*."""

    def __init__(self, cls: type, *names: str):
        self.cls = cls
        self.names = frozenset(names)


class AllowUnexported(Option):
    """Compare private (``_``-prefixed) attributes of the given classes."""

    def __init__(self, *classes: type):
        self.classes = classes


class IgnoreUnexported(Option):
    """Skip private (``_``-prefixed) attributes of the given classes."""

    def __init__(self, *classes: type):
        self.classes = classes


class Comparer(Option):
    """Decide equality with *func* when both values are instances of *types*."""

    def __init__(self, func: Callable[[Any, Any], bool], types: tuple[type, ...] | type | None = None):
        self.func = func
        self.types = types

    def applies(self, x: Any, y: Any) -> bool:
        if self.types is None:
            return True
        return isinstance(x, self.types) and isinstance(y, self.types)


class Transformer(Option):
    """Replace values of *types* with ``func(value)`` before comparing them."""

    def __init__(self, func: Callable[[Any], Any], types: tuple[type, ...] | type, name: str | None = None):
        self.func = func
        self.types = types
        self.name = name or getattr(func, "__name__", "transform")

    def applies(self, x: Any, y: Any) -> bool:
        return isinstance(x, self.types) and isinstance(y, self.types)


class EquateEmpty(Option):
    """Treat ``None`` and empty containers as equal to each other."""


class EquateApprox(Option):
    """Compare floats with a relative and absolute tolerance."""

    def __init__(self, rel: float = 0.0, abs: float = 0.0):
        if rel < 0 or abs < 0:
            raise ValueError("tolerances must not be negative")
        self.rel = rel
        self.abs = abs


class SortSequences(Option):
    """Compare lists and tuples regardless of element order."""

    def __init__(self, key: Callable[[Any], Any] | None = None):
        self.key = key


def _is_empty(value: Any) -> bool:
    if value is None:
        return True
    return isinstance(value, (Mapping, Sequence, Set)) and not isinstance(value, str) and len(value) == 0


def _is_walked_sequence(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, *SCALAR_SEQUENCES))


def _object_fields(value: Any) -> list[str] | None:
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return [f.name for f in dataclasses.fields(value)]
    if isinstance(value, BaseException):
        return ["args", *(name for name in vars(value) if not name.startswith("__"))]
    if callable(value):
        return None
    if type(value).__eq__ is object.__eq__ and hasattr(value, "__dict__"):
        return list(vars(value))
    return None


class _Differ:
    def __init__(self, options: Iterable[Option]):
        self.ignored: list[IgnoreFields] = []
        self.allowed: tuple[type, ...] = ()
        self.skipped: tuple[type, ...] = ()
        self.comparers: list[Comparer] = []
        self.transformers: list[Transformer] = []
        self.equate_empty = False
        self.approx: EquateApprox | None = None
        self.sort: SortSequences | None = None
        for option in options:
            self._add(option)
        self.entries: list[tuple[str, Any, Any]] = []
        self._seen: set[tuple[int, int]] = set()

    def _add(self, option: Option) -> None:
        if isinstance(option, IgnoreFields):
            self.ignored.append(option)
        elif isinstance(option, AllowUnexported):
            self.allowed += option.classes
        elif isinstance(option, IgnoreUnexported):
            self.skipped += option.classes
        elif isinstance(option, Comparer):
            self.comparers.append(option)
        elif isinstance(option, Transformer):
            self.transformers.append(option)
        elif isinstance(option, EquateEmpty):
            self.equate_empty = True
        elif isinstance(option, EquateApprox):
            self.approx = option
        elif isinstance(option, SortSequences):
            self.sort = option
        else:
            raise TypeError(f"unsupported diff option: {option!r}")

    def report(self, path: str, x: Any, y: Any) -> None:
        self.entries.append((path, x, y))

    def compare(self, path: str, x: Any, y: Any, transform: bool = True) -> None:
        # A transformer is not applied again to its own output.
        for transformer in self.transformers if transform else ():
            if transformer.applies(x, y):
                self.compare(
                    f"{path}.{transformer.name}()", transformer.func(x), transformer.func(y), False
                )
                return
        for comparer in self.comparers:
            if comparer.applies(x, y):
                if not comparer.func(x, y):
                    self.report(path, x, y)
                return
        if self.equate_empty and _is_empty(x) and _is_empty(y):
            return
        if type(x) is not type(y):
            self.report(path, _Typed(x), _Typed(y))
            return
        if self.approx is not None and isinstance(x, float):
            if not math.isclose(x, y, rel_tol=self.approx.rel, abs_tol=self.approx.abs):
                self.report(path, x, y)
            return

        if isinstance(x, (Mapping, Set)) or _is_walked_sequence(x) or _object_fields(x) is not None:
            pair = (id(x), id(y))
            if pair in self._seen:
                return
            self._seen.add(pair)

        if isinstance(x, Mapping):
            self._compare_mapping(path, x, y)
        elif isinstance(x, Set):
            self._compare_set(path, x, y)
        elif _is_walked_sequence(x):
            self._compare_sequence(path, x, y)
        elif _object_fields(x) is not None:
            self._compare_object(path, x, y)
        elif not x == y:
            self.report(path, x, y)

    def _compare_mapping(self, path: str, x: Mapping, y: Mapping) -> None:
        x_keys, y_keys = typed_members(x), typed_members(y)
        for key, value in x.items():
            if (type(key), key) in y_keys:
                self.compare(f"{path}[{key!r}]", value, y[key])
            else:
                self.report(f"{path}[{key!r}]", value, MISSING)
        for key, value in y.items():
            if (type(key), key) not in x_keys:
                self.report(f"{path}[{key!r}]", MISSING, value)

    def _compare_set(self, path: str, x: Set, y: Set) -> None:
        x_members, y_members = typed_members(x), typed_members(y)
        for _, member in sorted(x_members - y_members, key=repr):
            self.report(f"{path}[{member!r}]", member, MISSING)
        for _, member in sorted(y_members - x_members, key=repr):
            self.report(f"{path}[{member!r}]", MISSING, member)

    def _compare_sequence(self, path: str, x: Sequence, y: Sequence) -> None:
        xs, ys = list(x), list(y)
        if self.sort is not None and isinstance(x, (list, tuple)):
            xs = sorted(xs, key=self.sort.key)
            ys = sorted(ys, key=self.sort.key)
        for index in range(max(len(xs), len(ys))):
            item_path = f"{path}[{index}]"
            if index >= len(ys):
                self.report(item_path, xs[index], MISSING)
            elif index >= len(xs):
                self.report(item_path, MISSING, ys[index])
            else:
                self.compare(item_path, xs[index], ys[index])

    def _compare_object(self, path: str, x: Any, y: Any) -> None:
        names = _object_fields(x) or []
        names += [name for name in (_object_fields(y) or []) if name not in names]
        cls = type(x)
        for name in names:
            if any(isinstance(x, opt.cls) and name in opt.names for opt in self.ignored):
                continue
            if name.startswith("_"):
                if issubclass(cls, self.skipped):
                    continue
                if not issubclass(cls, self.allowed):
                    raise UnexportedFieldError(
                        f"{UNEXPORTED_FIELD_PREFIX} at {path}.{name}:\n"
                        f'\t"{cls.__module__}".{cls.__qualname__}\n'
                        "consider using AllowUnexported or IgnoreUnexported"
                    )
            x_value = getattr(x, name, MISSING)
            y_value = getattr(y, name, MISSING)
            if x_value is MISSING or y_value is MISSING:
                self.report(f"{path}.{name}", x_value, y_value)
            else:
                self.compare(f"{path}.{name}", x_value, y_value)

    def render(self) -> str:
        lines = []
        for path, x, y in self.entries:
            lines.append(f"{path}:\n\t-: {x!r}\n\t+: {y!r}\n")
        return "".join(lines)


class _Typed:
    """Shows a value together with its type when types differ."""

    def __init__(self, value: Any):
        self.value = value

    def __repr__(self) -> str:
        if self.value is None:
            return "None"
        return f"{self.value!r} ({type_name(self.value)})"


def diff(x: Any, y: Any, *options: Option) -> str:
    """Return the report of differences between *x* and *y*, empty if equal.

    Raises:
        UnexportedFieldError: If a private attribute is reached without an
            ``AllowUnexported`` or ``IgnoreUnexported`` option for its class.
    """
    differ = _Differ(options)
    differ.compare(f"{{{type_label(x)}}}", x, y)
    return differ.render()
