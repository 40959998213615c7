"""Outcome of a single comparison."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping, Sequence

from verdict.format import render_template


class Result(ABC):
    """Either the shared success marker or a failure with an explanation."""

    success: bool

    @abstractmethod
    def failure_message(self, args: Sequence[str] = ()) -> str:
        """Text explaining the failure.

        Args:
            args: Source text of the arguments at the call site, when the
                caller knows it. Only templated results use it.
        """
        ...


@dataclass(frozen=True)
class StringResult(Result):
    """A result with a fixed message."""

    success: bool
    message: str = ""

    def failure_message(self, args: Sequence[str] = ()) -> str:
        return self.message


@dataclass(frozen=True)
class TemplatedResult(Result):
    """A failed result rendered lazily from a template and captured data."""

    template: str
    data: Mapping[str, Any] = field(default_factory=dict)
    success: bool = field(default=False, init=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "data", MappingProxyType(dict(self.data)))

    def failure_message(self, args: Sequence[str] = ()) -> str:
        return render_template(self.template, self.data, args)


SUCCESS = StringResult(success=True)


def success() -> Result:
    return SUCCESS


def failure(message: str) -> Result:
    return StringResult(success=False, message=message)


def failure_template(template: str, data: Mapping[str, Any]) -> Result:
    """Create a failure rendered from *template* when it is reported.

    The template is a jinja2 template that sees ``data`` and ``args``, plus the
    ``typename`` and ``verbose`` filters.
    """
    return TemplatedResult(template=template, data=data)


def result_from_error(err: BaseException | None) -> Result:
    if err is None:
        return SUCCESS
    return failure(str(err))


def to_result(ok: bool, message: str) -> Result:
    if ok:
        return SUCCESS
    return failure(message)
