"""Rendering of failure messages and verbose value formatting."""

from __future__ import annotations

import logging
import traceback
from typing import Any, Mapping, Sequence

from jinja2 import Environment, TemplateError

logger = logging.getLogger(__name__)


def type_name(value: Any) -> str:
    """Return the short runtime type name of *value*."""
    return type(value).__name__


def format_error(err: Any) -> str:
    """Format an error verbosely.

    Exceptions that were raised carry a traceback, which is included.
    Exceptions that were only constructed are shown as ``Type: message``.
    Anything else falls back to ``repr``.
    """
    if isinstance(err, BaseException):
        if err.__traceback__ is not None:
            lines = traceback.format_exception(type(err), err, err.__traceback__)
            return "".join(lines).rstrip("\n")
        return f"{type(err).__name__}: {err}"
    return repr(err)


def _build_environment() -> Environment:
    env = Environment(autoescape=False, keep_trailing_newline=False)
    env.filters["typename"] = type_name
    env.filters["verbose"] = format_error
    return env


_env = _build_environment()


def render_template(
    template: str, data: Mapping[str, Any], args: Sequence[str] = ()
) -> str:
    """Render a failure template against *data* and call-site *args*.

    Templates see ``data`` (the captured values) and ``args`` (the source text
    of the call-site arguments, possibly empty). Missing ``args`` entries are
    undefined and falsy, so templates can test for them with ``{% if %}``.
    """
    try:
        return _env.from_string(template).render(data=data, args=list(args))
    except TemplateError as exc:
        logger.debug(f"Failed to render template {template!r}: {exc}")
        return f"failed to render failure message: {exc}"
