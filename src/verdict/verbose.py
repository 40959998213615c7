"""Debug logging for check runs.

Modules log through ``logging.getLogger(__name__)``, so everything under the
``verdict`` package reaches the handlers installed here on the ``verdict``
logger.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

_FORMAT = "[%(asctime)s] %(name)s: %(message)s"
_DATEFMT = "%Y-%m-%dT%H:%M:%S"


def setup_logger(
    debug_file: Path, verbose: bool = False, logger_name: str = "verdict"
) -> logging.Logger:
    """Attach a debug file handler, and with *verbose* a stderr handler.

    *debug_file* and its parent directories are created. Tests and embedding
    programs pass their own *logger_name* to keep their output apart.

    Raises:
        RuntimeError: If the logger already has handlers, which means a
            previous run did not call :func:`close_logger`.
    """
    logger = logging.getLogger(logger_name)
    if logger.handlers:
        raise RuntimeError(
            f"Logger '{logger_name}' already exists; use a unique logger_name"
        )

    logger.disabled = False
    logger.setLevel(logging.DEBUG)
    formatter = logging.Formatter(fmt=_FORMAT, datefmt=_DATEFMT)

    debug_file.parent.mkdir(parents=True, exist_ok=True)
    handlers: list[logging.Handler] = [logging.FileHandler(debug_file, mode="a")]
    if verbose:
        handlers.append(logging.StreamHandler(sys.stderr))
    for handler in handlers:
        handler.setLevel(logging.DEBUG)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    return logger


def close_logger(logger: logging.Logger) -> None:
    """Detach and close every handler, so the debug file is flushed."""
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)
