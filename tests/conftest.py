"""Pytest configuration and fixtures."""

import logging
import textwrap
from pathlib import Path

import pytest

from verdict.verbose import close_logger


@pytest.fixture(autouse=True)
def cleanup_loggers():
    """Detach handlers from verdict loggers after each test so names can be reused."""
    yield

    for name in list(logging.Logger.manager.loggerDict.keys()):
        if not name.startswith("verdict"):
            continue
        close_logger(logging.getLogger(name))


@pytest.fixture()
def tmp_yaml(tmp_path):
    """Helper that writes YAML content to a temp file and returns its path."""

    def _write(content: str, name: str = "checks.yaml") -> Path:
        p = tmp_path / name
        p.write_text(textwrap.dedent(content))
        return p

    return _write


@pytest.fixture
def test_logger():
    logger = logging.getLogger("verdict_test")
    logger.setLevel(logging.DEBUG)
    return logger
