"""JUnit XML report, one test case per check."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable

from junitparser import Failure, JUnitXml, TestCase, TestSuite

from verdict.runner import CheckOutcome


def _summary(message: str) -> str:
    """First non-blank line of a failure message."""
    for line in message.splitlines():
        if line.strip():
            return line.strip()
    return ""


def write_junit(
    junit_path: Path, outcomes: Iterable[CheckOutcome], suite_name: str = "verdict"
) -> Path:
    """Write junit.xml with one test case per check outcome, return path."""
    xml = JUnitXml()
    suite = TestSuite(suite_name)

    for outcome in outcomes:
        case = TestCase(outcome.name)
        case.classname = outcome.kind
        if not outcome.passed:
            failure = Failure(_summary(outcome.message))
            failure.text = outcome.message
            case.result = [failure]
        suite.add_testcase(case)

    # Use append (not +=) to preserve suite properties
    xml.append(suite)

    junit_path.parent.mkdir(parents=True, exist_ok=True)
    xml.write(str(junit_path), pretty=True)
    return junit_path
