"""Tests for evaluating configured checks."""

from pathlib import Path

import pytest

from verdict.config import CheckFile, Settings, load_config
from verdict.runner import CheckOutcome, build_comparison, run_checks


def _config(*checks, **settings) -> CheckFile:
    return CheckFile(checks=list(checks), settings=Settings(**settings))


def test_run_checks_all_pass(test_logger):
    config = _config(
        {"equal": {"actual": "a", "expected": "a"}},
        {"deep_equal": {"actual": {"k": [1, 2]}, "expected": {"k": [1, 2]}}},
        {"length": {"value": "abc", "expected": 3}},
        {"contains": {"collection": [1, 2, 3], "item": 2}},
        {"nil": {"value": None}},
    )
    outcomes = run_checks(config, test_logger)
    assert [o.passed for o in outcomes] == [True] * 5
    assert [o.message for o in outcomes] == [""] * 5
    assert [o.name for o in outcomes] == [
        "equal[0]",
        "deep_equal[1]",
        "length[2]",
        "contains[3]",
        "nil[4]",
    ]


def test_equal_failure_labels_arguments(test_logger):
    config = _config({"name": "greeting", "equal": {"actual": "hello", "expected": "hi"}})
    [outcome] = run_checks(config, test_logger)
    assert outcome == CheckOutcome(
        name="greeting",
        kind="equal",
        passed=False,
        message="hello (actual str) != hi (expected str)",
    )


def test_deep_equal_options(test_logger):
    config = _config(
        {
            "deep_equal": {
                "actual": [3, 1, 2],
                "expected": [1, 2, 3],
                "sort_sequences": True,
            }
        },
        {
            "deep_equal": {
                "actual": {"a": [], "b": 1.0},
                "expected": {"a": None, "b": 1.01},
                "equate_empty": True,
                "float_tolerance": 0.1,
            }
        },
        {"deep_equal": {"actual": [3, 1, 2], "expected": [1, 2, 3]}},
    )
    outcomes = run_checks(config, test_logger)
    assert [o.passed for o in outcomes] == [True, True, False]
    assert outcomes[2].message.startswith("\n{list[int]}[0]:")


def test_length_and_contains_failures(test_logger):
    config = _config(
        {"length": {"value": 5, "expected": 1}},
        {"contains": {"collection": "hello", "item": 5}},
        {"nil": {"value": 42}},
    )
    messages = [o.message for o in run_checks(config, test_logger)]
    assert messages == [
        "type int does not have a length",
        "string may only contain strings",
        "42 (type int) can not be nil",
    ]


def test_equal_multi_line_uses_settings(tmp_path, test_logger):
    (tmp_path / "a.txt").write_text("one\ntwo\n")
    (tmp_path / "b.txt").write_text("one\nTWO\n")
    config = _config(
        {
            "equal_multi_line": {
                "left": str(tmp_path / "a.txt"),
                "right": str(tmp_path / "b.txt"),
            }
        },
        diff_context=0,
        from_label="expected",
        to_label="actual",
    )
    [outcome] = run_checks(config, test_logger)
    assert outcome.passed is False
    assert outcome.message == "\n--- expected\n+++ actual\n@@ -2 +2 @@\n-two\n+TWO\n"


def test_equal_multi_line_missing_file(tmp_path, test_logger):
    missing = str(tmp_path / "nope.txt")
    config = _config({"equal_multi_line": {"left": missing, "right": missing}})
    [outcome] = run_checks(config, test_logger)
    assert outcome.passed is False
    assert outcome.message == f"{missing} not found"


def test_build_comparison_returns_argument_labels():
    config = _config({"equal": {"actual": 1, "expected": 1}}, {"nil": {}})
    _, args = build_comparison(config.checks[0], config.settings)
    assert args == ("actual", "expected")
    comparison, args = build_comparison(config.checks[1], config.settings)
    assert args == ()
    assert comparison().success is True


def test_outcome_to_dict():
    outcome = CheckOutcome(name="n", kind="nil", passed=True, message="")
    assert outcome.to_dict() == {"name": "n", "kind": "nil", "passed": True, "message": ""}


def _example_check_files() -> list[Path]:
    examples_dir = Path(__file__).resolve().parents[1] / "examples"
    return sorted(p for p in examples_dir.glob("*.yaml") if p.is_file())


@pytest.mark.parametrize("path", _example_check_files(), ids=lambda p: p.name)
def test_example_check_files_pass(path, monkeypatch, test_logger):
    monkeypatch.delenv("GREETING", raising=False)
    outcomes = run_checks(load_config(path), test_logger)
    assert all(o.passed for o in outcomes), [o.to_dict() for o in outcomes if not o.passed]
