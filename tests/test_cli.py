import json

from junitparser import JUnitXml
from typer.testing import CliRunner

from verdict.cli import app

runner = CliRunner()


PASSING = """\
checks:
  - name: greeting
    equal: {actual: hello, expected: hello}
  - contains: {collection: [1, 2, 3], item: 2}
"""

FAILING = """\
checks:
  - name: greeting
    equal: {actual: hello, expected: hi}
  - name: size
    length: {value: [1, 2], expected: 2}
"""


def _debug_log(tmp_path) -> list[str]:
    return ["--debug-log", str(tmp_path / "debug.log")]


def test_check_passing_file(tmp_yaml, tmp_path):
    path = tmp_yaml(PASSING)
    result = runner.invoke(app, ["check", str(path), *_debug_log(tmp_path)])
    assert result.exit_code == 0
    assert "PASS greeting" in result.output
    assert "PASS contains[1]" in result.output
    assert "2 checks, 0 failed" in result.output


def test_check_failing_file(tmp_yaml, tmp_path):
    path = tmp_yaml(FAILING)
    result = runner.invoke(app, ["check", str(path), *_debug_log(tmp_path)])
    assert result.exit_code == 1
    assert "FAIL greeting" in result.output
    assert "    hello (actual str) != hi (expected str)" in result.output
    assert "PASS size" in result.output
    assert "2 checks, 1 failed" in result.output


def test_check_writes_debug_log(tmp_yaml, tmp_path):
    path = tmp_yaml(FAILING)
    runner.invoke(app, ["check", str(path), *_debug_log(tmp_path)])
    content = (tmp_path / "debug.log").read_text()
    assert "Evaluating equal check: greeting" in content


def test_check_can_be_run_twice(tmp_yaml, tmp_path):
    path = tmp_yaml(PASSING)
    first = runner.invoke(app, ["check", str(path), *_debug_log(tmp_path)])
    second = runner.invoke(app, ["check", str(path), *_debug_log(tmp_path)])
    assert first.exit_code == 0
    assert second.exit_code == 0


def test_check_writes_junit(tmp_yaml, tmp_path):
    path = tmp_yaml(FAILING)
    junit = tmp_path / "out" / "junit.xml"
    result = runner.invoke(
        app, ["check", str(path), "--junit", str(junit), *_debug_log(tmp_path)]
    )
    assert result.exit_code == 1
    assert junit.exists()
    suite = list(JUnitXml.fromfile(str(junit)))[0]
    assert suite.name == "checks"
    assert suite.failures == 1


def test_check_missing_file(tmp_path):
    result = runner.invoke(app, ["check", str(tmp_path / "nonexistent.yaml")])
    assert result.exit_code != 0


def test_check_invalid_file(tmp_yaml, tmp_path):
    path = tmp_yaml("checks: []\n")
    result = runner.invoke(app, ["check", str(path), *_debug_log(tmp_path)])
    assert result.exit_code == 1
    assert "Error" in result.output


def test_diff_identical_files(tmp_path):
    left = tmp_path / "left.txt"
    right = tmp_path / "right.txt"
    left.write_text("same\n")
    right.write_text("same\n")
    result = runner.invoke(app, ["diff", str(left), str(right)])
    assert result.exit_code == 0
    assert "No differences." in result.output


def test_diff_different_files(tmp_path):
    left = tmp_path / "left.txt"
    right = tmp_path / "right.txt"
    left.write_text("a\nb\n")
    right.write_text("a\nc\n")
    result = runner.invoke(app, ["diff", str(left), str(right), "--context", "0"])
    assert result.exit_code == 1
    assert f"--- {left}" in result.output
    assert "-b\n+c\n" in result.output


def test_diff_missing_file(tmp_path):
    left = tmp_path / "left.txt"
    left.write_text("a\n")
    result = runner.invoke(app, ["diff", str(left), str(tmp_path / "missing.txt")])
    assert result.exit_code == 1


def test_schema_prints_json():
    result = runner.invoke(app, ["schema"])
    assert result.exit_code == 0
    schema = json.loads(result.output)
    assert "checks" in schema["properties"]


def test_schema_writes_file(tmp_path):
    out = tmp_path / "schemas" / "verdict.schema.json"
    result = runner.invoke(app, ["schema", "--out", str(out)])
    assert result.exit_code == 0
    assert out.exists()
    assert json.loads(out.read_text())["title"] == "verdict check file"
