from __future__ import annotations

from pathlib import Path

import orjson
import pytest
from typer.testing import CliRunner

from qasteps.cli import app

runner = CliRunner()


@pytest.fixture(autouse=True)
def quiet_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LOG_LEVEL", "WARNING")
    monkeypatch.setenv("LOG_DIR", str(tmp_path / "logs"))
    monkeypatch.delenv("KEYWORDS_PATH", raising=False)
    monkeypatch.delenv("PARSE_WORKERS", raising=False)


def test_parse_json_output() -> None:
    result = runner.invoke(app, ["parse", "1. Click the 'Login' button\nwait: 2000", "--json"])
    assert result.exit_code == 0, result.output
    payload = orjson.loads(result.stdout)
    assert payload == [
        {"raw": "Click the 'Login' button", "type": "click", "value": "Login"},
        {"raw": "wait: 2000", "type": "wait", "timeout_ms": 2000},
    ]


def test_parse_from_file_with_keywords(tmp_path: Path) -> None:
    steps = tmp_path / "steps.txt"
    steps.write_text("- klick 'Save'\r\n- Navigate to https://example.com\r\n", encoding="utf-8")
    keywords = tmp_path / "keywords.json"
    keywords.write_text('{"actions": {"click": ["klick"]}}', encoding="utf-8")

    result = runner.invoke(app, ["parse", "--file", str(steps), "--keywords", str(keywords), "--workers", "2"])
    assert result.exit_code == 0, result.output
    assert "Parsed steps: 2" in result.stdout
    assert "#1 click value='Save'" in result.stdout
    assert "#2 unknown" in result.stdout


def test_parse_missing_file_is_bad_parameter(tmp_path: Path) -> None:
    result = runner.invoke(app, ["parse", "--file", str(tmp_path / "nope.txt")])
    assert result.exit_code == 2


def test_parse_invalid_keywords_is_bad_parameter(tmp_path: Path) -> None:
    keywords = tmp_path / "keywords.json"
    keywords.write_text("{oops", encoding="utf-8")
    result = runner.invoke(app, ["parse", "Click 'A'", "--keywords", str(keywords)])
    assert result.exit_code == 2


def test_parse_reads_stdin() -> None:
    result = runner.invoke(app, ["parse", "--json"], input="Scroll down\n")
    assert result.exit_code == 0, result.output
    assert orjson.loads(result.stdout) == [{"raw": "Scroll down", "type": "scroll", "scroll_target": "down"}]


def test_lint_exit_codes() -> None:
    ok = runner.invoke(app, ["lint", "Click 'Login'"])
    assert ok.exit_code == 0
    assert "No problems found" in ok.stdout

    bad = runner.invoke(app, ["lint", "Frobnicate the widget", "--json"])
    assert bad.exit_code == 1
    problems = orjson.loads(bad.stdout)
    assert problems[0]["error"] == "[Step 1] Unrecognised action"
