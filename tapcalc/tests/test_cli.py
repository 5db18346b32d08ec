"""Tests for the tapcalc command line."""

import json

import pytest
from typer.testing import CliRunner

from tapcalc.__main__ import app

runner = CliRunner()


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for var in ("TAPCALC_TRACE", "TAPCALC_WIDTH", "TAPCALC_PROMPT"):
        monkeypatch.delenv(var, raising=False)


def last_word(output: str) -> str:
    """Final display echoed on stdout; prompts and tables go to stderr."""
    return output.split()[-1]


# --- press ---

def test_press_separate_args():
    result = runner.invoke(app, ["press", "5", "+", "3", "+", "2", "="])
    assert result.exit_code == 0
    assert last_word(result.output) == "10"


def test_press_compact_arg():
    result = runner.invoke(app, ["press", "12.5*2="])
    assert result.exit_code == 0
    assert last_word(result.output) == "25"


def test_press_division_by_zero():
    result = runner.invoke(app, ["press", "5/0="])
    assert result.exit_code == 0
    assert last_word(result.output) == "Infinity"


def test_press_invalid_key():
    result = runner.invoke(app, ["press", "5", "^", "2"])
    assert result.exit_code == 1
    assert "Unknown key" in result.output


def test_press_trace_shows_tape():
    result = runner.invoke(app, ["press", "5+3=", "--trace"])
    assert result.exit_code == 0
    assert "Tape" in result.output
    assert "awaiting-operand" in result.output


def test_press_trace_from_env(monkeypatch):
    monkeypatch.setenv("TAPCALC_TRACE", "1")
    result = runner.invoke(app, ["press", "7"])
    assert "Tape" in result.output


def test_press_save_and_replay(tmp_path):
    path = tmp_path / "tape.json"
    result = runner.invoke(app, ["press", "9", "sqrt", "x", "4", "=", "--save", str(path)])
    assert result.exit_code == 0
    assert json.loads(path.read_text(encoding="utf-8"))["final_display"] == "12"

    result = runner.invoke(app, ["replay", str(path)])
    assert result.exit_code == 0
    assert "Replay matches" in result.output
    assert last_word(result.output) == "12"


def test_press_save_to_directory_fails_cleanly(tmp_path):
    result = runner.invoke(app, ["press", "5", "--save", str(tmp_path)])
    assert result.exit_code == 1
    assert "cannot write tape" in result.output
    assert not isinstance(result.exception, OSError)


# --- replay ---

def test_replay_mismatch(tmp_path):
    path = tmp_path / "tape.json"
    path.write_text(json.dumps({"entries": [
        {"key": "2", "display": "2"},
        {"key": "+", "display": "2"},
        {"key": "2", "display": "2"},
        {"key": "=", "display": "5"},
    ]}), encoding="utf-8")
    result = runner.invoke(app, ["replay", str(path)])
    assert result.exit_code == 1
    assert "mismatches" in result.output


def test_replay_bad_file(tmp_path):
    result = runner.invoke(app, ["replay", str(tmp_path / "missing.json")])
    assert result.exit_code == 1
    assert "Error" in result.output


def test_replay_binary_file(tmp_path):
    path = tmp_path / "tape.json"
    path.write_bytes(b"\xff\xfe{}")
    result = runner.invoke(app, ["replay", str(path)])
    assert result.exit_code == 1
    assert "Error" in result.output
    assert not isinstance(result.exception, UnicodeDecodeError)


# --- keys ---

def test_keys_lists_keypad():
    result = runner.invoke(app, ["keys"])
    assert result.exit_code == 0
    assert "Keypad" in result.output
    assert "sqrt" in result.output


# --- repl ---

def test_repl_session():
    result = runner.invoke(app, ["repl"], input="5 +\n3 =\n=\nq\n")
    assert result.exit_code == 0
    assert last_word(result.output) == "11"


def test_repl_recovers_from_bad_key():
    result = runner.invoke(app, ["repl"], input="2 * ^\n4 * 2 =\n")
    assert result.exit_code == 0
    assert "Unknown key" in result.output
    assert last_word(result.output) == "8"
