"""Tests for the command-line formatting script."""

import io
import sys

import pytest

from scripts import format_script


def _run(monkeypatch, *argv: str) -> None:
    monkeypatch.setattr(sys, "argv", ["format_script.py", *argv])
    format_script.main()


def test_formats_file(monkeypatch, capsys, tmp_path, sample_screenplay):
    path = tmp_path / "draft.txt"
    path.write_text(sample_screenplay, encoding="utf-8")

    _run(monkeypatch, str(path))

    out = capsys.readouterr().out
    assert out.startswith("INT. KITCHEN - NIGHT\n\n")
    assert "CUT TO:" in out


def test_reads_stdin_with_dialogue(monkeypatch, capsys):
    monkeypatch.setattr(sys, "stdin", io.StringIO("JOHN\nHello there, how are you doing today my friend?"))

    _run(monkeypatch, "-", "--dialogue")

    assert capsys.readouterr().out == "JOHN\nHello there, how are you doing\ntoday my friend?\n"


def test_stats_go_to_stderr(monkeypatch, capsys):
    monkeypatch.setattr(sys, "stdin", io.StringIO("int. house - day\n\nJOHN"))

    _run(monkeypatch, "-", "--stats")

    captured = capsys.readouterr()
    assert captured.out == "INT. HOUSE - DAY\n\nJOHN\n"
    assert "character       1" in captured.err
    assert "scene_heading   1" in captured.err


def test_missing_file_exits(monkeypatch, capsys, tmp_path):
    with pytest.raises(SystemExit) as exc_info:
        _run(monkeypatch, str(tmp_path / "missing.txt"))

    assert exc_info.value.code == 1
    assert "Cannot read" in capsys.readouterr().err
