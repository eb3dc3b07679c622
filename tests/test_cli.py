"""Tests for the command line entry point."""

import logging
from unittest.mock import patch

import pytest

from fileviewer.__main__ import UsageError, configure_logging, main, parse_args
from fileviewer.errors import DocumentLoadError


def test_parse_filename_only():
    options = parse_args(["notes.txt"])
    assert options == {
        "filename": "notes.txt",
        "gutter_width": None,
        "textual": False,
        "log_file": None,
    }


def test_parse_all_options():
    options = parse_args(["--gutter", "4", "--textual", "--log", "/tmp/fv.log", "notes.txt"])
    assert options["gutter_width"] == 4
    assert options["textual"] is True
    assert options["log_file"] == "/tmp/fv.log"
    assert options["filename"] == "notes.txt"


@pytest.mark.parametrize("args", [
    [],
    ["--gutter"],
    ["--gutter", "wide", "a.txt"],
    ["--gutter", "-1", "a.txt"],
    ["--bogus", "a.txt"],
    ["a.txt", "b.txt"],
])
def test_parse_errors(args):
    with pytest.raises(UsageError):
        parse_args(args)


def test_version(capsys):
    assert main(["--version"]) == 0
    assert capsys.readouterr().out.strip()


def test_usage_error_exit_code(capsys):
    assert main([]) == 2
    err = capsys.readouterr().err
    assert "usage:" in err


def test_load_error_exit_code(capsys):
    with patch("fileviewer.__main__.configure_logging"):
        with patch("fileviewer.app.run_viewer",
                   side_effect=DocumentLoadError("missing.txt", FileNotFoundError("gone"))):
            assert main(["missing.txt"]) == 1
    assert "missing.txt" in capsys.readouterr().err


def test_runs_terminal_viewer():
    with patch("fileviewer.__main__.configure_logging"):
        with patch("fileviewer.app.run_viewer") as mock_run:
            assert main(["--gutter", "3", "notes.txt"]) == 0
    assert mock_run.call_args.args == ("notes.txt",)
    assert mock_run.call_args.kwargs["gutter_width"] == 3


def test_runs_textual_viewer():
    with patch("fileviewer.__main__.configure_logging"):
        with patch("fileviewer.textual_app.run_textual") as mock_run:
            assert main(["--textual", "notes.txt"]) == 0
    mock_run.assert_called_once_with("notes.txt", gutter_width=None)


def test_configure_logging_to_file(tmp_path):
    root = logging.getLogger()
    saved = root.handlers[:]
    saved_level = root.level
    root.handlers.clear()
    try:
        log_file = tmp_path / "viewer.log"
        configure_logging(str(log_file))
        logging.getLogger("fileviewer.test").debug("hello log")
        for handler in root.handlers:
            handler.flush()
        assert "hello log" in log_file.read_text()
    finally:
        for handler in root.handlers:
            handler.close()
        root.handlers[:] = saved
        root.setLevel(saved_level)
