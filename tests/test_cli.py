"""Tests for zilo.cli -- argument parsing and exit codes."""

from __future__ import annotations

import pytest

from zilo.cli import main, parse_args
from zilo.keys import ctrl_key
from zilo.render import CLEAR_SCREEN, CURSOR_HOME
from zilo.terminal import TerminalError

from .virtual_terminal import VirtualTerminal

QUIT = bytes([ctrl_key("q")])


@pytest.fixture(autouse=True)
def clean_env(monkeypatch) -> None:
    for name in ("ZILO_LOG_FILE", "ZILO_LOG_LEVEL", "ZILO_WRITE_LOG"):
        monkeypatch.delenv(name, raising=False)


class BrokenTerminal(VirtualTerminal):
    """Terminal whose attribute call fails."""

    def enable_raw_mode(self) -> None:
        raise TerminalError("tcgetattr", OSError(25, "Inappropriate ioctl for device"))


class TestParseArgs:
    def test_no_arguments(self) -> None:
        args = parse_args([])
        assert args.filename is None
        assert args.log_file is None
        assert args.log_level is None

    def test_filename(self) -> None:
        assert parse_args(["notes.txt"]).filename == "notes.txt"

    def test_log_options(self) -> None:
        args = parse_args(["--log-file", "/tmp/z.log", "--log-level", "debug", "a.txt"])
        assert args.log_file == "/tmp/z.log"
        assert args.log_level == "debug"
        assert args.filename == "a.txt"

    def test_rejects_unknown_level(self) -> None:
        with pytest.raises(SystemExit):
            parse_args(["--log-level", "loud"])


class TestMain:
    """Exit status and diagnostics."""

    def test_quit_exits_zero(self, tmp_path) -> None:
        path = tmp_path / "a.txt"
        path.write_bytes(b"text\n")
        term = VirtualTerminal(script=QUIT)
        assert main([str(path)], terminal=term) == 0
        assert term.restore_count == 1

    def test_empty_buffer_without_filename(self) -> None:
        term = VirtualTerminal(script=QUIT)
        assert main([], terminal=term) == 0
        assert b"[No Name] - 0 lines" in term.writes[0]

    def test_missing_file_exits_nonzero(self, tmp_path, capsys) -> None:
        path = tmp_path / "missing.txt"
        term = VirtualTerminal(script=QUIT)
        assert main([str(path)], terminal=term) == 1
        assert term.restore_count == 1
        err = capsys.readouterr().err
        assert err == f"zilo: {path}: No such file or directory\n"
        # Only the screen clear, no frame.
        assert term.writes == [CLEAR_SCREEN + CURSOR_HOME]

    def test_terminal_failure_exits_nonzero(self, capsys) -> None:
        term = BrokenTerminal(script=QUIT)
        assert main([], terminal=term) == 1
        assert capsys.readouterr().err == "zilo: tcgetattr: Inappropriate ioctl for device\n"
