"""Tests for the terminal tool."""

from __future__ import annotations

import pytest

import cli
from core import random_source
from core.password_gen import SIMILAR, SPECIAL


def _run(capsys, *argv, controller=None):
    code = cli.main(list(argv), controller=controller)
    out, err = capsys.readouterr()
    return code, out.splitlines(), err


class TestOutput:
    def test_default(self, capsys):
        code, lines, _ = _run(capsys)
        assert code == cli.EXIT_SUCCESS
        assert len(lines) == 2
        assert len(lines[0]) == 16
        assert lines[1].startswith("Strength: ") and "/100 (" in lines[1]

    def test_short_length_raised_to_eight(self, capsys):
        code, lines, err = _run(capsys, "-l", "4")
        assert code == cli.EXIT_SUCCESS
        assert len(lines[0]) == 8
        assert "not recommended" in err

    def test_digits_only(self, capsys):
        _, lines, _ = _run(capsys, "-d", "-l", "10")
        assert lines[0].isdigit() and len(lines[0]) == 10

    def test_upper_only(self, capsys):
        _, lines, _ = _run(capsys, "-u")
        assert lines[0].isalpha() and lines[0].isupper()

    @pytest.mark.parametrize("flag", ["-s", "-a"])
    def test_no_special(self, capsys, flag):
        _, lines, _ = _run(capsys, flag, "-l", "40")
        assert not any(c in SPECIAL for c in lines[0])

    def test_avoid_similar(self, capsys):
        _, lines, _ = _run(capsys, "-S", "-l", "64")
        assert not any(c in SIMILAR for c in lines[0])

    def test_later_of_upper_and_digits_wins(self, capsys):
        _, lines, _ = _run(capsys, "-u", "-d")
        assert lines[0].isdigit()

        _, lines, _ = _run(capsys, "-d", "-u")
        assert lines[0].isalpha() and lines[0].isupper()

    def test_bad_length_is_usage_error(self, capsys):
        with pytest.raises(SystemExit) as excinfo:
            cli.main(["-l", "abc"])
        assert excinfo.value.code == cli.EXIT_ARG_ERROR


class TestPolicyFromArgs:
    def test_no_minimum(self):
        args = cli.build_parser().parse_args(["-m"])
        assert cli.policy_from_args(args).enforce_minimum is False

    def test_defaults(self):
        policy = cli.policy_from_args(cli.build_parser().parse_args([]))
        assert policy.length == 16
        assert policy.enabled_class_count == 4


class TestClipboard:
    def test_copies_and_clears(self, capsys, instant_controller, fake_clipboard):
        code, lines, _ = _run(capsys, "-p", "5", controller=instant_controller)
        assert code == cli.EXIT_SUCCESS
        assert fake_clipboard.writes[0] == lines[0]
        assert fake_clipboard.text == ""
        assert "Will clear in 5 seconds." in lines[2]
        assert lines[-1] == "Clipboard cleared."

    def test_negative_timeout_disables(self, capsys, instant_controller, fake_clipboard):
        _, lines, _ = _run(capsys, "-p", "-3", controller=instant_controller)
        assert len(lines) == 2
        assert fake_clipboard.writes == []

    def test_clipboard_failure_is_not_fatal(self, capsys, instant_controller, fake_clipboard):
        fake_clipboard.fail_writes = True
        code, _, err = _run(capsys, "-p", "5", controller=instant_controller)
        assert code == cli.EXIT_SUCCESS
        assert "Could not copy" in err


class TestEntropyFailure:
    def test_exits_with_error(self, capsys, monkeypatch):
        def broken(n):
            raise OSError("no entropy")

        monkeypatch.setattr(random_source.os, "urandom", broken)
        code, lines, err = _run(capsys)
        assert code == cli.EXIT_SYS_ERROR
        assert lines == []
        assert "Fatal error" in err


class TestRun:
    def test_exits_with_main_return_code(self, monkeypatch):
        monkeypatch.setattr(cli, "main", lambda: cli.EXIT_SYS_ERROR)
        with pytest.raises(SystemExit) as excinfo:
            cli.run()
        assert excinfo.value.code == cli.EXIT_SYS_ERROR
