"""Tests for output/console.py."""

from __future__ import annotations

import pytest

from deploy_info.output.console import MockConsole, RichConsole, Style


class TestMockConsole:
    def test_report_lines_go_to_stdout(self) -> None:
        console = MockConsole()
        console.print("*Commit Messages*")
        console.print("* fix-3 [bracketed] title")

        assert console.stdout == ["*Commit Messages*", "* fix-3 [bracketed] title"]
        assert console.stderr == []
        assert console.text == "*Commit Messages*\n* fix-3 [bracketed] title"

    def test_diagnostics_go_to_stderr(self) -> None:
        console = MockConsole()
        console.error("boom")
        console.warning("careful")
        console.hint("try again")
        console.debug("cdProjectId: 202")

        assert console.stdout == []
        assert console.stderr == [
            "error: boom",
            "warning: careful",
            "hint: try again",
            "cdProjectId: 202",
        ]
        assert console.has_error()
        assert console.has_warning()

    def test_find(self) -> None:
        console = MockConsole()
        console.print("a", Style.DIM)
        console.debug("deployedSha: abc123d")

        assert [o.message for o in console.find("abc123d")] == ["deployedSha: abc123d"]


class TestRichConsole:
    def test_print_is_verbatim_on_stdout(self, capsys: pytest.CaptureFixture[str]) -> None:
        console = RichConsole()
        console.print("[fix-3|https://jira.example/browse/fix-3]")

        captured = capsys.readouterr()
        assert captured.out == "[fix-3|https://jira.example/browse/fix-3]\n"
        assert captured.err == ""

    def test_emoji_codes_are_not_replaced(self, capsys: pytest.CaptureFixture[str]) -> None:
        console = RichConsole()
        console.print("* :bug: ABC-1 fix :sparkles: parser")
        console.debug("commit: :bug: ABC-1 fix")

        captured = capsys.readouterr()
        assert captured.out == "* :bug: ABC-1 fix :sparkles: parser\n"
        assert ":bug: ABC-1 fix" in captured.err

    def test_error_on_stderr(self, capsys: pytest.CaptureFixture[str]) -> None:
        console = RichConsole()
        console.error("resolve CD project: no project named '[x]'")

        captured = capsys.readouterr()
        assert captured.out == ""
        assert "error:" in captured.err
        assert "resolve CD project: no project named '[x]'" in captured.err

    def test_debug_on_stderr(self, capsys: pytest.CaptureFixture[str]) -> None:
        RichConsole().debug("appProjectId: 101")

        captured = capsys.readouterr()
        assert captured.out == ""
        assert "appProjectId: 101" in captured.err
