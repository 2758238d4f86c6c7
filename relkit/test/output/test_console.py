"""Tests for relkit.output.console module."""

from __future__ import annotations

import pytest

from relkit.output.console import MockConsole, RichConsole, Style, format_command


def test_style_str() -> None:
    assert str(Style.WARNING) == "warning"


def test_format_command_quotes_arguments() -> None:
    cmd = ("git", "commit", "-a", "-m", "Update CHANGELOG.md")
    assert format_command(cmd) == "git commit -a -m 'Update CHANGELOG.md'"


class TestMockConsole:
    def test_levels_are_prefixed(self) -> None:
        console = MockConsole()
        console.success("done")
        console.error("broken")
        console.warning("careful")
        console.info("fyi")

        assert console.messages == ["OK done", "error: broken", "warning: careful", "info: fyi"]
        assert console.has_error()
        assert console.has_warning()

    def test_command_is_recorded(self) -> None:
        console = MockConsole()
        console.command(["cargo", "build"])

        assert console.commands() == ["cargo build"]
        assert console.outputs[0].style == Style.DIM

    def test_find(self) -> None:
        console = MockConsole()
        console.header("release")
        console.print("tag")

        assert len(console.find("rel")) == 1
        assert console.text == "release\ntag"


class TestRichConsole:
    def test_markup_in_messages_is_escaped(self, capsys: pytest.CaptureFixture[str]) -> None:
        console = RichConsole()
        console.success("[bold]not markup[/bold]")

        out = capsys.readouterr().out
        assert "[bold]not markup[/bold]" in out

    def test_errors_go_to_stderr(self, capsys: pytest.CaptureFixture[str]) -> None:
        RichConsole().error("push rejected")

        captured = capsys.readouterr()
        assert "push rejected" in captured.err
        assert "push rejected" not in captured.out
