"""Tests for relkit.output.console module."""

from __future__ import annotations

import pytest

from relkit.output.console import ConsoleProtocol, MockConsole, RichConsole, Style


class TestMockConsole:
    def test_print_captures_message(self) -> None:
        console = MockConsole()
        console.print("hello")
        assert console.outputs[0].message == "hello"
        assert console.outputs[0].style == Style.DEFAULT

    def test_shorthands_prefix_and_style(self) -> None:
        console = MockConsole()
        console.success("done")
        console.error("broken")
        console.warning("careful")
        console.info("fyi")
        console.header("Release")

        assert console.messages == [
            "OK done",
            "error: broken",
            "warning: careful",
            "info: fyi",
            "Release",
        ]
        assert console.count(Style.ERROR) == 1
        assert console.count(Style.WARNING) == 1

    def test_find(self) -> None:
        console = MockConsole()
        console.print("updated version in README.md")
        console.print("zip created: dist/DNB.zip")
        assert len(console.find("zip")) == 1


class TestRichConsole:
    def test_writes_plain_text(self, capsys: pytest.CaptureFixture[str]) -> None:
        console = RichConsole()
        console.success("released v1.0.0")
        console.print("[not markup]", Style.DIM)

        out = capsys.readouterr().out
        assert "OK" in out
        assert "released v1.0.0" in out
        assert "[not markup]" in out

    def test_error_goes_to_stderr(self, capsys: pytest.CaptureFixture[str]) -> None:
        RichConsole().error("boom")
        captured = capsys.readouterr()
        assert "boom" in captured.err
        assert "boom" not in captured.out


def test_implementations_satisfy_protocol() -> None:
    consoles: list[ConsoleProtocol] = [MockConsole(), RichConsole()]
    assert len(consoles) == 2
