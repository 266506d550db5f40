"""Tests for gxbuild.output.console module."""

from __future__ import annotations

import pytest

from gxbuild.output.console import MockConsole, RichConsole, Style


class TestMockConsole:
    def test_print_captures_message(self) -> None:
        console = MockConsole()
        console.print("hello", Style.DIM)

        assert console.outputs[0].message == "hello"
        assert console.outputs[0].style == Style.DIM

    def test_prefixes(self) -> None:
        console = MockConsole()
        console.success("done")
        console.error("broken")
        console.warning("careful")
        console.info("fyi")

        assert console.messages == ["OK done", "error: broken", "warning: careful", "info: fyi"]
        assert console.has_error()
        assert console.errors() == ["error: broken"]

    def test_find(self) -> None:
        console = MockConsole()
        console.header("Build")
        console.print("image: devkitppc")

        assert [o.message for o in console.find("image")] == ["image: devkitppc"]


class TestRichConsole:
    def test_errors_go_to_stderr(self, capsys: pytest.CaptureFixture[str]) -> None:
        console = RichConsole()
        console.print("progress")
        console.error("docker is not installed.")

        captured = capsys.readouterr()
        assert "progress" in captured.out
        assert "docker is not installed." in captured.err
        assert "docker" not in captured.out
