"""Tests for confirmation providers."""

from __future__ import annotations

import io

import pytest
from rich.console import Console

from lmfix.fix.confirm import AutoConfirm, TerminalConfirm


def _terminal(answer: str | None) -> TerminalConfirm:
    console = Console(file=io.StringIO(), force_terminal=False)

    def fake_input(prompt: str = "", **kwargs) -> str:
        if answer is None:
            raise EOFError
        return answer

    console.input = fake_input  # type: ignore[method-assign]
    return TerminalConfirm(console)


class TestTerminalConfirm:
    @pytest.mark.parametrize("answer", ["y", "Y", "  y  ", "y\n"])
    def test_yes(self, answer: str):
        assert _terminal(answer)("Apply?") is True

    @pytest.mark.parametrize("answer", ["", "n", "N", "no", "yes", "yy", "q"])
    def test_anything_else_declines(self, answer: str):
        assert _terminal(answer)("Apply?") is False

    def test_eof_declines(self):
        assert _terminal(None)("Apply?") is False


class TestAutoConfirm:
    def test_records_questions(self):
        confirm = AutoConfirm(True)
        assert confirm("first?") is True
        assert confirm("second?") is True
        assert confirm.questions == ["first?", "second?"]

    def test_decline(self):
        assert AutoConfirm(False)("Apply?") is False
