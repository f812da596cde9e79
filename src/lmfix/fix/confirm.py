"""Confirmation providers used before a file is modified.

A provider is any callable taking the question text and returning True to
proceed. The terminal provider is the default; ``AutoConfirm`` serves
``--yes`` and tests.
"""

from __future__ import annotations

from typing import Callable

from rich.console import Console
from rich.markup import escape

ConfirmProvider = Callable[[str], bool]


class TerminalConfirm:
    """Ask on the interactive terminal. Only "y" (any case) means yes."""

    def __init__(self, console: Console | None = None):
        self.console = console or Console()

    def __call__(self, question: str) -> bool:
        try:
            answer = self.console.input(escape(f"  {question} [y/N]: "))
        except EOFError:
            self.console.print()
            return False
        return answer.strip().lower() == "y"


class AutoConfirm:
    """Answer every question the same way without prompting."""

    def __init__(self, answer: bool = True):
        self.answer = answer
        self.questions: list[str] = []

    def __call__(self, question: str) -> bool:
        self.questions.append(question)
        return self.answer
