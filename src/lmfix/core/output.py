"""Rich terminal formatting for lmfix output."""

from __future__ import annotations

from pathlib import Path

from rich.console import Console, Group
from rich.markup import escape
from rich.panel import Panel
from rich.syntax import Syntax
from rich.text import Text

from lmfix.core.models import ApplyResult, ApplyStatus, FixResult

console = Console()
error_console = Console(stderr=True)

ERROR_TYPE_COLORS = {
    "syntax_error": "red",
    "compile_error": "red",
    "runtime_error": "red",
    "type_error": "yellow",
    "logic_error": "yellow",
    "none": "green",
}


def _code_block(code: str, language: str) -> Syntax:
    return Syntax(code, language or "text", line_numbers=True, word_wrap=True)


def print_fix_report(path: Path, fix: FixResult) -> None:
    """Print the language, error type, both versions of the code and the explanation."""
    color = ERROR_TYPE_COLORS.get(fix.error_type, "yellow")

    header = Text.from_markup(
        f"  Language:   [bold]{escape(fix.language)}[/bold]\n"
        f"  Error type: [{color}]{escape(fix.error_type)}[/{color}]"
    )
    body = Group(
        header,
        Text(""),
        Text("  Original code:", style="bold red"),
        _code_block(fix.original_code, fix.language),
        Text(""),
        Text("  Fixed code:", style="bold green"),
        _code_block(fix.fixed_code, fix.language),
        Text(""),
        Text("  Explanation:", style="bold"),
        Text(f"  {fix.explanation}"),
    )

    console.print(Panel(
        body,
        title=f"[bold]Suggested Fix — {escape(str(path))}[/bold]",
        border_style=color,
        padding=(0, 1),
    ))


def print_apply_result(result: ApplyResult) -> None:
    """Print the outcome of applying a fix."""
    if result.status == ApplyStatus.APPLIED:
        console.print(f"  [green]✅ {escape(str(result.file))}[/green]  {escape(result.message)}")
    elif result.status == ApplyStatus.CANCELLED:
        console.print(f"  [yellow]{escape(result.message)}[/yellow]")
    else:
        console.print(f"  [red]❌ {escape(str(result.file))}[/red]  {escape(result.message)}")

    if result.backup:
        console.print(f"     [dim]Backup: {escape(str(result.backup))}[/dim]")

    if result.build_output:
        console.print(Panel(
            Text(result.build_output.rstrip()),
            title="[bold]Build output[/bold]",
            border_style="red" if result.status == ApplyStatus.BUILD_FAILED else "dim",
            padding=(0, 1),
        ))


def print_error(message: str) -> None:
    error_console.print(f"  [red]Error:[/red] {escape(message)}", highlight=False)
