"""Click CLI entry point for lmfix."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import click
from rich.logging import RichHandler

from lmfix._version import __version__
from lmfix.core.config import load_config
from lmfix.core.errors import FileReadError, LMFixError, ServerUnreachable
from lmfix.core.models import ApplyStatus
from lmfix.core.output import console, error_console, print_apply_result, print_error, print_fix_report
from lmfix.fix.applier import FileUpdater
from lmfix.fix.client import InferenceClient
from lmfix.fix.confirm import AutoConfirm, TerminalConfirm
from lmfix.fix.validate import BuildValidator

logger = logging.getLogger("lmfix")


def _setup_logging(verbose: bool) -> None:
    handler = RichHandler(console=error_console, show_path=False, show_time=False)
    logger.handlers[:] = [handler]
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    logger.propagate = False


def _read_source(path: Path) -> str:
    try:
        return path.read_text()
    except (OSError, UnicodeDecodeError) as e:
        raise FileReadError(f"Could not read {path}: {e}") from e


@click.command()
@click.version_option(version=__version__, prog_name="lmfix")
@click.argument("file", required=False, type=click.Path(path_type=Path))
@click.option("--url", "base_url", default=None, help="Inference server base URL (e.g. http://localhost:1234/v1)")
@click.option("--model", default=None, help="Model identifier sent with the request")
@click.option("--yes", "-y", is_flag=True, help="Apply the fix without asking")
@click.option("--preview", is_flag=True, help="Show the suggested fix without applying it")
@click.option("--no-validate", is_flag=True, help="Skip the compiler check after writing")
@click.option("--verbose", "-v", is_flag=True, help="Log requests and build checks")
def cli(
    file: Path | None,
    base_url: str | None,
    model: str | None,
    yes: bool,
    preview: bool,
    no_validate: bool,
    verbose: bool,
):
    """Ask a local model to find and fix the bug in FILE.

    The original file is kept as FILE.<timestamp>.bak before the fix is
    written.
    """
    _setup_logging(verbose)
    if file is None:
        print_error("Missing FILE argument.")
        console.print("  Usage: lmfix FILE [--yes] [--preview]")
        sys.exit(1)

    try:
        config = load_config(Path.cwd())
    except LMFixError as e:
        print_error(str(e))
        sys.exit(1)

    if base_url:
        config.server.base_url = base_url
    if model:
        config.server.model = model

    client = InferenceClient(
        base_url=config.server.base_url,
        model=config.server.model,
        probe_timeout=config.server.probe_timeout,
        request_timeout=config.server.request_timeout,
        temperature=config.server.temperature,
    )

    validator = None
    if config.validate.enabled and not no_validate:
        validator = BuildValidator(config.validate.targets, timeout=config.validate.timeout)

    updater = FileUpdater(
        confirm=AutoConfirm(True) if yes else TerminalConfirm(console),
        validator=validator,
    )

    try:
        if not client.check_reachable():
            raise ServerUnreachable(client.base_url)

        source = _read_source(file)

        with console.status(f"Asking {client.model} for a fix..."):
            fix = client.request_fix(source)

        if preview:
            print_fix_report(file, fix)
            return

        result = updater.confirm_and_apply(file, fix)
    except LMFixError as e:
        print_error(str(e))
        sys.exit(1)

    print_apply_result(result)
    if result.status == ApplyStatus.BUILD_FAILED:
        sys.exit(1)


if __name__ == "__main__":
    cli()
