"""Compile-check a rewritten file with an external toolchain."""

from __future__ import annotations

import logging
import os
import subprocess
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BuildTarget:
    """How to check one language: matching file extensions and an argv template."""

    extensions: tuple[str, ...]
    command: tuple[str, ...]

    def argv(self, path: Path) -> list[str]:
        return [part.replace("{file}", str(path)) for part in self.command]


@dataclass
class BuildCheck:
    ok: bool
    output: str
    returncode: int | None = None


DEFAULT_TARGETS: dict[str, BuildTarget] = {
    "go": BuildTarget(
        extensions=(".go",),
        command=("go", "build", "-o", os.devnull, "{file}"),
    ),
}


class BuildValidator:
    """Runs a language's compiler in check-only mode against a single file."""

    def __init__(self, targets: dict[str, BuildTarget] | None = None, timeout: float = 120.0):
        if targets is None:
            targets = DEFAULT_TARGETS
        self.targets = {lang.lower(): target for lang, target in targets.items()}
        self.timeout = timeout

    def target_for(self, language: str, path: Path) -> BuildTarget | None:
        target = self.targets.get(language.strip().lower())
        if target is None:
            return None
        if path.suffix.lower() not in target.extensions:
            return None
        return target

    def applies_to(self, language: str, path: Path) -> bool:
        return self.target_for(language, path) is not None

    def check(self, language: str, path: Path) -> BuildCheck:
        """Compile *path*. A missing compiler or timeout is a failed check."""
        target = self.target_for(language, path)
        if target is None:
            return BuildCheck(ok=True, output=f"No build check configured for {language}")

        # runs inside the file's directory, so pass the bare name
        argv = target.argv(Path(path.name))
        logger.info("Running build check: %s", " ".join(argv))
        try:
            proc = subprocess.run(
                argv,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                text=True,
                cwd=str(path.parent),
                timeout=self.timeout,
            )
        except FileNotFoundError:
            return BuildCheck(ok=False, output=f"Compiler not found: {argv[0]}")
        except subprocess.TimeoutExpired:
            return BuildCheck(ok=False, output=f"Build check timed out after {self.timeout:g}s")

        logger.debug("Build check exited with %s", proc.returncode)
        return BuildCheck(ok=proc.returncode == 0, output=proc.stdout or "", returncode=proc.returncode)
