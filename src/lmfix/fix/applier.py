"""Fix application with timestamped backups."""

from __future__ import annotations

import logging
import os
from datetime import datetime
from pathlib import Path
from typing import Callable

from lmfix.core.errors import BackupError, WriteError
from lmfix.core.models import ApplyResult, ApplyStatus, FixResult
from lmfix.core.output import print_fix_report
from lmfix.fix.confirm import ConfirmProvider, TerminalConfirm
from lmfix.fix.validate import BuildValidator

logger = logging.getLogger(__name__)

BACKUP_TIMESTAMP_FORMAT = "%Y%m%d%H%M%S"
FILE_MODE = 0o644


def backup_path_for(path: Path, now: datetime) -> Path:
    """``<path>.<YYYYMMDDHHMMSS>.bak`` alongside the original."""
    return path.with_name(f"{path.name}.{now.strftime(BACKUP_TIMESTAMP_FORMAT)}.bak")


class FileUpdater:
    """Confirms a fix with the user and writes it over the original file."""

    def __init__(
        self,
        confirm: ConfirmProvider | None = None,
        validator: BuildValidator | None = None,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.confirm = confirm or TerminalConfirm()
        self.validator = validator
        self.clock = clock

    def confirm_and_apply(self, path: Path, fix: FixResult) -> ApplyResult:
        """Show *fix*, ask for confirmation, then back up and rewrite *path*.

        Declining leaves the filesystem untouched. A failed build check is
        reported in the result but the new content stays in place; the
        backup is the recovery path.

        Raises:
            BackupError: the original could not be moved aside.
            WriteError: the fixed content could not be written.
        """
        path = Path(path)
        print_fix_report(path, fix)

        if not self.confirm(f"Apply this fix to {path}?"):
            return ApplyResult(
                status=ApplyStatus.CANCELLED,
                message="Fix cancelled. No changes were made.",
                file=path,
            )

        backup = self._backup(path)
        self._write(path, fix.fixed_code, backup)

        if self.validator and self.validator.applies_to(fix.language, path):
            check = self.validator.check(fix.language, path)
            if not check.ok:
                return ApplyResult(
                    status=ApplyStatus.BUILD_FAILED,
                    message=f"Fix written but the build check failed. Restore from {backup.name} if needed.",
                    file=path,
                    backup=backup,
                    build_output=check.output,
                )
            return ApplyResult(
                status=ApplyStatus.APPLIED,
                message="Fix applied and build check passed.",
                file=path,
                backup=backup,
            )

        return ApplyResult(
            status=ApplyStatus.APPLIED,
            message="Fix applied.",
            file=path,
            backup=backup,
        )

    def _backup(self, path: Path) -> Path:
        backup = backup_path_for(path, self.clock())
        if backup.exists():
            raise BackupError(f"Backup file {backup} already exists; refusing to overwrite it")
        try:
            path.rename(backup)
        except OSError as e:
            raise BackupError(f"Could not back up {path} to {backup}: {e}") from e
        logger.info("Backed up %s to %s", path, backup)
        return backup

    def _write(self, path: Path, content: str, backup: Path) -> None:
        try:
            path.write_text(content)
            os.chmod(path, FILE_MODE)
        except OSError as e:
            raise WriteError(f"Could not write fixed code to {path}: {e}", backup=backup) from e
        logger.info("Wrote fixed code to %s", path)
