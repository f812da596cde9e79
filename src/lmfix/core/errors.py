"""Errors raised while requesting and applying a fix."""

from __future__ import annotations

from pathlib import Path


class LMFixError(Exception):
    """Base class for every error that terminates an lmfix run."""


class ServerUnreachable(LMFixError):
    """The inference server did not answer the reachability probe."""

    def __init__(self, base_url: str):
        self.base_url = base_url
        super().__init__(
            f"Inference server at {base_url} is not reachable. "
            "Start the server and load a model, then try again."
        )


class FileReadError(LMFixError):
    """The target file could not be read."""


class RequestError(LMFixError):
    """Transport failure or non-200 answer from the chat completions endpoint."""

    def __init__(self, message: str, status_code: int | None = None, body: str = ""):
        self.status_code = status_code
        self.body = body
        super().__init__(message)


class ResponseParseError(LMFixError):
    """The model's reply did not contain a fix matching the response schema."""


class BackupError(LMFixError):
    """The original file could not be moved aside; nothing was written."""


class WriteError(LMFixError):
    """The fixed content could not be written after the backup was made."""

    def __init__(self, message: str, backup: Path):
        self.backup = backup
        super().__init__(f"{message}. Original content is preserved in {backup}")


class ConfigError(LMFixError):
    """lmfix.toml could not be parsed or has an incomplete section."""
