"""Shared data models used across lmfix modules."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from lmfix.fix.schema import ResponseSchema


@dataclass(frozen=True)
class ChatMessage:
    """A single role-tagged chat message."""

    role: str
    content: str

    def to_dict(self) -> dict[str, str]:
        return {"role": self.role, "content": self.content}


@dataclass
class FixRequest:
    """Everything sent to the chat completions endpoint for one file."""

    model: str
    messages: list[ChatMessage]
    response_schema: ResponseSchema
    tools: list[dict[str, Any]] = field(default_factory=list)
    temperature: float = 0.1
    stream: bool = False

    @property
    def user_message(self) -> ChatMessage:
        return next(m for m in self.messages if m.role == "user")

    def to_payload(self) -> dict[str, Any]:
        """Render the JSON body for ``POST /chat/completions``."""
        payload: dict[str, Any] = {
            "model": self.model,
            "messages": [m.to_dict() for m in self.messages],
        }
        if self.tools:
            payload["tools"] = self.tools
        payload["response_format"] = self.response_schema.to_response_format()
        payload["temperature"] = self.temperature
        payload["stream"] = self.stream
        return payload


@dataclass(frozen=True)
class FixResult:
    """A parsed fix suggestion.

    ``original_code`` is always the text lmfix read from disk, never the
    model's copy of it.
    """

    original_code: str
    fixed_code: str
    explanation: str
    language: str
    error_type: str


class ApplyStatus(enum.Enum):
    APPLIED = "applied"
    CANCELLED = "cancelled"
    BUILD_FAILED = "build_failed"


@dataclass
class ApplyResult:
    """Outcome of confirming and applying a fix."""

    status: ApplyStatus
    message: str
    file: Path
    backup: Path | None = None
    build_output: str = ""

    @property
    def success(self) -> bool:
        return self.status == ApplyStatus.APPLIED
