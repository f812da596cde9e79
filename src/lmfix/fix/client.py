"""Client for an OpenAI-compatible chat completions server."""

from __future__ import annotations

import json
import logging
import re
from typing import Any

import requests

from lmfix.core.errors import RequestError, ResponseParseError
from lmfix.core.models import ChatMessage, FixRequest, FixResult
from lmfix.fix.prompts import SYSTEM_PROMPT, build_user_prompt
from lmfix.fix.schema import ANALYZE_CODE_TOOL, FIX_SCHEMA

logger = logging.getLogger(__name__)

_FENCE = re.compile(r"^\s*```(?:\w+)?\s*\n(.*?)\n?```\s*$", re.DOTALL)


class InferenceClient:
    """Requests structured bug fixes from a local inference server."""

    def __init__(
        self,
        base_url: str,
        model: str,
        probe_timeout: float = 5.0,
        request_timeout: float = 120.0,
        temperature: float = 0.1,
        session: requests.Session | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.model = model
        self.probe_timeout = probe_timeout
        self.request_timeout = request_timeout
        self.temperature = temperature
        self.session = session or requests.Session()

    @property
    def models_url(self) -> str:
        return f"{self.base_url}/models"

    @property
    def completions_url(self) -> str:
        return f"{self.base_url}/chat/completions"

    def check_reachable(self) -> bool:
        """Probe the models listing. Any error or non-200 counts as unreachable."""
        try:
            response = self.session.get(self.models_url, timeout=self.probe_timeout)
        except requests.RequestException as e:
            logger.debug("Reachability probe to %s failed: %s", self.models_url, e)
            return False

        if response.status_code != 200:
            logger.debug(
                "Reachability probe to %s returned HTTP %s", self.models_url, response.status_code
            )
            return False
        return True

    def build_request(self, source_code: str) -> FixRequest:
        return FixRequest(
            model=self.model,
            messages=[
                ChatMessage(role="system", content=SYSTEM_PROMPT),
                ChatMessage(role="user", content=build_user_prompt(source_code)),
            ],
            response_schema=FIX_SCHEMA,
            tools=[ANALYZE_CODE_TOOL],
            temperature=self.temperature,
        )

    def request_fix(self, source_code: str) -> FixResult:
        """Send *source_code* to the model and parse its fix.

        Raises:
            RequestError: transport failure or a non-200 answer.
            ResponseParseError: the reply does not carry a conforming fix.
        """
        payload = self.build_request(source_code).to_payload()
        logger.info("Requesting fix from %s (model=%s)", self.completions_url, self.model)

        try:
            response = self.session.post(
                self.completions_url, json=payload, timeout=self.request_timeout
            )
        except requests.Timeout as e:
            raise RequestError(
                f"Request to {self.completions_url} timed out after {self.request_timeout:g}s"
            ) from e
        except requests.RequestException as e:
            raise RequestError(f"Request to {self.completions_url} failed: {e}") from e

        if response.status_code != 200:
            raise RequestError(
                f"Server returned HTTP {response.status_code}: {response.text}",
                status_code=response.status_code,
                body=response.text,
            )

        try:
            body = response.json()
        except ValueError as e:
            raise ResponseParseError(f"Server response is not valid JSON: {e}") from e

        return parse_fix(body, source_code)


def parse_fix(body: Any, source_code: str) -> FixResult:
    """Extract the fix from a chat completion response body."""
    message = _first_message(body)

    if message.get("tool_calls"):
        names = [
            (call.get("function") or {}).get("name", "?")
            for call in message["tool_calls"]
            if isinstance(call, dict)
        ]
        raise ResponseParseError(
            f"Model requested tool calls ({', '.join(names) or 'unnamed'}) instead of returning a fix"
        )

    content = message.get("content")
    if not isinstance(content, str) or not content.strip():
        raise ResponseParseError("Model reply has no message content")

    try:
        data = json.loads(_strip_fence(content))
    except json.JSONDecodeError as e:
        raise ResponseParseError(f"Model reply is not valid JSON: {e}") from e

    problems = FIX_SCHEMA.validate(data)
    if problems:
        raise ResponseParseError("Model reply does not match the fix schema: " + "; ".join(problems))

    logger.debug("Parsed fix: language=%s error_type=%s", data["language"], data["error_type"])

    return FixResult(
        original_code=source_code,
        fixed_code=data["fixed_code"],
        explanation=data["explanation"],
        language=data["language"],
        error_type=data["error_type"],
    )


def _first_message(body: Any) -> dict[str, Any]:
    if not isinstance(body, dict):
        raise ResponseParseError("Server response is not a JSON object")

    choices = body.get("choices")
    if not isinstance(choices, list) or not choices:
        raise ResponseParseError("Server response contains no choices")

    choice = choices[0]
    message = choice.get("message") if isinstance(choice, dict) else None
    if not isinstance(message, dict):
        raise ResponseParseError("First choice has no message")
    return message


def _strip_fence(content: str) -> str:
    match = _FENCE.match(content)
    if match:
        return match.group(1)
    return content
