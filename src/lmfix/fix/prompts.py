"""Prompts sent to the inference server."""

from __future__ import annotations

from lmfix.fix.schema import ERROR_TYPES

SYSTEM_PROMPT = f"""You are an expert software engineer who finds and fixes bugs.

You will receive the full contents of one source file. Find the most
significant bug (syntax, compile, runtime, logic or type error) and return
the complete corrected file.

CONSTRAINTS:
- Return the WHOLE file in fixed_code, not a fragment or a diff.
- Keep the author's style, naming and structure. Change as little as possible.
- Do not add commentary inside fixed_code that was not already there.
- Set language to the lowercase language name (e.g. go, python, rust).
- Set error_type to one of: {", ".join(ERROR_TYPES)}.
- If the file has no bug, return it unchanged with error_type "none".

Respond only with a JSON object matching the requested schema."""


def build_user_prompt(source_code: str) -> str:
    """Embed *source_code* verbatim in the user message."""
    return f"""Analyze the following code, find the bug and fix it.

SOURCE CODE:
```
{source_code}
```"""
