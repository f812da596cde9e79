"""Declarative structured-output schema and tool descriptor for fix requests."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

_JSON_TYPES: dict[str, type | tuple[type, ...]] = {
    "string": str,
    "integer": int,
    "number": (int, float),
    "boolean": bool,
    "object": dict,
    "array": list,
}


@dataclass(frozen=True)
class SchemaField:
    """One property of a JSON object schema."""

    name: str
    type: str = "string"
    description: str = ""
    enum: tuple[str, ...] | None = None
    required: bool = True

    def to_property(self) -> dict[str, Any]:
        prop: dict[str, Any] = {"type": self.type}
        if self.description:
            prop["description"] = self.description
        if self.enum:
            prop["enum"] = list(self.enum)
        return prop

    def check(self, value: Any) -> str | None:
        """Return a problem description, or None if *value* conforms."""
        expected = _JSON_TYPES[self.type]
        # bool is an int subclass; JSON keeps them apart
        if isinstance(value, bool) and self.type in ("integer", "number"):
            return f"field '{self.name}' must be {self.type}, got boolean"
        if not isinstance(value, expected):
            return f"field '{self.name}' must be {self.type}, got {type(value).__name__}"
        if self.enum and value not in self.enum:
            return f"field '{self.name}' must be one of {', '.join(self.enum)}, got {value!r}"
        return None


@dataclass(frozen=True)
class ResponseSchema:
    """A named object schema, usable as a response format and as a validator."""

    name: str
    fields: tuple[SchemaField, ...]
    description: str = ""

    @property
    def required(self) -> list[str]:
        return [f.name for f in self.fields if f.required]

    def to_json_schema(self) -> dict[str, Any]:
        return {
            "type": "object",
            "properties": {f.name: f.to_property() for f in self.fields},
            "required": self.required,
            "additionalProperties": False,
        }

    def to_response_format(self) -> dict[str, Any]:
        """Render the ``response_format`` block of a chat completion request."""
        json_schema: dict[str, Any] = {
            "name": self.name,
            "strict": True,
            "schema": self.to_json_schema(),
        }
        if self.description:
            json_schema["description"] = self.description
        return {"type": "json_schema", "json_schema": json_schema}

    def validate(self, data: Any) -> list[str]:
        """Return every way *data* fails to conform. Empty means valid.

        Unknown keys are tolerated so that a model echoing extra fields
        (``original_code`` being the usual one) is not rejected.
        """
        if not isinstance(data, dict):
            return [f"expected a JSON object, got {type(data).__name__}"]

        problems = []
        for f in self.fields:
            if f.name not in data:
                if f.required:
                    problems.append(f"missing required field '{f.name}'")
                continue
            problem = f.check(data[f.name])
            if problem:
                problems.append(problem)
        return problems


ERROR_TYPES = (
    "syntax_error",
    "compile_error",
    "runtime_error",
    "logic_error",
    "type_error",
    "none",
)

FIX_SCHEMA = ResponseSchema(
    name="code_fix",
    description="A corrected version of the submitted source file.",
    fields=(
        SchemaField(
            "fixed_code",
            description="The complete corrected source file, ready to be written to disk.",
        ),
        SchemaField(
            "explanation",
            description="What was wrong and how the fix addresses it.",
        ),
        SchemaField(
            "language",
            description="Programming language of the file, lowercase (e.g. go, python).",
        ),
        SchemaField(
            "error_type",
            description="Category of the most significant problem found.",
            enum=ERROR_TYPES,
        ),
    ),
)

ANALYZE_CODE_TOOL: dict[str, Any] = {
    "type": "function",
    "function": {
        "name": "analyze_code",
        "description": "Analyze source code for bugs and return a corrected version.",
        "parameters": {
            "type": "object",
            "properties": {
                "code": {
                    "type": "string",
                    "description": "The source code to analyze.",
                },
                "language": {
                    "type": "string",
                    "description": "Programming language of the code.",
                },
            },
            "required": ["code"],
        },
    },
}
