"""Tests for the declarative response schema."""

from __future__ import annotations

from lmfix.fix.schema import ANALYZE_CODE_TOOL, FIX_SCHEMA, ResponseSchema, SchemaField


def _valid_fix() -> dict:
    return {
        "fixed_code": "package main\n",
        "explanation": "Added missing brace",
        "language": "go",
        "error_type": "syntax_error",
    }


class TestFixSchema:
    def test_required_fields(self):
        assert FIX_SCHEMA.required == ["fixed_code", "explanation", "language", "error_type"]

    def test_json_schema_shape(self):
        schema = FIX_SCHEMA.to_json_schema()

        assert schema["type"] == "object"
        assert set(schema["properties"]) == {"fixed_code", "explanation", "language", "error_type"}
        assert all(p["type"] == "string" for p in schema["properties"].values())
        assert schema["required"] == FIX_SCHEMA.required
        assert "none" in schema["properties"]["error_type"]["enum"]

    def test_response_format(self):
        fmt = FIX_SCHEMA.to_response_format()

        assert fmt["type"] == "json_schema"
        assert fmt["json_schema"]["name"] == "code_fix"
        assert fmt["json_schema"]["schema"] == FIX_SCHEMA.to_json_schema()

    def test_valid_payload_has_no_problems(self):
        assert FIX_SCHEMA.validate(_valid_fix()) == []

    def test_extra_fields_tolerated(self):
        data = _valid_fix()
        data["original_code"] = "whatever the model echoed"
        assert FIX_SCHEMA.validate(data) == []

    def test_missing_field(self):
        data = _valid_fix()
        del data["explanation"]

        problems = FIX_SCHEMA.validate(data)
        assert problems == ["missing required field 'explanation'"]

    def test_wrong_type(self):
        data = _valid_fix()
        data["fixed_code"] = 42

        problems = FIX_SCHEMA.validate(data)
        assert len(problems) == 1
        assert "fixed_code" in problems[0]

    def test_value_outside_enum(self):
        data = _valid_fix()
        data["error_type"] = "cosmic_ray"

        problems = FIX_SCHEMA.validate(data)
        assert len(problems) == 1
        assert "error_type" in problems[0]

    def test_non_object(self):
        assert FIX_SCHEMA.validate(["not", "an", "object"]) != []


class TestSchemaField:
    def test_optional_field_may_be_absent(self):
        schema = ResponseSchema(
            name="t",
            fields=(SchemaField("a"), SchemaField("b", required=False)),
        )
        assert schema.required == ["a"]
        assert schema.validate({"a": "x"}) == []

    def test_boolean_is_not_integer(self):
        field = SchemaField("count", type="integer")
        assert field.check(True) is not None
        assert field.check(3) is None


class TestAnalyzeTool:
    def test_tool_descriptor(self):
        assert ANALYZE_CODE_TOOL["type"] == "function"
        assert ANALYZE_CODE_TOOL["function"]["name"] == "analyze_code"
        assert "code" in ANALYZE_CODE_TOOL["function"]["parameters"]["properties"]
