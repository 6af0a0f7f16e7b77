"""Tests for shape template parsing."""

import pytest

from textshape.extraction.errors import SchemaError
from textshape.extraction.template import (
    ArrayTemplate,
    ObjectTemplate,
    PrimitiveTemplate,
    parse_template,
)


class TestParsePrimitives:
    """Tests for marker values mapping to primitive templates."""

    @pytest.mark.parametrize(
        "marker,kind",
        [
            ("", "string"),
            ("anything", "string"),
            (0, "number"),
            (3.5, "number"),
            (True, "boolean"),
            (False, "boolean"),
        ],
    )
    def test_marker_kinds(self, marker, kind: str) -> None:
        """Test each marker value maps to its primitive kind."""
        assert parse_template(marker) == PrimitiveTemplate(kind)

    def test_bool_is_not_number(self) -> None:
        """Test booleans are not read as numbers even though bool subclasses int."""
        assert parse_template(True).kind == "boolean"


class TestParseContainers:
    """Tests for arrays and objects."""

    def test_array_of_strings(self) -> None:
        """Test one-element list becomes an array template."""
        template = parse_template([""])
        assert isinstance(template, ArrayTemplate)
        assert template.items == PrimitiveTemplate("string")

    def test_nested_object(self) -> None:
        """Test nested objects keep field order and nesting."""
        template = parse_template({"name": "", "address": {"city": "", "zip": 0}})

        assert isinstance(template, ObjectTemplate)
        assert list(template.fields) == ["name", "address"]
        assert template.fields["address"].fields["zip"] == PrimitiveTemplate("number")

    def test_type_key_is_a_regular_field(self) -> None:
        """Test a field called 'type' is treated like any other field."""
        template = parse_template({"type": "", "count": 0})
        assert set(template.fields) == {"type", "count"}

    def test_empty_object_allowed(self) -> None:
        """Test empty object has no fields."""
        assert parse_template({}).fields == {}

    def test_template_passthrough(self) -> None:
        """Test an already-parsed template is returned unchanged."""
        template = parse_template({"a": ""})
        assert parse_template(template) is template


class TestParseErrors:
    """Tests for unsupported shapes."""

    def test_null_leaf(self) -> None:
        """Test null has no type information."""
        with pytest.raises(SchemaError, match="null"):
            parse_template({"name": None})

    def test_error_reports_path(self) -> None:
        """Test error path points at the offending field."""
        with pytest.raises(SchemaError) as exc_info:
            parse_template({"user": {"tags": [None]}})
        assert exc_info.value.path == "$.user.tags[]"

    def test_empty_array(self) -> None:
        """Test array without an element shape is rejected."""
        with pytest.raises(SchemaError, match="exactly one element"):
            parse_template({"tags": []})

    def test_array_with_several_elements(self) -> None:
        """Test ambiguous array shapes are rejected."""
        with pytest.raises(SchemaError):
            parse_template({"tags": ["", 0]})

    def test_unsupported_python_type(self) -> None:
        """Test non-JSON values are rejected."""
        with pytest.raises(SchemaError, match="set"):
            parse_template({"tags": {"a"}})


class TestTemplateBehaviour:
    """Tests for immutability and rendering."""

    def test_fields_are_read_only(self) -> None:
        """Test object fields cannot be mutated after construction."""
        template = parse_template({"name": ""})
        with pytest.raises(TypeError):
            template.fields["age"] = PrimitiveTemplate("number")  # type: ignore[index]

    def test_source_mapping_changes_do_not_leak(self) -> None:
        """Test template is isolated from later changes to the input dict."""
        fields = {"name": PrimitiveTemplate("string")}
        template = ObjectTemplate(fields)
        fields["age"] = PrimitiveTemplate("number")
        assert list(template.fields) == ["name"]

    def test_equal_templates_hash_equal(self) -> None:
        """Test structurally equal templates are equal and hashable."""
        first = parse_template({"a": [""], "b": {"c": 0}})
        second = parse_template({"a": ["x"], "b": {"c": 1.5}})
        assert first == second
        assert hash(first) == hash(second)

    def test_describe(self) -> None:
        """Test describe renders type names in place of markers."""
        template = parse_template({"name": "", "age": 0, "ok": True, "tags": [{"id": 0}]})
        assert template.describe() == {
            "name": "string",
            "age": "number",
            "ok": "boolean",
            "tags": [{"id": "number"}],
        }
