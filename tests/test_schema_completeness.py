"""Tests for schema completeness and result map invariants."""

import json

import pytest
from pydantic import ValidationError

from hemascan.schema import (
    FieldSchema,
    ResultMap,
    ResultMapBuilder,
    HEMATOLOGY_FIELDS,
    HEMATOLOGY_FIELD_NAMES,
)


class TestFieldSchema:
    """Test schema construction and validation."""

    def test_default_schema_fields(self):
        assert len(HEMATOLOGY_FIELDS) == 27
        assert HEMATOLOGY_FIELDS[0] == "Hct"
        assert HEMATOLOGY_FIELDS[-1] == "Transferrin"
        assert "Fe Sat" in HEMATOLOGY_FIELDS
        assert list(HEMATOLOGY_FIELDS) == list(HEMATOLOGY_FIELD_NAMES)

    def test_empty_schema_rejected(self):
        with pytest.raises(ValidationError, match="at least one field"):
            FieldSchema(fields=[])

    def test_duplicate_fields_rejected(self):
        with pytest.raises(ValidationError, match="duplicate field names: Hct"):
            FieldSchema(fields=["Hct", "RBCs", "Hct"])

    def test_blank_field_rejected(self):
        with pytest.raises(ValidationError):
            FieldSchema(fields=["Hct", "  "])

    def test_schema_is_immutable(self):
        schema = FieldSchema(fields=["A", "B"])
        with pytest.raises(ValidationError):
            schema.fields = ("C",)

    def test_coerce_accepts_sequences(self):
        schema = FieldSchema.coerce(["A", "B"])
        assert schema.fields == ("A", "B")
        assert FieldSchema.coerce(schema) is schema


class TestResultMap:
    """Test that result maps always cover the schema exactly."""

    def test_builder_seeds_empty_values(self):
        result = ResultMapBuilder(HEMATOLOGY_FIELDS).build()
        assert set(result.keys()) == set(HEMATOLOGY_FIELD_NAMES)
        assert all(value == "" for value in result.values())

    def test_rows_follow_schema_order(self):
        builder = ResultMapBuilder(FieldSchema(fields=["C", "A", "B"]))
        builder.set_value(2, "3")
        builder.set_value(0, "1")
        result = builder.build()

        assert result.rows() == [("C", "1"), ("A", ""), ("B", "3")]
        assert list(result) == ["C", "A", "B"]
        assert result.filled_fields() == ["C", "B"]

    def test_set_value_returns_field_name(self):
        builder = ResultMapBuilder(FieldSchema(fields=["A", "B"]))
        assert builder.set_value(1, "2") == "B"

    def test_result_map_is_read_only(self):
        result = ResultMapBuilder(FieldSchema(fields=["A"])).build()
        with pytest.raises(TypeError):
            result["A"] = "1"

    def test_result_map_ignores_later_builder_changes(self):
        builder = ResultMapBuilder(FieldSchema(fields=["A"]))
        result = builder.build()
        builder.set_value(0, "9")
        assert result["A"] == ""

    def test_unknown_field_raises_key_error(self):
        result = ResultMapBuilder(FieldSchema(fields=["A"])).build()
        with pytest.raises(KeyError):
            result["Z"]

    def test_json_serialization(self):
        builder = ResultMapBuilder(HEMATOLOGY_FIELDS)
        builder.set_value(0, "42.5")
        result = builder.build()

        parsed = json.loads(json.dumps(result.to_dict()))
        assert list(parsed) == list(HEMATOLOGY_FIELD_NAMES)
        assert parsed["Hct"] == "42.5"

    def test_equality_with_dict(self):
        result = ResultMap(FieldSchema(fields=["A"]), {"A": "1"})
        assert result == {"A": "1"}
        assert result != {"A": "2"}
