"""Tests for positional field extraction."""

import pytest

from hemascan.extractors import (
    PositionalExtractor,
    extract_fields,
    is_numeric_token,
    normalize_text,
    tokenize,
)
from hemascan.schema import HEMATOLOGY_FIELD_NAMES


class TestNumericToken:
    """Test the numeric token predicate."""

    @pytest.mark.parametrize("token", ["1", "42.5", "-2", "+3.5", ".5", "5.", "007", "-0.25"])
    def test_accepts_plain_decimals(self, token):
        assert is_numeric_token(token), f"{token!r} should be numeric"

    @pytest.mark.parametrize("token", [
        "", "-", "+", ".", "Hct", "1e3", "0x1F", "4.5g", "1,000", "1.2.3",
        "Infinity", "NaN", "12%", "- 1", " 1", "10^3",
    ])
    def test_rejects_labels_and_other_notations(self, token):
        assert not is_numeric_token(token), f"{token!r} should not be numeric"


class TestNormalizeAndTokenize:
    """Test whitespace normalization and token splitting."""

    def test_joins_lines_and_collapses_whitespace(self):
        text = normalize_text(["  Hct\t 42.5 ", "", "RBCs\n4.8  "])
        assert text == "Hct 42.5 RBCs 4.8"

    def test_normalization_is_idempotent(self):
        once = normalize_text(["a  b", " c\t\td ", "  e"])
        assert normalize_text([once]) == once
        assert normalize_text(once.split(" ")) == once

    def test_empty_lines_normalize_to_empty_string(self):
        assert normalize_text([]) == ""
        assert normalize_text(["   ", "\t"]) == ""

    def test_splits_before_digits_and_letters(self):
        assert tokenize("Hct 42.5 RBCs 4.8") == ["Hct", "42.5", "RBCs", "4.8"]

    def test_multi_word_labels_split_into_fragments(self):
        assert tokenize("Fe Sat 30") == ["Fe", "Sat", "30"]

    def test_does_not_split_before_punctuation(self):
        # A space before a sign or bracket is not a boundary
        assert tokenize("Hct -1.5 (%) 3") == ["Hct -1.5 (%)", "3"]

    def test_empty_text_has_no_tokens(self):
        assert tokenize("") == []


class TestPositionalExtraction:
    """Test assignment of numeric tokens to schema fields."""

    def test_happy_path(self):
        result = extract_fields(["A", "B", "C"], ["LabelA 1.5 LabelB 2.0 LabelC 3.0"])
        assert result == {"A": "1.5", "B": "2.0", "C": "3.0"}

    def test_empty_input_maps_every_field_to_empty(self, hematology_schema):
        result = extract_fields(hematology_schema, [])
        assert set(result) == set(HEMATOLOGY_FIELD_NAMES)
        assert all(value == "" for value in result.values())

    def test_overflow_values_are_discarded(self):
        result = extract_fields(["A"], ["LabelA 1 LabelExtra 2"])
        assert result == {"A": "1"}

    def test_underflow_fields_default_to_empty(self):
        result = extract_fields(["A", "B"], ["LabelA 1"])
        assert result == {"A": "1", "B": ""}

    def test_missing_value_shifts_later_fields(self):
        # "LabelB" has no value, so B takes C's number and C stays empty
        result = extract_fields(["A", "B", "C"], ["LabelA 1", "LabelB", "LabelC 3"])
        assert result == {"A": "1", "B": "3", "C": ""}

    def test_extra_value_shifts_later_fields(self):
        result = extract_fields(["A", "B", "C"], ["LabelA 1 99", "LabelB 2", "LabelC 3"])
        assert result == {"A": "1", "B": "99", "C": "2"}

    def test_label_text_is_ignored(self):
        # Labels in the wrong order still fill fields positionally
        result = extract_fields(["A", "B"], ["LabelB 2 LabelA 1"])
        assert result == {"A": "2", "B": "1"}

    def test_values_without_labels(self):
        result = extract_fields(["A", "B"], ["7 8"])
        assert result == {"A": "7", "B": "8"}

    def test_leading_signed_value_is_numeric(self):
        result = extract_fields(["A"], ["-2.5 Label"])
        assert result == {"A": "-2.5"}

    def test_line_breaks_do_not_matter(self, hematology_schema):
        joined = extract_fields(hematology_schema, ["Hct 42.5 RBCs 4.8"])
        broken = extract_fields(hematology_schema, ["Hct", "42.5", "RBCs", "4.8"])
        assert joined == broken

    def test_report_text(self, hematology_schema, cbc_ocr_text, expected_cbc_values):
        lines = [line.strip() for line in cbc_ocr_text.split("\n") if line.strip()]
        result = PositionalExtractor(hematology_schema).extract(lines)

        for field, expected in expected_cbc_values.items():
            assert result[field] == expected, f"{field}: expected {expected}, got {result[field]!r}"
        for field in HEMATOLOGY_FIELD_NAMES[len(expected_cbc_values):]:
            assert result[field] == "", f"{field} should be empty"

    @pytest.mark.parametrize("lines", [
        [],
        [""],
        ["no numbers at all"],
        ["1 2 3 4 5 6 7 8 9 10"],
        ["Hct", "x 1e3 y 0x10 z 4.5g"],
        ["  \t  ", "\n"],
    ])
    def test_key_set_always_equals_schema(self, hematology_schema, lines):
        result = extract_fields(hematology_schema, lines)
        assert list(result) == list(HEMATOLOGY_FIELD_NAMES)
        assert all(isinstance(value, str) for value in result.values())

    def test_extractor_is_reusable(self):
        extractor = PositionalExtractor(["A", "B"])
        first = extractor.extract(["a 1 b 2"])
        second = extractor.extract(["a 3"])
        assert first == {"A": "1", "B": "2"}
        assert second == {"A": "3", "B": ""}
