"""Positional field extraction from OCR text lines.

OCR of a hematology report is assumed to read as alternating label/value
pairs in schema order: one label phrase (possibly several words) followed by
one numeric value, repeated for every field. Label text is never matched
against field names; the Nth numeric token fills the Nth field. A missing or
extra value therefore shifts every later field and there is no realignment.
"""

import re
from typing import Dict, List, Sequence, Union

from hemascan.schema import FieldSchema, ResultMap, ResultMapBuilder
from hemascan.utils import (
    get_logger,
    log_token_stream,
    log_field_assignment,
    log_discarded_token,
)


_WHITESPACE_RE = re.compile(r'\s+')

# Split on a space that is directly followed by an ASCII digit or letter
_TOKEN_BOUNDARY_RE = re.compile(r' (?=[0-9A-Za-z])')

# Optional sign, then digits with optional fraction, or a bare fraction
_NUMERIC_RE = re.compile(r'[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)')


def is_numeric_token(token: str) -> bool:
    """
    Return True if `token` is a plain decimal number.

    Accepts an optional sign and an optional decimal point ("1", "-2",
    "+3.5", ".5", "5."). Exponents, hex, thousands separators, units and
    anything with letters are not numeric.
    """
    return _NUMERIC_RE.fullmatch(token) is not None


def normalize_text(lines: Sequence[str]) -> str:
    """Join lines with a space, collapse whitespace runs and trim."""
    return _WHITESPACE_RE.sub(' ', ' '.join(lines)).strip()


def tokenize(text: str) -> List[str]:
    """Split normalized text at each space preceding a digit or letter."""
    if not text:
        return []
    return [token for token in _TOKEN_BOUNDARY_RE.split(text) if token]


class PositionalExtractor:
    """Assigns numeric OCR tokens to schema fields in order of appearance."""

    def __init__(self, schema: Union[FieldSchema, Sequence[str]]):
        """
        Initialize extractor.

        Args:
            schema: FieldSchema or ordered sequence of unique field names
        """
        self.schema = FieldSchema.coerce(schema)

    def extract(self, lines: Sequence[str]) -> ResultMap:
        """
        Extract field values from OCR lines.

        Never raises for any sequence of strings; fields that receive no
        value hold an empty string.

        Args:
            lines: OCR text lines in reading order

        Returns:
            ResultMap with one entry per schema field
        """
        logger = get_logger()

        normalized = normalize_text(lines)
        tokens = tokenize(normalized)
        log_token_stream(logger, normalized, tokens)

        builder = ResultMapBuilder(self.schema)
        field_count = len(self.schema)
        field_index = 0
        labels: Dict[int, str] = {}

        for token in tokens:
            if field_index >= field_count:
                log_discarded_token(logger, token, "all fields already assigned")
                continue

            if is_numeric_token(token):
                builder.set_value(field_index, token)
                field_index += 1
            else:
                labels[field_index] = token

        result = builder.build()

        logger.info(f"Assigned {field_index}/{field_count} fields from {len(tokens)} tokens")
        for index, (name, value) in enumerate(result.rows()):
            log_field_assignment(logger, name, value, labels.get(index))

        return result


def extract_fields(schema: Union[FieldSchema, Sequence[str]], lines: Sequence[str]) -> ResultMap:
    """Extract `lines` against `schema` with a one-off PositionalExtractor."""
    return PositionalExtractor(schema).extract(lines)
