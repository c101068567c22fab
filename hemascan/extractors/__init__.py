"""Field extraction from OCR text lines."""

from .positional_extractor import (
    PositionalExtractor,
    extract_fields,
    is_numeric_token,
    normalize_text,
    tokenize,
)

__all__ = [
    'PositionalExtractor',
    'extract_fields',
    'is_numeric_token',
    'normalize_text',
    'tokenize',
]
