"""Field schema and result mapping for extracted hematology values."""

from .models import (
    FieldSchema,
    ResultMap,
    ResultMapBuilder,
    HEMATOLOGY_FIELDS,
    HEMATOLOGY_FIELD_NAMES,
)

__all__ = [
    'FieldSchema',
    'ResultMap',
    'ResultMapBuilder',
    'HEMATOLOGY_FIELDS',
    'HEMATOLOGY_FIELD_NAMES',
]
