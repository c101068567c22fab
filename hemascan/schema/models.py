"""Canonical field schema and result mapping for hematology report extraction."""

from collections.abc import Mapping
from typing import Dict, Iterator, List, Sequence, Tuple, Union

from pydantic import BaseModel, Field, field_validator


# Order matters: values are matched to fields by position.
HEMATOLOGY_FIELD_NAMES: Tuple[str, ...] = (
    "Hct",
    "RBCs",
    "Pit",
    "WBCs",
    "Neutrophils",
    "Segs",
    "Bands",
    "Lymphocytes",
    "Monocytes",
    "Eosinophils",
    "Basophils",
    "ESR",
    "Fe",
    "Fe Sat",
    "FDP",
    "Ferritin",
    "Fibrinogen",
    "Haptoglobin",
    "Hgb",
    "MCH",
    "MCHC",
    "MCV",
    "PT",
    "aPTT",
    "Reticulocytes",
    "TIBC",
    "Transferrin",
)


class FieldSchema(BaseModel):
    """
    Ordered, immutable set of field names an extraction run fills in.

    Field order defines positional matching: the Nth numeric value found in
    the OCR text is assigned to the Nth field. Names must be unique, since
    duplicates would collide in the result mapping.
    """

    fields: Tuple[str, ...] = Field(
        ...,
        description="Field names in report order"
    )

    @field_validator('fields')
    @classmethod
    def validate_fields(cls, v: Tuple[str, ...]) -> Tuple[str, ...]:
        """Reject empty schemas, blank names and duplicates."""
        if not v:
            raise ValueError("schema must contain at least one field")

        seen = set()
        duplicates = []
        for name in v:
            if not name.strip():
                raise ValueError("field names must not be blank")
            if name in seen and name not in duplicates:
                duplicates.append(name)
            seen.add(name)

        if duplicates:
            raise ValueError(f"duplicate field names: {', '.join(duplicates)}")

        return v

    @classmethod
    def coerce(cls, schema: Union["FieldSchema", Sequence[str]]) -> "FieldSchema":
        """Return `schema` as a FieldSchema, building one from a plain sequence."""
        if isinstance(schema, cls):
            return schema
        return cls(fields=schema)

    def __len__(self) -> int:
        return len(self.fields)

    def __iter__(self) -> Iterator[str]:
        return iter(self.fields)

    def __getitem__(self, index: int) -> str:
        return self.fields[index]

    def __contains__(self, name: object) -> bool:
        return name in self.fields

    model_config = {
        "frozen": True,
        "extra": "forbid",
    }


HEMATOLOGY_FIELDS = FieldSchema(fields=HEMATOLOGY_FIELD_NAMES)


class ResultMap(Mapping):
    """
    Read-only mapping from every schema field to its extracted string value.

    The key set always equals the schema exactly; fields with no value hold
    an empty string. Iteration follows schema order.
    """

    def __init__(self, schema: FieldSchema, values: Dict[str, str]):
        self._schema = schema
        self._values = {name: values[name] for name in schema.fields}

    @property
    def schema(self) -> FieldSchema:
        return self._schema

    def __getitem__(self, key: str) -> str:
        return self._values[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._schema.fields)

    def __len__(self) -> int:
        return len(self._values)

    def rows(self) -> List[Tuple[str, str]]:
        """(field, value) pairs in schema order, as rendered in the report."""
        return [(name, self._values[name]) for name in self._schema.fields]

    def filled_fields(self) -> List[str]:
        """Names of fields that received a value."""
        return [name for name, value in self.rows() if value]

    def to_dict(self) -> Dict[str, str]:
        """Convert to a plain dictionary (schema order preserved)."""
        return dict(self.rows())

    def __repr__(self) -> str:
        return f"ResultMap({self.to_dict()!r})"


class ResultMapBuilder:
    """Builds a ResultMap, seeded with empty values for every schema field."""

    def __init__(self, schema: FieldSchema):
        self.schema = schema
        self._values: Dict[str, str] = {name: "" for name in schema.fields}

    def set_value(self, index: int, value: str) -> str:
        """Assign `value` to the field at schema position `index` and return its name."""
        name = self.schema.fields[index]
        self._values[name] = value
        return name

    def build(self) -> ResultMap:
        return ResultMap(self.schema, self._values)
