"""Controlled field data type system."""

from __future__ import annotations

from typing import Literal

FieldDataType = Literal[
    "Text",
    "Currency",
    "Percent",
    "Double",
    "Integer",
    "Date",
    "DateTime",
    "Boolean",
    "RichText",
    "Address",
    "Reference",
]

FIELD_DATA_TYPE_VALUES: tuple[str, ...] = (
    "Text",
    "Currency",
    "Percent",
    "Double",
    "Integer",
    "Date",
    "DateTime",
    "Boolean",
    "RichText",
    "Address",
    "Reference",
)

_DATA_TYPE_SYNONYMS: dict[str, str] = {
    "text": "Text",
    "string": "Text",
    "textarea": "Text",
    "picklist": "Text",
    "multipicklist": "Text",
    "email": "Text",
    "phone": "Text",
    "url": "Text",
    "combobox": "Text",
    "id": "Text",
    "currency": "Currency",
    "percent": "Percent",
    "double": "Double",
    "decimal": "Double",
    "number": "Double",
    "float": "Double",
    "int": "Integer",
    "integer": "Integer",
    "long": "Integer",
    "date": "Date",
    "datetime": "DateTime",
    "boolean": "Boolean",
    "bool": "Boolean",
    "checkbox": "Boolean",
    "richtext": "RichText",
    "rich_textarea": "RichText",
    "html": "RichText",
    "address": "Address",
    "location": "Address",
    "reference": "Reference",
    "lookup": "Reference",
    "relationship": "Reference",
    "masterdetail": "Reference",
}


def normalize_data_type(raw_type: str | None) -> FieldDataType:
    """Normalize a remote data type name to the controlled list."""

    cleaned = (raw_type or "").strip().replace(" ", "").lower()
    if not cleaned:
        return "Text"
    return _DATA_TYPE_SYNONYMS.get(cleaned, "Text")  # type: ignore[return-value]
