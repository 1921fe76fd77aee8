"""Object metadata payloads returned by the schema and permission services."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from related_list.schema.data_types import FieldDataType, normalize_data_type


class _WireModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class FieldDescriptor(_WireModel):
    """Metadata for one field of an object."""

    api_name: str = Field(min_length=1)
    data_type: FieldDataType = "Text"
    label: str = ""
    required: bool = False
    updateable: bool = False
    computed: bool = False
    default_currency_code: str | None = None

    @field_validator("data_type", mode="before")
    @classmethod
    def normalize_type(cls, value: object) -> str:
        return normalize_data_type(value if isinstance(value, str) else None)


class ObjectSchema(_WireModel):
    """Snapshot of object metadata keyed by field API name."""

    api_name: str | None = None
    label: str = ""
    theme_icon_url: str | None = None
    fields: dict[str, FieldDescriptor] = Field(default_factory=dict)


class ObjectPermissions(_WireModel):
    """Object-level access flags for the current user."""

    is_createable: bool = False
    is_updateable: bool = False
    is_deletable: bool = False
