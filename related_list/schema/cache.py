"""In-memory holder for the last fetched object schema."""

from __future__ import annotations

from related_list.schemas.object_schema import FieldDescriptor, ObjectSchema


class SchemaCache:
    """Last-fetched object metadata with pure, never-raising lookups."""

    def __init__(self, schema: ObjectSchema | None = None) -> None:
        self._schema: ObjectSchema | None = None
        if schema is not None:
            self.update(schema)

    def update(self, schema: ObjectSchema) -> None:
        """Replace the cached snapshot wholesale."""

        self._schema = schema

    @property
    def object_label(self) -> str | None:
        return self._schema.label if self._schema is not None and self._schema.label else None

    @property
    def icon_url(self) -> str | None:
        return self._schema.theme_icon_url if self._schema is not None else None

    def field(self, api_name: str) -> FieldDescriptor | None:
        if self._schema is None:
            return None
        return self._schema.fields.get(api_name)

    def field_type(self, api_name: str) -> str | None:
        descriptor = self.field(api_name)
        return descriptor.data_type if descriptor is not None else None

    def field_label(self, api_name: str) -> str | None:
        descriptor = self.field(api_name)
        if descriptor is None or not descriptor.label:
            return None
        return descriptor.label

    def is_currency(self, api_name: str) -> bool:
        return self.field_type(api_name) == "Currency"

    def editable_fields(self) -> list[FieldDescriptor]:
        """Fields the edit form may offer: updateable and not computed."""

        if self._schema is None:
            return []
        return [
            descriptor
            for descriptor in self._schema.fields.values()
            if descriptor.updateable and not descriptor.computed
        ]
