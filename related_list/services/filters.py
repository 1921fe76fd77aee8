"""Filter panel state: editable condition rows and the fields they may target."""

from __future__ import annotations

from collections.abc import Sequence
from uuid import uuid4

from related_list.schema.cache import SchemaCache
from related_list.schema.field_kinds import is_address_field
from related_list.schemas.filters import FilterCondition, FilterOption

FILTER_OPERATORS: tuple[FilterOption, ...] = (
    FilterOption(label="equals", value="="),
    FilterOption(label="not equal to", value="!="),
    FilterOption(label="less than", value="<"),
    FilterOption(label="greater than", value=">"),
    FilterOption(label="contains", value="LIKE"),
    FilterOption(label="does not contain", value="does not contain"),
    FilterOption(label="starts with", value="STARTS"),
    FilterOption(label="ends with", value="ENDS"),
)
LOGIC_OPERATORS: tuple[FilterOption, ...] = (
    FilterOption(label="AND", value="AND"),
    FilterOption(label="OR", value="OR"),
)


def _new_filter_id() -> str:
    return f"filter-{uuid4().hex[:9]}"


def filter_field_options(schema: SchemaCache, fields: Sequence[str]) -> list[FilterOption]:
    """Fields known to the schema, excluding address fields."""

    options: list[FilterOption] = []
    for field in fields:
        descriptor = schema.field(field)
        if descriptor is None or is_address_field(field, descriptor.data_type):
            continue
        options.append(FilterOption(label=descriptor.label or field, value=field))
    return options


class FilterPanel:
    """Ordered filter rows; starts with one blank row."""

    def __init__(self) -> None:
        self._filters: list[FilterCondition] = []
        self.add_filter()

    @property
    def is_first_filter(self) -> bool:
        return len(self._filters) == 1

    def add_filter(self) -> FilterCondition:
        condition = FilterCondition(id=_new_filter_id())
        self._filters.append(condition)
        return condition

    def remove_filter(self, filter_id: str) -> bool:
        remaining = [condition for condition in self._filters if condition.id != filter_id]
        removed = len(remaining) != len(self._filters)
        self._filters = remaining
        return removed

    def update_filter(self, filter_id: str, **changes: str) -> FilterCondition | None:
        for index, condition in enumerate(self._filters):
            if condition.id == filter_id:
                updated = FilterCondition.model_validate({**condition.model_dump(), **changes})
                self._filters[index] = updated
                return updated
        return None

    def replace(self, conditions: Sequence[FilterCondition]) -> None:
        """Swap in a new set of rows; rows without an id get one."""

        self._filters = [
            condition.model_copy(update={"id": condition.id or _new_filter_id()}) for condition in conditions
        ]

    def conditions(self) -> list[FilterCondition]:
        return [condition.model_copy() for condition in self._filters]
