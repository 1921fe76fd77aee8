"""Column definitions consumed by the grid renderer."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field

ColumnType = Literal[
    "text",
    "url",
    "button",
    "currency",
    "percent",
    "number",
    "date",
    "boolean",
    "richText",
    "action",
]
LayoutMode = Literal["light", "heavy"]
RowActionName = Literal["view", "edit", "delete"]


class RowAction(BaseModel):
    """One entry of the trailing row-action menu."""

    label: str
    name: RowActionName
    icon_name: str


class ColumnDefinition(BaseModel):
    """Grid column with its bound (possibly synthetic) field."""

    label: str
    field_name: str | None = None
    type: ColumnType = "text"
    sortable: bool = False
    initial_width: int
    fixed_width: int | None = None
    wrap_text: bool = False
    type_attributes: dict[str, Any] = Field(default_factory=dict)
    cell_attributes: dict[str, Any] = Field(default_factory=dict)


class ColumnLayout(BaseModel):
    """Planned columns plus the presentation layout mode."""

    columns: list[ColumnDefinition]
    mode: LayoutMode
