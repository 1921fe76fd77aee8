"""Widget events posted by the presentation layer."""

from __future__ import annotations

from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, RootModel
from pydantic.alias_generators import to_camel

from related_list.schemas.filters import FilterCondition, FilterOperator, LogicOperator
from related_list.schemas.widget import FlowStatus, NavigationRequest, WidgetSnapshot


class _Event(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SortChangeEvent(_Event):
    type: Literal["sort-change"]
    field_name: str = Field(min_length=1)
    sort_direction: Literal["asc", "desc"] = "asc"


class RowActionEvent(_Event):
    """``action`` is a row action name or an email/phone field clicked in a cell."""

    type: Literal["row-action"]
    action: str = Field(min_length=1)
    row: dict[str, Any] = Field(default_factory=dict)
    record_id: str | None = None


class RowSelectionChangeEvent(_Event):
    type: Literal["row-selection-change"]
    selected_rows: list[dict[str, Any]] = Field(default_factory=list)
    selected_ids: list[str] | None = None


class ColumnResizeEvent(_Event):
    type: Literal["column-resize"]
    field_name: str = Field(min_length=1)
    width: int = Field(ge=0)


class SearchInputEvent(_Event):
    type: Literal["search-input"]
    value: str = ""


class ContainerResizeEvent(_Event):
    type: Literal["container-resize"]
    width: int | None = Field(default=None, ge=0)


class FlowStatusChangeEvent(_Event):
    type: Literal["flow-status"]
    status: FlowStatus
    message: str | None = None


class EditErrorEvent(_Event):
    type: Literal["edit-error"]
    detail: dict[str, Any] | None = None


class FilterChangeEvent(_Event):
    type: Literal["filter-change"]
    filters: list[FilterCondition] = Field(default_factory=list)


class FilterUpdateEvent(_Event):
    """Change one filter row; omitted attributes keep their value."""

    type: Literal["filter-update"]
    filter_id: str = Field(min_length=1)
    field: str | None = None
    operator: FilterOperator | None = None
    value: str | None = None
    logic_operator: LogicOperator | None = None


class FilterRemoveEvent(_Event):
    type: Literal["filter-remove"]
    filter_id: str = Field(min_length=1)


class CommandEvent(_Event):
    """Events that carry no payload beyond their type."""

    type: Literal[
        "page-prev",
        "page-next",
        "new-record",
        "filter-add",
        "launch-process",
        "close-process",
        "confirm-delete",
        "cancel-delete",
        "open-bulk-delete",
        "confirm-bulk-delete",
        "cancel-bulk-delete",
        "edit-submit",
        "edit-success",
        "close-edit",
        "reset-column-widths",
        "toggle-settings",
        "close-settings",
        "dismiss-permission-error",
        "refresh",
    ]


WidgetEvent = Annotated[
    Union[
        SortChangeEvent,
        RowActionEvent,
        RowSelectionChangeEvent,
        ColumnResizeEvent,
        SearchInputEvent,
        ContainerResizeEvent,
        FlowStatusChangeEvent,
        EditErrorEvent,
        FilterChangeEvent,
        FilterUpdateEvent,
        FilterRemoveEvent,
        CommandEvent,
    ],
    Field(discriminator="type"),
]


class WidgetEventRequest(RootModel[WidgetEvent]):
    """Request body for ``POST /widgets/{widget_id}/events``."""


class WidgetEventResult(BaseModel):
    snapshot: WidgetSnapshot
    navigation: NavigationRequest | None = None
