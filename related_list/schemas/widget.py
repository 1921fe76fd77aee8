"""Widget configuration and the read-only snapshot handed to the presentation layer."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field, field_validator, model_validator

from related_list.config import get_settings
from related_list.schemas.columns import ColumnDefinition, LayoutMode, RowActionName
from related_list.schemas.filters import FilterCondition, FilterOption
from related_list.schemas.object_schema import FieldDescriptor, ObjectPermissions

NotificationVariant = Literal["success", "error", "warning", "info"]
NavigationKind = Literal["record_page", "object_page", "web_page"]
FlowStatus = Literal["FINISHED", "ERROR"]
ModalPhase = Literal["closed", "open", "submitting"]


class WidgetConfig(BaseModel):
    """Typed widget configuration, validated at construction."""

    child_object_api_name: str = Field(min_length=1)
    parent_object_api_name: str | None = None
    parent_lookup_field: str = Field(min_length=1)
    record_id: str = Field(min_length=1)
    display_fields: list[str] = Field(min_length=1)
    column_labels: list[str] = Field(default_factory=list)
    sortable_fields: list[str] = Field(default_factory=list)
    searchable_fields: list[str] = Field(default_factory=list)
    page_size: int = Field(default_factory=lambda: get_settings().default_page_size, ge=1, le=2000)
    flow_name: str | None = None
    flow_title: str = "Run Flow"
    list_title: str | None = None
    custom_icon_name: str | None = None
    icon_background_color: str | None = None
    row_actions: list[RowActionName] = Field(default_factory=lambda: ["view", "edit", "delete"])

    @field_validator("display_fields", mode="after")
    @classmethod
    def validate_display_fields(cls, value: list[str]) -> list[str]:
        cleaned = [field.strip() for field in value]
        if any(not field for field in cleaned):
            raise ValueError("Display fields cannot contain blank entries.")
        if len(set(cleaned)) != len(cleaned):
            raise ValueError("Display fields must be unique.")
        return cleaned

    @field_validator("sortable_fields", "searchable_fields", mode="after")
    @classmethod
    def normalize_field_list(cls, value: list[str]) -> list[str]:
        return _normalize_fields(value)

    @field_validator("column_labels", mode="after")
    @classmethod
    def strip_labels(cls, value: list[str]) -> list[str]:
        return [label.strip() for label in value]

    @model_validator(mode="after")
    def validate_consistency(self) -> "WidgetConfig":
        if self.column_labels and len(self.column_labels) != len(self.display_fields):
            raise ValueError(
                f"Expected {len(self.display_fields)} column labels, got {len(self.column_labels)}."
            )
        unknown_sortable = [field for field in self.sortable_fields if field not in self.display_fields]
        if unknown_sortable:
            raise ValueError(f"Sortable fields must be displayed: {', '.join(unknown_sortable)}")
        for field in [*self.display_fields, *self.searchable_fields]:
            if field.count(".") > 1 or field.startswith(".") or field.endswith("."):
                raise ValueError(f"Field path '{field}' must resolve through exactly one relationship.")
        return self

    @property
    def has_flow(self) -> bool:
        return bool(self.flow_name and self.flow_name.strip())

    @classmethod
    def from_delimited(
        cls,
        *,
        display_fields: str,
        column_labels: str = "",
        sortable_fields: str = "",
        searchable_fields: str = "",
        **options: Any,
    ) -> "WidgetConfig":
        """Build from comma-separated configuration strings."""

        return cls(
            display_fields=_split(display_fields),
            column_labels=_split(column_labels),
            sortable_fields=_split(sortable_fields),
            searchable_fields=_split(searchable_fields),
            **options,
        )


class Notification(BaseModel):
    """Transient toast message."""

    title: str
    message: str
    variant: NotificationVariant


class NavigationRequest(BaseModel):
    """Navigation the host should perform on behalf of the widget."""

    kind: NavigationKind
    url: str | None = None
    record_id: str | None = None
    object_api_name: str | None = None
    action: str | None = None
    default_field_values: str | None = None


class FlowInputVariable(BaseModel):
    name: str
    type: str = "String"
    value: Any = None


class FlowStatusEvent(BaseModel):
    """Status reported by a running guided process."""

    status: FlowStatus
    message: str | None = None


class ModalStates(BaseModel):
    edit: ModalPhase = "closed"
    delete: ModalPhase = "closed"
    bulk_delete: ModalPhase = "closed"
    flow: ModalPhase = "closed"


class SelectionSnapshot(BaseModel):
    ids: list[str]
    count: int
    show_bulk_delete: bool


class WidgetSnapshot(BaseModel):
    """Read-only state for rendering one widget."""

    widget_id: str | None = None
    title: str
    icon_name: str
    icon_style: str
    columns: list[ColumnDefinition]
    layout_mode: LayoutMode
    rows: list[dict[str, Any]]
    page_number: int
    page_size: int
    total_records: int
    total_pages: int
    is_first_page: bool
    is_last_page: bool
    is_loading: bool
    error: str | None
    permission_error: str | None
    selection: SelectionSnapshot
    modal_states: ModalStates
    search_term: str
    committed_search_term: str
    sorted_by: str | None
    sorted_direction: Literal["asc", "desc"]
    filters: list[FilterCondition]
    filter_field_options: list[FilterOption]
    filter_operator_options: list[FilterOption]
    filter_logic_options: list[FilterOption]
    notifications: list[Notification]
    selected_record_id: str | None
    editable_fields: list[FieldDescriptor]
    permissions: ObjectPermissions | None
    has_flow: bool
    flow_title: str
    flow_input_variables: list[FlowInputVariable]
    settings_menu_open: bool
    max_row_selection: int


def _split(raw: str | None) -> list[str]:
    if not raw:
        return []
    return [segment.strip() for segment in raw.split(",")]


def _normalize_fields(fields: list[str]) -> list[str]:
    ordered: list[str] = []
    seen: set[str] = set()
    for field in fields:
        clean = field.strip()
        if not clean or clean in seen:
            continue
        seen.add(clean)
        ordered.append(clean)
    return ordered
