"""Column planning from display fields, schema metadata and container geometry."""

from __future__ import annotations

from collections.abc import Callable, Collection, Iterable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from related_list.config import Settings, get_settings
from related_list.schema.cache import SchemaCache
from related_list.schema.field_kinds import FieldKind, classify, humanize_label
from related_list.schemas.columns import ColumnDefinition, ColumnLayout, RowAction

ROW_ACTION_CANDIDATES: tuple[RowAction, ...] = (
    RowAction(label="View", name="view", icon_name="utility:preview"),
    RowAction(label="Edit", name="edit", icon_name="utility:edit"),
    RowAction(label="Delete", name="delete", icon_name="utility:delete"),
)


@dataclass(slots=True, frozen=True)
class ColumnMetrics:
    """Fixed widths and thresholds of the responsive width algorithm."""

    row_number_width: int = 60
    action_width: int = 80
    heavy_column_width: int = 255
    even_split_max_columns: int = 4
    light_mode_max_columns: int = 5
    default_container_width: int = 1200

    @classmethod
    def from_settings(cls, settings: Settings) -> ColumnMetrics:
        return cls(
            row_number_width=settings.row_number_column_width_px,
            action_width=settings.action_column_width_px,
            heavy_column_width=settings.heavy_column_width_px,
            even_split_max_columns=settings.even_split_max_columns,
            light_mode_max_columns=settings.light_mode_max_columns,
            default_container_width=settings.default_container_width_px,
        )


def _relationship_spec(field: str) -> dict[str, Any]:
    return {
        "type": "url",
        "field_name": f"{field}_url",
        "type_attributes": {"label": {"fieldName": field}, "target": "_self"},
    }


def _name_spec(field: str) -> dict[str, Any]:
    return {
        "type": "url",
        "field_name": "nameUrl",
        "type_attributes": {"label": {"fieldName": "Name"}, "target": "_self"},
    }


def _email_spec(field: str) -> dict[str, Any]:
    return {
        "type": "button",
        "type_attributes": {
            "label": {"fieldName": field},
            "name": field,
            "iconName": {"fieldName": f"{field}_hasIcon"},
            "iconPosition": "left",
            "variant": "base",
            "disabled": False,
            "title": {"fieldName": field},
        },
    }


def _phone_spec(field: str) -> dict[str, Any]:
    return {
        "type": "button",
        "type_attributes": {
            "label": {"fieldName": field},
            "name": field,
            "iconName": {"fieldName": f"{field}_hasIcon"},
            "iconPosition": "left",
            "variant": "base",
            "disabled": {"fieldName": f"{field}_disabled"},
            "title": {"fieldName": field},
            "class": "phone-button",
        },
    }


def _currency_spec(field: str) -> dict[str, Any]:
    return {
        "type": "currency",
        "type_attributes": {
            "currencyCode": {"fieldName": "CurrencyIsoCode"},
            "currencyDisplayAs": "symbol",
            "minimumFractionDigits": 2,
            "maximumFractionDigits": 2,
        },
        "cell_attributes": {"alignment": "right"},
    }


def _percent_spec(field: str) -> dict[str, Any]:
    return {
        "type": "percent",
        "type_attributes": {"minimumFractionDigits": 2, "maximumFractionDigits": 2, "step": "0.01"},
    }


def _number_spec(fraction_digits: int) -> Callable[[str], dict[str, Any]]:
    def build(field: str) -> dict[str, Any]:
        return {
            "type": "number",
            "type_attributes": {
                "minimumFractionDigits": fraction_digits,
                "maximumFractionDigits": fraction_digits,
            },
        }

    return build


def _date_spec(field: str) -> dict[str, Any]:
    return {
        "type": "date",
        "type_attributes": {"year": "numeric", "month": "2-digit", "day": "2-digit"},
    }


def _datetime_spec(field: str) -> dict[str, Any]:
    return {
        "type": "date",
        "type_attributes": {
            "year": "numeric",
            "month": "2-digit",
            "day": "2-digit",
            "hour": "2-digit",
            "minute": "2-digit",
        },
    }


def _address_spec(field: str) -> dict[str, Any]:
    return {
        "type": "text",
        "field_name": f"{field}_formatted",
        "cell_attributes": {"alignment": "left"},
        "wrap_text": True,
    }


RENDER_SPECS: dict[FieldKind, Callable[[str], dict[str, Any]]] = {
    "relationship": _relationship_spec,
    "name": _name_spec,
    "email": _email_spec,
    "phone": _phone_spec,
    "currency": _currency_spec,
    "percent": _percent_spec,
    "double": _number_spec(2),
    "integer": _number_spec(0),
    "date": _date_spec,
    "datetime": _datetime_spec,
    "boolean": lambda field: {"type": "boolean"},
    "rich_text": lambda field: {"type": "richText"},
    "address": _address_spec,
    "text": lambda field: {"type": "text"},
}


def granted_row_actions(granted: Iterable[str]) -> list[RowAction]:
    """Candidate actions filtered by the granted set; View is always offered."""

    allowed = set(granted) | {"view"}
    return [action for action in ROW_ACTION_CANDIDATES if action.name in allowed]


def data_column_width(count: int, container_width_px: int, metrics: ColumnMetrics) -> int:
    """Width assigned to every data column before manual overrides."""

    if count <= 0:
        return 0
    if count <= metrics.even_split_max_columns:
        available = container_width_px - metrics.row_number_width - metrics.action_width
        return max(available // count, 0)
    return metrics.heavy_column_width


def layout_mode(count: int, metrics: ColumnMetrics) -> str:
    return "light" if count <= metrics.light_mode_max_columns else "heavy"


def column_label(field: str, index: int, schema: SchemaCache, label_overrides: Sequence[str]) -> str:
    if index < len(label_overrides) and label_overrides[index].strip():
        return label_overrides[index].strip()
    return schema.field_label(field) or humanize_label(field)


def plan_columns(
    display_fields: Sequence[str],
    schema: SchemaCache,
    *,
    label_overrides: Sequence[str] = (),
    sortable_fields: Collection[str] = (),
    width_overrides: Mapping[str, int] | None = None,
    container_width_px: int | None = None,
    granted_actions: Iterable[str] = ("view",),
    metrics: ColumnMetrics | None = None,
) -> ColumnLayout:
    """Build the full column sequence: row number, data columns, row actions."""

    metrics = metrics or ColumnMetrics()
    overrides = width_overrides or {}
    width = container_width_px if container_width_px is not None else metrics.default_container_width
    count = len(display_fields)
    computed_width = data_column_width(count, width, metrics)
    sortable = set(sortable_fields)

    columns = [
        ColumnDefinition(
            label="#",
            field_name="rowNumber",
            type="text",
            sortable=False,
            initial_width=metrics.row_number_width,
            fixed_width=metrics.row_number_width,
            type_attributes={"label": {"fieldName": "rowNumber"}},
            cell_attributes={"class": "slds-text-align_right slds-p-right_small"},
        )
    ]

    for index, field in enumerate(display_fields):
        spec = RENDER_SPECS[classify(field, schema)](field)
        bound = spec.get("field_name", field)
        if bound in overrides:
            initial_width = overrides[bound]
        elif field in overrides:
            initial_width = overrides[field]
        else:
            initial_width = computed_width
        columns.append(
            ColumnDefinition(
                label=column_label(field, index, schema, label_overrides),
                field_name=bound,
                type=spec["type"],
                sortable=field in sortable,
                initial_width=initial_width,
                wrap_text=spec.get("wrap_text", True),
                type_attributes=spec.get("type_attributes", {}),
                cell_attributes=spec.get("cell_attributes", {}),
            )
        )

    columns.append(
        ColumnDefinition(
            label="",
            type="action",
            initial_width=metrics.action_width,
            fixed_width=metrics.action_width,
            type_attributes={
                "rowActions": [action.model_dump() for action in granted_row_actions(granted_actions)]
            },
        )
    )
    return ColumnLayout(columns=columns, mode=layout_mode(count, metrics))


class ColumnPlanner:
    """Column planning with manual width overrides that survive recomputation."""

    def __init__(self, metrics: ColumnMetrics | None = None) -> None:
        self.metrics = metrics or ColumnMetrics.from_settings(get_settings())
        self._width_overrides: dict[str, int] = {}

    @property
    def width_overrides(self) -> dict[str, int]:
        return dict(self._width_overrides)

    def resize(self, column_name: str, width: int) -> None:
        self._width_overrides[column_name] = int(width)

    def reset(self) -> None:
        self._width_overrides.clear()

    def plan(
        self,
        display_fields: Sequence[str],
        schema: SchemaCache,
        *,
        label_overrides: Sequence[str] = (),
        sortable_fields: Collection[str] = (),
        container_width_px: int | None = None,
        granted_actions: Iterable[str] = ("view",),
    ) -> ColumnLayout:
        return plan_columns(
            display_fields,
            schema,
            label_overrides=label_overrides,
            sortable_fields=sortable_fields,
            width_overrides=self._width_overrides,
            container_width_px=container_width_px,
            granted_actions=granted_actions,
            metrics=self.metrics,
        )
