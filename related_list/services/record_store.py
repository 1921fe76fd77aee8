"""SQLAlchemy-backed record, schema and permission services over mapped CRM tables."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Sequence
from datetime import date, datetime
from time import perf_counter
from typing import Any

from sqlalchemy import (
    Boolean,
    ColumnElement,
    Date,
    DateTime,
    Float,
    Integer,
    MetaData,
    Numeric,
    String,
    Table,
    and_,
    cast,
    delete,
    func,
    not_,
    or_,
    select,
)
from sqlalchemy.orm import Session

from related_list.config import get_settings
from related_list.db.session import SessionLocal
from related_list.models import Base
from related_list.schema.data_types import FieldDataType
from related_list.schema.field_kinds import (
    ADDRESS_COMPONENTS,
    address_prefix,
    humanize_label,
    is_address_field,
    is_relationship_path,
    split_relationship_path,
)
from related_list.schemas.filters import FilterCondition
from related_list.schemas.object_schema import FieldDescriptor, ObjectPermissions, ObjectSchema
from related_list.schemas.records import FetchRecordsRequest, RecordPage
from related_list.services.errors import PermissionDeniedError, RecordServiceError

logger = logging.getLogger(__name__)

_ID_COLUMN = "Id"
_CREATED_COLUMN = "CreatedDate"
_CURRENCY_COLUMN = "CurrencyIsoCode"


def _insufficient_access(message: str) -> PermissionDeniedError:
    return PermissionDeniedError(
        f"INSUFFICIENT_ACCESS: {message}",
        body={"errorCode": "INSUFFICIENT_ACCESS", "message": f"INSUFFICIENT_ACCESS: {message}"},
    )


def _column_data_type(column: Any) -> FieldDataType:
    declared = column.info.get("data_type")
    if declared:
        return declared
    if column.foreign_keys:
        return "Reference"
    column_type = column.type
    if isinstance(column_type, Boolean):
        return "Boolean"
    if isinstance(column_type, DateTime):
        return "DateTime"
    if isinstance(column_type, Date):
        return "Date"
    if isinstance(column_type, Integer):
        return "Integer"
    if isinstance(column_type, (Float, Numeric)):
        return "Double"
    return "Text"


def _jsonable(value: Any) -> Any:
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return value


class _QueryPlan:
    """Resolves field paths to columns of the base table or one-hop joined lookups."""

    def __init__(self, table: Table) -> None:
        self.table = table
        self.joins: dict[str, tuple[Any, ColumnElement]] = {}

    def column(self, field_path: str) -> ColumnElement:
        if is_relationship_path(field_path):
            relationship, leaf = split_relationship_path(field_path)
            target = self._join(relationship)
            if leaf not in target.c:
                raise RecordServiceError(f"No such column '{leaf}' on relationship '{relationship}'")
            return target.c[leaf]
        if field_path not in self.table.c:
            raise RecordServiceError(f"No such column '{field_path}' on entity '{self.table.name}'")
        return self.table.c[field_path]

    def _join(self, relationship: str) -> Any:
        if relationship in self.joins:
            return self.joins[relationship][0]
        lookup_name = f"{relationship[:-3]}__c" if relationship.endswith("__r") else f"{relationship}Id"
        if lookup_name not in self.table.c or not self.table.c[lookup_name].foreign_keys:
            raise RecordServiceError(f"Didn't understand relationship '{relationship}' on '{self.table.name}'")
        lookup = self.table.c[lookup_name]
        foreign_key = next(iter(lookup.foreign_keys))
        target = foreign_key.column.table.alias(f"rel_{relationship}")
        self.joins[relationship] = (target, lookup == target.c[foreign_key.column.name])
        return target

    def from_clause(self) -> Any:
        clause: Any = self.table
        for target, on_clause in self.joins.values():
            clause = clause.outerjoin(target, on_clause)
        return clause


class SqlRecordService:
    """Record store, schema and permission services backed by mapped tables.

    Blocking database work runs in a worker thread so the event loop stays free.
    """

    def __init__(
        self,
        session_factory: Callable[[], Session] = SessionLocal,
        metadata: MetaData = Base.metadata,
        *,
        default_currency_code: str | None = None,
    ) -> None:
        self._session_factory = session_factory
        self._metadata = metadata
        self._default_currency_code = default_currency_code or get_settings().default_currency_code

    def _table(self, object_api_name: str) -> Table:
        table = self._metadata.tables.get(object_api_name)
        if table is None:
            raise RecordServiceError(
                f"sObject type '{object_api_name}' is not supported.",
                body={"errorCode": "INVALID_TYPE", "message": f"sObject type '{object_api_name}' is not supported."},
            )
        return table

    # Records

    async def fetch_records(self, request: FetchRecordsRequest) -> RecordPage:
        return await asyncio.to_thread(self._fetch_records_sync, request)

    def _fetch_records_sync(self, request: FetchRecordsRequest) -> RecordPage:
        started = perf_counter()
        table = self._table(request.child_object)
        plan = _QueryPlan(table)

        selected: list[ColumnElement] = [table.c[_ID_COLUMN].label(_ID_COLUMN)]
        relationship_labels: dict[str, list[tuple[str, str]]] = {}
        for field in request.fields:
            if field == _ID_COLUMN:
                continue
            if is_relationship_path(field):
                relationship, leaf = split_relationship_path(field)
                pairs = relationship_labels.setdefault(relationship, [])
                if not pairs:
                    id_label = f"{relationship}__{_ID_COLUMN}"
                    selected.append(plan.column(f"{relationship}.{_ID_COLUMN}").label(id_label))
                    pairs.append((_ID_COLUMN, id_label))
                if leaf == _ID_COLUMN:
                    continue
                label = f"{relationship}__{leaf}"
                selected.append(plan.column(field).label(label))
                pairs.append((leaf, label))
            elif field not in table.c and is_address_field(field):
                selected.extend(table.c[name].label(name) for name in self._address_columns(table, field))
            else:
                selected.append(plan.column(field).label(field))

        requested = set(request.fields)
        currency_requested = any(
            table.c[name].info.get("data_type") == "Currency" for name in requested if name in table.c
        )
        if currency_requested and _CURRENCY_COLUMN in table.c and _CURRENCY_COLUMN not in requested:
            selected.append(table.c[_CURRENCY_COLUMN].label(_CURRENCY_COLUMN))

        filters: list[ColumnElement] = [plan.column(request.parent_lookup_field) == request.parent_id]
        search_term = (request.search_term or "").strip()
        if search_term and request.searchable_fields:
            filters.append(
                or_(
                    *[
                        cast(plan.column(field), String).icontains(search_term, autoescape=True)
                        for field in request.searchable_fields
                    ]
                )
            )
        condition_clause = self._conditions_clause(plan, request.filters)
        if condition_clause is not None:
            filters.append(condition_clause)

        from_clause = plan.from_clause()
        total_stmt = select(func.count()).select_from(from_clause).where(*filters)
        order = [table.c[_CREATED_COLUMN].desc()] if _CREATED_COLUMN in table.c else []
        stmt = (
            select(*selected)
            .select_from(from_clause)
            .where(*filters)
            .order_by(*order, table.c[_ID_COLUMN].asc())
            .limit(request.page_size)
            .offset((request.page_number - 1) * request.page_size)
        )

        with self._session_factory() as db:
            total = int(db.scalar(total_stmt) or 0)
            rows = db.execute(stmt).mappings().all()

        records = [self._shape_record(dict(row), relationship_labels) for row in rows]
        logger.info(
            "related_list.sql_fetch_timing object=%s page=%d rows=%d total=%d elapsed_ms=%.2f",
            request.child_object,
            request.page_number,
            len(records),
            total,
            (perf_counter() - started) * 1000.0,
        )
        return RecordPage(records=records, total_records=total)

    def _address_columns(self, table: Table, field: str) -> list[str]:
        prefix, suffix = address_prefix(field)
        names = [f"{prefix}{component}{suffix}" for component in ADDRESS_COMPONENTS]
        present = [name for name in names if name in table.c]
        if not present:
            raise RecordServiceError(f"No such column '{field}' on entity '{table.name}'")
        return present

    def _shape_record(
        self,
        row: dict[str, Any],
        relationship_labels: dict[str, list[tuple[str, str]]],
    ) -> dict[str, Any]:
        record: dict[str, Any] = {}
        nested_keys = {label for pairs in relationship_labels.values() for _, label in pairs}
        for key, value in row.items():
            if key not in nested_keys:
                record[key] = _jsonable(value)
        for relationship, pairs in relationship_labels.items():
            values = {leaf: _jsonable(row.get(label)) for leaf, label in pairs}
            # Unresolved lookups come back as a null relationship.
            record[relationship] = values if any(value is not None for value in values.values()) else None
        return record

    def _conditions_clause(self, plan: _QueryPlan, conditions: Sequence[FilterCondition]) -> ColumnElement | None:
        """Chain conditions left to right, each joined to the previous by its logic operator."""

        clause: ColumnElement | None = None
        for condition in conditions:
            if not condition.field:
                continue
            expression = self._condition_expression(plan.column(condition.field), condition)
            if clause is None:
                clause = expression
            elif condition.logic_operator == "OR":
                clause = or_(clause, expression)
            else:
                clause = and_(clause, expression)
        return clause

    def _condition_expression(self, column: ColumnElement, condition: FilterCondition) -> ColumnElement:
        text = cast(column, String)
        operator = condition.operator
        if operator == "LIKE":
            return text.icontains(condition.value, autoescape=True)
        if operator == "does not contain":
            return or_(column.is_(None), not_(text.icontains(condition.value, autoescape=True)))
        if operator == "STARTS":
            return text.istartswith(condition.value, autoescape=True)
        if operator == "ENDS":
            return text.iendswith(condition.value, autoescape=True)

        value = self._coerce_value(column, condition)
        if operator == "=":
            return column.is_(None) if value is None else column == value
        if operator == "!=":
            return column.is_not(None) if value is None else or_(column.is_(None), column != value)
        if operator == "<":
            return column < value
        return column > value

    def _coerce_value(self, column: ColumnElement, condition: FilterCondition) -> Any:
        raw = condition.value.strip()
        if raw == "" or raw.lower() == "null":
            return None
        column_type = column.type
        try:
            if isinstance(column_type, Boolean):
                return raw.lower() in ("true", "1", "yes")
            if isinstance(column_type, DateTime):
                return datetime.fromisoformat(raw)
            if isinstance(column_type, Date):
                return date.fromisoformat(raw)
            if isinstance(column_type, Integer):
                return int(raw)
            if isinstance(column_type, (Float, Numeric)):
                return float(raw)
        except ValueError as exc:
            raise RecordServiceError(f"Invalid value '{condition.value}' for field '{condition.field}'") from exc
        return condition.value

    async def delete_record(self, record_id: str, object_api_name: str) -> None:
        await asyncio.to_thread(self._delete_record_sync, record_id, object_api_name)

    def _delete_record_sync(self, record_id: str, object_api_name: str) -> None:
        table = self._table(object_api_name)
        if not table.info.get("deletable", False):
            raise _insufficient_access(f"insufficient access rights on object {object_api_name}")
        with self._session_factory() as db:
            result = db.execute(delete(table).where(table.c[_ID_COLUMN] == record_id))
            if result.rowcount == 0:
                db.rollback()
                raise RecordServiceError(
                    "ENTITY_IS_DELETED: entity is deleted",
                    body={"errorCode": "ENTITY_IS_DELETED", "message": "ENTITY_IS_DELETED: entity is deleted"},
                )
            db.commit()
        logger.info("related_list.record_deleted object=%s record_id=%s", object_api_name, record_id)

    # Metadata

    async def fetch_schema(self, object_api_name: str) -> ObjectSchema:
        return await asyncio.to_thread(self.describe, object_api_name)

    def describe(self, object_api_name: str) -> ObjectSchema:
        """Derive object metadata from column types and ``info`` annotations."""

        table = self._table(object_api_name)
        object_updateable = bool(table.info.get("updateable", False))
        fields: dict[str, FieldDescriptor] = {}
        for column in table.columns:
            info = column.info
            data_type = _column_data_type(column)
            required = info.get(
                "required",
                not column.nullable and not column.primary_key and column.default is None,
            )
            fields[column.name] = FieldDescriptor(
                api_name=column.name,
                data_type=data_type,
                label=info.get("label") or humanize_label(column.name),
                required=bool(required),
                updateable=bool(info.get("updateable", object_updateable and not column.primary_key)),
                computed=bool(info.get("computed", False)),
                default_currency_code=self._default_currency_code if data_type == "Currency" else None,
            )

        for name in list(fields):
            if not name.endswith("Street"):
                continue
            prefix = name[: -len("Street")]
            if f"{prefix}City" not in fields:
                continue
            compound = f"{prefix}Address"
            fields.setdefault(
                compound,
                FieldDescriptor(
                    api_name=compound,
                    data_type="Address",
                    label=humanize_label(compound),
                    computed=True,
                ),
            )

        return ObjectSchema(
            api_name=table.name,
            label=table.info.get("label") or humanize_label(table.name),
            theme_icon_url=table.info.get("icon_url"),
            fields=fields,
        )

    async def fetch_permissions(self, object_api_name: str) -> ObjectPermissions:
        table = self._table(object_api_name)
        return ObjectPermissions(
            is_createable=bool(table.info.get("createable", False)),
            is_updateable=bool(table.info.get("updateable", False)),
            is_deletable=bool(table.info.get("deletable", False)),
        )
