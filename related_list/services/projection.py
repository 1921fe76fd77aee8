"""Projection of raw fetched records into display-ready rows."""

from __future__ import annotations

import math
import re
from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from related_list.schema.cache import SchemaCache
from related_list.schema.field_kinds import (
    ADDRESS_COMPONENTS,
    address_prefix,
    is_address_field,
    is_email_field,
    is_phone_field,
    is_relationship_path,
    split_relationship_path,
)

ProjectedRow = dict[str, Any]

ID_FIELD = "Id"
EMAIL_ICON = "utility:email"
PHONE_ICON = "utility:phone_portrait"
_NON_DIGIT_RE = re.compile(r"\D")


def first_row_number(page_number: int, page_size: int) -> int:
    return (page_number - 1) * page_size + 1


def format_phone_number(phone_number: str) -> str:
    """Render ten-digit numbers as ``(AAA) BBB-CCCC``; anything else passes through."""

    digits = _NON_DIGIT_RE.sub("", phone_number)
    if len(digits) == 10:
        return f"({digits[:3]}) {digits[3:6]}-{digits[6:]}"
    return phone_number


def phone_digits(phone_number: str) -> str:
    return _NON_DIGIT_RE.sub("", phone_number)


def format_address_field(record: Mapping[str, Any], prefix: str, suffix: str = "") -> str:
    """Compose street / city-state-postal / country lines from component siblings."""

    components = {
        component: _clean(record.get(f"{prefix}{component}{suffix}")) for component in ADDRESS_COMPONENTS
    }
    return _compose_address(components)


def _format_compound_address(value: Mapping[str, Any]) -> str:
    lowered = {str(key).lower(): item for key, item in value.items()}
    components = {component: _clean(lowered.get(component.lower())) for component in ADDRESS_COMPONENTS}
    return _compose_address(components)


def _compose_address(components: Mapping[str, str]) -> str:
    locality = components["City"]
    if components["State"]:
        locality = f"{locality}, {components['State']}" if locality else components["State"]
    if components["PostalCode"]:
        locality = f"{locality} {components['PostalCode']}" if locality else components["PostalCode"]
    lines = [components["Street"], locality, components["Country"]]
    return "\n".join(line for line in lines if line)


def _clean(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


def _has_value(value: Any) -> bool:
    return value is not None and value != ""


def _coerce_number(value: Any) -> Any:
    if isinstance(value, bool) or value is None:
        return value
    if isinstance(value, str) and "_" in value:
        return value
    try:
        number = float(value)
    except (TypeError, ValueError):
        return value
    return number if math.isfinite(number) else value


def project_records(
    raw_records: Iterable[Mapping[str, Any]],
    display_fields: Sequence[str],
    schema: SchemaCache,
    *,
    page_number: int,
    page_size: int,
    default_currency_code: str,
) -> list[ProjectedRow]:
    """Flatten and augment fetched records; output keeps fetch order."""

    currency_fields = [
        field for field in display_fields if not is_relationship_path(field) and schema.is_currency(field)
    ]
    start = first_row_number(page_number, page_size)
    rows: list[ProjectedRow] = []
    for index, record in enumerate(raw_records):
        row: ProjectedRow = dict(record)
        row["rowNumber"] = start + index

        for field in currency_fields:
            if field not in row:
                continue
            row[field] = _coerce_number(row[field])
            if not row.get("CurrencyIsoCode"):
                row["CurrencyIsoCode"] = default_currency_code

        if _has_value(row.get("Name")):
            row["nameUrl"] = f"/{row.get(ID_FIELD)}"

        for field in display_fields:
            if is_relationship_path(field):
                _project_relationship(row, field)
                continue
            if is_email_field(field):
                _project_email(row, field)
            if is_phone_field(field):
                _project_phone(row, field)
            if is_address_field(field, schema.field_type(field)):
                _project_address(row, field)
        rows.append(row)
    return rows


def _project_relationship(row: ProjectedRow, field: str) -> None:
    relationship, leaf = split_relationship_path(field)
    nested = row.get(relationship)
    if not isinstance(nested, Mapping):
        return
    value = nested.get(leaf)
    row[field] = value
    row[f"{field}_url"] = f"/{nested.get(ID_FIELD)}"
    row[f"{field}_label"] = value


def _project_email(row: ProjectedRow, field: str) -> None:
    value = row.get(field)
    row[f"{field}_hasIcon"] = EMAIL_ICON if _has_value(value) else None
    if _has_value(value):
        row[f"{field}_url"] = f"mailto:{value}"


def _project_phone(row: ProjectedRow, field: str) -> None:
    value = row.get(field)
    present = _has_value(value)
    row[f"{field}_hasIcon"] = PHONE_ICON if present else None
    row[f"{field}_disabled"] = not present
    if present:
        text = str(value)
        row[f"{field}_formatted"] = format_phone_number(text)
        row[f"{field}_value"] = phone_digits(text)


def _project_address(row: ProjectedRow, field: str) -> None:
    value = row.get(field)
    if isinstance(value, Mapping):
        row[f"{field}_formatted"] = _format_compound_address(value)
        return
    prefix, suffix = address_prefix(field)
    row[f"{field}_formatted"] = format_address_field(row, prefix, suffix)
