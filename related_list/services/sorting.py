"""Client-side row sorting with missing-values-last semantics."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from functools import cmp_to_key
from typing import Any, Literal

from related_list.services.projection import ProjectedRow, first_row_number

SortDirection = Literal["asc", "desc"]


def resolve_sort_field(sort_key: str) -> str:
    """Map a bound column key back to the field whose value is compared."""

    if sort_key == "nameUrl":
        return "Name"
    if sort_key.endswith("_url"):
        return sort_key[: -len("_url")]
    return sort_key


def sort_value(row: Mapping[str, Any], sort_key: str) -> Any:
    field = resolve_sort_field(sort_key)
    if "." in field:
        relationship, _, leaf = field.partition(".")
        nested = row.get(relationship)
        return nested.get(leaf) if isinstance(nested, Mapping) else None
    return row.get(field)


def _is_missing(value: Any) -> bool:
    return value is None or value == ""


def _ordering(left: Any, right: Any) -> int:
    if isinstance(left, str) and isinstance(right, str):
        folded_left, folded_right = left.lower(), right.lower()
        if folded_left != folded_right:
            return 1 if folded_left > folded_right else -1
        return 1 if left > right else -1
    try:
        return 1 if left > right else -1
    except TypeError:
        left_text, right_text = str(left), str(right)
        if left_text == right_text:
            return 1 if type(left).__name__ > type(right).__name__ else -1
        return 1 if left_text > right_text else -1


def compare_values(left: Any, right: Any, direction: SortDirection = "asc") -> int:
    """Three-way comparison; missing values are greater than any present value."""

    left_missing, right_missing = _is_missing(left), _is_missing(right)
    if left_missing and right_missing:
        return 0
    if left_missing:
        return 1
    if right_missing:
        return -1
    if left == right:
        return 0
    result = _ordering(left, right)
    return result if direction == "asc" else -result


def sort_rows(
    rows: Sequence[ProjectedRow],
    sort_key: str,
    direction: SortDirection,
    *,
    page_number: int,
    page_size: int,
) -> list[ProjectedRow]:
    """Return re-ordered row copies with ``rowNumber`` reassigned by position."""

    ordered = sorted(
        rows,
        key=cmp_to_key(
            lambda left, right: compare_values(sort_value(left, sort_key), sort_value(right, sort_key), direction)
        ),
    )
    start = first_row_number(page_number, page_size)
    return [{**row, "rowNumber": start + position} for position, row in enumerate(ordered)]
