"""Row selection that survives data refreshes."""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from related_list.services.projection import ID_FIELD, ProjectedRow


class SelectionTracker:
    """Tracks selected row identifiers plus the last-known selected rows."""

    def __init__(self, id_field: str = ID_FIELD) -> None:
        self._id_field = id_field
        self._ids: list[str] = []
        self._rows: list[ProjectedRow] = []

    @property
    def selected_ids(self) -> list[str]:
        return list(self._ids)

    @property
    def selected_rows(self) -> list[ProjectedRow]:
        return list(self._rows)

    @property
    def count(self) -> int:
        return len(self._ids)

    @property
    def has_selection(self) -> bool:
        return bool(self._ids)

    def on_selection_changed(self, selected_rows: Sequence[Mapping[str, Any]]) -> None:
        """Replace the tracked selection verbatim."""

        self._rows = [dict(row) for row in selected_rows]
        self._ids = [str(row.get(self._id_field)) for row in selected_rows]

    def reconcile(self, new_rows: Iterable[Mapping[str, Any]]) -> list[ProjectedRow]:
        """Keep only identifiers still present, ordered as in ``new_rows``."""

        tracked = set(self._ids)
        kept = [dict(row) for row in new_rows if str(row.get(self._id_field)) in tracked]
        self._rows = kept
        self._ids = [str(row.get(self._id_field)) for row in kept]
        return list(kept)

    def discard(self, record_id: str) -> None:
        if record_id not in self._ids:
            return
        self._rows = [row for row in self._rows if str(row.get(self._id_field)) != record_id]
        self._ids = [item for item in self._ids if item != record_id]

    def clear(self) -> None:
        self._ids = []
        self._rows = []
