"""Record fetch request/response payloads."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from related_list.schemas.filters import FilterCondition


class FetchRecordsRequest(BaseModel):
    """Parameters of one FetchRecords call, captured at issue time."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    child_object: str = Field(min_length=1)
    parent_lookup_field: str = Field(min_length=1)
    parent_id: str
    fields: list[str]
    page_size: int = Field(ge=1)
    page_number: int = Field(ge=1)
    search_term: str | None = None
    searchable_fields: list[str] = Field(default_factory=list)
    filters: list[FilterCondition] = Field(default_factory=list)


class RecordPage(BaseModel):
    """One page of raw records plus the unpaged total."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    records: list[dict[str, Any]] = Field(default_factory=list)
    total_records: int = Field(default=0, ge=0)
