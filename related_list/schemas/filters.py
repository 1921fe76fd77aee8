"""Filter conditions produced by the filter panel."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

FilterOperator = Literal["=", "!=", "<", ">", "LIKE", "does not contain", "STARTS", "ENDS"]
LogicOperator = Literal["AND", "OR"]


class FilterCondition(BaseModel):
    """One row of the filter panel; ``logic_operator`` joins it to the previous row."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str | None = None
    field: str = ""
    operator: FilterOperator = "="
    value: str = ""
    logic_operator: LogicOperator = "AND"


class FilterOption(BaseModel):
    """Field choice offered by the filter panel."""

    label: str
    value: str
