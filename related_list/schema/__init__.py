"""Schema metadata utilities: data types and field classification."""

from related_list.schema.data_types import FIELD_DATA_TYPE_VALUES, FieldDataType, normalize_data_type
from related_list.schema.field_kinds import FieldKind, classify, humanize_label

__all__ = [
    "FIELD_DATA_TYPE_VALUES",
    "FieldDataType",
    "FieldKind",
    "classify",
    "humanize_label",
    "normalize_data_type",
]
