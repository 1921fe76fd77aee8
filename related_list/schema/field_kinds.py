"""Closed classification of display fields into render kinds."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Literal

if TYPE_CHECKING:
    from related_list.schema.cache import SchemaCache

FieldKind = Literal[
    "relationship",
    "name",
    "email",
    "phone",
    "currency",
    "percent",
    "double",
    "integer",
    "date",
    "datetime",
    "boolean",
    "rich_text",
    "address",
    "text",
]

_TYPE_KINDS: tuple[tuple[str, FieldKind], ...] = (
    ("Currency", "currency"),
    ("Percent", "percent"),
    ("Double", "double"),
    ("Integer", "integer"),
    ("Date", "date"),
    ("DateTime", "datetime"),
    ("Boolean", "boolean"),
    ("RichText", "rich_text"),
)

_STANDARD_ADDRESS_PREFIXES = ("mailing", "shipping", "billing", "other")
_CUSTOM_SUFFIX = "__c"
_CAMEL_OR_UNDERSCORE_RE = re.compile(r"(?<=[a-z0-9])(?=[A-Z])|_+")

ADDRESS_COMPONENTS: tuple[str, ...] = ("Street", "City", "State", "PostalCode", "Country")


def is_relationship_path(field_path: str) -> bool:
    return "." in field_path


def is_name_field(field_path: str) -> bool:
    return field_path.lower() == "name"


def is_email_field(field_path: str) -> bool:
    return "email" in field_path.lower()


def is_phone_field(field_path: str) -> bool:
    lowered = field_path.lower()
    return "phone" in lowered or "mobile" in lowered


def is_address_field(field_path: str, data_type: str | None = None) -> bool:
    """Address by schema type, standard compound name, or custom address field."""

    if data_type == "Address":
        return True
    lowered = field_path.lower()
    if lowered.endswith("address") and any(prefix in lowered for prefix in _STANDARD_ADDRESS_PREFIXES):
        return True
    return lowered.endswith(_CUSTOM_SUFFIX) and "address" in lowered


def split_relationship_path(field_path: str) -> tuple[str, str]:
    """Split ``rel.leaf`` into its relationship name and leaf field."""

    relationship, _, leaf = field_path.partition(".")
    return relationship, leaf


def classify(field_path: str, schema: SchemaCache | None = None) -> FieldKind:
    """Return the render kind for a display field; first match wins."""

    if is_relationship_path(field_path):
        return "relationship"
    if is_name_field(field_path):
        return "name"
    if is_email_field(field_path):
        return "email"
    if is_phone_field(field_path):
        return "phone"

    data_type = schema.field_type(field_path) if schema is not None else None
    for type_name, kind in _TYPE_KINDS:
        if data_type == type_name:
            return kind
    if is_address_field(field_path, data_type):
        return "address"
    return "text"


def address_prefix(field_path: str) -> tuple[str, str]:
    """Return ``(prefix, suffix)`` used to locate an address field's component siblings.

    ``MailingAddress`` -> ``("Mailing", "")`` and ``Home_Address__c`` -> ``("Home_", "__c")``.
    """

    suffix = ""
    base = field_path
    if base.lower().endswith(_CUSTOM_SUFFIX):
        base = base[: -len(_CUSTOM_SUFFIX)]
        suffix = _CUSTOM_SUFFIX
    if base.lower().endswith("address"):
        base = base[: -len("address")]
    return base, suffix


def humanize_label(field_path: str) -> str:
    """Best-effort column label from an API name (``Annual_Revenue__c`` -> ``Annual Revenue``)."""

    hops = [_humanize_segment(segment) for segment in field_path.split(".")]
    return " ".join(hop for hop in hops if hop)


def _humanize_segment(segment: str) -> str:
    clean = segment.strip()
    if clean.lower().endswith(("__c", "__r")):
        clean = clean[:-3]
    words = [word for word in _CAMEL_OR_UNDERSCORE_RE.split(clean) if word]
    return " ".join(word[:1].upper() + word[1:].lower() for word in words)
