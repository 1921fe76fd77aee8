"""Error taxonomy for the related list widget."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

_PERMISSION_MARKERS: tuple[str, ...] = (
    "insufficient_access",
    "insufficient access",
    "insufficient privileges",
    "permission",
    "not authorized",
    "access denied",
)


class RelatedListError(RuntimeError):
    """Base class for widget failures."""


class SchemaFetchError(RelatedListError):
    """Raised when object metadata cannot be loaded."""


class RecordFetchError(RelatedListError):
    """Raised when a page of records cannot be loaded."""


class DeleteError(RelatedListError):
    """A single-record delete failed."""


class BulkDeleteError(RelatedListError):
    """At least one delete of a bulk delete failed."""


class FormValidationError(RelatedListError):
    """The edit form reported validation errors."""


class ProcessError(RelatedListError):
    """The guided process could not be launched or reported an error."""


class InvalidModalTransition(RelatedListError):
    """A modal command arrived in a phase that does not accept it."""


class RecordServiceError(RelatedListError):
    """Raised by the record store adapter; ``body`` mirrors remote error payloads."""

    def __init__(self, message: str, *, body: Any = None) -> None:
        super().__init__(message)
        self.body = body if body is not None else {"message": message}


class PermissionDeniedError(RecordServiceError):
    """A remote call was rejected for lack of access."""


def error_message(error: BaseException | Any, default: str = "Unknown error") -> str:
    """Extract a user-facing message from an exception or remote error payload."""

    body = getattr(error, "body", None)
    if isinstance(body, list):
        messages = [str(item.get("message")) for item in body if isinstance(item, Mapping) and item.get("message")]
        if messages:
            return ", ".join(messages)
    elif isinstance(body, Mapping) and isinstance(body.get("message"), str) and body["message"]:
        return body["message"]
    if isinstance(error, Mapping) and isinstance(error.get("message"), str) and error["message"]:
        return error["message"]
    text = str(error).strip() if error is not None else ""
    return text or default


def is_permission_denied(message: str | None, error: BaseException | None = None) -> bool:
    if isinstance(error, PermissionDeniedError):
        return True
    if not message:
        return False
    lowered = message.lower()
    return any(marker in lowered for marker in _PERMISSION_MARKERS)


def form_error_message(detail: Mapping[str, Any] | None) -> str:
    """Message for an edit-form failure: top-level message, first field error, or detail."""

    default = "An error occurred while saving the record."
    if not detail:
        return default
    message = detail.get("message")
    if isinstance(message, str) and message:
        return message
    output = detail.get("output")
    field_errors = output.get("fieldErrors") if isinstance(output, Mapping) else None
    if isinstance(field_errors, Mapping) and field_errors:
        first = next(iter(field_errors.values()))
        if isinstance(first, list) and first and isinstance(first[0], Mapping) and first[0].get("message"):
            return str(first[0]["message"])
    nested = detail.get("detail")
    if isinstance(nested, str) and nested:
        return nested
    return default
