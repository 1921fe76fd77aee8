"""Declarative base and shared column mixins."""

from datetime import datetime, timezone
from uuid import uuid4

from sqlalchemy import DateTime, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Declarative base for CRM object tables."""


def new_record_id() -> str:
    """Return an 18-character record identifier."""

    return uuid4().hex[:18]


class IdMixin:
    """Primary key stored under the CRM-style ``Id`` column."""

    id: Mapped[str] = mapped_column("Id", String(18), primary_key=True, default=new_record_id)


class CreatedAtMixin:
    """System-maintained creation timestamp."""

    created_at: Mapped[datetime] = mapped_column(
        "CreatedDate",
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
        info={"data_type": "DateTime", "label": "Created Date", "updateable": False},
    )
