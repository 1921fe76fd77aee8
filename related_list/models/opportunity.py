"""Opportunity ORM model."""

from datetime import date

from sqlalchemy import Date, Float, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column

from related_list.models.base import Base, CreatedAtMixin, IdMixin


class Opportunity(Base, IdMixin, CreatedAtMixin):
    """Pending deal tied to an account."""

    __tablename__ = "Opportunity"
    __table_args__ = {
        "info": {
            "label": "Opportunity",
            "icon_url": "standard:opportunity",
            "createable": True,
            "updateable": True,
            "deletable": True,
        }
    }

    account_id: Mapped[str | None] = mapped_column(
        "AccountId",
        ForeignKey("Account.Id", ondelete="SET NULL"),
        index=True,
        nullable=True,
        info={"data_type": "Reference", "label": "Account ID"},
    )
    name: Mapped[str] = mapped_column("Name", String(120), nullable=False, info={"label": "Opportunity Name"})
    stage_name: Mapped[str] = mapped_column("StageName", String(40), nullable=False, info={"label": "Stage"})
    amount: Mapped[float | None] = mapped_column(
        "Amount",
        Float,
        nullable=True,
        info={"data_type": "Currency"},
    )
    probability: Mapped[float | None] = mapped_column(
        "Probability",
        Float,
        nullable=True,
        info={"data_type": "Percent", "label": "Probability (%)"},
    )
    close_date: Mapped[date] = mapped_column("CloseDate", Date, nullable=False)
    currency_iso_code: Mapped[str | None] = mapped_column(
        "CurrencyIsoCode",
        String(3),
        nullable=True,
        info={"label": "Opportunity Currency"},
    )
