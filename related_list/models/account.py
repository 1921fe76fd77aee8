"""Account ORM model."""

from sqlalchemy import Float, String
from sqlalchemy.orm import Mapped, mapped_column

from related_list.models.base import Base, CreatedAtMixin, IdMixin


class Account(Base, IdMixin, CreatedAtMixin):
    """Parent organisation record."""

    __tablename__ = "Account"
    __table_args__ = {
        "info": {
            "label": "Account",
            "icon_url": "standard:account",
            "createable": True,
            "updateable": True,
            "deletable": False,
        }
    }

    name: Mapped[str] = mapped_column("Name", String(255), nullable=False, info={"label": "Account Name"})
    industry: Mapped[str | None] = mapped_column("Industry", String(64), nullable=True)
    phone: Mapped[str | None] = mapped_column("Phone", String(40), nullable=True)
    annual_revenue: Mapped[float | None] = mapped_column(
        "AnnualRevenue",
        Float,
        nullable=True,
        info={"data_type": "Currency", "label": "Annual Revenue"},
    )
    billing_street: Mapped[str | None] = mapped_column("BillingStreet", String(255), nullable=True)
    billing_city: Mapped[str | None] = mapped_column("BillingCity", String(40), nullable=True)
    billing_state: Mapped[str | None] = mapped_column("BillingState", String(80), nullable=True)
    billing_postal_code: Mapped[str | None] = mapped_column("BillingPostalCode", String(20), nullable=True)
    billing_country: Mapped[str | None] = mapped_column("BillingCountry", String(80), nullable=True)
