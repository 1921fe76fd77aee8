"""Contact ORM model."""

from datetime import date

from sqlalchemy import Boolean, Date, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column

from related_list.models.base import Base, CreatedAtMixin, IdMixin


class Contact(Base, IdMixin, CreatedAtMixin):
    """Person related to an account."""

    __tablename__ = "Contact"
    __table_args__ = {
        "info": {
            "label": "Contact",
            "icon_url": "standard:contact",
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
    first_name: Mapped[str | None] = mapped_column("FirstName", String(40), nullable=True)
    last_name: Mapped[str] = mapped_column("LastName", String(80), nullable=False)
    name: Mapped[str] = mapped_column(
        "Name",
        String(121),
        nullable=False,
        info={"label": "Full Name", "computed": True, "updateable": False},
    )
    title: Mapped[str | None] = mapped_column("Title", String(128), nullable=True)
    email: Mapped[str | None] = mapped_column("Email", String(80), nullable=True)
    phone: Mapped[str | None] = mapped_column("Phone", String(40), nullable=True)
    mobile_phone: Mapped[str | None] = mapped_column("MobilePhone", String(40), nullable=True)
    birthdate: Mapped[date | None] = mapped_column("Birthdate", Date, nullable=True)
    do_not_call: Mapped[bool] = mapped_column("DoNotCall", Boolean, default=False, nullable=False)
    mailing_street: Mapped[str | None] = mapped_column("MailingStreet", String(255), nullable=True)
    mailing_city: Mapped[str | None] = mapped_column("MailingCity", String(40), nullable=True)
    mailing_state: Mapped[str | None] = mapped_column("MailingState", String(80), nullable=True)
    mailing_postal_code: Mapped[str | None] = mapped_column("MailingPostalCode", String(20), nullable=True)
    mailing_country: Mapped[str | None] = mapped_column("MailingCountry", String(80), nullable=True)
