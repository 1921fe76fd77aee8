"""ORM models package exports."""

from related_list.models.account import Account
from related_list.models.base import Base
from related_list.models.contact import Contact
from related_list.models.opportunity import Opportunity

__all__ = ["Base", "Account", "Contact", "Opportunity"]
