"""Seed a demo account with related contacts and opportunities.

Usage (from repository root):
    python scripts/seed_demo.py
    # or
    python -m scripts.seed_demo
"""

from __future__ import annotations

import argparse
import sys
from datetime import date
from pathlib import Path

from sqlalchemy import delete

# Make `related_list` imports work when the script is run from any directory.
PROJECT_DIR = Path(__file__).resolve().parents[1]
if str(PROJECT_DIR) not in sys.path:
    sys.path.insert(0, str(PROJECT_DIR))

from related_list.db.session import SessionLocal, engine
from related_list.models import Account, Base, Contact, Opportunity


DEFAULT_ACCOUNT_ID = "001DEMO00000000001"


def build_demo_contacts(account_id: str) -> list[Contact]:
    """Return a deterministic set of contacts spanning two pages."""

    payloads = [
        ("Ada", "Lovelace", "CTO", "ada@example.com", "5551234567", "1 Main St", "Springfield", "IL", "62704"),
        ("Grace", "Hopper", "VP Engineering", "grace@example.com", "5559876543", "2 Navy Way", "Arlington", "VA", "22202"),
        ("Alan", "Turing", "Researcher", "alan@example.com", "12345", None, "London", None, None),
        ("Katherine", "Johnson", "Analyst", None, None, "3 Orbit Rd", "Hampton", "VA", "23666"),
        ("Edsger", "Dijkstra", "Architect", "edsger@example.com", "5550001111", None, None, None, None),
        ("Barbara", "Liskov", "Principal", "barbara@example.com", "5552223333", "4 Sub St", "Boston", "MA", "02110"),
        ("Donald", "Knuth", "Advisor", "don@example.com", None, None, "Stanford", "CA", None),
        ("Margaret", "Hamilton", "Director", "margaret@example.com", "5554445555", "5 Apollo Ave", "Cambridge", "MA", "02139"),
        ("John", "Backus", "Engineer", None, "5556667777", None, None, None, None),
        ("Frances", "Allen", "Fellow", "frances@example.com", "5558889999", "6 Compiler Ct", "Yorktown", "NY", "10598"),
        ("Ken", "Thompson", "Engineer", "ken@example.com", None, None, None, None, None),
        ("Radia", "Perlman", "Engineer", "radia@example.com", "5551112222", None, "Seattle", "WA", "98101"),
    ]
    return [
        Contact(
            account_id=account_id,
            first_name=first,
            last_name=last,
            name=f"{first} {last}",
            title=title,
            email=email,
            phone=phone,
            mailing_street=street,
            mailing_city=city,
            mailing_state=state,
            mailing_postal_code=postal_code,
            mailing_country="USA" if street else None,
        )
        for first, last, title, email, phone, street, city, state, postal_code in payloads
    ]


def build_demo_opportunities(account_id: str) -> list[Opportunity]:
    """Return a few opportunities with currency and percent values."""

    payloads = [
        ("Platform renewal", "Negotiation", 120000.0, 75.0, date(2026, 11, 30), "USD"),
        ("Analytics expansion", "Prospecting", 45000.0, 20.0, date(2027, 1, 15), None),
        ("EU rollout", "Closed Won", 310000.0, 100.0, date(2026, 9, 1), "EUR"),
    ]
    return [
        Opportunity(
            account_id=account_id,
            name=name,
            stage_name=stage,
            amount=amount,
            probability=probability,
            close_date=close_date,
            currency_iso_code=currency,
        )
        for name, stage, amount, probability, close_date, currency in payloads
    ]


def reset_account(db, account_id: str) -> None:
    """Remove existing records for the demo account."""

    db.execute(delete(Contact).where(Contact.account_id == account_id))
    db.execute(delete(Opportunity).where(Opportunity.account_id == account_id))
    db.execute(delete(Account).where(Account.id == account_id))
    db.commit()


def parse_args() -> argparse.Namespace:
    """Parse script CLI arguments."""

    parser = argparse.ArgumentParser(description="Seed a demo account with related records.")
    parser.add_argument(
        "--account-id",
        default=DEFAULT_ACCOUNT_ID,
        help=f"Account ID to seed (default: {DEFAULT_ACCOUNT_ID})",
    )
    parser.add_argument(
        "--no-reset",
        action="store_true",
        help="Do not delete existing records for the account before seeding.",
    )
    return parser.parse_args()


def main() -> None:
    """Seed demo data and print a short summary."""

    args = parse_args()
    account_id: str = args.account_id
    Base.metadata.create_all(bind=engine)

    with SessionLocal() as db:
        if not args.no_reset:
            reset_account(db, account_id)

        db.add(
            Account(
                id=account_id,
                name="Acme Analytical Engines",
                industry="Technology",
                phone="5550100200",
                annual_revenue=2500000.0,
                billing_street="100 Babbage Blvd",
                billing_city="Springfield",
                billing_state="IL",
                billing_postal_code="62701",
                billing_country="USA",
            )
        )
        contacts = build_demo_contacts(account_id)
        opportunities = build_demo_opportunities(account_id)
        db.add_all([*contacts, *opportunities])
        db.commit()

    print("Seed complete")
    print(f"account_id={account_id}")
    print(f"contacts_created={len(contacts)}")
    print(f"opportunities_created={len(opportunities)}")
    print()
    print("Try:")
    print("  POST /widgets")
    print(
        '  {"child_object_api_name": "Contact", "parent_lookup_field": "AccountId", '
        f'"record_id": "{account_id}", "display_fields": ["Name", "Email", "Phone", "MailingAddress"]}}'
    )


if __name__ == "__main__":
    main()
