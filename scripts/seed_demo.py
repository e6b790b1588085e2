#!/usr/bin/env python3
"""Populate a database with default categories and a few months of demo data."""

from __future__ import annotations

import argparse
import sys
from datetime import date, timedelta
from pathlib import Path
from typing import Optional

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from finboard.db import clear_database, init_db
from finboard.logging_config import setup_logging
from finboard.models import AccountType, TransactionType
from finboard.periods import current_month_key, enumerate_months
from finboard.services import FinanceBook

MONTHLY_EXPENSES = [
    ("Rent", 1200.0, "Monthly rent"),
    ("Food", 420.0, "Groceries"),
    ("Transportation", 95.0, "Transit pass"),
    ("Utilities", 140.0, "Electricity and water"),
    ("Entertainment", 60.0, "Streaming and cinema"),
]


def main(db_path: Optional[str] = None, months: int = 3, reset: bool = False) -> None:
    init_db(db_path)
    if reset:
        clear_database(db_path)

    book = FinanceBook.sqlite(db_path)
    seeded = book.categories.seed_defaults()
    print(f"Seeded {len(seeded)} default categories")

    count = 0
    for key in enumerate_months(months):
        year, month = (int(part) for part in key.split("-"))
        book.transactions.create({
            "amount": 4200.0,
            "category": "Salary",
            "type": TransactionType.INCOME,
            "description": "Monthly salary",
            "date": date(year, month, 1),
        })
        count += 1
        for day, (category, amount, description) in enumerate(MONTHLY_EXPENSES, start=2):
            book.transactions.create({
                "amount": amount,
                "category": category,
                "type": TransactionType.EXPENSE,
                "description": description,
                "date": date(year, month, day),
            })
            count += 1
    print(f"Created {count} transactions over {months} months")

    this_month = current_month_key()
    for category, limit in [("Food", 400.0), ("Entertainment", 100.0), ("Utilities", 200.0)]:
        book.budgets.upsert(category, this_month, limit)
    print(f"Set 3 budgets for {this_month}")

    goal = book.goals.create({
        "name": "Emergency fund",
        "target_amount": 5000.0,
        "deadline": date.today() + timedelta(days=180),
    })
    book.goals.add_contribution(goal.id, 1250.0)

    book.accounts.create({
        "name": "Everyday",
        "bank_name": "Demo Bank",
        "account_number": "****1234",
        "account_type": AccountType.CHECKING,
        "currency": "USD",
        "balance": 2350.0,
    })
    book.accounts.create({
        "name": "Rainy day",
        "bank_name": "Demo Bank",
        "account_number": "****5678",
        "account_type": AccountType.SAVINGS,
        "currency": "USD",
        "balance": 1250.0,
    })
    print("Created 1 savings goal and 2 bank accounts")


if __name__ == '__main__':
    parser = argparse.ArgumentParser(description='Seed a finboard database with demo data.')
    parser.add_argument('--db', dest='db_path', default=None, help='SQLite database path')
    parser.add_argument('--months', type=int, default=3, help='How many trailing months of transactions')
    parser.add_argument('--reset', action='store_true', help='Delete existing rows first')
    args = parser.parse_args()
    setup_logging()
    main(db_path=args.db_path, months=args.months, reset=args.reset)
