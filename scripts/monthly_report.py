#!/usr/bin/env python3
"""Print the income/expense report and budget status for one month."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Optional

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from finboard.errors import ValidationError
from finboard.formatting import format_currency, format_percentage
from finboard.frames import budget_evaluations_frame, export_report
from finboard.logging_config import setup_logging
from finboard.periods import current_month_key, month_label
from finboard.reports import MONTHLY, SCOPES
from finboard.services import FinanceBook


def main(month: str, scope: str = MONTHLY, db_path: Optional[str] = None, export: bool = False) -> int:
    book = FinanceBook.sqlite(db_path)
    try:
        summary = book.report(month, scope)
    except ValidationError as exc:
        print(f"Cannot build report: {exc}")
        return 1

    title = month_label(month) if scope == MONTHLY else month[:4]
    print(f"Report for {title}")
    print(f"  Income:       {format_currency(summary.income)}")
    print(f"  Expenses:     {format_currency(summary.expenses)}")
    print(f"  Net income:   {format_currency(summary.net_income)}")
    print(f"  Savings rate: {format_percentage(summary.savings_rate)}")
    print(f"  Transactions: {summary.transaction_count}")

    if summary.category_breakdown:
        print("\nSpending by category:")
        for share in summary.category_breakdown:
            print(f"  {share.category:<16} {format_currency(share.amount):>12}  {format_percentage(share.percentage)}")

    if scope == MONTHLY:
        budgets = book.budget_report(month)
        df = budget_evaluations_frame(budgets["evaluations"])
        if df.empty:
            print("\nNo budgets set for this month.")
        else:
            overview = budgets["overview"]
            print("\nBudgets:")
            print(df[['Category', 'Budget', 'Spent', 'Remaining', 'Status']].to_string(index=False))
            print(f"\n{overview.over_budget_count} over budget, "
                  f"{format_percentage(overview.percentage)} of {format_currency(overview.total_budgeted)} used")

    if export:
        path = export_report(summary, period=month)
        print(f"\nReport written to {path}")
    return 0


if __name__ == '__main__':
    parser = argparse.ArgumentParser(description='Show the finance report for a month or year.')
    parser.add_argument('--month', default=current_month_key(), help='Month key (YYYY-MM); defaults to this month')
    parser.add_argument('--scope', choices=SCOPES, default=MONTHLY, help='Report over the month or its whole year')
    parser.add_argument('--db', dest='db_path', default=None, help='SQLite database path')
    parser.add_argument('--export', action='store_true', help='Also write the report as CSV')
    parser.add_argument('--log-level', default=None, help='Logging level (default from FINBOARD_LOG_LEVEL)')
    args = parser.parse_args()
    setup_logging(level=args.log_level)
    sys.exit(main(args.month, scope=args.scope, db_path=args.db_path, export=args.export))
