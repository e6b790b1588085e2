"""Report summaries, account totals and the dashboard snapshot."""

from __future__ import annotations

from datetime import date
from typing import Iterable, List, Optional, Sequence, Tuple

from .aggregation import aggregate_by_category, in_month, in_year, rank_categories, sort_recent, totals_by_type
from .budgets import evaluate_budgets
from .errors import ValidationError
from .goals import evaluate_goals
from .models import (
    AccountTotals,
    AccountType,
    BankAccount,
    Budget,
    CategoryShare,
    DashboardSnapshot,
    ReportSummary,
    SavingsGoal,
    Transaction,
    TransactionType,
)
from .periods import DateLike, enumerate_months, month_key, month_label, parse_date

MONTHLY = "monthly"
YEARLY = "yearly"
SCOPES = (MONTHLY, YEARLY)


def category_breakdown(transactions: Iterable[Transaction], expenses: Optional[float] = None) -> List[CategoryShare]:
    """Share of total expenses per expense category, largest first."""
    totals = aggregate_by_category(transactions, TransactionType.EXPENSE)
    total = sum(totals.values()) if expenses is None else expenses
    if total <= 0:
        return []
    return [
        CategoryShare(category=category, amount=amount, percentage=amount * 100 / total)
        for category, amount in rank_categories(totals)
    ]


def summarize(transactions: Iterable[Transaction]) -> ReportSummary:
    """Income, expenses, net income, savings rate and category breakdown.

    The savings rate is zero when there is no income. Scoping the input to
    a month or a year is left to the caller (see :func:`scope_transactions`).

    Example:
        >>> summarize([]).savings_rate
        0.0
    """
    transactions = list(transactions)
    income, expenses = totals_by_type(transactions)
    net_income = income - expenses
    return ReportSummary(
        income=income,
        expenses=expenses,
        net_income=net_income,
        savings_rate=(net_income * 100 / income) if income > 0 else 0.0,
        category_breakdown=category_breakdown(transactions, expenses),
        transaction_count=len(transactions),
    )


def scope_transactions(
    transactions: Iterable[Transaction],
    period: str,
    scope: str = MONTHLY,
) -> List[Transaction]:
    """Restrict transactions to the month (``monthly``) or year (``yearly``) of ``period``."""
    if scope == MONTHLY:
        return in_month(transactions, month_key(period))
    if scope == YEARLY:
        return in_year(transactions, str(period)[:4])
    raise ValidationError(f"unknown report scope: {scope!r}", field="scope")


def period_options(scope: str = MONTHLY, today: Optional[DateLike] = None) -> List[Tuple[str, str]]:
    """``(value, label)`` choices for the report period selector.

    Monthly reports offer the trailing 12 months, yearly reports the last
    three years (valued as the January key of each year).
    """
    current = parse_date(today) if today is not None else date.today()
    if scope == MONTHLY:
        return [(key, month_label(key)) for key in enumerate_months(12, ending_at=current)]
    if scope == YEARLY:
        return [(f"{year}-01", str(year)) for year in range(current.year - 2, current.year + 1)]
    raise ValidationError(f"unknown report scope: {scope!r}", field="scope")


def account_totals(accounts: Sequence[BankAccount]) -> AccountTotals:
    """Total balance plus the checking and savings subtotals."""
    def _sum(kind: Optional[AccountType] = None) -> float:
        return float(sum(a.balance for a in accounts if kind is None or a.account_type == kind))

    return AccountTotals(
        total=_sum(),
        checking=_sum(AccountType.CHECKING),
        savings=_sum(AccountType.SAVINGS),
        count=len(accounts),
    )


def dashboard_snapshot(
    transactions: Sequence[Transaction],
    goals: Sequence[SavingsGoal],
    budgets: Sequence[Budget],
    today: Optional[DateLike] = None,
    recent: int = 5,
    top_goals: int = 3,
) -> DashboardSnapshot:
    """Figures shown on the landing page.

    ``total_balance`` is all-time income minus expenses; the monthly
    figures cover the month containing ``today``.
    """
    current = parse_date(today) if today is not None else date.today()
    key = month_key(current)
    transactions = list(transactions)

    total_income, total_expenses = totals_by_type(transactions)
    monthly_income, monthly_expenses = totals_by_type(in_month(transactions, key))

    return DashboardSnapshot(
        total_balance=total_income - total_expenses,
        monthly_income=monthly_income,
        monthly_expenses=monthly_expenses,
        net_savings=monthly_income - monthly_expenses,
        recent_transactions=sort_recent(transactions)[:recent],
        goals=evaluate_goals(goals, today=current)[:top_goals],
        budgets=evaluate_budgets(budgets, transactions, month=key),
    )
