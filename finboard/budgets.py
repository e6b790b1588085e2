"""Budget evaluation.

Joins a monthly category budget against the expense transactions of that
category and month to derive how much was spent, how much is left and the
budget status shown to the user.
"""

from __future__ import annotations

from typing import Iterable, List, Optional, Sequence

from . import config
from .models import Budget, BudgetEvaluation, BudgetOverview, BudgetStatus, Transaction, TransactionType
from .periods import month_key


def budget_status(percentage: float) -> BudgetStatus:
    """Classify a percentage-used figure.

    ``>= 100`` is over budget, ``75 <= p < 100`` is a warning, anything
    lower is on track.
    """
    if percentage >= config.BUDGET_OVER_PERCENT:
        return BudgetStatus.OVER_BUDGET
    if percentage >= config.BUDGET_WARNING_PERCENT:
        return BudgetStatus.WARNING
    return BudgetStatus.ON_TRACK


def spent_for(budget: Budget, transactions: Iterable[Transaction]) -> float:
    return sum(
        t.amount for t in transactions
        if t.type == TransactionType.EXPENSE
        and t.category == budget.category
        and month_key(t.date) == budget.month
    )


def budget_percentage(spent: float, monthly_limit: float) -> float:
    """Percentage of the limit used.

    A zero limit has no meaningful ratio: it reports 0 while nothing has
    been spent and 100 (over budget) as soon as anything has.
    """
    if monthly_limit > 0:
        return spent * 100 / monthly_limit
    return 100.0 if spent > 0 else 0.0


def evaluate_budget(budget: Budget, transactions: Iterable[Transaction]) -> BudgetEvaluation:
    """Compute spent, remaining, percentage and status for one budget.

    Only expense transactions matching the budget's category and month
    count towards ``spent``; the rest of ``transactions`` is ignored, so
    callers may pass the whole history.

    Example:
        >>> evaluation = evaluate_budget(Budget(1, 'Food', '2024-03', 500), transactions)
        >>> evaluation.status
        <BudgetStatus.OVER_BUDGET: 'OverBudget'>
    """
    spent = float(spent_for(budget, transactions))
    percentage = budget_percentage(spent, budget.monthly_limit)
    return BudgetEvaluation(
        budget=budget,
        spent=spent,
        remaining=budget.monthly_limit - spent,
        percentage=percentage,
        status=budget_status(percentage),
    )


def evaluate_budgets(
    budgets: Iterable[Budget],
    transactions: Sequence[Transaction],
    month: Optional[str] = None,
) -> List[BudgetEvaluation]:
    """Evaluate several budgets, most consumed first.

    When ``month`` is given only budgets for that month are evaluated.
    """
    transactions = list(transactions)
    evaluations = [
        evaluate_budget(b, transactions)
        for b in budgets
        if month is None or b.month == month
    ]
    return sorted(evaluations, key=lambda e: e.percentage, reverse=True)


def budget_overview(evaluations: Sequence[BudgetEvaluation]) -> BudgetOverview:
    """Totals across a set of evaluated budgets."""
    total_budgeted = sum(e.budget.monthly_limit for e in evaluations)
    total_spent = sum(e.spent for e in evaluations)
    return BudgetOverview(
        total_budgeted=total_budgeted,
        total_spent=total_spent,
        total_remaining=total_budgeted - total_spent,
        percentage=(total_spent * 100 / total_budgeted) if total_budgeted > 0 else 0.0,
        over_budget_count=sum(1 for e in evaluations if e.status == BudgetStatus.OVER_BUDGET),
    )
