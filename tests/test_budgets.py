from datetime import date

import pytest

from finboard.budgets import (
    budget_overview,
    budget_percentage,
    budget_status,
    evaluate_budget,
    evaluate_budgets,
)
from finboard.models import Budget, BudgetStatus, Transaction, TransactionType

EXPENSE = TransactionType.EXPENSE


def _expense(id, amount, category, day):
    return Transaction(id=id, amount=amount, category=category, type=EXPENSE,
                       description=category, date=date.fromisoformat(day))


def _food_march():
    return [
        _expense(1, 300.0, 'Food', '2024-03-05'),
        _expense(2, 250.0, 'Food', '2024-03-20'),
    ]


def test_evaluate_budget_over_budget_scenario():
    budget = Budget(id=1, category='Food', month='2024-03', monthly_limit=500.0)
    result = evaluate_budget(budget, _food_march())

    assert result.spent == pytest.approx(550.0)
    assert result.remaining == pytest.approx(-50.0)
    assert result.percentage == pytest.approx(110.0)
    assert result.status == BudgetStatus.OVER_BUDGET
    assert result.status.label == 'Over Budget'


def test_evaluate_budget_is_idempotent():
    budget = Budget(id=1, category='Food', month='2024-03', monthly_limit=500.0)
    transactions = _food_march()
    assert evaluate_budget(budget, transactions) == evaluate_budget(budget, transactions)


def test_evaluate_budget_ignores_other_months_categories_and_income():
    budget = Budget(id=1, category='Food', month='2024-03', monthly_limit=400.0)
    transactions = [
        _expense(1, 100.0, 'Food', '2024-03-31'),
        _expense(2, 999.0, 'Food', '2024-04-01'),
        _expense(3, 999.0, 'Rent', '2024-03-10'),
        Transaction(id=4, amount=999.0, category='Food', type=TransactionType.INCOME,
                    description='Refund', date=date(2024, 3, 12)),
    ]
    result = evaluate_budget(budget, transactions)
    assert result.spent == pytest.approx(100.0)
    assert result.status == BudgetStatus.ON_TRACK


@pytest.mark.parametrize('percentage, expected', [
    (0.0, BudgetStatus.ON_TRACK),
    (74.99, BudgetStatus.ON_TRACK),
    (75.0, BudgetStatus.WARNING),
    (99.99, BudgetStatus.WARNING),
    (100.0, BudgetStatus.OVER_BUDGET),
    (250.0, BudgetStatus.OVER_BUDGET),
])
def test_budget_status_thresholds(percentage, expected):
    assert budget_status(percentage) == expected


def test_zero_limit_percentage_is_finite():
    assert budget_percentage(0.0, 0.0) == 0.0
    assert budget_percentage(12.0, 0.0) == 100.0
    result = evaluate_budget(Budget(1, 'Food', '2024-03', 0.0), _food_march())
    assert result.status == BudgetStatus.OVER_BUDGET


def test_evaluate_budgets_filters_month_and_sorts_by_usage():
    budgets = [
        Budget(1, 'Food', '2024-03', 1000.0),
        Budget(2, 'Rent', '2024-03', 1000.0),
        Budget(3, 'Food', '2024-04', 100.0),
    ]
    transactions = _food_march() + [_expense(3, 900.0, 'Rent', '2024-03-01')]

    results = evaluate_budgets(budgets, transactions, month='2024-03')
    assert [r.budget.id for r in results] == [2, 1]
    assert results[0].status == BudgetStatus.WARNING


def test_budget_overview_totals():
    budgets = [Budget(1, 'Food', '2024-03', 500.0), Budget(2, 'Rent', '2024-03', 1000.0)]
    transactions = _food_march() + [_expense(3, 500.0, 'Rent', '2024-03-01')]
    overview = budget_overview(evaluate_budgets(budgets, transactions))

    assert overview.total_budgeted == pytest.approx(1500.0)
    assert overview.total_spent == pytest.approx(1050.0)
    assert overview.total_remaining == pytest.approx(450.0)
    assert overview.percentage == pytest.approx(70.0)
    assert overview.over_budget_count == 1


def test_budget_overview_empty():
    overview = budget_overview([])
    assert overview.total_budgeted == 0
    assert overview.percentage == 0
    assert overview.over_budget_count == 0
