from datetime import date

import pandas as pd
import pytest

from finboard.budgets import evaluate_budgets
from finboard.frames import (
    budget_evaluations_frame,
    export_report,
    goal_evaluations_frame,
    monthly_totals_frame,
    transactions_frame,
)
from finboard.goals import evaluate_goals
from finboard.models import Budget, MonthlyTotals, SavingsGoal, Transaction, TransactionType
from finboard.reports import summarize


def _sample_transactions():
    return [
        Transaction(1, 2000.0, 'Salary', TransactionType.INCOME, 'Pay', date(2024, 3, 1)),
        Transaction(2, 450.0, 'Food', TransactionType.EXPENSE, 'Groceries', date(2024, 3, 4)),
        Transaction(3, 150.0, 'Fun', TransactionType.EXPENSE, 'Concert', date(2024, 3, 9)),
    ]


def test_transactions_frame_signs_expenses():
    df = transactions_frame(_sample_transactions())
    assert list(df['Signed Amount']) == [2000.0, -450.0, -150.0]
    assert pd.api.types.is_datetime64_any_dtype(df['Date'])
    assert df['Signed Amount'].sum() == pytest.approx(1400.0)


def test_transactions_frame_empty_has_columns():
    df = transactions_frame([])
    assert df.empty
    assert 'Signed Amount' in df.columns


def test_monthly_totals_frame():
    df = monthly_totals_frame([MonthlyTotals('2024-02', 100.0, 40.0), MonthlyTotals('2024-03')])
    assert list(df['Label']) == ['Feb 2024', 'Mar 2024']
    assert list(df['Net']) == [60.0, 0.0]


def test_budget_and_goal_frames_use_display_labels():
    budgets = budget_evaluations_frame(
        evaluate_budgets([Budget(1, 'Food', '2024-03', 400.0)], _sample_transactions()))
    assert budgets.loc[0, 'Status'] == 'Over Budget'
    assert budgets.loc[0, 'Remaining'] == pytest.approx(-50.0)

    goals = goal_evaluations_frame(evaluate_goals(
        [SavingsGoal(1, 'Trip', 1000.0, 250.0, date(2024, 12, 1))], today=date(2024, 3, 1)))
    assert goals.loc[0, 'Status'] == 'On Track'
    assert goals.loc[0, 'Remaining'] == pytest.approx(750.0)


def test_export_report_writes_csv(tmp_path):
    path = export_report(summarize(_sample_transactions()), period='2024-03', path=tmp_path / 'out' / 'r.csv')
    assert path.exists()
    df = pd.read_csv(path)
    assert list(df['Type']) == ['Summary', 'Category Spending', 'Category Spending']
    assert df.loc[0, 'Net Income'] == pytest.approx(1400.0)
    assert df.loc[1, 'Category'] == 'Food'
    assert df.loc[1, 'Percentage'] == pytest.approx(75.0)
