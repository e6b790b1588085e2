"""pandas views of records and engine results, for export and plotting."""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Sequence, Union

import numpy as np
import pandas as pd

from .config import REPORTS_DIR
from .models import BudgetEvaluation, CategoryShare, GoalEvaluation, MonthlyTotals, ReportSummary, Transaction
from .periods import short_month_label

TRANSACTION_COLUMNS = ['id', 'Date', 'Description', 'Category', 'Type', 'Amount', 'Signed Amount']


def transactions_frame(transactions: Sequence[Transaction]) -> pd.DataFrame:
    """One row per transaction; ``Signed Amount`` is negative for expenses."""
    if not transactions:
        return pd.DataFrame(columns=TRANSACTION_COLUMNS)
    df = pd.DataFrame({
        'id': [t.id for t in transactions],
        'Date': pd.to_datetime([t.date for t in transactions]),
        'Description': [t.description for t in transactions],
        'Category': [t.category for t in transactions],
        'Type': [t.type.value for t in transactions],
        'Amount': [float(t.amount) for t in transactions],
    })
    df['Signed Amount'] = np.where(df['Type'] == 'income', df['Amount'], -df['Amount'])
    return df


def monthly_totals_frame(totals: Sequence[MonthlyTotals]) -> pd.DataFrame:
    """Columns: Month, Label, Income, Expenses, Net."""
    return pd.DataFrame(
        [
            {
                'Month': m.month,
                'Label': short_month_label(m.month),
                'Income': m.income,
                'Expenses': m.expenses,
                'Net': m.net,
            }
            for m in totals
        ],
        columns=['Month', 'Label', 'Income', 'Expenses', 'Net'],
    )


def category_breakdown_frame(breakdown: Sequence[CategoryShare]) -> pd.DataFrame:
    return pd.DataFrame(
        [{'Category': s.category, 'Amount': s.amount, 'Percentage': s.percentage} for s in breakdown],
        columns=['Category', 'Amount', 'Percentage'],
    )


def budget_evaluations_frame(evaluations: Sequence[BudgetEvaluation]) -> pd.DataFrame:
    return pd.DataFrame(
        [
            {
                'Category': e.budget.category,
                'Month': e.budget.month,
                'Budget': e.budget.monthly_limit,
                'Spent': e.spent,
                'Remaining': e.remaining,
                'Percentage': e.percentage,
                'Status': e.status.label,
            }
            for e in evaluations
        ],
        columns=['Category', 'Month', 'Budget', 'Spent', 'Remaining', 'Percentage', 'Status'],
    )


def goal_evaluations_frame(evaluations: Sequence[GoalEvaluation]) -> pd.DataFrame:
    return pd.DataFrame(
        [
            {
                'Name': e.goal.name,
                'Target': e.goal.target_amount,
                'Current': e.goal.current_amount,
                'Remaining': e.remaining_amount,
                'Progress': e.progress_percent,
                'Days Remaining': e.days_remaining,
                'Deadline': pd.Timestamp(e.goal.deadline),
                'Status': e.status.label,
            }
            for e in evaluations
        ],
        columns=['Name', 'Target', 'Current', 'Remaining', 'Progress', 'Days Remaining', 'Deadline', 'Status'],
    )


def report_frame(summary: ReportSummary, period: str = '') -> pd.DataFrame:
    """Summary row followed by one row per expense category."""
    rows = [{
        'Period': period,
        'Type': 'Summary',
        'Category': '',
        'Income': summary.income,
        'Expenses': summary.expenses,
        'Net Income': summary.net_income,
        'Savings Rate': summary.savings_rate,
        'Amount': np.nan,
        'Percentage': np.nan,
    }]
    for share in summary.category_breakdown:
        rows.append({
            'Period': period,
            'Type': 'Category Spending',
            'Category': share.category,
            'Amount': share.amount,
            'Percentage': share.percentage,
        })
    return pd.DataFrame(rows)


def export_report(
    summary: ReportSummary,
    period: str = '',
    path: Optional[Union[str, Path]] = None,
) -> Path:
    """Write :func:`report_frame` as CSV and return the file path.

    Defaults to ``REPORTS_DIR/report_<period>.csv``.
    """
    target = Path(path) if path is not None else REPORTS_DIR / f"report_{period or 'all'}.csv"
    target.parent.mkdir(parents=True, exist_ok=True)
    report_frame(summary, period).to_csv(target, index=False)
    return target
