"""Plotly figures for the finance views.

Each function takes the engine results from :mod:`finboard.budgets`,
:mod:`finboard.goals` and :mod:`finboard.reports` (or the frames built from
them in :mod:`finboard.frames`) and returns a
``plotly.graph_objects.Figure``. Empty input produces an empty figure
titled "No data to display" rather than raising, so a front end can always
render whatever comes back.
"""

from __future__ import annotations

from typing import Sequence

import plotly.express as px
import plotly.graph_objects as go

from .frames import budget_evaluations_frame, category_breakdown_frame, goal_evaluations_frame, monthly_totals_frame
from .models import BudgetEvaluation, BudgetStatus, CategoryShare, GoalEvaluation, GoalStatus, MonthlyTotals

INCOME_COLOR = "#10b981"
EXPENSE_COLOR = "#ef4444"

BUDGET_STATUS_COLORS = {
    BudgetStatus.ON_TRACK.label: "#10b981",
    BudgetStatus.WARNING.label: "#f59e0b",
    BudgetStatus.OVER_BUDGET.label: "#ef4444",
}

GOAL_STATUS_COLORS = {
    GoalStatus.COMPLETED.label: "#10b981",
    GoalStatus.ON_TRACK.label: "#3b82f6",
    GoalStatus.URGENT.label: "#f59e0b",
    GoalStatus.OVERDUE.label: "#ef4444",
}


def _empty_figure() -> go.Figure:
    fig = go.Figure()
    fig.update_layout(title="No data to display")
    return fig


def income_expense_chart(totals: Sequence[MonthlyTotals], title: str | None = None) -> go.Figure:
    """Grouped bars of income and expenses per month.

    Parameters
    ----------
    totals : sequence of MonthlyTotals
        Output of :func:`finboard.aggregation.aggregate_by_month`, oldest
        month first.
    title : str, optional
        Chart title.

    Returns
    -------
    plotly.graph_objects.Figure
        Bar chart with one Income and one Expenses trace.
    """
    if not totals:
        return _empty_figure()
    df = monthly_totals_frame(totals)
    fig = go.Figure()
    fig.add_trace(go.Bar(x=df["Label"], y=df["Income"], name="Income", marker_color=INCOME_COLOR))
    fig.add_trace(go.Bar(x=df["Label"], y=df["Expenses"], name="Expenses", marker_color=EXPENSE_COLOR))
    fig.update_layout(
        title=title or "Income vs Expenses",
        barmode="group",
        xaxis_title="Month",
        yaxis_title="Amount",
    )
    return fig


def expense_pie_chart(breakdown: Sequence[CategoryShare], title: str | None = None) -> go.Figure:
    """Pie chart of expense share per category."""
    if not breakdown:
        return _empty_figure()
    df = category_breakdown_frame(breakdown)
    fig = px.pie(df, names="Category", values="Amount")
    fig.update_traces(textposition="inside", textinfo="percent+label")
    fig.update_layout(title=title or "Expenses by Category")
    return fig


def budget_progress_chart(evaluations: Sequence[BudgetEvaluation], title: str | None = None) -> go.Figure:
    """Horizontal bars of percentage used per budget, coloured by status.

    A dashed line marks 100 percent so over-budget categories stand out.
    """
    if not evaluations:
        return _empty_figure()
    df = budget_evaluations_frame(evaluations)
    fig = px.bar(
        df,
        x="Percentage",
        y="Category",
        orientation="h",
        color="Status",
        color_discrete_map=BUDGET_STATUS_COLORS,
        hover_data=["Budget", "Spent", "Remaining"],
    )
    fig.add_vline(x=100, line_dash="dash", line_color="#64748b")
    fig.update_layout(title=title or "Budget Usage", xaxis_title="% of budget used", yaxis_title="")
    return fig


def goal_progress_chart(evaluations: Sequence[GoalEvaluation], title: str | None = None) -> go.Figure:
    """Horizontal bars of progress per savings goal, capped at 100 for display."""
    if not evaluations:
        return _empty_figure()
    df = goal_evaluations_frame(evaluations)
    df["Shown"] = df["Progress"].clip(upper=100)
    fig = px.bar(
        df,
        x="Shown",
        y="Name",
        orientation="h",
        color="Status",
        color_discrete_map=GOAL_STATUS_COLORS,
        hover_data=["Target", "Current", "Days Remaining"],
    )
    fig.update_layout(
        title=title or "Savings Goals",
        xaxis_title="Progress (%)",
        xaxis_range=[0, 100],
        yaxis_title="",
    )
    return fig
