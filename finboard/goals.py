"""Savings goal progress and contributions."""

from __future__ import annotations

import dataclasses
from datetime import date
from typing import Iterable, List, Optional, Sequence

from . import config
from .errors import ValidationError
from .models import GoalEvaluation, GoalStatus, SavingsGoal
from .periods import DateLike, days_between, parse_date
from .schema import is_positive_amount


def goal_status(progress_percent: float, days_remaining: int) -> GoalStatus:
    """Completed beats everything; otherwise the deadline decides."""
    if progress_percent >= 100:
        return GoalStatus.COMPLETED
    if days_remaining < 0:
        return GoalStatus.OVERDUE
    if days_remaining < config.GOAL_URGENT_DAYS:
        return GoalStatus.URGENT
    return GoalStatus.ON_TRACK


def progress_percent(goal: SavingsGoal) -> float:
    if not is_positive_amount(goal.target_amount):
        raise ValidationError("target amount must be greater than zero", field="target_amount")
    return goal.current_amount * 100 / goal.target_amount


def evaluate_goal(goal: SavingsGoal, today: Optional[DateLike] = None) -> GoalEvaluation:
    """Progress, days left until the deadline and status for a goal.

    ``days_remaining`` is negative once the deadline has passed. Progress
    is not capped, so over-funded goals report more than 100 percent.

    Example:
        >>> goal = SavingsGoal(1, 'Trip', 1000, 400, date(2024, 1, 1))
        >>> evaluate_goal(goal, today=date(2024, 2, 1)).days_remaining
        -31
    """
    progress = progress_percent(goal)
    days = days_between(goal.deadline, today if today is not None else date.today())
    return GoalEvaluation(
        goal=goal,
        progress_percent=progress,
        days_remaining=days,
        status=goal_status(progress, days),
    )


def evaluate_goals(goals: Iterable[SavingsGoal], today: Optional[DateLike] = None) -> List[GoalEvaluation]:
    """Evaluate goals ordered by deadline, nearest first."""
    ordered = sorted(goals, key=lambda g: parse_date(g.deadline))
    return [evaluate_goal(g, today) for g in ordered]


def apply_contribution(goal: SavingsGoal, amount: float) -> SavingsGoal:
    """Return a copy of ``goal`` with ``amount`` added to its current amount.

    Raises:
        ValidationError: if ``amount`` is not a finite number above zero.
    """
    if not is_positive_amount(amount):
        raise ValidationError("contribution must be greater than zero", field="amount")
    return dataclasses.replace(goal, current_amount=goal.current_amount + amount)


def overall_progress(goals: Sequence[SavingsGoal]) -> float:
    """Combined progress across all goals (total saved over total targeted)."""
    total_target = sum(g.target_amount for g in goals)
    total_current = sum(g.current_amount for g in goals)
    return (total_current * 100 / total_target) if total_target > 0 else 0.0
