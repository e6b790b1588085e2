from datetime import date

import pytest

from finboard.errors import ValidationError
from finboard.goals import (
    apply_contribution,
    evaluate_goal,
    evaluate_goals,
    goal_status,
    overall_progress,
    progress_percent,
)
from finboard.models import GoalStatus, SavingsGoal


def _goal(id=1, target=1000.0, current=400.0, deadline='2024-01-01', name='Trip'):
    return SavingsGoal(id=id, name=name, target_amount=target, current_amount=current,
                       deadline=date.fromisoformat(deadline))


def test_overdue_goal_scenario():
    result = evaluate_goal(_goal(), today=date(2024, 2, 1))

    assert result.progress_percent == pytest.approx(40.0)
    assert result.days_remaining == -31
    assert result.status == GoalStatus.OVERDUE
    assert result.remaining_amount == pytest.approx(600.0)


def test_completed_wins_regardless_of_deadline():
    future = evaluate_goal(_goal(current=1000.0, deadline='2099-12-31'), today=date(2024, 2, 1))
    past = evaluate_goal(_goal(current=1200.0, deadline='2020-01-01'), today=date(2024, 2, 1))

    assert future.status == GoalStatus.COMPLETED
    assert past.status == GoalStatus.COMPLETED
    assert past.progress_percent == pytest.approx(120.0)
    assert past.remaining_amount == 0


@pytest.mark.parametrize('progress, days, expected', [
    (50.0, 0, GoalStatus.URGENT),
    (50.0, 29, GoalStatus.URGENT),
    (50.0, 30, GoalStatus.ON_TRACK),
    (50.0, -1, GoalStatus.OVERDUE),
    (100.0, -1, GoalStatus.COMPLETED),
])
def test_goal_status_rules(progress, days, expected):
    assert goal_status(progress, days) == expected


def test_progress_requires_positive_target():
    with pytest.raises(ValidationError):
        progress_percent(_goal(target=0.0))


def test_evaluate_goals_orders_by_deadline():
    goals = [
        _goal(id=1, deadline='2024-09-01'),
        _goal(id=2, deadline='2024-03-01'),
        _goal(id=3, deadline='2024-06-01'),
    ]
    results = evaluate_goals(goals, today=date(2024, 2, 1))
    assert [r.goal.id for r in results] == [2, 3, 1]
    assert results[0].days_remaining == 29
    assert results[0].status == GoalStatus.URGENT
    assert results[1].status == GoalStatus.ON_TRACK


def test_apply_contribution_adds_exact_amount():
    goal = _goal(current=400.0)
    funded = apply_contribution(goal, 150.0)

    assert funded.current_amount == pytest.approx(550.0)
    assert funded.id == goal.id
    assert goal.current_amount == 400.0


@pytest.mark.parametrize('amount', [0, -10.0, float('nan'), float('inf')])
def test_apply_contribution_rejects_non_positive_or_non_finite(amount):
    goal = _goal()
    with pytest.raises(ValidationError):
        apply_contribution(goal, amount)
    assert goal.current_amount == 400.0


def test_overall_progress():
    goals = [_goal(id=1, target=1000.0, current=250.0), _goal(id=2, target=3000.0, current=750.0)]
    assert overall_progress(goals) == pytest.approx(25.0)
    assert overall_progress([]) == 0.0


def test_progress_rejects_non_finite_target():
    with pytest.raises(ValidationError):
        progress_percent(_goal(target=float('nan')))
