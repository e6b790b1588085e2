"""Record types and derived view models.

Records (``Transaction``, ``Category``, ``Budget``, ``SavingsGoal`` and
``BankAccount``) mirror what the record store holds. Everything else in
this module is computed on demand by the engine and never persisted.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import List, Optional


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------


class TransactionType(str, Enum):
    INCOME = "income"
    EXPENSE = "expense"


class AccountType(str, Enum):
    CHECKING = "Checking"
    SAVINGS = "Savings"
    CREDIT_CARD = "Credit Card"
    OTHER = "Other"


class BudgetStatus(str, Enum):
    OVER_BUDGET = "OverBudget"
    WARNING = "Warning"
    ON_TRACK = "OnTrack"

    @property
    def label(self) -> str:
        return _STATUS_LABELS[self.value]


class GoalStatus(str, Enum):
    COMPLETED = "Completed"
    OVERDUE = "Overdue"
    URGENT = "Urgent"
    ON_TRACK = "OnTrack"

    @property
    def label(self) -> str:
        return _STATUS_LABELS[self.value]


_STATUS_LABELS = {
    "OverBudget": "Over Budget",
    "Warning": "Warning",
    "OnTrack": "On Track",
    "Completed": "Completed",
    "Overdue": "Overdue",
    "Urgent": "Urgent",
}


# ---------------------------------------------------------------------------
# Records
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Transaction:
    id: Optional[int]
    amount: float
    category: str
    type: TransactionType
    description: str
    date: date

    @property
    def signed_amount(self) -> float:
        return self.amount if self.type == TransactionType.INCOME else -self.amount


@dataclass(frozen=True)
class Category:
    id: Optional[int]
    name: str
    type: TransactionType
    color: str = "#64748b"
    is_default: bool = False


@dataclass(frozen=True)
class Budget:
    id: Optional[int]
    category: str
    month: str  # YYYY-MM
    monthly_limit: float


@dataclass(frozen=True)
class SavingsGoal:
    id: Optional[int]
    name: str
    target_amount: float
    current_amount: float
    deadline: date


@dataclass(frozen=True)
class BankAccount:
    id: Optional[int]
    name: str
    bank_name: str
    account_number: str
    account_type: AccountType
    currency: str
    balance: float


# ---------------------------------------------------------------------------
# Derived view models
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class MonthlyTotals:
    month: str
    income: float = 0.0
    expenses: float = 0.0

    @property
    def net(self) -> float:
        return self.income - self.expenses


@dataclass(frozen=True)
class BudgetEvaluation:
    budget: Budget
    spent: float
    remaining: float
    percentage: float
    status: BudgetStatus


@dataclass(frozen=True)
class GoalEvaluation:
    goal: SavingsGoal
    progress_percent: float
    days_remaining: int
    status: GoalStatus

    @property
    def remaining_amount(self) -> float:
        return max(0.0, self.goal.target_amount - self.goal.current_amount)


@dataclass(frozen=True)
class CategoryShare:
    category: str
    amount: float
    percentage: float


@dataclass(frozen=True)
class ReportSummary:
    income: float = 0.0
    expenses: float = 0.0
    net_income: float = 0.0
    savings_rate: float = 0.0
    category_breakdown: List[CategoryShare] = field(default_factory=list)
    transaction_count: int = 0


@dataclass(frozen=True)
class BudgetOverview:
    total_budgeted: float
    total_spent: float
    total_remaining: float
    percentage: float
    over_budget_count: int


@dataclass(frozen=True)
class AccountTotals:
    total: float
    checking: float
    savings: float
    count: int


@dataclass(frozen=True)
class DashboardSnapshot:
    total_balance: float
    monthly_income: float
    monthly_expenses: float
    net_savings: float
    recent_transactions: List[Transaction] = field(default_factory=list)
    goals: List[GoalEvaluation] = field(default_factory=list)
    budgets: List[BudgetEvaluation] = field(default_factory=list)
