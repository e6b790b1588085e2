"""Entity services over injected record stores.

These are the operations a front end calls: they fetch snapshots from the
stores, hand them to the pure engine functions, and enforce the rules the
stores themselves do not (one budget per category and month, protected
default categories, contributions that only ever add).
"""

from __future__ import annotations

import dataclasses
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

from . import config
from .aggregation import aggregate_by_month, filter_transactions, in_month, in_year, sort_recent
from .budgets import budget_overview, evaluate_budgets
from .db import SqliteRecordStore
from .errors import ValidationError
from .goals import apply_contribution, evaluate_goals
from .logging_config import get_logger
from .models import (
    AccountTotals,
    AccountType,
    BankAccount,
    Budget,
    BudgetEvaluation,
    Category,
    DashboardSnapshot,
    GoalEvaluation,
    MonthlyTotals,
    ReportSummary,
    SavingsGoal,
    Transaction,
    TransactionType,
)
from .periods import DateLike, enumerate_months, is_month_key
from .reports import MONTHLY, account_totals, dashboard_snapshot, scope_transactions, summarize
from .schema import coerce_record, is_positive_amount
from .store import InMemoryRecordStore, RecordStore

logger = get_logger(__name__)

DEFAULT_CATEGORIES = [
    ("Salary", TransactionType.INCOME, "#10b981"),
    ("Freelance", TransactionType.INCOME, "#14b8a6"),
    ("Investments", TransactionType.INCOME, "#0ea5e9"),
    ("Other Income", TransactionType.INCOME, "#6366f1"),
    ("Food", TransactionType.EXPENSE, "#f97316"),
    ("Rent", TransactionType.EXPENSE, "#ef4444"),
    ("Transportation", TransactionType.EXPENSE, "#eab308"),
    ("Utilities", TransactionType.EXPENSE, "#8b5cf6"),
    ("Entertainment", TransactionType.EXPENSE, "#ec4899"),
    ("Healthcare", TransactionType.EXPENSE, "#06b6d4"),
    ("Shopping", TransactionType.EXPENSE, "#f43f5e"),
    ("Other", TransactionType.EXPENSE, "#64748b"),
]


class TransactionService:

    def __init__(self, store: RecordStore[Transaction]):
        self.store = store

    def all(self) -> List[Transaction]:
        return self.store.list()

    def list(
        self,
        search: Optional[str] = None,
        category: Optional[str] = None,
        type: Optional[Union[TransactionType, str]] = None,
        date_from: Optional[DateLike] = None,
        date_to: Optional[DateLike] = None,
    ) -> List[Transaction]:
        """Filtered transactions, newest first."""
        filtered = filter_transactions(
            self.store.list(),
            search=search,
            category=category,
            type=type,
            date_from=date_from,
            date_to=date_to,
        )
        return sort_recent(filtered)

    def for_month(self, key: str) -> List[Transaction]:
        return sort_recent(in_month(self.store.list(), key))

    def for_year(self, year: Union[int, str]) -> List[Transaction]:
        return sort_recent(in_year(self.store.list(), year))

    def get(self, transaction_id: int) -> Transaction:
        return self.store.get(transaction_id)

    def create(self, transaction: Union[Transaction, Mapping[str, Any]]) -> Transaction:
        return self.store.create(transaction)

    def update(self, transaction_id: int, **changes: Any) -> Transaction:
        return self.store.update(transaction_id, **changes)

    def delete(self, transaction_id: int) -> bool:
        return self.store.delete(transaction_id)


class CategoryService:

    def __init__(self, store: RecordStore[Category]):
        self.store = store

    def list(self) -> List[Category]:
        return self.store.list()

    def by_type(self, type: Union[TransactionType, str]) -> List[Category]:
        return self.store.list(type=type)

    def _check_unique(self, category: Category) -> None:
        """Names are unique within a transaction type."""
        clash = self.store.list(name=category.name, type=category.type)
        if any(c.id != category.id for c in clash):
            raise ValidationError(
                f"A {category.type.value} category named {category.name!r} already exists",
                field="name",
            )

    def create(self, category: Union[Category, Mapping[str, Any]]) -> Category:
        """User-created categories are never default ones."""
        record = dataclasses.replace(coerce_record(Category, category), id=None, is_default=False)
        self._check_unique(record)
        return self.store.create(record)

    def update(self, category_id: int, **changes: Any) -> Category:
        self._check_unique(self.store.merged(self.store.get(category_id), changes))
        return self.store.update(category_id, **changes)

    def delete(self, category_id: int) -> bool:
        category = self.store.get(category_id)
        if category.is_default:
            logger.warning("Refused to delete default category %r", category.name)
            raise ValidationError("Cannot delete default category", field="is_default")
        return self.store.delete(category_id)

    def seed_defaults(self) -> List[Category]:
        """Create the built-in categories when the store is empty."""
        if self.store.list():
            return []
        created = [
            self.store.create(Category(id=None, name=name, type=kind, color=color, is_default=True))
            for name, kind, color in DEFAULT_CATEGORIES
        ]
        logger.info("Seeded %d default categories", len(created))
        return created


class BudgetService:
    """Budgets keyed by (category, month); at most one per pair."""

    def __init__(self, store: RecordStore[Budget]):
        self.store = store

    def list(self) -> List[Budget]:
        return self.store.list()

    def for_month(self, month: str) -> List[Budget]:
        return self.store.list(month=month)

    def find(self, category: str, month: str) -> Optional[Budget]:
        matches = self.store.list(category=category, month=month)
        return matches[0] if matches else None

    def get(self, budget_id: int) -> Budget:
        return self.store.get(budget_id)

    def upsert(self, category: str, month: str, monthly_limit: float) -> Budget:
        """Create the budget for ``category`` in ``month`` or replace its limit."""
        if not is_month_key(month):
            raise ValidationError("Month must be in YYYY-MM format", field="month")
        if not is_positive_amount(monthly_limit):
            raise ValidationError("Monthly limit must be greater than 0", field="monthly_limit")
        existing = self.find(category, month)
        if existing is not None:
            logger.info("Replacing %s budget for %s: %s -> %s",
                        category, month, existing.monthly_limit, monthly_limit)
            return self.store.update(existing.id, monthly_limit=monthly_limit)
        return self.store.create(Budget(id=None, category=category, month=month, monthly_limit=monthly_limit))

    def create(self, budget: Union[Budget, Mapping[str, Any]]) -> Budget:
        record = coerce_record(Budget, budget)
        return self.upsert(record.category, record.month, record.monthly_limit)

    def update(self, budget_id: int, **changes: Any) -> Budget:
        current = self.store.get(budget_id)
        proposed = self.store.merged(current, changes)
        if not is_positive_amount(proposed.monthly_limit):
            raise ValidationError("Monthly limit must be greater than 0", field="monthly_limit")
        clash = self.find(proposed.category, proposed.month)
        if clash is not None and clash.id != budget_id:
            raise ValidationError(
                f"A {proposed.category} budget for {proposed.month} already exists",
                field="category",
            )
        return self.store.update(budget_id, **changes)

    def delete(self, budget_id: int) -> bool:
        return self.store.delete(budget_id)

    def evaluate_month(self, month: str, transactions: Iterable[Transaction]) -> List[BudgetEvaluation]:
        return evaluate_budgets(self.for_month(month), list(transactions))


class GoalService:

    def __init__(self, store: RecordStore[SavingsGoal]):
        self.store = store

    def list(self) -> List[SavingsGoal]:
        """Goals ordered by deadline, nearest first."""
        return sorted(self.store.list(), key=lambda g: g.deadline)

    def get(self, goal_id: int) -> SavingsGoal:
        return self.store.get(goal_id)

    def create(self, goal: Union[SavingsGoal, Mapping[str, Any]]) -> SavingsGoal:
        """New goals always start from zero saved."""
        if isinstance(goal, SavingsGoal):
            goal = dataclasses.replace(goal, current_amount=0.0)
        else:
            goal = {**goal, "current_amount": 0.0}
        return self.store.create(goal)

    def update(self, goal_id: int, **changes: Any) -> SavingsGoal:
        return self.store.update(goal_id, **changes)

    def delete(self, goal_id: int) -> bool:
        return self.store.delete(goal_id)

    def add_contribution(self, goal_id: int, amount: float) -> SavingsGoal:
        goal = self.store.get(goal_id)
        try:
            funded = apply_contribution(goal, amount)
        except ValidationError:
            logger.warning("Rejected contribution of %r to goal %s", amount, goal_id)
            raise
        logger.info("Added %s to goal %s", amount, goal_id)
        return self.store.update(goal_id, current_amount=funded.current_amount)

    def evaluate(self, today: Optional[DateLike] = None) -> List[GoalEvaluation]:
        return evaluate_goals(self.store.list(), today=today)


class AccountService:

    def __init__(self, store: RecordStore[BankAccount]):
        self.store = store

    def list(self, account_type: Optional[Union[AccountType, str]] = None) -> List[BankAccount]:
        if account_type:
            return self.store.list(account_type=account_type)
        return self.store.list()

    def get(self, account_id: int) -> BankAccount:
        return self.store.get(account_id)

    def create(self, account: Union[BankAccount, Mapping[str, Any]]) -> BankAccount:
        return self.store.create(account)

    def update(self, account_id: int, **changes: Any) -> BankAccount:
        return self.store.update(account_id, **changes)

    def delete(self, account_id: int) -> bool:
        return self.store.delete(account_id)

    def totals(self) -> AccountTotals:
        return account_totals(self.store.list())


class FinanceBook:
    """All services over one set of stores."""

    def __init__(
        self,
        transactions: RecordStore[Transaction],
        categories: RecordStore[Category],
        budgets: RecordStore[Budget],
        goals: RecordStore[SavingsGoal],
        accounts: RecordStore[BankAccount],
    ):
        self.transactions = TransactionService(transactions)
        self.categories = CategoryService(categories)
        self.budgets = BudgetService(budgets)
        self.goals = GoalService(goals)
        self.accounts = AccountService(accounts)

    @classmethod
    def in_memory(cls, **records: Iterable[Any]) -> "FinanceBook":
        """Book backed by memory, optionally seeded per entity.

        Keyword arguments are ``transactions``, ``categories``, ``budgets``,
        ``goals`` and ``accounts``; each takes records or mappings.
        """
        return cls(
            transactions=InMemoryRecordStore(Transaction, records.get("transactions", ())),
            categories=InMemoryRecordStore(Category, records.get("categories", ())),
            budgets=InMemoryRecordStore(Budget, records.get("budgets", ())),
            goals=InMemoryRecordStore(SavingsGoal, records.get("goals", ())),
            accounts=InMemoryRecordStore(BankAccount, records.get("accounts", ())),
        )

    @classmethod
    def sqlite(cls, db_path: Optional[Union[str, Path]] = None) -> "FinanceBook":
        return cls(
            transactions=SqliteRecordStore(Transaction, db_path),
            categories=SqliteRecordStore(Category, db_path),
            budgets=SqliteRecordStore(Budget, db_path),
            goals=SqliteRecordStore(SavingsGoal, db_path),
            accounts=SqliteRecordStore(BankAccount, db_path),
        )

    def dashboard(self, today: Optional[DateLike] = None) -> DashboardSnapshot:
        return dashboard_snapshot(
            self.transactions.all(),
            self.goals.list(),
            self.budgets.list(),
            today=today,
        )

    def report(self, period: str, scope: str = MONTHLY) -> ReportSummary:
        return summarize(scope_transactions(self.transactions.all(), period, scope))

    def trend(self, months: int = config.DEFAULT_TREND_MONTHS, ending_at: Optional[DateLike] = None) -> List[MonthlyTotals]:
        """Income vs expenses for the trailing ``months`` months."""
        return aggregate_by_month(self.transactions.all(), enumerate_months(months, ending_at))

    def budget_report(self, month: str) -> Dict[str, Any]:
        evaluations = self.budgets.evaluate_month(month, self.transactions.all())
        return {"month": month, "evaluations": evaluations, "overview": budget_overview(evaluations)}
