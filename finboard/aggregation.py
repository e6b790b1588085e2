"""Transaction aggregation: month buckets, category totals and list filters.

All functions take an already fetched snapshot of transactions and return
new collections; nothing here touches a record store.
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Optional, Sequence, Tuple, Union

from .models import MonthlyTotals, Transaction, TransactionType
from .periods import DateLike, month_key, parse_date, year_key


def _as_type(value: Union[TransactionType, str]) -> TransactionType:
    return value if isinstance(value, TransactionType) else TransactionType(str(value).lower())


def aggregate_by_month(
    transactions: Iterable[Transaction],
    month_keys: Iterable[str],
) -> List[MonthlyTotals]:
    """Sum income and expenses per month for the given month keys.

    One entry is returned per key, in the order supplied, including months
    with no transactions (zero totals). Transactions falling outside every
    key are ignored.

    Example:
        >>> from finboard.periods import enumerate_months
        >>> series = aggregate_by_month(transactions, enumerate_months(6))
    """
    keys = list(month_keys)
    buckets: Dict[str, List[float]] = {key: [0.0, 0.0] for key in keys}

    for t in transactions:
        bucket = buckets.get(month_key(t.date))
        if bucket is None:
            continue
        if t.type == TransactionType.INCOME:
            bucket[0] += t.amount
        else:
            bucket[1] += t.amount

    # a repeated key repeats its month's totals
    return [MonthlyTotals(month=key, income=buckets[key][0], expenses=buckets[key][1])
            for key in keys]


def aggregate_by_category(
    transactions: Iterable[Transaction],
    type: Union[TransactionType, str],
) -> Dict[str, float]:
    """Total amount per category, restricted to one transaction type.

    Categories without a matching transaction are absent from the result.
    Keys keep the order in which categories were first encountered.
    """
    wanted = _as_type(type)
    totals: Dict[str, float] = {}
    for t in transactions:
        if t.type != wanted:
            continue
        totals[t.category] = totals.get(t.category, 0.0) + t.amount
    return totals


def rank_categories(totals: Dict[str, float]) -> List[Tuple[str, float]]:
    """Category totals sorted by amount, largest first; ties keep input order."""
    return sorted(totals.items(), key=lambda item: item[1], reverse=True)


def totals_by_type(transactions: Iterable[Transaction]) -> Tuple[float, float]:
    """Return ``(income, expenses)`` for a set of transactions."""
    income = 0.0
    expenses = 0.0
    for t in transactions:
        if t.type == TransactionType.INCOME:
            income += t.amount
        else:
            expenses += t.amount
    return income, expenses


def in_month(transactions: Iterable[Transaction], key: str) -> List[Transaction]:
    return [t for t in transactions if month_key(t.date) == key]


def in_year(transactions: Iterable[Transaction], year: Union[int, str]) -> List[Transaction]:
    wanted = f"{int(year):04d}"
    return [t for t in transactions if year_key(t.date) == wanted]


def sort_recent(transactions: Iterable[Transaction]) -> List[Transaction]:
    """Newest first, as the transaction list displays them."""
    return sorted(transactions, key=lambda t: parse_date(t.date), reverse=True)


def filter_transactions(
    transactions: Sequence[Transaction],
    *,
    search: Optional[str] = None,
    category: Optional[str] = None,
    type: Optional[Union[TransactionType, str]] = None,
    date_from: Optional[DateLike] = None,
    date_to: Optional[DateLike] = None,
) -> List[Transaction]:
    """Apply the transaction list filters.

    ``search`` matches case-insensitively against description and category;
    ``date_from``/``date_to`` are inclusive. Empty filter values are ignored.
    """
    result = list(transactions)

    if search:
        needle = search.lower()
        result = [t for t in result
                  if needle in (t.description or "").lower() or needle in t.category.lower()]

    if category:
        result = [t for t in result if t.category == category]

    if type:
        wanted = _as_type(type)
        result = [t for t in result if t.type == wanted]

    if date_from:
        start = parse_date(date_from)
        result = [t for t in result if parse_date(t.date) >= start]

    if date_to:
        end = parse_date(date_to)
        result = [t for t in result if parse_date(t.date) <= end]

    return result
