"""Month keys, month ranges and day arithmetic.

A *month key* is the ``YYYY-MM`` string used to bucket transactions and to
identify the month a budget applies to.
"""

from __future__ import annotations

import math
import re
from datetime import date, datetime
from typing import Any, Iterator, Optional, Union

import pandas as pd

from .errors import ValidationError

DateLike = Union[date, datetime, str]

_MONTH_KEY_RE = re.compile(r"^\d{4}-(0[1-9]|1[0-2])$")


def is_month_key(text: Any) -> bool:
    return isinstance(text, str) and bool(_MONTH_KEY_RE.match(text))


def parse_date(value: Any) -> date:
    """Coerce a date, datetime, pandas Timestamp or ISO string to a ``date``.

    Raises:
        ValidationError: if the value is empty or cannot be parsed.
    """
    if value is None or (isinstance(value, str) and not value.strip()):
        raise ValidationError("date is required", field="date")
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    ts = pd.to_datetime(value, errors="coerce")
    if pd.isna(ts):
        raise ValidationError(f"invalid date: {value!r}", field="date")
    return ts.date()


def month_key(value: DateLike) -> str:
    """Project a date onto its ``YYYY-MM`` key (zero-padded month)."""
    if is_month_key(value):
        return value
    d = parse_date(value)
    return f"{d.year:04d}-{d.month:02d}"


def year_key(value: DateLike) -> str:
    return month_key(value)[:4]


def current_month_key(now: Optional[datetime] = None) -> str:
    """``YYYY-MM`` key for *now* in the local calendar."""
    return month_key(now or datetime.now())


def month_label(key: str) -> str:
    """Long label for a month key, e.g. ``"March 2024"``."""
    return _to_period(key).strftime("%B %Y")


def short_month_label(key: str) -> str:
    """Short label for a month key, e.g. ``"Mar 2024"``."""
    return _to_period(key).strftime("%b %Y")


def _to_period(value: DateLike) -> pd.Period:
    return pd.Period(month_key(value), freq="M")


class MonthRange:
    """``count`` consecutive month keys ending at ``end``, oldest first.

    Keys are produced lazily and the range can be iterated any number of
    times.
    """

    def __init__(self, count: int, end: DateLike):
        if count < 0:
            raise ValidationError("month count cannot be negative", field="count")
        self.count = count
        self.end = month_key(end)

    def __iter__(self) -> Iterator[str]:
        last = _to_period(self.end)
        for offset in range(self.count - 1, -1, -1):
            yield str(last - offset)

    def __len__(self) -> int:
        return self.count

    def __repr__(self) -> str:
        return f"MonthRange(count={self.count}, end={self.end!r})"


def enumerate_months(count: int, ending_at: Optional[DateLike] = None) -> MonthRange:
    """Trailing window of month keys, e.g. the last 6 or 12 months.

    Example:
        >>> list(enumerate_months(3, ending_at="2024-02"))
        ['2023-12', '2024-01', '2024-02']
    """
    return MonthRange(count, ending_at if ending_at is not None else current_month_key())


def days_between(a: DateLike, b: DateLike) -> int:
    """Whole days from ``b`` to ``a``, rounded up; negative when ``a`` is earlier."""
    left, right = _as_datetime(a), _as_datetime(b)
    return math.ceil((left - right).total_seconds() / 86400)


def _as_datetime(value: DateLike) -> datetime:
    if isinstance(value, datetime):
        return value
    d = parse_date(value)
    return datetime(d.year, d.month, d.day)
