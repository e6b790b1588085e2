from datetime import date, datetime

import pytest

from finboard.errors import ValidationError
from finboard.periods import (
    MonthRange,
    current_month_key,
    days_between,
    enumerate_months,
    is_month_key,
    month_key,
    month_label,
    parse_date,
    short_month_label,
    year_key,
)


def test_month_key_is_zero_padded():
    assert month_key(date(2024, 3, 5)) == '2024-03'
    assert month_key('2024-11-30') == '2024-11'
    assert month_key(datetime(2023, 1, 31, 23, 59)) == '2023-01'
    assert month_key('2024-03') == '2024-03'


def test_year_key_and_current_month():
    assert year_key('2024-03-05') == '2024'
    assert current_month_key(datetime(2024, 7, 4, 12, 0)) == '2024-07'


def test_is_month_key_rejects_bad_months():
    assert is_month_key('2024-12')
    assert not is_month_key('2024-13')
    assert not is_month_key('2024-3')
    assert not is_month_key(202403)


def test_parse_date_errors():
    with pytest.raises(ValidationError):
        parse_date('')
    with pytest.raises(ValidationError):
        parse_date('not a date')
    assert parse_date('2024-02-29') == date(2024, 2, 29)


def test_month_labels():
    assert month_label('2024-03') == 'March 2024'
    assert short_month_label('2024-03') == 'Mar 2024'


def test_enumerate_months_crosses_year_boundary():
    assert list(enumerate_months(3, ending_at='2024-02')) == ['2023-12', '2024-01', '2024-02']
    assert list(enumerate_months(1, ending_at=date(2024, 5, 17))) == ['2024-05']


def test_month_range_is_restartable_and_sized():
    months = MonthRange(12, '2024-12')
    first = list(months)
    second = list(months)
    assert first == second
    assert len(months) == 12
    assert first[0] == '2024-01'
    assert first[-1] == '2024-12'


def test_month_range_zero_and_negative_count():
    assert list(enumerate_months(0, ending_at='2024-01')) == []
    with pytest.raises(ValidationError):
        enumerate_months(-1, ending_at='2024-01')


def test_days_between_sign_and_rounding():
    assert days_between('2024-01-01', '2024-02-01') == -31
    assert days_between('2024-02-01', '2024-01-01') == 31
    assert days_between('2024-01-01', '2024-01-01') == 0
    # partial days round up
    assert days_between(datetime(2024, 1, 2, 0, 0), datetime(2024, 1, 1, 18, 0)) == 1
