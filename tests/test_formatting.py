from datetime import date

from finboard.formatting import (
    escape_dollar_for_markdown,
    format_currency,
    format_date,
    format_date_short,
    format_percentage,
)


def test_format_currency_usd():
    assert format_currency(1234.56, currency='USD') == '$1,234.56'
    assert format_currency(-50, currency='USD') == '-$50.00'
    assert format_currency(0, currency='USD') == '$0.00'
    assert format_currency(1234.56, currency='USD', include_symbol=False) == '1,234.56'


def test_format_currency_other_codes():
    assert format_currency(10, currency='eur') == '€10.00'
    assert format_currency(1000, currency='CHF') == 'CHF 1,000.00'


def test_format_currency_uses_configured_default(monkeypatch):
    from finboard import config
    monkeypatch.setattr(config, 'CURRENCY', 'GBP')
    assert format_currency(5) == '£5.00'


def test_escape_dollar_for_markdown():
    assert escape_dollar_for_markdown(1234.56) == '\\$1,234.56'


def test_format_percentage_rounds():
    assert format_percentage(76.9) == '77%'
    assert format_percentage(0) == '0%'
    assert format_percentage(110) == '110%'


def test_format_date_variants():
    assert format_date('2024-03-05') == 'Mar 5, 2024'
    assert format_date(date(2024, 12, 25)) == 'Dec 25, 2024'
    assert format_date(None) == 'N/A'
    assert format_date('garbage') == 'Invalid Date'
    assert format_date_short('2024-03-05') == 'Mar 5'
