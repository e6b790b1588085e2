"""Both record store implementations must behave the same way.

Every test runs once against the in-memory store and once against a
SQLite store in a temporary directory.
"""

from __future__ import annotations

from datetime import date

import pytest

from finboard.db import SqliteRecordStore, clear_database, read_frame
from finboard.errors import NotFoundError, ValidationError
from finboard.models import Budget, Category, Transaction, TransactionType
from finboard.store import InMemoryRecordStore


@pytest.fixture(params=['memory', 'sqlite'])
def make_store(request, tmp_path):
    def factory(record_type):
        if request.param == 'memory':
            return InMemoryRecordStore(record_type)
        return SqliteRecordStore(record_type, tmp_path / 'finboard.db')
    return factory


def _lunch(**overrides):
    values = {
        'amount': 12.5,
        'category': 'Food',
        'type': 'expense',
        'description': 'Lunch',
        'date': '2024-03-05',
    }
    values.update(overrides)
    return values


def test_create_assigns_ids_and_round_trips(make_store):
    store = make_store(Transaction)
    first = store.create(_lunch())
    second = store.create(_lunch(description='Dinner', amount=30))

    assert first.id is not None
    assert second.id != first.id
    assert store.get(first.id) == first
    assert first.type == TransactionType.EXPENSE
    assert first.date == date(2024, 3, 5)
    assert [t.id for t in store.list()] == [first.id, second.id]


def test_create_validates(make_store):
    store = make_store(Transaction)
    with pytest.raises(ValidationError):
        store.create(_lunch(amount=-1))
    assert store.list() == []


def test_list_filters_by_any_field_spelling(make_store):
    store = make_store(Budget)
    store.create({'category': 'Food', 'month': '2024-03', 'monthly_limit': 500})
    store.create({'category': 'Rent', 'month': '2024-03', 'monthly_limit': 1200})
    store.create({'category': 'Food', 'month': '2024-04', 'monthly_limit': 450})

    assert len(store.list(month='2024-03')) == 2
    food_april = store.list(category_c='Food', month='2024-04')
    assert [b.monthly_limit for b in food_april] == [450.0]


def test_update_is_partial_and_validated(make_store):
    store = make_store(Transaction)
    created = store.create(_lunch())

    updated = store.update(created.id, amount='15.75', description_c='Late lunch')
    assert updated.amount == 15.75
    assert updated.description == 'Late lunch'
    assert updated.category == 'Food'
    assert store.get(created.id) == updated

    with pytest.raises(ValidationError):
        store.update(created.id, amount=0)
    assert store.get(created.id).amount == 15.75


def test_update_cannot_change_id(make_store):
    store = make_store(Transaction)
    created = store.create(_lunch())
    updated = store.update(created.id, id=999, description='Brunch')
    assert updated.id == created.id


def test_missing_records_raise_not_found(make_store):
    store = make_store(Category)
    with pytest.raises(NotFoundError) as excinfo:
        store.get(42)
    assert excinfo.value.entity == 'Category'
    with pytest.raises(NotFoundError):
        store.update(42, name='Nope')
    with pytest.raises(NotFoundError):
        store.delete(42)


def test_non_numeric_ids_are_not_found(make_store):
    store = make_store(Category)
    store.create({'name': 'Pets', 'type': 'expense'})
    with pytest.raises(NotFoundError):
        store.get('abc')
    with pytest.raises(NotFoundError):
        store.update('abc', name='Nope')
    with pytest.raises(NotFoundError):
        store.delete('abc')


def test_delete(make_store):
    store = make_store(Category)
    created = store.create({'name': 'Pets', 'type': 'expense', 'is_default': True})
    assert created.is_default is True
    assert store.delete(created.id) is True
    assert store.list() == []


def test_in_memory_store_seeded_records_keep_ids():
    store = InMemoryRecordStore(Budget, [
        Budget(5, 'Food', '2024-03', 500.0),
        {'Id': 9, 'category_c': 'Rent', 'month_c': '2024-03', 'monthly_limit_c': 1200},
    ])
    assert [b.id for b in store.list()] == [5, 9]
    assert store.create(Budget(None, 'Fun', '2024-03', 50.0)).id == 10


def test_sqlite_frame_and_clear(tmp_path):
    db_path = tmp_path / 'finboard.db'
    store = SqliteRecordStore(Transaction, db_path)
    store.create(_lunch())
    store.create(_lunch(type='income', category='Salary', description='Pay', amount=2000))

    df = read_frame(Transaction, db_path)
    assert list(df['type']) == ['expense', 'income']
    assert list(df['date']) == ['2024-03-05', '2024-03-05']

    clear_database(db_path)
    assert store.list() == []


def test_sqlite_store_persists_across_instances(tmp_path):
    db_path = tmp_path / 'finboard.db'
    SqliteRecordStore(Budget, db_path).create({'category': 'Food', 'month': '2024-03', 'monthly_limit': 500})
    reopened = SqliteRecordStore(Budget, db_path)
    assert [b.category for b in reopened.list()] == ['Food']
