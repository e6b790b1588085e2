"""SQLite-backed record stores.

One table per entity, one column per canonical field. Dates are stored as
ISO strings, enums by value and booleans as integers; :mod:`finboard.schema`
converts rows back into records.
"""

from __future__ import annotations

import sqlite3
from contextlib import contextmanager
from datetime import date
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Iterator, List, Mapping, Optional, Type, TypeVar, Union

import pandas as pd

from .config import DB_PATH, ensure_data_directories
from .errors import NotFoundError
from .logging_config import get_logger
from .schema import RECORD_TYPES, TABLE_NAMES, canonical_changes, coerce_record, record_to_row
from .store import RecordStore

logger = get_logger(__name__)

R = TypeVar("R")

SCHEMA_SQL = """
PRAGMA journal_mode=WAL;
PRAGMA synchronous=NORMAL;

CREATE TABLE IF NOT EXISTS transactions (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    amount REAL NOT NULL,
    category TEXT NOT NULL,
    type TEXT NOT NULL,
    description TEXT,
    date TEXT NOT NULL
);

CREATE INDEX IF NOT EXISTS ix_txn_date ON transactions (date);
CREATE INDEX IF NOT EXISTS ix_txn_category ON transactions (category);

CREATE TABLE IF NOT EXISTS categories (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    name TEXT NOT NULL,
    type TEXT NOT NULL,
    color TEXT,
    is_default INTEGER NOT NULL DEFAULT 0
);

CREATE TABLE IF NOT EXISTS budgets (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    category TEXT NOT NULL,
    month TEXT NOT NULL,
    monthly_limit REAL NOT NULL
);

CREATE INDEX IF NOT EXISTS ix_budget_month ON budgets (month, category);

CREATE TABLE IF NOT EXISTS savings_goals (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    name TEXT NOT NULL,
    target_amount REAL NOT NULL,
    current_amount REAL NOT NULL DEFAULT 0,
    deadline TEXT NOT NULL
);

CREATE TABLE IF NOT EXISTS bank_accounts (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    name TEXT NOT NULL,
    bank_name TEXT,
    account_number TEXT,
    account_type TEXT NOT NULL,
    currency TEXT,
    balance REAL NOT NULL DEFAULT 0
);
"""


def _resolve(db_path: Optional[Union[str, Path]]) -> Path:
    if db_path is not None:
        return Path(db_path)
    ensure_data_directories()
    return DB_PATH


@contextmanager
def connect(db_path: Optional[Union[str, Path]] = None) -> Iterator[sqlite3.Connection]:
    path = _resolve(db_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(str(path))
    conn.row_factory = sqlite3.Row
    try:
        yield conn
    finally:
        conn.close()


def init_db(db_path: Optional[Union[str, Path]] = None) -> None:
    with connect(db_path) as conn:
        conn.executescript(SCHEMA_SQL)
        conn.commit()


def clear_database(db_path: Optional[Union[str, Path]] = None) -> None:
    """Delete every row from every table."""
    with connect(db_path) as conn:
        for record_type in RECORD_TYPES:
            conn.execute(f"DELETE FROM {TABLE_NAMES[record_type]}")
        conn.commit()
    logger.info("Cleared database %s", _resolve(db_path))


def read_frame(record_type: type, db_path: Optional[Union[str, Path]] = None) -> pd.DataFrame:
    """Whole table as a DataFrame, ordered by id."""
    sql = f"SELECT * FROM {TABLE_NAMES[record_type]} ORDER BY id ASC"
    with connect(db_path) as conn:
        return pd.read_sql_query(sql, conn)


def _db_value(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, bool):
        return int(value)
    return value


class SqliteRecordStore(RecordStore[R]):
    """Record store persisting one entity type to its SQLite table."""

    def __init__(self, record_type: Type[R], db_path: Optional[Union[str, Path]] = None):
        self.record_type = record_type
        self.db_path = _resolve(db_path)
        self.table = TABLE_NAMES[record_type]
        init_db(self.db_path)

    def _to_record(self, row: sqlite3.Row) -> R:
        # Stored rows were validated on the way in
        return coerce_record(self.record_type, dict(row), validate=False)

    def _write_values(self, record: R) -> Dict[str, Any]:
        row = record_to_row(record)
        row.pop("id", None)
        return {name: _db_value(value) for name, value in row.items()}

    def list(self, **criteria: Any) -> List[R]:
        wanted = canonical_changes(self.record_type, criteria)
        sql = f"SELECT * FROM {self.table}"
        params: List[Any] = []
        if wanted:
            sql += " WHERE " + " AND ".join(f"{name} = ?" for name in wanted)
            params.extend(_db_value(value) for value in wanted.values())
        sql += " ORDER BY id ASC"
        with connect(self.db_path) as conn:
            rows = conn.execute(sql, params).fetchall()
        return [self._to_record(row) for row in rows]

    def get(self, record_id: int) -> R:
        with connect(self.db_path) as conn:
            row = conn.execute(f"SELECT * FROM {self.table} WHERE id = ?", (record_id,)).fetchone()
        if row is None:
            raise NotFoundError(self.entity, record_id)
        return self._to_record(row)

    def create(self, record: Union[R, Mapping[str, Any]]) -> R:
        values = self._write_values(coerce_record(self.record_type, record))
        columns = ", ".join(values)
        placeholders = ", ".join("?" for _ in values)
        with connect(self.db_path) as conn:
            cursor = conn.execute(
                f"INSERT INTO {self.table} ({columns}) VALUES ({placeholders})",
                list(values.values()),
            )
            conn.commit()
            new_id = cursor.lastrowid
        logger.info("Created %s %s", self.entity.lower(), new_id)
        return self.get(new_id)

    def update(self, record_id: int, **changes: Any) -> R:
        updated = self.merged(self.get(record_id), changes)
        values = self._write_values(updated)
        assignments = ", ".join(f"{name} = ?" for name in values)
        with connect(self.db_path) as conn:
            conn.execute(
                f"UPDATE {self.table} SET {assignments} WHERE id = ?",
                [*values.values(), record_id],
            )
            conn.commit()
        logger.info("Updated %s %s", self.entity.lower(), record_id)
        return updated

    def delete(self, record_id: int) -> bool:
        with connect(self.db_path) as conn:
            cursor = conn.execute(f"DELETE FROM {self.table} WHERE id = ?", (record_id,))
            conn.commit()
            deleted = cursor.rowcount > 0
        if not deleted:
            raise NotFoundError(self.entity, record_id)
        logger.info("Deleted %s %s", self.entity.lower(), record_id)
        return True
