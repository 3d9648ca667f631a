"""
SQLite key/value utilities for the store module.
"""

from __future__ import annotations

import sqlite3
from pathlib import Path
from typing import cast


SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS kv_store (
  key TEXT PRIMARY KEY,
  value TEXT NOT NULL,
  updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
);
"""


def initialize_database(db_path: str) -> None:
    """Create the SQLite database and schema if needed."""
    path = Path(db_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    connection = sqlite3.connect(str(path))
    try:
        _ = connection.executescript(SCHEMA_SQL)
        connection.commit()
    finally:
        connection.close()


def connect(db_path: str) -> sqlite3.Connection:
    """Open a SQLite connection with sane defaults."""
    connection = sqlite3.connect(db_path)
    connection.row_factory = sqlite3.Row
    return connection


def read_value(db_path: str, key: str) -> str | None:
    connection = connect(db_path)
    try:
        row = cast(
            sqlite3.Row | None,
            connection.execute("SELECT value FROM kv_store WHERE key = ?", (key,)).fetchone(),
        )
    finally:
        connection.close()
    if row is None:
        return None
    return cast(str, row["value"])


def write_value(db_path: str, key: str, value: str) -> None:
    connection = connect(db_path)
    try:
        with connection:
            _ = connection.execute(
                """
                INSERT INTO kv_store (key, value, updated_at)
                VALUES (?, ?, CURRENT_TIMESTAMP)
                ON CONFLICT(key) DO UPDATE SET
                    value = excluded.value,
                    updated_at = excluded.updated_at
                """,
                (key, value),
            )
    finally:
        connection.close()


def delete_value(db_path: str, key: str) -> None:
    connection = connect(db_path)
    try:
        with connection:
            _ = connection.execute("DELETE FROM kv_store WHERE key = ?", (key,))
    finally:
        connection.close()
