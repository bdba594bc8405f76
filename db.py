from __future__ import annotations

import sqlite3
from typing import Optional

from config import DB_PATH


def _get_connection() -> sqlite3.Connection:
    conn = sqlite3.connect(DB_PATH)
    conn.row_factory = sqlite3.Row
    return conn


def initialize_database() -> None:
    DB_PATH.parent.mkdir(parents=True, exist_ok=True)
    with _get_connection() as conn:
        conn.executescript("""
            CREATE TABLE IF NOT EXISTS kv_store (
                key    TEXT PRIMARY KEY,
                value  TEXT NOT NULL       -- serialized payload, usually JSON
            );
            """)


# Key-value operations. Every call commits or rolls back as a whole.
def get_value(key: str) -> Optional[str]:
    with _get_connection() as conn:
        row = conn.execute("SELECT value FROM kv_store WHERE key = ?", (key,)).fetchone()
    if row is None:
        return None
    return str(row["value"])


def set_value(key: str, value: str) -> None:
    with _get_connection() as conn:
        conn.execute(
            "INSERT INTO kv_store (key, value) VALUES (?, ?) "
            "ON CONFLICT(key) DO UPDATE SET value = excluded.value",
            (key, value),
        )


def remove_value(key: str) -> None:
    with _get_connection() as conn:
        conn.execute("DELETE FROM kv_store WHERE key = ?", (key,))
