"""SQLite database schema definition."""

import sqlite3
from pathlib import Path

SCHEMA_VERSION = 1

SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS schema_version (
    version INTEGER PRIMARY KEY,
    applied_at TEXT NOT NULL DEFAULT (datetime('now'))
);

CREATE TABLE IF NOT EXISTS imports (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    source_type TEXT NOT NULL,
    source_name TEXT NOT NULL,
    source_hash TEXT NOT NULL,
    account_id TEXT NOT NULL,
    record_count INTEGER NOT NULL DEFAULT 0,
    imported_at TEXT NOT NULL DEFAULT (datetime('now'))
);

CREATE INDEX IF NOT EXISTS idx_imports_source_hash ON imports(source_hash);

CREATE TABLE IF NOT EXISTS transactions (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    import_id INTEGER NOT NULL REFERENCES imports(id),
    account_id TEXT NOT NULL,
    txn_date TEXT NOT NULL,
    description TEXT NOT NULL CHECK (length(description) > 0),
    debit TEXT NOT NULL,
    credit TEXT NOT NULL,
    raw_amount TEXT NOT NULL,
    raw_description TEXT NOT NULL,
    created_at TEXT NOT NULL DEFAULT (datetime('now'))
);

CREATE INDEX IF NOT EXISTS idx_transactions_import ON transactions(import_id);
"""


def connect(db_path: Path, busy_timeout: float = 5.0) -> sqlite3.Connection:
    """Open a connection in autocommit mode; writes go through explicit transactions."""
    conn = sqlite3.connect(str(db_path), timeout=busy_timeout, isolation_level=None)
    conn.execute("PRAGMA foreign_keys=ON")
    return conn


def create_schema(db_path: Path, busy_timeout: float = 5.0) -> sqlite3.Connection:
    """Create the database schema. Returns the connection."""
    conn = connect(db_path, busy_timeout)
    conn.execute("PRAGMA journal_mode=WAL")
    conn.executescript(SCHEMA_SQL)
    conn.execute(
        "INSERT OR IGNORE INTO schema_version (version) VALUES (?)",
        (SCHEMA_VERSION,),
    )
    return conn
