"""Data access layer for the statement ledger."""

import logging
import sqlite3
from collections.abc import Iterable, Iterator
from contextlib import contextmanager

from ledger_import.exceptions import StorageError
from ledger_import.models.transaction import CanonicalTransaction

logger = logging.getLogger(__name__)


class LedgerRepository:
    """Reads and transactional writes for imports and their transactions."""

    def __init__(self, conn: sqlite3.Connection):
        self.conn = conn

    # --- Unit of work ---

    @contextmanager
    def unit_of_work(self) -> Iterator["LedgerRepository"]:
        """Run the enclosed writes as one atomic transaction.

        Commits only when the block exits normally; any exception rolls back
        every write made inside it. SQLite errors surface as StorageError.
        """
        if self.conn.in_transaction:
            raise StorageError("a unit of work is already open on this connection")
        try:
            # IMMEDIATE takes the write lock up front so concurrent imports serialize.
            self.conn.execute("BEGIN IMMEDIATE")
        except sqlite3.Error as exc:
            raise StorageError(str(exc)) from exc

        try:
            yield self
        except sqlite3.Error as exc:
            self.conn.rollback()
            logger.warning("Rolled back unit of work after storage failure: %s", exc)
            raise StorageError(str(exc)) from exc
        except BaseException:
            self.conn.rollback()
            logger.debug("Rolled back unit of work")
            raise

        try:
            self.conn.commit()
        except sqlite3.Error as exc:
            self.conn.rollback()
            raise StorageError(str(exc)) from exc

    def _require_unit_of_work(self) -> None:
        if not self.conn.in_transaction:
            raise StorageError("ledger writes must run inside unit_of_work()")

    # --- Imports ---

    def create_import(
        self,
        source_type: str,
        source_name: str,
        source_hash: str,
        account_id: str,
        record_count: int = 0,
    ) -> int:
        """Insert an import record. Returns the generated import ID."""
        self._require_unit_of_work()
        cursor = self.conn.execute(
            """INSERT INTO imports
               (source_type, source_name, source_hash, account_id, record_count)
               VALUES (?, ?, ?, ?, ?)""",
            (source_type, source_name, source_hash, account_id, record_count),
        )
        return cursor.lastrowid

    def get_imports(self, account_id: str | None = None) -> list[dict]:
        """Retrieve import records, optionally filtered by account."""
        if account_id:
            cursor = self.conn.execute(
                "SELECT * FROM imports WHERE account_id = ? ORDER BY id", (account_id,)
            )
        else:
            cursor = self.conn.execute("SELECT * FROM imports ORDER BY id")
        columns = [desc[0] for desc in cursor.description]
        return [dict(zip(columns, row)) for row in cursor.fetchall()]

    def find_imports_by_hash(self, source_hash: str) -> list[dict]:
        """Retrieve earlier imports of byte-identical file content."""
        cursor = self.conn.execute(
            "SELECT * FROM imports WHERE source_hash = ? ORDER BY id", (source_hash,)
        )
        columns = [desc[0] for desc in cursor.description]
        return [dict(zip(columns, row)) for row in cursor.fetchall()]

    def check_import_duplicate(self, source_hash: str) -> bool:
        """Check if a file with the same content hash was already imported."""
        cursor = self.conn.execute(
            "SELECT COUNT(*) FROM imports WHERE source_hash = ?", (source_hash,)
        )
        return cursor.fetchone()[0] > 0

    # --- Transactions ---

    def insert_transactions(
        self,
        import_id: int,
        account_id: str,
        transactions: Iterable[CanonicalTransaction],
    ) -> int:
        """Insert a batch of canonical transactions in order. Returns the count inserted."""
        self._require_unit_of_work()
        params = [
            (
                import_id,
                account_id,
                txn.txn_date,
                txn.description,
                format(txn.debit, "f"),
                format(txn.credit, "f"),
                format(txn.raw_amount, "f"),
                txn.raw_description,
            )
            for txn in transactions
        ]
        self.conn.executemany(
            """INSERT INTO transactions
               (import_id, account_id, txn_date, description,
                debit, credit, raw_amount, raw_description)
               VALUES (?, ?, ?, ?, ?, ?, ?, ?)""",
            params,
        )
        return len(params)

    def get_transactions(self, import_id: int | None = None) -> list[dict]:
        """Retrieve transactions in insertion order, optionally for one import."""
        if import_id is not None:
            cursor = self.conn.execute(
                "SELECT * FROM transactions WHERE import_id = ? ORDER BY id", (import_id,)
            )
        else:
            cursor = self.conn.execute("SELECT * FROM transactions ORDER BY id")
        columns = [desc[0] for desc in cursor.description]
        return [dict(zip(columns, row)) for row in cursor.fetchall()]
