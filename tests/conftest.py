"""Shared test fixtures for the statement ledger import."""

from decimal import Decimal
from pathlib import Path

import pytest

from ledger_import.db.repository import LedgerRepository
from ledger_import.db.schema import create_schema
from ledger_import.models.transaction import CanonicalTransaction


@pytest.fixture
def db_conn(tmp_path):
    db_path = tmp_path / "ledger.db"
    conn = create_schema(db_path)
    yield conn
    conn.close()


@pytest.fixture
def repo(db_conn) -> LedgerRepository:
    return LedgerRepository(db_conn)


@pytest.fixture
def write_statement(tmp_path):
    """Write statement text to a file under tmp_path and return its path."""

    def _write(text: str, name: str = "statement.csv") -> Path:
        path = tmp_path / name
        path.write_bytes(text.encode("utf-8"))
        return path

    return _write


@pytest.fixture
def coffee_txn() -> CanonicalTransaction:
    return CanonicalTransaction(
        txn_date="2024-01-05",
        description="Coffee",
        debit=Decimal("4.50"),
        credit=Decimal("0"),
        raw_amount=Decimal("-4.50"),
        raw_description="Coffee",
    )


@pytest.fixture
def paycheck_txn() -> CanonicalTransaction:
    return CanonicalTransaction(
        txn_date="2024-01-15",
        description="Paycheck",
        debit=Decimal("0"),
        credit=Decimal("1500"),
        raw_amount=Decimal("1500"),
        raw_description="Paycheck",
    )
