"""Tests for the ledger repository and its unit of work."""

import sqlite3
from decimal import Decimal

import pytest

from ledger_import.db.schema import SCHEMA_VERSION, create_schema
from ledger_import.exceptions import StorageError

HASH_A = "a" * 64
HASH_B = "b" * 64


def _create(repo, source_hash=HASH_A, account_id="checking", record_count=0):
    return repo.create_import(
        source_type="csv",
        source_name="jan.csv",
        source_hash=source_hash,
        account_id=account_id,
        record_count=record_count,
    )


class TestSchema:
    def test_schema_version_recorded(self, db_conn):
        row = db_conn.execute("SELECT MAX(version) FROM schema_version").fetchone()
        assert row[0] == SCHEMA_VERSION

    def test_create_schema_is_idempotent(self, tmp_path):
        db_path = tmp_path / "twice.db"
        create_schema(db_path).close()
        conn = create_schema(db_path)
        try:
            tables = {
                r[0] for r in conn.execute("SELECT name FROM sqlite_master WHERE type = 'table'")
            }
        finally:
            conn.close()
        assert {"imports", "transactions", "schema_version"} <= tables

    def test_foreign_keys_enforced(self, repo):
        with pytest.raises(StorageError):
            with repo.unit_of_work():
                repo.conn.execute(
                    """INSERT INTO transactions
                       (import_id, account_id, txn_date, description,
                        debit, credit, raw_amount, raw_description)
                       VALUES (999, 'x', '2024-01-05', 'Orphan', '1', '0', '-1', 'Orphan')"""
                )
        assert repo.get_transactions() == []


class TestUnitOfWork:
    def test_commit_on_success(self, repo, coffee_txn, paycheck_txn):
        with repo.unit_of_work():
            import_id = _create(repo, record_count=2)
            inserted = repo.insert_transactions(import_id, "checking", [coffee_txn, paycheck_txn])

        assert inserted == 2
        imports = repo.get_imports()
        assert len(imports) == 1
        assert imports[0]["source_type"] == "csv"
        assert imports[0]["record_count"] == 2

        rows = repo.get_transactions(import_id)
        assert [r["description"] for r in rows] == ["Coffee", "Paycheck"]
        assert rows[0]["debit"] == "4.50"
        assert rows[0]["credit"] == "0"
        assert rows[0]["raw_amount"] == "-4.50"
        assert rows[1]["account_id"] == "checking"

    def test_amounts_stored_as_fixed_point_text(self, repo, coffee_txn):
        tiny = coffee_txn.model_copy(
            update={
                "debit": Decimal("0.0000001"),
                "raw_amount": Decimal("-0.0000001"),
            }
        )
        scaled = coffee_txn.model_copy(
            update={"debit": Decimal("1E+3"), "raw_amount": Decimal("-1E+3")}
        )
        with repo.unit_of_work():
            repo.insert_transactions(_create(repo), "checking", [tiny, scaled])

        rows = repo.get_transactions()
        assert rows[0]["debit"] == "0.0000001"
        assert rows[0]["raw_amount"] == "-0.0000001"
        assert rows[1]["debit"] == "1000"
        assert rows[1]["raw_amount"] == "-1000"

    def test_rollback_on_exception(self, repo, coffee_txn):
        with pytest.raises(RuntimeError):
            with repo.unit_of_work():
                import_id = _create(repo)
                repo.insert_transactions(import_id, "checking", [coffee_txn])
                raise RuntimeError("abort")

        assert repo.get_imports() == []
        assert repo.get_transactions() == []
        assert not repo.conn.in_transaction

    def test_sqlite_error_wrapped_and_rolled_back(self, repo, coffee_txn):
        repo.conn.execute(
            """CREATE TRIGGER reject_boom BEFORE INSERT ON transactions
               WHEN NEW.description = 'Boom'
               BEGIN SELECT RAISE(ABORT, 'boom rejected'); END"""
        )
        boom = coffee_txn.model_copy(update={"description": "Boom"})

        with pytest.raises(StorageError) as exc_info:
            with repo.unit_of_work():
                import_id = _create(repo)
                repo.insert_transactions(import_id, "checking", [coffee_txn, boom])

        assert "boom rejected" in str(exc_info.value)
        assert isinstance(exc_info.value.__cause__, sqlite3.IntegrityError)
        assert repo.get_imports() == []
        assert repo.get_transactions() == []

    def test_nested_unit_of_work_rejected(self, repo):
        with pytest.raises(StorageError):
            with repo.unit_of_work():
                with repo.unit_of_work():
                    pass
        assert not repo.conn.in_transaction

    def test_writes_outside_unit_of_work_rejected(self, repo, coffee_txn):
        with pytest.raises(StorageError):
            _create(repo)
        with pytest.raises(StorageError):
            repo.insert_transactions(1, "checking", [coffee_txn])

    def test_second_writer_blocked_until_commit(self, tmp_path, coffee_txn):
        from ledger_import.db.repository import LedgerRepository

        db_path = tmp_path / "shared.db"
        first = LedgerRepository(create_schema(db_path))
        second = LedgerRepository(create_schema(db_path, busy_timeout=0.1))
        try:
            with first.unit_of_work():
                _create(first)
                with pytest.raises(StorageError):
                    with second.unit_of_work():
                        pass
            assert len(second.get_imports()) == 1
        finally:
            first.conn.close()
            second.conn.close()


class TestImportQueries:
    def test_check_import_duplicate(self, repo):
        with repo.unit_of_work():
            _create(repo, source_hash=HASH_A)

        assert repo.check_import_duplicate(HASH_A) is True
        assert repo.check_import_duplicate(HASH_B) is False

    def test_duplicate_hash_not_enforced(self, repo):
        with repo.unit_of_work():
            _create(repo, source_hash=HASH_A)
        with repo.unit_of_work():
            _create(repo, source_hash=HASH_A)

        assert len(repo.find_imports_by_hash(HASH_A)) == 2

    def test_get_imports_by_account(self, repo):
        with repo.unit_of_work():
            _create(repo, account_id="checking")
            _create(repo, account_id="savings", source_hash=HASH_B)

        assert [i["account_id"] for i in repo.get_imports("savings")] == ["savings"]
        assert len(repo.get_imports()) == 2
