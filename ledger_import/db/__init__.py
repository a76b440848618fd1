"""Database layer for the statement ledger."""

from ledger_import.db.repository import LedgerRepository
from ledger_import.db.schema import connect, create_schema

__all__ = ["LedgerRepository", "connect", "create_schema"]
