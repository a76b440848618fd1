"""Data models for the statement ledger import."""

from ledger_import.models.enums import (
    CanonicalField,
    ImportState,
    RowErrorReason,
    SourceType,
)
from ledger_import.models.transaction import (
    CanonicalTransaction,
    FieldMap,
    ImportOutcome,
    ImportRecord,
    StatementRow,
)

__all__ = [
    "CanonicalField",
    "CanonicalTransaction",
    "FieldMap",
    "ImportOutcome",
    "ImportRecord",
    "ImportState",
    "RowErrorReason",
    "SourceType",
    "StatementRow",
]
