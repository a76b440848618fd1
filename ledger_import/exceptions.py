"""Custom exceptions for the statement ledger import."""

from ledger_import.models.enums import RowErrorReason


class LedgerImportError(Exception):
    """Base exception for statement import errors."""


class MissingColumnError(LedgerImportError):
    """Raised when a required canonical field has no matching header."""

    def __init__(self, missing_fields: list[str]):
        self.missing_fields = missing_fields
        super().__init__(f"Missing required columns: {', '.join(missing_fields)}")


class InvalidRowError(LedgerImportError):
    """Raised when a data row violates the canonical transaction contract."""

    def __init__(self, row_number: int, reason: RowErrorReason):
        self.row_number = row_number
        self.reason = reason
        super().__init__(f"Row {row_number}: {reason.value}")


class EmptyStatementError(LedgerImportError):
    """Raised when a statement has no header line or no data rows."""

    def __init__(self, source_name: str, message: str = "no transaction rows found"):
        self.source_name = source_name
        super().__init__(f"Empty statement {source_name}: {message}")


class StorageError(LedgerImportError):
    """Raised when the transactional write to the ledger fails."""

    def __init__(self, message: str):
        super().__init__(f"Storage error: {message}")


class UnreadableStatementError(LedgerImportError):
    """Raised when a statement file cannot be read or decoded."""

    def __init__(self, source_name: str, message: str):
        self.source_name = source_name
        super().__init__(f"Cannot read statement {source_name}: {message}")
