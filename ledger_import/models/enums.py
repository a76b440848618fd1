"""Enumerations for the statement ledger import."""

from enum import StrEnum


class CanonicalField(StrEnum):
    DATE = "date"
    DESCRIPTION = "description"
    AMOUNT = "amount"
    DEBIT = "debit"
    CREDIT = "credit"


class SourceType(StrEnum):
    CSV = "csv"


class RowErrorReason(StrEnum):
    MISSING_DESCRIPTION = "missing description"
    INVALID_AMOUNT = "invalid amount"
    INVALID_DEBIT_CREDIT = "invalid debit/credit"
    INVALID_DATE = "invalid date"


class ImportState(StrEnum):
    IDLE = "IDLE"
    HEADERS_RESOLVED = "HEADERS_RESOLVED"
    NORMALIZING = "NORMALIZING"
    COMMITTING = "COMMITTING"
    DONE = "DONE"
    FAILED = "FAILED"
