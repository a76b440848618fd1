"""Normalization layer: header resolution and row normalization."""

from ledger_import.normalization.headers import resolve_columns
from ledger_import.normalization.rows import RowNormalizer

__all__ = ["RowNormalizer", "resolve_columns"]
