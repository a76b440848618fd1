"""Statement readers for delimited bank and card exports."""

from ledger_import.ingestion.csv_statement import StatementFile, read_statement, split_statement

__all__ = ["StatementFile", "read_statement", "split_statement"]
