"""Statement ledger import: normalize delimited statements into a SQLite ledger."""

from ledger_import.config import ImportSettings
from ledger_import.pipeline import ImportPipeline, import_statement

__all__ = ["ImportPipeline", "ImportSettings", "import_statement"]
