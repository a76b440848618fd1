"""Pipeline orchestrator: read, resolve headers, normalize rows, commit once."""

import logging
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

from ledger_import.config import ImportSettings
from ledger_import.db.repository import LedgerRepository
from ledger_import.exceptions import EmptyStatementError
from ledger_import.ingestion.csv_statement import StatementFile, read_statement
from ledger_import.models.enums import ImportState
from ledger_import.models.transaction import (
    CanonicalTransaction,
    FieldMap,
    ImportOutcome,
    StatementRow,
)
from ledger_import.normalization.headers import resolve_columns
from ledger_import.normalization.rows import RowNormalizer
from ledger_import.writer import ImportLedgerWriter

logger = logging.getLogger(__name__)


class ImportPipeline:
    """Drives one statement import from file to committed ledger rows.

    A pipeline instance handles exactly one import. Its ``state`` moves
    IDLE -> HEADERS_RESOLVED -> NORMALIZING -> COMMITTING -> DONE, or to
    FAILED on the first error. Every row is normalized before the writer is
    called, so a bad row never opens a storage transaction.
    """

    def __init__(self, repo: LedgerRepository, settings: ImportSettings | None = None):
        self.repo = repo
        self.settings = settings or ImportSettings()
        self.normalizer = RowNormalizer(self.settings.date_formats)
        self.writer = ImportLedgerWriter(repo)
        self.state = ImportState.IDLE

    def run(self, file_path: Path, account_id: str) -> ImportOutcome:
        """Import a statement file for the given account."""
        self._ensure_idle()
        try:
            statement = read_statement(
                file_path,
                delimiter=self.settings.delimiter,
                encoding=self.settings.encoding,
            )
        except BaseException:
            self.state = ImportState.FAILED
            raise
        return self.run_statement(statement, account_id)

    def run_statement(self, statement: StatementFile, account_id: str) -> ImportOutcome:
        """Import an already-read statement for the given account."""
        self._ensure_idle()
        logger.info("Importing %s for account %s", statement.source_name, account_id)

        try:
            field_map = resolve_columns(statement.headers, self.settings.aliases)
            self.state = ImportState.HEADERS_RESOLVED
            logger.debug("Resolved columns for %s: %s", statement.source_name, field_map)

            if not statement.rows:
                raise EmptyStatementError(statement.source_name)

            self.state = ImportState.NORMALIZING
            transactions = self._normalize_rows(statement.rows, field_map)
        except BaseException:
            self.state = ImportState.FAILED
            raise

        self.state = ImportState.COMMITTING
        try:
            record = self.writer.write(
                statement.content, statement.source_name, transactions, account_id
            )
        except BaseException:
            self.state = ImportState.FAILED
            raise
        self.state = ImportState.DONE

        return ImportOutcome(
            import_id=record.id,
            source_name=record.source_name,
            source_hash=record.source_hash,
            transaction_count=record.record_count,
            previously_imported=record.previously_imported,
        )

    def _ensure_idle(self) -> None:
        if self.state is not ImportState.IDLE:
            raise RuntimeError(
                f"ImportPipeline is single-use (current state: {self.state.value})"
            )

    def _normalize_rows(
        self, rows: list[StatementRow], field_map: FieldMap
    ) -> list[CanonicalTransaction]:
        """Normalize rows in source order, failing on the earliest bad row."""

        def normalize(row: StatementRow) -> CanonicalTransaction:
            return self.normalizer.normalize(row, field_map)

        workers = self.settings.max_workers
        if workers > 1 and len(rows) > 1:
            # Executor.map yields in submission order and re-raises the first failing row.
            with ThreadPoolExecutor(max_workers=workers) as pool:
                return list(pool.map(normalize, rows))
        return [normalize(row) for row in rows]


def import_statement(
    repo: LedgerRepository,
    file_path: Path,
    account_id: str,
    settings: ImportSettings | None = None,
) -> ImportOutcome:
    """Import one statement file into the ledger. Raises on any failure."""
    return ImportPipeline(repo, settings).run(file_path, account_id)
