"""Import ledger writer: one import record plus its transactions, committed together."""

import hashlib
import logging
from collections.abc import Sequence

from ledger_import.db.repository import LedgerRepository
from ledger_import.models.enums import SourceType
from ledger_import.models.transaction import CanonicalTransaction, ImportRecord

logger = logging.getLogger(__name__)


def content_hash(content: bytes) -> str:
    """Hex SHA-256 of the raw file bytes, taken before any decoding or parsing."""
    return hashlib.sha256(content).hexdigest()


class ImportLedgerWriter:
    """Writes a fully normalized statement batch in a single unit of work."""

    def __init__(self, repo: LedgerRepository):
        self.repo = repo

    def write(
        self,
        content: bytes,
        source_name: str,
        transactions: Sequence[CanonicalTransaction],
        account_id: str,
    ) -> ImportRecord:
        source_hash = content_hash(content)

        with self.repo.unit_of_work() as repo:
            previously_imported = repo.check_import_duplicate(source_hash)
            import_id = repo.create_import(
                source_type=SourceType.CSV.value,
                source_name=source_name,
                source_hash=source_hash,
                account_id=account_id,
                record_count=len(transactions),
            )
            repo.insert_transactions(import_id, account_id, transactions)

        if previously_imported:
            logger.info("%s has the same content hash as an earlier import", source_name)
        logger.info(
            "Committed import %d (%s): %d transaction(s) for account %s",
            import_id, source_name, len(transactions), account_id,
        )
        return ImportRecord(
            id=import_id,
            source_type=SourceType.CSV,
            source_name=source_name,
            source_hash=source_hash,
            account_id=account_id,
            record_count=len(transactions),
            previously_imported=previously_imported,
        )
