"""Statement row, field map, canonical transaction, and import record models."""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, model_validator

from ledger_import.models.enums import CanonicalField, SourceType


class StatementRow(BaseModel):
    """One raw data line split into fields, aligned to header order."""

    line_number: int = Field(ge=1)
    fields: list[str]

    def get(self, index: int | None) -> str | None:
        if index is None or index >= len(self.fields):
            return None
        return self.fields[index]


class FieldMap(BaseModel):
    """Column index of each canonical field in the source, or None if absent."""

    model_config = ConfigDict(frozen=True)

    date: int | None = None
    description: int | None = None
    amount: int | None = None
    debit: int | None = None
    credit: int | None = None

    def index_of(self, field: CanonicalField) -> int | None:
        return getattr(self, field.value)

    @property
    def has_amount(self) -> bool:
        return self.amount is not None


class CanonicalTransaction(BaseModel):
    model_config = ConfigDict(frozen=True)

    txn_date: str = Field(pattern=r"^\d{4}-\d{2}-\d{2}$")
    description: str = Field(min_length=1)
    debit: Decimal = Field(ge=0)
    credit: Decimal = Field(ge=0)
    raw_amount: Decimal
    raw_description: str

    @model_validator(mode="after")
    def _check_debit_credit(self) -> "CanonicalTransaction":
        if (self.debit > 0) == (self.credit > 0):
            raise ValueError("exactly one of debit or credit must be positive")
        if self.raw_amount != self.credit - self.debit:
            raise ValueError("raw_amount must equal credit - debit")
        return self


class ImportRecord(BaseModel):
    """Provenance record for one committed statement import."""

    model_config = ConfigDict(frozen=True)

    id: int
    source_type: SourceType = SourceType.CSV
    source_name: str
    source_hash: str = Field(pattern=r"^[0-9a-f]{64}$")
    account_id: str
    record_count: int = Field(ge=0)
    imported_at: datetime | None = None
    # Set when an earlier import had the same source_hash at commit time.
    previously_imported: bool = False


class ImportOutcome(BaseModel):
    """Summary returned to the caller after a successful import."""

    import_id: int
    source_name: str
    source_hash: str
    transaction_count: int
    previously_imported: bool = False
