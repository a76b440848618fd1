"""Import settings and the static header alias table."""

from pathlib import Path
from types import MappingProxyType

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ledger_import.models.enums import CanonicalField

DEFAULT_DB_PATH = Path.home() / ".ledger_import" / "ledger.db"

# Accepted header spellings per canonical field, compared after trim + lower-case.
FIELD_ALIASES: MappingProxyType[CanonicalField, frozenset[str]] = MappingProxyType({
    CanonicalField.DATE: frozenset({"date", "txn_date", "posted"}),
    CanonicalField.DESCRIPTION: frozenset({"description", "memo", "details"}),
    CanonicalField.AMOUNT: frozenset({"amount", "amt", "value"}),
    CanonicalField.DEBIT: frozenset({"debit"}),
    CanonicalField.CREDIT: frozenset({"credit"}),
})

# Tried in order. Slash dates are month-first: 01/05/2024 is January 5.
DATE_FORMATS: tuple[str, ...] = (
    "%Y-%m-%d",
    "%Y-%m-%dT%H:%M:%S",
    "%Y-%m-%d %H:%M:%S",
    "%Y/%m/%d",
    "%m/%d/%Y",
    "%m/%d/%y",
)


class ImportSettings(BaseModel):
    """Tunables for a single statement import."""

    model_config = ConfigDict(frozen=True)

    delimiter: str = ","
    encoding: str = "utf-8-sig"
    date_formats: tuple[str, ...] = DATE_FORMATS
    aliases: dict[CanonicalField, frozenset[str]] = Field(
        default_factory=lambda: dict(FIELD_ALIASES)
    )
    max_workers: int = Field(default=1, ge=1)
    busy_timeout: float = Field(default=5.0, gt=0)

    @field_validator("delimiter")
    @classmethod
    def _single_character(cls, value: str) -> str:
        if len(value) != 1 or value in "\r\n":
            raise ValueError("delimiter must be a single non-newline character")
        return value

    @field_validator("aliases")
    @classmethod
    def _normalize_aliases(
        cls, value: dict[CanonicalField, frozenset[str]]
    ) -> dict[CanonicalField, frozenset[str]]:
        return {
            field: frozenset(alias.strip().lower() for alias in spellings)
            for field, spellings in value.items()
        }
