"""Header resolution: map raw column headers to canonical field slots."""

from collections.abc import Mapping, Sequence

from ledger_import.exceptions import MissingColumnError
from ledger_import.models.enums import CanonicalField
from ledger_import.models.transaction import FieldMap

REQUIRED_FIELDS: tuple[CanonicalField, ...] = (
    CanonicalField.DATE,
    CanonicalField.DESCRIPTION,
)


def clean_headers(headers: Sequence[str]) -> list[str]:
    """Trim and lower-case raw header cells."""
    return [h.strip().lower() for h in headers]


def find_column(headers: Sequence[str], aliases: frozenset[str]) -> int | None:
    """Return the index of the first header matching any alias, or None."""
    for idx, header in enumerate(headers):
        if header in aliases:
            return idx
    return None


def resolve_columns(
    headers: Sequence[str],
    aliases: Mapping[CanonicalField, frozenset[str]],
) -> FieldMap:
    """Resolve every canonical field to its source column.

    ``amount`` is resolved independently of ``debit``/``credit``; choosing a
    reconciliation strategy is left to the row normalizer. Raises
    MissingColumnError when ``date`` or ``description`` cannot be found.
    """
    cleaned = clean_headers(headers)
    indexes = {
        field.value: find_column(cleaned, aliases.get(field, frozenset()))
        for field in CanonicalField
    }

    field_map = FieldMap(**indexes)
    missing = [f.value for f in REQUIRED_FIELDS if field_map.index_of(f) is None]
    if missing:
        raise MissingColumnError(missing)
    return field_map
