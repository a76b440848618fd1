"""Row normalization: raw statement rows to canonical transactions."""

import re
from datetime import datetime
from decimal import Decimal, InvalidOperation, getcontext

from pydantic import ValidationError

from ledger_import.config import DATE_FORMATS
from ledger_import.exceptions import InvalidRowError
from ledger_import.models.enums import RowErrorReason
from ledger_import.models.transaction import CanonicalTransaction, FieldMap, StatementRow

_ZERO = Decimal("0")

# Plain fixed-point numbers only: no exponents, underscores, or NaN/Infinity.
_NUMBER_RE = re.compile(r"^[+-]?(\d+(\.\d*)?|\.\d+)$")


def _parse_decimal(value: str | None) -> Decimal | None:
    """Parse a trimmed fixed-point cell.

    Returns None for blank or non-numeric text, and for values with more
    significant digits than the decimal context can hold exactly.
    """
    if value is None:
        return None
    stripped = value.strip()
    if not _NUMBER_RE.match(stripped):
        return None
    try:
        parsed = Decimal(stripped)
    except InvalidOperation:
        return None
    if len(parsed.as_tuple().digits) > getcontext().prec:
        return None
    return parsed


def parse_statement_date(value: str | None, formats: tuple[str, ...] = DATE_FORMATS) -> str | None:
    """Parse a date cell against the accepted formats. Returns YYYY-MM-DD or None."""
    if value is None:
        return None
    stripped = value.strip()
    if not stripped:
        return None
    for fmt in formats:
        try:
            return datetime.strptime(stripped, fmt).date().isoformat()
        except ValueError:
            continue
    return None


class RowNormalizer:
    """Converts one raw statement row into a CanonicalTransaction.

    Signed-amount statements take precedence: when an ``amount`` column was
    resolved, ``debit``/``credit`` columns are ignored.
    """

    def __init__(self, date_formats: tuple[str, ...] = DATE_FORMATS):
        self.date_formats = date_formats

    def normalize(
        self, row: StatementRow, field_map: FieldMap, row_number: int | None = None
    ) -> CanonicalTransaction:
        row_number = row.line_number if row_number is None else row_number

        description = (row.get(field_map.description) or "").strip()
        if not description:
            raise InvalidRowError(row_number, RowErrorReason.MISSING_DESCRIPTION)

        if field_map.has_amount:
            debit, credit, raw_amount = self._from_signed_amount(
                row.get(field_map.amount), row_number
            )
        else:
            debit, credit, raw_amount = self._from_split_columns(
                row.get(field_map.debit), row.get(field_map.credit), row_number
            )

        txn_date = parse_statement_date(row.get(field_map.date), self.date_formats)
        if txn_date is None:
            raise InvalidRowError(row_number, RowErrorReason.INVALID_DATE)

        try:
            return CanonicalTransaction(
                txn_date=txn_date,
                description=description,
                debit=debit,
                credit=credit,
                raw_amount=raw_amount,
                raw_description=description,
            )
        except ValidationError as exc:
            reason = (
                RowErrorReason.INVALID_AMOUNT
                if field_map.has_amount
                else RowErrorReason.INVALID_DEBIT_CREDIT
            )
            raise InvalidRowError(row_number, reason) from exc

    @staticmethod
    def _from_signed_amount(
        value: str | None, row_number: int
    ) -> tuple[Decimal, Decimal, Decimal]:
        amount = _parse_decimal(value)
        # A zero amount cannot satisfy "exactly one of debit/credit is positive".
        if amount is None or amount == _ZERO:
            raise InvalidRowError(row_number, RowErrorReason.INVALID_AMOUNT)
        if amount < 0:
            return abs(amount), _ZERO, amount
        return _ZERO, amount, amount

    @staticmethod
    def _from_split_columns(
        debit_value: str | None, credit_value: str | None, row_number: int
    ) -> tuple[Decimal, Decimal, Decimal]:
        amounts = []
        for value in (debit_value, credit_value):
            if value is None or not value.strip():
                amounts.append(_ZERO)
                continue
            parsed = _parse_decimal(value)
            if parsed is None or parsed < 0:
                raise InvalidRowError(row_number, RowErrorReason.INVALID_DEBIT_CREDIT)
            amounts.append(parsed)

        debit, credit = amounts
        if (debit > 0) == (credit > 0):
            raise InvalidRowError(row_number, RowErrorReason.INVALID_DEBIT_CREDIT)
        return debit, credit, credit - debit
