"""Tests for header-to-field resolution."""

import pytest

from ledger_import.config import FIELD_ALIASES
from ledger_import.exceptions import MissingColumnError
from ledger_import.models.enums import CanonicalField
from ledger_import.models.transaction import FieldMap
from ledger_import.normalization.headers import clean_headers, find_column, resolve_columns


class TestFindColumn:
    def test_first_match_wins(self):
        headers = ["memo", "description", "amount"]
        assert find_column(headers, FIELD_ALIASES[CanonicalField.DESCRIPTION]) == 0

    def test_absent(self):
        assert find_column(["date", "memo"], FIELD_ALIASES[CanonicalField.AMOUNT]) is None


class TestResolveColumns:
    def test_signed_amount_headers(self):
        field_map = resolve_columns(["date", "description", "amount"], FIELD_ALIASES)
        assert field_map == FieldMap(date=0, description=1, amount=2)
        assert field_map.has_amount

    def test_split_debit_credit_headers(self):
        field_map = resolve_columns(["date", "description", "debit", "credit"], FIELD_ALIASES)
        assert field_map.amount is None
        assert field_map.debit == 2
        assert field_map.credit == 3
        assert not field_map.has_amount

    def test_aliases_resolve_like_canonical_names(self):
        """txn_date,memo,amt resolves to the same slots as date,description,amount."""
        aliased = resolve_columns(["txn_date", "memo", "amt"], FIELD_ALIASES)
        canonical = resolve_columns(["date", "description", "amount"], FIELD_ALIASES)
        assert aliased == canonical

    @pytest.mark.parametrize("header", [" Date ", "DATE", "date", "\tdAtE"])
    def test_case_and_whitespace_insensitive(self, header):
        field_map = resolve_columns([header, "Description", "Amount"], FIELD_ALIASES)
        assert field_map.date == 0
        assert field_map.index_of(CanonicalField.DESCRIPTION) == 1

    def test_amount_and_split_columns_both_resolved(self):
        field_map = resolve_columns(
            ["posted", "details", "debit", "credit", "value"], FIELD_ALIASES
        )
        assert field_map == FieldMap(date=0, description=1, amount=4, debit=2, credit=3)

    def test_missing_date(self):
        with pytest.raises(MissingColumnError) as exc_info:
            resolve_columns(["description", "amount"], FIELD_ALIASES)
        assert exc_info.value.missing_fields == ["date"]

    def test_missing_date_and_description(self):
        with pytest.raises(MissingColumnError) as exc_info:
            resolve_columns(["when", "what", "amount"], FIELD_ALIASES)
        assert exc_info.value.missing_fields == ["date", "description"]
        assert "date, description" in str(exc_info.value)

    def test_custom_alias_table(self):
        aliases = {
            CanonicalField.DATE: frozenset({"buchungstag"}),
            CanonicalField.DESCRIPTION: frozenset({"verwendungszweck"}),
            CanonicalField.AMOUNT: frozenset({"betrag"}),
        }
        field_map = resolve_columns(["Betrag", "Buchungstag", "Verwendungszweck"], aliases)
        assert field_map == FieldMap(date=1, description=2, amount=0)


def test_clean_headers():
    assert clean_headers([" Date", "MEMO ", "Amt"]) == ["date", "memo", "amt"]
