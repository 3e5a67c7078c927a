"""Tests for the transactions service layer."""

from datetime import date

import pytest

from apps.api.core.errors import ParseError, ValidationError
from apps.api.domains.transactions.service import (
    build_transaction_rows,
    extract_transactions,
    generate_fingerprint,
    preview_rows,
    validate_transaction_text,
)
from packages.text_parser import ParsedTransaction, ParseResult

STARBUCKS = """Date: 11 Dec 2025
Description: STARBUCKS COFFEE MUMBAI
Amount: -420.00
Balance after transaction: 18,420.50"""


def _txn(**overrides) -> ParsedTransaction:
    fields = {
        "date": date(2025, 12, 11),
        "description": "Coffee",
        "amount": 420.0,
        "type": "debit",
        "balance": 100.0,
        "confidence": 0.95,
    }
    fields.update(overrides)
    return ParsedTransaction(**fields)


class TestValidateTransactionText:
    @pytest.mark.parametrize(
        "text,expected",
        [
            ("", False),
            ("abcd", False),
            ("abcde", True),
            ("x" * 10_000, True),
            ("x" * 10_001, False),
            (None, False),
        ],
    )
    def test_length_bounds(self, text, expected):
        assert validate_transaction_text(text) is expected

    def test_custom_bounds(self):
        assert validate_transaction_text("abc", min_length=2, max_length=3) is True
        assert validate_transaction_text("abcd", min_length=2, max_length=3) is False


class TestGenerateFingerprint:
    def test_is_deterministic_sha256(self):
        fp = generate_fingerprint(_txn())
        assert fp == generate_fingerprint(_txn())
        assert len(fp) == 64

    def test_description_is_normalised(self):
        assert generate_fingerprint(_txn(description="  coffee ")) == generate_fingerprint(
            _txn(description="COFFEE")
        )

    def test_confidence_does_not_affect_fingerprint(self):
        assert generate_fingerprint(_txn(confidence=0.5)) == generate_fingerprint(_txn())

    @pytest.mark.parametrize(
        "override",
        [
            {"date": date(2025, 12, 12)},
            {"amount": 421.0},
            {"type": "credit"},
            {"description": "Tea"},
            {"balance": None},
        ],
    )
    def test_identity_fields_change_fingerprint(self, override):
        assert generate_fingerprint(_txn(**override)) != generate_fingerprint(_txn())

    def test_missing_balance_differs_from_zero_balance(self):
        assert generate_fingerprint(_txn(balance=None)) != generate_fingerprint(
            _txn(balance=0.0)
        )


class TestExtractTransactions:
    def test_returns_parse_result(self):
        result = extract_transactions(STARBUCKS)
        assert result.parse_method == "standard"
        assert result.count == 1

    def test_too_short_raises_validation_error(self):
        with pytest.raises(ValidationError):
            extract_transactions("abc")

    def test_too_long_raises_validation_error(self):
        with pytest.raises(ValidationError):
            extract_transactions(STARBUCKS, max_length=10)

    def test_unparseable_raises_parse_error(self):
        with pytest.raises(ParseError) as exc_info:
            extract_transactions("This is random text")
        assert exc_info.value.status_code == 400


class TestRows:
    def test_build_transaction_rows(self):
        result = ParseResult(
            transactions=[_txn(), _txn(description="Tea", amount=30.0)],
            confidence=0.95,
            parse_method="standard",
        )

        rows = build_transaction_rows(result, user_id="user-1", source_text="raw")

        assert len(rows) == 2
        first = rows[0]
        assert first["user_id"] == "user-1"
        assert first["date"] == "2025-12-11"
        assert first["raw_text"] == "raw"
        assert first["fingerprint"] == generate_fingerprint(result.transactions[0])
        assert first["metadata"] == {
            "parse_method": "standard",
            "original_index": 0,
            "batch_confidence": 0.95,
        }
        assert rows[1]["metadata"]["original_index"] == 1

    def test_preview_rows_have_no_user_fields(self):
        result = ParseResult(transactions=[_txn()], confidence=0.855, parse_method="standard")

        rows = preview_rows(result)

        assert "user_id" not in rows[0]
        assert "raw_text" not in rows[0]
        assert rows[0]["fingerprint"] == generate_fingerprint(result.transactions[0])
