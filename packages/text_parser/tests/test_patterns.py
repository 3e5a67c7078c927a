from datetime import date

import pytest

from packages.text_parser.patterns import (
    EXPLICIT_AMOUNT_CONFIDENCE,
    extract_amount,
    extract_balance,
    extract_date,
    parse_number,
)


class TestExtractDate:
    @pytest.mark.parametrize(
        "text, expected",
        [
            ("Date: 11 Dec 2025", date(2025, 12, 11)),
            ("on 5 jan 2024 at noon", date(2024, 1, 5)),
            ("12/11/2025 → ₹1,250.00", date(2025, 11, 12)),
            ("3/4/2025", date(2025, 4, 3)),
            ("txn123 2025-12-10 Amazon", date(2025, 12, 10)),
            ("paid 09-08-2024", date(2024, 8, 9)),
        ],
    )
    def test_formats(self, text, expected):
        assert extract_date(text) == expected

    def test_named_month_wins_over_numeric(self):
        assert extract_date("2025-01-01 posted 11 Dec 2025") == date(2025, 12, 11)

    def test_slash_wins_over_iso(self):
        assert extract_date("2025-01-01 value 02/03/2025") == date(2025, 3, 2)

    def test_impossible_date_is_not_found(self):
        assert extract_date("32/01/2025") is None
        assert extract_date("2025-13-01") is None

    def test_impossible_date_tries_next_pattern(self):
        assert extract_date("31/02/2025 or 2025-02-28") == date(2025, 2, 28)

    def test_no_date(self):
        assert extract_date("no date here 12345") is None

    def test_month_name_must_be_ascii(self):
        # U+017F folds to "s" under IGNORECASE
        assert extract_date("5 \u017fep 2025") is None
        assert extract_date("5 SEP 2025") == date(2025, 9, 5)


class TestExtractAmount:
    @pytest.mark.parametrize(
        "text, expected",
        [
            ("Amount: -420.00", 420.0),
            ("Amount: 1,250.00", 1250.0),
            ("Amount 4200.00", 4200.0),
            ("₹1,250.00 debited", 1250.0),
            ("₹ 99", 99.0),
            ("Rs. 1,000.50 spent", 1000.50),
            ("Rs 1250", 1250.0),
            ("$19.99 charged", 19.99),
            ("2,999.00 Dr", 2999.0),
            ("paid 450.00 debit", 450.0),
        ],
    )
    def test_patterns(self, text, expected):
        match = extract_amount(text)

        assert match is not None
        assert match.amount == pytest.approx(expected)
        assert match.confidence == EXPLICIT_AMOUNT_CONFIDENCE

    def test_label_wins_over_currency(self):
        match = extract_amount("₹10.00 fee, Amount: 500.00")
        assert match.amount == 500.0

    def test_magnitude_is_never_negative(self):
        assert extract_amount("Amount: -1,000.00").amount == 1000.0

    def test_unparseable_match_falls_through(self):
        assert extract_amount("₹, Rs 75").amount == 75.0

    def test_bare_number_is_not_an_amount(self):
        assert extract_amount("-420") is None
        assert extract_amount("420.00") is None

    def test_rs_inside_word_is_ignored(self):
        assert extract_amount("Transfers 12") is None


class TestExtractBalance:
    @pytest.mark.parametrize(
        "text, expected",
        [
            ("Balance after transaction: 18,420.50", 18420.50),
            ("Balance: ₹5,000", 5000.0),
            ("Available Balance → ₹17,170.50", 17170.50),
            ("Available: Rs. 300.00", 300.0),
            ("Dr Bal 14171.50 Shopping", 14171.50),
            ("Balance: -250.00", -250.0),
        ],
    )
    def test_patterns(self, text, expected):
        assert extract_balance(text) == pytest.approx(expected)

    def test_no_balance(self):
        assert extract_balance("₹2,999.00 Dr") is None


class TestParseNumber:
    def test_strips_separators(self):
        assert parse_number("1,23,456.78") == pytest.approx(123456.78)

    def test_rejects_garbage(self):
        assert parse_number(",,,") is None
        assert parse_number("-") is None

    def test_rejects_overflow(self):
        assert parse_number("9" * 400) is None
