"""
Transaction Text Parser - extracts structured transactions from pasted text.

Handles SMS alerts, email notifications and statement excerpts that arrive
as free-form text. Each blank-line separated block is parsed on its own;
when no block yields a transaction, comma-separated rows are tried instead.
"""

import logging
import re
from typing import List, Optional, Sequence

from pydantic import ValidationError

from .classifier import categorize, classify_type
from .description_cleaner import DescriptionCleaner
from .models import ParsedTransaction, ParseResult
from .patterns import extract_amount, extract_balance, extract_date, parse_number

logger = logging.getLogger(__name__)

BLOCK_SEPARATOR = re.compile(r"\n\s*\n")

CSV_FALLBACK_CONFIDENCE = 0.75
CSV_PLACEHOLDER_DESCRIPTION = "Parsed Transaction"
CSV_AMOUNT = re.compile(r"^[-+]?(?:\d{1,3}(?:,\d{3})+|\d+)(?:\.\d+)?$")

# Applied to batch confidence when only one transaction was found.
SINGLE_TRANSACTION_PENALTY = 0.9


def split_blocks(text: str) -> List[str]:
    """Split text into blocks on runs of blank lines. Blank blocks are dropped."""
    if not text:
        return []
    return [block for block in BLOCK_SEPARATOR.split(text) if block.strip()]


def calculate_batch_confidence(transactions: Sequence[ParsedTransaction]) -> float:
    """Mean record confidence, penalized for single-record batches."""
    if not transactions:
        return 0.0

    confidence = sum(t.confidence for t in transactions) / len(transactions)
    if len(transactions) == 1:
        confidence *= SINGLE_TRANSACTION_PENALTY

    return min(confidence, 1.0)


class TransactionTextParser:
    """
    Parser for free-form transaction text.

    Stateless: one instance can be shared between threads and requests.
    """

    def __init__(self, cleaner: Optional[DescriptionCleaner] = None):
        self.cleaner = cleaner or DescriptionCleaner()

    def parse_block(self, block: str) -> Optional[ParsedTransaction]:
        """
        Parse a single (possibly multi-line) block.

        Returns None unless both a date and an amount can be extracted,
        or if the assembled record fails validation.
        """
        if not block.strip():
            return None

        date = extract_date(block)
        if date is None:
            return None

        amount = extract_amount(block)
        if amount is None:
            return None

        description = self.cleaner.clean(block)

        try:
            return ParsedTransaction(
                date=date,
                description=description,
                amount=amount.amount,
                type=classify_type(block),
                category=categorize(description),
                balance=extract_balance(block),
                confidence=amount.confidence,
            )
        except ValidationError as e:
            logger.debug("Dropping block that failed validation: %s", e)
            return None

    def parse_standard(self, text: str) -> List[ParsedTransaction]:
        """Parse every block, keeping the ones that produced a transaction."""
        transactions = []
        for block in split_blocks(text):
            transaction = self.parse_block(block)
            if transaction is not None:
                transactions.append(transaction)
        return transactions

    def _parse_csv_amount(self, cell: str) -> Optional[float]:
        match = extract_amount(cell)
        if match is not None:
            return match.amount

        cell = cell.strip()
        if not CSV_AMOUNT.match(cell):
            return None
        value = parse_number(cell)
        return abs(value) if value is not None else None

    def parse_csv(self, text: str) -> List[ParsedTransaction]:
        """
        Fallback for comma-separated rows: date, amount, description[, ...].

        Rows with fewer than three fields, or whose first two fields are not
        a date and an amount, are skipped.
        """
        transactions = []
        for row in text.split("\n"):
            row = row.strip()
            if "," not in row:
                continue

            parts = row.split(",")
            if len(parts) < 3:
                continue

            date = extract_date(parts[0])
            if date is None:
                continue
            amount = self._parse_csv_amount(parts[1])
            if amount is None:
                continue

            try:
                transactions.append(
                    ParsedTransaction(
                        date=date,
                        description=parts[2].strip() or CSV_PLACEHOLDER_DESCRIPTION,
                        amount=amount,
                        type=classify_type(row),
                        confidence=CSV_FALLBACK_CONFIDENCE,
                    )
                )
            except ValidationError as e:
                logger.debug("Dropping CSV row that failed validation: %s", e)

        return transactions

    def parse(self, text: str) -> ParseResult:
        """
        Parse text, falling back to CSV rows when no block matched.

        Never raises: text that yields nothing is reported with
        parse_method "failed" and confidence 0.
        """
        if not isinstance(text, str) or not text.strip():
            return ParseResult()

        transactions = self.parse_standard(text)
        method = "standard"

        if not transactions and "," in text:
            transactions = self.parse_csv(text)
            method = "csv_fallback"

        if not transactions:
            logger.debug("No transactions found in %d characters of text", len(text))
            return ParseResult()

        result = ParseResult(
            transactions=transactions,
            confidence=calculate_batch_confidence(transactions),
            parse_method=method,
        )
        logger.debug(
            "Parsed %d transactions (method=%s, confidence=%.3f)",
            result.count,
            result.parse_method,
            result.confidence,
        )
        return result


_default_parser = TransactionTextParser()


def parse_transaction_text(text: str) -> List[ParsedTransaction]:
    """Standard block parsing only, without the CSV fallback."""
    if not isinstance(text, str):
        return []
    return _default_parser.parse_standard(text)


def parse_transactions_with_fallbacks(text: str) -> ParseResult:
    """
    Convenience function to parse pasted transaction text.

    Args:
        text: Raw statement excerpt (SMS, email, PDF copy).

    Returns:
        ParseResult with transactions in block order, batch confidence
        and the method that produced them.
    """
    return _default_parser.parse(text)
