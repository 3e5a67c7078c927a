"""Transactions service: pre-checks, extraction, fingerprinting, persistence rows.

The text parser itself never raises; this layer turns its "failed"
outcome into a client-correctable ParseError and shapes the parsed
records into rows for the transactions table.
"""

import hashlib
from typing import Any, Dict, List

import structlog

from apps.api.core.errors import ParseError, ValidationError
from packages.text_parser import ParsedTransaction, ParseResult, parse_transactions_with_fallbacks

logger = structlog.get_logger()


def validate_transaction_text(text: str, min_length: int = 5, max_length: int = 10_000) -> bool:
    """Cheap "looks parseable" check run before the parser."""
    if not text or not isinstance(text, str):
        return False
    return min_length <= len(text) <= max_length


def generate_fingerprint(transaction: ParsedTransaction) -> str:
    """Generate a deterministic SHA256 fingerprint for a parsed transaction.

        SHA256(date|amount.2f|type|DESCRIPTION|balance.2f)

    The description is trimmed and uppercased; a missing balance hashes as
    an empty field so it never collides with a zero balance.
    """
    normalized_balance = "" if transaction.balance is None else f"{transaction.balance:.2f}"
    raw = (
        f"{transaction.date.isoformat()}|{transaction.amount:.2f}|{transaction.type}"
        f"|{transaction.description.strip().upper()}|{normalized_balance}"
    )
    return hashlib.sha256(raw.encode("utf-8")).hexdigest()


def extract_transactions(text: str, min_length: int = 5, max_length: int = 10_000) -> ParseResult:
    """Run the pre-check and the parser.

    Raises:
        ValidationError: text is outside the accepted length bounds.
        ParseError: the parser found no transactions.
    """
    if not validate_transaction_text(text, min_length=min_length, max_length=max_length):
        raise ValidationError(
            f"Transaction text must be between {min_length} and {max_length} characters"
        )

    result = parse_transactions_with_fallbacks(text)
    if result.parse_method == "failed":
        logger.info("transaction_parse_failed", text_length=len(text))
        raise ParseError()

    return result


def build_transaction_rows(
    result: ParseResult, user_id: str, source_text: str
) -> List[Dict[str, Any]]:
    """Shape parsed records into insertable rows.

    Each row is tagged with the raw source text and the batch outcome,
    so a stored transaction can be traced back to the paste it came from.
    """
    rows = []
    for index, transaction in enumerate(result.transactions):
        row = transaction.model_dump(mode="json")
        row.update(
            {
                "user_id": user_id,
                "fingerprint": generate_fingerprint(transaction),
                "raw_text": source_text,
                "metadata": {
                    "parse_method": result.parse_method,
                    "original_index": index,
                    "batch_confidence": result.confidence,
                },
            }
        )
        rows.append(row)
    return rows


def preview_rows(result: ParseResult) -> List[Dict[str, Any]]:
    """Rows for display only: parsed fields plus fingerprint, nothing stored."""
    rows = []
    for transaction in result.transactions:
        row = transaction.model_dump(mode="json")
        row["fingerprint"] = generate_fingerprint(transaction)
        rows.append(row)
    return rows
