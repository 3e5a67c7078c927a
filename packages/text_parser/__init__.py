"""
Transaction Text Parser

Heuristic extraction of structured transactions from pasted statement text.
"""

__version__ = "0.1.0"

from .models import ParsedTransaction, ParseResult
from .parser import (
    TransactionTextParser,
    calculate_batch_confidence,
    parse_transaction_text,
    parse_transactions_with_fallbacks,
)

__all__ = [
    "ParsedTransaction",
    "ParseResult",
    "TransactionTextParser",
    "calculate_batch_confidence",
    "parse_transaction_text",
    "parse_transactions_with_fallbacks",
]
