"""Debit/credit and category classification for parsed transactions."""

import re
from enum import Enum
from typing import Optional, Tuple


class Category(str, Enum):
    """Categories assigned from description keywords."""

    FOOD = "food"
    TRANSPORT = "transport"
    SHOPPING = "shopping"
    UTILITIES = "utilities"


# Order matters: the first category with a matching keyword wins.
CATEGORY_KEYWORDS: Tuple[Tuple[Category, Tuple[str, ...]], ...] = (
    (Category.FOOD, ("starbucks", "coffee", "restaurant", "pizza", "burger", "food", "cafe")),
    (Category.TRANSPORT, ("uber", "taxi", "ola", "bus", "train", "flight", "airport")),
    (Category.SHOPPING, ("amazon", "flipkart", "mall", "store", "shop", "order")),
    (Category.UTILITIES, ("electric", "water", "gas", "internet", "phone", "bill")),
)

DEBIT_KEYWORDS = ("debit", "paid", "spent", "charges", "debited", "withdrawn", "dr", "-")
CREDIT_KEYWORDS = ("credit", "deposited", "received", "refund", "credited", "cr", "+")

# A signed amount is the strongest debit signal and skips keyword scoring.
# The lookbehind keeps date separators ("2025-12-10") from counting as signs.
NEGATIVE_AMOUNT_PATTERNS = (
    re.compile(r"Amount[:\s]+-", re.IGNORECASE),
    re.compile(r"(?<!\d)-\d{1,3}(?:,\d{3})*(?:\.\d{2})?"),
)


def classify_type(text: str) -> str:
    """
    Decide whether text describes a debit or a credit.

    Keywords are matched as case-insensitive substrings. Credit wins only
    with strictly more hits than debit; ties (including no hits at all)
    are reported as debit.
    """
    if any(pattern.search(text) for pattern in NEGATIVE_AMOUNT_PATTERNS):
        return "debit"

    text_lower = text.lower()
    debit_score = sum(1 for keyword in DEBIT_KEYWORDS if keyword in text_lower)
    credit_score = sum(1 for keyword in CREDIT_KEYWORDS if keyword in text_lower)

    return "credit" if credit_score > debit_score else "debit"


def categorize(description: str) -> Optional[str]:
    """Return the category token for a cleaned description, or None."""
    if not description:
        return None

    description_lower = description.lower()
    for category, keywords in CATEGORY_KEYWORDS:
        if any(keyword in description_lower for keyword in keywords):
            return category.value
    return None
