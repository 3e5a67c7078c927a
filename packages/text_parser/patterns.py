"""
Pattern tables for date, amount and balance extraction.

Each table is ordered: extraction walks it top to bottom and the first
pattern that yields a usable value wins. New formats are appended to a
table, never wired in as extra branches.
"""

import math
import re
from datetime import date
from typing import Callable, NamedTuple, Optional, Tuple

# Confidence attached to any amount found through an explicit pattern
# (labeled or currency-prefixed). The CSV fallback uses a lower tier.
EXPLICIT_AMOUNT_CONFIDENCE = 0.95

MONTHS = {
    "jan": 1,
    "feb": 2,
    "mar": 3,
    "apr": 4,
    "may": 5,
    "jun": 6,
    "jul": 7,
    "aug": 8,
    "sep": 9,
    "oct": 10,
    "nov": 11,
    "dec": 12,
}


class AmountMatch(NamedTuple):
    amount: float
    confidence: float


def _day_month_name_year(match: re.Match) -> date:
    day, month, year = match.groups()
    return date(int(year), MONTHS[month.lower()], int(day))


def _day_month_year(match: re.Match) -> date:
    day, month, year = match.groups()
    return date(int(year), int(month), int(day))


def _year_month_day(match: re.Match) -> date:
    year, month, day = match.groups()
    return date(int(year), int(month), int(day))


# Numeric dates are read day-first. "03/04/2025" is 3 April, always.
# Month names match ASCII letters only, so every match is a MONTHS key.
DATE_PATTERNS: Tuple[Tuple[re.Pattern, Callable[[re.Match], date]], ...] = (
    (
        re.compile(
            r"(\d{1,2})\s+(Jan|Feb|Mar|Apr|May|Jun|Jul|Aug|Sep|Oct|Nov|Dec)\s+(\d{4})",
            re.IGNORECASE | re.ASCII,
        ),
        _day_month_name_year,
    ),
    (re.compile(r"(\d{1,2})/(\d{1,2})/(\d{4})"), _day_month_year),
    (re.compile(r"(\d{4})-(\d{2})-(\d{2})"), _year_month_day),
    (re.compile(r"(\d{1,2})-(\d{1,2})-(\d{4})"), _day_month_year),
)

AMOUNT_PATTERNS: Tuple[re.Pattern, ...] = (
    # "Amount: -420.00", "Amount 1,250.00"
    re.compile(
        r"Amount[:\s]+(-?(?:\d{1,3}(?:,\d{3})+|\d+)(?:\.\d{2})?)", re.IGNORECASE
    ),
    # "₹1,250.00"
    re.compile(r"₹\s*([\d,]+(?:\.\d{2})?)"),
    # "Rs 1250", "Rs. 1,250.00"
    re.compile(r"\bRs\.?\s*([\d,]+(?:\.\d{2})?)", re.IGNORECASE),
    # "$1250.00"
    re.compile(r"\$\s*([\d,]+(?:\.\d{2})?)"),
    # "2,999.00 Dr"
    re.compile(r"(?:^|[^\d])([\d,]+\.\d{2})\s+(?:Dr|Cr|debit|credit)", re.IGNORECASE),
)

BALANCE_PATTERNS: Tuple[re.Pattern, ...] = (
    # "Balance: 18,420.50", "Balance after transaction: 18,420.50"
    re.compile(
        r"Balance[:\s]+(?:after\s+transaction[:\s]+)?(?:₹|Rs\.?)?\s*"
        r"(-?\d+(?:,\d{3})*(?:\.\d{2})?)",
        re.IGNORECASE,
    ),
    # "Available Balance → ₹17,170.50", "Available: 500"
    re.compile(
        r"Available[:\s]+(?:Balance)?[:\s→]*(?:₹|Rs\.?)?\s*"
        r"(-?\d+(?:,\d{3})*(?:\.\d{2})?)",
        re.IGNORECASE,
    ),
    # "Bal 14171.50"
    re.compile(r"\bBal\s+(-?\d+(?:,\d{3})*(?:\.\d{2})?)", re.IGNORECASE),
)


def parse_number(raw: str) -> Optional[float]:
    """Parse a possibly thousands-separated number, None if it is not one."""
    cleaned = raw.replace(",", "").strip()
    if not cleaned:
        return None
    try:
        value = float(cleaned)
    except ValueError:
        return None
    if not math.isfinite(value):
        return None
    return value


def extract_date(text: str) -> Optional[date]:
    """
    Find the first parseable calendar date in text.

    A pattern whose match cannot form a real date (day 32, month 13) is
    treated as not matching and the next pattern is tried.
    """
    for pattern, build in DATE_PATTERNS:
        match = pattern.search(text)
        if not match:
            continue
        try:
            return build(match)
        except ValueError:
            continue
    return None


def extract_amount(text: str) -> Optional[AmountMatch]:
    """Find the transaction magnitude. The sign is never kept."""
    for pattern in AMOUNT_PATTERNS:
        match = pattern.search(text)
        if not match:
            continue
        value = parse_number(match.group(1))
        if value is not None:
            return AmountMatch(abs(value), EXPLICIT_AMOUNT_CONFIDENCE)
    return None


def extract_balance(text: str) -> Optional[float]:
    for pattern in BALANCE_PATTERNS:
        match = pattern.search(text)
        if not match:
            continue
        value = parse_number(match.group(1))
        if value is not None:
            return value
    return None
