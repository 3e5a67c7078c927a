import re

PLACEHOLDER_DESCRIPTION = "Transaction"

# Lines that only carry metadata already extracted elsewhere.
METADATA_PREFIXES = ("date:", "amount:", "balance", "available balance")
DATE_LINE = re.compile(r"^\d{1,2}/\d{1,2}/\d{4}")
DESCRIPTION_LABEL = re.compile(r"^description\s*:\s*", re.IGNORECASE)

# Applied in order to the joined description lines.
NOISE_PATTERNS = (
    (re.compile(r"txn\d+", re.IGNORECASE), " "),  # Transaction IDs
    (re.compile(r"\d{4}-\d{2}-\d{2}"), " "),  # ISO dates
    (re.compile(r"₹\s*[\d,]+(?:\.\d{2})?"), " "),  # Rupee amounts
    (re.compile(r"\bRs\.?\s*[\d,]+(?:\.\d{2})?", re.IGNORECASE), " "),
    (
        re.compile(r"\s+(?:debited|credited|debit|credit|Dr|Cr)\b\.?", re.IGNORECASE),
        " ",
    ),
    (
        re.compile(
            r"\b(?:Available\s+)?Bal(?:ance)?\b[:\s→]*(?:₹|Rs\.?)?\s*-?[\d,]+(?:\.\d{2})?",
            re.IGNORECASE,
        ),
        " ",
    ),
    (re.compile(r"\b(Order)\s*#\s*[\w-]+", re.IGNORECASE), r"\1"),  # Keep the word
    (re.compile(r"[*→]"), " "),
    (re.compile(r"\s+"), " "),
)


class DescriptionCleaner:
    """Reduces a raw transaction block to its merchant/narrative text."""

    def __init__(self, placeholder: str = PLACEHOLDER_DESCRIPTION):
        self.placeholder = placeholder

    def _keep_line(self, line: str) -> str:
        """Return the descriptive part of a line, or "" to drop it."""
        lower = line.lower()
        if lower.startswith(METADATA_PREFIXES):
            return ""
        if DATE_LINE.match(line):
            return ""
        return DESCRIPTION_LABEL.sub("", line)

    def clean(self, block: str) -> str:
        if not block:
            return self.placeholder

        lines = (self._keep_line(line.strip()) for line in block.split("\n"))
        cleaned = " ".join(line for line in lines if line)

        for pattern, replacement in NOISE_PATTERNS:
            cleaned = pattern.sub(replacement, cleaned)
        cleaned = cleaned.strip()

        if len(cleaned) < 2:
            return self.placeholder
        return cleaned
