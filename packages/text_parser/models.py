"""Typed records produced by the transaction text parser."""

import datetime
from typing import Any, Dict, List, Literal, Optional

import pandas as pd
from pydantic import BaseModel, ConfigDict, Field

TransactionType = Literal["debit", "credit"]
ParseMethod = Literal["standard", "csv_fallback", "failed"]


class ParsedTransaction(BaseModel):
    """Standardized transaction extracted from one block of text."""

    model_config = ConfigDict(frozen=True)

    date: datetime.date
    description: str = Field(..., min_length=1)
    amount: float = Field(..., ge=0, allow_inf_nan=False)
    type: TransactionType
    category: Optional[str] = None
    balance: Optional[float] = Field(default=None, allow_inf_nan=False)  # may be negative (overdraft)
    confidence: float = Field(..., ge=0, le=1)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for DataFrame creation."""
        return {
            "date": self.date,
            "description": self.description,
            "amount": self.amount,
            "type": self.type,
            "category": self.category,
            "balance": self.balance,
            "confidence": self.confidence,
        }


class ParseResult(BaseModel):
    """Batch outcome of one parser invocation."""

    model_config = ConfigDict(frozen=True)

    transactions: List[ParsedTransaction] = Field(default_factory=list)
    confidence: float = Field(default=0.0, ge=0, le=1)
    parse_method: ParseMethod = "failed"

    @property
    def count(self) -> int:
        return len(self.transactions)

    def to_dataframe(self) -> pd.DataFrame:
        """Tabular view of the batch, one row per transaction in block order."""
        columns = ["date", "description", "amount", "type", "category", "balance", "confidence"]
        return pd.DataFrame([t.to_dict() for t in self.transactions], columns=columns)
