"""Pydantic schemas for the transactions domain."""

import datetime
from typing import Optional, Union

from pydantic import BaseModel, Field


class ExtractRequest(BaseModel):
    """Raw statement text pasted by the user."""

    text: str = Field(..., min_length=1, description="Transaction text to parse")


class TransactionOut(BaseModel):
    """An extracted transaction as returned to the client."""

    id: Optional[Union[int, str]] = None
    date: datetime.date
    description: str
    amount: float
    type: str
    category: Optional[str] = None
    balance: Optional[float] = None
    confidence: float
    fingerprint: str = ""


class ExtractSummary(BaseModel):
    count: int
    confidence: float
    parse_method: str


class ExtractResponse(BaseModel):
    """Response from the extract and preview endpoints."""

    transactions: list[TransactionOut]
    summary: ExtractSummary
