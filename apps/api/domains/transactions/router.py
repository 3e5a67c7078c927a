"""Transactions router: extract structured transactions from pasted text.

/extract parses and stores; /preview parses only, so the client can show
the user what would be saved.
"""

import structlog
from fastapi import APIRouter, Depends
from supabase import Client

from apps.api.core.auth import get_user_client, require_user_id
from apps.api.core.config import Settings, get_settings
from apps.api.core.errors import AppError
from apps.api.domains.transactions.schemas import (
    ExtractRequest,
    ExtractResponse,
    ExtractSummary,
    TransactionOut,
)
from apps.api.domains.transactions.service import (
    build_transaction_rows,
    extract_transactions,
    preview_rows,
)
from packages.text_parser import ParseResult

router = APIRouter(prefix="/transactions", tags=["transactions"])
logger = structlog.get_logger()


def _summary(result: ParseResult) -> ExtractSummary:
    return ExtractSummary(
        count=result.count,
        confidence=result.confidence,
        parse_method=result.parse_method,
    )


@router.post("/extract", response_model=ExtractResponse, status_code=201)
async def extract(
    request: ExtractRequest,
    client: Client = Depends(get_user_client),
    settings: Settings = Depends(get_settings),
):
    """Parse pasted text and persist every extracted transaction.

    Zero extracted transactions is a client error (400), not a server fault.
    """
    user_id = require_user_id(client)

    result = extract_transactions(
        request.text,
        min_length=settings.MIN_TEXT_LENGTH,
        max_length=settings.MAX_TEXT_LENGTH,
    )
    rows = build_transaction_rows(result, user_id=user_id, source_text=request.text)

    try:
        response = client.table(settings.TRANSACTIONS_TABLE).insert(rows).execute()
    except Exception as e:
        logger.error("transaction_persist_failed", error=str(e), count=len(rows))
        raise AppError("Failed to save transactions", status_code=500)

    saved = response.data or rows
    logger.info(
        "transactions_extracted",
        count=len(saved),
        parse_method=result.parse_method,
        confidence=round(result.confidence, 3),
    )
    return ExtractResponse(
        transactions=[TransactionOut(**row) for row in saved],
        summary=_summary(result),
    )


@router.post("/preview", response_model=ExtractResponse)
async def preview(
    request: ExtractRequest,
    client: Client = Depends(get_user_client),
    settings: Settings = Depends(get_settings),
):
    """Parse pasted text without storing anything."""
    require_user_id(client)

    result = extract_transactions(
        request.text,
        min_length=settings.MIN_TEXT_LENGTH,
        max_length=settings.MAX_TEXT_LENGTH,
    )
    return ExtractResponse(
        transactions=[TransactionOut(**row) for row in preview_rows(result)],
        summary=_summary(result),
    )
