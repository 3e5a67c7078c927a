"""Health check router: liveness + readiness.

Readiness runs the text parser over a canned alert; if the pattern tables
stop recognising it, the instance reports itself degraded.
"""

import structlog
from fastapi import APIRouter

from packages.text_parser import parse_transactions_with_fallbacks

router = APIRouter(tags=["health"])
logger = structlog.get_logger()

PARSER_PROBE_TEXT = "Date: 11 Dec 2025\nDescription: HEALTH PROBE\nAmount: -1.00"


@router.get("/health")
async def health_liveness():
    """Liveness probe: returns 200 if the API process is running."""
    return {"status": "healthy", "service": "api"}


@router.get("/health/ready")
async def health_readiness():
    """Readiness probe: checks the parser end to end."""
    status = {
        "status": "healthy",
        "services": {
            "api": "up",
            "parser": "up",
        },
    }

    result = parse_transactions_with_fallbacks(PARSER_PROBE_TEXT)
    if result.parse_method != "standard":
        status["services"]["parser"] = "down"
        status["status"] = "degraded"
        logger.warning("parser_health_failed", parse_method=result.parse_method)

    return status
