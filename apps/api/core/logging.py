"""Structured logging with structlog.

The API emits snake_case events with keyword context:

    logger.info("transactions_extracted", count=3, parse_method="standard")

Production renders one JSON object per line, development a colorized
console line. The text parser logs through the standard library, so its
records go through the same root handler at the same level.
"""

import logging
import sys

import structlog

PARSER_LOGGER = "packages.text_parser"


def _resolve_level(log_level: str) -> int:
    level = logging.getLevelName(log_level.upper())
    return level if isinstance(level, int) else logging.INFO


def _renderer(json_output: bool):
    if json_output:
        return structlog.processors.JSONRenderer(ensure_ascii=False)
    return structlog.dev.ConsoleRenderer()


def setup_logging(log_level: str = "INFO", json_output: bool = True) -> None:
    """Configure structlog and the stdlib root logger.

    Args:
        log_level: level name; unknown names fall back to INFO.
        json_output: JSON lines when True, console rendering otherwise.
    """
    level = _resolve_level(log_level)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.format_exc_info,
            _renderer(json_output),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level)
    logging.getLogger(PARSER_LOGGER).setLevel(level)
