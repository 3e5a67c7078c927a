"""RFC 7807 Problem Details error handling.

Every failure leaves the API in the same shape:

    {
        "type": "parse-error",
        "title": "Bad Request",
        "status": 400,
        "detail": "Could not extract any transactions from the provided text",
        "instance": "/api/v1/transactions/extract"
    }
"""

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = structlog.get_logger()


class AppError(Exception):
    """Base application error."""

    def __init__(self, detail: str, status_code: int = 500, error_type: str = "about:blank"):
        self.detail = detail
        self.status_code = status_code
        self.error_type = error_type
        super().__init__(detail)


class ParseError(AppError):
    """Text was accepted but no transaction could be extracted from it.

    Client-correctable: the caller should paste a different excerpt.
    """

    def __init__(self, detail: str = "Could not extract any transactions from the provided text"):
        super().__init__(detail=detail, status_code=400, error_type="parse-error")


class ValidationError(AppError):
    """Input rejected before parsing (e.g. text length out of bounds)."""

    def __init__(self, detail: str = "Validation failed"):
        super().__init__(detail=detail, status_code=422)


class AuthenticationError(AppError):
    def __init__(self, detail: str = "Authentication required"):
        super().__init__(detail=detail, status_code=401)


_STATUS_TITLES = {
    400: "Bad Request",
    401: "Unauthorized",
    404: "Not Found",
    405: "Method Not Allowed",
    422: "Unprocessable Entity",
    500: "Internal Server Error",
}


def problem_response(
    request: Request,
    status: int,
    detail: str,
    error_type: str = "about:blank",
) -> JSONResponse:
    """Render a Problem Details body for the current request."""
    body = {
        "type": error_type,
        "title": _STATUS_TITLES.get(status, "Error"),
        "status": status,
        "detail": detail,
        "instance": request.url.path,
    }
    request_id = getattr(request.state, "request_id", "")
    if request_id:
        body["request_id"] = request_id
    return JSONResponse(status_code=status, content=body)


def _format_validation_errors(exc: RequestValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = ".".join(str(p) for p in error.get("loc", ()) if p != "body")
        message = error.get("msg", "invalid value")
        parts.append(f"{location}: {message}" if location else message)
    return "; ".join(parts) or "Invalid request body"


def register_error_handlers(app: FastAPI) -> None:
    """Register global exception handlers on the FastAPI app."""

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
        return problem_response(request, exc.status_code, exc.detail, exc.error_type)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        return problem_response(request, 422, _format_validation_errors(exc))

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        detail = exc.detail if isinstance(exc.detail, str) else str(exc.detail)
        return problem_response(request, exc.status_code, detail)

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("unhandled_error", path=request.url.path)
        return problem_response(request, 500, "An unexpected error occurred")
