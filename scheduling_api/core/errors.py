"""
Exception hierarchy and FastAPI exception handlers.

Only unexpected failures travel as exceptions. Validation problems,
business-rule violations and missing records are ordinary return values of
the business functions (`{400: report}`, `{404: NotFoundBody(...)}`).
"""
from __future__ import annotations

from typing import Any

import structlog
from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette import status

from scheduling_api.core.validation import (
    ErrorCode,
    FieldError,
    ValidationErrorReport,
    error_code_for,
)

logger = structlog.get_logger(__name__)


# ---------------------------------------------------------------------------
# Exception classes
# ---------------------------------------------------------------------------

class APIException(Exception):
    """Base class for all application-level errors."""
    http_status: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    code: str = "INTERNAL_ERROR"

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict:
        payload: dict[str, Any] = {"code": self.code, "message": self.message}
        if self.details:
            payload["details"] = self.details
        return payload


class MalformedBodyError(APIException):
    """Request body is not parseable JSON; raised before schema validation."""
    http_status = status.HTTP_400_BAD_REQUEST
    code = "MALFORMED_BODY"

    def __init__(self, reason: str = "Malformed JSON body"):
        super().__init__(message=reason)

    def to_report(self) -> ValidationErrorReport:
        return ValidationErrorReport.single(ErrorCode.INVALID_VALUE, ["body"], self.message)


class ContractViolationError(APIException):
    """A business function returned an outcome its own contract does not declare."""
    http_status = status.HTTP_500_INTERNAL_SERVER_ERROR
    code = "CONTRACT_VIOLATION"

    def __init__(self, operation: str, declared: tuple[int, ...], returned: list[Any]):
        super().__init__(
            message=(
                f"{operation} returned keys {returned}; "
                f"exactly one of {list(declared)} is required."
            ),
            details={"operation": operation, "declared": list(declared), "returned": [str(k) for k in returned]},
        )


# ---------------------------------------------------------------------------
# FastAPI exception handlers
# ---------------------------------------------------------------------------

async def malformed_body_handler(request: Request, exc: MalformedBodyError) -> JSONResponse:
    logger.info("malformed_body", path=request.url.path, reason=exc.message)
    return JSONResponse(
        status_code=exc.http_status,
        content=exc.to_report().model_dump(mode="json"),
    )


async def api_exception_handler(request: Request, exc: APIException) -> JSONResponse:
    if exc.http_status >= 500:
        logger.error("api_exception", path=request.url.path, code=exc.code, message=exc.message)
        # internals stay in the log
        return JSONResponse(
            status_code=exc.http_status,
            content={"error": "Internal Server Error"},
        )
    return JSONResponse(status_code=exc.http_status, content=exc.to_dict())


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """FastAPI's own validation (plain routes) reported in the contract format."""
    errors: list[FieldError] = []
    for error in exc.errors():
        errors.append(FieldError(
            code=error_code_for(error["type"]),
            path=[str(part) for part in error["loc"]],
            message=error["msg"],
        ))
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=ValidationErrorReport(errors=errors).model_dump(mode="json"),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        "unhandled_exception",
        method=request.method,
        path=request.url.path,
        error_type=type(exc).__name__,
        error_message=str(exc),
        exc_info=exc,
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "Internal Server Error"},
    )
