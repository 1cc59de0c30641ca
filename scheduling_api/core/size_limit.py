"""
Response size guard.

A response body larger than the configured limit is replaced by a 418 with
`{"error": "Response Object Too Large", "message": ...}`. Responses that
declare a Content-Length within the limit pass through untouched; anything
else is buffered and measured.
"""
import structlog
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

logger = structlog.get_logger(__name__)

MB = 1024 * 1024
DEFAULT_RESPONSE_SIZE_LIMIT = 31 * MB


def too_large(size: int, limit: int) -> JSONResponse:
    return JSONResponse(
        status_code=418,
        content={
            "error": "Response Object Too Large",
            "message": f"Response size of {size / MB:.2f} MB exceeds the limit of {limit / MB:.2f} MB.",
        },
    )


class ResponseSizeLimitMiddleware(BaseHTTPMiddleware):
    def __init__(self, app: ASGIApp, limit: int = DEFAULT_RESPONSE_SIZE_LIMIT) -> None:
        super().__init__(app)
        self.limit = limit

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        response = await call_next(request)
        declared = response.headers.get("content-length")
        if declared is not None and int(declared) <= self.limit:
            return response

        body = b"".join([chunk async for chunk in response.body_iterator])
        if len(body) > self.limit:
            logger.warning(
                "response_too_large",
                method=request.method,
                path=request.url.path,
                size=len(body),
                limit=self.limit,
            )
            return too_large(len(body), self.limit)
        return Response(
            content=body,
            status_code=response.status_code,
            headers=dict(response.headers),
            media_type=response.media_type,
        )
