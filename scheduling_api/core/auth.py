"""
Bearer-token gate and the registry of routes exempt from it.

Every request passes through `AuthMiddleware` before routing. A request is
let through without a token when auth is disabled, or when its (method, path)
matches an entry in the application's `AccessExceptionRegistry`; otherwise it
must carry `Authorization: Bearer <jwt>`.

Each resource module keeps its own registry; `create_app` merges them into
one frozen registry at startup.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Iterable, Optional

import jwt
import structlog
from fastapi.responses import JSONResponse
from starlette.middleware import Middleware
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

from scheduling_api.core.config import Settings, settings as default_settings

logger = structlog.get_logger(__name__)

ALGORITHM = "HS256"
MIN_PRODUCTION_SECRET_LENGTH = 32
METHODS = frozenset({"GET", "POST", "PUT", "PATCH", "DELETE", "HEAD", "OPTIONS"})

_PARAM_SEGMENT = re.compile(r"^(?::[\w-]+|\{[\w-]+\})$")


# ---------------------------------------------------------------------------
# Path matching
# ---------------------------------------------------------------------------

def normalize_path(path: str) -> str:
    """Collapse repeated slashes, drop a trailing slash and any query string."""
    path = path.split("?", 1)[0]
    path = re.sub(r"/{2,}", "/", path or "/")
    if not path.startswith("/"):
        path = "/" + path
    if len(path) > 1:
        path = path.rstrip("/")
    return path


def _segments(path: str) -> list[str]:
    normalized = normalize_path(path)
    return [] if normalized == "/" else normalized[1:].split("/")


def is_param_segment(segment: str) -> bool:
    """`:id` and `{id}` both name a path parameter."""
    return bool(_PARAM_SEGMENT.match(segment))


def match_path(pattern: str, path: str) -> bool:
    expected = _segments(pattern)
    actual = _segments(path)
    if len(expected) != len(actual):
        return False
    for want, got in zip(expected, actual):
        if is_param_segment(want):
            if not got:
                return False
        elif want != got:
            return False
    return True


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class AccessException:
    method: str
    path: str


class AccessExceptionRegistry:
    """(method, path pattern) pairs that skip the bearer-token check."""

    def __init__(self, exceptions: Iterable[AccessException] = ()):
        self._exceptions: list[AccessException] = list(exceptions)
        self._frozen = False

    @classmethod
    def merge(cls, *registries: "AccessExceptionRegistry") -> "AccessExceptionRegistry":
        """Union of several registries, frozen against further additions."""
        merged = cls(e for registry in registries for e in registry.exceptions)
        merged._frozen = True
        return merged

    @property
    def exceptions(self) -> tuple[AccessException, ...]:
        return tuple(self._exceptions)

    @property
    def frozen(self) -> bool:
        return self._frozen

    def add_exception(self, method: str, path: str) -> None:
        if self._frozen:
            raise RuntimeError("Access exceptions cannot be added after startup.")
        method = method.upper()
        if method not in METHODS:
            raise ValueError(f"Unsupported HTTP method: {method}")
        self._exceptions.append(AccessException(method=method, path=normalize_path(path)))

    def is_exempt(self, method: str, path: str) -> bool:
        method = method.upper()
        return any(
            e.method == method and match_path(e.path, path)
            for e in self._exceptions
        )

    def __len__(self) -> int:
        return len(self._exceptions)

    def middleware(self, **options: Any) -> Middleware:
        """The auth gate bound to this registry, for `FastAPI(middleware=[...])`."""
        return Middleware(AuthMiddleware, registry=self, **options)


# ---------------------------------------------------------------------------
# Tokens (PyJWT, HS256)
# ---------------------------------------------------------------------------

def check_secret(settings: Settings) -> None:
    if settings.AUTH_DISABLED:
        return
    if settings.is_production and len(settings.SECRET_KEY) < MIN_PRODUCTION_SECRET_LENGTH:
        raise ValueError(
            f"SECRET_KEY must be at least {MIN_PRODUCTION_SECRET_LENGTH} characters in production."
        )


def create_access_token(
    subject: str | int,
    extra_claims: Optional[dict[str, Any]] = None,
    expires_minutes: Optional[int] = None,
    settings: Settings = default_settings,
) -> str:
    now = datetime.now(timezone.utc)
    minutes = expires_minutes if expires_minutes is not None else settings.ACCESS_TOKEN_EXPIRE_MINUTES
    payload: dict[str, Any] = {
        **(extra_claims or {}),
        "sub": str(subject),
        "iat": now,
        "exp": now + timedelta(minutes=minutes),
    }
    return jwt.encode(payload, settings.SECRET_KEY, algorithm=ALGORITHM)


def verify_access_token(token: str, settings: Settings = default_settings) -> dict[str, Any]:
    """Decoded claims; raises jwt.InvalidTokenError on bad signature or expiry."""
    return jwt.decode(
        token,
        settings.SECRET_KEY,
        algorithms=[ALGORITHM],
        options={"require": ["exp", "sub"]},
    )


# ---------------------------------------------------------------------------
# Middleware
# ---------------------------------------------------------------------------

def _unauthorized() -> JSONResponse:
    return JSONResponse(status_code=401, content={"error": "Unauthorized"})


class AuthMiddleware(BaseHTTPMiddleware):
    def __init__(
        self,
        app: ASGIApp,
        registry: AccessExceptionRegistry,
        verifier: Callable[[str], dict[str, Any]] = verify_access_token,
        disabled: bool = False,
    ) -> None:
        super().__init__(app)
        self.registry = registry
        self.verifier = verifier
        self.disabled = disabled

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        if self.disabled or self.registry.is_exempt(request.method, request.url.path):
            return await call_next(request)

        header = request.headers.get("authorization", "")
        scheme, _, token = header.partition(" ")
        if scheme.lower() != "bearer" or not token.strip():
            logger.info("auth_rejected", reason="missing_token", method=request.method, path=request.url.path)
            return _unauthorized()

        try:
            principal = self.verifier(token.strip())
        except Exception as exc:
            logger.info(
                "auth_rejected",
                reason="invalid_token",
                error_type=type(exc).__name__,
                method=request.method,
                path=request.url.path,
            )
            return _unauthorized()

        request.state.principal = principal
        return await call_next(request)
