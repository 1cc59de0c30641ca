from functools import partial
from typing import Optional

import structlog
from fastapi import Depends, FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from starlette.middleware import Middleware

from scheduling_api.core.auth import AccessExceptionRegistry, check_secret, verify_access_token
from scheduling_api.core.config import Settings, settings as default_settings
from scheduling_api.core.errors import (
    APIException,
    MalformedBodyError,
    api_exception_handler,
    malformed_body_handler,
    request_validation_handler,
    unhandled_exception_handler,
)
from scheduling_api.core.logging import configure_logging
from scheduling_api.core.openapi import build_openapi_document
from scheduling_api.core.size_limit import ResponseSizeLimitMiddleware
from scheduling_api.db.base import get_db
from scheduling_api.routers import (
    catalog_programs,
    catalogs,
    class_schedules,
    classes,
    courses,
    curricula,
    curriculum_courses,
    institutes,
    languages,
    professors,
    programs,
    rooms,
    specializations,
    students,
    study_periods,
)

logger = structlog.get_logger(__name__)

ROUTERS = (
    institutes.router,
    courses.router,
    professors.router,
    rooms.router,
    study_periods.router,
    classes.router,
    class_schedules.router,
    programs.router,
    specializations.router,
    languages.router,
    catalogs.router,
    catalog_programs.router,
    students.router,
    curricula.router,
    curriculum_courses.router,
)


def _base_registry() -> AccessExceptionRegistry:
    """Health check and API documentation never require a token."""
    registry = AccessExceptionRegistry()
    for path in ("/health", "/openapi.json", "/docs", "/docs/oauth2-redirect", "/redoc"):
        registry.add_exception("GET", path)
    return registry


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or default_settings
    check_secret(settings)
    configure_logging(settings)

    access_registry = AccessExceptionRegistry.merge(
        _base_registry(), *(router.auth_registry for router in ROUTERS)
    )
    endpoints = [endpoint for router in ROUTERS for endpoint in router.endpoints]

    app = FastAPI(
        title="Scheduling API",
        description=(
            "**Academic scheduling API**\n\n"
            "Institutes, courses, classes and their weekly schedules, rooms, "
            "study periods, programs, catalogs and languages, students and their curricula.\n\n"
            "Validation failures answer 400 with `{message, errors: [{code, path, message}]}`."
        ),
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc",
        middleware=[
            Middleware(
                CORSMiddleware,
                allow_origins=settings.cors_origins_list,
                allow_credentials=True,
                allow_methods=["*"],
                allow_headers=["*"],
            ),
            Middleware(ResponseSizeLimitMiddleware, limit=settings.RESPONSE_SIZE_LIMIT_BYTES),
            access_registry.middleware(
                verifier=partial(verify_access_token, settings=settings),
                disabled=settings.AUTH_DISABLED,
            ),
        ],
    )
    app.state.settings = settings
    app.state.access_registry = access_registry

    # --- Exception handlers (most specific first) ---
    app.add_exception_handler(MalformedBodyError, malformed_body_handler)
    app.add_exception_handler(APIException, api_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    # --- Routers ---
    for router in ROUTERS:
        app.include_router(router.api_router)

    @app.get("/health", tags=["health"], summary="Health check")
    def health(db: Session = Depends(get_db)):
        """
        Returns `{"status": "ok", "db": "ok"}` when both the API and the database
        are reachable. Returns HTTP 503 if the DB is down.
        """
        try:
            db.execute(text("SELECT 1"))
        except SQLAlchemyError:
            logger.warning("health_db_unreachable", exc_info=True)
            return JSONResponse(status_code=503, content={"status": "error", "db": "unreachable"})
        return {"status": "ok", "db": "ok", "env": settings.APP_ENV}

    def openapi() -> dict:
        if app.openapi_schema is None:
            app.openapi_schema = build_openapi_document(app, endpoints, access_registry)
        return app.openapi_schema

    app.openapi = openapi

    logger.info(
        "app_created",
        env=settings.APP_ENV,
        endpoints=len(endpoints),
        public_routes=len(access_registry),
        auth_disabled=settings.AUTH_DISABLED,
    )
    return app


app = create_app()
