"""
Access exception registry, tokens and the bearer-token middleware.
"""
from datetime import datetime, timedelta, timezone

import jwt
import pytest
from fastapi import FastAPI, Request
from fastapi.testclient import TestClient

from scheduling_api.core.auth import (
    AccessExceptionRegistry,
    check_secret,
    create_access_token,
    match_path,
    normalize_path,
    verify_access_token,
)
from scheduling_api.core.config import Settings


class TestPaths:
    def test_normalize(self):
        assert normalize_path("/courses/") == "/courses"
        assert normalize_path("//courses///1") == "/courses/1"
        assert normalize_path("/courses?page=2") == "/courses"
        assert normalize_path("") == "/"

    def test_param_segments(self):
        assert match_path("/courses/:id", "/courses/17")
        assert match_path("/courses/{id}", "/courses/17")
        assert not match_path("/courses/:id", "/courses")
        assert not match_path("/courses/:id", "/courses/17/classes")
        assert not match_path("/courses/:id", "/rooms/17")


class TestRegistry:
    def test_exempt_with_param(self):
        registry = AccessExceptionRegistry()
        registry.add_exception("GET", "/courses/:id")
        assert registry.is_exempt("GET", "/courses/17")
        assert registry.is_exempt("get", "/courses/17/")
        assert not registry.is_exempt("POST", "/courses/17")
        assert not registry.is_exempt("GET", "/courses")

    def test_unknown_method(self):
        with pytest.raises(ValueError):
            AccessExceptionRegistry().add_exception("FETCH", "/x")

    def test_merge_is_frozen(self):
        a = AccessExceptionRegistry()
        a.add_exception("GET", "/a")
        b = AccessExceptionRegistry()
        b.add_exception("GET", "/b/:id")
        merged = AccessExceptionRegistry.merge(a, b)
        assert len(merged) == 2
        assert merged.frozen
        assert merged.is_exempt("GET", "/b/1")
        with pytest.raises(RuntimeError):
            merged.add_exception("GET", "/c")
        # sources stay open
        a.add_exception("GET", "/c")
        assert len(merged) == 2


class TestTokens:
    def test_round_trip(self):
        token = create_access_token(42, extra_claims={"role": "admin"})
        claims = verify_access_token(token)
        assert claims["sub"] == "42"
        assert claims["role"] == "admin"

    def test_expired(self):
        token = create_access_token("u", expires_minutes=-1)
        with pytest.raises(jwt.ExpiredSignatureError):
            verify_access_token(token)

    def test_wrong_secret(self):
        other = Settings(SECRET_KEY="x" * 40)
        token = create_access_token("u", settings=other)
        with pytest.raises(jwt.InvalidSignatureError):
            verify_access_token(token)

    def test_missing_subject(self):
        settings = Settings()
        token = jwt.encode(
            {"exp": datetime.now(timezone.utc) + timedelta(minutes=5)},
            settings.SECRET_KEY,
            algorithm="HS256",
        )
        with pytest.raises(jwt.MissingRequiredClaimError):
            verify_access_token(token, settings)

    def test_short_secret_rejected_in_production(self):
        with pytest.raises(ValueError):
            check_secret(Settings(APP_ENV="production", SECRET_KEY="short"))
        check_secret(Settings(APP_ENV="production", SECRET_KEY="s" * 32))
        check_secret(Settings(APP_ENV="development", SECRET_KEY="short"))


def _gated_app(disabled: bool = False) -> FastAPI:
    registry = AccessExceptionRegistry()
    registry.add_exception("GET", "/open")
    app = FastAPI(middleware=[AccessExceptionRegistry.merge(registry).middleware(disabled=disabled)])

    @app.get("/open")
    def open_route():
        return {"ok": True}

    @app.get("/closed")
    def closed_route(request: Request):
        return {"sub": request.state.principal["sub"]}

    return app


class TestMiddleware:
    def test_exempt_route_needs_no_token(self):
        r = TestClient(_gated_app()).get("/open")
        assert r.status_code == 200

    def test_missing_token(self):
        r = TestClient(_gated_app()).get("/closed")
        assert r.status_code == 401
        assert r.json() == {"error": "Unauthorized"}

    def test_wrong_scheme(self):
        r = TestClient(_gated_app()).get("/closed", headers={"Authorization": "Basic abc"})
        assert r.status_code == 401

    def test_invalid_token(self):
        r = TestClient(_gated_app()).get("/closed", headers={"Authorization": "Bearer not-a-jwt"})
        assert r.status_code == 401

    def test_valid_token_sets_principal(self):
        token = create_access_token("alice")
        r = TestClient(_gated_app()).get("/closed", headers={"Authorization": f"Bearer {token}"})
        assert r.status_code == 200
        assert r.json() == {"sub": "alice"}

    def test_disabled(self):
        app = _gated_app(disabled=True)

        @app.get("/anon")
        def anon():
            return {"ok": True}

        r = TestClient(app).get("/anon")
        assert r.status_code == 200
