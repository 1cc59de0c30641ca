"""
Tests for the error envelopes and exception handlers.
"""
from fastapi.testclient import TestClient

from scheduling_api.core.config import Settings
from scheduling_api.core.errors import ContractViolationError, MalformedBodyError
from scheduling_api.main import create_app


class TestErrorClasses:
    def test_malformed_body_report(self):
        report = MalformedBodyError("bad").to_report()
        assert report.errors[0].path == ["body"]
        assert report.errors[0].code == "INVALID_VALUE"

    def test_contract_violation_details(self):
        exc = ContractViolationError("get_course", (200, 404), [201])
        assert exc.http_status == 500
        assert exc.details["declared"] == [200, 404]
        assert exc.details["returned"] == ["201"]


class TestHandlers:
    def test_malformed_json_body(self, api):
        r = api.post("/institutes", content=b'{"code": ', headers={"Content-Type": "application/json"})
        assert r.status_code == 400
        body = r.json()
        assert body["message"] == "Validation error"
        assert body["errors"][0]["path"] == ["body"]

    def test_empty_body_is_required(self, api):
        r = api.post("/institutes")
        assert r.status_code == 400
        assert r.json()["errors"][0]["path"] == ["body"]

    def test_unknown_field(self, api):
        r = api.post("/institutes", json={"code": "IC", "color": "red"})
        assert r.status_code == 400
        assert r.json()["errors"][0]["path"] == ["body", "color"]

    def test_unhandled_exception_is_500_without_internals(self):
        app = create_app(Settings(AUTH_DISABLED=True))

        @app.get("/boom")
        def boom():
            raise RuntimeError("secret internals")

        client = TestClient(app, raise_server_exceptions=False)
        r = client.get("/boom")
        assert r.status_code == 500
        assert r.json() == {"error": "Internal Server Error"}
        assert "secret" not in r.text

    def test_unauthenticated_write(self, client):
        r = client.post("/institutes", json={"code": "IC"})
        assert r.status_code == 401
        assert r.json() == {"error": "Unauthorized"}
