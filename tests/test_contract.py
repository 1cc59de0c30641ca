"""
Contract builder and handler binder.

The binder tests mount a throwaway ContractRouter on a bare FastAPI app; no
database is touched, so `get_db` is overridden with a stub.
"""
import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from pydantic import BaseModel

from scheduling_api.core.contract import (
    EndpointContract,
    IdPath,
    InputSchema,
    NotFoundBody,
    OutputBuilder,
    ResponseSpec,
    StrictModel,
)
from scheduling_api.core.errors import (
    APIException,
    ContractViolationError,
    MalformedBodyError,
    api_exception_handler,
    malformed_body_handler,
)
from scheduling_api.core.handler import Context, select_status
from scheduling_api.core.routing import ContractRouter
from scheduling_api.core.validation import ErrorCode, ValidatedInput, ValidationErrorReport
from scheduling_api.db.base import get_db


class Echo(BaseModel):
    id: int
    label: str


class EchoBody(StrictModel):
    label: str


GET_ECHO = EndpointContract(
    input=InputSchema(path=IdPath),
    output=OutputBuilder().ok(Echo).not_found().build(),
)

PUT_ECHO = EndpointContract(
    input=InputSchema(path=IdPath, body=EchoBody),
    output=OutputBuilder().ok(Echo).bad_request().build(),
)

DELETE_ECHO = EndpointContract(
    input=InputSchema(path=IdPath),
    output=OutputBuilder().no_content().build(),
)

router = ContractRouter(prefix="/echo", tags=["echo"])


@router.get("/{id}", GET_ECHO, public=True)
def get_echo(ctx: Context, data: ValidatedInput):
    if data.path.id == 404:
        return {404: NotFoundBody(description="Echo not found")}
    if data.path.id == 500:
        # undeclared status
        return {201: Echo(id=1, label="x")}
    if data.path.id == 501:
        return {200: Echo(id=1, label="x"), 404: NotFoundBody(description="both")}
    return {200: Echo(id=data.path.id, label="hello")}


@router.put("/{id}", PUT_ECHO)
async def put_echo(ctx: Context, data: ValidatedInput):
    if data.body.label == "taken":
        return {400: ValidationErrorReport.single(ErrorCode.ALREADY_EXISTS, ["body", "label"], "taken")}
    return {200: Echo(id=data.path.id, label=data.body.label)}


@router.delete("/{id}", DELETE_ECHO)
def delete_echo(ctx: Context, data: ValidatedInput):
    return {204: None}


def _stub_db():
    yield None


@pytest.fixture()
def echo_client():
    app = FastAPI()
    app.include_router(router.api_router)
    app.add_exception_handler(MalformedBodyError, malformed_body_handler)
    app.add_exception_handler(APIException, api_exception_handler)
    app.dependency_overrides[get_db] = _stub_db
    with TestClient(app) as c:
        yield c


class TestOutputBuilder:
    def test_build(self):
        output = OutputBuilder().ok(Echo, "fine").not_found().build()
        assert set(output) == {200, 404}
        assert output[200] == ResponseSpec(200, Echo, "fine")
        assert output[404].model is NotFoundBody

    def test_duplicate_status_rejected(self):
        with pytest.raises(ValueError):
            OutputBuilder().ok(Echo).ok(Echo)

    def test_empty_output_rejected(self):
        with pytest.raises(ValueError):
            OutputBuilder().build()

    def test_contract_is_read_only(self):
        with pytest.raises(TypeError):
            GET_ECHO.output[500] = ResponseSpec(500)

    def test_mismatched_key_rejected(self):
        with pytest.raises(ValueError):
            EndpointContract(output={200: ResponseSpec(201)})


class TestSelectStatus:
    def test_presence_by_key(self):
        assert select_status(DELETE_ECHO, {204: None}) == 204

    def test_undeclared_key(self):
        with pytest.raises(ContractViolationError):
            select_status(GET_ECHO, {201: {}})

    def test_two_keys(self):
        with pytest.raises(ContractViolationError):
            select_status(GET_ECHO, {200: {}, 404: {}})

    def test_empty_output(self):
        with pytest.raises(ContractViolationError):
            select_status(GET_ECHO, {})


class TestBinder:
    def test_ok(self, echo_client):
        r = echo_client.get("/echo/17")
        assert r.status_code == 200
        assert r.json() == {"id": 17, "label": "hello"}

    def test_not_found(self, echo_client):
        r = echo_client.get("/echo/404")
        assert r.status_code == 404
        assert r.json() == {"description": "Echo not found"}

    def test_invalid_path_never_reaches_function(self, echo_client):
        r = echo_client.get("/echo/abc")
        assert r.status_code == 400
        assert r.json()["errors"][0]["path"] == ["path", "id"]

    def test_business_rule_report(self, echo_client):
        r = echo_client.put("/echo/1", json={"label": "taken"})
        assert r.status_code == 400
        assert r.json()["errors"] == [{"code": "ALREADY_EXISTS", "path": ["body", "label"], "message": "taken"}]

    def test_async_business_function(self, echo_client):
        r = echo_client.put("/echo/3", json={"label": "new"})
        assert r.status_code == 200
        assert r.json()["label"] == "new"

    def test_malformed_json(self, echo_client):
        r = echo_client.put("/echo/1", content=b"{not json", headers={"Content-Type": "application/json"})
        assert r.status_code == 400
        assert r.json()["errors"][0]["path"] == ["body"]
        assert r.json()["errors"][0]["code"] == "INVALID_VALUE"

    def test_no_content(self, echo_client):
        r = echo_client.delete("/echo/1")
        assert r.status_code == 204
        assert r.content == b""

    def test_undeclared_status_is_a_server_error(self, echo_client):
        r = echo_client.get("/echo/500")
        assert r.status_code == 500
        assert r.json() == {"error": "Internal Server Error"}

    def test_two_outcomes_is_a_server_error(self, echo_client):
        r = echo_client.get("/echo/501")
        assert r.status_code == 500


class TestContractRouter:
    def test_endpoints_recorded(self):
        ops = {(e.method, e.path) for e in router.endpoints}
        assert ops == {("GET", "/echo/{id}"), ("PUT", "/echo/{id}"), ("DELETE", "/echo/{id}")}

    def test_public_routes_registered(self):
        assert router.auth_registry.is_exempt("GET", "/echo/5")
        assert not router.auth_registry.is_exempt("PUT", "/echo/5")
