"""
Contract exporter.

`describe(contract)` projects an endpoint contract onto OpenAPI operation
fragments (parameters, request body, responses). `build_openapi_document`
assembles every contract endpoint into the document FastAPI serves at
/openapi.json, on top of FastAPI's own output for plain routes such as
/health.
"""
from __future__ import annotations

import copy
import re
import types
from typing import Any, Iterable, Optional, Union, get_args, get_origin

from fastapi import FastAPI
from fastapi.openapi.utils import get_openapi
from pydantic import BaseModel, TypeAdapter

from scheduling_api.core.auth import AccessExceptionRegistry
from scheduling_api.core.contract import EndpointContract, ResponseSpec
from scheduling_api.core.validation import ValidationErrorReport

REF_TEMPLATE = "#/components/schemas/{model}"

DEFAULT_DESCRIPTIONS = {
    200: "Successful response",
    201: "Resource created",
    204: "No content",
    400: "Bad request",
    401: "Unauthorized - Missing or invalid JWT token",
    404: "Not found",
    500: "Internal server error",
}
GENERIC_DESCRIPTION = "Response"

BEARER_SCHEME = {
    "type": "http",
    "scheme": "bearer",
    "bearerFormat": "JWT",
    "description": "JWT authorization using the Bearer scheme",
}


# ---------------------------------------------------------------------------
# Schema helpers
# ---------------------------------------------------------------------------

def unwrap_optional(annotation: Any) -> Any:
    """`Optional[X]` → `X`; anything else unchanged."""
    origin = get_origin(annotation)
    if origin is Union or origin is types.UnionType:
        args = [a for a in get_args(annotation) if a is not type(None)]
        if len(args) == 1:
            return args[0]
    return annotation


def component_name(model: type[BaseModel]) -> str:
    # same sanitising pydantic applies to generic names in $defs: Page[X] → Page_X_
    return re.sub(r"[^a-zA-Z0-9.\-_]", "_", model.__name__)


def schema_for(annotation: Any, components: dict[str, Any]) -> dict[str, Any]:
    """JSON schema for `annotation`; named models land in `components` and are $ref'd."""
    schema = TypeAdapter(annotation).json_schema(ref_template=REF_TEMPLATE)
    components.update(schema.pop("$defs", {}))
    if isinstance(annotation, type) and issubclass(annotation, BaseModel):
        name = component_name(annotation)
        components[name] = schema
        return {"$ref": REF_TEMPLATE.format(model=name)}
    return schema


def _parameters(model: Any, location: str, components: dict[str, Any]) -> list[dict[str, Any]]:
    schema = TypeAdapter(model).json_schema(ref_template=REF_TEMPLATE)
    components.update(schema.pop("$defs", {}))
    required = set(schema.get("required", []))
    params = []
    for name, prop in schema.get("properties", {}).items():
        prop = dict(prop)
        param: dict[str, Any] = {
            "name": name,
            "in": location,
            # path parameters are always required in OpenAPI
            "required": location == "path" or name in required,
        }
        description = prop.pop("description", None)
        if description:
            param["description"] = description
        prop.pop("title", None)
        param["schema"] = prop
        params.append(param)
    return params


def _response(spec: ResponseSpec, components: dict[str, Any]) -> dict[str, Any]:
    description = spec.description or DEFAULT_DESCRIPTIONS.get(spec.status_code, GENERIC_DESCRIPTION)
    response: dict[str, Any] = {"description": description}
    if spec.model is not None:
        response["content"] = {
            "application/json": {"schema": schema_for(unwrap_optional(spec.model), components)}
        }
    return response


# ---------------------------------------------------------------------------
# describe()
# ---------------------------------------------------------------------------

def describe(contract: EndpointContract) -> dict[str, Any]:
    """
    Documentation view of one contract:

        {"request": {"parameters": [...], "requestBody": {...}},
         "responses": {"200": {...}, "400": {...}, "500": {...}},
         "components": {"CourseOut": {...}, ...}}

    Every operation advertises 400 and 500 even when the contract does not
    declare them. The contract itself is never modified.
    """
    components: dict[str, Any] = {}
    request: dict[str, Any] = {}

    parameters: list[dict[str, Any]] = []
    if contract.input.path is not None:
        parameters += _parameters(contract.input.path, "path", components)
    if contract.input.query is not None:
        parameters += _parameters(contract.input.query, "query", components)
    if parameters:
        request["parameters"] = parameters
    if contract.input.body is not None:
        request["requestBody"] = {
            "required": True,
            "content": {"application/json": {"schema": schema_for(contract.input.body, components)}},
        }

    specs = dict(contract.output)
    if 400 not in specs:
        specs[400] = ResponseSpec(400, ValidationErrorReport, DEFAULT_DESCRIPTIONS[400])
    if 500 not in specs:
        specs[500] = ResponseSpec(500, None, DEFAULT_DESCRIPTIONS[500])
    responses = {str(code): _response(specs[code], components) for code in sorted(specs)}

    return {"request": request, "responses": responses, "components": components}


# ---------------------------------------------------------------------------
# Whole document
# ---------------------------------------------------------------------------

def openapi_path(path: str) -> str:
    """`/courses/:id` → `/courses/{id}`."""
    return re.sub(r"/:([\w-]+)", r"/{\1}", path)


def build_openapi_document(
    app: FastAPI,
    endpoints: Iterable[Any],
    access_registry: Optional[AccessExceptionRegistry] = None,
) -> dict[str, Any]:
    document = get_openapi(
        title=app.title,
        version=app.version,
        description=app.description,
        routes=app.routes,
    )
    paths = document.setdefault("paths", {})
    schemas = document.setdefault("components", {}).setdefault("schemas", {})

    for endpoint in endpoints:
        described = describe(endpoint.contract)
        schemas.update(described["components"])
        operation: dict[str, Any] = {
            "tags": list(endpoint.tags),
            "operationId": endpoint.operation_id,
            **copy.deepcopy(described["request"]),
            "responses": described["responses"],
        }
        if endpoint.summary:
            operation["summary"] = endpoint.summary
        if endpoint.description:
            operation["description"] = endpoint.description

        exempt = access_registry is not None and access_registry.is_exempt(endpoint.method, endpoint.path)
        if not exempt:
            operation["security"] = [{"BearerAuth": []}]
            operation["responses"].setdefault("401", {"description": DEFAULT_DESCRIPTIONS[401]})
        paths.setdefault(openapi_path(endpoint.path), {})[endpoint.method.lower()] = operation

    document["components"].setdefault("securitySchemes", {})["BearerAuth"] = BEARER_SCHEME
    return document
