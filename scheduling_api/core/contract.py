"""
Endpoint contracts.

A contract is the declared input / output shape of one API operation:

    GET_COURSE = EndpointContract(
        input=InputSchema(path=IdPath),
        output=OutputBuilder()
            .ok(CourseOut, "Course retrieved successfully")
            .not_found()
            .build(),
    )

The same object drives request validation, response dispatch and the
OpenAPI document, so the docs cannot drift from what is enforced.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping, Optional

from pydantic import BaseModel, ConfigDict

from scheduling_api.core.validation import ValidationErrorReport


class NotFoundBody(BaseModel):
    """Body of a 404 response."""
    description: str


@dataclass(frozen=True)
class InputSchema:
    """Optional pydantic schemas for the three request parts."""
    path: Any = None
    query: Any = None
    body: Any = None


@dataclass(frozen=True)
class ResponseSpec:
    status_code: int
    model: Any = None
    description: str = ""


class OutputBuilder:
    """Collects the possible outcomes of an operation, one per status code."""

    def __init__(self) -> None:
        self._responses: dict[int, ResponseSpec] = {}

    def status(self, status_code: int, model: Any, description: str = "") -> "OutputBuilder":
        if status_code in self._responses:
            raise ValueError(f"Status code {status_code} declared twice.")
        self._responses[status_code] = ResponseSpec(status_code, model, description)
        return self

    def ok(self, model: Any, description: str = "") -> "OutputBuilder":
        return self.status(200, model, description)

    def created(self, model: Any, description: str = "") -> "OutputBuilder":
        return self.status(201, model, description)

    def no_content(self, description: str = "No content") -> "OutputBuilder":
        return self.status(204, None, description)

    def bad_request(self, description: str = "Bad request") -> "OutputBuilder":
        return self.status(400, ValidationErrorReport, description)

    def unauthorized(self, description: str = "Unauthorized - authentication required") -> "OutputBuilder":
        return self.status(401, None, description)

    def not_found(self, description: str = "Not found") -> "OutputBuilder":
        return self.status(404, NotFoundBody, description)

    def internal_server_error(self, description: str = "Internal server error") -> "OutputBuilder":
        return self.status(500, None, description)

    def build(self) -> Mapping[int, ResponseSpec]:
        if not self._responses:
            raise ValueError("An output shape needs at least one status code.")
        return MappingProxyType(dict(self._responses))


@dataclass(frozen=True)
class EndpointContract:
    input: InputSchema = field(default_factory=InputSchema)
    output: Mapping[int, ResponseSpec] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.output:
            raise ValueError("An output shape needs at least one status code.")
        for code, spec in self.output.items():
            if code != spec.status_code:
                raise ValueError(f"Response for {code} is declared as {spec.status_code}.")
        if not isinstance(self.output, MappingProxyType):
            object.__setattr__(self, "output", MappingProxyType(dict(self.output)))

    @property
    def status_codes(self) -> tuple[int, ...]:
        return tuple(self.output)

    def response_for(self, status_code: int) -> Optional[ResponseSpec]:
        return self.output.get(status_code)


class StrictModel(BaseModel):
    """Request schema that rejects unknown fields."""
    model_config = ConfigDict(extra="forbid")


class IdPath(StrictModel):
    id: int
