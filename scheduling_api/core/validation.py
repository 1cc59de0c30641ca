"""
Validation engine.

Every contract endpoint runs its raw path / query / body through `validate`
before the business function is called. Failures are reported as a
`ValidationErrorReport`: a flat list of `FieldError`s whose paths start with
the request part they came from (`["path", "id"]`, `["body", "code"]`, ...).

Business functions reuse the same report shape for rule violations
(duplicate codes, dangling references) so clients only ever parse one error
format for 400 responses.
"""
from __future__ import annotations

import enum
import json
from dataclasses import dataclass
from functools import lru_cache
from typing import TYPE_CHECKING, Any, Mapping, Optional

from pydantic import BaseModel, Field, TypeAdapter, ValidationError
from starlette.datastructures import QueryParams

if TYPE_CHECKING:
    from scheduling_api.core.contract import InputSchema


class ErrorCode(str, enum.Enum):
    UNIQUE_VIOLATION = "UNIQUE_VIOLATION"
    INVALID_TYPE = "INVALID_TYPE"
    INVALID_VALUE = "INVALID_VALUE"
    REQUIRED = "REQUIRED"
    REFERENCE_NOT_FOUND = "REFERENCE_NOT_FOUND"
    ALREADY_EXISTS = "ALREADY_EXISTS"
    REFERENCE_EXISTS = "REFERENCE_EXISTS"


class FieldError(BaseModel):
    """A single validation or business-rule failure tied to one input field."""
    code: ErrorCode
    path: list[str]
    message: str


class ValidationErrorReport(BaseModel):
    """Body of every 400 response."""
    message: str = "Validation error"
    errors: list[FieldError] = Field(default_factory=list)

    def add_error(self, error: FieldError) -> "ValidationErrorReport":
        self.errors.append(error)
        return self

    def add_errors(self, errors: list[FieldError]) -> "ValidationErrorReport":
        self.errors.extend(errors)
        return self

    @classmethod
    def single(cls, code: ErrorCode, path: list[str], message: str) -> "ValidationErrorReport":
        return cls(errors=[FieldError(code=code, path=path, message=message)])


_TYPE_ERROR_SUFFIXES = ("_type", "_parsing")
_ERROR_CODE_VALUES = {c.value for c in ErrorCode}


def error_code_for(error_type: str) -> ErrorCode:
    """Map a pydantic error type onto an ErrorCode."""
    if error_type in _ERROR_CODE_VALUES:
        # raised as PydanticCustomError(ErrorCode.X.value, ...) from a validator
        return ErrorCode(error_type)
    if error_type == "missing":
        return ErrorCode.REQUIRED
    if error_type.endswith(_TYPE_ERROR_SUFFIXES):
        return ErrorCode.INVALID_TYPE
    return ErrorCode.INVALID_VALUE


def field_errors_from_pydantic(
    exc: ValidationError, prefix: Optional[list[str]] = None
) -> list[FieldError]:
    """Translate a pydantic ValidationError into FieldErrors under `prefix`."""
    prefix = list(prefix or [])
    return [
        FieldError(
            code=error_code_for(err["type"]),
            path=prefix + [str(loc) for loc in err["loc"]],
            message=err["msg"],
        )
        for err in exc.errors()
    ]


# ---------------------------------------------------------------------------
# Outcome
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ValidatedInput:
    """Parsed request parts handed to a business function."""
    path: Any = None
    query: Any = None
    body: Any = None


@dataclass(frozen=True)
class ValidationOutcome:
    value: Optional[ValidatedInput] = None
    report: Optional[ValidationErrorReport] = None

    @classmethod
    def success(cls, value: ValidatedInput) -> "ValidationOutcome":
        return cls(value=value)

    @classmethod
    def failure(cls, report: ValidationErrorReport) -> "ValidationOutcome":
        return cls(report=report)

    @property
    def ok(self) -> bool:
        return self.report is None


# ---------------------------------------------------------------------------
# validate()
# ---------------------------------------------------------------------------

def query_to_dict(query_params: QueryParams | Mapping[str, Any]) -> dict[str, Any]:
    """Flatten a query multi-dict; repeated keys become lists."""
    if not isinstance(query_params, QueryParams):
        return dict(query_params)
    flat: dict[str, Any] = {}
    for key in query_params.keys():
        values = query_params.getlist(key)
        flat[key] = values if len(values) > 1 else values[0]
    return flat


@lru_cache(maxsize=None)
def _adapter(schema: Any) -> TypeAdapter:
    return TypeAdapter(schema)


def _validate_part(
    name: str, schema: Any, raw: Any, report: ValidationErrorReport, strict: bool = False
) -> Any:
    try:
        if strict:
            return _adapter(schema).validate_json(json.dumps(raw), strict=True)
        return _adapter(schema).validate_python(raw)
    except ValidationError as exc:
        report.add_errors(field_errors_from_pydantic(exc, prefix=[name]))
        return None


def validate(
    schema: InputSchema,
    path_params: Optional[Mapping[str, Any]],
    query_params: QueryParams | Mapping[str, Any] | None,
    body: Any,
) -> ValidationOutcome:
    """
    Check raw request input against an endpoint's input schema.

    Each declared part is validated on its own and all of them are checked
    even after one fails, so the report lists every invalid field in a single
    pass. Parts the schema leaves undeclared are ignored.

    Path and query values arrive as text; pydantic's lax mode coerces numeric
    strings into the declared int / float fields. The body is already typed
    JSON and is checked in strict JSON mode: `"6"` is not an int there, while
    ISO date and time strings still parse.
    """
    report = ValidationErrorReport()
    parsed: dict[str, Any] = {}

    if schema.path is not None:
        parsed["path"] = _validate_part("path", schema.path, dict(path_params or {}), report)
    if schema.query is not None:
        parsed["query"] = _validate_part("query", schema.query, query_to_dict(query_params or {}), report)
    if schema.body is not None:
        parsed["body"] = _validate_part("body", schema.body, body, report, strict=True)

    if report.errors:
        return ValidationOutcome.failure(report)
    return ValidationOutcome.success(ValidatedInput(**parsed))
