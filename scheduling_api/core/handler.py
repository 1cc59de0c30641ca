"""
Handler binder: turns a business function into a FastAPI endpoint.

A business function never touches the transport. It receives a `Context`
and the validated input and returns a one-key mapping naming the outcome:

    def create_room(ctx: Context, data: ValidatedInput):
        if taken:
            return {400: ValidationErrorReport.single(...)}
        return {201: RoomOut(...)}

The key must be one of the status codes declared in the endpoint contract;
the endpoint responds with that status and the value as JSON body.
"""
from __future__ import annotations

import inspect
import json
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Mapping, Optional, Union

import structlog
from fastapi import Depends, Request
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse, Response
from sqlalchemy.orm import Session
from starlette import status
from starlette.concurrency import run_in_threadpool

from scheduling_api.core.contract import EndpointContract
from scheduling_api.core.errors import ContractViolationError, MalformedBodyError
from scheduling_api.core.validation import ValidatedInput, validate
from scheduling_api.db.base import get_db

logger = structlog.get_logger(__name__)

OutputRecord = Mapping[int, Any]
BusinessFn = Callable[["Context", ValidatedInput], Union[OutputRecord, Awaitable[OutputRecord]]]


@dataclass
class Context:
    """What a business function may use besides its input."""
    db: Session
    principal: Optional[dict[str, Any]] = None
    request: Optional[Request] = None


async def read_json_body(request: Request) -> Any:
    """Decoded JSON body, None when empty. Raises MalformedBodyError on bad JSON."""
    raw = await request.body()
    if not raw.strip():
        return None
    try:
        return json.loads(raw)
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise MalformedBodyError(f"Malformed JSON body: {exc}") from exc


def select_status(contract: EndpointContract, output: OutputRecord, operation: str = "") -> int:
    """
    The status code of a business function's output record.

    Presence is decided by key, not by value: `{204: None}` selects 204.
    Anything other than exactly one declared key is a contract violation.
    """
    keys = list(output.keys()) if isinstance(output, Mapping) else []
    present = [code for code in contract.status_codes if code in keys]
    if len(present) != 1 or len(keys) != 1:
        raise ContractViolationError(operation or "handler", contract.status_codes, keys)
    return present[0]


def render(status_code: int, value: Any) -> Response:
    if status_code == status.HTTP_204_NO_CONTENT or value is None:
        return Response(status_code=status_code)
    return JSONResponse(status_code=status_code, content=jsonable_encoder(value))


async def _call(fn: BusinessFn, ctx: Context, data: ValidatedInput) -> OutputRecord:
    if inspect.iscoroutinefunction(fn):
        return await fn(ctx, data)
    return await run_in_threadpool(fn, ctx, data)


def bind(contract: EndpointContract, fn: BusinessFn) -> Callable[..., Awaitable[Response]]:
    """Wrap `fn` into an endpoint that validates, dispatches and serializes."""
    operation = getattr(fn, "__name__", repr(fn))

    async def endpoint(request: Request, db: Session = Depends(get_db)) -> Response:
        body = await read_json_body(request) if contract.input.body is not None else None
        outcome = validate(contract.input, request.path_params, request.query_params, body)
        if not outcome.ok:
            return JSONResponse(
                status_code=status.HTTP_400_BAD_REQUEST,
                content=outcome.report.model_dump(mode="json"),
            )

        ctx = Context(
            db=db,
            principal=getattr(request.state, "principal", None),
            request=request,
        )
        output = await _call(fn, ctx, outcome.value)
        try:
            status_code = select_status(contract, output, operation)
        except ContractViolationError as exc:
            logger.error("contract_violation", operation=operation, message=exc.message)
            raise
        return render(status_code, output[status_code])

    endpoint.__name__ = operation
    endpoint.__doc__ = fn.__doc__
    return endpoint
