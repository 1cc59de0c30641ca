"""
Per-resource route collection.

    router = ContractRouter(prefix="/rooms", tags=["rooms"])

    @router.get("/{id}", GET_ROOM, summary="Retrieve a room", public=True)
    def get_room(ctx, data): ...

Each decorated business function is bound to its contract and mounted on the
module's `APIRouter`. The registration is also kept in `endpoints`, which the
OpenAPI builder reads, and `public=True` routes are recorded in the module's
own `AccessExceptionRegistry`.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional, Sequence

from fastapi import APIRouter

from scheduling_api.core.auth import AccessExceptionRegistry
from scheduling_api.core.contract import EndpointContract
from scheduling_api.core.handler import BusinessFn, bind


@dataclass(frozen=True)
class Endpoint:
    method: str
    path: str
    contract: EndpointContract
    operation_id: str
    summary: Optional[str] = None
    description: Optional[str] = None
    tags: tuple[str, ...] = ()
    public: bool = False


class ContractRouter:
    def __init__(self, prefix: str = "", tags: Sequence[str] = ()):
        self.prefix = prefix
        self.tags = tuple(tags)
        self.api_router = APIRouter(prefix=prefix)
        self.auth_registry = AccessExceptionRegistry()
        self.endpoints: list[Endpoint] = []

    def route(
        self,
        method: str,
        path: str,
        contract: EndpointContract,
        *,
        summary: Optional[str] = None,
        public: bool = False,
    ) -> Callable[[BusinessFn], BusinessFn]:
        method = method.upper()

        def decorator(fn: BusinessFn) -> BusinessFn:
            full_path = self.prefix + path
            self.api_router.add_api_route(
                path,
                bind(contract, fn),
                methods=[method],
                name=fn.__name__,
                include_in_schema=False,
            )
            self.endpoints.append(Endpoint(
                method=method,
                path=full_path,
                contract=contract,
                operation_id=fn.__name__,
                summary=summary,
                description=(fn.__doc__ or "").strip() or None,
                tags=self.tags,
                public=public,
            ))
            if public:
                self.auth_registry.add_exception(method, full_path)
            return fn

        return decorator

    def get(self, path: str, contract: EndpointContract, **kwargs):
        return self.route("GET", path, contract, **kwargs)

    def post(self, path: str, contract: EndpointContract, **kwargs):
        return self.route("POST", path, contract, **kwargs)

    def put(self, path: str, contract: EndpointContract, **kwargs):
        return self.route("PUT", path, contract, **kwargs)

    def patch(self, path: str, contract: EndpointContract, **kwargs):
        return self.route("PATCH", path, contract, **kwargs)

    def delete(self, path: str, contract: EndpointContract, **kwargs):
        return self.route("DELETE", path, contract, **kwargs)
