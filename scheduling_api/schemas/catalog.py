"""
Catalog schemas and endpoint contracts.

GET    /catalogs?year=   → list[CatalogOut], newest first
GET    /catalogs/{id}    → CatalogOut
POST   /catalogs         → CatalogCreate → CatalogOut
PATCH  /catalogs/{id}    → CatalogPatch  → CatalogOut
DELETE /catalogs/{id}    → 204
"""
from typing import Optional

from pydantic import BaseModel, Field

from scheduling_api.core.contract import EndpointContract, IdPath, InputSchema, OutputBuilder, StrictModel


class CatalogLinks(BaseModel):
    self: str
    programs: str


class CatalogOut(BaseModel):
    id: int
    year: int
    programs_count: int
    students_count: int
    program_ids: list[int]
    links: CatalogLinks


class CatalogCreate(StrictModel):
    year: int = Field(ge=1900, le=2100, examples=[2026])


class CatalogPatch(StrictModel):
    year: Optional[int] = Field(default=None, ge=1900, le=2100)


class CatalogListQuery(StrictModel):
    year: Optional[int] = None


LIST_CATALOGS = EndpointContract(
    input=InputSchema(query=CatalogListQuery),
    output=OutputBuilder().ok(list[CatalogOut], "List of catalogs retrieved successfully").build(),
)

GET_CATALOG = EndpointContract(
    input=InputSchema(path=IdPath),
    output=OutputBuilder().ok(CatalogOut, "Catalog retrieved successfully").not_found().build(),
)

CREATE_CATALOG = EndpointContract(
    input=InputSchema(body=CatalogCreate),
    output=OutputBuilder().created(CatalogOut, "Catalog created successfully").bad_request().build(),
)

PATCH_CATALOG = EndpointContract(
    input=InputSchema(path=IdPath, body=CatalogPatch),
    output=OutputBuilder()
    .ok(CatalogOut, "Catalog updated successfully")
    .bad_request()
    .not_found()
    .build(),
)

DELETE_CATALOG = EndpointContract(
    input=InputSchema(path=IdPath),
    output=OutputBuilder()
    .no_content("Catalog deleted successfully")
    .bad_request("Catalog still has programs or students")
    .not_found()
    .build(),
)
