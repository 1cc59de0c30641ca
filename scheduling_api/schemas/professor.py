"""
Professor schemas and endpoint contracts.
"""
from typing import Optional

from pydantic import BaseModel, Field

from scheduling_api.core.contract import EndpointContract, IdPath, InputSchema, OutputBuilder, StrictModel
from scheduling_api.core.pagination import Page, PaginationQuery


class ProfessorLinks(BaseModel):
    self: str
    classes: str


class ProfessorOut(BaseModel):
    id: int
    name: str
    links: ProfessorLinks


class ProfessorCreate(StrictModel):
    name: str = Field(min_length=1, max_length=256, examples=["Ada Lovelace"])


class ProfessorPatch(StrictModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=256)


class ProfessorListQuery(PaginationQuery):
    name: Optional[str] = Field(default=None, min_length=1, description="Case-insensitive substring of the name.")


LIST_PROFESSORS = EndpointContract(
    input=InputSchema(query=ProfessorListQuery),
    output=OutputBuilder().ok(Page[ProfessorOut], "Page of professors").build(),
)

GET_PROFESSOR = EndpointContract(
    input=InputSchema(path=IdPath),
    output=OutputBuilder().ok(ProfessorOut, "Professor retrieved successfully").not_found().build(),
)

CREATE_PROFESSOR = EndpointContract(
    input=InputSchema(body=ProfessorCreate),
    output=OutputBuilder().created(ProfessorOut, "Professor created successfully").bad_request().build(),
)

PATCH_PROFESSOR = EndpointContract(
    input=InputSchema(path=IdPath, body=ProfessorPatch),
    output=OutputBuilder().ok(ProfessorOut, "Professor updated successfully").not_found().build(),
)

DELETE_PROFESSOR = EndpointContract(
    input=InputSchema(path=IdPath),
    output=OutputBuilder().no_content("Professor deleted successfully").not_found().build(),
)
