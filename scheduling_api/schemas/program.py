"""
Program (degree course) schemas and endpoint contracts.
"""
from typing import Optional

from pydantic import BaseModel, Field

from scheduling_api.core.contract import EndpointContract, IdPath, InputSchema, OutputBuilder, StrictModel


class ProgramLinks(BaseModel):
    self: str
    institute: str


class ProgramInstitute(BaseModel):
    id: int
    code: str


class ProgramOut(BaseModel):
    id: int
    code: int
    name: str
    institute_id: int
    institute: ProgramInstitute
    students_count: int
    links: ProgramLinks


class ProgramCreate(StrictModel):
    code: int = Field(ge=0, examples=[42])
    name: str = Field(min_length=1, max_length=256, examples=["Computer Engineering"])
    institute_id: int


class ProgramPatch(StrictModel):
    code: Optional[int] = Field(default=None, ge=0)
    name: Optional[str] = Field(default=None, min_length=1, max_length=256)
    institute_id: Optional[int] = None


class ProgramListQuery(StrictModel):
    institute_id: Optional[int] = Field(default=None, description="Only programs of this institute.")


LIST_PROGRAMS = EndpointContract(
    input=InputSchema(query=ProgramListQuery),
    output=OutputBuilder().ok(list[ProgramOut], "Programs").build(),
)

GET_PROGRAM = EndpointContract(
    input=InputSchema(path=IdPath),
    output=OutputBuilder().ok(ProgramOut, "Program retrieved successfully").not_found().build(),
)

CREATE_PROGRAM = EndpointContract(
    input=InputSchema(body=ProgramCreate),
    output=OutputBuilder().created(ProgramOut, "Program created successfully").bad_request().build(),
)

PATCH_PROGRAM = EndpointContract(
    input=InputSchema(path=IdPath, body=ProgramPatch),
    output=OutputBuilder().ok(ProgramOut, "Program updated successfully").bad_request().not_found().build(),
)

DELETE_PROGRAM = EndpointContract(
    input=InputSchema(path=IdPath),
    output=OutputBuilder()
    .no_content("Program deleted successfully")
    .bad_request("Program still has students")
    .not_found()
    .build(),
)
