"""
Student schemas and endpoint contracts. None of these routes is public.
"""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from scheduling_api.core.contract import EndpointContract, IdPath, InputSchema, OutputBuilder, StrictModel
from scheduling_api.core.pagination import Page, PaginationQuery


class StudentLinks(BaseModel):
    self: str
    program: Optional[str] = None
    specialization: Optional[str] = None
    catalog: Optional[str] = None
    curricula: str


class StudentOut(BaseModel):
    id: int
    ra: str
    name: str
    program_id: Optional[int] = None
    specialization_id: Optional[int] = None
    catalog_id: Optional[int] = None
    created_at: datetime
    links: StudentLinks


class StudentCreate(StrictModel):
    ra: str = Field(min_length=1, max_length=32, examples=["182851"])
    name: str = Field(min_length=1, max_length=256)
    program_id: Optional[int] = None
    specialization_id: Optional[int] = None
    catalog_id: Optional[int] = None


class StudentPatch(StrictModel):
    ra: Optional[str] = Field(default=None, min_length=1, max_length=32)
    name: Optional[str] = Field(default=None, min_length=1, max_length=256)
    program_id: Optional[int] = None
    specialization_id: Optional[int] = None
    catalog_id: Optional[int] = None


class StudentListQuery(PaginationQuery):
    program_id: Optional[int] = None
    specialization_id: Optional[int] = None
    catalog_id: Optional[int] = None


LIST_STUDENTS = EndpointContract(
    input=InputSchema(query=StudentListQuery),
    output=OutputBuilder().ok(Page[StudentOut], "Page of students").unauthorized().build(),
)

GET_STUDENT = EndpointContract(
    input=InputSchema(path=IdPath),
    output=OutputBuilder()
    .ok(StudentOut, "Student retrieved successfully")
    .unauthorized()
    .not_found()
    .build(),
)

CREATE_STUDENT = EndpointContract(
    input=InputSchema(body=StudentCreate),
    output=OutputBuilder()
    .created(StudentOut, "Student created successfully")
    .bad_request()
    .unauthorized()
    .build(),
)

PATCH_STUDENT = EndpointContract(
    input=InputSchema(path=IdPath, body=StudentPatch),
    output=OutputBuilder()
    .ok(StudentOut, "Student updated successfully")
    .bad_request()
    .unauthorized()
    .not_found()
    .build(),
)

DELETE_STUDENT = EndpointContract(
    input=InputSchema(path=IdPath),
    output=OutputBuilder()
    .no_content("Student and curricula deleted")
    .unauthorized()
    .not_found()
    .build(),
)
