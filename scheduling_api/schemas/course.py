"""
Course schemas and endpoint contracts.

GET    /courses       → CourseListQuery → Page[CourseOut]
GET    /courses/{id}  → CourseOut
POST   /courses       → CourseCreate → CourseOut
PATCH  /courses/{id}  → CoursePatch  → CourseOut
DELETE /courses/{id}  → 204
"""
from typing import Optional

from pydantic import BaseModel, Field

from scheduling_api.core.contract import EndpointContract, IdPath, InputSchema, OutputBuilder, StrictModel
from scheduling_api.core.pagination import Page, PaginationQuery


class CourseLinks(BaseModel):
    self: str
    institute: str
    classes: str


class CourseOut(BaseModel):
    id: int
    code: str
    name: str
    credits: int
    institute_id: int
    institute_code: str
    links: CourseLinks


class CourseCreate(StrictModel):
    code: str = Field(min_length=1, max_length=32, examples=["MC102"])
    name: str = Field(min_length=1, max_length=256, examples=["Algorithms and Computer Programming"])
    credits: int = Field(ge=0, examples=[6])
    institute_id: int


class CoursePatch(StrictModel):
    code: Optional[str] = Field(default=None, min_length=1, max_length=32)
    name: Optional[str] = Field(default=None, min_length=1, max_length=256)
    credits: Optional[int] = Field(default=None, ge=0)
    institute_id: Optional[int] = None


class CourseListQuery(PaginationQuery):
    institute_id: Optional[int] = Field(default=None, description="Only courses of this institute.")
    institute_code: Optional[str] = Field(default=None, min_length=1, description="Only courses of this institute code.")


LIST_COURSES = EndpointContract(
    input=InputSchema(query=CourseListQuery),
    output=OutputBuilder().ok(Page[CourseOut], "Page of courses").build(),
)

GET_COURSE = EndpointContract(
    input=InputSchema(path=IdPath),
    output=OutputBuilder()
    .ok(CourseOut, "Course retrieved successfully")
    .not_found()
    .build(),
)

CREATE_COURSE = EndpointContract(
    input=InputSchema(body=CourseCreate),
    output=OutputBuilder()
    .created(CourseOut, "Course created successfully")
    .bad_request()
    .build(),
)

PATCH_COURSE = EndpointContract(
    input=InputSchema(path=IdPath, body=CoursePatch),
    output=OutputBuilder()
    .ok(CourseOut, "Course updated successfully")
    .bad_request()
    .not_found()
    .build(),
)

DELETE_COURSE = EndpointContract(
    input=InputSchema(path=IdPath),
    output=OutputBuilder()
    .no_content("Course deleted successfully")
    .bad_request("Course still has classes")
    .not_found()
    .build(),
)
