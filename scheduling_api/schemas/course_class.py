"""
Class (course offering) schemas and endpoint contracts.

GET    /classes       → ClassListQuery → Page[ClassOut]
GET    /classes/{id}  → ClassOut
POST   /classes       → ClassCreate → ClassOut
PATCH  /classes/{id}  → ClassPatch  → ClassOut
DELETE /classes/{id}  → 204
"""
from typing import Optional

from pydantic import BaseModel, Field

from scheduling_api.core.contract import EndpointContract, IdPath, InputSchema, OutputBuilder, StrictModel
from scheduling_api.core.pagination import Page, PaginationQuery


class ClassProfessor(BaseModel):
    id: int
    name: str
    link: str


class ClassLinks(BaseModel):
    self: str
    course: str
    institute: str
    study_period: str
    class_schedules: str


class ClassOut(BaseModel):
    id: int
    code: str
    reservations: list[int]
    course_id: int
    course_code: str
    institute_id: int
    institute_code: str
    study_period_id: int
    study_period_code: str
    professors: list[ClassProfessor]
    links: ClassLinks


class ClassCreate(StrictModel):
    code: str = Field(min_length=1, max_length=32, examples=["A"])
    reservations: list[int] = Field(default_factory=list, examples=[[42, 34]])
    course_id: int
    study_period_id: int
    professor_ids: list[int] = Field(default_factory=list)


class ClassPatch(StrictModel):
    code: Optional[str] = Field(default=None, min_length=1, max_length=32)
    reservations: Optional[list[int]] = None
    course_id: Optional[int] = None
    study_period_id: Optional[int] = None
    # replaces the whole set of professors when sent
    professor_ids: Optional[list[int]] = None


class ClassListQuery(PaginationQuery):
    course_id: Optional[int] = None
    course_code: Optional[str] = Field(default=None, min_length=1)
    institute_id: Optional[int] = None
    institute_code: Optional[str] = Field(default=None, min_length=1)
    study_period_id: Optional[int] = None
    study_period_code: Optional[str] = Field(default=None, min_length=1)
    professor_id: Optional[int] = None
    professor_name: Optional[str] = Field(
        default=None, min_length=1, description="Case-insensitive substring of a professor's name."
    )


LIST_CLASSES = EndpointContract(
    input=InputSchema(query=ClassListQuery),
    output=OutputBuilder().ok(Page[ClassOut], "Page of classes").build(),
)

GET_CLASS = EndpointContract(
    input=InputSchema(path=IdPath),
    output=OutputBuilder().ok(ClassOut, "Class retrieved successfully").not_found().build(),
)

CREATE_CLASS = EndpointContract(
    input=InputSchema(body=ClassCreate),
    output=OutputBuilder().created(ClassOut, "Class created successfully").bad_request().build(),
)

PATCH_CLASS = EndpointContract(
    input=InputSchema(path=IdPath, body=ClassPatch),
    output=OutputBuilder()
    .ok(ClassOut, "Class updated successfully")
    .bad_request()
    .not_found()
    .build(),
)

DELETE_CLASS = EndpointContract(
    input=InputSchema(path=IdPath),
    output=OutputBuilder().no_content("Class and its schedules deleted").not_found().build(),
)
