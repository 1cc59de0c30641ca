"""
Curriculum schemas and endpoint contracts.

GET    /students/{student_id}/curricula
POST   /students/{student_id}/curricula
GET    /students/{student_id}/curricula/{curriculum_id}
PUT    /students/{student_id}/curricula/{curriculum_id}   (replaces the course list)
PATCH  /students/{student_id}/curricula/{curriculum_id}   (moves it to another student)
DELETE /students/{student_id}/curricula/{curriculum_id}

POST   /students/{student_id}/curricula/{curriculum_id}/courses
PATCH  /students/{student_id}/curricula/{curriculum_id}/courses/{course_id}
DELETE /students/{student_id}/curricula/{curriculum_id}/courses/{course_id}
"""
from typing import Optional

from pydantic import BaseModel, Field

from scheduling_api.core.contract import EndpointContract, InputSchema, OutputBuilder, StrictModel


class StudentPath(StrictModel):
    student_id: int


class CurriculumPath(StrictModel):
    student_id: int
    curriculum_id: int


class CurriculumCoursePath(StrictModel):
    student_id: int
    curriculum_id: int
    course_id: int


class CurriculumCourseOut(BaseModel):
    course_id: int
    course_code: str
    course_name: str
    semester: Optional[int] = None
    link: str


class CurriculumLinks(BaseModel):
    self: str
    student: str


class CurriculumOut(BaseModel):
    id: int
    student_id: int
    courses: list[CurriculumCourseOut]
    links: CurriculumLinks


class CurriculumCourseIn(StrictModel):
    course_id: int
    semester: Optional[int] = Field(default=None, ge=1, le=20)


class CurriculumCreate(StrictModel):
    courses: list[CurriculumCourseIn] = Field(default_factory=list)


class CurriculumPut(StrictModel):
    courses: list[CurriculumCourseIn] = Field(default_factory=list)


class CurriculumPatch(StrictModel):
    student_id: Optional[int] = None


class CurriculumCoursePatch(StrictModel):
    semester: Optional[int] = Field(default=None, ge=1, le=20)


LIST_CURRICULA = EndpointContract(
    input=InputSchema(path=StudentPath),
    output=OutputBuilder()
    .ok(list[CurriculumOut], "List of curricula retrieved successfully")
    .unauthorized()
    .not_found("Student not found")
    .build(),
)

GET_CURRICULUM = EndpointContract(
    input=InputSchema(path=CurriculumPath),
    output=OutputBuilder()
    .ok(CurriculumOut, "Curriculum retrieved successfully")
    .unauthorized()
    .not_found("Curriculum not found for this student")
    .build(),
)

CREATE_CURRICULUM = EndpointContract(
    input=InputSchema(path=StudentPath, body=CurriculumCreate),
    output=OutputBuilder()
    .created(CurriculumOut, "Curriculum created successfully")
    .bad_request()
    .unauthorized()
    .not_found("Student not found")
    .build(),
)

PUT_CURRICULUM = EndpointContract(
    input=InputSchema(path=CurriculumPath, body=CurriculumPut),
    output=OutputBuilder()
    .ok(CurriculumOut, "Curriculum courses replaced")
    .bad_request()
    .unauthorized()
    .not_found("Curriculum not found for this student")
    .build(),
)

PATCH_CURRICULUM = EndpointContract(
    input=InputSchema(path=CurriculumPath, body=CurriculumPatch),
    output=OutputBuilder()
    .ok(CurriculumOut, "Curriculum updated successfully")
    .bad_request()
    .unauthorized()
    .not_found("Curriculum not found for this student")
    .build(),
)

DELETE_CURRICULUM = EndpointContract(
    input=InputSchema(path=CurriculumPath),
    output=OutputBuilder()
    .no_content("Curriculum deleted successfully")
    .unauthorized()
    .not_found("Curriculum not found for this student")
    .build(),
)

ADD_CURRICULUM_COURSE = EndpointContract(
    input=InputSchema(path=CurriculumPath, body=CurriculumCourseIn),
    output=OutputBuilder()
    .created(CurriculumCourseOut, "Course added to curriculum successfully")
    .bad_request()
    .unauthorized()
    .not_found("Curriculum not found for this student")
    .build(),
)

PATCH_CURRICULUM_COURSE = EndpointContract(
    input=InputSchema(path=CurriculumCoursePath, body=CurriculumCoursePatch),
    output=OutputBuilder()
    .ok(CurriculumCourseOut, "Course updated successfully")
    .bad_request()
    .unauthorized()
    .not_found("Curriculum or course not found")
    .build(),
)

REMOVE_CURRICULUM_COURSE = EndpointContract(
    input=InputSchema(path=CurriculumCoursePath),
    output=OutputBuilder()
    .no_content("Course removed from curriculum successfully")
    .unauthorized()
    .not_found("Curriculum or course not found")
    .build(),
)
