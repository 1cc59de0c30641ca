"""
Curricula router.

A student may keep several curricula. Each one is an ordered course list:
courses come back in the order the client listed or added them. PUT
replaces the whole list in a single transaction, so either every course of
the new list is stored or the previous list stays untouched.
"""
from typing import Optional

from scheduling_api.core.handler import Context
from scheduling_api.core.routing import ContractRouter
from scheduling_api.core.validation import ValidatedInput
from scheduling_api.db.base import transaction
from scheduling_api.db.repository import Repository
from scheduling_api.models import Course, Curriculum, CurriculumCourse, Student
from scheduling_api.routers import paths
from scheduling_api.schemas.curriculum import (
    CREATE_CURRICULUM,
    DELETE_CURRICULUM,
    GET_CURRICULUM,
    LIST_CURRICULA,
    PATCH_CURRICULUM,
    PUT_CURRICULUM,
    CurriculumCourseIn,
    CurriculumCourseOut,
    CurriculumLinks,
    CurriculumOut,
)
from scheduling_api.services.rules import bad_request, check_listed_ids, check_reference, not_found

router = ContractRouter(prefix="/students/{student_id}/curricula", tags=["curricula"])


def course_out(item: CurriculumCourse) -> CurriculumCourseOut:
    return CurriculumCourseOut(
        course_id=item.course_id,
        course_code=item.course.code,
        course_name=item.course.name,
        semester=item.semester,
        link=paths.course(item.course_id),
    )


def to_out(curriculum: Curriculum) -> CurriculumOut:
    return CurriculumOut(
        id=curriculum.id,
        student_id=curriculum.student_id,
        courses=[course_out(item) for item in curriculum.courses],
        links=CurriculumLinks(
            self=paths.curriculum(curriculum.student_id, curriculum.id),
            student=paths.student(curriculum.student_id),
        ),
    )


def find_curriculum(ctx: Context, student_id: int, curriculum_id: int) -> Optional[Curriculum]:
    """The curriculum, or None when it does not exist or belongs to another student."""
    curriculum = Repository(ctx.db, Curriculum).find_unique(curriculum_id)
    if curriculum is None or curriculum.student_id != student_id:
        return None
    return curriculum


def _check_courses(ctx: Context, courses: list[CurriculumCourseIn]) -> list:
    return check_listed_ids(
        ctx.db,
        Course,
        [item.course_id for item in courses],
        lambda index: ["body", "courses", str(index), "course_id"],
        "Course",
    )


def _entries(courses: list[CurriculumCourseIn]) -> list[CurriculumCourse]:
    return [
        CurriculumCourse(course_id=item.course_id, semester=item.semester, position=index)
        for index, item in enumerate(courses)
    ]


@router.get("", LIST_CURRICULA, summary="List a student's curricula")
def list_curricula(ctx: Context, data: ValidatedInput):
    student = Repository(ctx.db, Student).find_unique(data.path.student_id)
    if student is None:
        return not_found("Student not found")
    return {200: [to_out(c) for c in student.curricula]}


@router.post("", CREATE_CURRICULUM, summary="Create a curriculum for a student")
def create_curriculum(ctx: Context, data: ValidatedInput):
    student = Repository(ctx.db, Student).find_unique(data.path.student_id)
    if student is None:
        return not_found("Student not found")
    errors = _check_courses(ctx, data.body.courses)
    if errors:
        return bad_request(errors)
    with transaction(ctx.db):
        curriculum = Repository(ctx.db, Curriculum).create(
            student_id=student.id, courses=_entries(data.body.courses)
        )
    return {201: to_out(curriculum)}


@router.get("/{curriculum_id}", GET_CURRICULUM, summary="Retrieve a curriculum")
def get_curriculum(ctx: Context, data: ValidatedInput):
    curriculum = find_curriculum(ctx, data.path.student_id, data.path.curriculum_id)
    if curriculum is None:
        return not_found("Curriculum not found for this student")
    return {200: to_out(curriculum)}


@router.put("/{curriculum_id}", PUT_CURRICULUM, summary="Replace the courses of a curriculum")
def put_curriculum(ctx: Context, data: ValidatedInput):
    curriculum = find_curriculum(ctx, data.path.student_id, data.path.curriculum_id)
    if curriculum is None:
        return not_found("Curriculum not found for this student")
    errors = _check_courses(ctx, data.body.courses)
    if errors:
        return bad_request(errors)

    with transaction(ctx.db):
        # old rows go first so a re-listed course does not collide with itself
        curriculum.courses.clear()
        ctx.db.flush()
        curriculum.courses.extend(_entries(data.body.courses))
        ctx.db.flush()
    ctx.db.refresh(curriculum)
    return {200: to_out(curriculum)}


@router.patch("/{curriculum_id}", PATCH_CURRICULUM, summary="Move a curriculum to another student")
def patch_curriculum(ctx: Context, data: ValidatedInput):
    curriculum = find_curriculum(ctx, data.path.student_id, data.path.curriculum_id)
    if curriculum is None:
        return not_found("Curriculum not found for this student")
    student_id = data.body.student_id
    errors = check_reference(ctx.db, Student, "student_id", student_id, "Student")
    if errors:
        return bad_request(errors)
    if student_id is not None:
        with transaction(ctx.db):
            curriculum.student = Repository(ctx.db, Student).find_unique(student_id)
            ctx.db.flush()
    return {200: to_out(curriculum)}


@router.delete("/{curriculum_id}", DELETE_CURRICULUM, summary="Delete a curriculum")
def delete_curriculum(ctx: Context, data: ValidatedInput):
    curriculum = find_curriculum(ctx, data.path.student_id, data.path.curriculum_id)
    if curriculum is None:
        return not_found("Curriculum not found for this student")
    with transaction(ctx.db):
        Repository(ctx.db, Curriculum).delete(curriculum)
    return {204: None}
