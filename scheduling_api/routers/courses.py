"""
Courses router.

GET    /courses?institute_id=&institute_code=&page=&page_size=
GET    /courses/{id}
POST   /courses
PATCH  /courses/{id}
DELETE /courses/{id}
"""
from functools import partial

from scheduling_api.core.handler import Context
from scheduling_api.core.pagination import paginate, skip_take
from scheduling_api.core.routing import ContractRouter
from scheduling_api.core.validation import ValidatedInput
from scheduling_api.db.base import transaction
from scheduling_api.db.repository import Repository
from scheduling_api.models import Course, CourseClass, CourseRequirement, CurriculumCourse, Institute
from scheduling_api.routers import paths
from scheduling_api.schemas.course import (
    CREATE_COURSE,
    DELETE_COURSE,
    GET_COURSE,
    LIST_COURSES,
    PATCH_COURSE,
    CourseLinks,
    CourseListQuery,
    CourseOut,
)
from scheduling_api.services.rules import (
    bad_request,
    changes,
    check_reference,
    check_unique,
    not_found,
    reference_exists,
)

router = ContractRouter(prefix="/courses", tags=["courses"])


def to_out(course: Course) -> CourseOut:
    return CourseOut(
        id=course.id,
        code=course.code,
        name=course.name,
        credits=course.credits,
        institute_id=course.institute_id,
        institute_code=course.institute.code,
        links=CourseLinks(
            self=paths.course(course.id),
            institute=paths.institute(course.institute_id),
            classes=paths.classes(course_id=course.id),
        ),
    )


def _criteria(query: CourseListQuery) -> list:
    criteria = []
    if query.institute_id is not None:
        criteria.append(Course.institute_id == query.institute_id)
    if query.institute_code is not None:
        criteria.append(Course.institute.has(Institute.code == query.institute_code))
    return criteria


@router.get("", LIST_COURSES, summary="List courses (paginated)", public=True)
def list_courses(ctx: Context, data: ValidatedInput):
    query: CourseListQuery = data.query
    repo = Repository(ctx.db, Course)
    criteria = _criteria(query)
    skip, take = skip_take(query)
    items = repo.find_many(criteria, skip=skip, take=take, order_by=Course.code)
    link = partial(
        paths.courses,
        page_size=query.page_size,
        institute_id=query.institute_id,
        institute_code=query.institute_code,
    )
    page = paginate(
        [to_out(c) for c in items],
        repo.count(criteria),
        query,
        lambda n: link(page=n),
    )
    return {200: page}


@router.get("/{id}", GET_COURSE, summary="Retrieve a course", public=True)
def get_course(ctx: Context, data: ValidatedInput):
    course = Repository(ctx.db, Course).find_unique(data.path.id)
    if course is None:
        return not_found("Course not found")
    return {200: to_out(course)}


@router.post("", CREATE_COURSE, summary="Create a course")
def create_course(ctx: Context, data: ValidatedInput):
    body = data.body
    errors = (
        check_unique(ctx.db, Course, "code", body.code, label="course")
        + check_reference(ctx.db, Institute, "institute_id", body.institute_id, "Institute")
    )
    if errors:
        return bad_request(errors)
    with transaction(ctx.db):
        course = Repository(ctx.db, Course).create(**body.model_dump())
    return {201: to_out(course)}


@router.patch("/{id}", PATCH_COURSE, summary="Update a course")
def patch_course(ctx: Context, data: ValidatedInput):
    repo = Repository(ctx.db, Course)
    course = repo.find_unique(data.path.id)
    if course is None:
        return not_found("Course not found")
    values = changes(data.body)
    errors = (
        check_unique(ctx.db, Course, "code", values.get("code"), exclude_id=course.id, label="course")
        + check_reference(ctx.db, Institute, "institute_id", values.get("institute_id"), "Institute")
    )
    if errors:
        return bad_request(errors)
    with transaction(ctx.db):
        repo.update(course, **values)
    return {200: to_out(course)}


@router.delete("/{id}", DELETE_COURSE, summary="Delete a course")
def delete_course(ctx: Context, data: ValidatedInput):
    repo = Repository(ctx.db, Course)
    course = repo.find_unique(data.path.id)
    if course is None:
        return not_found("Course not found")
    in_use = (
        Repository(ctx.db, CourseClass).count([CourseClass.course_id == course.id])
        + Repository(ctx.db, CurriculumCourse).count([CurriculumCourse.course_id == course.id])
        + Repository(ctx.db, CourseRequirement).count([CourseRequirement.course_id == course.id])
    )
    if in_use:
        return bad_request([reference_exists(
            ["path", "id"], "Course is still referenced by classes, curricula or catalog requirements"
        )])
    with transaction(ctx.db):
        repo.delete(course)
    return {204: None}
