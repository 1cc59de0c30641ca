"""
Classes router.

A class is one offering of a course in a study period, taught by zero or
more professors. Deleting a class deletes its schedules.
"""
from functools import partial

from scheduling_api.core.handler import Context
from scheduling_api.core.pagination import paginate, skip_take
from scheduling_api.core.routing import ContractRouter
from scheduling_api.core.validation import ValidatedInput
from scheduling_api.db.base import transaction
from scheduling_api.db.repository import Repository
from scheduling_api.models import Course, CourseClass, Institute, Professor, StudyPeriod
from scheduling_api.routers import paths
from scheduling_api.schemas.course_class import (
    CREATE_CLASS,
    DELETE_CLASS,
    GET_CLASS,
    LIST_CLASSES,
    PATCH_CLASS,
    ClassLinks,
    ClassListQuery,
    ClassOut,
    ClassProfessor,
)
from scheduling_api.services.rules import (
    bad_request,
    changes,
    check_reference,
    check_references,
    contains,
    not_found,
)

router = ContractRouter(prefix="/classes", tags=["classes"])


def to_out(course_class: CourseClass) -> ClassOut:
    course = course_class.course
    return ClassOut(
        id=course_class.id,
        code=course_class.code,
        reservations=list(course_class.reservations or []),
        course_id=course.id,
        course_code=course.code,
        institute_id=course.institute_id,
        institute_code=course.institute.code,
        study_period_id=course_class.study_period_id,
        study_period_code=course_class.study_period.code,
        professors=[
            ClassProfessor(id=p.id, name=p.name, link=paths.professor(p.id))
            for p in course_class.professors
        ],
        links=ClassLinks(
            self=paths.course_class(course_class.id),
            course=paths.course(course.id),
            institute=paths.institute(course.institute_id),
            study_period=paths.study_period(course_class.study_period_id),
            class_schedules=paths.class_schedules(class_id=course_class.id),
        ),
    )


def _criteria(query: ClassListQuery) -> list:
    criteria = []
    if query.course_id is not None:
        criteria.append(CourseClass.course_id == query.course_id)
    if query.course_code is not None:
        criteria.append(CourseClass.course.has(Course.code == query.course_code))
    if query.institute_id is not None:
        criteria.append(CourseClass.course.has(Course.institute_id == query.institute_id))
    if query.institute_code is not None:
        criteria.append(CourseClass.course.has(Course.institute.has(Institute.code == query.institute_code)))
    if query.study_period_id is not None:
        criteria.append(CourseClass.study_period_id == query.study_period_id)
    if query.study_period_code is not None:
        criteria.append(CourseClass.study_period.has(StudyPeriod.code == query.study_period_code))
    if query.professor_id is not None:
        criteria.append(CourseClass.professors.any(Professor.id == query.professor_id))
    if query.professor_name is not None:
        criteria.append(CourseClass.professors.any(contains(Professor.name, query.professor_name)))
    return criteria


def _check(ctx: Context, values: dict) -> list:
    return (
        check_reference(ctx.db, Course, "course_id", values.get("course_id"), "Course")
        + check_reference(ctx.db, StudyPeriod, "study_period_id", values.get("study_period_id"), "Study period")
        + check_references(ctx.db, Professor, "professor_ids", values.get("professor_ids"), "Professor")
    )


def _professors(ctx: Context, ids: list[int]) -> list[Professor]:
    if not ids:
        return []
    return Repository(ctx.db, Professor).find_many([Professor.id.in_(ids)])


@router.get("", LIST_CLASSES, summary="List classes (paginated)", public=True)
def list_classes(ctx: Context, data: ValidatedInput):
    query: ClassListQuery = data.query
    repo = Repository(ctx.db, CourseClass)
    criteria = _criteria(query)
    skip, take = skip_take(query)
    items = repo.find_many(criteria, skip=skip, take=take)
    filters = query.model_dump(exclude={"page", "page_size"})
    link = partial(paths.classes, page_size=query.page_size, **filters)
    return {200: paginate([to_out(c) for c in items], repo.count(criteria), query, lambda n: link(page=n))}


@router.get("/{id}", GET_CLASS, summary="Retrieve a class", public=True)
def get_class(ctx: Context, data: ValidatedInput):
    course_class = Repository(ctx.db, CourseClass).find_unique(data.path.id)
    if course_class is None:
        return not_found("Class not found")
    return {200: to_out(course_class)}


@router.post("", CREATE_CLASS, summary="Create a class")
def create_class(ctx: Context, data: ValidatedInput):
    values = data.body.model_dump()
    errors = _check(ctx, values)
    if errors:
        return bad_request(errors)
    professor_ids = values.pop("professor_ids")
    with transaction(ctx.db):
        course_class = Repository(ctx.db, CourseClass).create(
            **values, professors=_professors(ctx, professor_ids)
        )
    return {201: to_out(course_class)}


@router.patch("/{id}", PATCH_CLASS, summary="Update a class")
def patch_class(ctx: Context, data: ValidatedInput):
    repo = Repository(ctx.db, CourseClass)
    course_class = repo.find_unique(data.path.id)
    if course_class is None:
        return not_found("Class not found")
    values = changes(data.body)
    errors = _check(ctx, values)
    if errors:
        return bad_request(errors)
    if "professor_ids" in values:
        values["professors"] = _professors(ctx, values.pop("professor_ids") or [])
    with transaction(ctx.db):
        repo.update(course_class, **values)
    return {200: to_out(course_class)}


@router.delete("/{id}", DELETE_CLASS, summary="Delete a class")
def delete_class(ctx: Context, data: ValidatedInput):
    repo = Repository(ctx.db, CourseClass)
    course_class = repo.find_unique(data.path.id)
    if course_class is None:
        return not_found("Class not found")
    with transaction(ctx.db):
        repo.delete(course_class)
    return {204: None}
