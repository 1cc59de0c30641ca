"""
Students router. Every route requires a bearer token.

Deleting a student also deletes their curricula.
"""
from functools import partial

from scheduling_api.core.handler import Context
from scheduling_api.core.pagination import paginate, skip_take
from scheduling_api.core.routing import ContractRouter
from scheduling_api.core.validation import ValidatedInput
from scheduling_api.db.base import transaction
from scheduling_api.db.repository import Repository
from scheduling_api.models import Catalog, Program, Specialization, Student
from scheduling_api.routers import paths
from scheduling_api.schemas.student import (
    CREATE_STUDENT,
    DELETE_STUDENT,
    GET_STUDENT,
    LIST_STUDENTS,
    PATCH_STUDENT,
    StudentLinks,
    StudentListQuery,
    StudentOut,
)
from scheduling_api.services.rules import (
    bad_request,
    changes,
    check_reference,
    check_unique,
    not_found,
)

router = ContractRouter(prefix="/students", tags=["students"])


def to_out(student: Student) -> StudentOut:
    return StudentOut(
        id=student.id,
        ra=student.ra,
        name=student.name,
        program_id=student.program_id,
        specialization_id=student.specialization_id,
        catalog_id=student.catalog_id,
        created_at=student.created_at,
        links=StudentLinks(
            self=paths.student(student.id),
            program=paths.optional(paths.program, student.program_id),
            specialization=paths.optional(paths.specialization, student.specialization_id),
            catalog=paths.optional(paths.catalog, student.catalog_id),
            curricula=paths.curricula(student.id),
        ),
    )


def _check(ctx: Context, values: dict, exclude_id=None) -> list:
    return (
        check_unique(ctx.db, Student, "ra", values.get("ra"), exclude_id=exclude_id, label="student")
        + check_reference(ctx.db, Program, "program_id", values.get("program_id"), "Program")
        + check_reference(
            ctx.db, Specialization, "specialization_id", values.get("specialization_id"), "Specialization"
        )
        + check_reference(ctx.db, Catalog, "catalog_id", values.get("catalog_id"), "Catalog")
    )


@router.get("", LIST_STUDENTS, summary="List students (paginated)")
def list_students(ctx: Context, data: ValidatedInput):
    query: StudentListQuery = data.query
    criteria = []
    if query.program_id is not None:
        criteria.append(Student.program_id == query.program_id)
    if query.specialization_id is not None:
        criteria.append(Student.specialization_id == query.specialization_id)
    if query.catalog_id is not None:
        criteria.append(Student.catalog_id == query.catalog_id)
    repo = Repository(ctx.db, Student)
    skip, take = skip_take(query)
    items = repo.find_many(criteria, skip=skip, take=take, order_by=Student.ra)
    link = partial(
        paths.students,
        page_size=query.page_size,
        program_id=query.program_id,
        specialization_id=query.specialization_id,
        catalog_id=query.catalog_id,
    )
    return {200: paginate([to_out(s) for s in items], repo.count(criteria), query, lambda n: link(page=n))}


@router.get("/{id}", GET_STUDENT, summary="Retrieve a student")
def get_student(ctx: Context, data: ValidatedInput):
    student = Repository(ctx.db, Student).find_unique(data.path.id)
    if student is None:
        return not_found("Student not found")
    return {200: to_out(student)}


@router.post("", CREATE_STUDENT, summary="Create a student")
def create_student(ctx: Context, data: ValidatedInput):
    values = data.body.model_dump()
    errors = _check(ctx, values)
    if errors:
        return bad_request(errors)
    with transaction(ctx.db):
        student = Repository(ctx.db, Student).create(**values)
    return {201: to_out(student)}


@router.patch("/{id}", PATCH_STUDENT, summary="Update a student")
def patch_student(ctx: Context, data: ValidatedInput):
    repo = Repository(ctx.db, Student)
    student = repo.find_unique(data.path.id)
    if student is None:
        return not_found("Student not found")
    values = changes(data.body)
    errors = _check(ctx, values, exclude_id=student.id)
    if errors:
        return bad_request(errors)
    with transaction(ctx.db):
        repo.update(student, **values)
    return {200: to_out(student)}


@router.delete("/{id}", DELETE_STUDENT, summary="Delete a student")
def delete_student(ctx: Context, data: ValidatedInput):
    repo = Repository(ctx.db, Student)
    student = repo.find_unique(data.path.id)
    if student is None:
        return not_found("Student not found")
    with transaction(ctx.db):
        repo.delete(student)
    return {204: None}
