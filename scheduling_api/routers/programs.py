"""
Programs router.

GET    /programs?institute_id=
GET    /programs/{id}
POST   /programs
PATCH  /programs/{id}
DELETE /programs/{id}
"""
from typing import Optional

from scheduling_api.core.handler import Context
from scheduling_api.core.routing import ContractRouter
from scheduling_api.core.validation import FieldError, ValidatedInput
from scheduling_api.db.base import transaction
from scheduling_api.db.repository import Repository
from scheduling_api.models import CatalogProgram, Institute, Program, Student
from scheduling_api.routers import paths
from scheduling_api.schemas.program import (
    CREATE_PROGRAM,
    DELETE_PROGRAM,
    GET_PROGRAM,
    LIST_PROGRAMS,
    PATCH_PROGRAM,
    ProgramInstitute,
    ProgramLinks,
    ProgramOut,
)
from scheduling_api.services.rules import (
    already_exists,
    bad_request,
    changes,
    check_reference,
    not_found,
    reference_exists,
)

router = ContractRouter(prefix="/programs", tags=["programs"])


def _students(ctx: Context, program_id: int) -> int:
    return Repository(ctx.db, Student).count([Student.program_id == program_id])


def to_out(ctx: Context, program: Program) -> ProgramOut:
    return ProgramOut(
        id=program.id,
        code=program.code,
        name=program.name,
        institute_id=program.institute_id,
        institute=ProgramInstitute(id=program.institute.id, code=program.institute.code),
        students_count=_students(ctx, program.id),
        links=ProgramLinks(
            self=paths.program(program.id),
            institute=paths.institute(program.institute_id),
        ),
    )


def _check_code(ctx: Context, institute_id: int, code: int, exclude_id: Optional[int] = None) -> list[FieldError]:
    """Program codes are unique within an institute."""
    existing = Repository(ctx.db, Program).find_first(institute_id=institute_id, code=code)
    if existing is None or existing.id == exclude_id:
        return []
    return [already_exists(["body", "code"], "A program with this code already exists in the institute")]


@router.get("", LIST_PROGRAMS, summary="List programs", public=True)
def list_programs(ctx: Context, data: ValidatedInput):
    criteria = []
    if data.query.institute_id is not None:
        criteria.append(Program.institute_id == data.query.institute_id)
    programs = Repository(ctx.db, Program).find_many(criteria, order_by=Program.code)
    return {200: [to_out(ctx, p) for p in programs]}


@router.get("/{id}", GET_PROGRAM, summary="Retrieve a program", public=True)
def get_program(ctx: Context, data: ValidatedInput):
    program = Repository(ctx.db, Program).find_unique(data.path.id)
    if program is None:
        return not_found("Program not found")
    return {200: to_out(ctx, program)}


@router.post("", CREATE_PROGRAM, summary="Create a program")
def create_program(ctx: Context, data: ValidatedInput):
    body = data.body
    errors = check_reference(ctx.db, Institute, "institute_id", body.institute_id, "Institute")
    if not errors:
        errors = _check_code(ctx, body.institute_id, body.code)
    if errors:
        return bad_request(errors)
    with transaction(ctx.db):
        program = Repository(ctx.db, Program).create(**body.model_dump())
    return {201: to_out(ctx, program)}


@router.patch("/{id}", PATCH_PROGRAM, summary="Update a program")
def patch_program(ctx: Context, data: ValidatedInput):
    repo = Repository(ctx.db, Program)
    program = repo.find_unique(data.path.id)
    if program is None:
        return not_found("Program not found")
    values = changes(data.body)
    errors = check_reference(ctx.db, Institute, "institute_id", values.get("institute_id"), "Institute")
    if not errors:
        errors = _check_code(
            ctx,
            values.get("institute_id", program.institute_id),
            values.get("code", program.code),
            exclude_id=program.id,
        )
    if errors:
        return bad_request(errors)
    with transaction(ctx.db):
        repo.update(program, **values)
    return {200: to_out(ctx, program)}


@router.delete("/{id}", DELETE_PROGRAM, summary="Delete a program")
def delete_program(ctx: Context, data: ValidatedInput):
    repo = Repository(ctx.db, Program)
    program = repo.find_unique(data.path.id)
    if program is None:
        return not_found("Program not found")
    if _students(ctx, program.id):
        return bad_request([reference_exists(["path", "id"], "Program still has students")])
    if Repository(ctx.db, CatalogProgram).count([CatalogProgram.program_id == program.id]):
        return bad_request([reference_exists(["path", "id"], "Program is still listed in catalogs")])
    with transaction(ctx.db):
        repo.delete(program)
    return {204: None}
