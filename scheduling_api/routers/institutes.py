"""
Institutes router.

GET    /institutes
GET    /institutes/{id}
POST   /institutes
PATCH  /institutes/{id}
DELETE /institutes/{id}
"""
from scheduling_api.core.handler import Context
from scheduling_api.core.routing import ContractRouter
from scheduling_api.core.validation import ValidatedInput
from scheduling_api.db.base import transaction
from scheduling_api.db.repository import Repository
from scheduling_api.models import Course, Institute, Program
from scheduling_api.routers import paths
from scheduling_api.schemas.institute import (
    CREATE_INSTITUTE,
    DELETE_INSTITUTE,
    GET_INSTITUTE,
    LIST_INSTITUTES,
    PATCH_INSTITUTE,
    InstituteLinks,
    InstituteOut,
)
from scheduling_api.services.rules import (
    bad_request,
    changes,
    check_unique,
    not_found,
    reference_exists,
)

router = ContractRouter(prefix="/institutes", tags=["institutes"])


def to_out(institute: Institute) -> InstituteOut:
    return InstituteOut(
        id=institute.id,
        code=institute.code,
        links=InstituteLinks(
            self=paths.institute(institute.id),
            courses=paths.courses(institute_id=institute.id),
            classes=paths.classes(institute_id=institute.id),
        ),
    )


@router.get("", LIST_INSTITUTES, summary="List institutes", public=True)
def list_institutes(ctx: Context, data: ValidatedInput):
    institutes = Repository(ctx.db, Institute).find_many(order_by=Institute.code)
    return {200: [to_out(i) for i in institutes]}


@router.get("/{id}", GET_INSTITUTE, summary="Retrieve an institute", public=True)
def get_institute(ctx: Context, data: ValidatedInput):
    institute = Repository(ctx.db, Institute).find_unique(data.path.id)
    if institute is None:
        return not_found("Institute not found")
    return {200: to_out(institute)}


@router.post("", CREATE_INSTITUTE, summary="Create an institute")
def create_institute(ctx: Context, data: ValidatedInput):
    errors = check_unique(ctx.db, Institute, "code", data.body.code, label="institute")
    if errors:
        return bad_request(errors)
    with transaction(ctx.db):
        institute = Repository(ctx.db, Institute).create(code=data.body.code)
    return {201: to_out(institute)}


@router.patch("/{id}", PATCH_INSTITUTE, summary="Update an institute")
def patch_institute(ctx: Context, data: ValidatedInput):
    repo = Repository(ctx.db, Institute)
    institute = repo.find_unique(data.path.id)
    if institute is None:
        return not_found("Institute not found")
    values = changes(data.body)
    errors = check_unique(
        ctx.db, Institute, "code", values.get("code"), exclude_id=institute.id, label="institute"
    )
    if errors:
        return bad_request(errors)
    with transaction(ctx.db):
        repo.update(institute, **values)
    return {200: to_out(institute)}


@router.delete("/{id}", DELETE_INSTITUTE, summary="Delete an institute")
def delete_institute(ctx: Context, data: ValidatedInput):
    """An institute that still owns courses or programs cannot be deleted."""
    repo = Repository(ctx.db, Institute)
    institute = repo.find_unique(data.path.id)
    if institute is None:
        return not_found("Institute not found")
    in_use = (
        Repository(ctx.db, Course).count([Course.institute_id == institute.id])
        + Repository(ctx.db, Program).count([Program.institute_id == institute.id])
    )
    if in_use:
        return bad_request([reference_exists(
            ["path", "id"], "Institute is still referenced by courses or programs"
        )])
    with transaction(ctx.db):
        repo.delete(institute)
    return {204: None}
