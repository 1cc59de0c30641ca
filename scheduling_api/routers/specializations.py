"""
Specializations router.

GET    /specializations
GET    /specializations/{id}
POST   /specializations
PATCH  /specializations/{id}
DELETE /specializations/{id}
"""
from scheduling_api.core.handler import Context
from scheduling_api.core.routing import ContractRouter
from scheduling_api.core.validation import ValidatedInput
from scheduling_api.db.base import transaction
from scheduling_api.db.repository import Repository
from scheduling_api.models import CatalogSpecialization, Specialization, Student
from scheduling_api.routers import paths
from scheduling_api.schemas.specialization import (
    CREATE_SPECIALIZATION,
    DELETE_SPECIALIZATION,
    GET_SPECIALIZATION,
    LIST_SPECIALIZATIONS,
    PATCH_SPECIALIZATION,
    SpecializationLinks,
    SpecializationOut,
)
from scheduling_api.services.rules import (
    bad_request,
    changes,
    check_unique,
    not_found,
    reference_exists,
)

router = ContractRouter(prefix="/specializations", tags=["specializations"])


def _students(ctx: Context, specialization_id: int) -> int:
    return Repository(ctx.db, Student).count([Student.specialization_id == specialization_id])


def to_out(ctx: Context, specialization: Specialization) -> SpecializationOut:
    return SpecializationOut(
        id=specialization.id,
        code=specialization.code,
        name=specialization.name,
        students_count=_students(ctx, specialization.id),
        links=SpecializationLinks(self=paths.specialization(specialization.id)),
    )


@router.get("", LIST_SPECIALIZATIONS, summary="List specializations", public=True)
def list_specializations(ctx: Context, data: ValidatedInput):
    items = Repository(ctx.db, Specialization).find_many(order_by=Specialization.code)
    return {200: [to_out(ctx, s) for s in items]}


@router.get("/{id}", GET_SPECIALIZATION, summary="Retrieve a specialization", public=True)
def get_specialization(ctx: Context, data: ValidatedInput):
    specialization = Repository(ctx.db, Specialization).find_unique(data.path.id)
    if specialization is None:
        return not_found("Specialization not found")
    return {200: to_out(ctx, specialization)}


@router.post("", CREATE_SPECIALIZATION, summary="Create a specialization")
def create_specialization(ctx: Context, data: ValidatedInput):
    errors = check_unique(ctx.db, Specialization, "code", data.body.code, label="specialization")
    if errors:
        return bad_request(errors)
    with transaction(ctx.db):
        specialization = Repository(ctx.db, Specialization).create(**data.body.model_dump())
    return {201: to_out(ctx, specialization)}


@router.patch("/{id}", PATCH_SPECIALIZATION, summary="Update a specialization")
def patch_specialization(ctx: Context, data: ValidatedInput):
    repo = Repository(ctx.db, Specialization)
    specialization = repo.find_unique(data.path.id)
    if specialization is None:
        return not_found("Specialization not found")
    values = changes(data.body)
    errors = check_unique(
        ctx.db, Specialization, "code", values.get("code"), exclude_id=specialization.id, label="specialization"
    )
    if errors:
        return bad_request(errors)
    with transaction(ctx.db):
        repo.update(specialization, **values)
    return {200: to_out(ctx, specialization)}


@router.delete("/{id}", DELETE_SPECIALIZATION, summary="Delete a specialization")
def delete_specialization(ctx: Context, data: ValidatedInput):
    repo = Repository(ctx.db, Specialization)
    specialization = repo.find_unique(data.path.id)
    if specialization is None:
        return not_found("Specialization not found")
    if _students(ctx, specialization.id):
        return bad_request([reference_exists(["path", "id"], "Specialization still has students")])
    tracks = Repository(ctx.db, CatalogSpecialization)
    if tracks.count([CatalogSpecialization.specialization_id == specialization.id]):
        return bad_request([reference_exists(["path", "id"], "Specialization is still offered in catalogs")])
    with transaction(ctx.db):
        repo.delete(specialization)
    return {204: None}
