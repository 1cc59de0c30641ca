"""
Catalogs router. Reads are public.
"""
from scheduling_api.core.handler import Context
from scheduling_api.core.routing import ContractRouter
from scheduling_api.core.validation import ValidatedInput
from scheduling_api.db.base import transaction
from scheduling_api.db.repository import Repository
from scheduling_api.models import Catalog, Student
from scheduling_api.routers import paths
from scheduling_api.schemas.catalog import (
    CREATE_CATALOG,
    DELETE_CATALOG,
    GET_CATALOG,
    LIST_CATALOGS,
    PATCH_CATALOG,
    CatalogLinks,
    CatalogListQuery,
    CatalogOut,
)
from scheduling_api.services.rules import (
    already_exists,
    bad_request,
    changes,
    not_found,
    reference_exists,
)

router = ContractRouter(prefix="/catalogs", tags=["catalogs"])


def _students(ctx: Context, catalog: Catalog) -> int:
    return Repository(ctx.db, Student).count([Student.catalog_id == catalog.id])


def to_out(ctx: Context, catalog: Catalog) -> CatalogOut:
    return CatalogOut(
        id=catalog.id,
        year=catalog.year,
        programs_count=len(catalog.programs),
        students_count=_students(ctx, catalog),
        program_ids=[p.program_id for p in catalog.programs],
        links=CatalogLinks(
            self=paths.catalog(catalog.id),
            programs=paths.catalog_programs(catalog.id),
        ),
    )


def _check_year(ctx: Context, year, exclude_id=None) -> list:
    if year is None:
        return []
    existing = Repository(ctx.db, Catalog).find_first(year=year)
    if existing is None or existing.id == exclude_id:
        return []
    return [already_exists(["body", "year"], f"Catalog for year {year} already exists")]


@router.get("", LIST_CATALOGS, summary="List catalogs", public=True)
def list_catalogs(ctx: Context, data: ValidatedInput):
    query: CatalogListQuery = data.query
    criteria = [Catalog.year == query.year] if query.year is not None else []
    catalogs = Repository(ctx.db, Catalog).find_many(criteria, order_by=Catalog.year.desc())
    return {200: [to_out(ctx, c) for c in catalogs]}


@router.get("/{id}", GET_CATALOG, summary="Retrieve a catalog", public=True)
def get_catalog(ctx: Context, data: ValidatedInput):
    catalog = Repository(ctx.db, Catalog).find_unique(data.path.id)
    if catalog is None:
        return not_found("Catalog not found")
    return {200: to_out(ctx, catalog)}


@router.post("", CREATE_CATALOG, summary="Create a catalog")
def create_catalog(ctx: Context, data: ValidatedInput):
    errors = _check_year(ctx, data.body.year)
    if errors:
        return bad_request(errors)
    with transaction(ctx.db):
        catalog = Repository(ctx.db, Catalog).create(year=data.body.year)
    return {201: to_out(ctx, catalog)}


@router.patch("/{id}", PATCH_CATALOG, summary="Update a catalog")
def patch_catalog(ctx: Context, data: ValidatedInput):
    repo = Repository(ctx.db, Catalog)
    catalog = repo.find_unique(data.path.id)
    if catalog is None:
        return not_found("Catalog not found")
    values = changes(data.body)
    errors = _check_year(ctx, values.get("year"), exclude_id=catalog.id)
    if errors:
        return bad_request(errors)
    with transaction(ctx.db):
        repo.update(catalog, **values)
    return {200: to_out(ctx, catalog)}


@router.delete("/{id}", DELETE_CATALOG, summary="Delete a catalog")
def delete_catalog(ctx: Context, data: ValidatedInput):
    """A catalog that still lists programs or has students enrolled under it cannot be deleted."""
    repo = Repository(ctx.db, Catalog)
    catalog = repo.find_unique(data.path.id)
    if catalog is None:
        return not_found("Catalog not found")
    students, programs = _students(ctx, catalog), len(catalog.programs)
    if students or programs:
        return bad_request([reference_exists(
            ["path", "id"], f"Cannot delete catalog with {students} students and {programs} programs"
        )])
    with transaction(ctx.db):
        repo.delete(catalog)
    return {204: None}
