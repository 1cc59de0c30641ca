"""
Professors router.

GET    /professors?name=&page=&page_size=
GET    /professors/{id}
POST   /professors
PATCH  /professors/{id}
DELETE /professors/{id}
"""
from functools import partial

from scheduling_api.core.handler import Context
from scheduling_api.core.pagination import paginate, skip_take
from scheduling_api.core.routing import ContractRouter
from scheduling_api.core.validation import ValidatedInput
from scheduling_api.db.base import transaction
from scheduling_api.db.repository import Repository
from scheduling_api.models import Professor
from scheduling_api.routers import paths
from scheduling_api.schemas.professor import (
    CREATE_PROFESSOR,
    DELETE_PROFESSOR,
    GET_PROFESSOR,
    LIST_PROFESSORS,
    PATCH_PROFESSOR,
    ProfessorLinks,
    ProfessorListQuery,
    ProfessorOut,
)
from scheduling_api.services.rules import changes, contains, not_found

router = ContractRouter(prefix="/professors", tags=["professors"])


def to_out(professor: Professor) -> ProfessorOut:
    return ProfessorOut(
        id=professor.id,
        name=professor.name,
        links=ProfessorLinks(
            self=paths.professor(professor.id),
            classes=paths.classes(professor_id=professor.id),
        ),
    )


@router.get("", LIST_PROFESSORS, summary="List professors (paginated)", public=True)
def list_professors(ctx: Context, data: ValidatedInput):
    query: ProfessorListQuery = data.query
    repo = Repository(ctx.db, Professor)
    criteria = [contains(Professor.name, query.name)] if query.name else []
    skip, take = skip_take(query)
    items = repo.find_many(criteria, skip=skip, take=take, order_by=Professor.name)
    link = partial(paths.professors, page_size=query.page_size, name=query.name)
    return {200: paginate([to_out(p) for p in items], repo.count(criteria), query, lambda n: link(page=n))}


@router.get("/{id}", GET_PROFESSOR, summary="Retrieve a professor", public=True)
def get_professor(ctx: Context, data: ValidatedInput):
    professor = Repository(ctx.db, Professor).find_unique(data.path.id)
    if professor is None:
        return not_found("Professor not found")
    return {200: to_out(professor)}


@router.post("", CREATE_PROFESSOR, summary="Create a professor")
def create_professor(ctx: Context, data: ValidatedInput):
    with transaction(ctx.db):
        professor = Repository(ctx.db, Professor).create(name=data.body.name)
    return {201: to_out(professor)}


@router.patch("/{id}", PATCH_PROFESSOR, summary="Update a professor")
def patch_professor(ctx: Context, data: ValidatedInput):
    repo = Repository(ctx.db, Professor)
    professor = repo.find_unique(data.path.id)
    if professor is None:
        return not_found("Professor not found")
    with transaction(ctx.db):
        repo.update(professor, **changes(data.body))
    return {200: to_out(professor)}


@router.delete("/{id}", DELETE_PROFESSOR, summary="Delete a professor")
def delete_professor(ctx: Context, data: ValidatedInput):
    """Removes the professor from every class they teach."""
    repo = Repository(ctx.db, Professor)
    professor = repo.find_unique(data.path.id)
    if professor is None:
        return not_found("Professor not found")
    with transaction(ctx.db):
        repo.delete(professor)
    return {204: None}
