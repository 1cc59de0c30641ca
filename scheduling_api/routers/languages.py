"""
Languages router.

GET    /languages
GET    /languages/{id}
POST   /languages
PATCH  /languages/{id}
DELETE /languages/{id}
"""
from scheduling_api.core.handler import Context
from scheduling_api.core.routing import ContractRouter
from scheduling_api.core.validation import ValidatedInput
from scheduling_api.db.base import transaction
from scheduling_api.db.repository import Repository
from scheduling_api.models import CatalogLanguage, Language
from scheduling_api.routers import paths
from scheduling_api.schemas.language import (
    CREATE_LANGUAGE,
    DELETE_LANGUAGE,
    GET_LANGUAGE,
    LIST_LANGUAGES,
    PATCH_LANGUAGE,
    LanguageLinks,
    LanguageOut,
)
from scheduling_api.services.rules import bad_request, changes, not_found, reference_exists

router = ContractRouter(prefix="/languages", tags=["languages"])


def _usage(ctx: Context, language: Language) -> int:
    return Repository(ctx.db, CatalogLanguage).count([CatalogLanguage.language_id == language.id])


def to_out(ctx: Context, language: Language) -> LanguageOut:
    return LanguageOut(
        id=language.id,
        name=language.name,
        catalog_languages_count=_usage(ctx, language),
        links=LanguageLinks(self=paths.language(language.id)),
    )


@router.get("", LIST_LANGUAGES, summary="List languages", public=True)
def list_languages(ctx: Context, data: ValidatedInput):
    languages = Repository(ctx.db, Language).find_many(order_by=(Language.name, Language.id))
    return {200: [to_out(ctx, language) for language in languages]}


@router.get("/{id}", GET_LANGUAGE, summary="Retrieve a language", public=True)
def get_language(ctx: Context, data: ValidatedInput):
    language = Repository(ctx.db, Language).find_unique(data.path.id)
    if language is None:
        return not_found("Language not found")
    return {200: to_out(ctx, language)}


@router.post("", CREATE_LANGUAGE, summary="Create a language")
def create_language(ctx: Context, data: ValidatedInput):
    with transaction(ctx.db):
        language = Repository(ctx.db, Language).create(name=data.body.name)
    return {201: to_out(ctx, language)}


@router.patch("/{id}", PATCH_LANGUAGE, summary="Rename a language")
def patch_language(ctx: Context, data: ValidatedInput):
    repo = Repository(ctx.db, Language)
    language = repo.find_unique(data.path.id)
    if language is None:
        return not_found("Language not found")
    with transaction(ctx.db):
        repo.update(language, **changes(data.body))
    return {200: to_out(ctx, language)}


@router.delete("/{id}", DELETE_LANGUAGE, summary="Delete a language")
def delete_language(ctx: Context, data: ValidatedInput):
    repo = Repository(ctx.db, Language)
    language = repo.find_unique(data.path.id)
    if language is None:
        return not_found("Language not found")
    in_use = _usage(ctx, language)
    if in_use:
        return bad_request([reference_exists(
            ["path", "id"], f"Cannot delete language offered by {in_use} catalog programs"
        )])
    with transaction(ctx.db):
        repo.delete(language)
    return {204: None}
