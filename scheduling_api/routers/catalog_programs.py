"""
Catalog programs router.

GET    /catalog-programs?catalog_id=&program_id=
GET    /catalog-programs/{id}
POST   /catalog-programs
PATCH  /catalog-programs/{id}
DELETE /catalog-programs/{id}

Course blocks are written together with their owner: creating a catalog
program stores every block, track and requirement in one transaction, and
PATCH swaps whole sections the same way.
"""
from sqlalchemy.orm import Session

from scheduling_api.core.handler import Context
from scheduling_api.core.routing import ContractRouter
from scheduling_api.core.validation import FieldError, ValidatedInput
from scheduling_api.db.base import transaction
from scheduling_api.db.repository import Repository
from scheduling_api.models import (
    Catalog,
    CatalogLanguage,
    CatalogProgram,
    CatalogSpecialization,
    Course,
    CourseBlock,
    CourseBlockType,
    CourseRequirement,
    Language,
    Program,
    Specialization,
)
from scheduling_api.routers import paths
from scheduling_api.schemas.catalog_program import (
    CREATE_CATALOG_PROGRAM,
    DELETE_CATALOG_PROGRAM,
    GET_CATALOG_PROGRAM,
    LIST_CATALOG_PROGRAMS,
    PATCH_CATALOG_PROGRAM,
    BlockSetOut,
    CatalogLanguageIn,
    CatalogLanguageOut,
    CatalogProgramLinks,
    CatalogProgramListQuery,
    CatalogProgramOut,
    CatalogSpecializationIn,
    CatalogSpecializationOut,
    CourseBlockIn,
    ElectiveBlockOut,
    RequirementOut,
)
from scheduling_api.services.rules import (
    already_exists,
    bad_request,
    check_listed_ids,
    check_reference,
    not_found,
)

router = ContractRouter(prefix="/catalog-programs", tags=["catalog-programs"])


# --- output ------------------------------------------------------------------

def _requirement_out(requirement: CourseRequirement) -> RequirementOut:
    return RequirementOut(
        id=requirement.id,
        course_id=requirement.course_id,
        course_code=requirement.course.code,
        course_name=requirement.course.name,
        link=paths.course(requirement.course_id),
    )


def block_set(blocks: list[CourseBlock]) -> BlockSetOut:
    """Mandatory blocks are flattened into one course list; elective blocks stay apart."""
    return BlockSetOut(
        mandatory=[
            _requirement_out(r)
            for block in blocks
            if block.type is CourseBlockType.MANDATORY
            for r in block.requirements
        ],
        electives=[
            ElectiveBlockOut(
                credits=block.credits or 0,
                courses=[_requirement_out(r) for r in block.requirements],
            )
            for block in blocks
            if block.type is CourseBlockType.ELECTIVE
        ],
    )


def to_out(catalog_program: CatalogProgram) -> CatalogProgramOut:
    program = catalog_program.program
    return CatalogProgramOut(
        id=catalog_program.id,
        catalog_id=catalog_program.catalog_id,
        program_id=catalog_program.program_id,
        catalog_year=catalog_program.catalog.year,
        program_code=program.code,
        program_name=program.name,
        base=block_set(catalog_program.course_blocks),
        specializations=[
            CatalogSpecializationOut(
                specialization_id=track.specialization_id,
                code=track.specialization.code,
                name=track.specialization.name,
                blocks=block_set(track.course_blocks),
            )
            for track in catalog_program.specializations
        ],
        languages=[
            CatalogLanguageOut(
                language_id=track.language_id,
                name=track.language.name,
                blocks=block_set(track.course_blocks),
            )
            for track in catalog_program.languages
        ],
        links=CatalogProgramLinks(
            self=paths.catalog_program(catalog_program.id),
            catalog=paths.catalog(catalog_program.catalog_id),
            program=paths.program(catalog_program.program_id),
        ),
    )


# --- checks ------------------------------------------------------------------

def _check_blocks(db: Session, blocks: list[CourseBlockIn], path: list[str]) -> list[FieldError]:
    errors = []
    for j, block in enumerate(blocks):
        errors += check_listed_ids(
            db, Course, block.course_ids, lambda k, j=j: path + [str(j), "course_ids", str(k)], "Course"
        )
    return errors


def _check_sections(db: Session, body) -> list[FieldError]:
    errors = []
    if body.course_blocks is not None:
        errors += _check_blocks(db, body.course_blocks, ["body", "course_blocks"])
    if body.specializations is not None:
        errors += check_listed_ids(
            db,
            Specialization,
            [s.specialization_id for s in body.specializations],
            lambda i: ["body", "specializations", str(i), "specialization_id"],
            "Specialization",
        )
        for i, track in enumerate(body.specializations):
            errors += _check_blocks(db, track.course_blocks, ["body", "specializations", str(i), "course_blocks"])
    if body.languages is not None:
        errors += check_listed_ids(
            db,
            Language,
            [t.language_id for t in body.languages],
            lambda i: ["body", "languages", str(i), "language_id"],
            "Language",
        )
        for i, track in enumerate(body.languages):
            errors += _check_blocks(db, track.course_blocks, ["body", "languages", str(i), "course_blocks"])
    return errors


# --- building ----------------------------------------------------------------

def _blocks(items: list[CourseBlockIn]) -> list[CourseBlock]:
    return [
        CourseBlock(
            type=item.type,
            credits=item.credits,
            requirements=[CourseRequirement(course_id=course_id) for course_id in item.course_ids],
        )
        for item in items
    ]


def _specializations(items: list[CatalogSpecializationIn]) -> list[CatalogSpecialization]:
    return [
        CatalogSpecialization(specialization_id=item.specialization_id, course_blocks=_blocks(item.course_blocks))
        for item in items
    ]


def _languages(items: list[CatalogLanguageIn]) -> list[CatalogLanguage]:
    return [
        CatalogLanguage(language_id=item.language_id, course_blocks=_blocks(item.course_blocks))
        for item in items
    ]


def _replace_blocks(db: Session, current: list[CourseBlock], items: list[CourseBlockIn]) -> None:
    for block in list(current):
        current.remove(block)
        db.delete(block)
    db.flush()
    current.extend(_blocks(items))


# --- routes ------------------------------------------------------------------

@router.get("", LIST_CATALOG_PROGRAMS, summary="List catalog programs", public=True)
def list_catalog_programs(ctx: Context, data: ValidatedInput):
    query: CatalogProgramListQuery = data.query
    criteria = []
    if query.catalog_id is not None:
        criteria.append(CatalogProgram.catalog_id == query.catalog_id)
    if query.program_id is not None:
        criteria.append(CatalogProgram.program_id == query.program_id)
    items = Repository(ctx.db, CatalogProgram).find_many(criteria)
    return {200: [to_out(cp) for cp in items]}


@router.get("/{id}", GET_CATALOG_PROGRAM, summary="Retrieve a catalog program", public=True)
def get_catalog_program(ctx: Context, data: ValidatedInput):
    catalog_program = Repository(ctx.db, CatalogProgram).find_unique(data.path.id)
    if catalog_program is None:
        return not_found("Catalog program not found")
    return {200: to_out(catalog_program)}


@router.post("", CREATE_CATALOG_PROGRAM, summary="Add a program to a catalog")
def create_catalog_program(ctx: Context, data: ValidatedInput):
    body = data.body
    errors = (
        check_reference(ctx.db, Catalog, "catalog_id", body.catalog_id, "Catalog")
        + check_reference(ctx.db, Program, "program_id", body.program_id, "Program")
    )
    if not errors:
        duplicate = Repository(ctx.db, CatalogProgram).find_first(
            catalog_id=body.catalog_id, program_id=body.program_id
        )
        if duplicate is not None:
            errors.append(already_exists(
                ["body", "program_id"], f"Program {body.program_id} is already in catalog {body.catalog_id}"
            ))
    errors += _check_sections(ctx.db, body)
    if errors:
        return bad_request(errors)

    with transaction(ctx.db):
        catalog_program = Repository(ctx.db, CatalogProgram).create(
            catalog_id=body.catalog_id,
            program_id=body.program_id,
            course_blocks=_blocks(body.course_blocks),
            specializations=_specializations(body.specializations),
            languages=_languages(body.languages),
        )
    return {201: to_out(catalog_program)}


@router.patch("/{id}", PATCH_CATALOG_PROGRAM, summary="Replace sections of a catalog program")
def patch_catalog_program(ctx: Context, data: ValidatedInput):
    catalog_program = Repository(ctx.db, CatalogProgram).find_unique(data.path.id)
    if catalog_program is None:
        return not_found("Catalog program not found")
    body = data.body
    errors = _check_sections(ctx.db, body)
    if errors:
        return bad_request(errors)

    with transaction(ctx.db):
        if body.course_blocks is not None:
            _replace_blocks(ctx.db, catalog_program.course_blocks, body.course_blocks)
        # old tracks go first so a re-listed track does not collide with itself
        if body.specializations is not None:
            catalog_program.specializations.clear()
            ctx.db.flush()
            catalog_program.specializations.extend(_specializations(body.specializations))
        if body.languages is not None:
            catalog_program.languages.clear()
            ctx.db.flush()
            catalog_program.languages.extend(_languages(body.languages))
        ctx.db.flush()
    return {200: to_out(catalog_program)}


@router.delete("/{id}", DELETE_CATALOG_PROGRAM, summary="Remove a program from a catalog")
def delete_catalog_program(ctx: Context, data: ValidatedInput):
    repo = Repository(ctx.db, CatalogProgram)
    catalog_program = repo.find_unique(data.path.id)
    if catalog_program is None:
        return not_found("Catalog program not found")
    with transaction(ctx.db):
        repo.delete(catalog_program)
    return {204: None}
