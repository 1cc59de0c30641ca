"""
Catalog program schemas and endpoint contracts.

A catalog program lists what one program requires in one catalog year:
base course blocks plus optional specialization and language tracks with
their own blocks. Responses group each set of blocks into the mandatory
courses and the elective blocks (credits to earn out of a course list).

PATCH replaces every section present in the body and leaves the others as
they are.
"""
from typing import Optional

from pydantic import BaseModel, Field

from scheduling_api.core.contract import EndpointContract, IdPath, InputSchema, OutputBuilder, StrictModel
from scheduling_api.models.catalog import CourseBlockType


class RequirementOut(BaseModel):
    id: int
    course_id: int
    course_code: str
    course_name: str
    link: str


class ElectiveBlockOut(BaseModel):
    credits: int
    courses: list[RequirementOut]


class BlockSetOut(BaseModel):
    mandatory: list[RequirementOut]
    electives: list[ElectiveBlockOut]


class CatalogSpecializationOut(BaseModel):
    specialization_id: int
    code: str
    name: str
    blocks: BlockSetOut


class CatalogLanguageOut(BaseModel):
    language_id: int
    name: str
    blocks: BlockSetOut


class CatalogProgramLinks(BaseModel):
    self: str
    catalog: str
    program: str


class CatalogProgramOut(BaseModel):
    id: int
    catalog_id: int
    program_id: int
    catalog_year: int
    program_code: int
    program_name: str
    base: BlockSetOut
    specializations: list[CatalogSpecializationOut]
    languages: list[CatalogLanguageOut]
    links: CatalogProgramLinks


class CourseBlockIn(StrictModel):
    type: CourseBlockType
    credits: Optional[int] = Field(default=None, ge=0)
    course_ids: list[int] = Field(default_factory=list)


class CatalogSpecializationIn(StrictModel):
    specialization_id: int
    course_blocks: list[CourseBlockIn] = Field(default_factory=list)


class CatalogLanguageIn(StrictModel):
    language_id: int
    course_blocks: list[CourseBlockIn] = Field(default_factory=list)


class CatalogProgramCreate(StrictModel):
    catalog_id: int
    program_id: int
    course_blocks: list[CourseBlockIn] = Field(default_factory=list)
    specializations: list[CatalogSpecializationIn] = Field(default_factory=list)
    languages: list[CatalogLanguageIn] = Field(default_factory=list)


class CatalogProgramPatch(StrictModel):
    course_blocks: Optional[list[CourseBlockIn]] = None
    specializations: Optional[list[CatalogSpecializationIn]] = None
    languages: Optional[list[CatalogLanguageIn]] = None


class CatalogProgramListQuery(StrictModel):
    catalog_id: Optional[int] = None
    program_id: Optional[int] = None


LIST_CATALOG_PROGRAMS = EndpointContract(
    input=InputSchema(query=CatalogProgramListQuery),
    output=OutputBuilder()
    .ok(list[CatalogProgramOut], "List of catalog programs retrieved successfully")
    .build(),
)

GET_CATALOG_PROGRAM = EndpointContract(
    input=InputSchema(path=IdPath),
    output=OutputBuilder()
    .ok(CatalogProgramOut, "Catalog program retrieved successfully")
    .not_found()
    .build(),
)

CREATE_CATALOG_PROGRAM = EndpointContract(
    input=InputSchema(body=CatalogProgramCreate),
    output=OutputBuilder()
    .created(CatalogProgramOut, "Catalog program created successfully")
    .bad_request()
    .build(),
)

PATCH_CATALOG_PROGRAM = EndpointContract(
    input=InputSchema(path=IdPath, body=CatalogProgramPatch),
    output=OutputBuilder()
    .ok(CatalogProgramOut, "Catalog program updated successfully")
    .bad_request()
    .not_found()
    .build(),
)

DELETE_CATALOG_PROGRAM = EndpointContract(
    input=InputSchema(path=IdPath),
    output=OutputBuilder()
    .no_content("Catalog program deleted successfully")
    .not_found()
    .build(),
)
