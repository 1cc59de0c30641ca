"""
Language schemas and endpoint contracts.

Languages are the foreign-language tracks a catalog program can offer.
"""
from typing import Optional

from pydantic import BaseModel, Field

from scheduling_api.core.contract import EndpointContract, IdPath, InputSchema, OutputBuilder, StrictModel


class LanguageLinks(BaseModel):
    self: str


class LanguageOut(BaseModel):
    id: int
    name: str
    catalog_languages_count: int
    links: LanguageLinks


class LanguageCreate(StrictModel):
    name: str = Field(min_length=1, max_length=128, examples=["English"])


class LanguagePatch(StrictModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=128)


LIST_LANGUAGES = EndpointContract(
    output=OutputBuilder().ok(list[LanguageOut], "List of languages retrieved successfully").build(),
)

GET_LANGUAGE = EndpointContract(
    input=InputSchema(path=IdPath),
    output=OutputBuilder().ok(LanguageOut, "Language retrieved successfully").not_found().build(),
)

CREATE_LANGUAGE = EndpointContract(
    input=InputSchema(body=LanguageCreate),
    output=OutputBuilder().created(LanguageOut, "Language created successfully").bad_request().build(),
)

PATCH_LANGUAGE = EndpointContract(
    input=InputSchema(path=IdPath, body=LanguagePatch),
    output=OutputBuilder().ok(LanguageOut, "Language updated successfully").bad_request().not_found().build(),
)

DELETE_LANGUAGE = EndpointContract(
    input=InputSchema(path=IdPath),
    output=OutputBuilder()
    .no_content("Language deleted successfully")
    .bad_request("Language still offered by catalog programs")
    .not_found()
    .build(),
)
