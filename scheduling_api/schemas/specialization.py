"""
Specialization schemas and endpoint contracts.
"""
from typing import Optional

from pydantic import BaseModel, Field

from scheduling_api.core.contract import EndpointContract, IdPath, InputSchema, OutputBuilder, StrictModel


class SpecializationLinks(BaseModel):
    self: str


class SpecializationOut(BaseModel):
    id: int
    code: str
    name: str
    students_count: int
    links: SpecializationLinks


class SpecializationCreate(StrictModel):
    code: str = Field(min_length=1, max_length=32, examples=["AA"])
    name: str = Field(min_length=1, max_length=256, examples=["Computer Systems"])


class SpecializationPatch(StrictModel):
    code: Optional[str] = Field(default=None, min_length=1, max_length=32)
    name: Optional[str] = Field(default=None, min_length=1, max_length=256)


LIST_SPECIALIZATIONS = EndpointContract(
    output=OutputBuilder().ok(list[SpecializationOut], "All specializations").build(),
)

GET_SPECIALIZATION = EndpointContract(
    input=InputSchema(path=IdPath),
    output=OutputBuilder().ok(SpecializationOut, "Specialization retrieved successfully").not_found().build(),
)

CREATE_SPECIALIZATION = EndpointContract(
    input=InputSchema(body=SpecializationCreate),
    output=OutputBuilder().created(SpecializationOut, "Specialization created successfully").bad_request().build(),
)

PATCH_SPECIALIZATION = EndpointContract(
    input=InputSchema(path=IdPath, body=SpecializationPatch),
    output=OutputBuilder().ok(SpecializationOut, "Specialization updated successfully").bad_request().not_found().build(),
)

DELETE_SPECIALIZATION = EndpointContract(
    input=InputSchema(path=IdPath),
    output=OutputBuilder()
    .no_content("Specialization deleted successfully")
    .bad_request("Specialization still has students")
    .not_found()
    .build(),
)
