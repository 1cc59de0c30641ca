"""
Institute schemas and endpoint contracts.

GET    /institutes       → list[InstituteOut]
GET    /institutes/{id}  → InstituteOut
POST   /institutes       → InstituteCreate → InstituteOut
PATCH  /institutes/{id}  → InstitutePatch  → InstituteOut
DELETE /institutes/{id}  → 204
"""
from typing import Optional

from pydantic import BaseModel, Field

from scheduling_api.core.contract import EndpointContract, IdPath, InputSchema, OutputBuilder, StrictModel


class InstituteLinks(BaseModel):
    self: str
    courses: str
    classes: str


class InstituteOut(BaseModel):
    id: int
    code: str
    links: InstituteLinks


class InstituteCreate(StrictModel):
    code: str = Field(min_length=1, max_length=32, examples=["IC"])


class InstitutePatch(StrictModel):
    code: Optional[str] = Field(default=None, min_length=1, max_length=32)


LIST_INSTITUTES = EndpointContract(
    output=OutputBuilder().ok(list[InstituteOut], "All institutes").build(),
)

GET_INSTITUTE = EndpointContract(
    input=InputSchema(path=IdPath),
    output=OutputBuilder()
    .ok(InstituteOut, "Institute retrieved successfully")
    .not_found()
    .build(),
)

CREATE_INSTITUTE = EndpointContract(
    input=InputSchema(body=InstituteCreate),
    output=OutputBuilder()
    .created(InstituteOut, "Institute created successfully")
    .bad_request()
    .build(),
)

PATCH_INSTITUTE = EndpointContract(
    input=InputSchema(path=IdPath, body=InstitutePatch),
    output=OutputBuilder()
    .ok(InstituteOut, "Institute updated successfully")
    .bad_request()
    .not_found()
    .build(),
)

DELETE_INSTITUTE = EndpointContract(
    input=InputSchema(path=IdPath),
    output=OutputBuilder()
    .no_content("Institute deleted successfully")
    .bad_request("Institute still referenced by courses or programs")
    .not_found()
    .build(),
)
