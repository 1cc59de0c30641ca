"""
Room schemas and endpoint contracts.
"""
from typing import Optional

from pydantic import BaseModel, Field

from scheduling_api.core.contract import EndpointContract, IdPath, InputSchema, OutputBuilder, StrictModel
from scheduling_api.core.pagination import Page, PaginationQuery


class RoomLinks(BaseModel):
    self: str
    class_schedules: str


class RoomOut(BaseModel):
    id: int
    code: str
    links: RoomLinks


class RoomCreate(StrictModel):
    code: str = Field(min_length=1, max_length=32, examples=["CB01"])


class RoomPatch(StrictModel):
    code: Optional[str] = Field(default=None, min_length=1, max_length=32)


LIST_ROOMS = EndpointContract(
    input=InputSchema(query=PaginationQuery),
    output=OutputBuilder().ok(Page[RoomOut], "Page of rooms").build(),
)

GET_ROOM = EndpointContract(
    input=InputSchema(path=IdPath),
    output=OutputBuilder().ok(RoomOut, "Room retrieved successfully").not_found().build(),
)

CREATE_ROOM = EndpointContract(
    input=InputSchema(body=RoomCreate),
    output=OutputBuilder().created(RoomOut, "Room created successfully").bad_request().build(),
)

PATCH_ROOM = EndpointContract(
    input=InputSchema(path=IdPath, body=RoomPatch),
    output=OutputBuilder().ok(RoomOut, "Room updated successfully").bad_request().not_found().build(),
)

DELETE_ROOM = EndpointContract(
    input=InputSchema(path=IdPath),
    output=OutputBuilder()
    .no_content("Room deleted successfully")
    .bad_request("Room still used by class schedules")
    .not_found()
    .build(),
)
