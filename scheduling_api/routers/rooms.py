"""
Rooms router.

GET    /rooms?page=&page_size=
GET    /rooms/{id}
POST   /rooms
PATCH  /rooms/{id}
DELETE /rooms/{id}
"""
from scheduling_api.core.handler import Context
from scheduling_api.core.pagination import PaginationQuery, paginate, skip_take
from scheduling_api.core.routing import ContractRouter
from scheduling_api.core.validation import ValidatedInput
from scheduling_api.db.base import transaction
from scheduling_api.db.repository import Repository
from scheduling_api.models import ClassSchedule, Room
from scheduling_api.routers import paths
from scheduling_api.schemas.room import (
    CREATE_ROOM,
    DELETE_ROOM,
    GET_ROOM,
    LIST_ROOMS,
    PATCH_ROOM,
    RoomLinks,
    RoomOut,
)
from scheduling_api.services.rules import (
    bad_request,
    changes,
    check_unique,
    not_found,
    reference_exists,
)

router = ContractRouter(prefix="/rooms", tags=["rooms"])


def to_out(room: Room) -> RoomOut:
    return RoomOut(
        id=room.id,
        code=room.code,
        links=RoomLinks(
            self=paths.room(room.id),
            class_schedules=paths.class_schedules(room_id=room.id),
        ),
    )


@router.get("", LIST_ROOMS, summary="List rooms (paginated)", public=True)
def list_rooms(ctx: Context, data: ValidatedInput):
    query: PaginationQuery = data.query
    repo = Repository(ctx.db, Room)
    skip, take = skip_take(query)
    items = repo.find_many(skip=skip, take=take, order_by=Room.code)
    return {200: paginate(
        [to_out(r) for r in items],
        repo.count(),
        query,
        lambda n: paths.rooms(page=n, page_size=query.page_size),
    )}


@router.get("/{id}", GET_ROOM, summary="Retrieve a room", public=True)
def get_room(ctx: Context, data: ValidatedInput):
    room = Repository(ctx.db, Room).find_unique(data.path.id)
    if room is None:
        return not_found("Room not found")
    return {200: to_out(room)}


@router.post("", CREATE_ROOM, summary="Create a room")
def create_room(ctx: Context, data: ValidatedInput):
    errors = check_unique(ctx.db, Room, "code", data.body.code, label="room")
    if errors:
        return bad_request(errors)
    with transaction(ctx.db):
        room = Repository(ctx.db, Room).create(code=data.body.code)
    return {201: to_out(room)}


@router.patch("/{id}", PATCH_ROOM, summary="Update a room")
def patch_room(ctx: Context, data: ValidatedInput):
    repo = Repository(ctx.db, Room)
    room = repo.find_unique(data.path.id)
    if room is None:
        return not_found("Room not found")
    values = changes(data.body)
    errors = check_unique(ctx.db, Room, "code", values.get("code"), exclude_id=room.id, label="room")
    if errors:
        return bad_request(errors)
    with transaction(ctx.db):
        repo.update(room, **values)
    return {200: to_out(room)}


@router.delete("/{id}", DELETE_ROOM, summary="Delete a room")
def delete_room(ctx: Context, data: ValidatedInput):
    repo = Repository(ctx.db, Room)
    room = repo.find_unique(data.path.id)
    if room is None:
        return not_found("Room not found")
    if Repository(ctx.db, ClassSchedule).count([ClassSchedule.room_id == room.id]):
        return bad_request([reference_exists(["path", "id"], "Room is still used by class schedules")])
    with transaction(ctx.db):
        repo.delete(room)
    return {204: None}
