"""
Class schedules router.

GET    /class-schedules?class_id=&room_id=&study_period_id=&day_of_week=&page=&page_size=
GET    /class-schedules/{id}
POST   /class-schedules
PATCH  /class-schedules/{id}
DELETE /class-schedules/{id}
"""
from datetime import time
from functools import partial

from sqlalchemy import case

from scheduling_api.core.handler import Context
from scheduling_api.core.pagination import paginate, skip_take
from scheduling_api.core.routing import ContractRouter
from scheduling_api.core.validation import ErrorCode, FieldError, ValidatedInput
from scheduling_api.db.base import transaction
from scheduling_api.db.repository import Repository
from scheduling_api.models import ClassSchedule, CourseClass, DayOfWeek, Room
from scheduling_api.routers import paths
from scheduling_api.schemas.class_schedule import (
    CREATE_CLASS_SCHEDULE,
    DELETE_CLASS_SCHEDULE,
    GET_CLASS_SCHEDULE,
    LIST_CLASS_SCHEDULES,
    PATCH_CLASS_SCHEDULE,
    ClassScheduleLinks,
    ClassScheduleListQuery,
    ClassScheduleOut,
)
from scheduling_api.services.rules import bad_request, changes, check_reference, not_found

router = ContractRouter(prefix="/class-schedules", tags=["class-schedules"])

# Monday first, in calendar order rather than by the stored day name
WEEKDAY_ORDER = case(
    {day: index for index, day in enumerate(DayOfWeek)}, value=ClassSchedule.day_of_week
)


def to_out(schedule: ClassSchedule) -> ClassScheduleOut:
    course_class = schedule.course_class
    return ClassScheduleOut(
        id=schedule.id,
        day_of_week=schedule.day_of_week,
        start=schedule.start,
        end=schedule.end,
        class_id=course_class.id,
        class_code=course_class.code,
        course_code=course_class.course.code,
        room_id=schedule.room_id,
        room_code=schedule.room.code,
        study_period_id=course_class.study_period_id,
        links=ClassScheduleLinks(
            self=paths.class_schedule(schedule.id),
            course_class=paths.course_class(course_class.id),
            room=paths.room(schedule.room_id),
        ),
    )


def _check_window(start: time, end: time) -> list[FieldError]:
    if start < end:
        return []
    return [FieldError(
        code=ErrorCode.INVALID_VALUE,
        path=["body", "end"],
        message="end must be later than start",
    )]


def _check(ctx: Context, values: dict) -> list[FieldError]:
    return (
        check_reference(ctx.db, CourseClass, "class_id", values.get("class_id"), "Class")
        + check_reference(ctx.db, Room, "room_id", values.get("room_id"), "Room")
    )


@router.get("", LIST_CLASS_SCHEDULES, summary="List class schedules (paginated)", public=True)
def list_class_schedules(ctx: Context, data: ValidatedInput):
    query: ClassScheduleListQuery = data.query
    criteria = []
    if query.class_id is not None:
        criteria.append(ClassSchedule.class_id == query.class_id)
    if query.room_id is not None:
        criteria.append(ClassSchedule.room_id == query.room_id)
    if query.study_period_id is not None:
        criteria.append(ClassSchedule.course_class.has(CourseClass.study_period_id == query.study_period_id))
    if query.day_of_week is not None:
        criteria.append(ClassSchedule.day_of_week == query.day_of_week)

    repo = Repository(ctx.db, ClassSchedule)
    skip, take = skip_take(query)
    items = repo.find_many(
        criteria,
        skip=skip,
        take=take,
        order_by=(WEEKDAY_ORDER, ClassSchedule.start, ClassSchedule.id),
    )
    link = partial(
        paths.class_schedules,
        page_size=query.page_size,
        class_id=query.class_id,
        room_id=query.room_id,
        study_period_id=query.study_period_id,
        day_of_week=query.day_of_week.value if query.day_of_week else None,
    )
    return {200: paginate([to_out(s) for s in items], repo.count(criteria), query, lambda n: link(page=n))}


@router.get("/{id}", GET_CLASS_SCHEDULE, summary="Retrieve a class schedule", public=True)
def get_class_schedule(ctx: Context, data: ValidatedInput):
    schedule = Repository(ctx.db, ClassSchedule).find_unique(data.path.id)
    if schedule is None:
        return not_found("Class schedule not found")
    return {200: to_out(schedule)}


@router.post("", CREATE_CLASS_SCHEDULE, summary="Create a class schedule")
def create_class_schedule(ctx: Context, data: ValidatedInput):
    body = data.body
    errors = _check_window(body.start, body.end) + _check(ctx, body.model_dump())
    if errors:
        return bad_request(errors)
    with transaction(ctx.db):
        schedule = Repository(ctx.db, ClassSchedule).create(**body.model_dump())
    return {201: to_out(schedule)}


@router.patch("/{id}", PATCH_CLASS_SCHEDULE, summary="Update a class schedule")
def patch_class_schedule(ctx: Context, data: ValidatedInput):
    repo = Repository(ctx.db, ClassSchedule)
    schedule = repo.find_unique(data.path.id)
    if schedule is None:
        return not_found("Class schedule not found")
    values = changes(data.body)
    errors = (
        _check_window(values.get("start", schedule.start), values.get("end", schedule.end))
        + _check(ctx, values)
    )
    if errors:
        return bad_request(errors)
    with transaction(ctx.db):
        repo.update(schedule, **values)
    return {200: to_out(schedule)}


@router.delete("/{id}", DELETE_CLASS_SCHEDULE, summary="Delete a class schedule")
def delete_class_schedule(ctx: Context, data: ValidatedInput):
    repo = Repository(ctx.db, ClassSchedule)
    schedule = repo.find_unique(data.path.id)
    if schedule is None:
        return not_found("Class schedule not found")
    with transaction(ctx.db):
        repo.delete(schedule)
    return {204: None}
