"""
Class schedule schemas and endpoint contracts.

A schedule is one weekly meeting of a class: a day, a time window and a room.
"""
from datetime import time
from typing import Optional

from pydantic import BaseModel, Field

from scheduling_api.core.contract import EndpointContract, IdPath, InputSchema, OutputBuilder, StrictModel
from scheduling_api.core.pagination import Page, PaginationQuery
from scheduling_api.models.class_schedule import DayOfWeek


class ClassScheduleLinks(BaseModel):
    self: str
    course_class: str
    room: str


class ClassScheduleOut(BaseModel):
    id: int
    day_of_week: DayOfWeek
    start: time
    end: time
    class_id: int
    class_code: str
    course_code: str
    room_id: int
    room_code: str
    study_period_id: int
    links: ClassScheduleLinks


class ClassScheduleCreate(StrictModel):
    day_of_week: DayOfWeek
    start: time = Field(examples=["08:00:00"])
    end: time = Field(examples=["10:00:00"])
    class_id: int
    room_id: int


class ClassSchedulePatch(StrictModel):
    day_of_week: Optional[DayOfWeek] = None
    start: Optional[time] = None
    end: Optional[time] = None
    class_id: Optional[int] = None
    room_id: Optional[int] = None


class ClassScheduleListQuery(PaginationQuery):
    class_id: Optional[int] = None
    room_id: Optional[int] = None
    study_period_id: Optional[int] = None
    day_of_week: Optional[DayOfWeek] = None


LIST_CLASS_SCHEDULES = EndpointContract(
    input=InputSchema(query=ClassScheduleListQuery),
    output=OutputBuilder().ok(Page[ClassScheduleOut], "Page of class schedules").build(),
)

GET_CLASS_SCHEDULE = EndpointContract(
    input=InputSchema(path=IdPath),
    output=OutputBuilder().ok(ClassScheduleOut, "Class schedule retrieved successfully").not_found().build(),
)

CREATE_CLASS_SCHEDULE = EndpointContract(
    input=InputSchema(body=ClassScheduleCreate),
    output=OutputBuilder()
    .created(ClassScheduleOut, "Class schedule created successfully")
    .bad_request()
    .build(),
)

PATCH_CLASS_SCHEDULE = EndpointContract(
    input=InputSchema(path=IdPath, body=ClassSchedulePatch),
    output=OutputBuilder()
    .ok(ClassScheduleOut, "Class schedule updated successfully")
    .bad_request()
    .not_found()
    .build(),
)

DELETE_CLASS_SCHEDULE = EndpointContract(
    input=InputSchema(path=IdPath),
    output=OutputBuilder().no_content("Class schedule deleted successfully").not_found().build(),
)
