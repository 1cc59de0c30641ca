"""
Study period schemas and endpoint contracts.

A study period is an academic term ("2025S1"); classes are offered in one.
"""
from datetime import date
from typing import Optional

from pydantic import BaseModel, Field

from scheduling_api.core.contract import EndpointContract, IdPath, InputSchema, OutputBuilder, StrictModel


class StudyPeriodLinks(BaseModel):
    self: str
    classes: str
    class_schedules: str


class StudyPeriodOut(BaseModel):
    id: int
    code: str
    start_date: date
    links: StudyPeriodLinks


class StudyPeriodCreate(StrictModel):
    code: str = Field(min_length=1, max_length=32, examples=["2025S1"])
    start_date: date = Field(examples=["2025-03-01"])


class StudyPeriodPatch(StrictModel):
    code: Optional[str] = Field(default=None, min_length=1, max_length=32)
    start_date: Optional[date] = None


LIST_STUDY_PERIODS = EndpointContract(
    output=OutputBuilder().ok(list[StudyPeriodOut], "All study periods, newest first").build(),
)

GET_STUDY_PERIOD = EndpointContract(
    input=InputSchema(path=IdPath),
    output=OutputBuilder().ok(StudyPeriodOut, "Study period retrieved successfully").not_found().build(),
)

CREATE_STUDY_PERIOD = EndpointContract(
    input=InputSchema(body=StudyPeriodCreate),
    output=OutputBuilder().created(StudyPeriodOut, "Study period created successfully").bad_request().build(),
)

PATCH_STUDY_PERIOD = EndpointContract(
    input=InputSchema(path=IdPath, body=StudyPeriodPatch),
    output=OutputBuilder().ok(StudyPeriodOut, "Study period updated successfully").bad_request().not_found().build(),
)

DELETE_STUDY_PERIOD = EndpointContract(
    input=InputSchema(path=IdPath),
    output=OutputBuilder()
    .no_content("Study period deleted successfully")
    .bad_request("Study period still has classes")
    .not_found()
    .build(),
)
