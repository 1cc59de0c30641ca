"""
Study periods router.

GET    /study-periods
GET    /study-periods/{id}
POST   /study-periods
PATCH  /study-periods/{id}
DELETE /study-periods/{id}
"""
from scheduling_api.core.handler import Context
from scheduling_api.core.routing import ContractRouter
from scheduling_api.core.validation import ValidatedInput
from scheduling_api.db.base import transaction
from scheduling_api.db.repository import Repository
from scheduling_api.models import CourseClass, StudyPeriod
from scheduling_api.routers import paths
from scheduling_api.schemas.study_period import (
    CREATE_STUDY_PERIOD,
    DELETE_STUDY_PERIOD,
    GET_STUDY_PERIOD,
    LIST_STUDY_PERIODS,
    PATCH_STUDY_PERIOD,
    StudyPeriodLinks,
    StudyPeriodOut,
)
from scheduling_api.services.rules import (
    bad_request,
    changes,
    check_unique,
    not_found,
    reference_exists,
)

router = ContractRouter(prefix="/study-periods", tags=["study-periods"])


def to_out(period: StudyPeriod) -> StudyPeriodOut:
    return StudyPeriodOut(
        id=period.id,
        code=period.code,
        start_date=period.start_date,
        links=StudyPeriodLinks(
            self=paths.study_period(period.id),
            classes=paths.classes(study_period_id=period.id),
            class_schedules=paths.class_schedules(study_period_id=period.id),
        ),
    )


@router.get("", LIST_STUDY_PERIODS, summary="List study periods", public=True)
def list_study_periods(ctx: Context, data: ValidatedInput):
    periods = Repository(ctx.db, StudyPeriod).find_many(order_by=StudyPeriod.start_date.desc())
    return {200: [to_out(p) for p in periods]}


@router.get("/{id}", GET_STUDY_PERIOD, summary="Retrieve a study period", public=True)
def get_study_period(ctx: Context, data: ValidatedInput):
    period = Repository(ctx.db, StudyPeriod).find_unique(data.path.id)
    if period is None:
        return not_found("Study period not found")
    return {200: to_out(period)}


@router.post("", CREATE_STUDY_PERIOD, summary="Create a study period")
def create_study_period(ctx: Context, data: ValidatedInput):
    errors = check_unique(ctx.db, StudyPeriod, "code", data.body.code, label="study period")
    if errors:
        return bad_request(errors)
    with transaction(ctx.db):
        period = Repository(ctx.db, StudyPeriod).create(**data.body.model_dump())
    return {201: to_out(period)}


@router.patch("/{id}", PATCH_STUDY_PERIOD, summary="Update a study period")
def patch_study_period(ctx: Context, data: ValidatedInput):
    repo = Repository(ctx.db, StudyPeriod)
    period = repo.find_unique(data.path.id)
    if period is None:
        return not_found("Study period not found")
    values = changes(data.body)
    errors = check_unique(
        ctx.db, StudyPeriod, "code", values.get("code"), exclude_id=period.id, label="study period"
    )
    if errors:
        return bad_request(errors)
    with transaction(ctx.db):
        repo.update(period, **values)
    return {200: to_out(period)}


@router.delete("/{id}", DELETE_STUDY_PERIOD, summary="Delete a study period")
def delete_study_period(ctx: Context, data: ValidatedInput):
    repo = Repository(ctx.db, StudyPeriod)
    period = repo.find_unique(data.path.id)
    if period is None:
        return not_found("Study period not found")
    if Repository(ctx.db, CourseClass).count([CourseClass.study_period_id == period.id]):
        return bad_request([reference_exists(["path", "id"], "Study period still has classes")])
    with transaction(ctx.db):
        repo.delete(period)
    return {204: None}
