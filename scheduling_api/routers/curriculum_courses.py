"""
Curriculum courses router: add, reschedule or drop a single course of a
student's curriculum without resending the whole list.
"""
from scheduling_api.core.handler import Context
from scheduling_api.core.routing import ContractRouter
from scheduling_api.core.validation import ValidatedInput
from scheduling_api.db.base import transaction
from scheduling_api.db.repository import Repository
from scheduling_api.models import Course, CurriculumCourse
from scheduling_api.routers.curricula import course_out, find_curriculum
from scheduling_api.schemas.curriculum import (
    ADD_CURRICULUM_COURSE,
    PATCH_CURRICULUM_COURSE,
    REMOVE_CURRICULUM_COURSE,
)
from scheduling_api.services.rules import (
    already_exists,
    bad_request,
    changes,
    check_reference,
    not_found,
)

router = ContractRouter(
    prefix="/students/{student_id}/curricula/{curriculum_id}/courses", tags=["curricula"]
)


def _entry(curriculum, course_id: int):
    return next((item for item in curriculum.courses if item.course_id == course_id), None)


@router.post("", ADD_CURRICULUM_COURSE, summary="Add a course to a curriculum")
def add_curriculum_course(ctx: Context, data: ValidatedInput):
    """The course goes to the end of the list."""
    curriculum = find_curriculum(ctx, data.path.student_id, data.path.curriculum_id)
    if curriculum is None:
        return not_found("Curriculum not found for this student")
    course_id = data.body.course_id
    errors = check_reference(ctx.db, Course, "course_id", course_id, "Course")
    if not errors and _entry(curriculum, course_id) is not None:
        errors.append(already_exists(["body", "course_id"], f"Course {course_id} is already in this curriculum"))
    if errors:
        return bad_request(errors)

    position = max((item.position for item in curriculum.courses), default=-1) + 1
    with transaction(ctx.db):
        item = CurriculumCourse(course_id=course_id, semester=data.body.semester, position=position)
        curriculum.courses.append(item)
        ctx.db.flush()
    return {201: course_out(item)}


@router.patch("/{course_id}", PATCH_CURRICULUM_COURSE, summary="Change the semester of a curriculum course")
def patch_curriculum_course(ctx: Context, data: ValidatedInput):
    curriculum = find_curriculum(ctx, data.path.student_id, data.path.curriculum_id)
    if curriculum is None:
        return not_found("Curriculum not found for this student")
    item = _entry(curriculum, data.path.course_id)
    if item is None:
        return not_found("Course not found in curriculum")
    with transaction(ctx.db):
        Repository(ctx.db, CurriculumCourse).update(item, **changes(data.body))
    return {200: course_out(item)}


@router.delete("/{course_id}", REMOVE_CURRICULUM_COURSE, summary="Remove a course from a curriculum")
def remove_curriculum_course(ctx: Context, data: ValidatedInput):
    curriculum = find_curriculum(ctx, data.path.student_id, data.path.curriculum_id)
    if curriculum is None:
        return not_found("Curriculum not found for this student")
    item = _entry(curriculum, data.path.course_id)
    if item is None:
        return not_found("Course not found in curriculum")
    with transaction(ctx.db):
        curriculum.courses.remove(item)
        ctx.db.flush()
    return {204: None}
