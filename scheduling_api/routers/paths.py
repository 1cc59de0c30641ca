"""
Canonical URLs of every resource, used for the `links` block of responses
and the navigation links of paginated lists.
"""
from typing import Any, Optional

from scheduling_api.core.pagination import list_path


def _collection(base: str, page: int = 1, page_size: int = 20, **filters: Any) -> str:
    return list_path(base, page, page_size, **filters)


def institute(institute_id: int) -> str:
    return f"/institutes/{institute_id}"


def course(course_id: int) -> str:
    return f"/courses/{course_id}"


def courses(**filters: Any) -> str:
    return _collection("/courses", **filters)


def professor(professor_id: int) -> str:
    return f"/professors/{professor_id}"


def professors(**filters: Any) -> str:
    return _collection("/professors", **filters)


def room(room_id: int) -> str:
    return f"/rooms/{room_id}"


def rooms(**filters: Any) -> str:
    return _collection("/rooms", **filters)


def study_period(study_period_id: int) -> str:
    return f"/study-periods/{study_period_id}"


def course_class(class_id: int) -> str:
    return f"/classes/{class_id}"


def classes(**filters: Any) -> str:
    return _collection("/classes", **filters)


def class_schedule(schedule_id: int) -> str:
    return f"/class-schedules/{schedule_id}"


def class_schedules(**filters: Any) -> str:
    return _collection("/class-schedules", **filters)


def program(program_id: int) -> str:
    return f"/programs/{program_id}"


def specialization(specialization_id: int) -> str:
    return f"/specializations/{specialization_id}"


def student(student_id: int) -> str:
    return f"/students/{student_id}"


def students(**filters: Any) -> str:
    return _collection("/students", **filters)


def curricula(student_id: int) -> str:
    return f"/students/{student_id}/curricula"


def curriculum(student_id: int, curriculum_id: int) -> str:
    return f"/students/{student_id}/curricula/{curriculum_id}"


def curriculum_course(student_id: int, curriculum_id: int, course_id: int) -> str:
    return f"/students/{student_id}/curricula/{curriculum_id}/courses/{course_id}"


def catalog(catalog_id: int) -> str:
    return f"/catalogs/{catalog_id}"


def catalog_program(catalog_program_id: int) -> str:
    return f"/catalog-programs/{catalog_program_id}"


def catalog_programs(catalog_id: int) -> str:
    return f"/catalog-programs?catalog_id={catalog_id}"


def language(language_id: int) -> str:
    return f"/languages/{language_id}"


def optional(builder, value: Optional[int]) -> Optional[str]:
    return builder(value) if value is not None else None
