from .institute import Institute
from .course import Course
from .professor import Professor
from .room import Room
from .study_period import StudyPeriod
from .course_class import CourseClass, class_professors
from .class_schedule import ClassSchedule, DayOfWeek
from .program import Program
from .specialization import Specialization
from .language import Language
from .catalog import (
    Catalog,
    CatalogLanguage,
    CatalogProgram,
    CatalogSpecialization,
    CourseBlock,
    CourseBlockType,
    CourseRequirement,
)
from .student import Student
from .curriculum import Curriculum, CurriculumCourse

__all__ = [
    "Institute",
    "Course",
    "Professor",
    "Room",
    "StudyPeriod",
    "CourseClass",
    "class_professors",
    "ClassSchedule",
    "DayOfWeek",
    "Program",
    "Specialization",
    "Language",
    "Catalog",
    "CatalogProgram",
    "CatalogSpecialization",
    "CatalogLanguage",
    "CourseBlock",
    "CourseBlockType",
    "CourseRequirement",
    "Student",
    "Curriculum",
    "CurriculumCourse",
]
