from sqlalchemy import ForeignKey, Integer
from sqlalchemy.orm import Mapped, mapped_column, relationship

from scheduling_api.db.base import Base


class Curriculum(Base):
    """An ordered list of courses a student plans to take. A student may keep several."""
    __tablename__ = "curricula"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    student_id: Mapped[int] = mapped_column(
        ForeignKey("students.id", ondelete="CASCADE"), nullable=False, index=True
    )

    student: Mapped["Student"] = relationship(back_populates="curricula")  # noqa: F821
    courses: Mapped[list["CurriculumCourse"]] = relationship(
        back_populates="curriculum",
        cascade="all, delete-orphan",
        lazy="selectin",
        order_by="CurriculumCourse.position",
    )


class CurriculumCourse(Base):
    __tablename__ = "curriculum_courses"

    curriculum_id: Mapped[int] = mapped_column(
        ForeignKey("curricula.id", ondelete="CASCADE"), primary_key=True
    )
    course_id: Mapped[int] = mapped_column(ForeignKey("courses.id"), primary_key=True)
    semester: Mapped[int | None] = mapped_column(Integer, nullable=True)
    # order in which the client listed or added the course
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    curriculum: Mapped["Curriculum"] = relationship(back_populates="courses")
    course: Mapped["Course"] = relationship(lazy="joined")  # noqa: F821
