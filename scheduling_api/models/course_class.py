from sqlalchemy import JSON, Column, ForeignKey, Integer, String, Table
from sqlalchemy.orm import Mapped, mapped_column, relationship

from scheduling_api.db.base import Base

class_professors = Table(
    "class_professors",
    Base.metadata,
    Column("class_id", ForeignKey("classes.id", ondelete="CASCADE"), primary_key=True),
    Column("professor_id", ForeignKey("professors.id", ondelete="CASCADE"), primary_key=True),
)


class CourseClass(Base):
    """One offering of a course in a study period (a "class")."""
    __tablename__ = "classes"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    code: Mapped[str] = mapped_column(String(32), nullable=False)
    # seats reserved per program / group, kept as a plain list of counts
    reservations: Mapped[list[int]] = mapped_column(JSON, nullable=False, default=list)
    course_id: Mapped[int] = mapped_column(ForeignKey("courses.id"), nullable=False, index=True)
    study_period_id: Mapped[int] = mapped_column(
        ForeignKey("study_periods.id"), nullable=False, index=True
    )

    course: Mapped["Course"] = relationship(back_populates="classes", lazy="joined")  # noqa: F821
    study_period: Mapped["StudyPeriod"] = relationship(lazy="joined")  # noqa: F821
    professors: Mapped[list["Professor"]] = relationship(  # noqa: F821
        secondary=class_professors,
        back_populates="classes",
        lazy="selectin",
        order_by="Professor.id",
    )
    schedules: Mapped[list["ClassSchedule"]] = relationship(  # noqa: F821
        back_populates="course_class", cascade="all, delete-orphan"
    )
