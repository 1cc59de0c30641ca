from sqlalchemy import ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from scheduling_api.db.base import Base


class Course(Base):
    __tablename__ = "courses"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    code: Mapped[str] = mapped_column(String(32), nullable=False, unique=True)
    name: Mapped[str] = mapped_column(String(256), nullable=False)
    credits: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    institute_id: Mapped[int] = mapped_column(
        ForeignKey("institutes.id"), nullable=False, index=True
    )

    institute: Mapped["Institute"] = relationship(back_populates="courses", lazy="joined")  # noqa: F821
    classes: Mapped[list["CourseClass"]] = relationship(back_populates="course")  # noqa: F821
