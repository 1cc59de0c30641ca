from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from scheduling_api.db.base import Base


class Professor(Base):
    __tablename__ = "professors"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    name: Mapped[str] = mapped_column(String(256), nullable=False, index=True)

    classes: Mapped[list["CourseClass"]] = relationship(  # noqa: F821
        secondary="class_professors", back_populates="professors"
    )
