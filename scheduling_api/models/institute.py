from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from scheduling_api.db.base import Base


class Institute(Base):
    __tablename__ = "institutes"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    code: Mapped[str] = mapped_column(String(32), nullable=False, unique=True)

    courses: Mapped[list["Course"]] = relationship(back_populates="institute")  # noqa: F821
    programs: Mapped[list["Program"]] = relationship(back_populates="institute")  # noqa: F821
