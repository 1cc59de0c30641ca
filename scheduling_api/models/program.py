from sqlalchemy import ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from scheduling_api.db.base import Base


class Program(Base):
    __tablename__ = "programs"
    __table_args__ = (UniqueConstraint("institute_id", "code", name="uq_program_institute_code"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    code: Mapped[int] = mapped_column(Integer, nullable=False)
    name: Mapped[str] = mapped_column(String(256), nullable=False)
    institute_id: Mapped[int] = mapped_column(
        ForeignKey("institutes.id"), nullable=False, index=True
    )

    institute: Mapped["Institute"] = relationship(back_populates="programs", lazy="joined")  # noqa: F821
