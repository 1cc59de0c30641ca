from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Integer, String, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from scheduling_api.db.base import Base


class Student(Base):
    __tablename__ = "students"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    # academic registration number issued by the institution
    ra: Mapped[str] = mapped_column(String(32), nullable=False, unique=True)
    name: Mapped[str] = mapped_column(String(256), nullable=False)
    program_id: Mapped[int | None] = mapped_column(ForeignKey("programs.id"), nullable=True)
    specialization_id: Mapped[int | None] = mapped_column(
        ForeignKey("specializations.id"), nullable=True
    )
    catalog_id: Mapped[int | None] = mapped_column(ForeignKey("catalogs.id"), nullable=True, index=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )

    curricula: Mapped[list["Curriculum"]] = relationship(  # noqa: F821
        back_populates="student", cascade="all, delete-orphan", order_by="Curriculum.id"
    )
