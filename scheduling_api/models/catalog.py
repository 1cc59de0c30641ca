"""
Catalogs: the course requirements of each program for one catalog year.

A catalog program owns course blocks directly (its base requirements) and
through its specialization and language tracks. Each course block belongs
to exactly one of those three owners.
"""
import enum
from typing import Optional

from sqlalchemy import Enum, ForeignKey, Integer, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from scheduling_api.db.base import Base


class CourseBlockType(str, enum.Enum):
    MANDATORY = "MANDATORY"
    ELECTIVE = "ELECTIVE"


class Catalog(Base):
    __tablename__ = "catalogs"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    year: Mapped[int] = mapped_column(Integer, nullable=False, unique=True)

    programs: Mapped[list["CatalogProgram"]] = relationship(
        back_populates="catalog", order_by="CatalogProgram.program_id"
    )


class CatalogProgram(Base):
    __tablename__ = "catalog_programs"
    __table_args__ = (UniqueConstraint("catalog_id", "program_id", name="uq_catalog_program"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    catalog_id: Mapped[int] = mapped_column(ForeignKey("catalogs.id"), nullable=False, index=True)
    program_id: Mapped[int] = mapped_column(ForeignKey("programs.id"), nullable=False, index=True)

    catalog: Mapped["Catalog"] = relationship(back_populates="programs", lazy="joined")
    program: Mapped["Program"] = relationship(lazy="joined")  # noqa: F821
    course_blocks: Mapped[list["CourseBlock"]] = relationship(
        cascade="all", lazy="selectin", order_by="CourseBlock.id"
    )
    specializations: Mapped[list["CatalogSpecialization"]] = relationship(
        back_populates="catalog_program",
        cascade="all, delete-orphan",
        lazy="selectin",
        order_by="CatalogSpecialization.specialization_id",
    )
    languages: Mapped[list["CatalogLanguage"]] = relationship(
        back_populates="catalog_program",
        cascade="all, delete-orphan",
        lazy="selectin",
        order_by="CatalogLanguage.language_id",
    )


class CatalogSpecialization(Base):
    __tablename__ = "catalog_specializations"
    __table_args__ = (
        UniqueConstraint("catalog_program_id", "specialization_id", name="uq_catalog_specialization"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    catalog_program_id: Mapped[int] = mapped_column(
        ForeignKey("catalog_programs.id", ondelete="CASCADE"), nullable=False, index=True
    )
    specialization_id: Mapped[int] = mapped_column(ForeignKey("specializations.id"), nullable=False)

    catalog_program: Mapped["CatalogProgram"] = relationship(back_populates="specializations")
    specialization: Mapped["Specialization"] = relationship(lazy="joined")  # noqa: F821
    course_blocks: Mapped[list["CourseBlock"]] = relationship(
        cascade="all", lazy="selectin", order_by="CourseBlock.id"
    )


class CatalogLanguage(Base):
    __tablename__ = "catalog_languages"
    __table_args__ = (UniqueConstraint("catalog_program_id", "language_id", name="uq_catalog_language"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    catalog_program_id: Mapped[int] = mapped_column(
        ForeignKey("catalog_programs.id", ondelete="CASCADE"), nullable=False, index=True
    )
    language_id: Mapped[int] = mapped_column(ForeignKey("languages.id"), nullable=False, index=True)

    catalog_program: Mapped["CatalogProgram"] = relationship(back_populates="languages")
    language: Mapped["Language"] = relationship(lazy="joined")  # noqa: F821
    course_blocks: Mapped[list["CourseBlock"]] = relationship(
        cascade="all", lazy="selectin", order_by="CourseBlock.id"
    )


class CourseBlock(Base):
    """A group of required courses; elective blocks also carry a credit count."""
    __tablename__ = "course_blocks"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    type: Mapped[CourseBlockType] = mapped_column(
        Enum(CourseBlockType, name="course_block_type_enum"), nullable=False
    )
    credits: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    catalog_program_id: Mapped[Optional[int]] = mapped_column(
        ForeignKey("catalog_programs.id", ondelete="CASCADE"), nullable=True, index=True
    )
    catalog_specialization_id: Mapped[Optional[int]] = mapped_column(
        ForeignKey("catalog_specializations.id", ondelete="CASCADE"), nullable=True, index=True
    )
    catalog_language_id: Mapped[Optional[int]] = mapped_column(
        ForeignKey("catalog_languages.id", ondelete="CASCADE"), nullable=True, index=True
    )

    requirements: Mapped[list["CourseRequirement"]] = relationship(
        back_populates="course_block",
        cascade="all, delete-orphan",
        lazy="selectin",
        order_by="CourseRequirement.id",
    )


class CourseRequirement(Base):
    __tablename__ = "course_requirements"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    course_block_id: Mapped[int] = mapped_column(
        ForeignKey("course_blocks.id", ondelete="CASCADE"), nullable=False, index=True
    )
    course_id: Mapped[int] = mapped_column(ForeignKey("courses.id"), nullable=False, index=True)

    course_block: Mapped["CourseBlock"] = relationship(back_populates="requirements")
    course: Mapped["Course"] = relationship(lazy="joined")  # noqa: F821
