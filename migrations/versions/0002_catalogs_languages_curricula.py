"""catalogs, languages and several curricula per student

Revision ID: 0002
Revises: 0001
Create Date: 2026-10-19 12:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "0002"
down_revision: Union[str, None] = "0001"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

BLOCK_TYPES = ("MANDATORY", "ELECTIVE")


def upgrade() -> None:
    # --- languages ---
    op.create_table(
        "languages",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(128), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_languages_id", "languages", ["id"])

    # --- catalogs ---
    op.create_table(
        "catalogs",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("year", sa.Integer(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("year"),
    )
    op.create_index("ix_catalogs_id", "catalogs", ["id"])

    op.create_table(
        "catalog_programs",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("catalog_id", sa.Integer(), sa.ForeignKey("catalogs.id"), nullable=False),
        sa.Column("program_id", sa.Integer(), sa.ForeignKey("programs.id"), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("catalog_id", "program_id", name="uq_catalog_program"),
    )
    op.create_index("ix_catalog_programs_id", "catalog_programs", ["id"])
    op.create_index("ix_catalog_programs_catalog_id", "catalog_programs", ["catalog_id"])
    op.create_index("ix_catalog_programs_program_id", "catalog_programs", ["program_id"])

    op.create_table(
        "catalog_specializations",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column(
            "catalog_program_id",
            sa.Integer(),
            sa.ForeignKey("catalog_programs.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("specialization_id", sa.Integer(), sa.ForeignKey("specializations.id"), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("catalog_program_id", "specialization_id", name="uq_catalog_specialization"),
    )
    op.create_index("ix_catalog_specializations_id", "catalog_specializations", ["id"])
    op.create_index(
        "ix_catalog_specializations_catalog_program_id", "catalog_specializations", ["catalog_program_id"]
    )

    op.create_table(
        "catalog_languages",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column(
            "catalog_program_id",
            sa.Integer(),
            sa.ForeignKey("catalog_programs.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("language_id", sa.Integer(), sa.ForeignKey("languages.id"), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("catalog_program_id", "language_id", name="uq_catalog_language"),
    )
    op.create_index("ix_catalog_languages_id", "catalog_languages", ["id"])
    op.create_index("ix_catalog_languages_catalog_program_id", "catalog_languages", ["catalog_program_id"])
    op.create_index("ix_catalog_languages_language_id", "catalog_languages", ["language_id"])

    op.create_table(
        "course_blocks",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("type", sa.Enum(*BLOCK_TYPES, name="course_block_type_enum"), nullable=False),
        sa.Column("credits", sa.Integer(), nullable=True),
        sa.Column(
            "catalog_program_id",
            sa.Integer(),
            sa.ForeignKey("catalog_programs.id", ondelete="CASCADE"),
            nullable=True,
        ),
        sa.Column(
            "catalog_specialization_id",
            sa.Integer(),
            sa.ForeignKey("catalog_specializations.id", ondelete="CASCADE"),
            nullable=True,
        ),
        sa.Column(
            "catalog_language_id",
            sa.Integer(),
            sa.ForeignKey("catalog_languages.id", ondelete="CASCADE"),
            nullable=True,
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_course_blocks_id", "course_blocks", ["id"])
    op.create_index("ix_course_blocks_catalog_program_id", "course_blocks", ["catalog_program_id"])
    op.create_index("ix_course_blocks_catalog_specialization_id", "course_blocks", ["catalog_specialization_id"])
    op.create_index("ix_course_blocks_catalog_language_id", "course_blocks", ["catalog_language_id"])

    op.create_table(
        "course_requirements",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column(
            "course_block_id",
            sa.Integer(),
            sa.ForeignKey("course_blocks.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("course_id", sa.Integer(), sa.ForeignKey("courses.id"), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_course_requirements_id", "course_requirements", ["id"])
    op.create_index("ix_course_requirements_course_block_id", "course_requirements", ["course_block_id"])
    op.create_index("ix_course_requirements_course_id", "course_requirements", ["course_id"])

    # --- students ---
    op.add_column("students", sa.Column("catalog_id", sa.Integer(), nullable=True))
    op.create_foreign_key("fk_students_catalog_id", "students", "catalogs", ["catalog_id"], ["id"])
    op.create_index("ix_students_catalog_id", "students", ["catalog_id"])

    # --- curricula: several per student, courses keep their listed order ---
    op.drop_constraint("curricula_student_id_key", "curricula", type_="unique")
    op.create_index("ix_curricula_student_id", "curricula", ["student_id"])
    op.add_column(
        "curriculum_courses",
        sa.Column("position", sa.Integer(), nullable=False, server_default="0"),
    )


def downgrade() -> None:
    op.drop_column("curriculum_courses", "position")
    op.drop_index("ix_curricula_student_id", table_name="curricula")
    op.create_unique_constraint("curricula_student_id_key", "curricula", ["student_id"])

    op.drop_index("ix_students_catalog_id", table_name="students")
    op.drop_constraint("fk_students_catalog_id", "students", type_="foreignkey")
    op.drop_column("students", "catalog_id")

    op.drop_table("course_requirements")
    op.drop_table("course_blocks")
    op.drop_table("catalog_languages")
    op.drop_table("catalog_specializations")
    op.drop_table("catalog_programs")
    op.drop_table("catalogs")
    op.drop_table("languages")
    sa.Enum(name="course_block_type_enum").drop(op.get_bind(), checkfirst=True)
