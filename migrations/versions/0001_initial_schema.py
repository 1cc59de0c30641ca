"""initial schema

Revision ID: 0001
Revises:
Create Date: 2026-10-19 00:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "0001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

DAYS = ("MONDAY", "TUESDAY", "WEDNESDAY", "THURSDAY", "FRIDAY", "SATURDAY", "SUNDAY")


def upgrade() -> None:
    # --- institutes ---
    op.create_table(
        "institutes",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("code", sa.String(32), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("code"),
    )
    op.create_index("ix_institutes_id", "institutes", ["id"])

    # --- courses ---
    op.create_table(
        "courses",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("code", sa.String(32), nullable=False),
        sa.Column("name", sa.String(256), nullable=False),
        sa.Column("credits", sa.Integer(), nullable=False),
        sa.Column("institute_id", sa.Integer(), sa.ForeignKey("institutes.id"), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("code"),
    )
    op.create_index("ix_courses_id", "courses", ["id"])
    op.create_index("ix_courses_institute_id", "courses", ["institute_id"])

    # --- professors ---
    op.create_table(
        "professors",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(256), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_professors_id", "professors", ["id"])
    op.create_index("ix_professors_name", "professors", ["name"])

    # --- rooms ---
    op.create_table(
        "rooms",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("code", sa.String(32), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("code"),
    )
    op.create_index("ix_rooms_id", "rooms", ["id"])

    # --- study_periods ---
    op.create_table(
        "study_periods",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("code", sa.String(32), nullable=False),
        sa.Column("start_date", sa.Date(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("code"),
    )
    op.create_index("ix_study_periods_id", "study_periods", ["id"])

    # --- classes ---
    op.create_table(
        "classes",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("code", sa.String(32), nullable=False),
        sa.Column("reservations", sa.JSON(), nullable=False),
        sa.Column("course_id", sa.Integer(), sa.ForeignKey("courses.id"), nullable=False),
        sa.Column("study_period_id", sa.Integer(), sa.ForeignKey("study_periods.id"), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_classes_id", "classes", ["id"])
    op.create_index("ix_classes_course_id", "classes", ["course_id"])
    op.create_index("ix_classes_study_period_id", "classes", ["study_period_id"])

    op.create_table(
        "class_professors",
        sa.Column("class_id", sa.Integer(), sa.ForeignKey("classes.id", ondelete="CASCADE"), nullable=False),
        sa.Column(
            "professor_id", sa.Integer(), sa.ForeignKey("professors.id", ondelete="CASCADE"), nullable=False
        ),
        sa.PrimaryKeyConstraint("class_id", "professor_id"),
    )

    # --- class_schedules ---
    op.create_table(
        "class_schedules",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("day_of_week", sa.Enum(*DAYS, name="day_of_week_enum"), nullable=False),
        sa.Column("start", sa.Time(), nullable=False),
        sa.Column("end", sa.Time(), nullable=False),
        sa.Column("class_id", sa.Integer(), sa.ForeignKey("classes.id", ondelete="CASCADE"), nullable=False),
        sa.Column("room_id", sa.Integer(), sa.ForeignKey("rooms.id"), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_class_schedules_id", "class_schedules", ["id"])
    op.create_index("ix_class_schedules_class_id", "class_schedules", ["class_id"])
    op.create_index("ix_class_schedules_room_id", "class_schedules", ["room_id"])

    # --- programs ---
    op.create_table(
        "programs",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("code", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(256), nullable=False),
        sa.Column("institute_id", sa.Integer(), sa.ForeignKey("institutes.id"), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("institute_id", "code", name="uq_program_institute_code"),
    )
    op.create_index("ix_programs_id", "programs", ["id"])
    op.create_index("ix_programs_institute_id", "programs", ["institute_id"])

    # --- specializations ---
    op.create_table(
        "specializations",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("code", sa.String(32), nullable=False),
        sa.Column("name", sa.String(256), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("code"),
    )
    op.create_index("ix_specializations_id", "specializations", ["id"])

    # --- students ---
    op.create_table(
        "students",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("ra", sa.String(32), nullable=False),
        sa.Column("name", sa.String(256), nullable=False),
        sa.Column("program_id", sa.Integer(), sa.ForeignKey("programs.id"), nullable=True),
        sa.Column("specialization_id", sa.Integer(), sa.ForeignKey("specializations.id"), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("ra"),
    )
    op.create_index("ix_students_id", "students", ["id"])

    # --- curricula ---
    op.create_table(
        "curricula",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("student_id", sa.Integer(), sa.ForeignKey("students.id", ondelete="CASCADE"), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("student_id"),
    )
    op.create_index("ix_curricula_id", "curricula", ["id"])

    op.create_table(
        "curriculum_courses",
        sa.Column(
            "curriculum_id", sa.Integer(), sa.ForeignKey("curricula.id", ondelete="CASCADE"), nullable=False
        ),
        sa.Column("course_id", sa.Integer(), sa.ForeignKey("courses.id"), nullable=False),
        sa.Column("semester", sa.Integer(), nullable=True),
        sa.PrimaryKeyConstraint("curriculum_id", "course_id"),
    )


def downgrade() -> None:
    op.drop_table("curriculum_courses")
    op.drop_table("curricula")
    op.drop_table("students")
    op.drop_table("specializations")
    op.drop_table("programs")
    op.drop_table("class_schedules")
    op.drop_table("class_professors")
    op.drop_table("classes")
    op.drop_table("study_periods")
    op.drop_table("rooms")
    op.drop_table("professors")
    op.drop_table("courses")
    op.drop_table("institutes")
    sa.Enum(name="day_of_week_enum").drop(op.get_bind(), checkfirst=True)
