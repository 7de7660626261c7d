"""create_run_of_show_tables

Revision ID: 3f6b2a9d41c0
Revises:
Create Date: 2025-10-20 00:00:00.000000

"""
from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "3f6b2a9d41c0"
down_revision: str | Sequence[str] | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    op.create_table(
        "productions",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("anchor_time", sa.DateTime(timezone=True), nullable=True),
        sa.Column("live_time", sa.DateTime(timezone=True), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_productions")),
    )

    op.create_table(
        "skills",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("code", sa.String(length=64), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("type", sa.Enum("CREW", "ON_STREAM", name="skill_type"), nullable=False),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_skills")),
        sa.UniqueConstraint("code", name=op.f("uq_skills_code")),
    )

    op.create_table(
        "persons",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("gender", sa.String(length=20), nullable=True),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_persons")),
    )

    op.create_table(
        "positions",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("skill_id", sa.Integer(), nullable=True),
        sa.Column("is_studio", sa.Boolean(), server_default=sa.text("false"), nullable=False),
        sa.ForeignKeyConstraint(
            ["skill_id"], ["skills.id"], name=op.f("fk_positions_skill_id_skills"), ondelete="SET NULL"
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_positions")),
        sa.UniqueConstraint("name", name=op.f("uq_positions_name")),
    )

    op.create_table(
        "person_skills",
        sa.Column("person_id", sa.Integer(), nullable=False),
        sa.Column("skill_id", sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(
            ["person_id"], ["persons.id"], name=op.f("fk_person_skills_person_id_persons"), ondelete="CASCADE"
        ),
        sa.ForeignKeyConstraint(
            ["skill_id"], ["skills.id"], name=op.f("fk_person_skills_skill_id_skills"), ondelete="CASCADE"
        ),
        sa.PrimaryKeyConstraint("person_id", "skill_id", name=op.f("pk_person_skills")),
    )

    op.create_table(
        "production_segments",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("production_id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("position", sa.Integer(), nullable=False),
        sa.Column("duration_minutes", sa.Integer(), nullable=False),
        sa.Column("is_time_anchor", sa.Boolean(), server_default=sa.text("false"), nullable=False),
        sa.CheckConstraint("position <> 0", name=op.f("ck_production_segments_position_nonzero")),
        sa.CheckConstraint(
            "duration_minutes >= 0", name=op.f("ck_production_segments_duration_nonnegative")
        ),
        sa.ForeignKeyConstraint(
            ["production_id"],
            ["productions.id"],
            name=op.f("fk_production_segments_production_id_productions"),
            ondelete="CASCADE",
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_production_segments")),
        sa.UniqueConstraint(
            "production_id", "position", name="uq_production_segments_production_position"
        ),
    )
    op.create_index(
        "ix_production_segments_production_id", "production_segments", ["production_id"]
    )

    op.create_table(
        "production_persons",
        sa.Column("production_id", sa.Integer(), nullable=False),
        sa.Column("person_id", sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(
            ["person_id"],
            ["persons.id"],
            name=op.f("fk_production_persons_person_id_persons"),
            ondelete="CASCADE",
        ),
        sa.ForeignKeyConstraint(
            ["production_id"],
            ["productions.id"],
            name=op.f("fk_production_persons_production_id_productions"),
            ondelete="CASCADE",
        ),
        sa.PrimaryKeyConstraint("production_id", "person_id", name=op.f("pk_production_persons")),
    )

    op.create_table(
        "production_person_positions",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("production_id", sa.Integer(), nullable=False),
        sa.Column("person_id", sa.Integer(), nullable=False),
        sa.Column("position_id", sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(
            ["person_id"],
            ["persons.id"],
            name=op.f("fk_production_person_positions_person_id_persons"),
            ondelete="CASCADE",
        ),
        sa.ForeignKeyConstraint(
            ["position_id"],
            ["positions.id"],
            name=op.f("fk_production_person_positions_position_id_positions"),
            ondelete="CASCADE",
        ),
        sa.ForeignKeyConstraint(
            ["production_id"],
            ["productions.id"],
            name=op.f("fk_production_person_positions_production_id_productions"),
            ondelete="CASCADE",
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_production_person_positions")),
        sa.UniqueConstraint(
            "production_id",
            "person_id",
            "position_id",
            name="uq_production_person_positions_binding",
        ),
    )
    op.create_index(
        "ix_production_person_positions_production_id",
        "production_person_positions",
        ["production_id"],
    )

    op.create_table(
        "segment_assignments",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("segment_id", sa.Integer(), nullable=False),
        sa.Column("person_id", sa.Integer(), nullable=False),
        sa.Column("position_id", sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(
            ["person_id"],
            ["persons.id"],
            name=op.f("fk_segment_assignments_person_id_persons"),
            ondelete="CASCADE",
        ),
        sa.ForeignKeyConstraint(
            ["position_id"],
            ["positions.id"],
            name=op.f("fk_segment_assignments_position_id_positions"),
            ondelete="CASCADE",
        ),
        sa.ForeignKeyConstraint(
            ["segment_id"],
            ["production_segments.id"],
            name=op.f("fk_segment_assignments_segment_id_production_segments"),
            ondelete="CASCADE",
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_segment_assignments")),
    )
    op.create_index("ix_segment_assignments_segment_id", "segment_assignments", ["segment_id"])

    op.create_table(
        "segment_default_positions",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("segment_name", sa.String(length=100), nullable=False),
        sa.Column("position_id", sa.Integer(), nullable=False),
        sa.Column("order", sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(
            ["position_id"],
            ["positions.id"],
            name=op.f("fk_segment_default_positions_position_id_positions"),
            ondelete="CASCADE",
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_segment_default_positions")),
        sa.UniqueConstraint(
            "segment_name", "order", name="uq_segment_default_positions_name_order"
        ),
    )
    op.create_index(
        "ix_segment_default_positions_segment_name",
        "segment_default_positions",
        ["segment_name"],
    )


def downgrade() -> None:
    op.drop_index("ix_segment_default_positions_segment_name", table_name="segment_default_positions")
    op.drop_table("segment_default_positions")
    op.drop_index("ix_segment_assignments_segment_id", table_name="segment_assignments")
    op.drop_table("segment_assignments")
    op.drop_index(
        "ix_production_person_positions_production_id", table_name="production_person_positions"
    )
    op.drop_table("production_person_positions")
    op.drop_table("production_persons")
    op.drop_index("ix_production_segments_production_id", table_name="production_segments")
    op.drop_table("production_segments")
    op.drop_table("person_skills")
    op.drop_table("positions")
    op.drop_table("persons")
    op.drop_table("skills")
    sa.Enum(name="skill_type").drop(op.get_bind(), checkfirst=True)
    op.drop_table("productions")
