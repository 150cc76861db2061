"""Initial schema for staff, shifts and shift assignments.

Revision ID: 20251120_0001
Revises:
Create Date: 2025-11-20 09:00:00.000000
"""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = "20251120_0001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "staff",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("organisation_id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(length=120), nullable=False),
        sa.Column("phone_number", sa.String(length=32), nullable=True),
        sa.Column("ward", sa.String(length=120), nullable=True),
        sa.Column("preferred_shift", sa.String(length=16), nullable=False, server_default=sa.text("'day'")),
        sa.Column("staff_type", sa.String(length=16), nullable=False, server_default=sa.text("'permanent'")),
        sa.Column("contracted_hours_per_week", sa.Numeric(5, 2), nullable=True),
        sa.Column("mandatory_training_complete", sa.Boolean(), nullable=True),
        sa.Column("wellbeing_score", sa.Integer(), nullable=False, server_default=sa.text("0")),
    )
    op.create_index("ix_staff_id", "staff", ["id"])
    op.create_index("ix_staff_organisation_id", "staff", ["organisation_id"])

    op.create_table(
        "shift",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("organisation_id", sa.Integer(), nullable=False),
        sa.Column("ward", sa.String(length=120), nullable=False),
        sa.Column("role_required", sa.String(length=120), nullable=False),
        sa.Column("gender_required", sa.String(length=16), nullable=False, server_default=sa.text("'any'")),
        sa.Column("required_count", sa.Integer(), nullable=False, server_default=sa.text("1")),
        sa.Column("filled_count", sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.Column("status", sa.String(length=16), nullable=False, server_default=sa.text("'open'")),
        sa.Column("shift_date", sa.Date(), nullable=False),
        sa.Column("start_time", sa.String(length=5), nullable=True),
        sa.Column("end_time", sa.String(length=5), nullable=True),
        sa.CheckConstraint("filled_count <= required_count", name="ck_shift_filled_within_required"),
    )
    op.create_index("ix_shift_id", "shift", ["id"])
    op.create_index("ix_shift_organisation_id", "shift", ["organisation_id"])
    op.create_index("ix_shift_shift_date", "shift", ["shift_date"])

    op.create_table(
        "shiftassignment",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("shift_id", sa.Integer(), sa.ForeignKey("shift.id", ondelete="CASCADE"), nullable=False),
        sa.Column("staff_id", sa.Integer(), sa.ForeignKey("staff.id", ondelete="CASCADE"), nullable=False),
        sa.Column("manager_override", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        sa.Column("accepted_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.UniqueConstraint("shift_id", "staff_id", name="ux_shiftassignment_shift_staff"),
    )
    op.create_index("ix_shiftassignment_shift_id", "shiftassignment", ["shift_id"])
    op.create_index("ix_shiftassignment_staff_id", "shiftassignment", ["staff_id"])


def downgrade() -> None:
    op.drop_index("ix_shiftassignment_staff_id", table_name="shiftassignment")
    op.drop_index("ix_shiftassignment_shift_id", table_name="shiftassignment")
    op.drop_table("shiftassignment")
    op.drop_index("ix_shift_shift_date", table_name="shift")
    op.drop_index("ix_shift_organisation_id", table_name="shift")
    op.drop_index("ix_shift_id", table_name="shift")
    op.drop_table("shift")
    op.drop_index("ix_staff_organisation_id", table_name="staff")
    op.drop_index("ix_staff_id", table_name="staff")
    op.drop_table("staff")
