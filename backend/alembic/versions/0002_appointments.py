"""appointments

Revision ID: 0002
Revises: 0001
Create Date: 2026-10-19

Adds consultation appointment tables:
appointment_settings, blocked_dates, blocked_time_slots, appointments.
"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "0002"
down_revision: Union[str, None] = "0001"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # --- appointment_settings ---
    op.create_table(
        "appointment_settings",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("allowed_days", sa.JSON, nullable=False),
        sa.Column("start_time", sa.Time, nullable=False),
        sa.Column("end_time", sa.Time, nullable=False),
        sa.Column("appointment_duration", sa.Integer, nullable=False),
        sa.Column("max_appointments_per_day", sa.Integer, nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )

    # --- blocked_dates ---
    op.create_table(
        "blocked_dates",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("date", sa.Date, nullable=False, unique=True),
        sa.Column("reason", sa.Text, nullable=True),
    )

    # --- blocked_time_slots ---
    op.create_table(
        "blocked_time_slots",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("date", sa.Date, nullable=False),
        sa.Column("start_time", sa.String(5), nullable=False),
        sa.Column("end_time", sa.String(5), nullable=False),
        sa.Column("reason", sa.Text, nullable=True),
    )
    op.create_index("ix_blocked_time_slots_date", "blocked_time_slots", ["date"])

    # --- appointments ---
    op.create_table(
        "appointments",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("account_id", sa.Integer, sa.ForeignKey("account.account_id"), nullable=False),
        sa.Column("date", sa.Date, nullable=False),
        sa.Column("time_slot", sa.String(5), nullable=False),
        sa.Column("purpose", sa.String(255), nullable=False),
        sa.Column("details", sa.Text, nullable=True),
        sa.Column("status", sa.String(20), nullable=False, server_default="pending"),
        sa.Column("admin_notes", sa.Text, nullable=True),
        sa.Column("reschedule_requested", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("requested_date", sa.Date, nullable=True),
        sa.Column("requested_time_slot", sa.String(5), nullable=True),
        sa.Column("reschedule_reason", sa.Text, nullable=True),
        sa.Column("cancellation_requested", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("cancellation_reason", sa.Text, nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index("ix_appointments_account_id", "appointments", ["account_id"])
    op.create_index("ix_appointments_date", "appointments", ["date"])


def downgrade() -> None:
    op.drop_index("ix_appointments_date", table_name="appointments")
    op.drop_index("ix_appointments_account_id", table_name="appointments")
    op.drop_table("appointments")
    op.drop_index("ix_blocked_time_slots_date", table_name="blocked_time_slots")
    op.drop_table("blocked_time_slots")
    op.drop_table("blocked_dates")
    op.drop_table("appointment_settings")
