"""initial_schema

Revision ID: 0001
Revises:
Create Date: 2026-10-19

Creates all tables for the SRO activity portal:
account, organization, activity, activity_schedule,
org_annual_report, org_recognition.
"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "0001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # --- account ---
    op.create_table(
        "account",
        sa.Column("account_id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("account_name", sa.String(150), nullable=False),
        sa.Column("email", sa.String(255), nullable=False, unique=True),
        sa.Column("role_id", sa.Integer, nullable=False, server_default="1"),
        sa.Column("reminders_seen", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )

    # --- organization ---
    op.create_table(
        "organization",
        sa.Column("org_id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("org_name", sa.String(150), nullable=False, unique=True),
        sa.Column("org_email", sa.String(255), nullable=True),
        sa.Column("adviser_name", sa.String(150), nullable=True),
        sa.Column("adviser_email", sa.String(255), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )

    # --- activity ---
    op.create_table(
        "activity",
        sa.Column("activity_id", sa.String(9), primary_key=True),
        sa.Column("account_id", sa.Integer, sa.ForeignKey("account.account_id"), nullable=False),
        sa.Column("org_id", sa.Integer, sa.ForeignKey("organization.org_id"), nullable=False),
        sa.Column("student_position", sa.String(50), nullable=False),
        sa.Column("student_contact", sa.String(20), nullable=False),
        sa.Column("activity_name", sa.String(100), nullable=False),
        sa.Column("activity_description", sa.Text, nullable=False),
        sa.Column("activity_type", sa.String(50), nullable=False),
        sa.Column("sdg_goals", sa.Text, nullable=False, server_default=""),
        sa.Column("charge_fee", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("university_partner", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("partner_name", sa.Text, nullable=True),
        sa.Column("partner_role", sa.Text, nullable=True),
        sa.Column("venue", sa.String(100), nullable=False),
        sa.Column("venue_approver", sa.String(50), nullable=True),
        sa.Column("venue_approver_contact", sa.String(100), nullable=True),
        sa.Column("is_off_campus", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("green_monitor_name", sa.String(50), nullable=False),
        sa.Column("green_monitor_contact", sa.String(100), nullable=False),
        sa.Column("drive_folder_link", sa.String(500), nullable=True),
        sa.Column("final_status", sa.String(20), nullable=True),
        sa.Column("sro_approval_status", sa.String(20), nullable=True),
        sa.Column("odsa_approval_status", sa.String(20), nullable=True),
        sa.Column("sro_remarks", sa.Text, nullable=True),
        sa.Column("odsa_remarks", sa.Text, nullable=True),
        sa.Column("appeal_reason", sa.Text, nullable=True),
        sa.Column("approval_slip_link", sa.String(500), nullable=True),
        sa.Column("submitted_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index("ix_activity_account_id", "activity", ["account_id"])
    op.create_index("ix_activity_final_status", "activity", ["final_status"])

    # --- activity_schedule ---
    op.create_table(
        "activity_schedule",
        sa.Column("schedule_id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("activity_id", sa.String(9), sa.ForeignKey("activity.activity_id"), nullable=False),
        sa.Column("is_recurring", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("start_date", sa.Date, nullable=False),
        sa.Column("end_date", sa.Date, nullable=False),
        sa.Column("start_time", sa.Time, nullable=False),
        sa.Column("end_time", sa.Time, nullable=False),
        sa.Column("recurring_days", sa.Text, nullable=True),
    )

    # --- org_annual_report ---
    op.create_table(
        "org_annual_report",
        sa.Column("report_id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("org_id", sa.Integer, sa.ForeignKey("organization.org_id"), nullable=False),
        sa.Column("submitted_by", sa.Integer, sa.ForeignKey("account.account_id"), nullable=False),
        sa.Column("academic_year", sa.String(9), nullable=False),
        sa.Column("drive_folder_link", sa.String(500), nullable=True),
        sa.Column("submission_file_url", sa.Text, nullable=False),
        sa.Column("submitted_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )

    # --- org_recognition ---
    op.create_table(
        "org_recognition",
        sa.Column("recognition_id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("organization_id", sa.Integer, nullable=False, unique=True),
        sa.Column("org_name", sa.String(150), nullable=False),
        sa.Column("organization_type", sa.String(100), nullable=False),
        sa.Column("academic_year", sa.String(9), nullable=False),
        sa.Column("org_email", sa.String(255), nullable=False),
        sa.Column("org_chairperson", sa.String(150), nullable=False),
        sa.Column("chairperson_email", sa.String(255), nullable=False),
        sa.Column("org_adviser", sa.String(150), nullable=False),
        sa.Column("adviser_email", sa.String(255), nullable=False),
        sa.Column("org_coadviser", sa.String(150), nullable=False),
        sa.Column("coadviser_email", sa.String(255), nullable=False),
        sa.Column("submission_file_url", sa.Text, nullable=False),
        sa.Column("drive_folder_id", sa.String(500), nullable=True),
        sa.Column("submitted_by", sa.Integer, sa.ForeignKey("account.account_id"), nullable=True),
        sa.Column("is_recognized", sa.Boolean, nullable=True),
        sa.Column("org_status", sa.String(20), nullable=True),
        sa.Column("approved_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("submitted_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )


def downgrade() -> None:
    op.drop_table("org_recognition")
    op.drop_table("org_annual_report")
    op.drop_table("activity_schedule")
    op.drop_index("ix_activity_final_status", table_name="activity")
    op.drop_index("ix_activity_account_id", table_name="activity")
    op.drop_table("activity")
    op.drop_table("organization")
    op.drop_table("account")
