"""Activity and ActivitySchedule ORM models."""
import enum
from sqlalchemy import (
    Column, String, Text, Boolean, Date, Time, DateTime, Integer, ForeignKey, Enum as SAEnum,
)
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from sro_portal.database import Base


class ActivityStatus(str, enum.Enum):
    for_review = "For Review"
    pending = "Pending"
    approved = "Approved"
    rejected = "Rejected"
    for_appeal = "For Appeal"
    for_cancellation = "For Cancellation"


class ApprovalStatus(str, enum.Enum):
    approved = "Approved"
    rejected = "Rejected"
    pending = "Pending"


def _status_type(enum_cls):
    # Stored as plain strings holding the display values ("For Review")
    return SAEnum(
        enum_cls, native_enum=False, length=20,
        values_callable=lambda members: [member.value for member in members],
    )


class Activity(Base):
    __tablename__ = "activity"

    activity_id = Column(String(9), primary_key=True)  # MMYY-NNNN
    account_id = Column(Integer, ForeignKey("account.account_id"), nullable=False)
    org_id = Column(Integer, ForeignKey("organization.org_id"), nullable=False)
    student_position = Column(String(50), nullable=False)
    student_contact = Column(String(20), nullable=False)
    activity_name = Column(String(100), nullable=False)
    activity_description = Column(Text, nullable=False)
    activity_type = Column(String(50), nullable=False)
    sdg_goals = Column(Text, nullable=False, default="")
    charge_fee = Column(Boolean, nullable=False, default=False)
    university_partner = Column(Boolean, nullable=False, default=False)
    partner_name = Column(Text, nullable=True)
    partner_role = Column(Text, nullable=True)
    venue = Column(String(100), nullable=False)
    venue_approver = Column(String(50), nullable=True)
    venue_approver_contact = Column(String(100), nullable=True)
    is_off_campus = Column(Boolean, nullable=False, default=False)
    green_monitor_name = Column(String(50), nullable=False)
    green_monitor_contact = Column(String(100), nullable=False)
    drive_folder_link = Column(String(500), nullable=True)
    final_status = Column(_status_type(ActivityStatus), nullable=True, default=ActivityStatus.for_review)
    sro_approval_status = Column(_status_type(ApprovalStatus), nullable=True)
    odsa_approval_status = Column(_status_type(ApprovalStatus), nullable=True)
    sro_remarks = Column(Text, nullable=True)
    odsa_remarks = Column(Text, nullable=True)
    appeal_reason = Column(Text, nullable=True)
    approval_slip_link = Column(String(500), nullable=True)
    submitted_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    account = relationship("Account")
    organization = relationship("Organization", back_populates="activities")
    schedule = relationship(
        "ActivitySchedule", back_populates="activity", cascade="all, delete-orphan",
        order_by="ActivitySchedule.schedule_id",
    )


class ActivitySchedule(Base):
    __tablename__ = "activity_schedule"

    schedule_id = Column(Integer, primary_key=True, autoincrement=True)
    activity_id = Column(String(9), ForeignKey("activity.activity_id"), nullable=False)
    is_recurring = Column(Boolean, nullable=False, default=False)
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=False)
    start_time = Column(Time, nullable=False)
    end_time = Column(Time, nullable=False)
    recurring_days = Column(Text, nullable=True)  # JSON weekday map, recurring only

    activity = relationship("Activity", back_populates="schedule")
