"""Pydantic schemas for Activities and their schedules."""
from datetime import date, datetime, time
from typing import Any, Optional, Union
from pydantic import BaseModel

from sro_portal.models.activity import ActivityStatus, ApprovalStatus
from sro_portal.schemas.organization import AccountOut, OrganizationOut


class ScheduleOut(BaseModel):
    schedule_id: int
    is_recurring: bool
    start_date: date
    end_date: date
    start_time: time
    end_time: time
    recurring_days: Optional[str] = None

    model_config = {"from_attributes": True}


class ActivityOut(BaseModel):
    activity_id: str
    account_id: int
    org_id: int
    student_position: str
    student_contact: str
    activity_name: str
    activity_description: str
    activity_type: str
    sdg_goals: str
    charge_fee: bool
    university_partner: bool
    partner_name: Optional[str] = None
    partner_role: Optional[str] = None
    venue: str
    venue_approver: Optional[str] = None
    venue_approver_contact: Optional[str] = None
    is_off_campus: bool
    green_monitor_name: str
    green_monitor_contact: str
    drive_folder_link: Optional[str] = None
    final_status: Optional[ActivityStatus] = None
    sro_approval_status: Optional[ApprovalStatus] = None
    odsa_approval_status: Optional[ApprovalStatus] = None
    sro_remarks: Optional[str] = None
    odsa_remarks: Optional[str] = None
    appeal_reason: Optional[str] = None
    approval_slip_link: Optional[str] = None
    submitted_at: Optional[datetime] = None
    schedule: list[ScheduleOut] = []

    model_config = {"from_attributes": True}


class ActivityDetailOut(ActivityOut):
    organization: Optional[OrganizationOut] = None
    account: Optional[AccountOut] = None


class ActivityEditRequest(BaseModel):
    """Merged activity + schedule fields sent by the appeal flow."""

    account_id: Optional[int] = None
    org_id: Optional[Union[int, str]] = None
    student_position: Optional[str] = None
    student_contact: Optional[str] = None
    activity_name: Optional[str] = None
    activity_description: Optional[str] = None
    activity_type: Optional[str] = None
    sdg_goals: Optional[str] = None
    charge_fee: Optional[Union[bool, str]] = None
    university_partner: Optional[Union[bool, str]] = None
    partner_name: Optional[str] = None
    partner_role: Optional[str] = None
    venue: Optional[str] = None
    venue_approver: Optional[str] = None
    venue_approver_contact: Optional[str] = None
    is_off_campus: Optional[Union[bool, str]] = None
    is_recurring: Optional[Union[bool, str]] = None
    green_monitor_name: Optional[str] = None
    green_monitor_contact: Optional[str] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    recurring_days: Optional[Union[str, dict[str, Any]]] = None
    appeal_reason: Optional[str] = None

    model_config = {"extra": "ignore"}


class ActivityCancelRequest(BaseModel):
    appeal_reason: Optional[str] = None


class ReviewDecision(BaseModel):
    """Staff decision. Superadmins may fill both remark fields."""

    remarks: Optional[str] = None
    sro_remarks: Optional[str] = None
    odsa_remarks: Optional[str] = None


class SummaryCounts(BaseModel):
    approved: int
    pending: int


class MessageOut(BaseModel):
    message: str
    data: Optional[Any] = None
