"""Activity write paths — create, admin-create, appeal, cancel and staff review.

Every submission is re-validated here with the same section rules the wizard
runs client-side, then normalized through the payload assembler so stored
rows look the same no matter which client sent them.
"""
import logging
import random
from datetime import datetime, time, timezone
from typing import Any, Mapping, Optional

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from sro_portal.forms.constants import FormMode
from sro_portal.forms.payload import assemble, state_from_fields
from sro_portal.forms.sections import validate_all
from sro_portal.forms.state import ActivityFormState, UploadedFile
from sro_portal.forms.validators import campus_today, parse_date
from sro_portal.models.account import Account, Role
from sro_portal.models.activity import Activity, ActivitySchedule, ActivityStatus, ApprovalStatus
from sro_portal.models.organization import Organization
from sro_portal.schemas.activity import ReviewDecision
from sro_portal.services.exceptions import FormValidationError
from sro_portal.services.storage import FileStore

logger = logging.getLogger(__name__)

MAX_ID_ATTEMPTS = 50

ACTIVITY_FIELDS = (
    "student_position",
    "student_contact",
    "activity_name",
    "activity_description",
    "activity_type",
    "sdg_goals",
    "charge_fee",
    "university_partner",
    "partner_name",
    "partner_role",
    "venue",
    "venue_approver",
    "venue_approver_contact",
    "is_off_campus",
    "green_monitor_name",
    "green_monitor_contact",
)


def generate_activity_id(db: Session, now: Optional[datetime] = None) -> str:
    """``MMYY-NNNN`` with a random suffix, redrawn on collision."""
    now = now or datetime.now(timezone.utc)
    prefix = now.strftime("%m%y")
    for _ in range(MAX_ID_ATTEMPTS):
        candidate = f"{prefix}-{random.randint(1000, 9999)}"
        if not db.query(Activity).filter(Activity.activity_id == candidate).first():
            return candidate
    logger.error("No free activity id found for %s after %d draws", prefix, MAX_ID_ATTEMPTS)
    raise HTTPException(
        status_code=status.HTTP_409_CONFLICT,
        detail="Could not allocate an activity id, please retry",
    )


def get_activity(db: Session, activity_id: str) -> Activity:
    activity = db.query(Activity).filter(Activity.activity_id == activity_id).first()
    if not activity:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Activity not found")
    return activity


def _parse_time(value: str) -> time:
    for fmt in ("%H:%M", "%H:%M:%S"):
        try:
            return datetime.strptime(value, fmt).time()
        except ValueError:
            continue
    raise FormValidationError("Start and end times must be HH:MM.", "startTime")


def _validated_state(
    fields: Mapping[str, Any],
    mode: FormMode,
    upload: Optional[UploadedFile] = None,
) -> ActivityFormState:
    state = state_from_fields(fields, upload)
    result = validate_all(state, mode, campus_today())
    if not result.valid:
        logger.info("Rejected %s submission at %s: %s", mode.value, result.field, result.message)
        raise FormValidationError(result.message, result.field)
    return state


def _resolve_org(db: Session, org_id: Any) -> Organization:
    try:
        org_key = int(org_id)
    except (TypeError, ValueError):
        raise FormValidationError("Please select your organization.", "orgSelect")
    organization = db.query(Organization).filter(Organization.org_id == org_key).first()
    if not organization:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Organization not found")
    return organization


def _apply_record(activity: Activity, record: Mapping[str, Any]) -> None:
    for field in ACTIVITY_FIELDS:
        setattr(activity, field, record[field])
    activity.partner_name = record["partner_name"] or None
    activity.partner_role = record["partner_role"] or None


def _apply_schedule(schedule: ActivitySchedule, record: Mapping[str, Any], recurring: bool) -> None:
    schedule.is_recurring = recurring
    schedule.start_date = parse_date(record["start_date"])
    schedule.end_date = parse_date(record["end_date"])
    schedule.start_time = _parse_time(record["start_time"])
    schedule.end_time = _parse_time(record["end_time"])
    schedule.recurring_days = record["recurring_days"]


def _insert(
    db: Session,
    state: ActivityFormState,
    account_id: int,
    store: FileStore,
    upload: Optional[UploadedFile],
    approved: bool,
) -> Activity:
    organization = _resolve_org(db, state.org_id)
    record, schedule_record = assemble(state)

    activity = Activity(
        activity_id=generate_activity_id(db),
        account_id=account_id,
        org_id=organization.org_id,
        submitted_at=datetime.now(timezone.utc),
    )
    _apply_record(activity, record)
    if approved:
        activity.final_status = ActivityStatus.approved
        activity.sro_approval_status = ApprovalStatus.approved
        activity.odsa_approval_status = ApprovalStatus.approved
    else:
        activity.final_status = ActivityStatus.for_review

    schedule = ActivitySchedule()
    _apply_schedule(schedule, schedule_record, state.is_recurring)
    activity.schedule.append(schedule)

    if upload is not None:
        activity.drive_folder_link = store.save(
            f"activities/{activity.activity_id}", upload.filename, upload.content
        )

    db.add(activity)
    db.commit()
    db.refresh(activity)
    return activity


def create_activity(
    db: Session,
    fields: Mapping[str, Any],
    upload: Optional[UploadedFile],
    store: FileStore,
) -> Activity:
    """Student submission: lands as For Review."""
    try:
        account_id = int(fields.get("account_id"))
    except (TypeError, ValueError):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="account_id is required")
    if not db.query(Account).filter(Account.account_id == account_id).first():
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Account not found")

    state = _validated_state(fields, FormMode.create, upload)
    activity = _insert(db, state, account_id, store, upload, approved=False)
    logger.info("Activity %s submitted by account %s", activity.activity_id, account_id)
    return activity


def admin_create_activity(
    db: Session,
    fields: Mapping[str, Any],
    upload: Optional[UploadedFile],
    store: FileStore,
    actor: Account,
) -> Activity:
    """Staff-created activity: inserted already Approved by both offices."""
    state = _validated_state(fields, FormMode.admin, upload)
    activity = _insert(db, state, actor.account_id, store, upload, approved=True)
    logger.info("Activity %s created and approved by staff account %s", activity.activity_id, actor.account_id)
    return activity


def _clear_decisions(activity: Activity) -> None:
    activity.sro_approval_status = None
    activity.odsa_approval_status = None
    activity.sro_remarks = None
    activity.odsa_remarks = None


def appeal_activity(db: Session, activity_id: str, fields: Mapping[str, Any]) -> Activity:
    """Owner edit: replaces the request fields and moves it to For Appeal."""
    activity = get_activity(db, activity_id)
    state = _validated_state(fields, FormMode.edit)
    organization = _resolve_org(db, state.org_id)
    record, schedule_record = assemble(state)

    _apply_record(activity, record)
    activity.org_id = organization.org_id
    activity.appeal_reason = state.appeal_reason.strip()
    activity.final_status = ActivityStatus.for_appeal
    _clear_decisions(activity)

    if activity.schedule:
        schedule = activity.schedule[0]
    else:
        schedule = ActivitySchedule()
        activity.schedule.append(schedule)
    _apply_schedule(schedule, schedule_record, state.is_recurring)

    db.commit()
    db.refresh(activity)
    logger.info("Activity %s moved to For Appeal", activity_id)
    return activity


def cancel_activity(db: Session, activity_id: str, appeal_reason: Optional[str]) -> Activity:
    """Owner request to cancel; a reason is mandatory."""
    if not appeal_reason or not appeal_reason.strip():
        raise FormValidationError("Appeal reason is required.", "appealReason")
    activity = get_activity(db, activity_id)
    activity.appeal_reason = appeal_reason.strip()
    activity.final_status = ActivityStatus.for_cancellation
    _clear_decisions(activity)
    db.commit()
    db.refresh(activity)
    logger.info("Activity %s moved to For Cancellation", activity_id)
    return activity


def _remarks(decision: ReviewDecision, office: str) -> Optional[str]:
    specific = decision.sro_remarks if office == "sro" else decision.odsa_remarks
    return specific if specific is not None else decision.remarks


def approve_activity(db: Session, activity_id: str, reviewer: Account, decision: ReviewDecision) -> Activity:
    """Record an approval for the reviewer's office.

    SRO approval alone does not finalize; it only sends an appealed
    request back into review. ODSA or superadmin approval is final.
    """
    activity = get_activity(db, activity_id)
    role = reviewer.role_id

    if role == Role.sro:
        activity.sro_approval_status = ApprovalStatus.approved
        activity.sro_remarks = _remarks(decision, "sro")
        if activity.final_status == ActivityStatus.for_appeal:
            activity.final_status = None
    elif role == Role.odsa:
        activity.odsa_approval_status = ApprovalStatus.approved
        activity.odsa_remarks = _remarks(decision, "odsa")
        activity.final_status = ActivityStatus.approved
    elif role == Role.superadmin:
        activity.sro_approval_status = ApprovalStatus.approved
        activity.sro_remarks = _remarks(decision, "sro")
        activity.odsa_approval_status = ApprovalStatus.approved
        activity.odsa_remarks = _remarks(decision, "odsa")
        activity.final_status = ActivityStatus.approved
    else:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Invalid user role")

    db.commit()
    db.refresh(activity)
    logger.info("Activity %s approved by account %s (role %s)", activity_id, reviewer.account_id, role)
    return activity


def reject_activity(db: Session, activity_id: str, reviewer: Account, decision: ReviewDecision) -> Activity:
    """Any office's rejection is final; an SRO rejection skips ODSA."""
    activity = get_activity(db, activity_id)
    role = reviewer.role_id

    if role == Role.sro:
        activity.sro_approval_status = ApprovalStatus.rejected
        activity.sro_remarks = _remarks(decision, "sro")
        activity.odsa_approval_status = ApprovalStatus.rejected
    elif role == Role.odsa:
        activity.odsa_approval_status = ApprovalStatus.rejected
        activity.odsa_remarks = _remarks(decision, "odsa")
    elif role == Role.superadmin:
        activity.sro_approval_status = ApprovalStatus.rejected
        activity.sro_remarks = _remarks(decision, "sro")
        activity.odsa_approval_status = ApprovalStatus.rejected
        activity.odsa_remarks = _remarks(decision, "odsa")
    else:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Invalid user role")

    activity.final_status = ActivityStatus.rejected
    db.commit()
    db.refresh(activity)
    logger.info("Activity %s rejected by account %s (role %s)", activity_id, reviewer.account_id, role)
    return activity
