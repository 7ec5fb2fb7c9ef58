"""Payload assembler — flat form state to activity and schedule records.

``assemble`` is what the wizard sends; ``state_from_fields`` goes the other
way so the API can run the same section validators over a submitted payload.
"""
import json
from datetime import datetime, timezone
from typing import Any, Mapping, Optional

from sro_portal.forms.constants import NOT_APPLICABLE
from sro_portal.forms.state import ActivityFormState, UploadedFile

SEPARATOR = ", "
TRUTHY = {"true", "1", "yes", "on"}


def join_selected(selections: Mapping) -> str:
    """Selected keys (or custom values) joined in insertion order."""
    names: list[str] = []
    for key, entry in selections.items():
        names.extend(entry.names(key))
    return SEPARATOR.join(names)


def assemble(
    state: ActivityFormState,
    submitted_at: Optional[datetime] = None,
) -> tuple[dict[str, Any], dict[str, Any]]:
    """Return ``(activity, schedule)`` ready for the backend write API."""
    off_campus = state.off_campus
    recurring = state.is_recurring
    submitted_at = submitted_at or datetime.now(timezone.utc)

    activity = {
        "org_id": state.org_id,
        "student_position": state.student_position,
        "student_contact": state.student_contact,
        "activity_name": state.activity_name.strip(),
        "activity_description": state.activity_description.strip(),
        "activity_type": state.activity_type,
        "is_off_campus": off_campus,
        "is_recurring": recurring,
        "venue": state.venue,
        "venue_approver": NOT_APPLICABLE if off_campus else state.venue_approver,
        "venue_approver_contact": NOT_APPLICABLE if off_campus else state.venue_approver_contact,
        "green_monitor_name": state.green_campus_monitor,
        "green_monitor_contact": state.green_campus_monitor_contact,
        "charge_fee": state.charging_fees == "yes",
        "university_partner": state.partnering == "yes",
        "partner_name": join_selected(state.selected_partners),
        "partner_role": state.partner_description,
        "sdg_goals": join_selected(state.selected_sdgs),
        "status": "For Review",
        "submitted_at": submitted_at.isoformat(),
    }

    schedule = {
        "start_date": state.start_date,
        "end_date": state.end_date if recurring else state.start_date,
        "start_time": state.start_time,
        "end_time": state.end_time,
        "recurring_days": json.dumps(state.recurring_days) if recurring else None,
    }
    return activity, schedule


def as_flag(value: Any) -> bool:
    """Booleans arrive as real bools in JSON and as strings in multipart forms."""
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in TRUTHY


def _yes_no(value: Any) -> str:
    if value is None or value == "":
        return ""
    return "yes" if as_flag(value) else "no"


def state_from_fields(
    fields: Mapping[str, Any],
    upload: Optional[UploadedFile] = None,
) -> ActivityFormState:
    """Rebuild a form snapshot from assembled activity + schedule fields."""
    sdgs = {key.strip(): True for key in str(fields.get("sdg_goals") or "").split(",") if key.strip()}
    partner_name = str(fields.get("partner_name") or "")
    # Partner names may themselves contain commas, so keep the joined text whole.
    partners = {"partners": [partner_name]} if partner_name.strip() else {}

    recurring = fields.get("is_recurring")
    if isinstance(recurring, str) and recurring in ("one-time", "recurring"):
        recurrence = recurring
    elif recurring is None or recurring == "":
        recurrence = ""
    else:
        recurrence = "recurring" if as_flag(recurring) else "one-time"

    days = fields.get("recurring_days")
    if isinstance(days, str) and days.strip():
        try:
            days = json.loads(days)
        except ValueError:
            days = None
    if not isinstance(days, dict):
        days = None

    data: dict[str, Any] = {
        "org_id": str(fields.get("org_id") or ""),
        "student_position": fields.get("student_position") or "",
        "student_contact": fields.get("student_contact") or "",
        "activity_name": fields.get("activity_name") or "",
        "activity_description": fields.get("activity_description") or "",
        "activity_type": fields.get("activity_type") or "",
        "selected_sdgs": sdgs,
        "charging_fees": _yes_no(fields.get("charge_fee")),
        "partnering": _yes_no(fields.get("university_partner")),
        "recurring": recurrence,
        "start_date": fields.get("start_date") or "",
        "end_date": fields.get("end_date") or "",
        "start_time": fields.get("start_time") or "",
        "end_time": fields.get("end_time") or "",
        "is_off_campus": _yes_no(fields.get("is_off_campus")),
        "venue": fields.get("venue") or "",
        "venue_approver": fields.get("venue_approver") or "",
        "venue_approver_contact": fields.get("venue_approver_contact") or "",
        "selected_partners": partners,
        "partner_description": fields.get("partner_role") or "",
        "green_campus_monitor": fields.get("green_monitor_name") or "",
        "green_campus_monitor_contact": fields.get("green_monitor_contact") or "",
        "appeal_reason": fields.get("appeal_reason") or "",
        "selected_file": upload,
    }
    if days is not None:
        data["recurring_days"] = {str(day): as_flag(flag) for day, flag in days.items()}
    return ActivityFormState.model_validate(data)
