"""Section validator — one rule set per wizard section, parameterized by mode.

Rules run in a fixed order and the first failure wins, so the wizard can
point at exactly one field. The three submission surfaces (student create,
appeal edit, admin create) share these rules; where they differ the mode
decides:

- student contact: any 11 digits for create/admin, ``09XXXXXXXXX`` for edit
- start date: today or later for create/edit, tomorrow or later for admin
- submission: file required for create/admin, appeal reason for edit
"""
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Optional

from sro_portal.forms import validators as v
from sro_portal.forms.constants import SECTION_ORDER, FormMode, Section
from sro_portal.forms.state import ActivityFormState


@dataclass(frozen=True)
class ValidationResult:
    valid: bool
    field: Optional[str] = None
    message: Optional[str] = None

    @classmethod
    def ok(cls) -> "ValidationResult":
        return cls(valid=True)

    @classmethod
    def fail(cls, field: str, message: str) -> "ValidationResult":
        return cls(valid=False, field=field, message=message)


def _general_info(state: ActivityFormState, mode: FormMode) -> ValidationResult:
    if not state.org_id:
        return ValidationResult.fail("orgSelect", "Please select your organization.")
    if not v.has_length(state.student_position, 3, 50):
        return ValidationResult.fail("studentPosition", "Student Position must be between 3 to 50 characters.")
    if mode == FormMode.edit:
        if not v.is_mobile_number(state.student_contact):
            return ValidationResult.fail("studentContact", "Student Contact must be a mobile number (09XXXXXXXXX).")
    elif not v.is_eleven_digits(state.student_contact):
        return ValidationResult.fail("studentContact", "Student Contact must be an 11-digit number.")
    if not v.has_length(state.activity_name, 3, 100):
        return ValidationResult.fail("activityName", "Activity Name must be 3–100 characters.")
    if not v.has_length(state.activity_description, 20):
        return ValidationResult.fail("activityDescription", "Description must be at least 20 characters.")
    if not v.is_activity_type(state.activity_type):
        return ValidationResult.fail("activityType", "Please select an activity type.")
    if not v.has_sdg_goal(state.selected_sdgs):
        return ValidationResult.fail("sdgGoals", "Select at least one SDG goal.")
    if not v.is_yes_no(state.charging_fees):
        return ValidationResult.fail("chargingFees", "Please indicate if you're charging fees.")
    if not v.is_yes_no(state.partnering):
        return ValidationResult.fail("partnering", "Please indicate if you're partnering with a unit.")
    return ValidationResult.ok()


def _date_info(state: ActivityFormState, mode: FormMode, today: date) -> ValidationResult:
    if not v.is_recurrence(state.recurring):
        return ValidationResult.fail("recurring", "Please indicate if activity is recurring.")
    if not state.start_date:
        return ValidationResult.fail("startDate", "Start date is required.")
    if v.parse_date(state.start_date) is None:
        return ValidationResult.fail("startDate", "Start date is not a valid date.")
    if mode == FormMode.admin:
        if not v.is_on_or_after(state.start_date, today + timedelta(days=1)):
            return ValidationResult.fail("startDate", "Start date must be tomorrow or later.")
    elif not v.is_on_or_after(state.start_date, today):
        return ValidationResult.fail("startDate", "Start date cannot be in the past.")
    if not state.start_time:
        return ValidationResult.fail("startTime", "Start time is required.")
    if not state.end_time:
        return ValidationResult.fail("endTime", "End time is required.")
    if state.is_recurring:
        if not state.end_date:
            return ValidationResult.fail("endDate", "End date is required.")
        if not v.is_end_after_start(state.start_date, state.end_date):
            return ValidationResult.fail("endDate", "End date cannot be before start date.")
        if not v.has_recurring_day(state.recurring_days):
            return ValidationResult.fail("recurringDays", "Select at least one recurring day.")
    return ValidationResult.ok()


def _specifications(state: ActivityFormState) -> ValidationResult:
    if not v.is_yes_no(state.is_off_campus):
        return ValidationResult.fail("offcampus", "Please indicate if off-campus.")
    if not v.has_length(state.venue, 1, 100):
        return ValidationResult.fail("venue", "Venue is required and must be under 100 characters.")
    # Off-campus venues have no campus approver; the fields are forced to "N/A".
    if not state.off_campus:
        if not v.has_length(state.venue_approver, 3, 50):
            return ValidationResult.fail("venueApprover", "Approver name must be 3–50 characters.")
        if not v.is_contact_info(state.venue_approver_contact):
            return ValidationResult.fail("venueApproverContact", "Provide valid phone or UP/Gmail email.")
    if state.partnering == "yes":
        if not v.has_partner(state.selected_partners):
            return ValidationResult.fail("partnerUnits", "Select at least one partner.")
        if not v.has_length(state.partner_description, 3):
            return ValidationResult.fail("partnerDescription", "Provide partner role description (min 3 chars).")
    if not v.has_length(state.green_campus_monitor, 3, 50):
        return ValidationResult.fail("greenCampusMonitor", "Monitor name must be 3–50 characters.")
    if not v.is_contact_info(state.green_campus_monitor_contact):
        return ValidationResult.fail("greenCampusMonitorContact", "Provide valid phone or UP/Gmail email.")
    return ValidationResult.ok()


def _submission(state: ActivityFormState, mode: FormMode) -> ValidationResult:
    if mode == FormMode.edit:
        if state.show_appeal_reason and not v.has_length(state.appeal_reason, 5):
            return ValidationResult.fail(
                "appealReason", "Please explain your reason for appeal (min 5 characters)."
            )
        return ValidationResult.ok()
    if state.selected_file is None:
        return ValidationResult.fail("selectedFile", "Please upload your Activity Request PDF.")
    if not v.is_pdf(state.selected_file):
        return ValidationResult.fail("selectedFile", "Only PDF files are allowed.")
    return ValidationResult.ok()


def validate_section(
    section: Section,
    state: ActivityFormState,
    mode: FormMode = FormMode.create,
    today: Optional[date] = None,
) -> ValidationResult:
    """Return the first violated rule of ``section``, or ``ValidationResult.ok()``."""
    section = Section(section)
    if section == Section.general_info:
        return _general_info(state, mode)
    if section == Section.date_info:
        return _date_info(state, mode, today or v.campus_today())
    if section == Section.specifications:
        return _specifications(state)
    return _submission(state, mode)


def validate_all(
    state: ActivityFormState,
    mode: FormMode = FormMode.create,
    today: Optional[date] = None,
) -> ValidationResult:
    """Validate every section in wizard order; used by the API on final submit."""
    today = today or v.campus_today()
    for section in SECTION_ORDER:
        result = validate_section(section, state, mode, today)
        if not result.valid:
            return result
    return ValidationResult.ok()
