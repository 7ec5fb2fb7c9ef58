"""Field-level predicates for the activity request form.

Every function here takes raw field values and returns a bool; none of them
raise. Section-level ordering and messages live in ``sections.py``.
"""
import re
from datetime import date, datetime, timedelta
from typing import Mapping, Optional

import pytz

from sro_portal.config import settings
from sro_portal.forms.constants import ACTIVITY_TYPES, RECURRENCE, SDG_GOALS, YES_NO
from sro_portal.forms.state import UploadedFile

ELEVEN_DIGITS_RE = re.compile(r"[0-9]{11}")
MOBILE_RE = re.compile(r"09[0-9]{9}")
CAMPUS_EMAIL_RE = re.compile(r"[^@]+@(up\.edu\.ph|gmail\.com)")


def campus_today() -> date:
    """Current calendar date in the campus timezone."""
    tz = pytz.timezone(settings.CAMPUS_TIMEZONE)
    return datetime.now(tz).date()


def parse_date(value: str) -> Optional[date]:
    if not value:
        return None
    try:
        return date.fromisoformat(value.strip()[:10])
    except ValueError:
        return None


def parse_hour(value: str) -> Optional[int]:
    if not value:
        return None
    try:
        return int(value.split(":")[0])
    except ValueError:
        return None


def is_present(value: Optional[str]) -> bool:
    return bool(value and value.strip())


def has_length(value: Optional[str], minimum: int, maximum: Optional[int] = None) -> bool:
    """Trimmed length lies in [minimum, maximum]."""
    length = len((value or "").strip())
    if length < minimum:
        return False
    return maximum is None or length <= maximum


def is_eleven_digits(value: Optional[str]) -> bool:
    return bool(value and ELEVEN_DIGITS_RE.fullmatch(value))


def is_mobile_number(value: Optional[str]) -> bool:
    return bool(value and MOBILE_RE.fullmatch(value))


def is_contact_info(value: Optional[str]) -> bool:
    """Local mobile number or a UP / Gmail address."""
    if not value:
        return False
    return bool(MOBILE_RE.fullmatch(value) or CAMPUS_EMAIL_RE.fullmatch(value))


def is_yes_no(value: Optional[str]) -> bool:
    return value in YES_NO


def is_recurrence(value: Optional[str]) -> bool:
    return value in RECURRENCE


def is_activity_type(value: Optional[str]) -> bool:
    return value in ACTIVITY_TYPES


def has_sdg_goal(selections: Mapping) -> bool:
    return any(key in SDG_GOALS and entry.selected for key, entry in selections.items())


def has_partner(selections: Mapping) -> bool:
    return any(entry.selected for entry in selections.values())


def has_recurring_day(days: Mapping[str, bool]) -> bool:
    return any(days.values())


def is_on_or_after(value: Optional[str], earliest: date) -> bool:
    chosen = parse_date(value or "")
    return chosen is not None and chosen >= earliest


def is_end_after_start(start: Optional[str], end: Optional[str]) -> bool:
    start_day = parse_date(start or "")
    end_day = parse_date(end or "")
    if start_day is None or end_day is None:
        return False
    return end_day >= start_day


def is_pdf(upload: Optional[UploadedFile]) -> bool:
    return upload is not None and upload.is_pdf


def add_business_days(start: date, days: int) -> date:
    """Step forward ``days`` weekdays from ``start``; weekends are skipped."""
    result = start
    added = 0
    while added < days:
        result += timedelta(days=1)
        if result.weekday() < 5:
            added += 1
    return result
