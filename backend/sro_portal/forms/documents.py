"""Required-document calculator and the short-notice advisory."""
from datetime import date
from typing import Optional

from sro_portal.forms import constants as c
from sro_portal.forms.state import ActivityFormState
from sro_portal.forms.validators import add_business_days, parse_date, parse_hour

SHORT_NOTICE_ADVISORY = (
    "This activity is not 5 business days in advance. "
    "Please coordinate directly with SRO. You may still submit your request."
)


def _is_weekend(value: str) -> bool:
    day = parse_date(value)
    return day is not None and day.weekday() >= 5


def _is_after_curfew(value: str) -> bool:
    hour = parse_hour(value)
    return hour is not None and hour >= c.CURFEW_HOUR


def required_documents(
    is_off_campus: str,
    start_date: str,
    end_date: str,
    start_time: str,
    end_time: str,
) -> list[str]:
    """Documents a submitter must attach for the given venue and schedule."""
    required = [c.CONCEPT_PAPER, c.REQUEST_FORM]
    if is_off_campus == "yes":
        required += [c.OFF_CAMPUS_NOTICE, c.OFF_CAMPUS_WAIVER]
    if (
        _is_weekend(start_date)
        or _is_weekend(end_date)
        or _is_after_curfew(start_time)
        or _is_after_curfew(end_time)
    ):
        required.append(c.CURFEW_PERMISSION)
    return required


def documents_for(state: ActivityFormState) -> list[str]:
    return required_documents(
        state.is_off_campus,
        state.start_date,
        state.end_date,
        state.start_time,
        state.end_time,
    )


def short_notice_advisory(start_date: str, today: date) -> Optional[str]:
    """Non-blocking warning when the start date is under 5 business days away."""
    chosen = parse_date(start_date)
    if chosen is None or chosen < today:
        return None
    if chosen < add_business_days(today, c.ADVANCE_BUSINESS_DAYS):
        return SHORT_NOTICE_ADVISORY
    return None
