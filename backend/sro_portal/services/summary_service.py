"""Read-side queries for the staff dashboards.

Academic years run June 1 to May 31 and are written ``YYYY-YYYY``. Year and
month filters look at the first schedule row's start date.
"""
import calendar
import logging
import re
from datetime import date
from typing import Optional

from fastapi import HTTPException, status
from sqlalchemy import or_
from sqlalchemy.orm import Session

from sro_portal.models.activity import Activity, ActivitySchedule, ActivityStatus
from sro_portal.models.organization import Organization

logger = logging.getLogger(__name__)

ACADEMIC_YEAR_RE = re.compile(r"(\d{4})-(\d{4})")
FIRST_MONTH = 6

# Statuses still waiting on a staff decision
PENDING_STATUSES = (ActivityStatus.for_review, ActivityStatus.pending, ActivityStatus.for_appeal)


def academic_year_of(day: date) -> str:
    start = day.year if day.month >= FIRST_MONTH else day.year - 1
    return f"{start}-{start + 1}"


def semester_of(day: date) -> str:
    return "1st" if FIRST_MONTH <= day.month <= 10 else "2nd"


def academic_year_bounds(academic_year: str) -> tuple[date, date]:
    match = ACADEMIC_YEAR_RE.fullmatch(academic_year.strip())
    if not match or int(match.group(2)) != int(match.group(1)) + 1:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Academic year must look like 2025-2026",
        )
    start = int(match.group(1))
    return date(start, FIRST_MONTH, 1), date(start + 1, FIRST_MONTH - 1, 31)


def _month_number(name: str) -> int:
    lookup = {calendar.month_name[i].lower(): i for i in range(1, 13)}
    number = lookup.get(name.strip().lower())
    if number is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=f"Unknown month: {name}")
    return number


def _pending_filter():
    return or_(Activity.final_status.is_(None), Activity.final_status.in_(PENDING_STATUSES))


def _first_start(activity: Activity) -> Optional[date]:
    return activity.schedule[0].start_date if activity.schedule else None


def summarize(
    db: Session,
    activity_type: Optional[str] = None,
    status_filter: Optional[str] = None,
    organization: Optional[str] = None,
    year: Optional[str] = None,
    month: Optional[str] = None,
) -> list[Activity]:
    query = db.query(Activity)
    if activity_type:
        query = query.filter(Activity.activity_type.ilike(f"%{activity_type}%"))
    if status_filter:
        if status_filter.lower() == "pending":
            query = query.filter(_pending_filter())
        else:
            try:
                wanted = ActivityStatus(status_filter)
            except ValueError:
                raise HTTPException(
                    status_code=status.HTTP_400_BAD_REQUEST, detail=f"Unknown status: {status_filter}"
                )
            query = query.filter(Activity.final_status == wanted)
    if organization:
        query = query.join(Organization).filter(Organization.org_name == organization)

    activities = query.order_by(Activity.activity_id.desc()).all()

    if year:
        first, last = academic_year_bounds(year)
        activities = [a for a in activities if _first_start(a) and first <= _first_start(a) <= last]
    if month:
        number = _month_number(month)
        activities = [a for a in activities if _first_start(a) and _first_start(a).month == number]
    return activities


def counts(db: Session) -> dict[str, int]:
    approved = db.query(Activity).filter(Activity.final_status == ActivityStatus.approved).count()
    pending = db.query(Activity).filter(_pending_filter()).count()
    return {"approved": approved, "pending": pending}


def organization_names(db: Session) -> list[str]:
    rows = db.query(Organization.org_name).order_by(Organization.org_name).all()
    return [row.org_name for row in rows]


def academic_years(db: Session) -> list[str]:
    """Distinct academic years that have scheduled activities, newest first."""
    starts = db.query(ActivitySchedule.start_date).distinct().all()
    return sorted({academic_year_of(row.start_date) for row in starts}, reverse=True)


def incoming(db: Session) -> list[Activity]:
    """Everything not yet finally approved, newest id first."""
    return (
        db.query(Activity)
        .filter(or_(Activity.final_status.is_(None), Activity.final_status != ActivityStatus.approved))
        .order_by(Activity.activity_id.desc())
        .all()
    )
