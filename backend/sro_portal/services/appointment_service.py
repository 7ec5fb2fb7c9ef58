"""Consultation appointments with the SRO office.

Office hours come from the latest settings row: the weekdays that take
bookings (0 = Sunday), the opening window and the slot length. A slot is
``HH:MM``. Blocked dates close a whole day; blocked time slots close every
slot from their start to their end inclusive.

Write operations return the changed appointment together with the email
notices it triggers, so the router can hand those to background delivery.
"""
import datetime as dt
import logging
from typing import Optional

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from sro_portal.models.account import Account
from sro_portal.models.appointment import (
    CLOSED_STATUSES, SETTABLE_STATUSES, Appointment, AppointmentSettings, AppointmentStatus,
    BlockedDate, BlockedTimeSlot,
)
from sro_portal.schemas.appointment import AppointmentSettingsIn
from sro_portal.services import appointment_mail
from sro_portal.services.email_service import Notification

logger = logging.getLogger(__name__)

# Pending bookings hold their slot as well as confirmed ones
HELD_STATUSES = (AppointmentStatus.pending, AppointmentStatus.confirmed)


def _bad_request(detail) -> HTTPException:
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


def parse_slot(value: Optional[str], field: str = "time_slot") -> str:
    """Normalize ``H:MM``/``HH:MM[:SS]`` to ``HH:MM``."""
    for fmt in ("%H:%M", "%H:%M:%S"):
        try:
            return dt.datetime.strptime((value or "").strip(), fmt).strftime("%H:%M")
        except ValueError:
            continue
    raise _bad_request(f"{field} must be HH:MM")


def js_weekday(day: dt.date) -> int:
    """Weekday numbered from Sunday = 0."""
    return (day.weekday() + 1) % 7


# --- settings ---------------------------------------------------------------

def current_settings(db: Session) -> Optional[AppointmentSettings]:
    return db.query(AppointmentSettings).order_by(AppointmentSettings.id.desc()).first()


def save_settings(db: Session, payload: AppointmentSettingsIn) -> AppointmentSettings:
    if (
        not payload.allowed_days
        or payload.start_time is None
        or payload.end_time is None
        or not payload.appointment_duration
    ):
        raise _bad_request("Missing required fields")
    if payload.appointment_duration < 1:
        raise _bad_request("Appointment duration must be at least one minute")
    if payload.end_time <= payload.start_time:
        raise _bad_request("End time must be after start time")
    if any(day not in range(7) for day in payload.allowed_days):
        raise _bad_request("Allowed days must be weekday numbers 0-6")

    row = current_settings(db)
    if row is None:
        row = AppointmentSettings()
        db.add(row)
    row.allowed_days = sorted(set(payload.allowed_days))
    row.start_time = payload.start_time
    row.end_time = payload.end_time
    row.appointment_duration = payload.appointment_duration
    row.max_appointments_per_day = payload.max_appointments_per_day
    db.commit()
    db.refresh(row)
    logger.info("Appointment settings updated: days=%s %s-%s", row.allowed_days, row.start_time, row.end_time)
    return row


# --- blocked dates and slots ------------------------------------------------

def add_blocked_date(db: Session, day: Optional[dt.date], reason: Optional[str]) -> BlockedDate:
    if day is None:
        raise _bad_request("Date is required")
    if db.query(BlockedDate).filter(BlockedDate.date == day).first():
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Date is already blocked")
    blocked = BlockedDate(date=day, reason=reason)
    db.add(blocked)
    db.commit()
    db.refresh(blocked)
    logger.info("Blocked appointments on %s", day)
    return blocked


def delete_blocked_date(db: Session, blocked_id: int) -> None:
    blocked = db.query(BlockedDate).filter(BlockedDate.id == blocked_id).first()
    if not blocked:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Blocked date not found")
    db.delete(blocked)
    db.commit()


def add_blocked_time_slot(
    db: Session,
    day: Optional[dt.date],
    start_time: Optional[str],
    end_time: Optional[str],
    reason: Optional[str],
) -> BlockedTimeSlot:
    if day is None or not start_time or not end_time:
        raise _bad_request("Date, start time, and end time are required")
    start, end = parse_slot(start_time, "start_time"), parse_slot(end_time, "end_time")
    if end < start:
        raise _bad_request("End time cannot be before start time")
    blocked = BlockedTimeSlot(date=day, start_time=start, end_time=end, reason=reason)
    db.add(blocked)
    db.commit()
    db.refresh(blocked)
    logger.info("Blocked appointment slots %s-%s on %s", start, end, day)
    return blocked


def delete_blocked_time_slot(db: Session, blocked_id: int) -> None:
    blocked = db.query(BlockedTimeSlot).filter(BlockedTimeSlot.id == blocked_id).first()
    if not blocked:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Blocked time slot not found")
    db.delete(blocked)
    db.commit()


def _check_bookable(
    db: Session,
    day: dt.date,
    slot: str,
    exclude_id: Optional[int] = None,
    requested: bool = False,
) -> None:
    """Raise 400 when the day or slot is blocked or already confirmed for someone."""
    prefix = "The requested" if requested else "This"
    blocked_day = db.query(BlockedDate).filter(BlockedDate.date == day).first()
    if blocked_day:
        raise _bad_request({"error": f"{prefix} date is blocked for appointments", "reason": blocked_day.reason})

    blocked_slot = (
        db.query(BlockedTimeSlot)
        .filter(
            BlockedTimeSlot.date == day,
            BlockedTimeSlot.start_time <= slot,
            BlockedTimeSlot.end_time >= slot,
        )
        .first()
    )
    if blocked_slot:
        raise _bad_request({"error": f"{prefix} time slot is blocked", "reason": blocked_slot.reason})

    taken = db.query(Appointment).filter(
        Appointment.date == day,
        Appointment.time_slot == slot,
        Appointment.status == AppointmentStatus.confirmed,
    )
    if exclude_id is not None:
        taken = taken.filter(Appointment.id != exclude_id)
    if taken.first():
        raise _bad_request("This time slot is already booked")


# --- availability -----------------------------------------------------------

def slot_grid(start: dt.time, end: dt.time, minutes: int) -> list[str]:
    """Every slot start from ``start`` up to but excluding ``end``."""
    cursor = dt.datetime.combine(dt.date.min, start)
    stop = dt.datetime.combine(dt.date.min, end)
    step = dt.timedelta(minutes=minutes)
    slots = []
    while cursor < stop:
        slots.append(cursor.strftime("%H:%M"))
        cursor += step
    return slots


def _confirmed_count(db: Session, day: dt.date) -> int:
    return (
        db.query(Appointment)
        .filter(Appointment.date == day, Appointment.status == AppointmentStatus.confirmed)
        .count()
    )


def available_slots(db: Session, day: dt.date) -> dict:
    settings_row = current_settings(db)
    if settings_row is None:
        raise _bad_request("Appointment settings not configured")
    if js_weekday(day) not in (settings_row.allowed_days or []):
        raise _bad_request("Appointments are not available on this day")
    blocked_day = db.query(BlockedDate).filter(BlockedDate.date == day).first()
    if blocked_day:
        raise _bad_request({"error": "This date is blocked for appointments", "reason": blocked_day.reason})

    booked = [
        row.time_slot
        for row in db.query(Appointment.time_slot)
        .filter(Appointment.date == day, Appointment.status.in_(HELD_STATUSES))
        .all()
    ]
    blocked = db.query(BlockedTimeSlot).filter(BlockedTimeSlot.date == day).all()

    def _open(slot: str) -> bool:
        if slot in booked:
            return False
        return not any(b.start_time <= slot <= b.end_time for b in blocked)

    grid = slot_grid(settings_row.start_time, settings_row.end_time, settings_row.appointment_duration)
    limit = settings_row.max_appointments_per_day
    return {
        "available_slots": [slot for slot in grid if _open(slot)],
        "booked_slots": booked,
        "blocked_slots": [{"start": b.start_time, "end": b.end_time, "reason": b.reason} for b in blocked],
        "max_appointments_reached": bool(limit) and _confirmed_count(db, day) >= limit,
    }


# --- bookings ---------------------------------------------------------------

def list_appointments(
    db: Session,
    day: Optional[dt.date] = None,
    status_filter: Optional[str] = None,
    account_id: Optional[int] = None,
) -> list[Appointment]:
    query = db.query(Appointment)
    if day:
        query = query.filter(Appointment.date == day)
    if status_filter:
        try:
            query = query.filter(Appointment.status == AppointmentStatus(status_filter))
        except ValueError:
            raise _bad_request(f"Unknown status: {status_filter}")
    if account_id is not None:
        query = query.filter(Appointment.account_id == account_id)
    return query.order_by(Appointment.date, Appointment.time_slot).all()


def get_appointment(db: Session, appointment_id: int) -> Appointment:
    appointment = db.query(Appointment).filter(Appointment.id == appointment_id).first()
    if not appointment:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Appointment not found")
    return appointment


def check_access(appointment: Appointment, account: Account) -> None:
    """Students may only touch their own appointments; staff may touch any."""
    if not account.is_staff and appointment.account_id != account.account_id:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Not your appointment")


def create_appointment(
    db: Session,
    account: Account,
    day: Optional[dt.date],
    time_slot: Optional[str],
    purpose: Optional[str],
    details: Optional[str] = None,
) -> tuple[Appointment, list[Notification]]:
    if day is None or not time_slot or not (purpose or "").strip():
        raise _bad_request("Missing required fields")
    slot = parse_slot(time_slot)
    _check_bookable(db, day, slot)

    settings_row = current_settings(db)
    limit = settings_row.max_appointments_per_day if settings_row else None
    if limit and _confirmed_count(db, day) >= limit:
        raise _bad_request("Maximum number of appointments for this day has been reached")

    appointment = Appointment(
        account_id=account.account_id,
        date=day,
        time_slot=slot,
        purpose=purpose.strip(),
        details=details,
        status=AppointmentStatus.pending,
    )
    db.add(appointment)
    db.commit()
    db.refresh(appointment)
    logger.info("Appointment %s booked by account %s for %s %s", appointment.id, account.account_id, day, slot)
    return appointment, appointment_mail.booking_received(appointment)


def update_status(
    db: Session,
    appointment_id: int,
    new_status: Optional[str],
    admin_notes: Optional[str] = None,
) -> tuple[Appointment, list[Notification]]:
    try:
        wanted = AppointmentStatus(new_status)
    except ValueError:
        wanted = None
    if wanted not in SETTABLE_STATUSES:
        raise _bad_request("Invalid status provided")

    appointment = get_appointment(db, appointment_id)
    appointment.status = wanted
    if admin_notes:
        appointment.admin_notes = admin_notes
    db.commit()
    db.refresh(appointment)
    logger.info("Appointment %s set to %s", appointment_id, wanted.value)
    return appointment, appointment_mail.status_changed(appointment, admin_notes)


def request_reschedule(
    db: Session,
    appointment_id: int,
    new_date: Optional[dt.date],
    new_time_slot: Optional[str],
    reason: Optional[str] = None,
) -> tuple[Appointment, list[Notification]]:
    if new_date is None or not new_time_slot:
        raise _bad_request("New date and time slot are required")
    appointment = get_appointment(db, appointment_id)
    if appointment.status in CLOSED_STATUSES:
        raise _bad_request(f"Cannot reschedule an appointment with status: {appointment.status.value}")

    slot = parse_slot(new_time_slot, "new_time_slot")
    _check_bookable(db, new_date, slot, exclude_id=appointment.id, requested=True)

    appointment.reschedule_requested = True
    appointment.requested_date = new_date
    appointment.requested_time_slot = slot
    appointment.reschedule_reason = reason
    appointment.status = AppointmentStatus.reschedule_pending
    db.commit()
    db.refresh(appointment)
    logger.info("Appointment %s reschedule requested to %s %s", appointment_id, new_date, slot)
    return appointment, appointment_mail.reschedule_requested(appointment)


def decide_reschedule(
    db: Session,
    appointment_id: int,
    approved: bool,
    admin_notes: Optional[str] = None,
) -> tuple[Appointment, list[Notification]]:
    appointment = get_appointment(db, appointment_id)
    if not appointment.reschedule_requested:
        raise _bad_request("This appointment has no reschedule request")

    if approved:
        appointment.date = appointment.requested_date
        appointment.time_slot = appointment.requested_time_slot
    appointment.reschedule_requested = False
    appointment.requested_date = None
    appointment.requested_time_slot = None
    appointment.reschedule_reason = None
    appointment.admin_notes = admin_notes or appointment.admin_notes
    appointment.status = AppointmentStatus.confirmed
    db.commit()
    db.refresh(appointment)
    logger.info("Appointment %s reschedule %s", appointment_id, "approved" if approved else "rejected")
    return appointment, appointment_mail.reschedule_decided(appointment, approved, admin_notes)


def request_cancellation(
    db: Session,
    appointment_id: int,
    reason: Optional[str],
) -> tuple[Appointment, list[Notification]]:
    if not (reason or "").strip():
        raise _bad_request("Cancellation reason is required")
    appointment = get_appointment(db, appointment_id)
    if appointment.status in CLOSED_STATUSES:
        raise _bad_request(f"Cannot cancel an appointment with status: {appointment.status.value}")

    appointment.cancellation_requested = True
    appointment.cancellation_reason = reason.strip()
    appointment.status = AppointmentStatus.cancellation_pending
    db.commit()
    db.refresh(appointment)
    logger.info("Appointment %s cancellation requested", appointment_id)
    return appointment, appointment_mail.cancellation_requested(appointment)


def decide_cancellation(
    db: Session,
    appointment_id: int,
    approved: bool,
    admin_notes: Optional[str] = None,
) -> tuple[Appointment, list[Notification]]:
    appointment = get_appointment(db, appointment_id)
    if not appointment.cancellation_requested:
        raise _bad_request("This appointment has no cancellation request")

    appointment.cancellation_requested = False
    appointment.admin_notes = admin_notes or appointment.admin_notes
    if approved:
        appointment.status = AppointmentStatus.cancelled
    else:
        appointment.cancellation_reason = None
        appointment.status = AppointmentStatus.confirmed
    db.commit()
    db.refresh(appointment)
    logger.info("Appointment %s cancellation %s", appointment_id, "approved" if approved else "rejected")
    return appointment, appointment_mail.cancellation_decided(appointment, approved, admin_notes)
