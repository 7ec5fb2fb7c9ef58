"""Consultation appointments: office hours, blocked days, booking and follow-ups."""
import datetime as dt
from typing import Optional
from fastapi import APIRouter, BackgroundTasks, Depends, Query, status
from sqlalchemy.orm import Session

from sro_portal.database import get_db
from sro_portal.models.account import Account
from sro_portal.models.appointment import BlockedDate, BlockedTimeSlot
from sro_portal.schemas.activity import MessageOut
from sro_portal.schemas.appointment import (
    AppointmentCreate, AppointmentOut, AppointmentSettingsIn, AppointmentSettingsOut,
    AppointmentStatusUpdate, AvailableSlotsOut, BlockedDateIn, BlockedDateOut, BlockedTimeSlotIn,
    BlockedTimeSlotOut, CancellationRequest, RequestDecision, RescheduleRequest,
)
from sro_portal.services import appointment_service
from sro_portal.services.auth import get_current_account, require_staff
from sro_portal.services.email_service import EmailService, get_email_service

router = APIRouter()


@router.get("/settings", response_model=Optional[AppointmentSettingsOut])
def get_settings(db: Session = Depends(get_db)):
    """Current office hours, or null when none are configured."""
    return appointment_service.current_settings(db)


@router.post("/settings", response_model=AppointmentSettingsOut, dependencies=[Depends(require_staff)])
def save_settings(payload: AppointmentSettingsIn, db: Session = Depends(get_db)):
    return appointment_service.save_settings(db, payload)


@router.get("/blocked-dates", response_model=list[BlockedDateOut])
def list_blocked_dates(db: Session = Depends(get_db)):
    return db.query(BlockedDate).order_by(BlockedDate.date).all()


@router.post(
    "/blocked-dates",
    response_model=BlockedDateOut,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_staff)],
)
def add_blocked_date(payload: BlockedDateIn, db: Session = Depends(get_db)):
    return appointment_service.add_blocked_date(db, payload.date, payload.reason)


@router.delete("/blocked-dates/{blocked_id}", response_model=MessageOut, dependencies=[Depends(require_staff)])
def delete_blocked_date(blocked_id: int, db: Session = Depends(get_db)):
    appointment_service.delete_blocked_date(db, blocked_id)
    return {"message": "Blocked date deleted successfully"}


@router.get("/blocked-time-slots", response_model=list[BlockedTimeSlotOut])
def list_blocked_time_slots(db: Session = Depends(get_db)):
    return db.query(BlockedTimeSlot).order_by(BlockedTimeSlot.date, BlockedTimeSlot.start_time).all()


@router.post(
    "/blocked-time-slots",
    response_model=BlockedTimeSlotOut,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_staff)],
)
def add_blocked_time_slot(payload: BlockedTimeSlotIn, db: Session = Depends(get_db)):
    return appointment_service.add_blocked_time_slot(
        db, payload.date, payload.start_time, payload.end_time, payload.reason
    )


@router.delete(
    "/blocked-time-slots/{blocked_id}", response_model=MessageOut, dependencies=[Depends(require_staff)]
)
def delete_blocked_time_slot(blocked_id: int, db: Session = Depends(get_db)):
    appointment_service.delete_blocked_time_slot(db, blocked_id)
    return {"message": "Blocked time slot deleted successfully"}


@router.get("/available-slots", response_model=AvailableSlotsOut)
def available_slots(date: dt.date = Query(...), db: Session = Depends(get_db)):
    """Open slots for one day, plus what is booked or blocked."""
    return appointment_service.available_slots(db, date)


@router.get("", response_model=list[AppointmentOut])
def list_appointments(
    date: Optional[dt.date] = Query(None),
    status: Optional[str] = Query(None),
    account_id: Optional[int] = Query(None),
    account: Account = Depends(get_current_account),
    db: Session = Depends(get_db),
):
    """Staff see every booking; students only their own."""
    if not account.is_staff:
        account_id = account.account_id
    return appointment_service.list_appointments(db, day=date, status_filter=status, account_id=account_id)


@router.post("", response_model=AppointmentOut, status_code=status.HTTP_201_CREATED)
def book_appointment(
    payload: AppointmentCreate,
    background_tasks: BackgroundTasks,
    account: Account = Depends(get_current_account),
    db: Session = Depends(get_db),
    mailer: EmailService = Depends(get_email_service),
):
    """Book a slot; it stays pending until staff confirm it."""
    appointment, notices = appointment_service.create_appointment(
        db, account, payload.date, payload.time_slot, payload.purpose, payload.details
    )
    background_tasks.add_task(mailer.deliver, notices)
    return appointment


@router.get("/{appointment_id}", response_model=AppointmentOut)
def get_appointment(
    appointment_id: int,
    account: Account = Depends(get_current_account),
    db: Session = Depends(get_db),
):
    appointment = appointment_service.get_appointment(db, appointment_id)
    appointment_service.check_access(appointment, account)
    return appointment


@router.patch("/{appointment_id}/status", response_model=AppointmentOut, dependencies=[Depends(require_staff)])
def update_status(
    appointment_id: int,
    payload: AppointmentStatusUpdate,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    mailer: EmailService = Depends(get_email_service),
):
    appointment, notices = appointment_service.update_status(
        db, appointment_id, payload.status, payload.admin_notes
    )
    background_tasks.add_task(mailer.deliver, notices)
    return appointment


@router.post("/{appointment_id}/reschedule-request", response_model=AppointmentOut)
def request_reschedule(
    appointment_id: int,
    payload: RescheduleRequest,
    background_tasks: BackgroundTasks,
    account: Account = Depends(get_current_account),
    db: Session = Depends(get_db),
    mailer: EmailService = Depends(get_email_service),
):
    appointment_service.check_access(appointment_service.get_appointment(db, appointment_id), account)
    appointment, notices = appointment_service.request_reschedule(
        db, appointment_id, payload.new_date, payload.new_time_slot, payload.reason
    )
    background_tasks.add_task(mailer.deliver, notices)
    return appointment


@router.patch(
    "/{appointment_id}/reschedule-decision",
    response_model=AppointmentOut,
    dependencies=[Depends(require_staff)],
)
def decide_reschedule(
    appointment_id: int,
    payload: RequestDecision,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    mailer: EmailService = Depends(get_email_service),
):
    appointment, notices = appointment_service.decide_reschedule(
        db, appointment_id, payload.approved, payload.admin_notes
    )
    background_tasks.add_task(mailer.deliver, notices)
    return appointment


@router.post("/{appointment_id}/cancellation-request", response_model=AppointmentOut)
def request_cancellation(
    appointment_id: int,
    payload: CancellationRequest,
    background_tasks: BackgroundTasks,
    account: Account = Depends(get_current_account),
    db: Session = Depends(get_db),
    mailer: EmailService = Depends(get_email_service),
):
    appointment_service.check_access(appointment_service.get_appointment(db, appointment_id), account)
    appointment, notices = appointment_service.request_cancellation(db, appointment_id, payload.reason)
    background_tasks.add_task(mailer.deliver, notices)
    return appointment


@router.patch(
    "/{appointment_id}/cancellation-decision",
    response_model=AppointmentOut,
    dependencies=[Depends(require_staff)],
)
def decide_cancellation(
    appointment_id: int,
    payload: RequestDecision,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    mailer: EmailService = Depends(get_email_service),
):
    appointment, notices = appointment_service.decide_cancellation(
        db, appointment_id, payload.approved, payload.admin_notes
    )
    background_tasks.add_task(mailer.deliver, notices)
    return appointment
