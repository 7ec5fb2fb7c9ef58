"""Pydantic schemas for consultation appointments and outgoing email."""
import datetime as dt
from typing import Optional
from pydantic import BaseModel, Field

from sro_portal.models.appointment import AppointmentStatus
from sro_portal.schemas.organization import AccountOut


class AppointmentSettingsIn(BaseModel):
    allowed_days: Optional[list[int]] = None
    start_time: Optional[dt.time] = None
    end_time: Optional[dt.time] = None
    appointment_duration: Optional[int] = None
    max_appointments_per_day: Optional[int] = None


class AppointmentSettingsOut(BaseModel):
    id: int
    allowed_days: list[int]
    start_time: dt.time
    end_time: dt.time
    appointment_duration: int
    max_appointments_per_day: Optional[int] = None
    updated_at: Optional[dt.datetime] = None

    model_config = {"from_attributes": True}


class BlockedDateIn(BaseModel):
    date: Optional[dt.date] = None
    reason: Optional[str] = None


class BlockedDateOut(BaseModel):
    id: int
    date: dt.date
    reason: Optional[str] = None

    model_config = {"from_attributes": True}


class BlockedTimeSlotIn(BaseModel):
    date: Optional[dt.date] = None
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    reason: Optional[str] = None


class BlockedTimeSlotOut(BaseModel):
    id: int
    date: dt.date
    start_time: str
    end_time: str
    reason: Optional[str] = None

    model_config = {"from_attributes": True}


class AppointmentCreate(BaseModel):
    date: Optional[dt.date] = None
    time_slot: Optional[str] = None
    purpose: Optional[str] = None
    details: Optional[str] = None


class AppointmentOut(BaseModel):
    id: int
    account_id: int
    date: dt.date
    time_slot: str
    purpose: str
    details: Optional[str] = None
    status: AppointmentStatus
    admin_notes: Optional[str] = None
    reschedule_requested: bool
    requested_date: Optional[dt.date] = None
    requested_time_slot: Optional[str] = None
    reschedule_reason: Optional[str] = None
    cancellation_requested: bool
    cancellation_reason: Optional[str] = None
    created_at: Optional[dt.datetime] = None
    updated_at: Optional[dt.datetime] = None
    account: Optional[AccountOut] = None

    model_config = {"from_attributes": True}


class AppointmentStatusUpdate(BaseModel):
    status: Optional[str] = None
    admin_notes: Optional[str] = None


class RescheduleRequest(BaseModel):
    new_date: Optional[dt.date] = None
    new_time_slot: Optional[str] = None
    reason: Optional[str] = None


class CancellationRequest(BaseModel):
    reason: Optional[str] = None


class RequestDecision(BaseModel):
    approved: bool = False
    admin_notes: Optional[str] = None


class BlockedRange(BaseModel):
    start: str
    end: str
    reason: Optional[str] = None


class AvailableSlotsOut(BaseModel):
    available_slots: list[str] = Field(serialization_alias="availableSlots")
    booked_slots: list[str] = Field(serialization_alias="bookedSlots")
    blocked_slots: list[BlockedRange] = Field(serialization_alias="blockedSlots")
    max_appointments_reached: bool = Field(serialization_alias="maxAppointmentsReached")


class EmailRequest(BaseModel):
    to: str
    subject: str
    text: Optional[str] = None
    html: Optional[str] = None


class EmailResult(BaseModel):
    success: bool
    message_id: Optional[str] = Field(None, serialization_alias="messageId")
    error: Optional[str] = None
