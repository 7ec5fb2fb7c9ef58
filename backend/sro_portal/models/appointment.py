"""Consultation appointment ORM models: office settings, blocked days and slots, bookings."""
import enum
from sqlalchemy import (
    Column, String, Text, Boolean, Date, Time, DateTime, Integer, JSON, ForeignKey,
)
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from sro_portal.database import Base
from sro_portal.models.activity import _status_type


class AppointmentStatus(str, enum.Enum):
    pending = "pending"
    confirmed = "confirmed"
    cancelled = "cancelled"
    completed = "completed"
    no_show = "no-show"
    reschedule_pending = "reschedule-pending"
    cancellation_pending = "cancellation-pending"


# Statuses staff may set directly
SETTABLE_STATUSES = (
    AppointmentStatus.pending,
    AppointmentStatus.confirmed,
    AppointmentStatus.cancelled,
    AppointmentStatus.completed,
    AppointmentStatus.no_show,
)

CLOSED_STATUSES = (AppointmentStatus.cancelled, AppointmentStatus.completed, AppointmentStatus.no_show)


class AppointmentSettings(Base):
    __tablename__ = "appointment_settings"

    id = Column(Integer, primary_key=True, autoincrement=True)
    allowed_days = Column(JSON, nullable=False)  # weekday numbers, 0 = Sunday
    start_time = Column(Time, nullable=False)
    end_time = Column(Time, nullable=False)
    appointment_duration = Column(Integer, nullable=False)  # minutes
    max_appointments_per_day = Column(Integer, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())


class BlockedDate(Base):
    __tablename__ = "blocked_dates"

    id = Column(Integer, primary_key=True, autoincrement=True)
    date = Column(Date, nullable=False, unique=True)
    reason = Column(Text, nullable=True)


class BlockedTimeSlot(Base):
    __tablename__ = "blocked_time_slots"

    id = Column(Integer, primary_key=True, autoincrement=True)
    date = Column(Date, nullable=False, index=True)
    start_time = Column(String(5), nullable=False)  # HH:MM
    end_time = Column(String(5), nullable=False)
    reason = Column(Text, nullable=True)


class Appointment(Base):
    __tablename__ = "appointments"

    id = Column(Integer, primary_key=True, autoincrement=True)
    account_id = Column(Integer, ForeignKey("account.account_id"), nullable=False, index=True)
    date = Column(Date, nullable=False, index=True)
    time_slot = Column(String(5), nullable=False)  # HH:MM
    purpose = Column(String(255), nullable=False)
    details = Column(Text, nullable=True)
    status = Column(_status_type(AppointmentStatus), nullable=False, default=AppointmentStatus.pending)
    admin_notes = Column(Text, nullable=True)
    reschedule_requested = Column(Boolean, nullable=False, default=False)
    requested_date = Column(Date, nullable=True)
    requested_time_slot = Column(String(5), nullable=True)
    reschedule_reason = Column(Text, nullable=True)
    cancellation_requested = Column(Boolean, nullable=False, default=False)
    cancellation_reason = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    account = relationship("Account")
