"""Email notices sent to students and the office about appointment changes."""
import datetime as dt
import html
from typing import Optional

from sro_portal.config import settings
from sro_portal.models.appointment import Appointment, AppointmentStatus
from sro_portal.services.email_service import Notification

STATUS_NOTICES = {
    AppointmentStatus.confirmed: (
        "Your Appointment Has Been Confirmed",
        "<p>Your appointment has been confirmed for:</p>",
    ),
    AppointmentStatus.cancelled: (
        "Your Appointment Has Been Cancelled",
        "<p>Your appointment for the following date and time has been cancelled:</p>",
    ),
    AppointmentStatus.completed: (
        "Your Appointment Has Been Completed",
        "<p>Thank you for attending your appointment.</p>",
    ),
    AppointmentStatus.no_show: (
        "Missed Appointment Notice",
        "<p>Our records indicate that you missed your scheduled appointment:</p>",
    ),
}


def _e(value) -> str:
    return html.escape(str(value))


def _when(day: dt.date, slot: str, label: str = "") -> str:
    return (
        f"<p><strong>{label}Date:</strong> {_e(day)}</p>"
        f"<p><strong>{label}Time:</strong> {_e(slot)}</p>"
    )


def _notes(admin_notes: Optional[str]) -> str:
    return f"<p><strong>Notes:</strong> {_e(admin_notes)}</p>" if admin_notes else ""


def _requester(appointment: Appointment) -> str:
    account = appointment.account
    return f"{_e(account.account_name)} ({_e(account.email)})"


def _student(appointment: Appointment, subject: str, body: str) -> Notification:
    return Notification(to=appointment.account.email, subject=subject, html=f"<h2>{subject}</h2>{body}")


def _office(subject: str, body: str) -> list[Notification]:
    if not settings.ADMIN_EMAIL:
        return []
    return [Notification(to=settings.ADMIN_EMAIL, subject=subject, html=f"<h2>{subject}</h2>{body}")]


def booking_received(appointment: Appointment) -> list[Notification]:
    details = _when(appointment.date, appointment.time_slot) + (
        f"<p><strong>Purpose:</strong> {_e(appointment.purpose)}</p>"
    )
    return [
        _student(
            appointment,
            "Your Appointment Request Confirmation",
            "<p>Thank you for scheduling an appointment.</p>" + details
            + "<p>Your appointment is currently pending approval. "
            "You will receive another email once it has been confirmed.</p>",
        ),
        *_office(
            "New Appointment Request",
            "<p>A new appointment request has been submitted.</p>"
            f"<p><strong>User:</strong> {_requester(appointment)}</p>" + details
            + "<p>Please review this request in the admin dashboard.</p>",
        ),
    ]


def status_changed(appointment: Appointment, admin_notes: Optional[str]) -> list[Notification]:
    notice = STATUS_NOTICES.get(appointment.status)
    if notice is None:
        return []
    subject, intro = notice
    body = intro + _when(appointment.date, appointment.time_slot)
    if appointment.status == AppointmentStatus.no_show:
        body += "<p>If you need to reschedule, please make a new appointment through the system.</p>"
    return [_student(appointment, subject, body + _notes(admin_notes))]


def reschedule_requested(appointment: Appointment) -> list[Notification]:
    moves = _when(appointment.date, appointment.time_slot, "Original ") + _when(
        appointment.requested_date, appointment.requested_time_slot, "Requested "
    )
    reason = appointment.reschedule_reason or "No reason provided"
    return [
        *_office(
            "Appointment Reschedule Request",
            "<p>An appointment reschedule has been requested.</p>"
            f"<p><strong>User:</strong> {_requester(appointment)}</p>" + moves
            + f"<p><strong>Reason:</strong> {_e(reason)}</p>"
            "<p>Please review this request in the admin dashboard.</p>",
        ),
        _student(
            appointment,
            "Your Appointment Reschedule Request",
            "<p>Your appointment reschedule request has been received and is pending approval.</p>"
            + moves
            + "<p>You will receive another email once your request has been processed.</p>",
        ),
    ]


def reschedule_decided(appointment: Appointment, approved: bool, admin_notes: Optional[str]) -> list[Notification]:
    """Sent after the decision is applied, so the appointment shows the final slot."""
    if approved:
        body = (
            "<p>Your appointment reschedule request has been approved.</p>"
            "<p>Your appointment has been rescheduled to:</p>"
        )
    else:
        body = (
            "<p>Your appointment reschedule request has been rejected.</p>"
            "<p>Your appointment remains as originally scheduled:</p>"
        )
    subject = f"Your Appointment Reschedule Request has been {'Approved' if approved else 'Rejected'}"
    body += _when(appointment.date, appointment.time_slot) + _notes(admin_notes)
    return [_student(appointment, subject, body)]


def cancellation_requested(appointment: Appointment) -> list[Notification]:
    when = _when(appointment.date, appointment.time_slot)
    return [
        *_office(
            "Appointment Cancellation Request",
            "<p>An appointment cancellation has been requested.</p>"
            f"<p><strong>User:</strong> {_requester(appointment)}</p>" + when
            + f"<p><strong>Reason:</strong> {_e(appointment.cancellation_reason)}</p>"
            "<p>Please review this request in the admin dashboard.</p>",
        ),
        _student(
            appointment,
            "Your Appointment Cancellation Request",
            "<p>Your appointment cancellation request has been received and is pending approval.</p>"
            + when
            + "<p>You will receive another email once your request has been processed.</p>",
        ),
    ]


def cancellation_decided(appointment: Appointment, approved: bool, admin_notes: Optional[str]) -> list[Notification]:
    if approved:
        body = (
            "<p>Your appointment cancellation request has been approved.</p>"
            "<p>Your appointment for the following date and time has been cancelled:</p>"
        )
    else:
        body = (
            "<p>Your appointment cancellation request has been rejected.</p>"
            "<p>Your appointment remains scheduled for:</p>"
        )
    subject = f"Your Appointment Cancellation Request has been {'Approved' if approved else 'Rejected'}"
    body += _when(appointment.date, appointment.time_slot) + _notes(admin_notes)
    return [_student(appointment, subject, body)]
