"""Tests for consultation appointments.

Covers:
- Office-hour settings (staff only, single row)
- Slot grid and availability with bookings and blocks
- Booking rules: blocked dates/slots, confirmed conflicts, daily cap
- Status updates, reschedule and cancellation workflows
- Email notices handed to the mailer
"""
from datetime import date, time

import pytest

from sro_portal.config import settings
from sro_portal.models.account import Role
from sro_portal.models.appointment import Appointment, AppointmentStatus
from sro_portal.services.appointment_service import js_weekday, slot_grid
from tests.conftest import auth_header, create_test_account

STUDENT = "student@up.edu.ph"
OTHER = "other@up.edu.ph"
SRO = "sro@up.edu.ph"
MONDAY = "2030-01-07"
TUESDAY = "2030-01-08"


def _setup(db):
    student = create_test_account(db)
    create_test_account(db, email=OTHER, name="Other Student")
    create_test_account(db, email=SRO, role=Role.sro, name="SRO Staff")
    return student


def _configure(client, **overrides):
    body = {
        "allowed_days": [1, 2, 3, 4, 5],
        "start_time": "09:00",
        "end_time": "11:00",
        "appointment_duration": 30,
        "max_appointments_per_day": None,
    }
    body.update(overrides)
    resp = client.post("/api/appointments/settings", json=body, headers=auth_header(SRO))
    assert resp.status_code == 200, resp.text
    return resp.json()


def _book(client, day=MONDAY, slot="09:00", email=STUDENT, purpose="Org registration consult"):
    return client.post(
        "/api/appointments",
        json={"date": day, "time_slot": slot, "purpose": purpose},
        headers=auth_header(email),
    )


def _set_status(db, appointment_id, status):
    appointment = db.query(Appointment).filter(Appointment.id == appointment_id).first()
    appointment.status = status
    db.commit()


class TestSlotHelpers:

    def test_slot_grid_excludes_closing_time(self):
        assert slot_grid(time(9, 0), time(11, 0), 30) == ["09:00", "09:30", "10:00", "10:30"]

    def test_slot_grid_uneven_duration(self):
        assert slot_grid(time(9, 0), time(10, 0), 45) == ["09:00", "09:45"]

    def test_weekday_numbers_start_on_sunday(self):
        assert js_weekday(date(2030, 1, 6)) == 0
        assert js_weekday(date(2030, 1, 7)) == 1
        assert js_weekday(date(2030, 1, 12)) == 6


class TestSettings:

    def test_no_settings_yet(self, client, db):
        resp = client.get("/api/appointments/settings")
        assert resp.status_code == 200
        assert resp.json() is None

    def test_save_and_update_in_place(self, client, db):
        _setup(db)
        first = _configure(client)
        second = _configure(client, appointment_duration=20)
        assert second["id"] == first["id"]
        assert second["appointment_duration"] == 20
        assert client.get("/api/appointments/settings").json()["appointment_duration"] == 20

    def test_missing_fields(self, client, db):
        _setup(db)
        resp = client.post(
            "/api/appointments/settings", json={"start_time": "09:00"}, headers=auth_header(SRO)
        )
        assert resp.status_code == 400
        assert resp.json()["detail"] == "Missing required fields"

    def test_end_before_start(self, client, db):
        _setup(db)
        resp = client.post(
            "/api/appointments/settings",
            json={"allowed_days": [1], "start_time": "11:00", "end_time": "09:00", "appointment_duration": 30},
            headers=auth_header(SRO),
        )
        assert resp.status_code == 400

    def test_students_cannot_change_settings(self, client, db):
        _setup(db)
        resp = client.post(
            "/api/appointments/settings",
            json={"allowed_days": [1], "start_time": "09:00", "end_time": "11:00", "appointment_duration": 30},
            headers=auth_header(STUDENT),
        )
        assert resp.status_code == 403


class TestBlocks:

    def test_blocked_date_lifecycle(self, client, db):
        _setup(db)
        resp = client.post(
            "/api/appointments/blocked-dates",
            json={"date": MONDAY, "reason": "Foundation Day"},
            headers=auth_header(SRO),
        )
        assert resp.status_code == 201
        blocked_id = resp.json()["id"]
        assert [b["date"] for b in client.get("/api/appointments/blocked-dates").json()] == [MONDAY]

        resp = client.delete(f"/api/appointments/blocked-dates/{blocked_id}", headers=auth_header(SRO))
        assert resp.json()["message"] == "Blocked date deleted successfully"
        assert client.get("/api/appointments/blocked-dates").json() == []

    def test_duplicate_blocked_date(self, client, db):
        _setup(db)
        body = {"date": MONDAY}
        client.post("/api/appointments/blocked-dates", json=body, headers=auth_header(SRO))
        resp = client.post("/api/appointments/blocked-dates", json=body, headers=auth_header(SRO))
        assert resp.status_code == 409

    def test_blocked_time_slot_requires_fields(self, client, db):
        _setup(db)
        resp = client.post(
            "/api/appointments/blocked-time-slots", json={"date": MONDAY}, headers=auth_header(SRO)
        )
        assert resp.status_code == 400
        assert resp.json()["detail"] == "Date, start time, and end time are required"

    def test_delete_unknown_block(self, client, db):
        _setup(db)
        resp = client.delete("/api/appointments/blocked-time-slots/99", headers=auth_header(SRO))
        assert resp.status_code == 404


class TestAvailability:

    def test_requires_settings(self, client, db):
        resp = client.get("/api/appointments/available-slots", params={"date": MONDAY})
        assert resp.status_code == 400
        assert resp.json()["detail"] == "Appointment settings not configured"

    def test_day_not_offered(self, client, db):
        _setup(db)
        _configure(client, allowed_days=[2])
        resp = client.get("/api/appointments/available-slots", params={"date": MONDAY})
        assert resp.status_code == 400
        assert resp.json()["detail"] == "Appointments are not available on this day"

    def test_bookings_and_blocks_remove_slots(self, client, db):
        _setup(db)
        _configure(client)
        assert _book(client, slot="09:00").status_code == 201
        client.post(
            "/api/appointments/blocked-time-slots",
            json={"date": MONDAY, "start_time": "10:00", "end_time": "10:30", "reason": "Staff meeting"},
            headers=auth_header(SRO),
        )
        resp = client.get("/api/appointments/available-slots", params={"date": MONDAY})
        assert resp.status_code == 200
        data = resp.json()
        assert data["availableSlots"] == ["09:30"]
        assert data["bookedSlots"] == ["09:00"]
        assert data["blockedSlots"] == [{"start": "10:00", "end": "10:30", "reason": "Staff meeting"}]
        assert data["maxAppointmentsReached"] is False

    def test_blocked_date_reports_reason(self, client, db):
        _setup(db)
        _configure(client)
        client.post(
            "/api/appointments/blocked-dates",
            json={"date": MONDAY, "reason": "Holiday"},
            headers=auth_header(SRO),
        )
        resp = client.get("/api/appointments/available-slots", params={"date": MONDAY})
        assert resp.status_code == 400
        assert resp.json()["detail"] == {"error": "This date is blocked for appointments", "reason": "Holiday"}

    def test_cap_reached(self, client, db):
        _setup(db)
        _configure(client, max_appointments_per_day=1)
        booked = _book(client).json()
        _set_status(db, booked["id"], AppointmentStatus.confirmed)
        resp = client.get("/api/appointments/available-slots", params={"date": MONDAY})
        assert resp.json()["maxAppointmentsReached"] is True


class TestBooking:

    def test_book_sends_confirmation(self, client, db, mailer):
        _setup(db)
        resp = _book(client)
        assert resp.status_code == 201, resp.text
        data = resp.json()
        assert data["status"] == "pending"
        assert data["time_slot"] == "09:00"
        assert data["account"]["email"] == STUDENT
        assert [n.to for n in mailer.sent] == [STUDENT]
        assert mailer.sent[0].subject == "Your Appointment Request Confirmation"

    def test_office_is_notified_when_configured(self, client, db, mailer, monkeypatch):
        monkeypatch.setattr(settings, "ADMIN_EMAIL", "office@up.edu.ph")
        _setup(db)
        _book(client)
        assert [n.subject for n in mailer.sent] == [
            "Your Appointment Request Confirmation",
            "New Appointment Request",
        ]
        assert "Test Student" in mailer.sent[1].html

    def test_user_text_is_escaped_in_mail(self, client, db, mailer):
        _setup(db)
        _book(client, purpose="<script>alert(1)</script>")
        assert "<script>" not in mailer.sent[0].html
        assert "&lt;script&gt;" in mailer.sent[0].html

    def test_missing_fields(self, client, db):
        _setup(db)
        resp = client.post("/api/appointments", json={"date": MONDAY}, headers=auth_header(STUDENT))
        assert resp.status_code == 400
        assert resp.json()["detail"] == "Missing required fields"

    def test_bad_slot_format(self, client, db):
        _setup(db)
        resp = _book(client, slot="nine")
        assert resp.status_code == 400

    def test_requires_login(self, client, db):
        resp = client.post("/api/appointments", json={"date": MONDAY, "time_slot": "09:00", "purpose": "x"})
        assert resp.status_code == 401

    def test_blocked_slot(self, client, db):
        _setup(db)
        client.post(
            "/api/appointments/blocked-time-slots",
            json={"date": MONDAY, "start_time": "09:00", "end_time": "09:30", "reason": "Assembly"},
            headers=auth_header(SRO),
        )
        resp = _book(client, slot="09:30")
        assert resp.status_code == 400
        assert resp.json()["detail"] == {"error": "This time slot is blocked", "reason": "Assembly"}

    def test_confirmed_slot_is_taken(self, client, db):
        _setup(db)
        first = _book(client).json()
        _set_status(db, first["id"], AppointmentStatus.confirmed)
        resp = _book(client, email=OTHER)
        assert resp.status_code == 400
        assert resp.json()["detail"] == "This time slot is already booked"

    def test_daily_cap(self, client, db):
        _setup(db)
        _configure(client, max_appointments_per_day=1)
        first = _book(client).json()
        _set_status(db, first["id"], AppointmentStatus.confirmed)
        resp = _book(client, slot="10:00", email=OTHER)
        assert resp.status_code == 400
        assert resp.json()["detail"] == "Maximum number of appointments for this day has been reached"


class TestAccess:

    def test_students_only_list_their_own(self, client, db):
        _setup(db)
        _book(client)
        _book(client, slot="10:00", email=OTHER)
        mine = client.get("/api/appointments", headers=auth_header(STUDENT)).json()
        assert [a["account"]["email"] for a in mine] == [STUDENT]
        everyone = client.get("/api/appointments", headers=auth_header(SRO)).json()
        assert len(everyone) == 2

    def test_staff_filters(self, client, db):
        _setup(db)
        _book(client)
        _book(client, day=TUESDAY)
        resp = client.get("/api/appointments", params={"date": TUESDAY}, headers=auth_header(SRO))
        assert [a["date"] for a in resp.json()] == [TUESDAY]

    def test_cannot_view_someone_elses(self, client, db):
        _setup(db)
        booked = _book(client).json()
        resp = client.get(f"/api/appointments/{booked['id']}", headers=auth_header(OTHER))
        assert resp.status_code == 403

    def test_unknown_appointment(self, client, db):
        _setup(db)
        resp = client.get("/api/appointments/999", headers=auth_header(SRO))
        assert resp.status_code == 404


class TestStatus:

    def test_confirm_notifies_student(self, client, db, mailer):
        _setup(db)
        booked = _book(client).json()
        resp = client.patch(
            f"/api/appointments/{booked['id']}/status",
            json={"status": "confirmed", "admin_notes": "Bring your org documents"},
            headers=auth_header(SRO),
        )
        assert resp.status_code == 200
        assert resp.json()["status"] == "confirmed"
        assert resp.json()["admin_notes"] == "Bring your org documents"
        notice = mailer.sent[-1]
        assert notice.subject == "Your Appointment Has Been Confirmed"
        assert "Bring your org documents" in notice.html

    @pytest.mark.parametrize("value", ["reschedule-pending", "archived", None])
    def test_invalid_status(self, client, db, value):
        _setup(db)
        booked = _book(client).json()
        resp = client.patch(
            f"/api/appointments/{booked['id']}/status", json={"status": value}, headers=auth_header(SRO)
        )
        assert resp.status_code == 400
        assert resp.json()["detail"] == "Invalid status provided"

    def test_students_cannot_set_status(self, client, db):
        _setup(db)
        booked = _book(client).json()
        resp = client.patch(
            f"/api/appointments/{booked['id']}/status",
            json={"status": "confirmed"},
            headers=auth_header(STUDENT),
        )
        assert resp.status_code == 403


class TestReschedule:

    def _request(self, client, appointment_id, new_date=TUESDAY, slot="10:00"):
        return client.post(
            f"/api/appointments/{appointment_id}/reschedule-request",
            json={"new_date": new_date, "new_time_slot": slot, "reason": "Exam conflict"},
            headers=auth_header(STUDENT),
        )

    def test_request_and_approve(self, client, db, mailer):
        _setup(db)
        booked = _book(client).json()
        resp = self._request(client, booked["id"])
        assert resp.status_code == 200
        data = resp.json()
        assert data["status"] == "reschedule-pending"
        assert data["requested_date"] == TUESDAY
        assert mailer.sent[-1].subject == "Your Appointment Reschedule Request"

        resp = client.patch(
            f"/api/appointments/{booked['id']}/reschedule-decision",
            json={"approved": True},
            headers=auth_header(SRO),
        )
        data = resp.json()
        assert data["status"] == "confirmed"
        assert data["date"] == TUESDAY
        assert data["time_slot"] == "10:00"
        assert data["reschedule_requested"] is False
        assert data["requested_date"] is None
        assert mailer.sent[-1].subject == "Your Appointment Reschedule Request has been Approved"

    def test_reject_keeps_original_slot(self, client, db):
        _setup(db)
        booked = _book(client).json()
        self._request(client, booked["id"])
        resp = client.patch(
            f"/api/appointments/{booked['id']}/reschedule-decision",
            json={"approved": False, "admin_notes": "No slots that week"},
            headers=auth_header(SRO),
        )
        data = resp.json()
        assert data["status"] == "confirmed"
        assert data["date"] == MONDAY
        assert data["admin_notes"] == "No slots that week"

    def test_decision_without_request(self, client, db):
        _setup(db)
        booked = _book(client).json()
        resp = client.patch(
            f"/api/appointments/{booked['id']}/reschedule-decision",
            json={"approved": True},
            headers=auth_header(SRO),
        )
        assert resp.status_code == 400
        assert resp.json()["detail"] == "This appointment has no reschedule request"

    def test_closed_appointment(self, client, db):
        _setup(db)
        booked = _book(client).json()
        _set_status(db, booked["id"], AppointmentStatus.completed)
        resp = self._request(client, booked["id"])
        assert resp.status_code == 400
        assert resp.json()["detail"] == "Cannot reschedule an appointment with status: completed"

    def test_requested_date_blocked(self, client, db):
        _setup(db)
        booked = _book(client).json()
        client.post(
            "/api/appointments/blocked-dates",
            json={"date": TUESDAY, "reason": "Holiday"},
            headers=auth_header(SRO),
        )
        resp = self._request(client, booked["id"])
        assert resp.status_code == 400
        assert resp.json()["detail"]["error"] == "The requested date is blocked for appointments"

    def test_only_owner_may_request(self, client, db):
        _setup(db)
        booked = _book(client, email=OTHER).json()
        resp = self._request(client, booked["id"])
        assert resp.status_code == 403


class TestCancellation:

    def _request(self, client, appointment_id, reason="Org event moved"):
        return client.post(
            f"/api/appointments/{appointment_id}/cancellation-request",
            json={"reason": reason},
            headers=auth_header(STUDENT),
        )

    def test_reason_required(self, client, db):
        _setup(db)
        booked = _book(client).json()
        resp = self._request(client, booked["id"], reason="  ")
        assert resp.status_code == 400
        assert resp.json()["detail"] == "Cancellation reason is required"

    def test_request_and_approve(self, client, db, mailer):
        _setup(db)
        booked = _book(client).json()
        resp = self._request(client, booked["id"])
        assert resp.json()["status"] == "cancellation-pending"

        resp = client.patch(
            f"/api/appointments/{booked['id']}/cancellation-decision",
            json={"approved": True},
            headers=auth_header(SRO),
        )
        data = resp.json()
        assert data["status"] == "cancelled"
        assert data["cancellation_reason"] == "Org event moved"
        assert data["cancellation_requested"] is False
        assert mailer.sent[-1].subject == "Your Appointment Cancellation Request has been Approved"

    def test_reject_restores_confirmed(self, client, db):
        _setup(db)
        booked = _book(client).json()
        self._request(client, booked["id"])
        resp = client.patch(
            f"/api/appointments/{booked['id']}/cancellation-decision",
            json={"approved": False},
            headers=auth_header(SRO),
        )
        data = resp.json()
        assert data["status"] == "confirmed"
        assert data["cancellation_reason"] is None

    def test_already_cancelled(self, client, db):
        _setup(db)
        booked = _book(client).json()
        _set_status(db, booked["id"], AppointmentStatus.cancelled)
        resp = self._request(client, booked["id"])
        assert resp.status_code == 400
        assert resp.json()["detail"] == "Cannot cancel an appointment with status: cancelled"
