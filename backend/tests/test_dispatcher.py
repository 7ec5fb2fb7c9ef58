"""Tests for the submission dispatcher against a mocked portal."""
import json
from datetime import date

import httpx

from sro_portal.forms.constants import FormMode, Section
from sro_portal.forms.dispatcher import (
    AuthSession, PortalClient, SubmissionDispatcher, build_edit_payload,
)
from sro_portal.forms.wizard import ActivityWizard
from tests.conftest import form_state

TODAY = date(2026, 3, 2)
SESSION = AuthSession(access_token="token-123", email="student@up.edu.ph")


class FakePortal:
    """Records requests and answers like the portal API."""

    def __init__(self, account=None, status_code=201, body=None):
        self.account = account if account is not None else {"account_id": 7}
        self.status_code = status_code
        self.body = body if body is not None else {"activity_id": "0326-1234"}
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.url.path == "/api/accounts/me":
            return httpx.Response(200, json=self.account)
        return httpx.Response(self.status_code, json=self.body)

    def writes(self):
        return [r for r in self.requests if r.url.path != "/api/accounts/me"]


def _dispatcher(portal):
    client = PortalClient(base_url="http://portal.test", transport=httpx.MockTransport(portal))
    return SubmissionDispatcher(client)


def _wizard(mode=FormMode.create, **overrides):
    overrides.setdefault("start_date", "2026-03-20")
    wizard = ActivityWizard(form_state(**overrides), mode=mode, today=TODAY)
    wizard.current_section = Section.submission
    return wizard


class TestCreate:

    def test_successful_create(self):
        portal = FakePortal()
        result = _dispatcher(portal).submit(_wizard(), SESSION)
        assert result.ok
        assert result.message == "Activity submitted!"
        assert result.redirect_to == "/dashboard"
        assert result.redirect_after == 1.5
        (write,) = portal.writes()
        assert write.method == "POST"
        assert write.url.path == "/activityRequest"
        assert write.headers["Authorization"] == "Bearer token-123"
        body = write.content
        assert b'name="account_id"' in body
        assert b'name="file"; filename="request.pdf"' in body

    def test_invalid_submission_sends_nothing(self):
        portal = FakePortal()
        wizard = _wizard(selected_file=None)
        result = _dispatcher(portal).submit(wizard, SESSION)
        assert not result.ok
        assert result.message == "Please upload your Activity Request PDF."
        assert wizard.field_errors["selectedFile"] is True
        assert portal.requests == []

    def test_missing_session(self):
        portal = FakePortal()
        result = _dispatcher(portal).submit(_wizard(), None)
        assert not result.ok
        assert result.message == "Submission failed: User not authenticated"
        assert portal.requests == []

    def test_unknown_account(self):
        portal = FakePortal(account={})
        result = _dispatcher(portal).submit(_wizard(), SESSION)
        assert result.message == "Submission failed: Account not found"
        assert portal.writes() == []

    def test_backend_error_text_is_used(self):
        portal = FakePortal(status_code=400, body={"error": "Venue is required and must be under 100 characters."})
        wizard = _wizard()
        result = _dispatcher(portal).submit(wizard, SESSION)
        assert not result.ok
        assert result.message == "Submission failed: Venue is required and must be under 100 characters."
        assert wizard.current_section == Section.submission
        assert wizard.submitting is False

    def test_generic_fallback(self):
        portal = FakePortal(status_code=500, body=[])
        result = _dispatcher(portal).submit(_wizard(), SESSION)
        assert result.message == "Submission failed: Failed to submit activity"

    def test_network_failure(self):
        def handler(request):
            raise httpx.ConnectError("refused", request=request)

        client = PortalClient(base_url="http://portal.test", transport=httpx.MockTransport(handler))
        result = SubmissionDispatcher(client).submit(_wizard(), SESSION)
        assert not result.ok
        assert result.message == "Submission failed: could not reach the server."

    def test_in_flight_submission_is_refused(self):
        portal = FakePortal()
        wizard = _wizard()
        wizard.submitting = True
        result = _dispatcher(portal).submit(wizard, SESSION)
        assert not result.ok
        assert portal.requests == []


class TestEdit:

    def test_edit_puts_appeal_payload(self):
        portal = FakePortal(status_code=200, body={"message": "Activity updated successfully"})
        wizard = _wizard(FormMode.edit, selected_file=None, appeal_reason="Moved to a bigger venue")
        result = _dispatcher(portal).submit(wizard, SESSION, activity_id="0326-1234")
        assert result.ok
        (write,) = portal.writes()
        assert write.method == "PUT"
        assert write.url.path == "/activityEdit/edit/0326-1234"
        payload = json.loads(write.content)
        assert payload["final_status"] == "For Appeal"
        assert payload["sro_approval_status"] is None
        assert payload["odsa_approval_status"] is None
        assert payload["appeal_reason"] == "Moved to a bigger venue"
        assert payload["account_id"] == 7

    def test_edit_without_id(self):
        portal = FakePortal()
        wizard = _wizard(FormMode.edit, appeal_reason="Moved to a bigger venue")
        result = _dispatcher(portal).submit(wizard, SESSION)
        assert result.message == "Submission failed: Missing activity_id for edit"

    def test_build_edit_payload_clears_decisions(self):
        wizard = _wizard(FormMode.edit, appeal_reason="Updated schedule")
        payload = build_edit_payload(wizard, "0326-1234", 7)
        for key in ("sro_approval_status", "odsa_approval_status", "sro_remarks", "odsa_remarks"):
            assert payload[key] is None
        assert payload["end_date"] == payload["start_date"]

    def test_build_edit_payload_has_no_create_status(self):
        wizard = _wizard(FormMode.edit, appeal_reason="Updated schedule")
        payload = build_edit_payload(wizard, "0326-1234", 7)
        assert "status" not in payload
        assert "submitted_at" not in payload
        assert payload["final_status"] == "For Appeal"


class TestAdmin:

    def test_admin_needs_session(self):
        portal = FakePortal()
        wizard = _wizard(FormMode.admin)
        result = _dispatcher(portal).submit(wizard, None)
        assert result.message == "Submission failed: No active session. Please log in again."

    def test_admin_posts_with_bearer(self):
        portal = FakePortal()
        result = _dispatcher(portal).submit(_wizard(FormMode.admin), SESSION)
        assert result.ok
        (write,) = portal.writes()
        assert write.url.path == "/api/admin/activity"
        assert write.headers["Authorization"] == "Bearer token-123"
