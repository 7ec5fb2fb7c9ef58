"""Submission dispatcher — sends a completed wizard to the portal API.

Three mutually exclusive modes:

- create: multipart POST to ``/activityRequest``
- edit:   JSON PUT to ``/activityEdit/edit/{activity_id}`` (appeal)
- admin:  bearer-authenticated multipart POST to ``/api/admin/activity``

Nothing here raises to the caller. Network failures, missing sessions and
non-2xx responses all come back as a ``SubmissionResult`` with ``ok=False``
and a message fit for a toast; the wizard stays on the submission section so
the user can retry.
"""
import logging
from dataclasses import dataclass
from typing import Any, Optional

import httpx

from sro_portal.config import settings
from sro_portal.forms.constants import FormMode, Section
from sro_portal.forms.payload import assemble
from sro_portal.forms.state import UploadedFile
from sro_portal.forms.wizard import ActivityWizard

logger = logging.getLogger(__name__)

REDIRECT_TARGET = "/dashboard"
REDIRECT_DELAY_SECONDS = 1.5
APPEAL_STATUS = "For Appeal"
# Lifecycle fields only a new request carries
CREATE_ONLY_KEYS = ("status", "submitted_at")


class PortalError(Exception):
    """A portal call failed; ``str(exc)`` is the user-facing reason."""


@dataclass
class AuthSession:
    access_token: str
    email: Optional[str] = None


@dataclass
class SubmissionResult:
    ok: bool
    message: str
    data: Any = None
    redirect_to: Optional[str] = None
    redirect_after: float = 0.0


def _form_value(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


class PortalClient:
    """httpx wrapper over the portal endpoints the wizard writes to."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self._client = httpx.Client(
            base_url=base_url or settings.BACKEND_URL,
            timeout=timeout or settings.HTTP_TIMEOUT_SECONDS,
            transport=transport,
        )

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "PortalClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    @staticmethod
    def _headers(session: Optional[AuthSession]) -> dict[str, str]:
        if session is None:
            return {}
        return {"Authorization": f"Bearer {session.access_token}"}

    @staticmethod
    def _parse(response: httpx.Response, fallback: str) -> Any:
        try:
            body = response.json()
        except ValueError:
            body = None
        if response.is_success:
            return body
        if isinstance(body, dict):
            if body.get("error"):
                raise PortalError(body["error"])
            if isinstance(body.get("detail"), str):
                raise PortalError(body["detail"])
        raise PortalError(fallback)

    @staticmethod
    def _multipart(
        activity: dict[str, Any],
        schedule: dict[str, Any],
        upload: Optional[UploadedFile],
    ) -> tuple[dict[str, str], dict[str, Any]]:
        data = {key: _form_value(value) for key, value in {**activity, **schedule}.items()}
        files = {}
        if upload is not None:
            files["file"] = (upload.filename, upload.content, upload.content_type)
        return data, files

    def resolve_account(self, session: AuthSession) -> dict[str, Any]:
        response = self._client.get("/api/accounts/me", headers=self._headers(session))
        return self._parse(response, "Account not found")

    def create_activity(
        self,
        activity: dict[str, Any],
        schedule: dict[str, Any],
        upload: Optional[UploadedFile],
        session: Optional[AuthSession] = None,
    ) -> Any:
        data, files = self._multipart(activity, schedule, upload)
        response = self._client.post(
            "/activityRequest", data=data, files=files, headers=self._headers(session)
        )
        return self._parse(response, "Failed to submit activity")

    def edit_activity(self, activity_id: str, payload: dict[str, Any]) -> Any:
        response = self._client.put(f"/activityEdit/edit/{activity_id}", json=payload)
        return self._parse(response, "Failed to update activity")

    def admin_create_activity(
        self,
        activity: dict[str, Any],
        schedule: dict[str, Any],
        upload: Optional[UploadedFile],
        session: AuthSession,
    ) -> Any:
        data, files = self._multipart(activity, schedule, upload)
        response = self._client.post(
            "/api/admin/activity", data=data, files=files, headers=self._headers(session)
        )
        return self._parse(response, "Failed to submit activity.")


class SubmissionDispatcher:
    def __init__(self, client: PortalClient):
        self.client = client

    def submit(
        self,
        wizard: ActivityWizard,
        session: Optional[AuthSession],
        activity_id: Optional[str] = None,
    ) -> SubmissionResult:
        """Validate the submission section, then write through the mode's endpoint."""
        result = wizard.validate(Section.submission)
        if not result.valid:
            wizard.mark_error(result)
            return SubmissionResult(ok=False, message=result.message)

        if wizard.submitting:
            return SubmissionResult(ok=False, message="A submission is already in progress.")

        wizard.submitting = True
        try:
            data = self._dispatch(wizard, session, activity_id)
        except PortalError as exc:
            logger.warning("Activity submission (%s) rejected: %s", wizard.mode.value, exc)
            wizard.last_message = f"Submission failed: {exc}"
            return SubmissionResult(ok=False, message=wizard.last_message)
        except httpx.HTTPError as exc:
            logger.warning("Activity submission (%s) failed: %s", wizard.mode.value, exc)
            wizard.last_message = "Submission failed: could not reach the server."
            return SubmissionResult(ok=False, message=wizard.last_message)
        finally:
            wizard.submitting = False

        logger.info("Activity submission (%s) accepted", wizard.mode.value)
        return SubmissionResult(
            ok=True,
            message="Activity submitted!",
            data=data,
            redirect_to=REDIRECT_TARGET,
            redirect_after=REDIRECT_DELAY_SECONDS,
        )

    def _dispatch(
        self,
        wizard: ActivityWizard,
        session: Optional[AuthSession],
        activity_id: Optional[str],
    ) -> Any:
        if session is None:
            if wizard.mode == FormMode.admin:
                raise PortalError("No active session. Please log in again.")
            raise PortalError("User not authenticated")

        account = self.client.resolve_account(session)
        if not isinstance(account, dict) or not account.get("account_id"):
            raise PortalError("Account not found")

        if wizard.mode == FormMode.edit:
            if not activity_id:
                raise PortalError("Missing activity_id for edit")
            payload = build_edit_payload(wizard, activity_id, account["account_id"])
            return self.client.edit_activity(activity_id, payload)

        activity, schedule = assemble(wizard.state)
        activity["account_id"] = account["account_id"]
        upload = wizard.state.selected_file
        if wizard.mode == FormMode.admin:
            return self.client.admin_create_activity(activity, schedule, upload, session)
        return self.client.create_activity(activity, schedule, upload, session)


def build_edit_payload(wizard: ActivityWizard, activity_id: str, account_id: Any) -> dict[str, Any]:
    """Appeal payload: prior staff decisions are always cleared."""
    activity, schedule = assemble(wizard.state)
    for key in CREATE_ONLY_KEYS:
        activity.pop(key, None)
    activity["account_id"] = account_id
    return {
        **activity,
        **schedule,
        "activity_id": activity_id,
        "appeal_reason": wizard.state.appeal_reason,
        "final_status": APPEAL_STATUS,
        "sro_approval_status": None,
        "odsa_approval_status": None,
        "sro_remarks": None,
        "odsa_remarks": None,
    }
