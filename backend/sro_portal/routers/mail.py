"""Direct email sending for signed-in portal users."""
import html
import logging
from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import JSONResponse

from sro_portal.models.account import Account
from sro_portal.schemas.appointment import EmailRequest, EmailResult
from sro_portal.services.auth import get_current_account
from sro_portal.services.email_service import (
    EmailDeliveryError, EmailService, Notification, get_email_service,
)

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/send-email", response_model=EmailResult)
async def send_email(
    payload: EmailRequest,
    account: Account = Depends(get_current_account),
    mailer: EmailService = Depends(get_email_service),
):
    if not payload.html and not payload.text:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Email needs a text or html body")
    notification = Notification(
        to=payload.to,
        subject=payload.subject,
        html=payload.html or f"<p>{html.escape(payload.text)}</p>",
        text=payload.text,
    )
    try:
        message_id = await mailer.send(notification)
    except EmailDeliveryError as exc:
        logger.error("Email from account %s to %s failed: %s", account.account_id, payload.to, exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"success": False, "error": str(exc)},
        )
    return EmailResult(success=True, message_id=message_id)
