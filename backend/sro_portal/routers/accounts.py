"""The signed-in account."""
import logging
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from sro_portal.database import get_db
from sro_portal.models.account import Account
from sro_portal.schemas.organization import AccountOut
from sro_portal.services.auth import get_current_account

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/me", response_model=AccountOut)
def read_me(account: Account = Depends(get_current_account)):
    """Resolve the bearer token's email to an account row."""
    return account


@router.post("/me/reminders-seen", response_model=AccountOut)
def mark_reminders_seen(account: Account = Depends(get_current_account), db: Session = Depends(get_db)):
    """Record that the first-run submission reminders were shown."""
    if not account.reminders_seen:
        account.reminders_seen = True
        db.commit()
        db.refresh(account)
        logger.info("Account %s has seen the submission reminders", account.account_id)
    return account
