"""Approval slip generation."""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from sro_portal.database import get_db
from sro_portal.services.approval_slip_service import generate_approval_slips
from sro_portal.services.auth import require_staff
from sro_portal.services.storage import FileStore, get_file_store

router = APIRouter()


@router.post("/generate-approval-slips", dependencies=[Depends(require_staff)])
def generate_slips(db: Session = Depends(get_db), store: FileStore = Depends(get_file_store)):
    """Render slips for approved activities that do not have one yet."""
    return generate_approval_slips(db, store)
