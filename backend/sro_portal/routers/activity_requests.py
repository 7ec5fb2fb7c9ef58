"""Student activity submissions."""
from typing import Any, Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from sro_portal.database import get_db
from sro_portal.forms.state import UploadedFile
from sro_portal.models.activity import Activity
from sro_portal.schemas.activity import ActivityDetailOut, ActivityOut
from sro_portal.services import activity_service
from sro_portal.services.storage import FileStore, get_file_store
from sro_portal.services.uploads import read_activity_form

router = APIRouter()


@router.post("", response_model=ActivityOut, status_code=status.HTTP_201_CREATED)
def create_activity(
    form: tuple[dict[str, Any], Optional[UploadedFile]] = Depends(read_activity_form),
    db: Session = Depends(get_db),
    store: FileStore = Depends(get_file_store),
):
    """Submit a new activity request (multipart, one PDF under ``file``)."""
    fields, upload = form
    return activity_service.create_activity(db, fields, upload, store)


@router.get("", response_model=list[ActivityDetailOut])
def list_activities(db: Session = Depends(get_db)):
    """List every activity request, newest id first."""
    return db.query(Activity).order_by(Activity.activity_id.desc()).all()
