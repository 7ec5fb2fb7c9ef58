"""Staff-created activities."""
from typing import Any, Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from sro_portal.database import get_db
from sro_portal.forms.state import UploadedFile
from sro_portal.models.account import Account
from sro_portal.schemas.activity import ActivityOut
from sro_portal.services import activity_service
from sro_portal.services.auth import require_staff
from sro_portal.services.storage import FileStore, get_file_store
from sro_portal.services.uploads import read_activity_form

router = APIRouter()


@router.post("/activity", response_model=ActivityOut, status_code=status.HTTP_201_CREATED)
def create_admin_activity(
    form: tuple[dict[str, Any], Optional[UploadedFile]] = Depends(read_activity_form),
    actor: Account = Depends(require_staff),
    db: Session = Depends(get_db),
    store: FileStore = Depends(get_file_store),
):
    """Create an activity on an organization's behalf; it is approved on insert."""
    fields, upload = form
    return activity_service.admin_create_activity(db, fields, upload, store, actor)
