"""Organization recognition applications and their review."""
from typing import Optional
from fastapi import APIRouter, Depends, File, Form, UploadFile, status
from sqlalchemy.orm import Session

from sro_portal.database import get_db
from sro_portal.models.org_recognition import OrgRecognition
from sro_portal.schemas.annual_report import UploadResultOut
from sro_portal.schemas.org_recognition import OrgRecognitionOut, RecognitionStatusUpdate
from sro_portal.services import report_service
from sro_portal.services.auth import require_staff
from sro_portal.services.storage import FileStore, get_file_store
from sro_portal.services.uploads import to_uploaded

router = APIRouter()


@router.post("/org-application", response_model=UploadResultOut, status_code=status.HTTP_201_CREATED)
def submit_application(
    org_name: Optional[str] = Form(None),
    academic_year: Optional[str] = Form(None),
    org_email: Optional[str] = Form(None),
    chairperson: Optional[str] = Form(None),
    chairperson_email: Optional[str] = Form(None),
    adviser: Optional[str] = Form(None),
    adviser_email: Optional[str] = Form(None),
    co_adviser: Optional[str] = Form(None),
    coadviser_email: Optional[str] = Form(None),
    org_type: Optional[str] = Form(None),
    submitted_by: Optional[int] = Form(None),
    files: list[UploadFile] = File(default=[]),
    db: Session = Depends(get_db),
    store: FileStore = Depends(get_file_store),
):
    """Apply for recognition with the six required PDFs."""
    fields = {
        "org_name": org_name,
        "academic_year": academic_year,
        "org_email": org_email,
        "chairperson": chairperson,
        "chairperson_email": chairperson_email,
        "adviser": adviser,
        "adviser_email": adviser_email,
        "co_adviser": co_adviser,
        "coadviser_email": coadviser_email,
        "org_type": org_type,
        "submitted_by": submitted_by,
    }
    return report_service.submit_recognition(db, store, fields, [to_uploaded(f) for f in files])


@router.get("/org-application", response_model=list[OrgRecognitionOut], dependencies=[Depends(require_staff)])
def list_applications(db: Session = Depends(get_db)):
    return db.query(OrgRecognition).order_by(OrgRecognition.organization_id).all()


@router.post(
    "/admin/org-applications/update-status",
    response_model=OrgRecognitionOut,
    dependencies=[Depends(require_staff)],
)
def update_status(payload: RecognitionStatusUpdate, db: Session = Depends(get_db)):
    """Recognize or decline an application."""
    return report_service.update_recognition_status(db, payload.recognition_id, payload.is_recognized)
