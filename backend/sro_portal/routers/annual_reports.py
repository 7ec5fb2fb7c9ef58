"""Organization annual report uploads."""
from typing import Optional
from fastapi import APIRouter, Depends, File, Form, UploadFile, status
from sqlalchemy.orm import Session

from sro_portal.database import get_db
from sro_portal.models.annual_report import AnnualReport
from sro_portal.schemas.annual_report import AnnualReportOut, UploadResultOut
from sro_portal.services import report_service
from sro_portal.services.auth import require_staff
from sro_portal.services.storage import FileStore, get_file_store
from sro_portal.services.uploads import to_uploaded

router = APIRouter()


@router.post("", response_model=UploadResultOut, status_code=status.HTTP_201_CREATED)
def submit_annual_report(
    org_id: Optional[int] = Form(None),
    submitted_by: Optional[int] = Form(None),
    academic_year: Optional[str] = Form(None),
    files: list[UploadFile] = File(default=[]),
    db: Session = Depends(get_db),
    store: FileStore = Depends(get_file_store),
):
    """Upload the two annual report PDFs for an academic year."""
    return report_service.submit_annual_report(
        db, store, org_id, submitted_by, academic_year, [to_uploaded(f) for f in files]
    )


@router.get("", response_model=list[AnnualReportOut], dependencies=[Depends(require_staff)])
def list_annual_reports(db: Session = Depends(get_db)):
    return db.query(AnnualReport).order_by(AnnualReport.submitted_at.desc()).all()
