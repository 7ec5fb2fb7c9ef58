"""Organization paperwork: annual reports and recognition applications."""
import json
import logging
from datetime import datetime, timezone
from typing import Any, Mapping, Optional

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from sro_portal.forms.state import UploadedFile
from sro_portal.models.account import Account
from sro_portal.models.annual_report import AnnualReport
from sro_portal.models.org_recognition import OrgRecognition
from sro_portal.models.organization import Organization
from sro_portal.services.exceptions import FormValidationError
from sro_portal.services.storage import FileStore
from sro_portal.services.summary_service import academic_year_bounds

logger = logging.getLogger(__name__)

ANNUAL_REPORT_FILE_COUNT = 2
RECOGNITION_FILE_COUNT = 6

RECOGNITION_FIELDS = (
    "org_name",
    "academic_year",
    "org_email",
    "chairperson",
    "chairperson_email",
    "adviser",
    "adviser_email",
    "co_adviser",
    "coadviser_email",
    "org_type",
)


def _check_files(files: list[UploadedFile], expected: int) -> None:
    if len(files) != expected:
        raise FormValidationError(f"Exactly {expected} PDF files must be uploaded.", "files")
    if not all(upload.is_pdf for upload in files):
        raise FormValidationError("Only PDF files are allowed.", "files")


def _store_all(store: FileStore, folder: str, files: list[UploadedFile]) -> list[str]:
    return [store.save(folder, upload.filename, upload.content) for upload in files]


def submit_annual_report(
    db: Session,
    store: FileStore,
    org_id: Optional[int],
    submitted_by: Optional[int],
    academic_year: Optional[str],
    files: list[UploadedFile],
) -> dict[str, Any]:
    if not org_id or not submitted_by or not academic_year:
        raise FormValidationError("Missing required fields.")
    _check_files(files, ANNUAL_REPORT_FILE_COUNT)
    academic_year_bounds(academic_year)

    organization = db.query(Organization).filter(Organization.org_id == org_id).first()
    if not organization:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Organization not found")
    if not db.query(Account).filter(Account.account_id == submitted_by).first():
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Account not found")

    folder = f"annual_reports/{organization.org_name} - Annual Report {academic_year}"
    links = _store_all(store, folder, files)
    report = AnnualReport(
        org_id=org_id,
        submitted_by=submitted_by,
        academic_year=academic_year,
        drive_folder_link=store.folder_link(folder),
        submission_file_url=json.dumps(links),
        submitted_at=datetime.now(timezone.utc),
    )
    db.add(report)
    db.commit()
    logger.info("Annual report %s filed for org %s (%s)", report.report_id, org_id, academic_year)
    return {
        "message": "Annual Report uploaded successfully!",
        "folder_link": report.drive_folder_link,
        "file_links": links,
    }


def next_organization_id(db: Session, academic_year: str) -> int:
    """``<base year>*10 + n`` for the n-th application of that academic year."""
    base_year = academic_year_bounds(academic_year)[0].year
    low, high = base_year * 10, base_year * 10 + 9
    taken = (
        db.query(OrgRecognition)
        .filter(OrgRecognition.organization_id >= low, OrgRecognition.organization_id <= high)
        .count()
    )
    if low + taken + 1 > high:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"No recognition slots left for {academic_year}",
        )
    return low + taken + 1


def submit_recognition(
    db: Session,
    store: FileStore,
    fields: Mapping[str, Any],
    files: list[UploadedFile],
) -> dict[str, Any]:
    if any(not str(fields.get(key) or "").strip() for key in RECOGNITION_FIELDS):
        raise FormValidationError("Missing required fields.")
    _check_files(files, RECOGNITION_FILE_COUNT)

    academic_year = fields["academic_year"].strip()
    organization_id = next_organization_id(db, academic_year)
    folder = f"org_applications/{fields['org_name']} - Recognition {academic_year}"
    links = _store_all(store, folder, files)

    submitted_by = fields.get("submitted_by")
    application = OrgRecognition(
        organization_id=organization_id,
        org_name=fields["org_name"],
        organization_type=fields["org_type"],
        academic_year=academic_year,
        org_email=fields["org_email"],
        org_chairperson=fields["chairperson"],
        chairperson_email=fields["chairperson_email"],
        org_adviser=fields["adviser"],
        adviser_email=fields["adviser_email"],
        org_coadviser=fields["co_adviser"],
        coadviser_email=fields["coadviser_email"],
        submission_file_url=json.dumps(links),
        drive_folder_id=store.folder_link(folder),
        submitted_by=int(submitted_by) if submitted_by else None,
        submitted_at=datetime.now(timezone.utc),
    )
    db.add(application)
    db.commit()
    logger.info("Recognition application %s received for %s", organization_id, fields["org_name"])
    return {
        "message": "Organization application submitted.",
        "folder_link": application.drive_folder_id,
        "file_links": links,
    }


def update_recognition_status(db: Session, recognition_id: int, is_recognized: bool) -> OrgRecognition:
    application = (
        db.query(OrgRecognition).filter(OrgRecognition.recognition_id == recognition_id).first()
    )
    if not application:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Application not found")
    application.is_recognized = is_recognized
    application.org_status = "Recognized" if is_recognized else "Declined"
    application.approved_at = datetime.now(timezone.utc) if is_recognized else None
    db.commit()
    db.refresh(application)
    logger.info("Recognition %s marked %s", recognition_id, application.org_status)
    return application
