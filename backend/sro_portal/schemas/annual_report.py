"""Pydantic schemas for annual reports."""
from datetime import datetime
from typing import Optional
from pydantic import BaseModel


class AnnualReportOut(BaseModel):
    report_id: int
    org_id: int
    submitted_by: int
    academic_year: str
    drive_folder_link: Optional[str] = None
    submission_file_url: str
    submitted_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class UploadResultOut(BaseModel):
    message: str
    folder_link: Optional[str] = None
    file_links: list[str] = []
