"""Pydantic schemas for organization recognition applications."""
from datetime import datetime
from typing import Optional
from pydantic import BaseModel


class OrgRecognitionOut(BaseModel):
    recognition_id: int
    organization_id: int
    org_name: str
    organization_type: str
    academic_year: str
    org_email: str
    org_chairperson: str
    chairperson_email: str
    org_adviser: str
    adviser_email: str
    org_coadviser: str
    coadviser_email: str
    submission_file_url: str
    drive_folder_id: Optional[str] = None
    submitted_by: Optional[int] = None
    is_recognized: Optional[bool] = None
    org_status: Optional[str] = None
    approved_at: Optional[datetime] = None
    submitted_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class RecognitionStatusUpdate(BaseModel):
    recognition_id: int
    is_recognized: bool
