"""Organization recognition application ORM model."""
from sqlalchemy import Column, Integer, String, Text, Boolean, DateTime, ForeignKey
from sqlalchemy.sql import func
from sro_portal.database import Base


class OrgRecognition(Base):
    __tablename__ = "org_recognition"

    recognition_id = Column(Integer, primary_key=True, autoincrement=True)
    organization_id = Column(Integer, nullable=False, unique=True)  # e.g. 20251
    org_name = Column(String(150), nullable=False)
    organization_type = Column(String(100), nullable=False)
    academic_year = Column(String(9), nullable=False)
    org_email = Column(String(255), nullable=False)
    org_chairperson = Column(String(150), nullable=False)
    chairperson_email = Column(String(255), nullable=False)
    org_adviser = Column(String(150), nullable=False)
    adviser_email = Column(String(255), nullable=False)
    org_coadviser = Column(String(150), nullable=False)
    coadviser_email = Column(String(255), nullable=False)
    submission_file_url = Column(Text, nullable=False)  # JSON list of links
    drive_folder_id = Column(String(500), nullable=True)
    submitted_by = Column(Integer, ForeignKey("account.account_id"), nullable=True)
    is_recognized = Column(Boolean, nullable=True)
    org_status = Column(String(20), nullable=True)
    approved_at = Column(DateTime(timezone=True), nullable=True)
    submitted_at = Column(DateTime(timezone=True), server_default=func.now())
