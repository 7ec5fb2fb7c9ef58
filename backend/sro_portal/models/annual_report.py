"""Organization annual report ORM model."""
from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from sro_portal.database import Base


class AnnualReport(Base):
    __tablename__ = "org_annual_report"

    report_id = Column(Integer, primary_key=True, autoincrement=True)
    org_id = Column(Integer, ForeignKey("organization.org_id"), nullable=False)
    submitted_by = Column(Integer, ForeignKey("account.account_id"), nullable=False)
    academic_year = Column(String(9), nullable=False)
    drive_folder_link = Column(String(500), nullable=True)
    submission_file_url = Column(Text, nullable=False)  # JSON list of links
    submitted_at = Column(DateTime(timezone=True), server_default=func.now())

    organization = relationship("Organization")
