"""Organization ORM model — a recognized student group."""
from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from sro_portal.database import Base


class Organization(Base):
    __tablename__ = "organization"

    org_id = Column(Integer, primary_key=True, autoincrement=True)
    org_name = Column(String(150), nullable=False, unique=True)
    org_email = Column(String(255), nullable=True)
    adviser_name = Column(String(150), nullable=True)
    adviser_email = Column(String(255), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    activities = relationship("Activity", back_populates="organization")
