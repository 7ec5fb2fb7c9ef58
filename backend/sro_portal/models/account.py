"""Account ORM model — the authenticated submitter or staff member."""
import enum
from sqlalchemy import Column, Integer, String, Boolean, DateTime
from sqlalchemy.sql import func
from sro_portal.database import Base


class Role(int, enum.Enum):
    student = 1
    sro = 2
    odsa = 3
    superadmin = 4


STAFF_ROLES = (Role.sro, Role.odsa, Role.superadmin)


class Account(Base):
    __tablename__ = "account"

    account_id = Column(Integer, primary_key=True, autoincrement=True)
    account_name = Column(String(150), nullable=False)
    email = Column(String(255), nullable=False, unique=True)
    role_id = Column(Integer, nullable=False, default=Role.student.value)
    reminders_seen = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    @property
    def is_staff(self) -> bool:
        return self.role_id in [role.value for role in STAFF_ROLES]
