"""Pytest fixtures — SQLite database, isolated upload dir and token helpers."""
import os
import time
from datetime import timedelta

# Settings are read at import time; point them at SQLite before the app loads.
os.environ.setdefault("DATABASE_URL", "sqlite:///./test.db")
os.environ.setdefault("AUTH_JWT_SECRET", "test-secret")

import pytest
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from fastapi.testclient import TestClient
from jose import jwt

from sro_portal.config import settings
from sro_portal.database import Base, get_db
from sro_portal.forms.validators import campus_today
from sro_portal.main import app
from sro_portal.services.email_service import EmailService, get_email_service
from sro_portal.services.storage import FileStore, get_file_store

# Import all models so they register with Base.metadata
from sro_portal.models.account import Account, Role                  # noqa: F401
from sro_portal.models.organization import Organization              # noqa: F401
from sro_portal.models.activity import Activity, ActivitySchedule    # noqa: F401
from sro_portal.models.annual_report import AnnualReport             # noqa: F401
from sro_portal.models.org_recognition import OrgRecognition         # noqa: F401
from sro_portal.models.appointment import Appointment                 # noqa: F401

SQLITE_URL = "sqlite:///./test.db"
PDF_BYTES = b"%PDF-1.4\n% test document\n"


@pytest.fixture(scope="function")
def db_engine():
    """Create a fresh SQLite engine for each test."""
    engine = create_engine(SQLITE_URL, connect_args={"check_same_thread": False})

    @event.listens_for(engine, "connect")
    def _set_sqlite_pragma(dbapi_conn, connection_record):
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA journal_mode=WAL")
        cursor.close()

    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture(scope="function")
def db(db_engine):
    """Yield a database session bound to the test engine."""
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=db_engine)
    session = TestingSession()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture(scope="function")
def store(tmp_path):
    return FileStore(str(tmp_path / "uploads"), "/files")


class RecordingEmailService(EmailService):
    """Keeps outgoing mail in memory instead of talking to SMTP."""

    def __init__(self):
        super().__init__(user="sro@up.edu.ph", password="app-password", from_email="sro@up.edu.ph")
        self.sent = []

    async def send(self, notification):
        self.sent.append(notification)
        return f"<{len(self.sent)}@sro.test>"


@pytest.fixture(scope="function")
def mailer():
    return RecordingEmailService()


@pytest.fixture(scope="function")
def client(db_engine, store, mailer):
    """FastAPI TestClient with the database, file store and mailer overridden."""
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=db_engine)

    def _override_get_db():
        session = TestingSession()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = _override_get_db
    app.dependency_overrides[get_file_store] = lambda: store
    app.dependency_overrides[get_email_service] = lambda: mailer
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


# ---------------------------------------------------------------------------
# Helpers: seed rows directly, mint tokens, build valid submissions
# ---------------------------------------------------------------------------
def create_test_account(db, email: str = "student@up.edu.ph", role: Role = Role.student,
                        name: str = "Test Student") -> Account:
    """Helper — insert an account and return it."""
    account = Account(account_name=name, email=email, role_id=role.value)
    db.add(account)
    db.commit()
    db.refresh(account)
    return account


def create_test_org(db, name: str = "UP Mountaineers") -> Organization:
    """Helper — insert an organization and return it."""
    org = Organization(
        org_name=name,
        org_email="mountaineers@up.edu.ph",
        adviser_name="Prof. Dela Cruz",
        adviser_email="adviser@up.edu.ph",
    )
    db.add(org)
    db.commit()
    db.refresh(org)
    return org


def make_token(email: str, secret: str = None, audience: str = None) -> str:
    """Helper — mint a session token the way the identity provider does."""
    claims = {
        "email": email,
        "aud": audience or settings.AUTH_JWT_AUDIENCE,
        "exp": int(time.time()) + 3600,
    }
    return jwt.encode(claims, secret or settings.AUTH_JWT_SECRET, algorithm=settings.AUTH_JWT_ALGORITHM)


def auth_header(email: str) -> dict:
    return {"Authorization": f"Bearer {make_token(email)}"}


def pdf_upload(name: str = "request.pdf") -> tuple:
    return (name, PDF_BYTES, "application/pdf")


def future_date(days: int = 30) -> str:
    return (campus_today() + timedelta(days=days)).isoformat()


def activity_fields(org_id: int, account_id: int = None, **overrides) -> dict:
    """Helper — a complete, valid one-time on-campus submission as form fields."""
    fields = {
        "org_id": str(org_id),
        "student_position": "President",
        "student_contact": "09171234567",
        "activity_name": "Freshman Welcome Night",
        "activity_description": "An evening program introducing freshmen to the org.",
        "activity_type": "educational",
        "sdg_goals": "qualityEducation, goodHealth",
        "charge_fee": "false",
        "university_partner": "false",
        "partner_name": "",
        "partner_role": "",
        "venue": "CS Audio-Visual Room",
        "venue_approver": "Dr. Santos",
        "venue_approver_contact": "santos@up.edu.ph",
        "is_off_campus": "false",
        "is_recurring": "false",
        "green_monitor_name": "Maria Reyes",
        "green_monitor_contact": "09181234567",
        "start_date": future_date(),
        "end_date": future_date(),
        "start_time": "13:00",
        "end_time": "17:00",
    }
    if account_id is not None:
        fields["account_id"] = str(account_id)
    fields.update(overrides)
    return fields


def form_state(**overrides):
    """Helper — a wizard snapshot that passes every section in create mode."""
    from sro_portal.forms.state import ActivityFormState, UploadedFile

    data = {
        "org_id": "1",
        "org_name": "UP Mountaineers",
        "student_position": "President",
        "student_contact": "09171234567",
        "activity_name": "Freshman Welcome Night",
        "activity_description": "An evening program introducing freshmen to the org.",
        "activity_type": "educational",
        "selected_sdgs": {"noPoverty": True, "zeroHunger": False, "goodHealth": True},
        "charging_fees": "no",
        "partnering": "no",
        "recurring": "one-time",
        "start_date": future_date(),
        "start_time": "13:00",
        "end_time": "17:00",
        "is_off_campus": "no",
        "venue": "CS Audio-Visual Room",
        "venue_approver": "Dr. Santos",
        "venue_approver_contact": "santos@up.edu.ph",
        "green_campus_monitor": "Maria Reyes",
        "green_campus_monitor_contact": "09181234567",
        "selected_file": UploadedFile(filename="request.pdf", content_type="application/pdf", content=PDF_BYTES),
    }
    data.update(overrides)
    return ActivityFormState.model_validate(data)
