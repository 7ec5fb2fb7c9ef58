"""FastAPI application entry point."""
import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from sro_portal.config import settings
from sro_portal.database import Base, engine
from sro_portal.services.exceptions import FormValidationError

# Import routers
from sro_portal.routers import (
    accounts, activity_edit, activity_form, activity_requests, admin_activities,
    annual_reports, appointments, approval_slips, mail, org_recognition, organizations,
    staff_activities, user_activities,
)

# Import all models so Base.metadata knows about them
from sro_portal.models.account import Account                       # noqa: F401
from sro_portal.models.organization import Organization             # noqa: F401
from sro_portal.models.activity import Activity, ActivitySchedule   # noqa: F401
from sro_portal.models.annual_report import AnnualReport            # noqa: F401
from sro_portal.models.org_recognition import OrgRecognition        # noqa: F401
from sro_portal.models.appointment import Appointment, AppointmentSettings  # noqa: F401

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="SRO Activity Portal",
    description="Student organization activity requests, reviews, reports, recognition and appointments",
    version="0.1.0",
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS.split(","),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(FormValidationError)
def form_validation_error_handler(request: Request, exc: FormValidationError):
    return JSONResponse(status_code=400, content={"error": exc.message, "field": exc.field})


# Register routers
app.include_router(activity_requests.router, prefix="/activityRequest", tags=["Activities"])
app.include_router(activity_edit.router, tags=["Activities"])
app.include_router(user_activities.router, prefix="/activities", tags=["Activities"])
app.include_router(admin_activities.router, prefix="/api/admin", tags=["Admin"])
app.include_router(staff_activities.router, prefix="/api/activities", tags=["Admin"])
app.include_router(approval_slips.router, prefix="/api", tags=["Admin"])
app.include_router(organizations.router, prefix="/api/organization", tags=["Organizations"])
app.include_router(accounts.router, prefix="/api/accounts", tags=["Accounts"])
app.include_router(activity_form.router, prefix="/api/activity-form", tags=["ActivityForm"])
app.include_router(annual_reports.router, prefix="/api/annual-report", tags=["AnnualReports"])
app.include_router(org_recognition.router, prefix="/api", tags=["Recognition"])
app.include_router(appointments.router, prefix="/api/appointments", tags=["Appointments"])
app.include_router(mail.router, prefix="/api", tags=["Email"])

# Uploaded PDFs and generated slips
app.mount(settings.FILE_BASE_URL, StaticFiles(directory=settings.UPLOAD_DIR, check_dir=False), name="files")


@app.on_event("startup")
def on_startup():
    """Create database tables on startup (for SQLite dev mode)."""
    if settings.DATABASE_URL.startswith("sqlite"):
        Base.metadata.create_all(bind=engine)


@app.get("/api/health")
def health_check():
    return {"status": "ok"}
