"""Staff dashboards: summaries, the review queue and approve/reject."""
from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from sro_portal.database import get_db
from sro_portal.models.account import Account
from sro_portal.schemas.activity import ActivityDetailOut, ActivityOut, ReviewDecision, SummaryCounts
from sro_portal.services import activity_service, summary_service
from sro_portal.services.auth import require_staff

router = APIRouter(dependencies=[Depends(require_staff)])


@router.get("/summary", response_model=list[ActivityDetailOut])
def activity_summary(
    activity_type: Optional[str] = Query(None),
    status: Optional[str] = Query(None, description="A lifecycle status, or 'pending'"),
    organization: Optional[str] = Query(None),
    year: Optional[str] = Query(None, description="Academic year, e.g. 2025-2026"),
    month: Optional[str] = Query(None, description="Month name, e.g. August"),
    db: Session = Depends(get_db),
):
    return summary_service.summarize(
        db,
        activity_type=activity_type,
        status_filter=status,
        organization=organization,
        year=year,
        month=month,
    )


@router.get("/summary/counts", response_model=SummaryCounts)
def activity_counts(db: Session = Depends(get_db)):
    return summary_service.counts(db)


@router.get("/organizations", response_model=list[str])
def organization_names(db: Session = Depends(get_db)):
    return summary_service.organization_names(db)


@router.get("/academic-years", response_model=list[str])
def academic_years(db: Session = Depends(get_db)):
    return summary_service.academic_years(db)


@router.get("/incoming", response_model=list[ActivityDetailOut])
def incoming_activities(db: Session = Depends(get_db)):
    """Requests still awaiting a final approval."""
    return summary_service.incoming(db)


@router.post("/{activity_id}/approve", response_model=ActivityOut)
def approve_activity(
    activity_id: str,
    decision: ReviewDecision,
    reviewer: Account = Depends(require_staff),
    db: Session = Depends(get_db),
):
    return activity_service.approve_activity(db, activity_id, reviewer, decision)


@router.post("/{activity_id}/reject", response_model=ActivityOut)
def reject_activity(
    activity_id: str,
    decision: ReviewDecision,
    reviewer: Account = Depends(require_staff),
    db: Session = Depends(get_db),
):
    return activity_service.reject_activity(db, activity_id, reviewer, decision)
