"""Owner follow-ups on an existing request: appeal edits and cancellation."""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from sro_portal.database import get_db
from sro_portal.schemas.activity import (
    ActivityCancelRequest, ActivityEditRequest, ActivityOut, MessageOut,
)
from sro_portal.services import activity_service

router = APIRouter()


@router.put("/activityEdit/edit/{activity_id}", response_model=MessageOut)
def edit_activity(activity_id: str, payload: ActivityEditRequest, db: Session = Depends(get_db)):
    """Resubmit an activity with changes; always lands as For Appeal."""
    activity = activity_service.appeal_activity(db, activity_id, payload.model_dump())
    return {
        "message": "Activity updated successfully",
        "data": ActivityOut.model_validate(activity).model_dump(mode="json"),
    }


@router.put("/activityCancel/cancel/{activity_id}", response_model=MessageOut)
def cancel_activity(activity_id: str, payload: ActivityCancelRequest, db: Session = Depends(get_db)):
    activity = activity_service.cancel_activity(db, activity_id, payload.appeal_reason)
    return {
        "message": "Activity marked for cancellation",
        "data": ActivityOut.model_validate(activity).model_dump(mode="json"),
    }
