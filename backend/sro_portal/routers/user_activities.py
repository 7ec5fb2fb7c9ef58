"""An account's own activity requests."""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from sro_portal.database import get_db
from sro_portal.models.activity import Activity
from sro_portal.schemas.activity import ActivityDetailOut

router = APIRouter()


@router.get("/user/{account_id}", response_model=list[ActivityDetailOut])
def list_user_activities(account_id: int, db: Session = Depends(get_db)):
    """Activities submitted by ``account_id`` with schedule and organization."""
    return (
        db.query(Activity)
        .filter(Activity.account_id == account_id)
        .order_by(Activity.activity_id.desc())
        .all()
    )
