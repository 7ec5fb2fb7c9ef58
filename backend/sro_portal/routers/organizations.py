"""Organization lookups."""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from sro_portal.database import get_db
from sro_portal.models.organization import Organization
from sro_portal.schemas.organization import OrganizationOut

router = APIRouter()


@router.get("/list", response_model=list[OrganizationOut])
def list_organizations(db: Session = Depends(get_db)):
    return db.query(Organization).order_by(Organization.org_name).all()
