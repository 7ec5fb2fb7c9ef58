"""Pydantic schemas for Organizations and Accounts."""
from typing import Optional
from pydantic import BaseModel


class OrganizationOut(BaseModel):
    org_id: int
    org_name: str
    org_email: Optional[str] = None
    adviser_name: Optional[str] = None
    adviser_email: Optional[str] = None

    model_config = {"from_attributes": True}


class AccountOut(BaseModel):
    account_id: int
    account_name: str
    email: str
    role_id: int
    reminders_seen: bool

    model_config = {"from_attributes": True}
