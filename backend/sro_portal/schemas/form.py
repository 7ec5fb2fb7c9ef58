"""Pydantic schemas for the activity-form helper endpoints."""
from typing import Optional
from pydantic import BaseModel

from sro_portal.forms.constants import FormMode, Section
from sro_portal.forms.state import ActivityFormState


class FormValidateRequest(BaseModel):
    section: Section
    mode: FormMode = FormMode.create
    state: ActivityFormState


class FormValidateOut(BaseModel):
    valid: bool
    field: Optional[str] = None
    message: Optional[str] = None


class RequiredDocumentsRequest(BaseModel):
    state: ActivityFormState


class RequiredDocumentsOut(BaseModel):
    documents: list[str]
    advisory: Optional[str] = None
