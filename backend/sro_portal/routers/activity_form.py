"""Form helpers so thin clients can reuse the wizard's rules."""
from fastapi import APIRouter

from sro_portal.forms.documents import documents_for, short_notice_advisory
from sro_portal.forms.sections import validate_section
from sro_portal.forms.validators import campus_today
from sro_portal.schemas.form import (
    FormValidateOut, FormValidateRequest, RequiredDocumentsOut, RequiredDocumentsRequest,
)

router = APIRouter()


@router.post("/validate", response_model=FormValidateOut)
def validate_form_section(payload: FormValidateRequest):
    """Check one section; the first failing field is reported."""
    result = validate_section(payload.section, payload.state, payload.mode, campus_today())
    return FormValidateOut(valid=result.valid, field=result.field, message=result.message)


@router.post("/required-documents", response_model=RequiredDocumentsOut)
def required_documents(payload: RequiredDocumentsRequest):
    return RequiredDocumentsOut(
        documents=documents_for(payload.state),
        advisory=short_notice_advisory(payload.state.start_date, campus_today()),
    )
