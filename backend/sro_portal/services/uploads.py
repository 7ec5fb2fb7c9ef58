"""Multipart helpers: turn incoming form data into plain fields and uploads."""
from typing import Any, Optional

from fastapi import Request
from starlette.datastructures import UploadFile

from sro_portal.forms.state import UploadedFile
from sro_portal.services.exceptions import FormValidationError


def to_uploaded(file: UploadFile) -> UploadedFile:
    return UploadedFile(
        filename=file.filename or "",
        content_type=file.content_type or "",
        content=file.file.read(),
    )


async def read_activity_form(request: Request) -> tuple[dict[str, Any], Optional[UploadedFile]]:
    """Split an activity multipart body into text fields and the single ``file`` part."""
    form = await request.form()
    fields: dict[str, Any] = {}
    uploads: list[UploadFile] = []
    for key, value in form.multi_items():
        if isinstance(value, UploadFile):
            if key == "file":
                uploads.append(value)
        else:
            fields[key] = value

    if len(uploads) > 1:
        raise FormValidationError("Only one PDF file may be uploaded.", "selectedFile")
    if not uploads:
        return fields, None
    upload = uploads[0]
    return fields, UploadedFile(
        filename=upload.filename or "",
        content_type=upload.content_type or "",
        content=await upload.read(),
    )
