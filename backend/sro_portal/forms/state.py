"""Form state for the activity request wizard.

The wizard collects everything into one flat snapshot. Multi-select maps
(SDG goals, university partners) are normalized on the way in so that every
entry is either a ``Toggle`` (a checkbox) or a ``Custom`` entry carrying
free-text values (the "Others" partner box). Callers may still post the raw
shapes the browser produces: ``True``/``False`` for a checkbox and a list of
strings for free text.
"""
from __future__ import annotations

from typing import Annotated, Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from sro_portal.forms.constants import PDF_CONTENT_TYPE, WEEKDAYS


class Toggle(BaseModel):
    kind: Literal["toggle"] = "toggle"
    selected: bool = False

    def names(self, key: str) -> list[str]:
        return [key] if self.selected else []


class Custom(BaseModel):
    kind: Literal["custom"] = "custom"
    custom_values: list[str] = Field(default_factory=list, alias="customValues")

    model_config = ConfigDict(populate_by_name=True)

    @property
    def selected(self) -> bool:
        return any(value.strip() for value in self.custom_values)

    def names(self, key: str) -> list[str]:
        return [value for value in self.custom_values if value.strip()]


Selection = Annotated[Union[Toggle, Custom], Field(discriminator="kind")]


def coerce_selection(value: Any) -> Any:
    """Map a raw browser value onto the tagged ``Selection`` shape."""
    if value is None:
        return {"kind": "toggle", "selected": False}
    if isinstance(value, bool):
        return {"kind": "toggle", "selected": value}
    if isinstance(value, (list, tuple)):
        return {"kind": "custom", "custom_values": [str(v) for v in value]}
    if isinstance(value, dict) and "kind" not in value:
        if "customValues" in value or "custom_values" in value:
            return {"kind": "custom", **value}
        return {"kind": "toggle", **value}
    return value


class UploadedFile(BaseModel):
    filename: str
    content_type: str = Field("", alias="contentType")
    content: bytes = Field(b"", repr=False)

    model_config = ConfigDict(populate_by_name=True)

    @property
    def is_pdf(self) -> bool:
        return self.content_type == PDF_CONTENT_TYPE and self.filename.lower().endswith(".pdf")


class ActivityFormState(BaseModel):
    """Snapshot of every field the wizard renders, across all four sections."""

    # general-info
    org_id: str = Field("", alias="selectedValue")
    org_name: str = Field("", alias="selectedOrgName")
    student_position: str = ""
    student_contact: str = ""
    activity_name: str = ""
    activity_description: str = ""
    activity_type: str = Field("", alias="selectedActivityType")
    other_activity_type: str = ""
    selected_sdgs: dict[str, Selection] = Field(default_factory=dict, alias="selectedSDGs")
    charging_fees: str = Field("", alias="chargingFees1")
    partnering: str = ""

    # date-info
    recurring: str = ""
    start_date: str = ""
    end_date: str = ""
    start_time: str = ""
    end_time: str = ""
    recurring_days: dict[str, bool] = Field(default_factory=lambda: {day: False for day in WEEKDAYS})

    # specifications
    is_off_campus: str = ""
    venue: str = ""
    venue_approver: str = ""
    venue_approver_contact: str = ""
    selected_partners: dict[str, Selection] = Field(default_factory=dict, alias="selectedPublicAffairs")
    partner_description: str = ""
    green_campus_monitor: str = ""
    green_campus_monitor_contact: str = ""

    # submission
    selected_file: Optional[UploadedFile] = None
    appeal_reason: str = ""
    show_appeal_reason: bool = True

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    @model_validator(mode="before")
    @classmethod
    def _drop_nulls(cls, data: Any) -> Any:
        # Blank inputs arrive as null from some clients; fall back to field defaults.
        if isinstance(data, dict):
            return {key: value for key, value in data.items() if value is not None}
        return data

    @field_validator("selected_sdgs", "selected_partners", mode="before")
    @classmethod
    def _normalize_selections(cls, value: Any) -> Any:
        if isinstance(value, dict):
            return {key: coerce_selection(entry) for key, entry in value.items()}
        return value

    @property
    def off_campus(self) -> bool:
        return self.is_off_campus == "yes"

    @property
    def is_recurring(self) -> bool:
        return self.recurring == "recurring"
