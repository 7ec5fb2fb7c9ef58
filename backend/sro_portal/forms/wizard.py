"""Wizard navigation controller for the four-section activity request form.

Backward moves are always free. Forward moves validate every section from
the current one up to (not including) the target and stop at the first
failure, leaving the wizard where it was with the offending field marked.
The controller also owns the per-session state that used to live in
scattered browser flags: the one-time reminders dialog and the in-flight
submission guard.
"""
import logging
from dataclasses import dataclass
from datetime import date
from typing import Any, Optional

from pydantic.alias_generators import to_camel

from sro_portal.forms.constants import SECTION_ORDER, FormMode, Section
from sro_portal.forms.documents import documents_for, short_notice_advisory
from sro_portal.forms.sections import ValidationResult, validate_section
from sro_portal.forms.state import ActivityFormState
from sro_portal.forms.validators import campus_today

logger = logging.getLogger(__name__)

# Error marks whose key is not the camelCase field name
ERROR_KEYS = {
    "org_id": "orgSelect",
    "org_name": "orgSelect",
    "other_activity_type": "activityType",
    "selected_sdgs": "sdgGoals",
    "is_off_campus": "offcampus",
    "selected_partners": "partnerUnits",
}


def error_key(field_name: str) -> str:
    return ERROR_KEYS.get(field_name, to_camel(field_name))


_FIELD_NAMES = {
    field.alias: name for name, field in ActivityFormState.model_fields.items() if field.alias
}


@dataclass(frozen=True)
class NavigationResult:
    moved: bool
    section: Section
    failure: Optional[ValidationResult] = None


class ActivityWizard:
    def __init__(
        self,
        state: Optional[ActivityFormState] = None,
        mode: FormMode = FormMode.create,
        reminders_seen: bool = False,
        today: Optional[date] = None,
    ):
        self.state = state or ActivityFormState()
        self.mode = FormMode(mode)
        self.current_section = Section.general_info
        self.field_errors: dict[str, bool] = {}
        self.last_message: Optional[str] = None
        self.reminders_seen = reminders_seen
        self.submitting = False
        self._today = today

    @property
    def today(self) -> date:
        return self._today or campus_today()

    @property
    def section_index(self) -> int:
        return SECTION_ORDER.index(self.current_section)

    @property
    def is_last_section(self) -> bool:
        return self.current_section == SECTION_ORDER[-1]

    def update(self, **changes: Any) -> ActivityFormState:
        """Apply field changes (by field name or alias) and re-validate the snapshot.

        Editing a field clears its error mark.
        """
        data = self.state.model_dump()
        data.update(changes)
        self.state = ActivityFormState.model_validate(data)
        for key in changes:
            self.clear_error(error_key(_FIELD_NAMES.get(key, key)))
        return self.state

    def clear_error(self, field: str) -> None:
        self.field_errors[field] = False

    def mark_error(self, failure: ValidationResult) -> None:
        """Mark the failing field as the only one in error."""
        self.field_errors = {field: False for field in self.field_errors}
        self.field_errors[failure.field] = True
        self.last_message = failure.message

    def validate(self, section: Optional[Section] = None) -> ValidationResult:
        return validate_section(section or self.current_section, self.state, self.mode, self.today)

    def _reject(self, failure: ValidationResult) -> NavigationResult:
        self.mark_error(failure)
        logger.debug("Navigation blocked at %s: %s", failure.field, failure.message)
        return NavigationResult(moved=False, section=self.current_section, failure=failure)

    def go_to(self, target: Section) -> NavigationResult:
        """Menu jump. Backward never validates; forward validates each skipped section."""
        target = Section(target)
        target_index = SECTION_ORDER.index(target)
        current_index = self.section_index

        if target_index < current_index:
            self.current_section = target
            return NavigationResult(moved=True, section=target)

        for section in SECTION_ORDER[current_index:target_index]:
            result = self.validate(section)
            if not result.valid:
                return self._reject(result)

        self.current_section = target
        self.last_message = None
        return NavigationResult(moved=True, section=target)

    def next(self) -> NavigationResult:
        """Validate the current section only and advance by one."""
        result = self.validate()
        if not result.valid:
            return self._reject(result)
        if self.is_last_section:
            return NavigationResult(moved=False, section=self.current_section)
        self.current_section = SECTION_ORDER[self.section_index + 1]
        self.last_message = None
        return NavigationResult(moved=True, section=self.current_section)

    def back(self) -> NavigationResult:
        if self.section_index == 0:
            return NavigationResult(moved=False, section=self.current_section)
        return self.go_to(SECTION_ORDER[self.section_index - 1])

    def required_documents(self) -> list[str]:
        return documents_for(self.state)

    def advisory(self) -> Optional[str]:
        return short_notice_advisory(self.state.start_date, self.today)

    def take_reminders(self) -> bool:
        """True the first time it is called in a session, False afterwards."""
        if self.reminders_seen:
            return False
        self.reminders_seen = True
        return True
