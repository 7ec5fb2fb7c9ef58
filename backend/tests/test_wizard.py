"""Tests for wizard navigation and session state."""
from datetime import date

from sro_portal.forms.constants import FormMode, Section
from sro_portal.forms.documents import SHORT_NOTICE_ADVISORY
from sro_portal.forms.state import ActivityFormState
from sro_portal.forms.wizard import ActivityWizard
from tests.conftest import form_state

TODAY = date(2026, 3, 2)


def _wizard(state=None, mode=FormMode.create):
    return ActivityWizard(state or form_state(start_date="2026-03-20"), mode=mode, today=TODAY)


class TestForwardNavigation:

    def test_starts_on_general_info(self):
        assert ActivityWizard(today=TODAY).current_section == Section.general_info

    def test_blank_field_blocks_and_marks_one_field(self):
        wizard = _wizard(ActivityFormState())
        result = wizard.next()
        assert not result.moved
        assert wizard.current_section == Section.general_info
        assert [field for field, errored in wizard.field_errors.items() if errored] == ["orgSelect"]
        assert wizard.last_message == "Please select your organization."

    def test_next_advances_one_section(self):
        wizard = _wizard()
        assert wizard.next().section == Section.date_info
        assert wizard.next().section == Section.specifications
        assert wizard.next().section == Section.submission

    def test_no_next_after_submission(self):
        wizard = _wizard()
        wizard.go_to(Section.submission)
        result = wizard.next()
        assert not result.moved
        assert wizard.current_section == Section.submission

    def test_jump_validates_every_skipped_section(self):
        wizard = _wizard(form_state(start_date="2026-03-20", venue=""))
        result = wizard.go_to(Section.submission)
        assert not result.moved
        assert result.failure.field == "venue"
        assert wizard.current_section == Section.general_info

    def test_jump_does_not_validate_target(self):
        wizard = _wizard(form_state(start_date="2026-03-20", venue=""))
        assert wizard.go_to(Section.specifications).moved


class TestBackwardNavigation:

    def test_backward_never_validates(self):
        wizard = _wizard()
        wizard.go_to(Section.specifications)
        wizard.update(activity_name="")
        result = wizard.go_to(Section.general_info)
        assert result.moved
        assert result.failure is None

    def test_back_from_first_section_stays(self):
        wizard = _wizard()
        assert not wizard.back().moved

    def test_back_steps_one_section(self):
        wizard = _wizard()
        wizard.go_to(Section.specifications)
        assert wizard.back().section == Section.date_info


class TestSessionState:

    def test_update_accepts_aliases(self):
        wizard = _wizard()
        wizard.update(selectedActivityType="charitable")
        assert wizard.state.activity_type == "charitable"

    def test_clear_error(self):
        wizard = _wizard(ActivityFormState())
        wizard.next()
        wizard.clear_error("orgSelect")
        assert wizard.field_errors["orgSelect"] is False

    def test_correcting_a_field_moves_the_mark(self):
        wizard = _wizard(ActivityFormState())
        wizard.next()
        wizard.update(selectedValue="1")
        assert wizard.field_errors["orgSelect"] is False
        wizard.next()
        assert [field for field, errored in wizard.field_errors.items() if errored] == ["studentPosition"]

    def test_update_by_field_name_clears_mark(self):
        wizard = _wizard(form_state(start_date="2026-03-20", venue=""))
        wizard.go_to(Section.submission)
        assert wizard.field_errors["venue"] is True
        wizard.update(venue="Gym")
        assert not any(wizard.field_errors.values())

    def test_reminders_shown_once(self):
        wizard = _wizard()
        assert wizard.take_reminders() is True
        assert wizard.take_reminders() is False

    def test_reminders_already_seen(self):
        wizard = ActivityWizard(reminders_seen=True, today=TODAY)
        assert wizard.take_reminders() is False

    def test_advisory_and_documents(self):
        wizard = _wizard(form_state(start_date="2026-03-04"))
        assert wizard.advisory() == SHORT_NOTICE_ADVISORY
        assert len(wizard.required_documents()) == 2

    def test_admin_mode_uses_admin_rules(self):
        wizard = _wizard(form_state(start_date="2026-03-02"), mode=FormMode.admin)
        wizard.next()
        result = wizard.next()
        assert result.failure.message == "Start date must be tomorrow or later."
