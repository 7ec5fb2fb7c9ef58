"""Tests for required documents and the short-notice advisory."""
from datetime import date

from sro_portal.forms import constants as c
from sro_portal.forms.documents import (
    SHORT_NOTICE_ADVISORY, documents_for, required_documents, short_notice_advisory,
)
from tests.conftest import form_state

MONDAY = "2026-03-09"
SATURDAY = "2026-03-14"


class TestRequiredDocuments:

    def test_baseline_for_weekday_daytime_on_campus(self):
        docs = required_documents("no", MONDAY, MONDAY, "09:00", "12:00")
        assert docs == [c.CONCEPT_PAPER, c.REQUEST_FORM]

    def test_off_campus_saturday(self):
        docs = required_documents("yes", SATURDAY, SATURDAY, "09:00", "12:00")
        assert docs == [
            c.CONCEPT_PAPER,
            c.REQUEST_FORM,
            c.OFF_CAMPUS_NOTICE,
            c.OFF_CAMPUS_WAIVER,
            c.CURFEW_PERMISSION,
        ]
        assert len(docs) == len(set(docs))

    def test_late_end_time_adds_curfew_form_once(self):
        docs = required_documents("no", MONDAY, MONDAY, "21:00", "23:00")
        assert docs.count(c.CURFEW_PERMISSION) == 1

    def test_weekend_end_date(self):
        docs = required_documents("no", MONDAY, SATURDAY, "09:00", "12:00")
        assert c.CURFEW_PERMISSION in docs

    def test_blank_schedule_is_baseline(self):
        assert required_documents("", "", "", "", "") == [c.CONCEPT_PAPER, c.REQUEST_FORM]

    def test_documents_for_state(self):
        state = form_state(is_off_campus="yes", start_date=MONDAY, start_time="08:00", end_time="10:00")
        assert documents_for(state) == [
            c.CONCEPT_PAPER, c.REQUEST_FORM, c.OFF_CAMPUS_NOTICE, c.OFF_CAMPUS_WAIVER,
        ]


class TestShortNoticeAdvisory:

    today = date(2026, 3, 2)  # Monday

    def test_within_five_business_days(self):
        assert short_notice_advisory("2026-03-06", self.today) == SHORT_NOTICE_ADVISORY

    def test_five_business_days_out_is_fine(self):
        assert short_notice_advisory("2026-03-09", self.today) is None

    def test_past_or_blank_dates_have_no_advisory(self):
        assert short_notice_advisory("2026-02-27", self.today) is None
        assert short_notice_advisory("", self.today) is None
