"""Tests for account lookup, organization list, form helpers and health."""
from tests.conftest import auth_header, create_test_account, create_test_org, future_date


class TestAccounts:

    def test_me(self, client, db):
        account = create_test_account(db)
        resp = client.get("/api/accounts/me", headers=auth_header("student@up.edu.ph"))
        assert resp.status_code == 200
        data = resp.json()
        assert data["account_id"] == account.account_id
        assert data["reminders_seen"] is False

    def test_me_without_token(self, client):
        resp = client.get("/api/accounts/me")
        assert resp.status_code == 401

    def test_reminders_seen_persists(self, client, db):
        create_test_account(db)
        headers = auth_header("student@up.edu.ph")
        resp = client.post("/api/accounts/me/reminders-seen", headers=headers)
        assert resp.json()["reminders_seen"] is True
        assert client.get("/api/accounts/me", headers=headers).json()["reminders_seen"] is True


class TestOrganizations:

    def test_list(self, client, db):
        create_test_org(db, name="Chess Club")
        create_test_org(db, name="Astronomy Society")
        resp = client.get("/api/organization/list")
        assert resp.status_code == 200
        assert [o["org_name"] for o in resp.json()] == ["Astronomy Society", "Chess Club"]


class TestActivityFormHelpers:

    def test_validate_reports_first_failure(self, client):
        resp = client.post("/api/activity-form/validate", json={
            "section": "general-info",
            "state": {"selectedValue": "1", "studentPosition": "P"},
        })
        assert resp.status_code == 200
        assert resp.json() == {
            "valid": False,
            "field": "studentPosition",
            "message": "Student Position must be between 3 to 50 characters.",
        }

    def test_validate_passes(self, client):
        resp = client.post("/api/activity-form/validate", json={
            "section": "date-info",
            "mode": "create",
            "state": {
                "recurring": "one-time",
                "startDate": future_date(),
                "startTime": "09:00",
                "endTime": "11:00",
            },
        })
        assert resp.json()["valid"] is True

    def test_unknown_section(self, client):
        resp = client.post("/api/activity-form/validate", json={"section": "nope", "state": {}})
        assert resp.status_code == 422

    def test_required_documents(self, client):
        resp = client.post("/api/activity-form/required-documents", json={
            "state": {
                "isOffCampus": "yes",
                "startDate": future_date(2),
                "startTime": "22:00",
                "endTime": "23:00",
            },
        })
        data = resp.json()
        assert len(data["documents"]) == 5
        assert data["advisory"] is not None


def test_health(client):
    resp = client.get("/api/health")
    assert resp.json() == {"status": "ok"}
