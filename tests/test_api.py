"""HTTP API tests with in-memory collaborators."""

import json
from datetime import date, timedelta

import pytest
from fastapi.testclient import TestClient

from crew_api.database import get_record_store
from crew_api.dependencies import get_generative_provider
from crew_api.main import create_app
from crew_api.security.auth import get_auth_provider
from crew_api.security.rate_limit import limiter
from crew_api.services.activity_service import LogAction
from tests.fakes import FakeAuthProvider, FakeGenerativeProvider, InMemoryRecordStore, make_employee

AUTH_HEADERS = {"Authorization": "Bearer token-1"}


@pytest.fixture
def api_store() -> InMemoryRecordStore:
    return InMemoryRecordStore()


@pytest.fixture
def auth_provider() -> FakeAuthProvider:
    provider = FakeAuthProvider()
    user = provider.register("jean@example.com", "secret123", user_id="user-1")
    provider.issue_token(user, "token-1")
    return provider


@pytest.fixture
def ai_provider() -> FakeGenerativeProvider:
    return FakeGenerativeProvider()


@pytest.fixture
def client(api_store, auth_provider, ai_provider):
    app = create_app()
    app.dependency_overrides[get_record_store] = lambda: api_store
    app.dependency_overrides[get_auth_provider] = lambda: auth_provider
    app.dependency_overrides[get_generative_provider] = lambda: ai_provider
    limiter.reset()
    with TestClient(app) as test_client:
        yield test_client


class TestAuthEndpoints:
    """Sessions over HTTP."""

    def test_health(self, client) -> None:
        assert client.get("/health").json() == {"status": "healthy"}

    def test_missing_token(self, client) -> None:
        response = client.get("/api/v1/employees")
        assert response.status_code == 401
        assert response.json()["detail"] == "Authentication required"

    def test_invalid_token(self, client) -> None:
        response = client.get("/api/v1/employees", headers={"Authorization": "Bearer nope"})
        assert response.status_code == 401
        assert response.json()["detail"] == "Invalid or expired session"

    def test_sign_in(self, client) -> None:
        response = client.post(
            "/api/v1/auth/sign-in",
            json={"email": "jean@example.com", "password": "secret123"},
        )
        assert response.status_code == 200
        body = response.json()
        assert body["access_token"] == "token-user-1"
        assert body["user"]["display_name"] == "Utilisateur"

    def test_sign_in_rejected(self, client) -> None:
        response = client.post(
            "/api/v1/auth/sign-in",
            json={"email": "jean@example.com", "password": "wrong-pass"},
        )
        assert response.status_code == 401
        assert response.json()["detail"] == "Invalid credentials"

    def test_sign_up_and_rename(self, client, api_store) -> None:
        response = client.post(
            "/api/v1/auth/sign-up",
            json={"email": "lea@example.com", "password": "secret123", "first_name": "léa", "last_name": "MARTIN"},
        )
        assert response.status_code == 201
        assert api_store.profiles[response.json()["id"]].first_name == "Léa"

        renamed = client.patch("/api/v1/auth/me", json={"first_name": "jean", "last_name": "dupont"}, headers=AUTH_HEADERS)
        assert renamed.json()["display_name"] == "Jean Dupont"

    def test_sign_out_revokes_token(self, client, auth_provider) -> None:
        assert client.post("/api/v1/auth/sign-out", headers=AUTH_HEADERS).status_code == 204
        assert auth_provider.revoked == ["token-1"]


class TestRosterEndpoints:
    """Roster lifecycle over HTTP."""

    def test_recruit_and_list(self, client, api_store) -> None:
        created = client.post("/api/v1/employees", json={"name": "Alice Martin"}, headers=AUTH_HEADERS)
        assert created.status_code == 201
        employee_id = created.json()["employee"]["id"]

        listing = client.get("/api/v1/employees", params={"search": "alice"}, headers=AUTH_HEADERS).json()

        assert listing["total"] == 1
        assert listing["items"][0]["id"] == employee_id
        assert api_store.logs_with_action(LogAction.RECRUIT)

    def test_listing_sweeps_ended_contracts(self, client, api_store) -> None:
        api_store.seed(make_employee("A", contract_end_date=date.today() - timedelta(days=1)))

        assert client.get("/api/v1/employees", headers=AUTH_HEADERS).json()["total"] == 0
        archive = client.get("/api/v1/archive", params={"pending": True}, headers=AUTH_HEADERS).json()
        assert [entry["employee"]["id"] for entry in archive] == ["A"]

    def test_unknown_employee(self, client) -> None:
        response = client.get("/api/v1/employees/EMP-404", headers=AUTH_HEADERS)
        assert response.status_code == 404
        assert response.json()["detail"] == "Employee not found"

    def test_archive_requires_reason(self, client, api_store) -> None:
        api_store.seed(make_employee("A"))
        response = client.post("/api/v1/employees/A/archive", json={"reason": "   "}, headers=AUTH_HEADERS)
        assert response.status_code == 400
        assert response.json()["detail"] == "Archive reason is required"

    def test_archive_and_restore(self, client, api_store) -> None:
        api_store.seed(make_employee("A", contract_end_date=date.today() + timedelta(days=60)))

        archived = client.post("/api/v1/employees/A/archive", json={"reason": "Départ"}, headers=AUTH_HEADERS)
        assert archived.json()["target"] == "archived"

        restored = client.post("/api/v1/archive/A/restore", headers=AUTH_HEADERS).json()
        assert restored["target"] == "active"
        assert restored["employee"]["contract_end_date"] is None

    def test_trash_flow(self, client, api_store) -> None:
        api_store.seed(make_employee("A"), make_employee("B"))

        client.delete("/api/v1/employees/A", headers=AUTH_HEADERS)
        trash = client.get("/api/v1/trash", headers=AUTH_HEADERS).json()
        assert [(entry["employee"]["id"], entry["days_left"]) for entry in trash] == [("A", 30)]

        purged = client.delete("/api/v1/trash/A", headers=AUTH_HEADERS)
        assert purged.status_code == 200
        assert api_store.delete_calls == ["A"]
        assert "A" not in api_store.employees

    def test_stale_update_is_conflict(self, client, api_store) -> None:
        api_store.seed(make_employee("A", version=5))
        response = client.patch("/api/v1/employees/A", json={"name": "Bob", "version": 4}, headers=AUTH_HEADERS)
        assert response.status_code == 409
        assert response.json()["detail"] == "Employee was modified concurrently"


class TestDashboardAndSettings:
    def test_dashboard(self, client, api_store) -> None:
        api_store.seed(make_employee("A"))
        report = client.get("/api/v1/dashboard", headers=AUTH_HEADERS).json()

        assert report["employee_count"] == 1
        assert report["cert_compliance_rate"] == 0
        assert len(report["alerts"][0]["alerts"]) == report["mandatory_cert_count"]

    def test_save_skills_and_activity_feed(self, client) -> None:
        saved = client.put("/api/v1/settings/catalogs/skills", json=["FRITES", "DRIVE"], headers=AUTH_HEADERS)
        assert saved.json() == ["FRITES", "DRIVE"]

        catalogs = client.get("/api/v1/settings/catalogs", headers=AUTH_HEADERS).json()
        assert catalogs["skills"] == ["FRITES", "DRIVE"]

        feed = client.get("/api/v1/activity", params={"category": "FORMATION"}, headers=AUTH_HEADERS).json()
        assert [item["action"] for item in feed["items"]] == [LogAction.UPDATE_CATALOG]
        assert feed["total"] == 1

    def test_activity_feed_pagination_reports_total(self, client) -> None:
        for skills in (["FRITES"], ["FRITES", "DRIVE"], ["DRIVE"]):
            client.put("/api/v1/settings/catalogs/skills", json=skills, headers=AUTH_HEADERS)

        page = client.get("/api/v1/activity", params={"page": 2, "page_size": 2}, headers=AUTH_HEADERS).json()

        assert len(page["items"]) == 1
        assert (page["total"], page["page"], page["page_size"]) == (3, 2, 2)

    def test_duplicate_skills_rejected(self, client) -> None:
        response = client.put("/api/v1/settings/catalogs/skills", json=["FRITES", "frites"], headers=AUTH_HEADERS)
        assert response.status_code == 400


class TestPlanningAndSupport:
    def test_suggest(self, client, api_store, ai_provider) -> None:
        api_store.seed(make_employee("EMP-1", name="Thomas"))
        ai_provider.reply = json.dumps(
            {"assignments": [{"taskId": "T-1", "employeeId": "EMP-1", "reason": "Thomas est Expert"}]}
        )

        response = client.post(
            "/api/v1/planning/suggest",
            json={"tasks": [{"id": "T-1", "title": "Inventaire"}]},
            headers=AUTH_HEADERS,
        )

        body = response.json()
        assert body["tasks"][0]["assigned_to"] == "EMP-1"
        assert body["tasks"][0]["status"] == "Assigned"
        assert api_store.logs_with_action(LogAction.AI_PLANNING)

    def test_suggest_with_unusable_reply(self, client, api_store, ai_provider) -> None:
        api_store.seed(make_employee("EMP-1"))
        ai_provider.reply = "désolé"

        response = client.post(
            "/api/v1/planning/suggest",
            json={"tasks": [{"id": "T-1", "title": "Inventaire"}]},
            headers=AUTH_HEADERS,
        )

        assert response.status_code == 200
        assert response.json()["assignments"] == []

    def test_support_inquiry(self, client, api_store) -> None:
        response = client.post(
            "/api/v1/support/inquiries",
            json={"name": "Jean", "email": "jean@example.com", "subject": "Accès", "message": "Bonjour"},
            headers=AUTH_HEADERS,
        )
        assert response.status_code == 201
        assert response.json()["status"] == "open"
        assert len(api_store.inquiries) == 1
