"""
API tests for the IDP routes using FastAPI's TestClient.

The service dependency is overridden with one bound to the in-memory test
database and an offline collaborator.
Run: pytest tests/unit/test_api_routes.py -v
"""

import pytest
from fastapi.testclient import TestClient

from api.dependencies import get_idp_service
from api.main import app
from config.settings import settings
from services.idp_service import IDPService
from tools.plan_generator import PlanGenerator
from tools.skill_extractor import FALLBACK_SKILLS, SkillExtractor
from utils.exceptions import ExternalServiceError


class StaticSheetFetcher:
    def fetch_text(self, sheet_url):
        return "Competency,Rating\nSQL,2"


@pytest.fixture
def client(db, fake_llm, monkeypatch):
    monkeypatch.setattr(settings, "API_SECRET_KEY", None)
    llm = fake_llm(error=ExternalServiceError("offline"))

    def override_service():
        return IDPService(
            db,
            skill_extractor=SkillExtractor(llm_service=llm),
            plan_generator=PlanGenerator(llm_service=llm),
            sheet_fetcher=StaticSheetFetcher(),
        )

    app.dependency_overrides[get_idp_service] = override_service
    yield TestClient(app)
    app.dependency_overrides.clear()


# ---------------------------------------------------------------------------
# Health and auth
# ---------------------------------------------------------------------------

class TestHealthAndAuth:

    def test_ping(self, client):
        assert client.get("/ping").json() == {"message": "pong"}

    def test_no_key_needed_when_unconfigured(self, client):
        assert client.get("/idps").status_code == 200

    def test_key_required_when_configured(self, client, monkeypatch):
        monkeypatch.setattr(settings, "API_SECRET_KEY", "s3cret")

        assert client.get("/idps").status_code == 401
        assert client.get("/idps", headers={"X-API-Key": "wrong"}).status_code == 401
        assert client.get("/idps", headers={"X-API-Key": "s3cret"}).status_code == 200
        assert client.get("/health").status_code == 200


# ---------------------------------------------------------------------------
# Appraisal to IDP flow
# ---------------------------------------------------------------------------

class TestAppraisalFlow:

    def test_import_analyze_create_and_save(self, client):
        response = client.post("/appraisals", json={
            "employee_id": "emp-1",
            "manager_id": "mgr-1",
            "sheet_url": "https://docs.google.com/spreadsheets/d/abc/edit",
        })
        assert response.status_code == 201
        source_id = response.json()["id"]

        analyzed = client.post(f"/appraisals/{source_id}/analyze").json()
        assert analyzed["skills"] == FALLBACK_SKILLS

        response = client.post("/idps", json={"appraisal_source_id": source_id, "name": "March 2025"})
        assert response.status_code == 201
        idp = response.json()
        assert idp["status"] == "initial"

        response = client.post(f"/idps/{idp['id']}/skills", json={"skills": analyzed["skills"]})
        assert response.status_code == 201
        saved = response.json()
        assert saved["idp"]["status"] == "in_progress"
        assert len(saved["skills"]) == 9
        assert len(saved["plans"]) == 9
        assert all(p["progress_percentage"] == 0 for p in saved["plans"])

        overview = client.get(f"/idps/{idp['id']}").json()
        assert set(overview["categories"]) == {"technical", "functional", "behavioral"}
        assert all(len(c["skills"]) == 3 for c in overview["categories"].values())
        assert overview["progress"] == 0

    def test_list_sources_filters(self, client, appraisal_source):
        body = client.get("/appraisals", params={"employee_id": appraisal_source.employee_id}).json()
        assert body["total"] == 1
        assert client.get("/appraisals", params={"employee_id": "other"}).json()["total"] == 0

    def test_unknown_ids_are_404(self, client):
        assert client.post("/appraisals/missing/analyze").status_code == 404
        assert client.get("/idps/missing").status_code == 404
        assert client.post("/idps", json={"appraisal_source_id": "missing"}).status_code == 404

    def test_save_with_no_skills_is_400(self, client, idp):
        response = client.post(f"/idps/{idp.id}/skills", json={"skills": {}})
        assert response.status_code == 400


# ---------------------------------------------------------------------------
# Planning (stateless)
# ---------------------------------------------------------------------------

class TestPlanningRoutes:

    def test_extract_skills_falls_back(self, client):
        response = client.post("/planning/extract-skills", json={"appraisal_text": "anything"})
        assert response.status_code == 200
        assert response.json()["skills"] == FALLBACK_SKILLS

    def test_generate_plans(self, client):
        response = client.post("/planning/generate-plans", json={"skills": {"technical": ["SQL tuning"]}})
        assert response.status_code == 200
        plan = response.json()["plans"]["technical"]["SQL tuning"]
        assert len(plan["tasks"]) == 4

    def test_generate_plans_rejects_unknown_category(self, client):
        response = client.post("/planning/generate-plans", json={"skills": {"soft": ["Talking"]}})
        assert response.status_code == 422

    def test_run(self, client):
        body = client.post("/planning/run", json={"appraisal_text": ""}).json()
        assert body["skills"] == FALLBACK_SKILLS
        assert set(body["plans"]["behavioral"]) == set(FALLBACK_SKILLS["behavioral"])


# ---------------------------------------------------------------------------
# Plans and mark-as-read
# ---------------------------------------------------------------------------

class TestPlanRoutes:

    def test_get_plans_by_skill_is_idempotent(self, client, skills):
        first = client.get("/plans", params={"skill_id": skills[0].id}).json()
        second = client.get("/plans", params={"skill_id": skills[0].id}).json()

        assert first["total"] == 1
        assert first["plans"][0]["id"] == second["plans"][0]["id"]

    def test_get_plans_by_idp(self, client, idp, skills):
        body = client.get("/plans", params={"idp_id": idp.id}).json()
        assert body["total"] == len(skills)

    @pytest.mark.parametrize("params", [{}, {"skill_id": "a", "idp_id": "b"}])
    def test_get_plans_needs_exactly_one_filter(self, client, params):
        assert client.get("/plans", params=params).status_code == 400

    def test_mark_item_complete(self, client, skills):
        url = f"/plans/by-skill/{skills[0].id}/complete"

        client.post(url, json={"item_type": "udemy"})
        body = client.post(url, json={"item_type": "tasks", "item_index": 0}).json()

        assert body["plan_info"]["udemyRead"] is True
        assert body["plan_info"]["tasksRead"] == [0]
        assert body["progress_percentage"] == 25
        assert body["progress"] == "in_progress"

    def test_mark_twice_changes_nothing(self, client, skills):
        url = f"/plans/by-skill/{skills[0].id}/complete"

        first = client.post(url, json={"item_type": "tasks", "item_index": 1}).json()
        second = client.post(url, json={"item_type": "tasks", "item_index": 1}).json()

        assert second["plan_info"]["tasksRead"] == [1]
        assert second["version"] == first["version"]

    @pytest.mark.parametrize("payload", [
        {"item_type": "podcast"},
        {"item_type": "tasks"},
        {"item_type": "tasks", "item_index": 10},
    ])
    def test_mark_invalid_item_is_400(self, client, skills, payload):
        response = client.post(f"/plans/by-skill/{skills[0].id}/complete", json=payload)
        assert response.status_code == 400

    def test_mark_unknown_skill_is_404(self, client):
        response = client.post("/plans/by-skill/missing/complete", json={"item_type": "udemy"})
        assert response.status_code == 404

    def test_create_and_update_plan(self, client, skills):
        plan_info = {
            "udemy": {"title": "SQL Performance", "duration": "4 hours", "link": "https://udemy.com/sql"},
            "youtube": {"title": "Indexes explained", "link": "https://youtube.com/i"},
            "reading": {"title": "Use the Index, Luke", "link": "https://use-the-index-luke.com"},
            "tasks": ["Profile the slowest query"],
        }
        response = client.post("/plans", json={"skill_id": skills[0].id, "plan_info": plan_info})
        assert response.status_code == 201
        plan = response.json()

        response = client.put(f"/plans/{plan['id']}", json={"progress": "completed"})
        assert response.status_code == 200
        assert response.json()["progress"] == "completed"
        assert response.json()["plan_info"]["udemy"]["title"] == "SQL Performance"

    def test_create_plan_missing_fields_is_400(self, client):
        assert client.post("/plans", json={"plan_info": None}).status_code == 400

    def test_update_unknown_plan_is_404(self, client):
        assert client.put("/plans/missing", json={"progress": "completed"}).status_code == 404


class TestSkillRoutes:

    def test_delete_unplanned_skill(self, client, skills):
        assert client.delete(f"/skills/{skills[0].id}").status_code == 204

    def test_delete_planned_skill_is_400(self, client, skills):
        client.get("/plans", params={"skill_id": skills[0].id})
        assert client.delete(f"/skills/{skills[0].id}").status_code == 400

    def test_delete_unknown_skill_is_404(self, client):
        assert client.delete("/skills/missing").status_code == 404
