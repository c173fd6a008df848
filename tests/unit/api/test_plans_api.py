"""
API tests for the plan endpoints.

Runs against an in-memory SQLite database shared through a static pool.
"""

import datetime

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from app.db.session import get_db
from app.main import app
from app.models.plan import SavedPlan  # noqa: F401


PLAN_REQUEST = {
    "intake": {
        "name": "Alex",
        "age": 38,
        "primary_goal": "energy",
        "sleep_hours_bucket": "6.5-7",
        "stress_1_10": 6,
        "training_frequency": "1-2",
        "diet_pattern": ["high_ultra_processed", "late_eating"],
        "daily_time_budget": "20",
        "equipment_access": "none",
    },
    "start_date": "2026-03-02",
}


@pytest.fixture()
def client():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)

    def _get_db():
        with Session(engine) as session:
            yield session

    app.dependency_overrides[get_db] = _get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.pop(get_db, None)
        SQLModel.metadata.drop_all(engine)


class TestPreview:

    def test_preview_returns_plan_and_text(self, client):
        resp = client.post("/api/v1/plans/preview", json=PLAN_REQUEST)
        assert resp.status_code == 200

        data = resp.json()
        plan = data["plan"]
        assert len(plan["days"]) == 30
        assert plan["start_date"] == "2026-03-02"
        assert plan["primary_focus_pillars"] == ["nutrition", "circadian", "sleep"]
        assert data["text"].startswith("LONGEVITY BLUEPRINT")

    def test_preview_is_deterministic(self, client):
        first = client.post("/api/v1/plans/preview", json=PLAN_REQUEST).json()
        second = client.post("/api/v1/plans/preview", json=PLAN_REQUEST).json()
        assert first == second

    def test_preview_with_health_profile(self, client):
        payload = dict(PLAN_REQUEST, health_profile={"chronic_conditions": ["heart_disease"]})
        health = client.post("/api/v1/plans/preview", json=payload).json()["plan"]["meta"]["health"]
        assert health["has_profile"] is True
        assert health["intensity_cap"] == 0
        assert health["summary"]["intensity_level"] == "gentle"

    def test_empty_request_uses_defaults(self, client):
        resp = client.post("/api/v1/plans/preview", json={})
        assert resp.status_code == 200
        plan = resp.json()["plan"]
        assert plan["user_name"] == "You"
        assert plan["start_date"] == datetime.date.today().isoformat()

    def test_invalid_intake_rejected(self, client):
        resp = client.post("/api/v1/plans/preview", json={"intake": {"age": 500}})
        assert resp.status_code == 422


class TestStoredPlans:

    def test_create_and_get(self, client):
        resp = client.post("/api/v1/plans", json=PLAN_REQUEST)
        assert resp.status_code == 201
        created = resp.json()
        assert created["id"] is not None
        assert created["user_name"] == "Alex"
        assert created["primary_goal"] == "energy"

        fetched = client.get(f"/api/v1/plans/{created['id']}")
        assert fetched.status_code == 200
        assert fetched.json()["plan"] == created["plan"]
        assert fetched.json()["text"] == created["text"]

    def test_get_text(self, client):
        created = client.post("/api/v1/plans", json=PLAN_REQUEST).json()
        resp = client.get(f"/api/v1/plans/{created['id']}/text")
        assert resp.status_code == 200
        assert resp.headers["content-type"].startswith("text/plain")
        assert resp.text == created["text"]

    def test_list_most_recent_first(self, client):
        first = client.post("/api/v1/plans", json=PLAN_REQUEST).json()
        other = dict(PLAN_REQUEST, intake=dict(PLAN_REQUEST["intake"], name="Sam", primary_goal="sleep"))
        second = client.post("/api/v1/plans", json=other).json()

        listed = client.get("/api/v1/plans").json()
        assert [p["id"] for p in listed] == [second["id"], first["id"]]
        assert listed[0]["user_name"] == "Sam"
        assert "plan" not in listed[0]

    def test_missing_plan_404(self, client):
        resp = client.get("/api/v1/plans/999")
        assert resp.status_code == 404
        assert resp.json()["detail"] == "Plan 999 not found"

    def test_missing_plan_text_404(self, client):
        assert client.get("/api/v1/plans/999/text").status_code == 404
