import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from timeledger.api import deps
from timeledger.core.security import create_access_token
from timeledger.db.session import get_db
from timeledger.main import app

from conftest import OWNER


@pytest.fixture
def client(engine):
    TestingSession = sessionmaker(bind=engine, autocommit=False, autoflush=False)

    def override_get_db():
        db = TestingSession()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[deps.get_current_owner] = lambda: OWNER
    yield TestClient(app)
    app.dependency_overrides.clear()


def _category(client, **flags):
    response = client.post("/categories/", json={"name": "Work", "color": "#F59E0B", **flags})
    assert response.status_code == 201
    return response.json()["id"]


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}


def test_block_lifecycle(client):
    category_id = _category(client, requires_rest_after=True)
    payload = {
        "category_id": category_id,
        "date": "2024-03-04",
        "start_time": "09:00:00",
        "end_time": "11:00",
        "priority": "high",
    }
    created = client.post("/blocks/", json=payload)
    assert created.status_code == 201
    block = created.json()
    assert block["start_time"] == "09:00"
    assert block["priority"] == 7
    assert block["validation"]["status"] == "pending"

    conflict = client.post("/blocks/", json={**payload, "start_time": "10:00", "end_time": "12:00"})
    assert conflict.status_code == 409
    assert "overlaps" in conflict.json()["detail"]

    degenerate = client.post("/blocks/", json={**payload, "start_time": "13:00", "end_time": "13:00"})
    assert degenerate.status_code == 400

    malformed = client.post("/blocks/", json={**payload, "start_time": "25:00"})
    assert malformed.status_code == 422

    listed = client.get("/blocks/", params={"date": "2024-03-04"})
    assert [b["id"] for b in listed.json()] == [block["id"]]

    validated = client.post(
        f"/validations/blocks/{block['id']}", json={"status": "completed"}
    )
    assert validated.status_code == 200
    assert validated.json()["completion_percentage"] == 100

    violations = client.get("/rules/violations").json()
    assert [v["violation_type"] for v in violations] == ["rest_skipped"]

    acknowledged = client.post("/rules/violations/acknowledge-all")
    assert acknowledged.json() == {"acknowledged": 1}

    assert client.delete(f"/blocks/{block['id']}").status_code == 204
    assert client.get(f"/blocks/{block['id']}").status_code == 404


def test_candidate_check(client):
    category_id = _category(client)
    limit = client.post(
        "/rules/limits", json={"category_id": category_id, "max_continuous_minutes": 60}
    )
    assert limit.status_code == 200

    check = {
        "date": "2024-03-04",
        "category_id": category_id,
        "start_time": "09:00",
        "end_time": "10:30",
    }
    violations = client.post("/rules/check", json=check).json()
    assert [v["type"] for v in violations] == ["continuous_exceeded"]
    assert client.get("/rules/violations").json() == []

    client.post("/rules/check", params={"record": True}, json=check)
    assert len(client.get("/rules/violations").json()) == 1


def test_goal_progress(client):
    category_id = _category(client)
    goal = client.post(
        "/goals/monthly",
        json={"category_id": category_id, "year": 2024, "month": 3, "target_hours": 20},
    )
    assert goal.status_code == 200

    progress = client.get("/goals/monthly/progress", params={"year": 2024, "month": 3})
    [item] = progress.json()
    assert item["achieved_hours"] == 0
    assert item["status"] == "behind"


def test_template_apply(client):
    category_id = _category(client)
    template = client.post("/templates/", json={"name": "Week"}).json()
    client.post(
        f"/templates/{template['id']}/blocks",
        json={"category_id": category_id, "day_of_week": 1, "start_time": "07:00", "end_time": "08:00"},
    )
    result = client.post(
        f"/templates/{template['id']}/apply", json={"week_start_date": "2024-03-04"}
    )
    assert result.json() == {"created": 1, "skipped": 0}

    empty = client.post("/templates/", json={"name": "Empty"}).json()
    assert client.post(
        f"/templates/{empty['id']}/apply", json={"week_start_date": "2024-03-04"}
    ).status_code == 400


def test_bearer_token_resolves_owner(engine):
    TestingSession = sessionmaker(bind=engine, autocommit=False, autoflush=False)

    def override_get_db():
        db = TestingSession()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    try:
        client = TestClient(app)
        assert client.get("/categories/").status_code == 401
        assert client.get(
            "/categories/", headers={"Authorization": "Bearer not-a-token"}
        ).status_code == 401

        token = create_access_token("owner-7")
        created = client.post(
            "/categories/defaults", headers={"Authorization": f"Bearer {token}"}
        )
        assert created.status_code == 200
        assert {c["user_id"] for c in created.json()} == {"owner-7"}
    finally:
        app.dependency_overrides.clear()


def test_impossible_periods_are_client_errors(client):
    assert client.get("/time-entries/", params={"month": "2025-13"}).status_code == 422
    assert client.get("/time-entries/", params={"month": "2025-00"}).status_code == 422
    assert client.get("/time-entries/", params={"month": "2025-12"}).status_code == 200

    weekly = client.get("/goals/weekly/progress", params={"year": 2025, "week_number": 53})
    assert weekly.status_code == 400
    assert "ISO week 53" in weekly.json()["detail"]


def test_dashboard_and_streaks(client):
    category_id = _category(client)
    entry = client.post(
        "/time-entries/",
        json={
            "category_id": category_id,
            "start_time": "2024-03-04T09:00:00",
            "end_time": "2024-03-04T10:30:00",
            "date": "2024-03-04",
        },
    )
    assert entry.status_code == 201

    stats = client.get("/dashboard/monthly", params={"month": "2024-03"}).json()
    assert stats["total_hours"] == 1.5
    assert stats["daily_totals"] == [{"date": "2024-03-04", "minutes": 90}]
    assert client.get("/dashboard/monthly", params={"month": "2024-13"}).status_code == 422

    assert client.get("/streaks/").json()["current_streak"] == 0
    updated = client.post("/streaks/update").json()
    assert updated == {"current_streak": 1, "longest_streak": 1, "streak_increased": True}
    assert client.post("/streaks/update").json()["streak_increased"] is False
