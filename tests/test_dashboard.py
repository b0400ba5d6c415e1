# imports
import pytest
from fastapi.testclient import TestClient

from habitflow.dashboard.app import create_app
from habitflow.dashboard.dependencies import reset_tracker


@pytest.fixture
def client(tracker):
    # lifespan installs the given tracker as the app's engine
    with TestClient(create_app(tracker)) as test_client:
        yield test_client
    reset_tracker()


def _create(client, name="Read", goal=5):
    response = client.post("/api/habits", json={"name": name, "goal": goal})
    assert response.status_code == 201
    return response.json()


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_create_and_list(client):
    habit = _create(client)
    assert habit["current_streak"] == 0
    assert habit["badges"] == []

    listed = client.get("/api/habits").json()
    assert [h["habit_id"] for h in listed] == [habit["habit_id"]]


@pytest.mark.parametrize("payload", [
    {"name": "   ", "goal": 5},
    {"name": "Read", "goal": 0},
    {"name": "Read", "goal": 8},
])
def test_create_validation(client, payload):
    response = client.post("/api/habits", json=payload)
    assert response.status_code == 422
    assert client.get("/api/habits").json() == []


def test_get_and_update(client):
    habit = _create(client)

    response = client.patch(f"/api/habits/{habit['habit_id']}", json={"goal": 3})
    assert response.status_code == 200
    assert response.json()["goal"] == 3

    assert client.get(f"/api/habits/{habit['habit_id']}").json()["goal"] == 3
    assert client.get("/api/habits/unknown").status_code == 404
    assert client.patch("/api/habits/unknown", json={"goal": 3}).status_code == 404


def test_toggle_roundtrip(client):
    habit = _create(client)
    url = f"/api/habits/{habit['habit_id']}/checks/2024-03-15"

    first = client.post(url).json()
    assert first["checked"] is True
    assert [b["name"] for b in first["new_badges"]] == ["First Steps"]
    assert first["current_streak"] == 1

    second = client.post(url).json()
    assert second["checked"] is False
    assert second["new_badges"] == []


def test_toggle_errors(client):
    habit = _create(client)
    assert client.post("/api/habits/unknown/checks/2024-03-15").status_code == 404
    assert client.post(f"/api/habits/{habit['habit_id']}/checks/15-03-2024").status_code == 422


def test_delete_is_idempotent(client):
    habit = _create(client)
    client.post(f"/api/habits/{habit['habit_id']}/checks/2024-03-11")

    assert client.delete(f"/api/habits/{habit['habit_id']}").status_code == 204
    assert client.delete(f"/api/habits/{habit['habit_id']}").status_code == 204
    assert client.get("/api/stats/weekdays").json()["Mon"] == 0


def test_stats_endpoints(client):
    habit = _create(client, goal=1)
    client.post(f"/api/habits/{habit['habit_id']}/checks/2024-03-11")

    analytics = client.get("/api/stats/analytics", params={"weeks": 4}).json()
    series = analytics["completion_rates"][0]["data"]
    assert len(series) == 4
    assert series[-1] == {"week": "Mar 11", "rate": 100}
    assert analytics["weekly_stats"][0] == {"day": "Mon", "completed": 1}

    weekdays = client.get("/api/stats/weekdays").json()
    assert list(weekdays) == ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]

    overview = client.get("/api/stats/overview").json()
    assert overview["total_habits"] == 1
    assert overview["today_completions"] == 0

    assert client.get("/api/stats/analytics", params={"weeks": 0}).status_code == 422


def test_heatmap(client):
    habit = _create(client)
    client.post(f"/api/habits/{habit['habit_id']}/checks/2024-03-14")
    heatmap = client.get(f"/api/habits/{habit['habit_id']}/heatmap").json()
    assert {"date": "2024-03-14", "completed": True} in heatmap


def test_demo_endpoint(client):
    assert client.post("/api/demo").status_code == 204
    assert len(client.get("/api/habits").json()) == 3


def test_health_reports_uptime(client):
    body = client.get("/health").json()
    assert body["uptime"] >= 0
    assert "timestamp" not in body


def test_padded_name_is_trimmed_before_length_check(client):
    name = "x" * 100
    habit = _create(client, name=f"  {name}  ")
    assert habit["name"] == name

    response = client.patch(f"/api/habits/{habit['habit_id']}", json={"name": f" {name} "})
    assert response.status_code == 200
    assert response.json()["name"] == name

    assert client.post("/api/habits", json={"name": "x" * 101}).status_code == 422
