import json

from fastapi.testclient import TestClient

from main import create_app
from tripplanner.models.domain import Activity
from tripplanner.storage.repository import InMemoryRepository
from tripplanner.storage.seed import seed_demo_data

WEEK = json.dumps(
    [
        "Monday: 9:00 AM – 6:00 PM",
        "Tuesday: 9:00 AM – 6:00 PM",
        "Wednesday: 9:00 AM – 6:00 PM",
        "Thursday: 9:00 AM – 6:00 PM",
        "Friday: 9:00 AM – 6:00 PM",
        "Saturday: Closed",
        "Sunday: Closed",
    ]
)


def _client(repository=None):
    repository = repository or InMemoryRepository()
    return TestClient(create_app(repository=repository)), repository


def test_health():
    client, _ = _client()
    assert client.get("/health").json()["status"] == "ok"


def test_browse_ranks_and_pages_seeded_catalog():
    repository = InMemoryRepository()
    seed_demo_data(repository)
    client, _ = _client(repository)

    body = client.get("/activities/", params={"page_size": 2}).json()
    assert body["total_count"] == 5
    assert [a["name"] for a in body["items"]] == ["Time Out Market", "Museu Calouste Gulbenkian"]
    assert body["has_more"] is True

    body = client.get("/activities/", params={"q": "m", "category": "museum"}).json()
    assert body["query"] == ""
    assert [a["id"] for a in body["items"]] == [2]

    assert client.get("/activities/", params={"page": 9}).json()["items"] == []
    assert "tourist_attraction" in client.get("/activities/categories").json()


def test_custom_activity_gets_category_defaults():
    client, repository = _client()
    response = client.post("/activities/", json={"name": "Fado night", "category": "theater"})
    assert response.status_code == 201
    body = response.json()
    assert body["duration_minutes"] == 150
    assert body["estimated_cost"] == 35.0
    assert repository.get_activity(body["id"]).name == "Fado night"


def test_schedule_reports_warnings_and_timeline_groups():
    client, repository = _client()
    repository.save_activity(
        Activity(id=1, name="Gallery", category="museum", estimated_cost=15.0, duration_minutes=60, opening_hours=WEEK)
    )
    trip = client.post(
        "/trips/",
        json={"name": "June", "start_date": "2025-06-01", "end_date": "2025-06-09", "budget": 40},
    ).json()

    late = client.post(
        f"/trips/{trip['id']}/activities",
        json={"activity_id": 1, "planned_date": "2025-06-10", "start_time": "10:00"},
    ).json()
    assert late["in_trip_range"] is False

    # 2025-06-04 is a Wednesday
    wednesday = client.post(
        f"/trips/{trip['id']}/activities",
        json={"activity_id": 1, "planned_date": "2025-06-04", "start_time": "18:30", "duration_minutes": 30},
    ).json()
    assert wednesday["conflict"]["in_conflict"] is True

    clash = client.post(
        f"/trips/{trip['id']}/activities",
        json={"activity_id": 1, "planned_date": "2025-06-04", "start_time": "18:45", "timezone": "UTC"},
    ).json()
    assert clash["overlaps"] == ["Gallery (2025-06-04 18:30-19:00 UTC)"]

    timeline = client.get(f"/trips/{trip['id']}/timeline").json()
    (group,) = timeline["valid_groups"]
    assert group["date"] == "2025-06-04"
    assert [e["trip_activity"]["start_time"] for e in group["entries"]] == ["18:30", "18:45"]
    assert group["total_duration_minutes"] == 90
    assert group["total_duration_label"] == "1h 30m"
    assert list(timeline["invalid_by_date"]) == ["2025-06-10"]
    assert len(timeline["overlaps"]) == 1

    budget = client.get(f"/trips/{trip['id']}/budget").json()
    assert budget["estimated_spend"] == 30.0
    assert budget["activity_count"] == 2
    assert budget["over_budget"] is False


def test_unknown_ids_are_not_found():
    client, _ = _client()
    assert client.get("/trips/42/timeline").status_code == 404
    assert client.post(
        "/trips/",
        json={"name": "Bad", "start_date": "2025-06-09", "end_date": "2025-06-01"},
    ).status_code == 422
    trip = client.post("/trips/", json={"name": "Ok", "start_date": "2025-06-01", "end_date": "2025-06-02"}).json()
    missing = client.post(
        f"/trips/{trip['id']}/activities",
        json={"activity_id": 99, "planned_date": "2025-06-01", "start_time": "10:00"},
    )
    assert missing.status_code == 404
    assert client.delete(f"/trips/{trip['id']}/activities/5").status_code == 404


def test_zone_directory_is_rejected_not_a_server_error():
    client, repository = _client()
    repository.save_activity(Activity(id=1, name="Gallery", category="museum", opening_hours=WEEK))
    trip = client.post("/trips/", json={"name": "Ok", "start_date": "2025-06-01", "end_date": "2025-06-09"}).json()

    for zone in ("Europe", "America", "Not/A_Zone"):
        response = client.post(
            f"/trips/{trip['id']}/activities",
            json={"activity_id": 1, "planned_date": "2025-06-04", "start_time": "10:00", "timezone": zone},
        )
        assert response.status_code == 422
    assert repository.list_trip_activities(trip["id"]) == []
    assert client.get(f"/trips/{trip['id']}/timeline").status_code == 200


def test_update_rechecks_hours_and_overlaps():
    client, repository = _client()
    repository.save_activity(
        Activity(id=1, name="Gallery", category="museum", estimated_cost=15.0, duration_minutes=60, opening_hours=WEEK)
    )
    trip = client.post("/trips/", json={"name": "June", "start_date": "2025-06-01", "end_date": "2025-06-09"}).json()
    url = f"/trips/{trip['id']}/activities"
    first = client.post(url, json={"activity_id": 1, "planned_date": "2025-06-04", "start_time": "10:00"}).json()
    second = client.post(url, json={"activity_id": 1, "planned_date": "2025-06-04", "start_time": "14:00"}).json()
    assert first["overlaps"] == [] and second["overlaps"] == []

    # move the second visit onto the first one
    moved = client.patch(f"{url}/{second['scheduled']['id']}", json={"start_time": "10:30", "notes": "with friends"})
    assert moved.status_code == 200
    body = moved.json()
    assert body["scheduled"]["start_time"] == "10:30"
    assert body["scheduled"]["planned_date"] == "2025-06-04"
    assert body["scheduled"]["notes"] == "with friends"
    assert body["overlaps"] == ["Gallery (2025-06-04 10:00-11:00 UTC)"]
    assert body["conflict"]["in_conflict"] is False

    # 2025-06-07 is a Saturday, closed
    saturday = client.patch(f"{url}/{second['scheduled']['id']}", json={"planned_date": "2025-06-07"}).json()
    assert saturday["conflict"]["reason"] == "venue closed on Saturday"
    assert saturday["overlaps"] == []
    assert saturday["scheduled"]["start_time"] == "10:30"

    late = client.patch(f"{url}/{first['scheduled']['id']}", json={"planned_date": "2025-06-12", "duration_minutes": 30})
    assert late.json()["in_trip_range"] is False
    assert late.json()["scheduled"]["duration_minutes"] == 30

    timeline = client.get(f"/trips/{trip['id']}/timeline").json()
    assert [e["trip_activity"]["notes"] for e in timeline["valid_groups"][0]["entries"]] == ["with friends"]
    assert list(timeline["invalid_by_date"]) == ["2025-06-12"]
    assert timeline["invalid_conflicts"][str(first["scheduled"]["id"])]["in_conflict"] is False


def test_update_validates_and_scopes_to_trip():
    client, repository = _client()
    repository.save_activity(Activity(id=1, name="Gallery", category="museum"))
    trip = client.post("/trips/", json={"name": "A", "start_date": "2025-06-01", "end_date": "2025-06-09"}).json()
    other = client.post("/trips/", json={"name": "B", "start_date": "2025-06-01", "end_date": "2025-06-09"}).json()
    scheduled = client.post(
        f"/trips/{trip['id']}/activities",
        json={"activity_id": 1, "planned_date": "2025-06-04", "start_time": "10:00"},
    ).json()["scheduled"]

    assert client.patch(f"/trips/{trip['id']}/activities/99", json={"notes": "x"}).status_code == 404
    assert client.patch(f"/trips/{other['id']}/activities/{scheduled['id']}", json={"notes": "x"}).status_code == 404
    assert client.patch(f"/trips/42/activities/{scheduled['id']}", json={"notes": "x"}).status_code == 404
    item_url = f"/trips/{trip['id']}/activities/{scheduled['id']}"
    assert client.patch(item_url, json={"timezone": "Europe"}).status_code == 422
    assert client.patch(item_url, json={"start_time": "25:00"}).status_code == 422
    assert client.patch(item_url, json={"actual_cost": -1}).status_code == 422

    unchanged = client.patch(item_url, json={}).json()["scheduled"]
    assert unchanged == scheduled
