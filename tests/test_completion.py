from datetime import datetime

from fastapi.testclient import TestClient

WEDNESDAY = datetime(2025, 1, 15, 10, 0)
FRIDAY = datetime(2025, 1, 17, 18, 30)
NEXT_TUESDAY = datetime(2025, 1, 21, 7, 0)


def _week_status(client: TestClient, week_start: str = "2025-01-13") -> list[dict]:
    return client.get("/weekly-plans/week-status", params={"weekStart": week_start}).json()["items"]


def test_complete_creates_log_from_template(client: TestClient, make_weekly_item, freeze_now):
    item = make_weekly_item(title="Math", notes="chapter 3", intensity="medium", durationMinutes=50)
    freeze_now(WEDNESDAY)

    r = client.post(f"/weekly-plans/{item['id']}/complete")
    assert r.status_code == 201, r.text
    log = r.json()
    assert log["weeklyPlanItemId"] == item["id"]
    assert log["planItemId"] is None
    assert log["area"] == "study"
    assert log["categoryId"] == item["categoryId"]
    assert log["categoryName"] == "Math"
    assert log["title"] == "Math"
    assert log["notes"] == "chapter 3"
    assert log["intensity"] == "medium"
    assert log["durationMinutes"] == 50
    assert log["dateTime"] == "2025-01-15T10:00:00"


def test_complete_twice_in_same_week_conflicts(client: TestClient, make_weekly_item, freeze_now):
    item = make_weekly_item()
    freeze_now(WEDNESDAY)
    assert client.post(f"/weekly-plans/{item['id']}/complete").status_code == 201

    freeze_now(FRIDAY)
    r_again = client.post(f"/weekly-plans/{item['id']}/complete")
    assert r_again.status_code == 409

    assert client.get("/logs").json()["total"] == 1


def test_uncomplete_without_completion_conflicts(client: TestClient, make_weekly_item, freeze_now):
    item = make_weekly_item()
    freeze_now(WEDNESDAY)

    r = client.post(f"/weekly-plans/{item['id']}/uncomplete")
    assert r.status_code == 409
    assert client.get("/logs").json()["total"] == 0


def test_complete_then_uncomplete_leaves_no_log(client: TestClient, make_weekly_item, freeze_now):
    item = make_weekly_item()
    freeze_now(WEDNESDAY)
    client.post(f"/weekly-plans/{item['id']}/complete")

    freeze_now(FRIDAY)
    r = client.post(f"/weekly-plans/{item['id']}/uncomplete")
    assert r.status_code == 204

    [row] = _week_status(client)
    assert row["isCompleted"] is False
    assert client.get("/logs").json() == {"entries": [], "total": 0}

    # Toggling back on in the same week works again
    assert client.post(f"/weekly-plans/{item['id']}/complete").status_code == 201
    assert _week_status(client)[0]["isCompleted"] is True


def test_each_week_gets_its_own_completion(client: TestClient, make_weekly_item, freeze_now):
    item = make_weekly_item()
    freeze_now(WEDNESDAY)
    client.post(f"/weekly-plans/{item['id']}/complete")

    freeze_now(NEXT_TUESDAY)
    assert _week_status(client, "2025-01-20")[0]["isCompleted"] is False
    assert client.post(f"/weekly-plans/{item['id']}/complete").status_code == 201

    assert _week_status(client, "2025-01-13")[0]["isCompleted"] is True
    assert _week_status(client, "2025-01-20")[0]["isCompleted"] is True
    assert client.get("/logs").json()["total"] == 2


def test_uncomplete_only_touches_current_week(client: TestClient, make_weekly_item, freeze_now):
    item = make_weekly_item()
    freeze_now(WEDNESDAY)
    client.post(f"/weekly-plans/{item['id']}/complete")

    freeze_now(NEXT_TUESDAY)
    assert client.post(f"/weekly-plans/{item['id']}/uncomplete").status_code == 409
    assert _week_status(client, "2025-01-13")[0]["isCompleted"] is True


def test_soft_deleted_template_cannot_complete_but_can_uncomplete(
    client: TestClient, make_weekly_item, freeze_now
):
    item = make_weekly_item()
    freeze_now(WEDNESDAY)
    client.post(f"/weekly-plans/{item['id']}/complete")
    client.delete(f"/weekly-plans/{item['id']}")

    assert client.post(f"/weekly-plans/{item['id']}/complete").status_code == 404
    assert client.post(f"/weekly-plans/{item['id']}/uncomplete").status_code == 204
    assert client.get("/logs").json()["total"] == 0


def test_unknown_template_is_not_found(client: TestClient, freeze_now):
    freeze_now(WEDNESDAY)
    assert client.post("/weekly-plans/9999/complete").status_code == 404
    assert client.post("/weekly-plans/9999/uncomplete").status_code == 404


def test_deleting_completion_log_reopens_template(client: TestClient, make_weekly_item, freeze_now):
    item = make_weekly_item()
    freeze_now(WEDNESDAY)
    log = client.post(f"/weekly-plans/{item['id']}/complete").json()

    assert client.delete(f"/logs/{log['id']}").status_code == 204
    assert _week_status(client)[0]["isCompleted"] is False


def test_moving_completion_into_completed_week_conflicts(client: TestClient, make_weekly_item, freeze_now):
    item = make_weekly_item()
    freeze_now(WEDNESDAY)
    first = client.post(f"/weekly-plans/{item['id']}/complete").json()
    freeze_now(NEXT_TUESDAY)
    second = client.post(f"/weekly-plans/{item['id']}/complete").json()

    r = client.put(f"/logs/{second['id']}", json={"dateTime": "2025-01-16T08:00:00"})
    assert r.status_code == 409

    # Moving within its own week is fine, and moving the first log back a week frees this one
    r_same_week = client.put(f"/logs/{first['id']}", json={"dateTime": "2025-01-18T08:00:00"})
    assert r_same_week.status_code == 200
    r_earlier = client.put(f"/logs/{first['id']}", json={"dateTime": "2025-01-08T08:00:00"})
    assert r_earlier.status_code == 200

    assert _week_status(client, "2025-01-06")[0]["isCompleted"] is True
    assert _week_status(client, "2025-01-13")[0]["isCompleted"] is False
    assert client.put(f"/logs/{second['id']}", json={"dateTime": "2025-01-16T08:00:00"}).status_code == 200
    assert _week_status(client, "2025-01-13")[0]["isCompleted"] is True


def test_concurrent_complete_rejected_by_unique_index(
    client: TestClient, make_weekly_item, freeze_now, monkeypatch
):
    from activity_tracker.services.completion_service import CompletionService

    item = make_weekly_item()
    freeze_now(WEDNESDAY)
    assert client.post(f"/weekly-plans/{item['id']}/complete").status_code == 201

    # Another request committed between our check and our insert
    monkeypatch.setattr(CompletionService, "_find_completion", lambda self, item_id, week_start: None)
    freeze_now(FRIDAY)
    r = client.post(f"/weekly-plans/{item['id']}/complete")
    assert r.status_code == 409

    monkeypatch.undo()
    assert client.get("/logs").json()["total"] == 1
    assert _week_status(client)[0]["isCompleted"] is True
