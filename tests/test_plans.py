from datetime import datetime

from fastapi.testclient import TestClient

NOW = datetime(2025, 1, 15, 19, 0)


def _plan(client: TestClient, category_id: int, date: str, area: str = "study", **extra) -> dict:
    payload = {"date": date, "area": area, "title": extra.pop("title", "Revision"), "categoryId": category_id, **extra}
    r = client.post("/plans", json=payload)
    assert r.status_code == 201, r.text
    return r.json()


def test_plan_item_crud_flow(client: TestClient, make_category):
    cid = make_category("study", "Math")["id"]
    created = _plan(client, cid, "2025-01-15")
    assert created["status"] == "planned"
    assert created["durationMinutes"] == 45
    assert created["categoryName"] == "Math"

    r_upd = client.put(f"/plans/{created['id']}", json={"date": "2025-01-16", "title": "Exam prep"})
    assert r_upd.status_code == 200
    assert r_upd.json()["date"] == "2025-01-16"
    assert r_upd.json()["title"] == "Exam prep"

    assert client.delete(f"/plans/{created['id']}").status_code == 204
    assert client.get("/plans").json() == []
    assert client.put(f"/plans/{created['id']}", json={"title": "x"}).status_code == 404


def test_list_by_range_and_week(client: TestClient, make_category):
    cid = make_category("study", "Math")["id"]
    tech = make_category("football", "Technique")["id"]
    sunday = _plan(client, cid, "2025-01-19")
    monday = _plan(client, cid, "2025-01-13")
    football = _plan(client, tech, "2025-01-14", area="football", title="Drills")
    _plan(client, cid, "2025-01-20")

    week = client.get("/plans/week", params={"weekStart": "2025-01-13"}).json()
    assert [p["id"] for p in week] == [monday["id"], football["id"], sunday["id"]]

    study = client.get("/plans/week", params={"weekStart": "2025-01-13", "area": "study"}).json()
    assert [p["id"] for p in study] == [monday["id"], sunday["id"]]

    ranged = client.get("/plans", params={"startDate": "2025-01-14", "endDate": "2025-01-19"}).json()
    assert [p["id"] for p in ranged] == [football["id"], sunday["id"]]

    assert client.get("/plans/week", params={"weekStart": "2025-01-14"}).status_code == 400


def test_complete_creates_log_and_marks_completed(client: TestClient, make_category, freeze_now):
    cid = make_category("study", "Math")["id"]
    item = _plan(client, cid, "2025-01-15", notes="planned notes", durationMinutes=60)
    freeze_now(NOW)

    r = client.post(f"/plans/{item['id']}/complete", json={"durationMinutes": 75, "notes": "went long"})
    assert r.status_code == 201, r.text
    log = r.json()
    assert log["planItemId"] == item["id"]
    assert log["durationMinutes"] == 75
    assert log["notes"] == "went long"
    assert log["dateTime"] == "2025-01-15T19:00:00"

    [stored] = client.get("/plans").json()
    assert stored["status"] == "completed"

    assert client.post(f"/plans/{item['id']}/complete").status_code == 409
    assert client.get("/logs").json()["total"] == 1


def test_complete_without_body_uses_planned_values(client: TestClient, make_category, freeze_now):
    cid = make_category("study", "Math")["id"]
    item = _plan(client, cid, "2025-01-15", notes="planned notes", durationMinutes=60)
    freeze_now(NOW)

    log = client.post(f"/plans/{item['id']}/complete").json()
    assert log["durationMinutes"] == 60
    assert log["notes"] == "planned notes"


def test_deleting_log_resets_plan_item(client: TestClient, make_category, freeze_now):
    cid = make_category("study", "Math")["id"]
    item = _plan(client, cid, "2025-01-15")
    freeze_now(NOW)
    log = client.post(f"/plans/{item['id']}/complete").json()

    assert client.delete(f"/logs/{log['id']}").status_code == 204
    [stored] = client.get("/plans").json()
    assert stored["status"] == "planned"


def test_skip_and_status_update(client: TestClient, make_category):
    cid = make_category("study", "Math")["id"]
    item = _plan(client, cid, "2025-01-15")

    r_skip = client.post(f"/plans/{item['id']}/skip")
    assert r_skip.status_code == 200
    assert r_skip.json()["status"] == "skipped"

    r_reset = client.put(f"/plans/{item['id']}", json={"status": "planned"})
    assert r_reset.json()["status"] == "planned"
    assert client.put(f"/plans/{item['id']}", json={"status": "done"}).status_code == 422


def test_deleting_plan_item_keeps_its_log(client: TestClient, make_category, freeze_now):
    cid = make_category("study", "Math")["id"]
    item = _plan(client, cid, "2025-01-15")
    freeze_now(NOW)
    log = client.post(f"/plans/{item['id']}/complete").json()

    assert client.delete(f"/plans/{item['id']}").status_code == 204
    [entry] = client.get("/logs").json()["entries"]
    assert entry["id"] == log["id"]
    assert entry["planItemId"] is None


def test_blank_title_rejected(client: TestClient, make_category):
    cid = make_category("study", "Math")["id"]
    r = client.post("/plans", json={"date": "2025-01-15", "area": "study", "title": "   ", "categoryId": cid})
    assert r.status_code == 422
