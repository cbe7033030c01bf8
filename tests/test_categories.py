from fastapi.testclient import TestClient

OTHER_USER_ID = "athlete-2"


def test_health(client: TestClient):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json() == {"status": "ok"}


def test_missing_user_header_is_unauthorized(client: TestClient):
    r = client.get("/categories/study", headers={"X-User-Id": ""})
    assert r.status_code == 401


def test_category_crud_flow(client: TestClient):
    r_create = client.post("/categories/study", json={"name": "  Math "})
    assert r_create.status_code == 201, r_create.text
    created = r_create.json()
    assert created["name"] == "Math"
    assert created["color"] == "#6366f1"
    assert created["isActive"] is True
    cid = created["id"]

    client.post("/categories/study", json={"name": "Biology", "color": "#ff0000"})

    r_list = client.get("/categories/study")
    assert r_list.status_code == 200
    assert [c["name"] for c in r_list.json()] == ["Biology", "Math"]

    r_upd = client.put(f"/categories/study/{cid}", json={"name": "Mathematics", "color": "#000000"})
    assert r_upd.status_code == 200
    assert r_upd.json()["name"] == "Mathematics"
    assert r_upd.json()["color"] == "#000000"

    r_del = client.delete(f"/categories/study/{cid}")
    assert r_del.status_code == 200
    assert r_del.json() == {"id": cid, "deleted": True, "deactivated": False}

    r_404 = client.put(f"/categories/study/{cid}", json={"name": "Gone"})
    assert r_404.status_code == 404


def test_football_category_default_color_and_type(client: TestClient):
    r = client.post("/categories/football", json={"name": "Technique", "type": "technical"})
    assert r.status_code == 201
    assert r.json()["color"] == "#10b981"
    assert r.json()["type"] == "technical"


def test_study_category_rejects_type(client: TestClient):
    r = client.post("/categories/study", json={"name": "Math", "type": "technical"})
    assert r.status_code == 400


def test_duplicate_name_conflicts(client: TestClient, make_category):
    make_category("study", "Math")
    r = client.post("/categories/study", json={"name": "Math"})
    assert r.status_code == 409

    # Same name in the other area is a different category
    r_other = client.post("/categories/football", json={"name": "Math"})
    assert r_other.status_code == 201


def test_blank_name_rejected(client: TestClient):
    r = client.post("/categories/study", json={"name": "   "})
    assert r.status_code == 422


def test_database_failure_returns_generic_error(client: TestClient, monkeypatch):
    from sqlalchemy.exc import SQLAlchemyError

    from activity_tracker.services.category_service import CategoryService

    def failing_list(self, area, active_only=False):
        raise SQLAlchemyError("boom: connection to categories lost")

    monkeypatch.setattr(CategoryService, "list_categories", failing_list)

    r = client.get("/categories/study")
    assert r.status_code == 500
    assert r.json() == {"detail": "Internal server error"}
    assert "boom" not in r.text


def test_unknown_area_rejected(client: TestClient):
    r = client.get("/categories/chess")
    assert r.status_code == 422


def test_referenced_category_is_deactivated_not_deleted(client: TestClient, make_weekly_item):
    item = make_weekly_item(title="Math")
    cid = item["categoryId"]

    r_del = client.delete(f"/categories/study/{cid}")
    assert r_del.status_code == 200
    assert r_del.json() == {"id": cid, "deleted": False, "deactivated": True}

    all_categories = client.get("/categories/study").json()
    assert [c["isActive"] for c in all_categories] == [False]
    assert client.get("/categories/study", params={"activeOnly": "true"}).json() == []


def test_categories_are_private_per_user(client: TestClient, make_category):
    cid = make_category("study", "Math")["id"]

    r_list = client.get("/categories/study", headers={"X-User-Id": OTHER_USER_ID})
    assert r_list.json() == []

    r_upd = client.put(f"/categories/study/{cid}", json={"name": "Hijack"}, headers={"X-User-Id": OTHER_USER_ID})
    assert r_upd.status_code == 404
