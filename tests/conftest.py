import os
from datetime import datetime
from pathlib import Path

import pytest
from alembic import command
from alembic.config import Config
from fastapi.testclient import TestClient

PROJECT_ROOT = Path(__file__).resolve().parents[1]
USER_ID = "athlete-1"
OTHER_USER_ID = "athlete-2"


def _alembic_upgrade_head(db_url: str) -> None:
    os.environ["DATABASE_URL"] = db_url
    cfg = Config(str(PROJECT_ROOT / "alembic.ini"))
    # Pin script_location explicitly to avoid picking up wrong migrations when running from another cwd
    cfg.set_main_option("script_location", str(PROJECT_ROOT / "alembic"))
    command.upgrade(cfg, "head")


@pytest.fixture(scope="session")
def test_db_url(tmp_path_factory) -> str:
    tmp_dir = tmp_path_factory.mktemp("tracker_db")
    db_path = tmp_dir / "test_tracker.db"
    return f"sqlite:///{db_path}"


@pytest.fixture(scope="session")
def migrated_db(test_db_url: str):
    _alembic_upgrade_head(test_db_url)
    yield test_db_url


@pytest.fixture()
def client(migrated_db: str):
    from activity_tracker.database import SessionLocal, get_db
    from activity_tracker.main import app

    def override_get_db():
        db = SessionLocal()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as c:
        c.headers.update({"X-User-Id": USER_ID})
        yield c

    app.dependency_overrides.clear()


@pytest.fixture()
def db_session(migrated_db: str):
    from activity_tracker.database import SessionLocal

    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture()
def freeze_now(client: TestClient):
    """Pin the clock the API uses to resolve the current week."""
    from activity_tracker.dependencies import get_utcnow
    from activity_tracker.main import app

    def _freeze(value: datetime) -> None:
        app.dependency_overrides[get_utcnow] = lambda: value

    return _freeze


@pytest.fixture()
def make_category(client: TestClient):
    def _make(area: str = "study", name: str = "Math", **extra) -> dict:
        r = client.post(f"/categories/{area}", json={"name": name, **extra})
        assert r.status_code == 201, r.text
        return r.json()

    return _make


@pytest.fixture()
def make_weekly_item(client: TestClient, make_category):
    def _make(
        title: str = "Math",
        day_of_week: int = 2,
        area: str = "study",
        category_id: int | None = None,
        **extra,
    ) -> dict:
        if category_id is None:
            category_id = make_category(area, title)["id"]
        payload = {
            "area": area,
            "dayOfWeek": day_of_week,
            "categoryId": category_id,
            "title": title,
            **extra,
        }
        r = client.post("/weekly-plans", json=payload)
        assert r.status_code == 201, r.text
        return r.json()

    return _make


@pytest.fixture(autouse=True)
def auto_clean_tables(client: TestClient):
    """Fixture to automatically clean all tables after each test."""
    yield
    from activity_tracker.database import Base, engine

    with engine.connect() as connection:
        transaction = connection.begin()
        for table in reversed(Base.metadata.sorted_tables):
            connection.execute(table.delete())
        transaction.commit()
