from __future__ import annotations

from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool

from sponsor_tracker.core.database import Database
from sponsor_tracker.main import create_app
from sponsor_tracker.models.company import Company


def test_health(app):
    with TestClient(app) as c:
        assert c.get("/health").json() == {"status": "ok"}


def test_injected_database_is_shared_and_left_open():
    database = Database(
        "sqlite+pysqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    app = create_app(database=database)

    with TestClient(app) as c:
        # Startup creates the schema on the injected handle.
        assert app.state.database is database
        assert c.get("/companies").json()["pagination"]["total"] == 0

    # Caller still owns the handle after shutdown.
    database.ping()
    with database.session() as db:
        db.add(Company(name="After Shutdown Ltd"))
        db.commit()
        assert db.query(Company).count() == 1
    database.close()
