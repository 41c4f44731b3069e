import os
from datetime import date

# JWT_SECRET must exist before importing sponsor_tracker.main (create_app checks it).
os.environ.setdefault("JWT_SECRET", "test_jwt_secret")

from contextlib import contextmanager

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool

from sponsor_tracker.core.base import Base
from sponsor_tracker.core import config as app_config
from sponsor_tracker.core.database import Database, get_db
from sponsor_tracker.dependencies.auth import get_current_user
from sponsor_tracker.main import create_app

# Import models so they register with SQLAlchemy metadata.
from sponsor_tracker.models.user import User
from sponsor_tracker.models.company import Company
from sponsor_tracker.models.application import Application
from sponsor_tracker.models.application_status import ApplicationStatus
from sponsor_tracker.models.application_update import ApplicationUpdate  # noqa: F401
from sponsor_tracker.models.import_log import ImportLog  # noqa: F401


@pytest.fixture(scope="session")
def database():
    # In-memory SQLite for fast, isolated tests.
    db = Database(
        "sqlite+pysqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=db.engine)
    yield db
    db.close()


@pytest.fixture()
def db_session(database):
    # The in-memory DB persists across tests (StaticPool); reset schema per test.
    Base.metadata.drop_all(bind=database.engine)
    Base.metadata.create_all(bind=database.engine)

    db = database.session()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture(autouse=True)
def _reset_mutable_settings():
    """
    Tests sometimes tweak the process-global settings object; restore after each test.
    """
    keys = ["COMPANIES_MAX_PAGE_SIZE", "MAP_MAX_POINTS", "IMPORT_BATCH_SIZE", "ENV", "JWT_SECRET"]
    original = {k: getattr(app_config.settings, k) for k in keys}
    try:
        yield
    finally:
        for k, v in original.items():
            setattr(app_config.settings, k, v)


@pytest.fixture()
def app(database, db_session):
    fastapi_app = create_app(database=database)

    def override_get_db():
        yield db_session

    fastapi_app.dependency_overrides[get_db] = override_get_db
    yield fastapi_app
    fastapi_app.dependency_overrides.clear()


@pytest.fixture()
def users(db_session):
    """
    Two distinct active users for ownership / isolation tests.
    """
    user_a = User(email="test@example.com", name="Test User", is_active=True)
    user_b = User(email="other@example.com", name="Other User", is_active=True)
    db_session.add_all([user_a, user_b])
    db_session.commit()
    db_session.refresh(user_a)
    db_session.refresh(user_b)
    return user_a, user_b


@pytest.fixture()
def companies(db_session):
    """
    A small sponsor directory: one A-rated, one B-rated, one legacy rating.
    """
    rows = [
        Company(
            name="Acme Robotics Ltd",
            town="London",
            route="Skilled Worker",
            rating="A",
            full_rating="Worker (A rating)",
            latitude=51.5074,
            longitude=-0.1278,
        ),
        Company(
            name="Bristol Widgets",
            town="Bristol",
            route="Skilled Worker",
            rating="B",
            full_rating="Worker (B rating)",
        ),
        Company(
            name="Caledonian Data",
            town="Glasgow",
            route="Global Business Mobility: Senior or Specialist Worker",
            rating="Worker (Provisional)",
            full_rating="Worker (Provisional)",
            latitude=55.8642,
            longitude=-4.2518,
        ),
    ]
    db_session.add_all(rows)
    db_session.commit()
    for r in rows:
        db_session.refresh(r)
    return {"A": rows[0], "B": rows[1], "other": rows[2]}


@pytest.fixture()
def make_application(db_session):
    """
    Insert an application row directly (no timeline side effects).
    """

    def _make(user, company, status=ApplicationStatus.APPLIED, **kwargs):
        row = Application(
            user_id=user.id,
            company_id=company.id,
            role=kwargs.pop("role", "Engineer"),
            status=status,
            applied_date=kwargs.pop("applied_date", date(2024, 1, 15)),
            **kwargs,
        )
        db_session.add(row)
        db_session.commit()
        db_session.refresh(row)
        return row

    return _make


@pytest.fixture()
def client(app, users):
    """
    Default client authenticated as user_a.
    """
    user_a, _ = users
    app.dependency_overrides[get_current_user] = lambda: user_a
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.pop(get_current_user, None)


@pytest.fixture()
def client_for(app):
    """
    Context manager to create a client authenticated as an arbitrary user.

    Usage:
        with client_for(user) as c:
            ...
    """

    @contextmanager
    def _client_for(user: User):
        app.dependency_overrides[get_current_user] = lambda: user
        with TestClient(app) as c:
            yield c
        app.dependency_overrides.pop(get_current_user, None)

    return _client_for
