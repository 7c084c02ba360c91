"""Shared fixtures: a throwaway SQLite database, an admin and seed data."""

from __future__ import annotations

import os
import sys
import tempfile
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

TEST_DB_PATH = Path(tempfile.gettempdir()) / "avdmanager_test.db"
os.environ["DATABASE_URL"] = f"sqlite:///{TEST_DB_PATH}"
os.environ["SECRET_KEY"] = "test-secret"
os.environ["ACCESS_TOKEN_EXPIRE_MINUTES"] = "30"
os.environ["APP_TIMEZONE"] = "UTC"

from avdmanager.config import reset_settings_cache  # noqa: E402

reset_settings_cache()

from fastapi.testclient import TestClient  # noqa: E402

from avdmanager.application.use_cases.applications import create_application  # noqa: E402
from avdmanager.application.use_cases.base_images import create_base_image  # noqa: E402
from avdmanager.application.use_cases.business_units import (  # noqa: E402
    create_business_unit,
)
from avdmanager.application.use_cases.templates import (  # noqa: E402
    NewTemplateData,
    create_template,
)
from avdmanager.application.use_cases.users import create_admin_user  # noqa: E402
from avdmanager.domain.entities import Actor  # noqa: E402
from avdmanager.infrastructure.database import (  # noqa: E402
    Base,
    SessionLocal,
    engine,
    initialize_database,
)

ADMIN_EMAIL = "admin@example.com"
ADMIN_PASSWORD = "Secret123!"


@pytest.fixture(autouse=True)
def reset_database():
    """Give every test an empty schema."""

    Base.metadata.drop_all(bind=engine)
    initialize_database()
    yield
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture()
def db_session():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def admin(db_session):
    return create_admin_user(
        db_session, name="Ada Admin", email=ADMIN_EMAIL, password=ADMIN_PASSWORD
    )


@pytest.fixture()
def actor(admin) -> Actor:
    return Actor(id=admin.id, name=admin.name)


@pytest.fixture()
def client():
    from main import create_app

    with TestClient(create_app()) as test_client:
        yield test_client


@pytest.fixture()
def auth_headers(client, admin) -> dict[str, str]:
    response = client.post(
        "/auth/token", data={"username": ADMIN_EMAIL, "password": ADMIN_PASSWORD}
    )
    assert response.status_code == 200, response.text
    return {"Authorization": f"Bearer {response.json()['access_token']}"}


@pytest.fixture()
def business_unit(db_session, actor):
    return create_business_unit(
        db_session, name="Finance", code="FIN", description="Finance team", actor=actor
    )


@pytest.fixture()
def base_image(db_session, actor):
    return create_base_image(
        db_session,
        name="win11-23h2-avd",
        display_name="Windows 11 23H2 multi-session",
        os_type="Windows 11",
        version="23H2",
        actor=actor,
    )


@pytest.fixture()
def make_application(db_session, actor):
    def factory(name: str, **overrides):
        data = {"name": name, "display_name": name.replace("-", " ").title()}
        data.update(overrides)
        return create_application(db_session, data=data, actor=actor)

    return factory


@pytest.fixture()
def make_template(db_session, actor, business_unit):
    def factory(**overrides):
        values = {
            "name": "Finance Pooled Desktop",
            "business_unit_id": business_unit.id,
            "naming_prefix": "fin-avd",
            "regions": ["eastus", "westus"],
            "primary_region": "eastus",
        }
        values.update(overrides)
        return create_template(db_session, data=NewTemplateData(**values), actor=actor)

    return factory
