"""
Shared pytest fixtures.

Uses a SQLite file database so no Postgres is required for tests. Tables
are recreated for every test.
"""
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

import scheduling_api.models  # noqa: F401
from scheduling_api.core.auth import create_access_token
from scheduling_api.db.base import Base, get_db
from scheduling_api.main import app

SQLITE_URL = "sqlite:///./test_scheduling.db"

engine = create_engine(SQLITE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture(autouse=True)
def create_tables():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture()
def db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture()
def client():
    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture()
def auth_headers():
    return {"Authorization": f"Bearer {create_access_token('tester')}"}


@pytest.fixture()
def api(client, auth_headers):
    """Client that sends a valid bearer token on every request."""
    client.headers.update(auth_headers)
    return client
