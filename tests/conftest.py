"""
Shared fixtures: in-memory SQLite, a TestClient with overridden dependencies,
and helpers to register users.
"""
import os
import tempfile

# Must be set before classroom_qa is imported
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("SECRET_KEY", "test-secret")
os.environ.setdefault("UPLOAD_DIR", tempfile.mkdtemp(prefix="classroom-qa-uploads-"))

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from classroom_qa.db.base import Base
from classroom_qa.db.session import enable_sqlite_foreign_keys, get_db
from classroom_qa.main import app
from classroom_qa.services.storage import ImageStorage, get_storage


@pytest.fixture(scope="function")
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_foreign_keys(engine)
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture(scope="function")
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="function")
def db_session(session_factory):
    db = session_factory()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def storage(tmp_path):
    return ImageStorage(tmp_path / "uploads", "/uploads")


@pytest.fixture
def client(session_factory, storage):
    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_storage] = lambda: storage
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


def auth_header(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def register(client):
    """register(email, role="STUDENT", name=..., **extra) -> (headers, user)"""

    def _register(email, role="STUDENT", name=None, password="secret-pass", **extra):
        body = {
            "email": email,
            "password": password,
            "name": name or email.split("@")[0].title(),
            "role": role,
            **extra,
        }
        response = client.post("/api/auth/register", json=body)
        assert response.status_code == 201, response.text
        data = response.json()
        return auth_header(data["token"]), data["user"]

    return _register


@pytest.fixture
def teacher(register):
    return register("teacher@example.com", role="TEACHER", name="Professor Oak")


@pytest.fixture
def student(register):
    return register("student@example.com", name="Ash Ketchum")


@pytest.fixture
def other_student(register):
    return register("misty@example.com", name="Misty Waterflower")


@pytest.fixture
def lecture(client, teacher):
    headers, _ = teacher
    response = client.post(
        "/api/lectures",
        json={"name": "Algorithms", "description": "Sorting and searching"},
        headers=headers,
    )
    assert response.status_code == 201, response.text
    return response.json()["lecture"]
