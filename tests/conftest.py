"""Pytest fixtures: an in-memory MongoDB (mongomock) behind the real app."""

import mongomock
import pytest
from fastapi.testclient import TestClient

from app.core.config import Settings
from app.db.mongodb import get_collection, get_mongo_db, init_mongo_indexes
from app.main import create_app
from app.services.student_service import StudentService


@pytest.fixture
def settings() -> Settings:
    """Settings pointing at a throwaway database name."""
    return Settings(
        mongodb_uri="mongodb://localhost:27017",
        mongodb_db="studentdb_test",
        log_level="WARNING",
    )


@pytest.fixture
def mongo_client():
    """In-memory MongoDB client."""
    client = mongomock.MongoClient()
    yield client
    client.close()


@pytest.fixture
def students_collection(mongo_client, settings):
    """The students collection with its unique email index."""
    db = get_mongo_db(mongo_client, settings)
    init_mongo_indexes(db)
    return get_collection(db, "students")


@pytest.fixture
def service(students_collection) -> StudentService:
    return StudentService(students_collection)


@pytest.fixture
def app(settings, mongo_client):
    return create_app(settings=settings, client=mongo_client)


@pytest.fixture
def test_client(app) -> TestClient:
    """Client with startup events run (indexes created)."""
    with TestClient(app) as client:
        yield client


@pytest.fixture
def alice() -> dict:
    """Valid form data for one student."""
    return {
        "name": "Alice",
        "age": "22",
        "course": "Computer Science",
        "email": "alice@x.com",
    }
