import mongomock
import pytest
from fastapi.testclient import TestClient

from app.database import ensure_indexes, get_db
from app.main import app
from app.services import book_service
from factories import book_payload


@pytest.fixture
def db():
    mongo = mongomock.MongoClient()
    database = mongo["amana-bookstore-test"]
    ensure_indexes(database)
    yield database
    mongo.close()


@pytest.fixture
def client(db):
    app.dependency_overrides[get_db] = lambda: db
    # no context manager: the lifespan would connect to a real server
    yield TestClient(app, raise_server_exceptions=False)
    app.dependency_overrides.clear()


@pytest.fixture
def book(db):
    return book_service.create_book(db, book_payload())


@pytest.fixture
def other_book(db):
    return book_service.create_book(db, book_payload(title="Salt Roads", price=10.0))
