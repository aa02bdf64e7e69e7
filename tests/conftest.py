import pytest
from unittest.mock import AsyncMock, MagicMock
from bson import ObjectId
from fastapi.testclient import TestClient

from splitbook.main import app


def _cursor(docs):
    """Motor-like cursor: chainable sort/limit, awaitable to_list."""
    cursor = MagicMock()
    cursor.sort.return_value = cursor
    cursor.limit.return_value = cursor
    cursor.to_list = AsyncMock(return_value=docs)
    return cursor


def _collection():
    collection = MagicMock()
    collection.insert_one = AsyncMock(side_effect=lambda doc: MagicMock(inserted_id=ObjectId()))
    collection.insert_many = AsyncMock(
        side_effect=lambda docs: MagicMock(inserted_ids=[ObjectId() for _ in docs])
    )
    collection.find_one = AsyncMock(return_value=None)
    collection.find_one_and_update = AsyncMock(return_value=None)
    collection.delete_one = AsyncMock(return_value=MagicMock(deleted_count=1))
    collection.count_documents = AsyncMock(return_value=0)
    collection.find.return_value = _cursor([])
    return collection


@pytest.fixture
def make_cursor():
    return _cursor


@pytest.fixture
def mock_db():
    """Fake AsyncIOMotorDatabase; db["name"] always returns the same collection mock."""
    collections = {}

    def get_collection(name):
        if name not in collections:
            collections[name] = _collection()
        return collections[name]

    db = MagicMock()
    db.__getitem__.side_effect = get_collection
    return db


@pytest.fixture
def test_client():
    """FastAPI test client without the MongoDB lifespan; tests override dependencies."""
    client = TestClient(app)
    yield client
    app.dependency_overrides.clear()


@pytest.fixture
def group_id():
    return str(ObjectId())


@pytest.fixture
def alice_id():
    return str(ObjectId())


@pytest.fixture
def bob_id():
    return str(ObjectId())


@pytest.fixture
def carol_id():
    return str(ObjectId())
