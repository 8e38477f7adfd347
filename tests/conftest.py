import pytest
from fastapi.testclient import TestClient

from app.crud import get_store
from app.crud.string import StringStore
from app.database import init_db, make_engine, make_session_factory
from app.main import app


@pytest.fixture
def session_factory():
    """Sessions on a fresh in-memory engine."""
    engine = make_engine()
    init_db(bind=engine)
    yield make_session_factory(engine)
    engine.dispose()


@pytest.fixture
def store(session_factory):
    return StringStore(session_factory)


@pytest.fixture
def client(store):
    app.dependency_overrides[get_store] = lambda: store
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
