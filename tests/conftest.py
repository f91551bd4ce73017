import pytest
from fastapi.testclient import TestClient

from footcare import chat_chain
from footcare.db import RecordStore
from footcare.main import app


@pytest.fixture
def store():
    return RecordStore()


@pytest.fixture
def demo_mode(monkeypatch):
    monkeypatch.setattr(chat_chain, "OPENAI_API_KEY", None)


@pytest.fixture
def client(demo_mode):
    # entering the context runs the startup hook, which builds a fresh store
    with TestClient(app) as c:
        yield c


@pytest.fixture
def app_store(client):
    return app.state.store
