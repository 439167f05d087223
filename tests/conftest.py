import os

os.environ.setdefault("LOG_FILE", os.path.join(os.path.dirname(__file__), "..", "logs", "test.log"))

import pytest
from fastapi.testclient import TestClient

from main import create_app


@pytest.fixture
def database_url(tmp_path):
    return f"sqlite+aiosqlite:///{tmp_path / 'budgets.db'}"


@pytest.fixture
def client(database_url):
    app = create_app(database_url=database_url, env_config={})
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def create_budget(client):
    def _create(month, **fields):
        response = client.post("/budgets", json={"month": month, **fields})
        assert response.status_code == 201, response.text
        return response.json()
    return _create
