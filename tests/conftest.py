import os

# Point the application at an in-memory store before it is imported
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["CACHE_ENABLED"] = "false"
os.environ["CELERY_BROKER_URL"] = "memory://"
os.environ["CELERY_RESULT_BACKEND"] = "cache+memory://"

import pytest
from unittest.mock import patch
from fastapi.testclient import TestClient

from inventory_api.main import app
from inventory_api.database import Base, engine, SessionLocal


@pytest.fixture(autouse=True)
def low_stock_task():
    """Keep Celery out of the tests; yields the mocked delay()."""
    with patch("inventory_api.tasks.stock_tasks.check_low_stock.delay") as mocked:
        yield mocked


@pytest.fixture(scope="function")
def client():
    """Create test client with fresh database for each test."""
    Base.metadata.create_all(bind=engine)

    with TestClient(app) as test_client:
        yield test_client

    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def db_session():
    """Create database session for direct database access in tests."""
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()

    yield session

    session.close()
    Base.metadata.drop_all(bind=engine)


def product_payload(**overrides):
    payload = {
        "name": "Gel Pen 0.5mm",
        "category": "pen",
        "description": "Black ink gel pen",
        "unit": "piece",
        "price": 1.50,
        "cost": 0.80,
        "stock": 10,
        "min_stock": 5,
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def create_product(client):
    """Factory creating a product through the API and returning its JSON."""
    def _create(**overrides):
        response = client.post("/api/v1/products/", json=product_payload(**overrides))
        assert response.status_code == 201, response.text
        return response.json()["data"]
    return _create
