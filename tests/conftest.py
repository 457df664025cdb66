# tests/conftest.py
import pytest
from fastapi.testclient import TestClient

from catalog.config import Settings
from catalog.database import ProductStore
from catalog.main import create_app

API_KEY = "test-secret"


@pytest.fixture
def store():
    return ProductStore()


@pytest.fixture
def app(store):
    return create_app(settings=Settings(api_key=API_KEY), store=store)


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def auth():
    return {"x-api-key": API_KEY}


@pytest.fixture
def new_product():
    return {
        "name": "Kettle",
        "description": "1.7L electric kettle",
        "price": 35,
        "category": "kitchen",
        "inStock": True,
    }
