import os
import tempfile

_TMP_DIR = tempfile.mkdtemp(prefix="courier-tests-")
_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))

os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_TMP_DIR, 'test.db')}"
os.environ["SEED_FILE"] = os.path.join(_ROOT, "data", "db.json")
os.environ["PASSWORD_HASH_TIME_COST"] = "1"
os.environ["PASSWORD_HASH_MEMORY_COST"] = "1024"

import pytest
from fastapi.testclient import TestClient

import database
from database import Base
from init_db import init_database
from main import app

CUSTOMER = "client1@swift.com"
OTHER_CUSTOMER = "client2@swift.com"
DRIVER = "driver1@swift.com"
OTHER_DRIVER = "driver2@swift.com"
PASSWORD = "demo123"

NEW_ORDER = {
    "product": "Test Product",
    "quantity": 2,
    "address": "123 Test Street, Test City",
    "coordinate": [40.7128, -74.0060],
    "route": 1,
}


@pytest.fixture
def db_engine():
    Base.metadata.drop_all(bind=database.engine)
    init_database(database.engine, database.SessionLocal)
    yield database.engine


@pytest.fixture
def db(db_engine):
    session = database.SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(db_engine):
    return TestClient(app)


def login(client, username, password=PASSWORD):
    response = client.post("/cms/login", json={"username": username, "password": password})
    assert response.status_code == 200, response.text
    return response.json()["accessToken"]


def bearer(token):
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def customer_headers(client):
    return bearer(login(client, CUSTOMER))


@pytest.fixture
def driver_headers(client):
    return bearer(login(client, DRIVER))


def create_order(client, headers, **overrides):
    body = dict(NEW_ORDER, **overrides)
    response = client.post("/cms/new-order", json={"order": body}, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()["response"]["order"]


def customer_orders(client, headers):
    response = client.get("/cms/getOrdersByCustomer", headers=headers)
    assert response.status_code == 200, response.text
    return response.json()["response"]["orders"]
