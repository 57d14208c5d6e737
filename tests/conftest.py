"""
Shared fixtures: every test gets a fresh app on its own in-memory database
"""

import pytest
from fastapi.testclient import TestClient

from main import create_app
from order_service.config import Settings

@pytest.fixture
def settings():
    return Settings(app_env="test", log_format="text", cors_origins="*", default_page_limit=10)

@pytest.fixture
def app(settings):
    return create_app(settings)

@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client

def make_order(**overrides):
    """Valid create body, with any field replaced"""
    order = {
        "orderNumber": "TEST-001",
        "customerName": "Test Customer",
        "totalValue": 100,
    }
    order.update(overrides)
    return order

@pytest.fixture
def seeded_orders(client):
    """Three orders, two of them for John"""
    created = []
    for order in (
        make_order(orderNumber="TEST-001", customerName="John", totalValue=100),
        make_order(orderNumber="TEST-002", customerName="Jane", totalValue=50),
        make_order(orderNumber="TEST-003", customerName="John", totalValue=75),
    ):
        response = client.post("/orders", json=order)
        assert response.status_code == 201
        created.append(response.json())
    return created
