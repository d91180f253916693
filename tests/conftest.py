"""
Centralized Test Configuration.
"""

import os

# Settings require a Stripe key at import time
os.environ.setdefault("STRIPE_SECRET_KEY", "sk_test_dummy")

from types import SimpleNamespace

import pytest
import stripe
from httpx import AsyncClient, ASGITransport

from fundraiser.api.main import create_app
from fundraiser.core.config import Settings
from fundraiser.data_access.memory import MemStorage


class FakeClock:
    """Monotonic clock the tests move forward by hand."""

    def __init__(self):
        self.now = 1000.0

    def __call__(self):
        return self.now

    def advance(self, seconds: float):
        self.now += seconds


class FakePaymentIntents:
    """Stands in for stripe.PaymentIntent.create and records each call."""

    def __init__(self):
        self.calls = []
        self.error = None

    def create(self, **kwargs):
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        n = len(self.calls)
        return SimpleNamespace(id=f"pi_test_{n}", client_secret=f"pi_test_{n}_secret_abc")


@pytest.fixture
def clock():
    return FakeClock()

@pytest.fixture
def settings():
    return Settings(STRIPE_SECRET_KEY="sk_test_dummy", LOG_LEVEL="WARNING")

@pytest.fixture
def storage():
    store = MemStorage()
    yield store
    store.close()

@pytest.fixture
def payment_intents(monkeypatch):
    fake = FakePaymentIntents()
    monkeypatch.setattr(stripe.PaymentIntent, "create", fake.create)
    return fake

@pytest.fixture
def app(storage, settings, payment_intents):
    return create_app(storage=storage, settings=settings)

@pytest.fixture
async def client(app):
    """Async client for testing."""
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

@pytest.fixture
async def registered_user(client):
    """Registers alice and returns the response payload. The client stays logged in."""
    response = await client.post(
        "/api/register",
        json={"username": "alice", "password": "secret1", "fullName": "Alice A"}
    )
    assert response.status_code == 201
    return response.json()
