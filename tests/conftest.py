"""Test configuration and fixtures."""

import os
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from fastapi.testclient import TestClient

from core.dependencies import get_payment_service
from core.settings import Settings
from main import app
from payments.stripe_service import StripeService

BASE = "/api/v1"


@pytest.fixture(autouse=True)
def setup_test_environment():
    """Setup test environment variables before each test."""
    # Store original env vars
    original_env = dict(os.environ)

    os.environ.update(
        {
            "STRIPE_API_KEY": "sk_test_dummy",
            "APP_NAME": "Test Payment Intents",
            "ENVIRONMENT": "development",
            "DISABLE_TRACING": "true",
        }
    )

    yield

    # Restore original env vars
    os.environ.clear()
    os.environ.update(original_env)


@pytest.fixture
def mock_settings():
    return Settings(
        STRIPE_API_KEY="sk_test_mock",
        APP_NAME="Test Payment Intents",
        ENVIRONMENT="development",
    )


@pytest.fixture
def mock_payment_service():
    """Processor client whose create_payment_intent returns a fixed secret."""
    service = MagicMock(spec=StripeService)
    service.create_payment_intent = AsyncMock(
        return_value=SimpleNamespace(id="pi_test_123", client_secret="abc123")
    )
    service.test_connection.return_value = True
    return service


@pytest.fixture
def client(mock_settings, mock_payment_service):
    """Test client with the payment service dependency replaced by a mock."""
    app.dependency_overrides[get_payment_service] = lambda: mock_payment_service

    with patch("core.dependencies._settings", mock_settings):
        with TestClient(app) as test_client:
            yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def stripe_client():
    """Test client wired to the real StripeService built during startup."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture(autouse=True)
def mock_stripe_setup():
    """Mock Stripe API for all tests."""
    with patch("stripe.PaymentIntent.create") as mock_create:
        mock_create.return_value = type(
            "PaymentIntent",
            (),
            {
                "id": "pi_mock",
                "client_secret": "pi_mock_secret_mock",
                "status": "requires_payment_method",
            },
        )()
        yield mock_create


# Pytest markers for different test types
def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "unit: marks tests as unit tests")
    config.addinivalue_line("markers", "slow: marks tests as slow running")
