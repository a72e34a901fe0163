"""
Simple smoke tests to verify basic functionality.
"""

import os

import pytest

from core.settings import Settings


def test_app_startup(client):
    """Test that the application starts up properly."""
    response = client.get("/healthz")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert data["app_name"] == "Test Payment Intents"
    assert data["environment"] == "development"


def test_health_alias(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_root_lists_endpoints(client):
    response = client.get("/")
    assert response.status_code == 200
    assert "payment_intents" in response.json()["endpoints"]


def test_openapi_available(client):
    """Test that OpenAPI documentation is available."""
    response = client.get("/docs")
    assert response.status_code == 200

    schema = client.get("/openapi.json").json()
    assert "post" in schema["paths"]["/api/v1/payment-intents"]


def test_readiness_ok(client, mock_payment_service):
    response = client.get("/readyz")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_readiness_unavailable(client, mock_payment_service):
    mock_payment_service.test_connection.return_value = False

    response = client.get("/readyz")
    assert response.status_code == 503
    assert response.json() == {"status": "unavailable"}


def test_settings_require_stripe_key():
    """Settings refuse to load without a Stripe credential."""
    del os.environ["STRIPE_API_KEY"]

    with pytest.raises(RuntimeError, match="STRIPE_API_KEY not set"):
        Settings()


def test_settings_defaults():
    settings = Settings()

    assert settings.STRIPE_API_KEY == "sk_test_dummy"
    assert settings.STRIPE_API_VERSION == "2023-10-16"
    assert settings.PAYMENT_CURRENCY == "usd"
    assert settings.ENVIRONMENT == "development"


def test_settings_explicit_key_without_env():
    del os.environ["STRIPE_API_KEY"]

    settings = Settings(STRIPE_API_KEY="sk_test_explicit")
    assert settings.STRIPE_API_KEY == "sk_test_explicit"


def test_unknown_route_uses_error_body(client):
    response = client.get("/api/v1/refunds")
    assert response.status_code == 404
    assert response.json() == {"error": "Not Found"}


def test_health_rejects_post_with_error_body(client):
    """405s outside the payment intent route keep the generic error body."""
    response = client.post("/healthz")
    assert response.status_code == 405
    assert response.json() == {"error": "Method Not Allowed"}


def test_settings_only_declare_used_fields():
    assert set(Settings.model_fields) == {
        "STRIPE_API_KEY",
        "STRIPE_API_VERSION",
        "PAYMENT_CURRENCY",
        "APP_NAME",
        "ENVIRONMENT",
        "OTEL_EXPORTER_OTLP_ENDPOINT",
        "OTEL_SERVICE_NAME",
    }
