from core.settings import Settings
from payments.stripe_service import StripeService

# Settings singleton
_settings = None

# Payment processor client, built once at startup
_payment_service = None


def get_settings() -> Settings:
    """Dependency that provides application settings."""
    assert (
        _settings is not None
    ), "Settings not initialized. Make sure startup() was called."
    return _settings


def init_settings():
    """Initialize settings singleton."""
    global _settings
    _settings = Settings()


def clear_settings():
    """Clear settings singleton."""
    global _settings
    _settings = None


def get_payment_service() -> StripeService:
    """Dependency that provides the shared payment processor client."""
    assert (
        _payment_service is not None
    ), "Payment service not initialized. Make sure startup() was called."
    return _payment_service


def init_payment_service(settings: Settings):
    """Build the payment processor client from settings."""
    global _payment_service
    _payment_service = StripeService(settings)


def clear_payment_service():
    global _payment_service
    _payment_service = None
