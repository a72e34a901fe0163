import os
from typing import Literal

from dotenv import load_dotenv
from pydantic import ConfigDict
from pydantic_settings import BaseSettings

# Load .env file automatically
load_dotenv()


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Payment processor
    STRIPE_API_KEY: str
    STRIPE_API_VERSION: str = "2023-10-16"
    PAYMENT_CURRENCY: str = "usd"

    # App settings
    APP_NAME: str = "Payment Intent Service"
    ENVIRONMENT: Literal["development", "production"] = "development"

    # Observability (Optional)
    OTEL_EXPORTER_OTLP_ENDPOINT: str = "http://localhost:4317"
    OTEL_SERVICE_NAME: str = "payment-intent-service"

    model_config = ConfigDict(env_file=".env", case_sensitive=True, extra="ignore")

    def __init__(self, **kwargs):
        # Fail fast instead of sending a blank credential to Stripe
        if not kwargs.get("STRIPE_API_KEY") and not os.getenv("STRIPE_API_KEY"):
            raise RuntimeError(
                "STRIPE_API_KEY not set; create .env or export the variable"
            )
        super().__init__(**kwargs)
