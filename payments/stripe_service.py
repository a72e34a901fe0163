"""
Stripe Payment Service

This module wraps the Stripe SDK call that creates a PaymentIntent:
- Creating payment intents with automatic payment methods
- Verifying the configured credential
"""

import time
from typing import Any

import stripe
import structlog
from starlette.concurrency import run_in_threadpool

from core.logging import BusinessEvents
from core.metrics import processor_latency
from core.settings import Settings

log = structlog.get_logger(__name__)


class PaymentProcessorError(Exception):
    pass


def error_message(exc: Exception) -> str:
    """Message to hand back to the caller.

    str() of a StripeError is prefixed with "Request <request-id>: " whenever
    Stripe returned a request id, so the bare message is used instead.
    """
    if isinstance(exc, stripe.StripeError) and exc.user_message:
        return exc.user_message
    return str(exc)


class StripeService:
    def __init__(self, settings: Settings):
        """
        Initialize StripeService.

        Args:
            settings: Application settings holding the Stripe credential.
                The key and API version are passed with each request instead
                of being written to the stripe module globals.
        """
        self.api_key = settings.STRIPE_API_KEY
        self.api_version = settings.STRIPE_API_VERSION
        self.currency = settings.PAYMENT_CURRENCY

    def test_connection(self) -> bool:
        """Test the Stripe API connection."""
        try:
            stripe.Account.retrieve(api_key=self.api_key)
            return True
        except Exception as e:
            log.warning("stripe.connection_failed", error=str(e))
            return False

    async def create_payment_intent(self, amount: int | float) -> Any:
        """
        Create a Stripe PaymentIntent.

        Args:
            amount: Amount in the smallest currency unit, forwarded unchanged

        Returns:
            The PaymentIntent object returned by Stripe
        """
        log.info(
            BusinessEvents.PAYMENT_ATTEMPT,
            amount=amount,
            currency=self.currency,
            provider="stripe",
        )

        def _create_intent_sync():
            return stripe.PaymentIntent.create(
                amount=amount,
                currency=self.currency,
                automatic_payment_methods={"enabled": True},
                api_key=self.api_key,
                stripe_version=self.api_version,
            )

        started = time.perf_counter()
        try:
            intent = await run_in_threadpool(_create_intent_sync)
        except Exception as e:
            message = error_message(e)
            log.error(
                BusinessEvents.PAYMENT_FAILURE,
                amount=amount,
                provider="stripe",
                error=message,
                request_id=getattr(e, "request_id", None),
            )
            raise PaymentProcessorError(message) from e
        finally:
            processor_latency.observe(time.perf_counter() - started)

        log.info(
            BusinessEvents.PAYMENT_SUCCESS,
            amount=amount,
            provider="stripe",
            provider_transaction_id=getattr(intent, "id", None),
        )
        return intent
