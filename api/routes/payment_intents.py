"""
Payment intent route: validates the amount and asks the processor for a client secret
"""

import math
import numbers

import structlog
from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from api.schemas import ClientSecretResponse, ErrorResponse
from core.dependencies import get_payment_service
from core.logging import BusinessEvents
from core.metrics import payment_intent_requests
from payments.stripe_service import PaymentProcessorError, StripeService

log = structlog.get_logger(__name__)

router = APIRouter()


def parse_amount(body):
    """Return the requested amount, or None when it is missing or not positive."""
    if not isinstance(body, dict):
        return None
    amount = body.get("amount")
    # bool is a numbers.Number subclass but never a valid amount
    if isinstance(amount, bool) or not isinstance(amount, numbers.Real):
        return None
    # json.loads accepts NaN and Infinity
    if not math.isfinite(amount) or amount <= 0:
        return None
    return amount


def server_error(exc: Exception) -> JSONResponse:
    payment_intent_requests.labels(outcome="error").inc()
    return JSONResponse(status_code=500, content={"error": str(exc)})


def method_not_allowed(request: Request) -> JSONResponse:
    """405 for any method other than POST, raised by routing before the handler runs."""
    log.info(BusinessEvents.METHOD_NOT_ALLOWED, method=request.method)
    payment_intent_requests.labels(outcome="method_not_allowed").inc()
    return JSONResponse(
        status_code=405,
        content={"error": "Method Not Allowed"},
        headers={"Allow": "POST"},
    )


@router.post(
    "",
    response_model=ClientSecretResponse,
    responses={
        400: {"model": ErrorResponse},
        405: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)
async def create_payment_intent(
    request: Request,
    service: StripeService = Depends(get_payment_service),
):
    """Create a payment intent for the posted amount and return its client secret."""
    try:
        body = await request.json()
        amount = parse_amount(body)

        if amount is None:
            log.info(BusinessEvents.PAYMENT_REJECTED, reason="invalid_amount")
            payment_intent_requests.labels(outcome="invalid_amount").inc()
            return JSONResponse(status_code=400, content={"error": "Invalid amount"})

        intent = await service.create_payment_intent(amount)

        payment_intent_requests.labels(outcome="created").inc()
        return JSONResponse(
            status_code=200, content={"clientSecret": intent.client_secret}
        )
    except PaymentProcessorError as e:
        # Logged by the service with the processor context
        return server_error(e)
    except Exception as e:
        # Malformed JSON lands here too and is reported as a 500
        log.error(BusinessEvents.PAYMENT_FAILURE, error=str(e))
        return server_error(e)
