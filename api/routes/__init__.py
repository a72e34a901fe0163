"""
API Routes Package

This module consolidates all API routes for the payment intent service.
"""

from fastapi import APIRouter

from . import payment_intents

# Create main router
router = APIRouter()

router.include_router(
    payment_intents.router, prefix="/payment-intents", tags=["payment-intents"]
)

# Export for use in main application
__all__ = ["router"]
