"""
API Schemas Module

This module defines Pydantic models documenting the payment intent responses.
"""

from pydantic import BaseModel


class ClientSecretResponse(BaseModel):
    """Body returned when the processor created the payment intent."""

    clientSecret: str


class ErrorResponse(BaseModel):
    error: str
