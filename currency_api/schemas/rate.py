"""
Pydantic schemas for exchange rates and the decoded feed envelope.
"""

from decimal import Decimal

from pydantic import BaseModel, ConfigDict


class ExchangeRate(BaseModel):
    """One currency's rate against the base currency."""
    model_config = ConfigDict(frozen=True)

    currency: str
    rate: Decimal


class Cube(BaseModel):
    """One date's set of currency/rate pairs as published by the feed."""
    date: str
    exchanges: list[ExchangeRate]


class Envelope(BaseModel):
    """Top-level feed document."""
    subject: str = ""
    sender: str = ""
    cubes: list[Cube]


class CurrencyRateResponse(BaseModel):
    """Single-currency lookup payload."""
    currency: str
    rate: float
