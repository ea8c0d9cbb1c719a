# --- File: hotelbook/schemas/booking/booking_pricing.py ---
"""
Price quote schemas.
"""

from __future__ import annotations

from datetime import date as Date
from decimal import Decimal

from pydantic import Field

from hotelbook.schemas.common.base import BaseSchema

__all__ = [
    "PriceQuoteRequest",
    "PriceQuoteResponse",
]


class PriceQuoteRequest(BaseSchema):
    """Quote a stay at an explicit nightly rate."""

    nightly_rate: Decimal = Field(..., description="Rate per night")
    check_in: Date = Field(..., description="First night of the stay")
    check_out: Date = Field(..., description="Departure date")


class PriceQuoteResponse(BaseSchema):
    """Price breakdown for a stay."""

    nights: int = Field(..., description="Number of nights charged")
    nightly_rate: Decimal = Field(..., description="Rate per night")
    total: Decimal = Field(..., description="Nights times rate, rounded half-up")
    currency: str = Field(..., description="ISO currency code")
