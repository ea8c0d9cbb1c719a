# --- File: hotelbook/schemas/booking/booking_response.py ---
"""
Booking response schemas for API responses.
"""

from __future__ import annotations

from datetime import date as Date
from decimal import Decimal
from typing import List, Optional

from pydantic import Field, computed_field

from hotelbook.models.base.enums import BookingStatus
from hotelbook.schemas.common.base import BaseResponseSchema, BaseSchema

__all__ = [
    "BookingResponse",
    "BookingListResponse",
]


class BookingResponse(BaseResponseSchema):
    """Booking as returned by the API."""

    hotel_id: str = Field(..., description="Hotel identifier")
    room_id: str = Field(..., description="Booked room")
    guest_id: Optional[str] = Field(None, description="Registered guest account")
    booking_reference: str = Field(..., description="Display reference, e.g. BK12345678")

    guest_name: str = Field(..., description="Guest full name")
    guest_email: str = Field(..., description="Guest email")
    guest_phone: Optional[str] = Field(None, description="Guest phone")
    adults: int = Field(..., description="Number of adults")
    children: int = Field(..., description="Number of children")

    check_in_date: Date = Field(..., description="First night of the stay")
    check_out_date: Date = Field(..., description="Departure date")
    total_amount: Decimal = Field(..., description="Total for the stay")
    status: BookingStatus = Field(..., description="Booking status")
    special_requests: Optional[str] = Field(None, description="Guest requests")

    @computed_field  # type: ignore[misc]
    @property
    def nights(self) -> int:
        return (self.check_out_date - self.check_in_date).days


class BookingListResponse(BaseSchema):
    """Hotel booking listing."""

    hotel_id: str
    total: int = Field(..., description="Number of bookings returned")
    bookings: List[BookingResponse] = Field(default_factory=list)
