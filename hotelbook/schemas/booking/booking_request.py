# --- File: hotelbook/schemas/booking/booking_request.py ---
"""
Booking request schemas.

Covers booking creation from both the guest booking form and the hotel-admin
booking dialog, and staff status updates.
"""

from __future__ import annotations

from datetime import date as Date
from typing import Optional

from pydantic import EmailStr, Field, field_validator, model_validator

from hotelbook.models.base.enums import BookingSource, BookingStatus
from hotelbook.schemas.common.base import BaseCreateSchema, BaseUpdateSchema

__all__ = [
    "BookingCreate",
    "BookingStatusUpdate",
]


class BookingCreate(BaseCreateSchema):
    """
    Booking creation request.

    Hotel staff pick a specific room; guests pick a room type and get the
    first free room of that type. Date order is checked by the booking
    service so that every bad interval reports the same error.
    """

    room_id: Optional[str] = Field(
        None,
        description="Specific room to book (hotel-admin flow)",
    )
    room_type_id: Optional[str] = Field(
        None,
        description="Room type to book; the first free room is assigned (guest flow)",
    )
    guest_id: Optional[str] = Field(
        None,
        description="Registered guest account, if any",
    )

    guest_name: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="Full name of the guest",
    )
    guest_email: EmailStr = Field(
        ...,
        description="Email address for booking confirmations",
    )
    guest_phone: Optional[str] = Field(
        None,
        max_length=50,
        description="Contact phone number",
    )
    adults: int = Field(1, ge=1, description="Number of adults")
    children: int = Field(0, ge=0, description="Number of children")

    check_in_date: Date = Field(..., description="First night of the stay")
    check_out_date: Date = Field(..., description="Departure date (not a night)")

    special_requests: Optional[str] = Field(
        None,
        max_length=2000,
        description="Free-text requests from the guest",
    )
    source: BookingSource = Field(
        BookingSource.GUEST,
        description="Surface the booking comes from; decides the initial status",
    )

    @field_validator("guest_name")
    @classmethod
    def validate_guest_name(cls, v: str) -> str:
        """Reject blank names."""
        if not v.split():
            raise ValueError("Guest name cannot be empty or only whitespace")
        return v

    @field_validator("guest_phone")
    @classmethod
    def normalize_phone(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        v = v.replace(" ", "").replace("-", "").replace("(", "").replace(")", "")
        return v or None

    @model_validator(mode="after")
    def validate_room_selection(self) -> "BookingCreate":
        """Either a room or a room type must be given."""
        if self.room_id is None and self.room_type_id is None:
            raise ValueError("Either room_id or room_type_id is required")
        return self

    @property
    def guest_count(self) -> int:
        return self.adults + self.children


class BookingStatusUpdate(BaseUpdateSchema):
    """Staff status change on a booking."""

    status: BookingStatus = Field(..., description="New booking status")
