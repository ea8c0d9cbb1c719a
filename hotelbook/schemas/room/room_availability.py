# --- File: hotelbook/schemas/room/room_availability.py ---
"""
Room and availability response schemas.
"""

from __future__ import annotations

from datetime import date as Date
from decimal import Decimal
from typing import List, Optional

from pydantic import Field

from hotelbook.models.base.enums import RoomStatus
from hotelbook.schemas.common.base import BaseSchema

__all__ = [
    "RoomTypeSummary",
    "RoomSummary",
    "AvailableRoomsResponse",
    "RoomAvailabilityResponse",
]


class RoomTypeSummary(BaseSchema):
    id: str
    name: str
    base_price: Decimal = Field(..., description="Nightly rate")
    max_occupancy: int


class RoomSummary(BaseSchema):
    id: str
    hotel_id: str
    room_type_id: str
    room_number: str
    floor: Optional[int] = None
    status: RoomStatus
    room_type: Optional[RoomTypeSummary] = None


class AvailableRoomsResponse(BaseSchema):
    """Rooms free for the whole stay, sorted by room number."""

    hotel_id: str
    check_in: Date
    check_out: Date
    nights: int
    rooms: List[RoomSummary] = Field(default_factory=list)


class RoomAvailabilityResponse(BaseSchema):
    """Availability of one room for a stay."""

    hotel_id: str
    room_id: str
    check_in: Date
    check_out: Date
    available: bool
