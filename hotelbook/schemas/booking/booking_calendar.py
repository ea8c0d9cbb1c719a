# --- File: hotelbook/schemas/booking/booking_calendar.py ---
"""
Occupancy calendar schemas.
"""

from __future__ import annotations

from datetime import date as Date
from typing import List

from pydantic import Field

from hotelbook.schemas.common.base import BaseSchema

__all__ = [
    "DayOccupancySchema",
    "RoomTypeOccupancySchema",
    "MonthOccupancyResponse",
]


class DayOccupancySchema(BaseSchema):
    date: Date = Field(..., description="Night being reported")
    occupied: int = Field(..., ge=0, description="Rooms with a booking covering the night")
    total: int = Field(..., ge=0, description="Rooms of the type")
    available: int = Field(..., ge=0, description="Rooms without a booking that night")
    occupancy_rate: float = Field(..., ge=0, le=100, description="Occupied share in percent")


class RoomTypeOccupancySchema(BaseSchema):
    room_type_id: str
    room_type_name: str
    total_rooms: int
    days: List[DayOccupancySchema] = Field(default_factory=list)


class MonthOccupancyResponse(BaseSchema):
    """Per room type and per day occupancy for one month."""

    hotel_id: str
    year: int
    month: int
    room_types: List[RoomTypeOccupancySchema] = Field(default_factory=list)
