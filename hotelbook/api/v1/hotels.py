# hotelbook/api/v1/hotels.py
"""
Hotel-scoped availability and calendar endpoints.
"""
from typing import Optional

from fastapi import APIRouter, Depends, Query

from hotelbook.api import deps
from hotelbook.schemas.booking.booking_calendar import MonthOccupancyResponse
from hotelbook.schemas.room.room_availability import (
    AvailableRoomsResponse,
    RoomAvailabilityResponse,
    RoomSummary,
)
from hotelbook.services.booking.booking_calendar_service import BookingCalendarService
from hotelbook.services.room.room_availability_service import RoomAvailabilityService
from hotelbook.utils.date_utils import make_interval

router = APIRouter(prefix="/hotels", tags=["Availability"])


@router.get(
    "/{hotel_id}/availability",
    response_model=AvailableRoomsResponse,
    summary="List rooms free for a stay",
)
def list_available_rooms(
    hotel_id: str,
    check_in: Optional[str] = Query(None, description="First night (YYYY-MM-DD)"),
    check_out: Optional[str] = Query(None, description="Departure date (YYYY-MM-DD)"),
    room_type_id: Optional[str] = Query(None, description="Restrict to one room type"),
    service: RoomAvailabilityService = Depends(deps.get_availability_service),
) -> AvailableRoomsResponse:
    interval = make_interval(check_in, check_out)
    rooms = service.find_available_rooms(hotel_id, interval, room_type_id=room_type_id)
    return AvailableRoomsResponse(
        hotel_id=hotel_id,
        check_in=interval.check_in,
        check_out=interval.check_out,
        nights=interval.nights,
        rooms=[RoomSummary.model_validate(room) for room in rooms],
    )


@router.get(
    "/{hotel_id}/rooms/{room_id}/availability",
    response_model=RoomAvailabilityResponse,
    summary="Check one room for a stay",
)
def check_room_availability(
    hotel_id: str,
    room_id: str,
    check_in: Optional[str] = Query(None, description="First night (YYYY-MM-DD)"),
    check_out: Optional[str] = Query(None, description="Departure date (YYYY-MM-DD)"),
    service: RoomAvailabilityService = Depends(deps.get_availability_service),
) -> RoomAvailabilityResponse:
    interval = make_interval(check_in, check_out)
    available = service.is_room_available(room_id, hotel_id, interval)
    return RoomAvailabilityResponse(
        hotel_id=hotel_id,
        room_id=room_id,
        check_in=interval.check_in,
        check_out=interval.check_out,
        available=available,
    )


@router.get(
    "/{hotel_id}/calendar",
    response_model=MonthOccupancyResponse,
    tags=["Calendar"],
    summary="Monthly occupancy per room type",
)
def get_occupancy_calendar(
    hotel_id: str,
    year: int = Query(..., ge=1900, le=9999),
    month: int = Query(..., ge=1, le=12),
    room_type_id: Optional[str] = Query(None, description="Restrict to one room type"),
    service: BookingCalendarService = Depends(deps.get_calendar_service),
) -> MonthOccupancyResponse:
    occupancy = service.month_occupancy(hotel_id, year, month, room_type_id=room_type_id)
    return MonthOccupancyResponse.model_validate(occupancy)
