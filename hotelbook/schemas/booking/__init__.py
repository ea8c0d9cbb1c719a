from hotelbook.schemas.booking.booking_calendar import (
    DayOccupancySchema,
    MonthOccupancyResponse,
    RoomTypeOccupancySchema,
)
from hotelbook.schemas.booking.booking_pricing import PriceQuoteRequest, PriceQuoteResponse
from hotelbook.schemas.booking.booking_request import BookingCreate, BookingStatusUpdate
from hotelbook.schemas.booking.booking_response import BookingListResponse, BookingResponse

__all__ = [
    "BookingCreate",
    "BookingStatusUpdate",
    "BookingResponse",
    "BookingListResponse",
    "PriceQuoteRequest",
    "PriceQuoteResponse",
    "DayOccupancySchema",
    "RoomTypeOccupancySchema",
    "MonthOccupancyResponse",
]
