from hotelbook.services.booking.booking_calendar_service import (
    BookingCalendarService,
    DayOccupancy,
    MonthOccupancy,
    RoomTypeOccupancy,
)
from hotelbook.services.booking.booking_pricing_service import (
    BookingPricingService,
    PriceQuote,
    compute_nights,
    compute_total,
    quote,
)
from hotelbook.services.booking.booking_reference import (
    generate_booking_reference,
    generate_random_reference,
)
from hotelbook.services.booking.booking_service import BookingService

__all__ = [
    "BookingService",
    "BookingPricingService",
    "BookingCalendarService",
    "PriceQuote",
    "MonthOccupancy",
    "RoomTypeOccupancy",
    "DayOccupancy",
    "compute_nights",
    "compute_total",
    "quote",
    "generate_booking_reference",
    "generate_random_reference",
]
