from hotelbook.models.booking.booking import Booking

__all__ = ["Booking"]
