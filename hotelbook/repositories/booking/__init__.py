from hotelbook.repositories.booking.booking_repository import BookingRepository

__all__ = ["BookingRepository"]
