from hotelbook.models.hotel.hotel import Hotel

__all__ = ["Hotel"]
