from hotelbook.services.room.room_availability_service import RoomAvailabilityService

__all__ = ["RoomAvailabilityService"]
