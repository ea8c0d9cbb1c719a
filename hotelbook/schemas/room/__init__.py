from hotelbook.schemas.room.room_availability import (
    AvailableRoomsResponse,
    RoomAvailabilityResponse,
    RoomSummary,
    RoomTypeSummary,
)

__all__ = [
    "RoomTypeSummary",
    "RoomSummary",
    "AvailableRoomsResponse",
    "RoomAvailabilityResponse",
]
