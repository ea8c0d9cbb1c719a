from hotelbook.repositories.room.room_repository import RoomRepository
from hotelbook.repositories.room.room_type_repository import RoomTypeRepository

__all__ = ["RoomRepository", "RoomTypeRepository"]
