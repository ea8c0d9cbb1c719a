from hotelbook.models.room.room import Room
from hotelbook.models.room.room_type import RoomType

__all__ = ["Room", "RoomType"]
