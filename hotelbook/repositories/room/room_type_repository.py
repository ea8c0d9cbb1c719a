"""
Room type repository.
"""

from typing import List

from sqlalchemy import select
from sqlalchemy.orm import Session

from hotelbook.core.exceptions import RoomTypeNotFoundError
from hotelbook.models.room.room_type import RoomType
from hotelbook.repositories.base.base_repository import BaseRepository


class RoomTypeRepository(BaseRepository[RoomType]):
    """Repository for room types."""

    not_found_error = RoomTypeNotFoundError

    def __init__(self, db: Session):
        super().__init__(RoomType, db)

    def find_by_hotel(self, hotel_id: str, active_only: bool = True) -> List[RoomType]:
        query = select(RoomType).where(RoomType.hotel_id == hotel_id)
        if active_only:
            query = query.where(RoomType.is_active.is_(True))
        query = query.order_by(RoomType.name, RoomType.id)
        return list(self.db.execute(query).scalars().all())
