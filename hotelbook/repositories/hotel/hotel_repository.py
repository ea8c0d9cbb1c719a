"""
Hotel repository.
"""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from hotelbook.core.exceptions import HotelNotFoundError
from hotelbook.models.hotel.hotel import Hotel
from hotelbook.repositories.base.base_repository import BaseRepository


class HotelRepository(BaseRepository[Hotel]):
    """Repository for hotel lookups."""

    not_found_error = HotelNotFoundError

    def __init__(self, db: Session):
        super().__init__(Hotel, db)

    def find_by_slug(self, slug: str) -> Optional[Hotel]:
        query = select(Hotel).where(Hotel.slug == slug)
        return self.db.execute(query).scalar_one_or_none()
