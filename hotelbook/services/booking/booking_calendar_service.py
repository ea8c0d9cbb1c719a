# hotelbook/services/booking/booking_calendar_service.py
"""
Booking calendar service.

Monthly occupancy grid for the hotel-admin calendar: for every room type
and every night of the month, how many of its rooms have a booking that
covers that night. Cancelled bookings are left out; pending ones count.
"""

from collections import defaultdict
from dataclasses import dataclass, field
from datetime import date
from typing import Dict, List, Optional, Set

from sqlalchemy.orm import Session

from hotelbook.core.exceptions import RoomTypeNotFoundError
from hotelbook.core.logging import get_logger
from hotelbook.models.base.enums import CALENDAR_BOOKING_STATUSES
from hotelbook.repositories.booking.booking_repository import BookingRepository
from hotelbook.repositories.hotel.hotel_repository import HotelRepository
from hotelbook.repositories.room.room_repository import RoomRepository
from hotelbook.repositories.room.room_type_repository import RoomTypeRepository
from hotelbook.utils.date_utils import daterange, month_range


@dataclass
class DayOccupancy:
    date: date
    occupied: int
    total: int

    @property
    def available(self) -> int:
        return self.total - self.occupied

    @property
    def occupancy_rate(self) -> float:
        if self.total <= 0:
            return 0.0
        return round(self.occupied / self.total * 100, 2)


@dataclass
class RoomTypeOccupancy:
    room_type_id: str
    room_type_name: str
    total_rooms: int
    days: List[DayOccupancy] = field(default_factory=list)


@dataclass
class MonthOccupancy:
    hotel_id: str
    year: int
    month: int
    room_types: List[RoomTypeOccupancy] = field(default_factory=list)


class BookingCalendarService:
    """Builds the per room type, per night occupancy grid."""

    def __init__(self, session: Session):
        self.session = session
        self.hotel_repository = HotelRepository(session)
        self.room_type_repository = RoomTypeRepository(session)
        self.room_repository = RoomRepository(session)
        self.booking_repository = BookingRepository(session)
        self._logger = get_logger(f"{__name__}.{self.__class__.__name__}")

    def month_occupancy(
        self,
        hotel_id: str,
        year: int,
        month: int,
        room_type_id: Optional[str] = None,
    ) -> MonthOccupancy:
        """
        Occupancy of every night in ``year``/``month``.

        Args:
            hotel_id: Hotel to report on
            year: Calendar year
            month: Calendar month (1-12)
            room_type_id: Restrict the grid to one room type

        Raises:
            HotelNotFoundError: If the hotel does not exist
            RoomTypeNotFoundError: If the room type is not one of the hotel's
            InvalidInterval: If the month is out of range
        """
        start, end = month_range(year, month)
        self.hotel_repository.get_by_id(hotel_id)

        room_types = self.room_type_repository.find_by_hotel(hotel_id)
        if room_type_id is not None:
            room_types = [rt for rt in room_types if rt.id == room_type_id]
            if not room_types:
                raise RoomTypeNotFoundError(room_type_id)

        rooms = self.room_repository.find_by_hotel(hotel_id, room_type_id=room_type_id)
        rooms_by_type: Dict[str, List[str]] = defaultdict(list)
        for room in rooms:
            rooms_by_type[room.room_type_id].append(room.id)

        bookings = self.booking_repository.find_in_range(
            hotel_id,
            start,
            end,
            CALENDAR_BOOKING_STATUSES,
            room_ids=[room.id for room in rooms],
        )

        # night -> rooms with a booking covering it
        occupied_rooms: Dict[date, Set[str]] = defaultdict(set)
        for booking in bookings:
            for night in daterange(max(booking.check_in_date, start), min(booking.check_out_date, end)):
                occupied_rooms[night].add(booking.room_id)

        result = MonthOccupancy(hotel_id=hotel_id, year=year, month=month)
        for room_type in room_types:
            type_rooms = set(rooms_by_type.get(room_type.id, []))
            occupancy = RoomTypeOccupancy(
                room_type_id=room_type.id,
                room_type_name=room_type.name,
                total_rooms=len(type_rooms),
            )
            for night in daterange(start, end):
                occupancy.days.append(
                    DayOccupancy(
                        date=night,
                        occupied=len(occupied_rooms[night] & type_rooms),
                        total=len(type_rooms),
                    )
                )
            result.room_types.append(occupancy)

        self._logger.debug(
            f"Built occupancy calendar for {year}-{month:02d}",
            extra={"hotel_id": hotel_id, "booking_count": len(bookings)},
        )
        return result
