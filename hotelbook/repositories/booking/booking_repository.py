# hotelbook/repositories/booking/booking_repository.py
"""
Booking repository.

Provides the overlap queries behind availability checks, reference
lookups and the listings used by the admin console and calendar.
"""

from datetime import date
from typing import Iterable, List, Optional, Sequence, Set

from sqlalchemy import and_, func, select
from sqlalchemy.orm import Session, joinedload
from sqlalchemy.sql.elements import ColumnElement

from hotelbook.core.exceptions import BookingNotFoundError
from hotelbook.models.base.enums import BLOCKING_BOOKING_STATUSES, BookingStatus
from hotelbook.models.booking.booking import Booking
from hotelbook.repositories.base.base_repository import BaseRepository
from hotelbook.utils.date_utils import StayInterval


def overlap_clause(check_in: date, check_out: date) -> ColumnElement[bool]:
    """Half-open overlap predicate against ``[check_in, check_out)``."""
    return and_(
        Booking.check_in_date < check_out,
        Booking.check_out_date > check_in,
    )


class BookingRepository(BaseRepository[Booking]):
    """
    Repository for booking operations.

    Provides:
    - Overlap queries for availability checking
    - Reference lookups
    - Hotel listings and calendar ranges
    """

    not_found_error = BookingNotFoundError

    def __init__(self, db: Session):
        """Initialize booking repository."""
        super().__init__(Booking, db)

    # ==================== AVAILABILITY & CONFLICTS ====================

    def find_overlapping(
        self,
        room_id: str,
        interval: StayInterval,
        statuses: Sequence[BookingStatus] = BLOCKING_BOOKING_STATUSES,
        exclude_booking_id: Optional[str] = None,
    ) -> List[Booking]:
        """
        Find bookings on a room whose stay overlaps ``interval``.

        Args:
            room_id: Room to check
            interval: Requested stay
            statuses: Statuses that count as holding the room
            exclude_booking_id: Booking to ignore (when re-checking itself)

        Returns:
            Overlapping bookings ordered by check-in date
        """
        query = select(Booking).where(
            Booking.room_id == room_id,
            Booking.status.in_(list(statuses)),
            overlap_clause(interval.check_in, interval.check_out),
        )

        if exclude_booking_id:
            query = query.where(Booking.id != exclude_booking_id)

        query = query.order_by(Booking.check_in_date, Booking.id)
        return list(self.db.execute(query).scalars().all())

    def has_overlap(
        self,
        room_id: str,
        interval: StayInterval,
        statuses: Sequence[BookingStatus] = BLOCKING_BOOKING_STATUSES,
        exclude_booking_id: Optional[str] = None,
    ) -> bool:
        """True when at least one booking in ``statuses`` overlaps the stay."""
        query = select(func.count(Booking.id)).where(
            Booking.room_id == room_id,
            Booking.status.in_(list(statuses)),
            overlap_clause(interval.check_in, interval.check_out),
        )

        if exclude_booking_id:
            query = query.where(Booking.id != exclude_booking_id)

        return self.db.execute(query).scalar_one() > 0

    def booked_room_ids_subquery(
        self,
        hotel_id: str,
        interval: StayInterval,
        statuses: Sequence[BookingStatus] = BLOCKING_BOOKING_STATUSES,
    ):
        """Room ids in the hotel held by an overlapping booking."""
        return select(Booking.room_id).where(
            Booking.hotel_id == hotel_id,
            Booking.status.in_(list(statuses)),
            overlap_clause(interval.check_in, interval.check_out),
        )

    def find_booked_room_ids(
        self,
        hotel_id: str,
        interval: StayInterval,
        statuses: Sequence[BookingStatus] = BLOCKING_BOOKING_STATUSES,
    ) -> Set[str]:
        query = self.booked_room_ids_subquery(hotel_id, interval, statuses)
        return set(self.db.execute(query).scalars().all())

    # ==================== SEARCH & RETRIEVAL ====================

    def find_by_reference(self, booking_reference: str) -> Optional[Booking]:
        """
        Find booking by reference.

        An exact match wins; otherwise the lookup ignores case.

        Returns:
            Booking if found, None otherwise
        """
        query = select(Booking).where(
            func.upper(Booking.booking_reference) == booking_reference.upper()
        ).options(
            joinedload(Booking.room),
        )
        matches = list(self.db.execute(query).scalars().all())
        for booking in matches:
            if booking.booking_reference == booking_reference:
                return booking
        return matches[0] if matches else None

    def reference_exists(self, booking_reference: str) -> bool:
        query = select(func.count(Booking.id)).where(
            Booking.booking_reference == booking_reference
        )
        return self.db.execute(query).scalar_one() > 0

    def find_by_hotel(
        self,
        hotel_id: str,
        status: Optional[BookingStatus] = None,
        skip: int = 0,
        limit: int = 100,
    ) -> List[Booking]:
        """
        List a hotel's bookings, newest first.
        """
        query = select(Booking).where(Booking.hotel_id == hotel_id)

        if status is not None:
            query = query.where(Booking.status == status)

        query = query.order_by(
            Booking.created_at.desc(),
            Booking.check_in_date.desc(),
            Booking.id,
        ).offset(skip).limit(limit)

        return list(self.db.execute(query).scalars().all())

    def find_in_range(
        self,
        hotel_id: str,
        start: date,
        end: date,
        statuses: Iterable[BookingStatus],
        room_ids: Optional[Iterable[str]] = None,
    ) -> List[Booking]:
        """Bookings whose stay touches any night in ``[start, end)``."""
        query = select(Booking).where(
            Booking.hotel_id == hotel_id,
            Booking.status.in_(list(statuses)),
            overlap_clause(start, end),
        )

        if room_ids is not None:
            query = query.where(Booking.room_id.in_(list(room_ids)))

        query = query.order_by(Booking.room_id, Booking.check_in_date)
        return list(self.db.execute(query).scalars().all())
