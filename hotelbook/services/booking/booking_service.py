# hotelbook/services/booking/booking_service.py
"""
Booking service: creation, lookups and the staff status workflow.

Creation runs the availability check and the insert in one transaction.
On PostgreSQL the bookings exclusion constraint is the final guard against
two overlapping confirmed stays; its violation surfaces here as
RoomUnavailableError.
"""

from datetime import datetime, timezone
from functools import wraps
from typing import List, Optional

from sqlalchemy.orm import Session

from hotelbook.config.settings import settings
from hotelbook.core.exceptions import (
    BookingConflictError,
    BookingNotFoundError,
    DuplicateEntryError,
    InsufficientCapacityError,
    InvalidStatusTransitionError,
    OverlapConstraintError,
    RoomUnavailableError,
)
from hotelbook.core.logging import get_audit_logger, get_logger
from hotelbook.models.base.enums import (
    BOOKING_STATUS_TRANSITIONS,
    BookingSource,
    BookingStatus,
    RoomStatus,
)
from hotelbook.models.booking.booking import Booking
from hotelbook.models.room.room import Room
from hotelbook.repositories.booking.booking_repository import BookingRepository
from hotelbook.schemas.booking.booking_request import BookingCreate
from hotelbook.services.booking.booking_pricing_service import BookingPricingService
from hotelbook.services.booking.booking_reference import (
    generate_booking_reference,
    generate_random_reference,
)
from hotelbook.services.room.room_availability_service import RoomAvailabilityService
from hotelbook.utils.date_utils import StayInterval, make_interval

logger = get_logger(__name__)


def track_performance(operation_name: str):
    """Decorator to log operation duration."""
    def decorator(func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            start_time = datetime.now(timezone.utc)
            try:
                result = func(*args, **kwargs)
                duration = (datetime.now(timezone.utc) - start_time).total_seconds()
                logger.info(
                    f"Operation '{operation_name}' completed in {duration:.3f}s",
                    extra={
                        "operation": operation_name,
                        "duration_seconds": duration,
                    }
                )
                return result
            except Exception as e:
                duration = (datetime.now(timezone.utc) - start_time).total_seconds()
                logger.warning(
                    f"Operation '{operation_name}' failed after {duration:.3f}s: {str(e)}",
                    extra={
                        "operation": operation_name,
                        "duration_seconds": duration,
                        "error": str(e),
                    }
                )
                raise
        return wrapper
    return decorator


class BookingService:
    """
    Core booking operations.

    Responsibilities:
    - Booking creation for the guest and hotel-admin flows
    - Booking reference allocation with retry on collision
    - Lookups and hotel listings
    - Status transitions
    """

    def __init__(self, session: Session):
        self.session = session
        self.booking_repository = BookingRepository(session)
        self.availability_service = RoomAvailabilityService(session)
        self.pricing_service = BookingPricingService(session)
        self._logger = get_logger(f"{__name__}.{self.__class__.__name__}")
        self._audit = get_audit_logger()

    # -------------------------------------------------------------------------
    # Create Operations
    # -------------------------------------------------------------------------

    @track_performance("create_booking")
    def create_booking(self, hotel_id: str, request: BookingCreate) -> Booking:
        """
        Create a booking.

        Hotel-admin bookings start confirmed; guest bookings start pending.

        Args:
            hotel_id: Hotel the booking belongs to
            request: Booking creation data

        Returns:
            The persisted booking

        Raises:
            InvalidInterval: If check-out is not after check-in
            HotelNotFoundError, RoomNotFoundError, RoomTypeNotFoundError
            InsufficientCapacityError: If the party exceeds the room type
            RoomUnavailableError: If the room is taken for any of the nights
            BookingConflictError: If no unique reference could be allocated
        """
        interval = make_interval(request.check_in_date, request.check_out_date)
        room = self._resolve_room(hotel_id, request, interval)
        room_type = room.room_type

        if request.guest_count > room_type.max_occupancy:
            raise InsufficientCapacityError(
                f"Room type '{room_type.name}' holds at most {room_type.max_occupancy} guests",
                requested=request.guest_count,
                available=room_type.max_occupancy,
            )

        status = (
            BookingStatus.CONFIRMED
            if request.source == BookingSource.HOTEL_ADMIN
            else BookingStatus.PENDING
        )
        price = self.pricing_service.quote_for_room_type(room_type, interval)
        room_id = room.id

        self._logger.info(
            f"Creating booking for hotel {hotel_id}",
            extra={
                "hotel_id": hotel_id,
                "room_id": room_id,
                "booking_source": request.source.value,
                "nights": price.nights,
            },
        )

        max_attempts = max(1, settings.BOOKING_REFERENCE_MAX_ATTEMPTS)
        for attempt in range(1, max_attempts + 1):
            reference = (
                generate_booking_reference() if attempt == 1 else generate_random_reference()
            )
            if self.booking_repository.reference_exists(reference):
                self._logger.warning(
                    f"Booking reference {reference} already taken",
                    extra={"attempt": attempt},
                )
                continue

            if not self.availability_service.is_room_available(room_id, hotel_id, interval):
                raise RoomUnavailableError(
                    "Room is not available for the selected dates",
                    room_id=room_id,
                    reason="overlapping_booking",
                )

            booking = Booking(
                hotel_id=hotel_id,
                room_id=room_id,
                guest_id=request.guest_id,
                guest_name=request.guest_name,
                guest_email=str(request.guest_email),
                guest_phone=request.guest_phone,
                adults=request.adults,
                children=request.children,
                check_in_date=interval.check_in,
                check_out_date=interval.check_out,
                total_amount=price.total,
                status=status,
                special_requests=request.special_requests,
                booking_reference=reference,
            )

            try:
                with self.booking_repository.transaction():
                    self.booking_repository.create(booking, commit=False)
            except OverlapConstraintError as e:
                raise RoomUnavailableError(
                    "Room no longer available",
                    room_id=room_id,
                    reason="overlapping_booking",
                ) from e
            except DuplicateEntryError as e:
                if e.details.get("field") != "booking_reference":
                    raise
                self._logger.warning(
                    f"Booking reference {reference} collided on insert",
                    extra={"attempt": attempt},
                )
                continue

            self.session.refresh(booking)
            self._audit.info(
                "booking_created",
                booking_id=booking.id,
                booking_reference=booking.booking_reference,
                hotel_id=hotel_id,
                room_id=room_id,
                status=booking.status.value,
                total_amount=str(booking.total_amount),
            )
            return booking

        raise BookingConflictError(
            f"Could not allocate a unique booking reference after {max_attempts} attempts",
            room_id=room_id,
        )

    def _resolve_room(
        self,
        hotel_id: str,
        request: BookingCreate,
        interval: StayInterval,
    ) -> Room:
        """The requested room, or the first free room of the requested type."""
        if request.room_id is not None:
            room = self.availability_service.get_room(request.room_id, hotel_id)
            if room.status != RoomStatus.AVAILABLE:
                raise RoomUnavailableError(
                    f"Room {room.room_number} is {room.status.value} and cannot be booked",
                    room_id=room.id,
                    reason="room_not_available",
                )
            return room

        room = self.availability_service.find_available_room_for_type(
            hotel_id, request.room_type_id, interval
        )
        if room is None:
            raise RoomUnavailableError(
                "No rooms of this type are available for the selected dates",
                reason="no_rooms_available",
            )
        return room

    # -------------------------------------------------------------------------
    # Read Operations
    # -------------------------------------------------------------------------

    def get_booking(self, booking_id: str) -> Booking:
        return self.booking_repository.get_by_id(booking_id)

    def get_by_reference(self, reference: str) -> Booking:
        booking = self.booking_repository.find_by_reference(reference.strip())
        if booking is None:
            raise BookingNotFoundError(message=f"Booking not found (reference: {reference})")
        return booking

    def list_hotel_bookings(
        self,
        hotel_id: str,
        status: Optional[BookingStatus] = None,
        skip: int = 0,
        limit: int = 100,
    ) -> List[Booking]:
        """List a hotel's bookings, newest first."""
        self.availability_service.get_hotel(hotel_id)
        return self.booking_repository.find_by_hotel(hotel_id, status=status, skip=skip, limit=limit)

    # -------------------------------------------------------------------------
    # Status Workflow
    # -------------------------------------------------------------------------

    @track_performance("update_booking_status")
    def update_status(self, booking_id: str, new_status: BookingStatus) -> Booking:
        """
        Move a booking along its lifecycle.

        Confirming a pending booking re-checks the room, since pending
        bookings do not hold it.

        Raises:
            BookingNotFoundError: If the booking does not exist
            InvalidStatusTransitionError: If the transition is not allowed
            RoomUnavailableError: If confirming would overlap a held stay
        """
        booking = self.get_booking(booking_id)
        current = booking.status

        if new_status not in BOOKING_STATUS_TRANSITIONS[current]:
            raise InvalidStatusTransitionError(current.value, new_status.value, booking_id)

        if current == BookingStatus.PENDING and new_status == BookingStatus.CONFIRMED:
            if self.booking_repository.has_overlap(
                booking.room_id,
                booking.interval,
                exclude_booking_id=booking.id,
            ):
                raise RoomUnavailableError(
                    "Room is no longer available for this booking's dates",
                    room_id=booking.room_id,
                    reason="overlapping_booking",
                )

        try:
            with self.booking_repository.transaction():
                booking.status = new_status
        except OverlapConstraintError as e:
            raise RoomUnavailableError(
                "Room no longer available",
                room_id=booking.room_id,
                reason="overlapping_booking",
            ) from e

        self.session.refresh(booking)
        self._audit.info(
            "booking_status_changed",
            booking_id=booking.id,
            booking_reference=booking.booking_reference,
            from_status=current.value,
            to_status=new_status.value,
        )
        return booking
