from datetime import date
from decimal import Decimal

import pytest

from hotelbook.config.settings import settings
from hotelbook.core.exceptions import (
    BookingConflictError,
    BookingNotFoundError,
    HotelNotFoundError,
    InsufficientCapacityError,
    InvalidInterval,
    InvalidStatusTransitionError,
    OverlapConstraintError,
    RoomNotFoundError,
    RoomUnavailableError,
)
from hotelbook.models import Booking, BookingStatus
from hotelbook.models.base.enums import BookingSource
from hotelbook.schemas.booking.booking_request import BookingCreate
from hotelbook.services.booking import booking_service as booking_service_module
from hotelbook.services.booking.booking_service import BookingService


@pytest.fixture
def service(db_session):
    return BookingService(db_session)


def booking_request(**overrides):
    data = {
        "guest_name": "Ana Silva",
        "guest_email": "ana.silva@mail.com",
        "check_in_date": "2025-06-01",
        "check_out_date": "2025-06-04",
        "adults": 2,
        "source": "hotel_admin",
    }
    data.update(overrides)
    return BookingCreate(**data)


def test_admin_booking_is_confirmed_and_priced(service, hotel_data):
    room = hotel_data.rooms["101"]
    booking = service.create_booking(hotel_data.hotel.id, booking_request(room_id=room.id))

    assert booking.id
    assert booking.status == BookingStatus.CONFIRMED
    assert booking.room_id == room.id
    assert booking.total_amount == Decimal("300.00")
    assert booking.booking_reference.startswith("BK")
    assert len(booking.booking_reference) == 10


def test_guest_booking_is_pending_and_gets_first_free_room(service, hotel_data, make_booking):
    make_booking("101", date(2025, 6, 1), date(2025, 6, 4))

    booking = service.create_booking(
        hotel_data.hotel.id,
        booking_request(room_type_id=hotel_data.standard.id, source=BookingSource.GUEST),
    )

    assert booking.status == BookingStatus.PENDING
    assert booking.room_id == hotel_data.rooms["102"].id


def test_guest_bookings_for_a_type_spread_over_free_rooms(service, hotel_data):
    guest = booking_request(room_type_id=hotel_data.standard.id, source=BookingSource.GUEST)
    first = service.create_booking(hotel_data.hotel.id, guest)
    second = service.create_booking(hotel_data.hotel.id, guest)

    assert first.room_id == hotel_data.rooms["101"].id
    assert second.room_id == hotel_data.rooms["102"].id

    service.update_status(first.id, BookingStatus.CONFIRMED)
    assert service.update_status(second.id, BookingStatus.CONFIRMED).status == BookingStatus.CONFIRMED


def test_guest_booking_fails_when_room_type_is_full(service, hotel_data, make_booking):
    make_booking("201", date(2025, 6, 1), date(2025, 6, 4))

    with pytest.raises(RoomUnavailableError):
        service.create_booking(
            hotel_data.hotel.id,
            booking_request(room_type_id=hotel_data.suite.id, source="guest"),
        )


def test_overlapping_confirmed_booking_is_rejected(service, hotel_data, make_booking):
    make_booking("101", date(2025, 6, 1), date(2025, 6, 5))
    room = hotel_data.rooms["101"]

    with pytest.raises(RoomUnavailableError):
        service.create_booking(
            hotel_data.hotel.id,
            booking_request(room_id=room.id, check_in_date="2025-06-04", check_out_date="2025-06-06"),
        )


def test_back_to_back_booking_is_accepted(service, hotel_data, make_booking):
    make_booking("101", date(2025, 6, 1), date(2025, 6, 5))
    room = hotel_data.rooms["101"]

    booking = service.create_booking(
        hotel_data.hotel.id,
        booking_request(room_id=room.id, check_in_date="2025-06-05", check_out_date="2025-06-07"),
    )
    assert booking.check_in_date == date(2025, 6, 5)


def test_second_identical_booking_is_rejected(service, hotel_data):
    room = hotel_data.rooms["101"]
    service.create_booking(hotel_data.hotel.id, booking_request(room_id=room.id))

    with pytest.raises(RoomUnavailableError):
        service.create_booking(hotel_data.hotel.id, booking_request(room_id=room.id))


def test_party_larger_than_room_type_is_rejected(service, hotel_data):
    room = hotel_data.rooms["101"]
    with pytest.raises(InsufficientCapacityError):
        service.create_booking(hotel_data.hotel.id, booking_request(room_id=room.id, adults=2, children=1))


@pytest.mark.parametrize(
    "check_in, check_out",
    [("2025-06-04", "2025-06-04"), ("2025-06-04", "2025-06-01")],
)
def test_invalid_interval_is_rejected(service, hotel_data, check_in, check_out):
    room = hotel_data.rooms["101"]
    with pytest.raises(InvalidInterval):
        service.create_booking(
            hotel_data.hotel.id,
            booking_request(room_id=room.id, check_in_date=check_in, check_out_date=check_out),
        )


def test_room_from_another_hotel_is_not_found(service, hotel_data):
    with pytest.raises(RoomNotFoundError):
        service.create_booking(hotel_data.hotel.id, booking_request(room_id=hotel_data.rooms["301"].id))


def test_room_under_maintenance_cannot_be_booked(service, hotel_data):
    with pytest.raises(RoomUnavailableError) as excinfo:
        service.create_booking(hotel_data.hotel.id, booking_request(room_id=hotel_data.rooms["104"].id))
    assert excinfo.value.details["reason"] == "room_not_available"


def test_unknown_hotel_is_not_found(service, hotel_data):
    with pytest.raises(HotelNotFoundError):
        service.create_booking("missing-hotel", booking_request(room_id=hotel_data.rooms["101"].id))


def test_taken_reference_is_regenerated(service, hotel_data, make_booking, monkeypatch):
    make_booking("102", reference="BK00000001")
    monkeypatch.setattr(booking_service_module, "generate_booking_reference", lambda: "BK00000001")
    monkeypatch.setattr(booking_service_module, "generate_random_reference", lambda: "BK00000002")

    booking = service.create_booking(hotel_data.hotel.id, booking_request(room_id=hotel_data.rooms["101"].id))
    assert booking.booking_reference == "BK00000002"


def test_reference_collision_on_insert_is_retried(service, hotel_data, make_booking, monkeypatch):
    make_booking("102", reference="BK00000001")
    references = iter(["BK00000003"])
    monkeypatch.setattr(booking_service_module, "generate_booking_reference", lambda: "BK00000001")
    monkeypatch.setattr(booking_service_module, "generate_random_reference", lambda: next(references))
    # Simulate a concurrent insert winning the race between check and insert
    monkeypatch.setattr(service.booking_repository, "reference_exists", lambda reference: False)

    booking = service.create_booking(hotel_data.hotel.id, booking_request(room_id=hotel_data.rooms["101"].id))
    assert booking.booking_reference == "BK00000003"


def test_reference_retries_are_bounded(service, hotel_data, make_booking, monkeypatch):
    make_booking("102", reference="BK00000001")
    monkeypatch.setattr(booking_service_module, "generate_booking_reference", lambda: "BK00000001")
    monkeypatch.setattr(booking_service_module, "generate_random_reference", lambda: "BK00000001")
    monkeypatch.setattr(settings, "BOOKING_REFERENCE_MAX_ATTEMPTS", 2)

    with pytest.raises(BookingConflictError):
        service.create_booking(hotel_data.hotel.id, booking_request(room_id=hotel_data.rooms["101"].id))


def test_overlap_constraint_violation_reports_room_unavailable(service, hotel_data, monkeypatch):
    def reject(entity, commit=True):
        raise OverlapConstraintError()

    monkeypatch.setattr(service.booking_repository, "create", reject)

    with pytest.raises(RoomUnavailableError) as excinfo:
        service.create_booking(hotel_data.hotel.id, booking_request(room_id=hotel_data.rooms["101"].id))
    assert excinfo.value.message == "Room no longer available"


def test_get_booking_and_reference_lookup(service, hotel_data):
    created = service.create_booking(hotel_data.hotel.id, booking_request(room_id=hotel_data.rooms["101"].id))

    assert service.get_booking(created.id).id == created.id
    assert service.get_by_reference(created.booking_reference).id == created.id
    assert service.get_by_reference(created.booking_reference.lower()).id == created.id


def test_reference_lookup_with_lowercase_prefix(service, hotel_data, monkeypatch):
    monkeypatch.setattr(settings, "BOOKING_REFERENCE_PREFIX", "bk")
    created = service.create_booking(hotel_data.hotel.id, booking_request(room_id=hotel_data.rooms["101"].id))

    assert created.booking_reference.startswith("bk")
    assert service.get_by_reference(created.booking_reference).id == created.id
    assert service.get_by_reference(f" {created.booking_reference.upper()} ").id == created.id


def test_missing_booking_is_not_found(service, hotel_data):
    with pytest.raises(BookingNotFoundError):
        service.get_booking("missing")
    with pytest.raises(BookingNotFoundError):
        service.get_by_reference("BK99999999")


def test_list_hotel_bookings_newest_first_with_status_filter(service, hotel_data, make_booking):
    first = make_booking("101", date(2025, 6, 1), date(2025, 6, 3), BookingStatus.CONFIRMED)
    second = make_booking("102", date(2025, 6, 1), date(2025, 6, 3), BookingStatus.PENDING)
    make_booking("301", date(2025, 6, 1), date(2025, 6, 3))

    bookings = service.list_hotel_bookings(hotel_data.hotel.id)
    assert [b.id for b in bookings] == [second.id, first.id]

    pending = service.list_hotel_bookings(hotel_data.hotel.id, status=BookingStatus.PENDING)
    assert [b.id for b in pending] == [second.id]


def test_list_bookings_of_unknown_hotel(service, hotel_data):
    with pytest.raises(HotelNotFoundError):
        service.list_hotel_bookings("missing-hotel")


def test_full_lifecycle(service, hotel_data, make_booking):
    booking = make_booking("101", status=BookingStatus.PENDING)

    for status in (BookingStatus.CONFIRMED, BookingStatus.CHECKED_IN, BookingStatus.CHECKED_OUT):
        booking = service.update_status(booking.id, status)
        assert booking.status == status


@pytest.mark.parametrize(
    "current, requested",
    [
        (BookingStatus.PENDING, BookingStatus.CHECKED_IN),
        (BookingStatus.CONFIRMED, BookingStatus.PENDING),
        (BookingStatus.CHECKED_IN, BookingStatus.CANCELLED),
        (BookingStatus.CHECKED_OUT, BookingStatus.CONFIRMED),
        (BookingStatus.CANCELLED, BookingStatus.CONFIRMED),
        (BookingStatus.CONFIRMED, BookingStatus.CONFIRMED),
    ],
)
def test_invalid_transitions_are_rejected(service, hotel_data, make_booking, current, requested):
    booking = make_booking("101", status=current)
    with pytest.raises(InvalidStatusTransitionError):
        service.update_status(booking.id, requested)


def test_cancelling_frees_the_room(service, hotel_data, make_booking):
    booking = make_booking("101", date(2025, 6, 1), date(2025, 6, 4))
    service.update_status(booking.id, BookingStatus.CANCELLED)

    created = service.create_booking(hotel_data.hotel.id, booking_request(room_id=hotel_data.rooms["101"].id))
    assert created.status == BookingStatus.CONFIRMED


def test_confirming_pending_booking_rechecks_availability(service, hotel_data, make_booking):
    pending = make_booking("101", date(2025, 6, 1), date(2025, 6, 4), BookingStatus.PENDING)
    make_booking("101", date(2025, 6, 3), date(2025, 6, 5), BookingStatus.CONFIRMED)

    with pytest.raises(RoomUnavailableError):
        service.update_status(pending.id, BookingStatus.CONFIRMED)

    assert service.get_booking(pending.id).status == BookingStatus.PENDING


def test_status_changes_are_persisted(service, db_session, hotel_data, make_booking):
    booking = make_booking("101", status=BookingStatus.CONFIRMED)
    service.update_status(booking.id, BookingStatus.CHECKED_IN)

    db_session.expire_all()
    assert db_session.get(Booking, booking.id).status == BookingStatus.CHECKED_IN
