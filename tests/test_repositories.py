from datetime import date

import pytest
from sqlalchemy.exc import IntegrityError

from hotelbook.core.exceptions import (
    DatabaseError,
    DuplicateEntryError,
    ForeignKeyViolationError,
    HotelNotFoundError,
    OverlapConstraintError,
    handle_database_exception,
)
from hotelbook.models import BookingStatus, Hotel, RoomStatus
from hotelbook.repositories import BookingRepository, HotelRepository, RoomRepository
from hotelbook.utils.date_utils import StayInterval


def integrity_error(message):
    return IntegrityError("INSERT INTO bookings ...", {}, Exception(message))


def test_get_by_id_raises_repository_not_found_error(db_session, hotel_data):
    repository = HotelRepository(db_session)
    assert repository.get_by_id(hotel_data.hotel.id).slug == "seaside"
    with pytest.raises(HotelNotFoundError):
        repository.get_by_id("missing")


def test_find_by_slug_and_exists(db_session, hotel_data):
    repository = HotelRepository(db_session)
    assert repository.find_by_slug("harbour").id == hotel_data.other_hotel.id
    assert repository.find_by_slug("nowhere") is None
    assert repository.exists(hotel_data.hotel.id)
    assert not repository.exists("missing")


def test_find_by_criteria_and_count(db_session, hotel_data):
    repository = RoomRepository(db_session)

    maintenance = repository.find_by_criteria({"status": RoomStatus.MAINTENANCE})
    assert [room.room_number for room in maintenance] == ["104"]

    ordered = repository.find_by_criteria(
        {"hotel_id": hotel_data.hotel.id, "room_number": ["201", "101"]},
        order_by=["-room_number"],
    )
    assert [room.room_number for room in ordered] == ["201", "101"]

    assert repository.count({"hotel_id": hotel_data.hotel.id}) == 5
    assert len(repository.find_all()) == 6


def test_find_by_hotel_sorts_room_numbers_numerically(db_session, hotel_data):
    repository = RoomRepository(db_session)
    rooms = repository.find_by_hotel(hotel_data.hotel.id, room_type_id=hotel_data.standard.id)
    assert [room.room_number for room in rooms] == ["101", "102", "103", "104"]


def test_duplicate_slug_is_reported(db_session, hotel_data):
    repository = HotelRepository(db_session)
    with pytest.raises(DuplicateEntryError):
        repository.create(Hotel(name="Copy", slug="seaside"))


def test_transaction_rolls_back_on_error(db_session, hotel_data):
    repository = HotelRepository(db_session)
    with pytest.raises(RuntimeError):
        with repository.transaction():
            repository.create(Hotel(name="Temporary", slug="temporary"), commit=False)
            raise RuntimeError("abort")

    assert repository.find_by_slug("temporary") is None


def test_find_in_range_filters_status_and_rooms(db_session, hotel_data, make_booking):
    kept = make_booking("101", date(2025, 6, 1), date(2025, 6, 4), BookingStatus.CONFIRMED)
    make_booking("102", date(2025, 6, 1), date(2025, 6, 4), BookingStatus.CANCELLED)
    make_booking("103", date(2025, 7, 1), date(2025, 7, 4), BookingStatus.CONFIRMED)

    repository = BookingRepository(db_session)
    found = repository.find_in_range(
        hotel_data.hotel.id,
        date(2025, 6, 1),
        date(2025, 7, 1),
        [BookingStatus.CONFIRMED],
    )
    assert [b.id for b in found] == [kept.id]

    none = repository.find_in_range(
        hotel_data.hotel.id,
        date(2025, 6, 1),
        date(2025, 7, 1),
        [BookingStatus.CONFIRMED],
        room_ids=[hotel_data.rooms["102"].id],
    )
    assert none == []


def test_has_overlap_respects_status_set(db_session, hotel_data, make_booking):
    make_booking("101", date(2025, 6, 1), date(2025, 6, 4), BookingStatus.PENDING)
    repository = BookingRepository(db_session)
    room_id = hotel_data.rooms["101"].id
    requested = StayInterval(date(2025, 6, 2), date(2025, 6, 3))

    assert not repository.has_overlap(room_id, requested)
    assert repository.has_overlap(room_id, requested, statuses=[BookingStatus.PENDING])


def test_reference_lookups(db_session, hotel_data, make_booking):
    booking = make_booking("101", reference="BK12345678")
    repository = BookingRepository(db_session)

    assert repository.reference_exists("BK12345678")
    assert not repository.reference_exists("BK00000000")
    assert repository.find_by_reference("BK12345678").id == booking.id
    assert repository.find_by_reference("bk12345678").id == booking.id
    assert repository.find_by_reference("BK00000000") is None


def test_reference_lookup_prefers_exact_case(db_session, hotel_data, make_booking):
    upper = make_booking("101", reference="BK00000042")
    lower = make_booking("102", reference="bk00000042")
    repository = BookingRepository(db_session)

    assert repository.find_by_reference("BK00000042").id == upper.id
    assert repository.find_by_reference("bk00000042").id == lower.id


def test_find_booked_room_ids_by_status(db_session, hotel_data, make_booking):
    make_booking("101", status=BookingStatus.CONFIRMED)
    make_booking("102", status=BookingStatus.PENDING)
    repository = BookingRepository(db_session)
    interval = StayInterval(date(2025, 6, 2), date(2025, 6, 3))

    assert repository.find_booked_room_ids(hotel_data.hotel.id, interval) == {hotel_data.rooms["101"].id}
    assert repository.find_booked_room_ids(
        hotel_data.hotel.id, interval, statuses=(BookingStatus.PENDING,)
    ) == {hotel_data.rooms["102"].id}


@pytest.mark.parametrize(
    "message, expected",
    [
        (
            'conflicting key value violates exclusion constraint "ex_bookings_room_no_overlap"',
            OverlapConstraintError,
        ),
        ("UNIQUE constraint failed: bookings.booking_reference", DuplicateEntryError),
        ("FOREIGN KEY constraint failed", ForeignKeyViolationError),
        ("disk I/O error", DatabaseError),
    ],
)
def test_database_errors_are_translated(message, expected):
    assert type(handle_database_exception(integrity_error(message))) is expected


def test_duplicate_reference_names_the_field():
    error = handle_database_exception(integrity_error("UNIQUE constraint failed: bookings.booking_reference"))
    assert error.details["field"] == "booking_reference"
    assert error.status_code == 409

    other = handle_database_exception(integrity_error("UNIQUE constraint failed: hotels.slug"))
    assert other.details["field"] is None
