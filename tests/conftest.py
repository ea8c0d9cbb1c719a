import itertools
from datetime import date
from decimal import Decimal
from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from hotelbook.db.init_db import drop_db, init_db
from hotelbook.db.session import get_db
from hotelbook.main import app
from hotelbook.models import Booking, BookingStatus, Hotel, Room, RoomStatus, RoomType

_reference_counter = itertools.count(1)


@pytest.fixture
def engine():
    # One shared in-memory connection so the TestClient's worker thread sees the same data
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(engine)
    yield engine
    drop_db(engine)
    engine.dispose()


@pytest.fixture
def db_session(engine):
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def hotel_data(db_session):
    """
    Seaside hotel: standard rooms 101-103 available, 104 under maintenance,
    suite 201 available. Harbour hotel: standard room 301.
    """
    seaside = Hotel(name="Seaside", slug="seaside", city="Lisbon")
    harbour = Hotel(name="Harbour", slug="harbour", city="Porto")
    db_session.add_all([seaside, harbour])
    db_session.flush()

    standard = RoomType(hotel_id=seaside.id, name="Standard", base_price=Decimal("100.00"), max_occupancy=2)
    suite = RoomType(hotel_id=seaside.id, name="Suite", base_price=Decimal("250.00"), max_occupancy=4)
    harbour_standard = RoomType(hotel_id=harbour.id, name="Standard", base_price=Decimal("80.00"), max_occupancy=2)
    db_session.add_all([standard, suite, harbour_standard])
    db_session.flush()

    rooms = {
        "101": Room(hotel_id=seaside.id, room_type_id=standard.id, room_number="101", floor=1),
        "102": Room(hotel_id=seaside.id, room_type_id=standard.id, room_number="102", floor=1),
        "103": Room(hotel_id=seaside.id, room_type_id=standard.id, room_number="103", floor=1),
        "104": Room(
            hotel_id=seaside.id,
            room_type_id=standard.id,
            room_number="104",
            floor=1,
            status=RoomStatus.MAINTENANCE,
        ),
        "201": Room(hotel_id=seaside.id, room_type_id=suite.id, room_number="201", floor=2),
        "301": Room(hotel_id=harbour.id, room_type_id=harbour_standard.id, room_number="301", floor=3),
    }
    db_session.add_all(rooms.values())
    db_session.commit()

    return SimpleNamespace(
        hotel=seaside,
        other_hotel=harbour,
        standard=standard,
        suite=suite,
        rooms=rooms,
    )


@pytest.fixture
def make_booking(db_session, hotel_data):
    """Insert a booking directly, bypassing the booking service checks."""

    def _make_booking(
        room_number="101",
        check_in=date(2025, 6, 1),
        check_out=date(2025, 6, 4),
        status=BookingStatus.CONFIRMED,
        reference=None,
    ):
        room = hotel_data.rooms[room_number]
        booking = Booking(
            hotel_id=room.hotel_id,
            room_id=room.id,
            guest_name="Existing Guest",
            guest_email="existing@example.com",
            adults=1,
            children=0,
            check_in_date=check_in,
            check_out_date=check_out,
            total_amount=Decimal("0.00"),
            status=status,
            booking_reference=reference or f"TS{next(_reference_counter):08d}",
        )
        db_session.add(booking)
        db_session.commit()
        return booking

    return _make_booking


@pytest.fixture
def client(db_session):
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
