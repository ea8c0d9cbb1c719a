from datetime import date

from hotelbook.models import BookingStatus

API = "/api/v1"


def booking_payload(**overrides):
    payload = {
        "guest_name": "Ana Silva",
        "guest_email": "ana.silva@mail.com",
        "guest_phone": "+351 912 345 678",
        "adults": 2,
        "children": 0,
        "check_in_date": "2025-06-01",
        "check_out_date": "2025-06-04",
        "source": "hotel_admin",
    }
    payload.update(overrides)
    return payload


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"
    assert "X-Request-ID" in response.headers


def test_request_id_is_echoed(client):
    response = client.get("/health", headers={"X-Request-ID": "req-123"})
    assert response.headers["X-Request-ID"] == "req-123"


def test_available_rooms(client, hotel_data, make_booking):
    make_booking("101", date(2025, 6, 1), date(2025, 6, 4))

    response = client.get(
        f"{API}/hotels/{hotel_data.hotel.id}/availability",
        params={"check_in": "2025-06-02", "check_out": "2025-06-03"},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["nights"] == 1
    assert [room["room_number"] for room in body["rooms"]] == ["102", "103", "201"]
    assert body["rooms"][0]["room_type"]["name"] == "Standard"


def test_available_rooms_by_room_type(client, hotel_data):
    response = client.get(
        f"{API}/hotels/{hotel_data.hotel.id}/availability",
        params={
            "check_in": "2025-06-02",
            "check_out": "2025-06-03",
            "room_type_id": hotel_data.suite.id,
        },
    )
    assert response.status_code == 200
    assert [room["room_number"] for room in response.json()["rooms"]] == ["201"]


def test_invalid_interval_is_422(client, hotel_data):
    response = client.get(
        f"{API}/hotels/{hotel_data.hotel.id}/availability",
        params={"check_in": "2025-06-05", "check_out": "2025-06-05"},
    )
    assert response.status_code == 422
    assert response.json()["error"]["code"] == "INVALID_DATE_RANGE"


def test_missing_dates_are_422(client, hotel_data):
    response = client.get(f"{API}/hotels/{hotel_data.hotel.id}/availability")
    assert response.status_code == 422


def test_unknown_hotel_is_404(client, hotel_data):
    response = client.get(
        f"{API}/hotels/missing/availability",
        params={"check_in": "2025-06-01", "check_out": "2025-06-02"},
    )
    assert response.status_code == 404
    assert response.json()["error"]["code"] == "HOTEL_NOT_FOUND"


def test_single_room_availability(client, hotel_data, make_booking):
    make_booking("101", date(2025, 6, 1), date(2025, 6, 5))
    room_id = hotel_data.rooms["101"].id
    url = f"{API}/hotels/{hotel_data.hotel.id}/rooms/{room_id}/availability"

    busy = client.get(url, params={"check_in": "2025-06-04", "check_out": "2025-06-06"})
    free = client.get(url, params={"check_in": "2025-06-05", "check_out": "2025-06-08"})

    assert busy.json()["available"] is False
    assert free.json()["available"] is True


def test_room_of_another_hotel_is_404(client, hotel_data):
    room_id = hotel_data.rooms["301"].id
    response = client.get(
        f"{API}/hotels/{hotel_data.hotel.id}/rooms/{room_id}/availability",
        params={"check_in": "2025-06-01", "check_out": "2025-06-02"},
    )
    assert response.status_code == 404


def test_price_quote(client):
    response = client.post(
        f"{API}/pricing/quote",
        json={"nightly_rate": "99.50", "check_in": "2025-06-01", "check_out": "2025-06-02"},
    )
    assert response.status_code == 200
    body = response.json()
    assert body["nights"] == 1
    assert body["total"] == "99.50"
    assert body["currency"] == "USD"


def test_price_quote_rejects_negative_rate(client):
    response = client.post(
        f"{API}/pricing/quote",
        json={"nightly_rate": "-5", "check_in": "2025-06-01", "check_out": "2025-06-02"},
    )
    assert response.status_code == 422
    assert response.json()["error"]["code"] == "VALIDATION_ERROR"


def test_create_and_fetch_booking(client, hotel_data):
    room_id = hotel_data.rooms["101"].id
    response = client.post(
        f"{API}/hotels/{hotel_data.hotel.id}/bookings",
        json=booking_payload(room_id=room_id),
    )

    assert response.status_code == 201
    created = response.json()
    assert created["status"] == "confirmed"
    assert created["total_amount"] == "300.00"
    assert created["nights"] == 3
    assert created["guest_phone"] == "+351912345678"

    by_id = client.get(f"{API}/bookings/{created['id']}")
    assert by_id.status_code == 200
    assert by_id.json()["booking_reference"] == created["booking_reference"]

    by_reference = client.get(f"{API}/bookings/reference/{created['booking_reference']}")
    assert by_reference.json()["id"] == created["id"]


def test_guest_booking_by_room_type(client, hotel_data):
    response = client.post(
        f"{API}/hotels/{hotel_data.hotel.id}/bookings",
        json=booking_payload(room_type_id=hotel_data.suite.id, source="guest"),
    )
    assert response.status_code == 201
    assert response.json()["status"] == "pending"
    assert response.json()["room_id"] == hotel_data.rooms["201"].id


def test_booking_needs_room_or_room_type(client, hotel_data):
    response = client.post(f"{API}/hotels/{hotel_data.hotel.id}/bookings", json=booking_payload())
    assert response.status_code == 422


def test_conflicting_booking_is_409(client, hotel_data, make_booking):
    make_booking("101", date(2025, 6, 1), date(2025, 6, 5))
    response = client.post(
        f"{API}/hotels/{hotel_data.hotel.id}/bookings",
        json=booking_payload(room_id=hotel_data.rooms["101"].id),
    )
    assert response.status_code == 409
    assert response.json()["error"]["code"] == "ROOM_UNAVAILABLE"


def test_list_bookings_with_status_filter(client, hotel_data, make_booking):
    make_booking("101", status=BookingStatus.CONFIRMED)
    make_booking("102", status=BookingStatus.PENDING)

    everything = client.get(f"{API}/hotels/{hotel_data.hotel.id}/bookings")
    pending = client.get(f"{API}/hotels/{hotel_data.hotel.id}/bookings", params={"status": "pending"})

    assert everything.json()["total"] == 2
    assert [b["status"] for b in pending.json()["bookings"]] == ["pending"]


def test_status_workflow(client, hotel_data, make_booking):
    booking = make_booking("101", status=BookingStatus.PENDING)
    url = f"{API}/bookings/{booking.id}/status"

    confirmed = client.patch(url, json={"status": "confirmed"})
    assert confirmed.status_code == 200
    assert confirmed.json()["status"] == "confirmed"

    invalid = client.patch(url, json={"status": "checked_out"})
    assert invalid.status_code == 409
    assert invalid.json()["error"]["code"] == "INVALID_STATUS_TRANSITION"


def test_missing_booking_is_404(client, hotel_data):
    assert client.get(f"{API}/bookings/missing").status_code == 404
    assert client.get(f"{API}/bookings/reference/BK00000000").status_code == 404


def test_calendar(client, hotel_data, make_booking):
    make_booking("201", date(2025, 6, 1), date(2025, 6, 3))

    response = client.get(
        f"{API}/hotels/{hotel_data.hotel.id}/calendar",
        params={"year": 2025, "month": 6},
    )

    assert response.status_code == 200
    body = response.json()
    suite = next(rt for rt in body["room_types"] if rt["room_type_name"] == "Suite")
    assert suite["days"][0] == {
        "date": "2025-06-01",
        "occupied": 1,
        "total": 1,
        "available": 0,
        "occupancy_rate": 100.0,
    }
    assert suite["days"][2]["occupied"] == 0
