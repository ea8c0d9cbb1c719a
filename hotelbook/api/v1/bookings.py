# hotelbook/api/v1/bookings.py
"""
Booking endpoints: creation, lookups, hotel listings and status changes.
"""
from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from hotelbook.api import deps
from hotelbook.models.base.enums import BookingStatus
from hotelbook.schemas.booking.booking_request import BookingCreate, BookingStatusUpdate
from hotelbook.schemas.booking.booking_response import BookingListResponse, BookingResponse
from hotelbook.services.booking.booking_service import BookingService

router = APIRouter(tags=["Bookings"])


@router.post(
    "/hotels/{hotel_id}/bookings",
    response_model=BookingResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a booking",
)
def create_booking(
    hotel_id: str,
    payload: BookingCreate,
    service: BookingService = Depends(deps.get_booking_service),
):
    return service.create_booking(hotel_id, payload)


@router.get(
    "/hotels/{hotel_id}/bookings",
    response_model=BookingListResponse,
    summary="List a hotel's bookings, newest first",
)
def list_hotel_bookings(
    hotel_id: str,
    status_filter: Optional[BookingStatus] = Query(None, alias="status"),
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=500),
    service: BookingService = Depends(deps.get_booking_service),
) -> BookingListResponse:
    bookings = service.list_hotel_bookings(hotel_id, status=status_filter, skip=skip, limit=limit)
    return BookingListResponse(
        hotel_id=hotel_id,
        total=len(bookings),
        bookings=[BookingResponse.model_validate(booking) for booking in bookings],
    )


@router.get(
    "/bookings/reference/{reference}",
    response_model=BookingResponse,
    summary="Look up a booking by its reference",
)
def get_booking_by_reference(
    reference: str,
    service: BookingService = Depends(deps.get_booking_service),
):
    return service.get_by_reference(reference)


@router.get(
    "/bookings/{booking_id}",
    response_model=BookingResponse,
    summary="Get a booking",
)
def get_booking(
    booking_id: str,
    service: BookingService = Depends(deps.get_booking_service),
):
    return service.get_booking(booking_id)


@router.patch(
    "/bookings/{booking_id}/status",
    response_model=BookingResponse,
    summary="Change a booking's status",
)
def update_booking_status(
    booking_id: str,
    payload: BookingStatusUpdate,
    service: BookingService = Depends(deps.get_booking_service),
):
    return service.update_status(booking_id, payload.status)
