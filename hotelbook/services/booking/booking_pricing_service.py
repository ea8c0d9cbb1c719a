# hotelbook/services/booking/booking_pricing_service.py
"""
Booking pricing service.

Computes nights and stay totals from a nightly rate. The module-level
functions are pure; ``BookingPricingService`` adds the room type lookup
used when creating bookings.
"""

import math
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Dict, Union

from sqlalchemy.orm import Session

from hotelbook.config.settings import settings
from hotelbook.core.exceptions import InvalidInterval, ValidationError
from hotelbook.models.room.room_type import RoomType
from hotelbook.repositories.room.room_type_repository import RoomTypeRepository
from hotelbook.utils.date_utils import StayInterval

MS_PER_DAY = 24 * 60 * 60 * 1000

Rate = Union[Decimal, float, int, str]


@dataclass(frozen=True)
class PriceQuote:
    """Price breakdown for a stay."""

    nights: int
    nightly_rate: Decimal
    total: Decimal
    currency: str

    def to_dict(self) -> Dict:
        return {
            "nights": self.nights,
            "nightly_rate": str(self.nightly_rate),
            "total": str(self.total),
            "currency": self.currency,
        }


def _as_datetime(value: Union[date, datetime]) -> datetime:
    if isinstance(value, datetime):
        return value
    return datetime.combine(value, time.min)


def nights_between(start: Union[date, datetime], end: Union[date, datetime]) -> int:
    """
    Number of nights between two points, rounding any partial day up.

    Raises:
        InvalidInterval: If the result is zero or negative
    """
    elapsed_ms = (_as_datetime(end) - _as_datetime(start)) / timedelta(milliseconds=1)
    nights = math.ceil(elapsed_ms / MS_PER_DAY)

    if nights <= 0:
        raise InvalidInterval(
            "Stay must be at least one night",
            start_date=str(start),
            end_date=str(end),
        )
    return nights


def compute_nights(interval: StayInterval) -> int:
    return nights_between(interval.check_in, interval.check_out)


def to_rate(nightly_rate: Rate) -> Decimal:
    """Coerce a nightly rate to Decimal, rejecting negative or non-numeric values."""
    try:
        rate = Decimal(str(nightly_rate))
    except (InvalidOperation, ValueError, TypeError):
        raise ValidationError(
            "Nightly rate must be a number",
            field_errors={"nightly_rate": [f"invalid value {nightly_rate!r}"]},
        ) from None

    if not rate.is_finite() or rate < 0:
        raise ValidationError(
            "Nightly rate must be a non-negative number",
            field_errors={"nightly_rate": [f"invalid value {nightly_rate!r}"]},
        )
    return rate


def round_currency(amount: Decimal) -> Decimal:
    """Round half-up to the currency's minor unit."""
    quantum = Decimal(1).scaleb(-settings.CURRENCY_DECIMAL_PLACES)
    return amount.quantize(quantum, rounding=ROUND_HALF_UP)


def compute_total(nightly_rate: Rate, interval: StayInterval) -> Decimal:
    """
    Total price for the stay: nights times nightly rate.

    Args:
        nightly_rate: Rate per night (non-negative)
        interval: Stay interval

    Returns:
        Total rounded to the currency's minor unit

    Raises:
        InvalidInterval: If the stay has no nights
        ValidationError: If the rate is negative or not numeric
    """
    nights = compute_nights(interval)
    rate = to_rate(nightly_rate)
    return round_currency(rate * nights)


def quote(nightly_rate: Rate, interval: StayInterval) -> PriceQuote:
    nights = compute_nights(interval)
    rate = to_rate(nightly_rate)
    return PriceQuote(
        nights=nights,
        nightly_rate=round_currency(rate),
        total=round_currency(rate * nights),
        currency=settings.CURRENCY,
    )


class BookingPricingService:
    """
    Service for booking pricing calculations.

    Responsibilities:
    - Quote a stay for a room type's nightly rate
    - Quote a stay for an explicit rate
    """

    def __init__(self, session: Session):
        """Initialize pricing service."""
        self.session = session
        self.room_type_repository = RoomTypeRepository(session)

    def quote_for_room_type(self, room_type: RoomType, interval: StayInterval) -> PriceQuote:
        return quote(room_type.base_price, interval)

    def quote_for_room_type_id(self, room_type_id: str, interval: StayInterval) -> PriceQuote:
        room_type = self.room_type_repository.get_by_id(room_type_id)
        return self.quote_for_room_type(room_type, interval)

    def quote_for_rate(self, nightly_rate: Rate, interval: StayInterval) -> PriceQuote:
        return quote(nightly_rate, interval)
