# hotelbook/api/v1/pricing.py
"""
Price quote endpoint.
"""
from fastapi import APIRouter, Depends

from hotelbook.api import deps
from hotelbook.schemas.booking.booking_pricing import PriceQuoteRequest, PriceQuoteResponse
from hotelbook.services.booking.booking_pricing_service import BookingPricingService
from hotelbook.utils.date_utils import make_interval

router = APIRouter(prefix="/pricing", tags=["Pricing"])


@router.post("/quote", response_model=PriceQuoteResponse, summary="Quote a stay")
def quote_stay(
    payload: PriceQuoteRequest,
    service: BookingPricingService = Depends(deps.get_pricing_service),
) -> PriceQuoteResponse:
    interval = make_interval(payload.check_in, payload.check_out)
    price = service.quote_for_rate(payload.nightly_rate, interval)
    return PriceQuoteResponse.model_validate(price)
