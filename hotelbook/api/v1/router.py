"""
API v1 Router - Main Entry Point
Aggregates all v1 API endpoints for the hotel booking service
"""
from fastapi import APIRouter

from hotelbook.api.v1 import bookings, hotels, pricing

router = APIRouter(
    responses={
        404: {"description": "Not Found"},
        409: {"description": "Conflict"},
        422: {"description": "Validation Error"},
        500: {"description": "Internal Server Error"}
    }
)

router.include_router(hotels.router)
router.include_router(bookings.router)
router.include_router(pricing.router)
