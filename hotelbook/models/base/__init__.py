from hotelbook.models.base.base_model import Base, BaseModel, generate_uuid
from hotelbook.models.base.enums import (
    BLOCKING_BOOKING_STATUSES,
    BOOKING_STATUS_TRANSITIONS,
    CALENDAR_BOOKING_STATUSES,
    BookingSource,
    BookingStatus,
    RoomStatus,
)
from hotelbook.models.base.mixins import ActiveMixin, TimestampMixin

__all__ = [
    "Base",
    "BaseModel",
    "generate_uuid",
    "TimestampMixin",
    "ActiveMixin",
    "RoomStatus",
    "BookingStatus",
    "BookingSource",
    "BLOCKING_BOOKING_STATUSES",
    "BOOKING_STATUS_TRANSITIONS",
    "CALENDAR_BOOKING_STATUSES",
]
