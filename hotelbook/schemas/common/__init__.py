from hotelbook.schemas.common.base import (
    BaseCreateSchema,
    BaseDBSchema,
    BaseResponseSchema,
    BaseSchema,
    BaseUpdateSchema,
    TimestampMixin,
    UUIDMixin,
)

__all__ = [
    "BaseSchema",
    "TimestampMixin",
    "UUIDMixin",
    "BaseDBSchema",
    "BaseCreateSchema",
    "BaseUpdateSchema",
    "BaseResponseSchema",
]
