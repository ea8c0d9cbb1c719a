"""
Room type model holding the nightly rate and occupancy limits.
"""

from decimal import Decimal
from typing import TYPE_CHECKING, List, Optional

from sqlalchemy import CheckConstraint, ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship, validates

from hotelbook.models.base.base_model import BaseModel
from hotelbook.models.base.mixins import ActiveMixin, TimestampMixin

if TYPE_CHECKING:
    from hotelbook.models.hotel.hotel import Hotel
    from hotelbook.models.room.room import Room

__all__ = ["RoomType"]


class RoomType(BaseModel, TimestampMixin, ActiveMixin):
    """
    Category of rooms within a hotel (e.g. "Deluxe King").

    Attributes:
        base_price: Nightly rate charged for rooms of this type
        max_occupancy: Maximum number of guests (adults + children)
    """

    __tablename__ = "room_types"

    hotel_id: Mapped[str] = mapped_column(
        ForeignKey("hotels.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    base_price: Mapped[Decimal] = mapped_column(
        Numeric(10, 2),
        nullable=False,
        comment="Nightly rate",
    )
    max_occupancy: Mapped[int] = mapped_column(Integer, nullable=False, default=2)

    hotel: Mapped["Hotel"] = relationship("Hotel", back_populates="room_types")
    rooms: Mapped[List["Room"]] = relationship("Room", back_populates="room_type")

    __table_args__ = (
        CheckConstraint("base_price >= 0", name="ck_room_types_base_price_non_negative"),
        CheckConstraint("max_occupancy > 0", name="ck_room_types_max_occupancy_positive"),
    )

    @validates("base_price")
    def validate_base_price(self, key: str, value) -> Decimal:
        value = Decimal(str(value))
        if value < 0:
            raise ValueError("Base price cannot be negative")
        return value

    @validates("max_occupancy")
    def validate_max_occupancy(self, key: str, value: int) -> int:
        if value is None or value < 1:
            raise ValueError("Max occupancy must be a positive integer")
        return value

    def __repr__(self) -> str:
        return f"<RoomType(id={self.id}, name={self.name}, base_price={self.base_price})>"
