"""
Physical room model.
"""

from typing import TYPE_CHECKING, List, Optional

from sqlalchemy import Enum, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from hotelbook.models.base.base_model import BaseModel
from hotelbook.models.base.enums import RoomStatus
from hotelbook.models.base.mixins import TimestampMixin

if TYPE_CHECKING:
    from hotelbook.models.booking.booking import Booking
    from hotelbook.models.hotel.hotel import Hotel
    from hotelbook.models.room.room_type import RoomType

__all__ = ["Room"]


class Room(BaseModel, TimestampMixin):
    """
    A bookable room.

    ``status`` is the administrative state set by hotel staff. It is
    independent of bookings: an ``available`` room can still be taken for
    a particular stay.
    """

    __tablename__ = "rooms"

    hotel_id: Mapped[str] = mapped_column(
        ForeignKey("hotels.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    room_type_id: Mapped[str] = mapped_column(
        ForeignKey("room_types.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    room_number: Mapped[str] = mapped_column(String(20), nullable=False)
    floor: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    status: Mapped[RoomStatus] = mapped_column(
        Enum(
            RoomStatus,
            name="room_status",
            native_enum=False,
            values_callable=lambda enum_cls: [member.value for member in enum_cls],
        ),
        nullable=False,
        default=RoomStatus.AVAILABLE,
        index=True,
    )
    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    hotel: Mapped["Hotel"] = relationship("Hotel", back_populates="rooms")
    room_type: Mapped["RoomType"] = relationship("RoomType", back_populates="rooms")
    bookings: Mapped[List["Booking"]] = relationship("Booking", back_populates="room")

    __table_args__ = (
        UniqueConstraint("hotel_id", "room_number", name="uq_rooms_hotel_room_number"),
    )

    def __repr__(self) -> str:
        return f"<Room(id={self.id}, number={self.room_number}, status={self.status})>"
