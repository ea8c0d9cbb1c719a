"""
Hotel (tenant) model.
"""

from typing import TYPE_CHECKING, List, Optional

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from hotelbook.models.base.base_model import BaseModel
from hotelbook.models.base.mixins import ActiveMixin, TimestampMixin

if TYPE_CHECKING:
    from hotelbook.models.booking.booking import Booking
    from hotelbook.models.room.room import Room
    from hotelbook.models.room.room_type import RoomType

__all__ = ["Hotel"]


class Hotel(BaseModel, TimestampMixin, ActiveMixin):
    """
    A hotel onboarded on the platform.

    Every room type, room and booking is scoped to exactly one hotel.
    """

    __tablename__ = "hotels"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    slug: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        nullable=False,
        index=True,
        comment="URL slug used by the public hotel pages",
    )
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    address: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    city: Mapped[Optional[str]] = mapped_column(String(100), nullable=True, index=True)
    country: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    phone: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    email: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)

    room_types: Mapped[List["RoomType"]] = relationship(
        "RoomType",
        back_populates="hotel",
        cascade="all, delete-orphan",
    )
    rooms: Mapped[List["Room"]] = relationship(
        "Room",
        back_populates="hotel",
        cascade="all, delete-orphan",
    )
    bookings: Mapped[List["Booking"]] = relationship(
        "Booking",
        back_populates="hotel",
    )

    def __repr__(self) -> str:
        return f"<Hotel(id={self.id}, slug={self.slug})>"
