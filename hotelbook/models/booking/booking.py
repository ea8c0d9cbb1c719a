"""
Booking model for hotel room reservations.

Bookings are never deleted; they move through the status lifecycle
pending -> confirmed -> checked_in -> checked_out, or end cancelled.
"""

from datetime import date as Date
from decimal import Decimal
from typing import TYPE_CHECKING, Optional

from sqlalchemy import (
    DDL,
    CheckConstraint,
    Date as SQLDate,
    Enum,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
    Text,
    event,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from hotelbook.core.exceptions import OVERLAP_CONSTRAINT_NAME
from hotelbook.models.base.base_model import BaseModel
from hotelbook.models.base.enums import BLOCKING_BOOKING_STATUSES, BookingStatus
from hotelbook.models.base.mixins import TimestampMixin
from hotelbook.utils.date_utils import StayInterval

if TYPE_CHECKING:
    from hotelbook.models.hotel.hotel import Hotel
    from hotelbook.models.room.room import Room

__all__ = ["Booking"]


class Booking(BaseModel, TimestampMixin):
    """
    A guest's stay in one room over ``[check_in_date, check_out_date)``.

    Attributes:
        booking_reference: Short human-facing reference (e.g. BK12345678)
        total_amount: Nights times nightly rate, fixed at booking time
        status: Lifecycle status; only confirmed and checked_in hold the room
    """

    __tablename__ = "bookings"

    hotel_id: Mapped[str] = mapped_column(
        ForeignKey("hotels.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    room_id: Mapped[str] = mapped_column(
        ForeignKey("rooms.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    guest_id: Mapped[Optional[str]] = mapped_column(
        String(36),
        nullable=True,
        comment="Registered guest account, if any",
    )

    # Guest details
    guest_name: Mapped[str] = mapped_column(String(255), nullable=False)
    guest_email: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    guest_phone: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    adults: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    children: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    # Stay
    check_in_date: Mapped[Date] = mapped_column(SQLDate, nullable=False, index=True)
    check_out_date: Mapped[Date] = mapped_column(SQLDate, nullable=False, index=True)

    total_amount: Mapped[Decimal] = mapped_column(
        Numeric(10, 2),
        nullable=False,
        comment="Total for the stay",
    )
    status: Mapped[BookingStatus] = mapped_column(
        Enum(
            BookingStatus,
            name="booking_status",
            native_enum=False,
            values_callable=lambda enum_cls: [member.value for member in enum_cls],
        ),
        nullable=False,
        default=BookingStatus.PENDING,
        index=True,
    )
    special_requests: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    booking_reference: Mapped[str] = mapped_column(
        String(20),
        unique=True,
        nullable=False,
        index=True,
        comment="Display reference; the primary key is the real identity",
    )

    hotel: Mapped["Hotel"] = relationship("Hotel", back_populates="bookings")
    room: Mapped["Room"] = relationship("Room", back_populates="bookings")

    __table_args__ = (
        CheckConstraint("check_out_date > check_in_date", name="ck_bookings_date_order"),
        CheckConstraint("total_amount >= 0", name="ck_bookings_total_non_negative"),
        CheckConstraint("adults >= 1", name="ck_bookings_adults_positive"),
        CheckConstraint("children >= 0", name="ck_bookings_children_non_negative"),
        Index("ix_bookings_room_stay", "room_id", "check_in_date", "check_out_date"),
    )

    @property
    def interval(self) -> StayInterval:
        return StayInterval(self.check_in_date, self.check_out_date)

    def __repr__(self) -> str:
        return (
            f"<Booking(reference={self.booking_reference}, room_id={self.room_id}, "
            f"{self.check_in_date}..{self.check_out_date}, status={self.status})>"
        )


# PostgreSQL backstop for the no-overlap rule. Other dialects rely on the
# application-level check only.
_blocking_values = ", ".join(f"'{s.value}'" for s in BLOCKING_BOOKING_STATUSES)

event.listen(
    Booking.__table__,
    "before_create",
    DDL("CREATE EXTENSION IF NOT EXISTS btree_gist").execute_if(dialect="postgresql"),
)
event.listen(
    Booking.__table__,
    "after_create",
    DDL(
        f"ALTER TABLE bookings ADD CONSTRAINT {OVERLAP_CONSTRAINT_NAME} "
        "EXCLUDE USING gist ("
        "room_id WITH =, "
        "daterange(check_in_date, check_out_date, '[)') WITH &&"
        f") WHERE (status IN ({_blocking_values}))"
    ).execute_if(dialect="postgresql"),
)
