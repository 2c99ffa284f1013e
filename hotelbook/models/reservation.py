"""Reservation model"""

import enum
from datetime import datetime, timezone
from sqlalchemy import Column, String, Integer, Date, DateTime, func

from hotelbook.database import Base


class ReservationStatus(str, enum.Enum):
    """Lifecycle marker of a reservation"""
    ACTIVE = "active"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Reservation(Base):
    """Table reservations"""
    __tablename__ = "reservations"

    id = Column(Integer, primary_key=True, autoincrement=True)

    # Guest information
    guest_first_name = Column(String(100), nullable=False)
    guest_last_name = Column(String(100), nullable=False)
    email = Column(String(255), nullable=False, index=True)
    phone = Column(String(20), nullable=False)

    # Stay details
    check_in_date = Column(Date, nullable=False)
    check_out_date = Column(Date, nullable=False)
    room_type = Column(String(50), nullable=False)
    occupant_count = Column(Integer, nullable=False)

    # Status
    status = Column(
        String(20),
        nullable=False,
        default=ReservationStatus.ACTIVE.value,
        server_default=ReservationStatus.ACTIVE.value,
    )  # active, completed, cancelled

    # Metadata
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow, server_default=func.now())
