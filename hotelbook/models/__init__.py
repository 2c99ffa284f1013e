"""Database models"""

from hotelbook.models.reservation import Reservation, ReservationStatus

__all__ = [
    "Reservation",
    "ReservationStatus",
]
