"""Reservation business logic"""

from hotelbook.services.lifecycle import ReservationLifecycle
from hotelbook.services.store import ReservationStore

__all__ = [
    "ReservationLifecycle",
    "ReservationStore",
]
