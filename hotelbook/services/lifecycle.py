"""Reservation lifecycle: ties the reservation rules to the store.

The controller keeps no state between requests. It owns the status
transition policy:

- ``strict``: only known statuses, and only moves listed in
  ``TRANSITIONS``; completed and cancelled reservations are terminal.
- ``legacy``: any non-blank status is written as given.
"""

from datetime import date
from typing import Dict, FrozenSet, List, Optional

import structlog

from hotelbook.exceptions import ValidationError, InvalidTransition
from hotelbook.models.reservation import Reservation, ReservationStatus
from hotelbook.schemas.reservation import ReservationCreate, ReservationFilter
from hotelbook.services.store import ReservationStore
from hotelbook.services.validation import (
    local_today,
    validate_new_reservation,
    validate_status_value,
)

logger = structlog.get_logger()

STRICT = "strict"
LEGACY = "legacy"
STATUS_POLICIES = (STRICT, LEGACY)

TRANSITIONS: Dict[ReservationStatus, FrozenSet[ReservationStatus]] = {
    ReservationStatus.ACTIVE: frozenset({ReservationStatus.COMPLETED, ReservationStatus.CANCELLED}),
    ReservationStatus.COMPLETED: frozenset(),
    ReservationStatus.CANCELLED: frozenset(),
}


def check_transition(current: str, target: str) -> None:
    """Raise unless the transition table allows moving from current to target"""
    try:
        target_status = ReservationStatus(target)
    except ValueError:
        raise ValidationError(f"unknown status: {target}")

    if current == target_status.value:
        return

    try:
        current_status = ReservationStatus(current)
    except ValueError:
        # Rows written under the legacy policy may hold any value
        raise InvalidTransition(current, target)

    if target_status not in TRANSITIONS[current_status]:
        raise InvalidTransition(current, target)


class ReservationLifecycle:
    def __init__(self, store: ReservationStore, status_policy: str = STRICT, tz_name: str = ""):
        if status_policy not in STATUS_POLICIES:
            raise ValueError(f"unknown status policy: {status_policy}")
        self.store = store
        self.status_policy = status_policy
        self.tz_name = tz_name

    def today(self) -> date:
        return local_today(self.tz_name)

    async def create(self, payload: ReservationCreate) -> Reservation:
        new = validate_new_reservation(payload, today=self.today())
        reservation = await self.store.insert(new)
        logger.info(
            "Reservation created",
            reservation_id=reservation.id,
            room_type=reservation.room_type,
            check_in_date=str(reservation.check_in_date),
        )
        return reservation

    async def list(self, criteria: Optional[ReservationFilter] = None) -> List[Reservation]:
        reservations = await self.store.list(criteria)
        logger.info("Reservations listed", count=len(reservations))
        return reservations

    async def list_by_email(self, email: str) -> List[Reservation]:
        reservations = await self.store.list_by_email(email)
        logger.info("Reservations listed by email", count=len(reservations))
        return reservations

    async def get(self, reservation_id: int) -> Reservation:
        return await self.store.get(reservation_id)

    async def transition(self, reservation_id: int, status: Optional[str]) -> Reservation:
        """Move a reservation to a new status under the configured policy"""
        target = validate_status_value(status)

        if self.status_policy == STRICT:
            current = await self.store.get(reservation_id)
            check_transition(current.status, target)

        reservation = await self.store.update_status(reservation_id, target)
        logger.info(
            "Reservation status updated",
            reservation_id=reservation_id,
            status=target,
        )
        return reservation

    async def cancel(self, reservation_id: int) -> Reservation:
        return await self.transition(reservation_id, ReservationStatus.CANCELLED.value)

    async def statistics(self) -> dict:
        return await self.store.statistics(self.today())
