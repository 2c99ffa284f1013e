"""Dependency providers for the reservation endpoints"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from hotelbook.config import settings
from hotelbook.database import get_db, schema_state
from hotelbook.services.lifecycle import ReservationLifecycle
from hotelbook.services.store import ReservationStore


def get_store(db: AsyncSession = Depends(get_db)) -> ReservationStore:
    return ReservationStore(db, schema_state)


def get_lifecycle(store: ReservationStore = Depends(get_store)) -> ReservationLifecycle:
    return ReservationLifecycle(
        store,
        status_policy=settings.status_policy,
        tz_name=settings.hotel_timezone,
    )
