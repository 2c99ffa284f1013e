"""Reservation store: persistence over the reservations table.

Each operation starts with a live health check against the database, so a
database that comes back after an outage is picked up on the next request.
The table itself is provisioned on first use in the process.
"""

import asyncio
from datetime import date, datetime, timezone
from typing import List, Optional

from sqlalchemy import select, update, func, inspect, text
from sqlalchemy.exc import DBAPIError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
import structlog

from hotelbook.database import SchemaState, schema_state as default_schema_state
from hotelbook.exceptions import NotFound, StoreUnavailable, StoreOperationFailed
from hotelbook.models.reservation import Reservation, ReservationStatus
from hotelbook.schemas.reservation import NewReservation, ReservationFilter
from hotelbook.services.filters import apply_filter

logger = structlog.get_logger()


def _has_reservations_table(sync_conn) -> bool:
    return inspect(sync_conn).has_table(Reservation.__tablename__)


def _month_start(day: date) -> datetime:
    return datetime(day.year, day.month, 1, tzinfo=timezone.utc)


def _next_month_start(day: date) -> datetime:
    if day.month == 12:
        return datetime(day.year + 1, 1, 1, tzinfo=timezone.utc)
    return datetime(day.year, day.month + 1, 1, tzinfo=timezone.utc)


class ReservationStore:
    def __init__(self, session: AsyncSession, schema_state: Optional[SchemaState] = None):
        self.session = session
        self.schema_state = schema_state or default_schema_state

    async def _ensure_available(self) -> None:
        try:
            await self.session.execute(text("SELECT 1"))
        except (DBAPIError, OSError, asyncio.TimeoutError) as e:
            logger.error("Database unreachable", error=str(e))
            await self.session.rollback()
            raise StoreUnavailable(str(e)) from e

    async def _ensure_schema(self) -> None:
        if self.schema_state.ready:
            return
        async with self.schema_state.lock:
            if self.schema_state.ready:
                return
            try:
                conn = await self.session.connection()
                exists = await conn.run_sync(_has_reservations_table)
                if not exists:
                    logger.info("Reservations table missing, creating it")
                    await conn.run_sync(Reservation.__table__.create, checkfirst=True)
                    await self.session.commit()
                    logger.info("Reservations table created")
            except SQLAlchemyError as e:
                await self.session.rollback()
                raise StoreOperationFailed(f"error provisioning reservations table: {e}") from e
            self.schema_state.ready = True

    async def _prepare(self) -> None:
        await self._ensure_available()
        await self._ensure_schema()

    async def insert(self, new: NewReservation) -> Reservation:
        """Store a validated reservation; id, status and created_at are assigned here"""
        await self._prepare()

        reservation = Reservation(
            **new.model_dump(),
            status=ReservationStatus.ACTIVE.value,
        )
        try:
            self.session.add(reservation)
            await self.session.commit()
            await self.session.refresh(reservation)
        except SQLAlchemyError as e:
            await self.session.rollback()
            raise StoreOperationFailed(f"error creating reservation: {e}") from e

        return reservation

    async def _fetch_all(self, query, action: str) -> List[Reservation]:
        query = query.order_by(Reservation.created_at.desc(), Reservation.id.desc())
        try:
            result = await self.session.execute(query)
        except SQLAlchemyError as e:
            await self.session.rollback()
            raise StoreOperationFailed(f"error {action}: {e}") from e
        return list(result.scalars().all())

    async def list(self, criteria: Optional[ReservationFilter] = None) -> List[Reservation]:
        """All reservations matching the criteria, most recent first"""
        await self._prepare()
        query = apply_filter(select(Reservation), criteria)
        return await self._fetch_all(query, "listing reservations")

    async def list_by_email(self, email: str) -> List[Reservation]:
        """Reservations booked under an exact (case-sensitive) email, most recent first"""
        await self._prepare()
        query = select(Reservation).where(Reservation.email == email)
        return await self._fetch_all(query, "listing reservations by email")

    async def get(self, reservation_id: int) -> Reservation:
        await self._prepare()
        try:
            result = await self.session.execute(
                select(Reservation).where(Reservation.id == reservation_id)
            )
        except SQLAlchemyError as e:
            await self.session.rollback()
            raise StoreOperationFailed(f"error fetching reservation: {e}") from e

        reservation = result.scalar_one_or_none()
        if reservation is None:
            raise NotFound(reservation_id)
        return reservation

    async def update_status(self, reservation_id: int, status: str) -> Reservation:
        """Overwrite the status of a reservation, whatever it currently is"""
        await self._prepare()
        try:
            result = await self.session.execute(
                update(Reservation)
                .where(Reservation.id == reservation_id)
                .values(status=status)
                .returning(Reservation)
            )
            reservation = result.scalar_one_or_none()
            if reservation is None:
                await self.session.rollback()
                raise NotFound(reservation_id)
            await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            raise StoreOperationFailed(f"error updating reservation: {e}") from e

        return reservation

    async def cancel(self, reservation_id: int) -> Reservation:
        """Cancellation is a status write; the row is kept"""
        return await self.update_status(reservation_id, ReservationStatus.CANCELLED.value)

    async def statistics(self, today: date) -> dict:
        """Counts for the admin dashboard"""
        await self._prepare()
        try:
            month_result = await self.session.execute(
                select(func.count(Reservation.id)).where(
                    Reservation.created_at >= _month_start(today),
                    Reservation.created_at < _next_month_start(today),
                )
            )
            status_result = await self.session.execute(
                select(Reservation.status, func.count(Reservation.id))
                .group_by(Reservation.status)
                .order_by(Reservation.status)
            )
            room_result = await self.session.execute(
                select(Reservation.room_type, func.count(Reservation.id))
                .group_by(Reservation.room_type)
                .order_by(func.count(Reservation.id).desc(), Reservation.room_type)
            )
        except SQLAlchemyError as e:
            await self.session.rollback()
            raise StoreOperationFailed(f"error computing statistics: {e}") from e

        return {
            "reservations_this_month": month_result.scalar() or 0,
            "by_status": [
                {"status": status, "total": total} for status, total in status_result.all()
            ],
            "by_room_type": [
                {"room_type": room_type, "total": total} for room_type, total in room_result.all()
            ],
        }
