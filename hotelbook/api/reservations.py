"""Reservation API endpoints"""

from datetime import datetime, timezone
from typing import Annotated, List

from fastapi import APIRouter, Depends, Query

from hotelbook.api.deps import get_lifecycle
from hotelbook.schemas.reservation import (
    ReservationCreate,
    StatusUpdate,
    ReservationFilter,
    ReservationResponse,
    ReservationCreatedResponse,
    ReservationUpdatedResponse,
    StatisticsResponse,
)
from hotelbook.services.lifecycle import ReservationLifecycle

router = APIRouter()


@router.post("/reservations", response_model=ReservationCreatedResponse, status_code=201)
async def create_reservation(
    reservation_data: ReservationCreate,
    lifecycle: ReservationLifecycle = Depends(get_lifecycle),
):
    """Create a new reservation"""
    reservation = await lifecycle.create(reservation_data)

    return ReservationCreatedResponse(
        message="Reservation created",
        reservation=ReservationResponse.model_validate(reservation),
        timestamp=datetime.now(timezone.utc),
    )


@router.get("/reservations", response_model=List[ReservationResponse])
async def list_reservations(
    criteria: Annotated[ReservationFilter, Query()],
    lifecycle: ReservationLifecycle = Depends(get_lifecycle),
):
    """List reservations, most recent first, optionally filtered"""
    return await lifecycle.list(criteria)


@router.get("/reservations/by-email/{email}", response_model=List[ReservationResponse])
async def list_reservations_by_email(
    email: str,
    lifecycle: ReservationLifecycle = Depends(get_lifecycle),
):
    """List the reservations booked under an email address"""
    return await lifecycle.list_by_email(email)


@router.get("/reservations/{reservation_id}", response_model=ReservationResponse)
async def get_reservation(
    reservation_id: int,
    lifecycle: ReservationLifecycle = Depends(get_lifecycle),
):
    """Get reservation details"""
    return await lifecycle.get(reservation_id)


@router.put("/reservations/{reservation_id}", response_model=ReservationUpdatedResponse)
async def update_reservation_status(
    reservation_id: int,
    update: StatusUpdate,
    lifecycle: ReservationLifecycle = Depends(get_lifecycle),
):
    """Change the status of a reservation"""
    reservation = await lifecycle.transition(reservation_id, update.status)

    return ReservationUpdatedResponse(
        message=f"Reservation updated to {reservation.status}",
        reservation=ReservationResponse.model_validate(reservation),
    )


@router.delete("/reservations/{reservation_id}", response_model=ReservationUpdatedResponse)
async def cancel_reservation(
    reservation_id: int,
    lifecycle: ReservationLifecycle = Depends(get_lifecycle),
):
    """Cancel a reservation; the record is kept with status cancelled"""
    reservation = await lifecycle.cancel(reservation_id)

    return ReservationUpdatedResponse(
        message="Reservation cancelled",
        reservation=ReservationResponse.model_validate(reservation),
    )


@router.get("/statistics", response_model=StatisticsResponse)
async def get_statistics(
    lifecycle: ReservationLifecycle = Depends(get_lifecycle),
):
    """Reservation counts for the admin dashboard"""
    stats = await lifecycle.statistics()

    return StatisticsResponse(timestamp=datetime.now(timezone.utc), **stats)
