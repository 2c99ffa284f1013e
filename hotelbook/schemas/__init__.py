"""Pydantic schemas for request/response validation"""

from hotelbook.schemas.reservation import (
    ReservationCreate,
    NewReservation,
    StatusUpdate,
    ReservationFilter,
    ReservationResponse,
    ReservationCreatedResponse,
    ReservationUpdatedResponse,
    StatisticsResponse,
    ErrorResponse,
)

__all__ = [
    "ReservationCreate",
    "NewReservation",
    "StatusUpdate",
    "ReservationFilter",
    "ReservationResponse",
    "ReservationCreatedResponse",
    "ReservationUpdatedResponse",
    "StatisticsResponse",
    "ErrorResponse",
]
