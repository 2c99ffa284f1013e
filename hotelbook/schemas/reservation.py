"""Reservation schemas"""

from datetime import date, datetime
from typing import Optional, List, Union
from pydantic import BaseModel, StrictInt, field_validator


class ReservationCreate(BaseModel):
    """Create reservation request.

    Every field is optional on the wire so that a missing value is reported
    by the reservation rules with a readable reason, not as a schema error.
    """
    guest_first_name: Optional[str] = None
    guest_last_name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    check_in_date: Optional[Union[date, str]] = None
    check_out_date: Optional[Union[date, str]] = None
    room_type: Optional[str] = None
    occupant_count: Optional[Union[bool, StrictInt, str]] = None


class NewReservation(BaseModel):
    """A reservation request that passed validation"""
    guest_first_name: str
    guest_last_name: str
    email: str
    phone: str
    check_in_date: date
    check_out_date: date
    room_type: str
    occupant_count: int


class StatusUpdate(BaseModel):
    """Update reservation status request"""
    status: Optional[str] = None


class ReservationFilter(BaseModel):
    """Optional criteria narrowing a reservation listing"""
    status: Optional[str] = None
    room_type: Optional[str] = None
    date_from: Optional[date] = None
    date_to: Optional[date] = None

    @field_validator("*", mode="before")
    @classmethod
    def blank_is_absent(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value


class ReservationResponse(BaseModel):
    """Reservation response"""
    id: int
    guest_first_name: str
    guest_last_name: str
    email: str
    phone: str
    check_in_date: date
    check_out_date: date
    room_type: str
    occupant_count: int
    status: str
    created_at: datetime

    class Config:
        from_attributes = True


class ReservationCreatedResponse(BaseModel):
    message: str
    reservation: ReservationResponse
    timestamp: datetime


class ReservationUpdatedResponse(BaseModel):
    message: str
    reservation: ReservationResponse


class StatusCount(BaseModel):
    status: str
    total: int


class RoomTypeCount(BaseModel):
    room_type: str
    total: int


class StatisticsResponse(BaseModel):
    """Admin dashboard figures"""
    timestamp: datetime
    reservations_this_month: int
    by_status: List[StatusCount] = []
    by_room_type: List[RoomTypeCount] = []


class ErrorResponse(BaseModel):
    error: str
    timestamp: datetime
