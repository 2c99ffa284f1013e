"""Listing filters: turn optional criteria into query predicates"""

from typing import Optional

from sqlalchemy import Select

from hotelbook.models.reservation import Reservation
from hotelbook.schemas.reservation import ReservationFilter


def apply_filter(query: Select, criteria: Optional[ReservationFilter]) -> Select:
    """Narrow a reservation query by each supplied criterion.

    Status and room type match exactly; the date bounds select on
    check-in date and are both inclusive.
    """
    if criteria is None:
        return query

    if criteria.status:
        query = query.where(Reservation.status == criteria.status)

    if criteria.room_type:
        query = query.where(Reservation.room_type == criteria.room_type)

    if criteria.date_from:
        query = query.where(Reservation.check_in_date >= criteria.date_from)

    if criteria.date_to:
        query = query.where(Reservation.check_in_date <= criteria.date_to)

    return query
