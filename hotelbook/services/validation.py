"""Reservation rules: decide whether a booking request is well-formed.

Checks run in a fixed order and the first failure wins:

1. all eight fields present and non-empty (text fields trimmed)
2. email shaped like ``local@domain.tld``
3. check-in is a valid date, not earlier than today
4. check-out is a valid date, strictly after check-in
5. occupant count is a positive integer

Room types are free-form and there is no capacity or overlap check.
"""

import re
from datetime import date, datetime
from typing import Optional
from zoneinfo import ZoneInfo

from hotelbook.exceptions import ValidationError
from hotelbook.schemas.reservation import ReservationCreate, NewReservation

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.\S+$")
OCCUPANT_PATTERN = re.compile(r"[+-]?\d+")

TEXT_FIELDS = ("guest_first_name", "guest_last_name", "email", "phone", "room_type")
REQUIRED_FIELDS = TEXT_FIELDS + ("check_in_date", "check_out_date", "occupant_count")


def local_today(tz_name: str = "") -> date:
    """Current date in the hotel's timezone, or the server's when unset"""
    if tz_name:
        return datetime.now(ZoneInfo(tz_name)).date()
    return date.today()


def _is_blank(value) -> bool:
    if value is None:
        return True
    return isinstance(value, str) and not value.strip()


def _parse_date(value, reason: str) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(value.strip())
    except (AttributeError, ValueError):
        raise ValidationError(reason)


def _parse_occupants(value) -> int:
    reason = "occupant count must be a positive integer"
    if isinstance(value, bool):
        raise ValidationError(reason)
    if isinstance(value, int):
        count = value
    elif isinstance(value, str) and OCCUPANT_PATTERN.fullmatch(value.strip()):
        count = int(value.strip())
    else:
        raise ValidationError(reason)
    if count <= 0:
        raise ValidationError(reason)
    return count


def validate_new_reservation(payload: ReservationCreate, today: Optional[date] = None) -> NewReservation:
    """Validate a booking request and return the typed reservation to store.

    Raises ValidationError with the reason of the first failed check.
    """
    if today is None:
        today = local_today()

    for name in REQUIRED_FIELDS:
        if _is_blank(getattr(payload, name)):
            raise ValidationError("all fields are required")

    email = payload.email.strip()
    if not EMAIL_PATTERN.match(email):
        raise ValidationError("invalid email address")

    check_in = _parse_date(payload.check_in_date, "invalid check-in date")
    if check_in < today:
        raise ValidationError("check-in date cannot be earlier than today")

    check_out = _parse_date(payload.check_out_date, "invalid check-out date")
    if check_out <= check_in:
        raise ValidationError("checkout must be after checkin")

    occupants = _parse_occupants(payload.occupant_count)

    return NewReservation(
        guest_first_name=payload.guest_first_name.strip(),
        guest_last_name=payload.guest_last_name.strip(),
        email=email,
        phone=payload.phone.strip(),
        check_in_date=check_in,
        check_out_date=check_out,
        room_type=payload.room_type.strip(),
        occupant_count=occupants,
    )


def validate_status_value(value: Optional[str]) -> str:
    """A status change must name its target status"""
    if _is_blank(value):
        raise ValidationError("status is required")
    return value.strip()
