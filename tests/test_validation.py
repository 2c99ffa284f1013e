"""Tests for the reservation rules"""

from datetime import date

import pytest

from hotelbook.exceptions import ValidationError
from hotelbook.schemas.reservation import ReservationCreate
from hotelbook.services.validation import (
    EMAIL_PATTERN,
    REQUIRED_FIELDS,
    validate_new_reservation,
    validate_status_value,
)

TODAY = date(2025, 1, 1)


def make_payload(**overrides) -> ReservationCreate:
    data = {
        "guest_first_name": "Ana",
        "guest_last_name": "Restrepo",
        "email": "ana@example.com",
        "phone": "+573001112233",
        "check_in_date": "2025-01-10",
        "check_out_date": "2025-01-12",
        "room_type": "double",
        "occupant_count": 2,
    }
    data.update(overrides)
    return ReservationCreate(**data)


def test_valid_request_is_typed_and_trimmed():
    new = validate_new_reservation(
        make_payload(guest_first_name="  Ana ", email=" ana@example.com ", occupant_count="3"),
        today=TODAY,
    )

    assert new.guest_first_name == "Ana"
    assert new.email == "ana@example.com"
    assert new.check_in_date == date(2025, 1, 10)
    assert new.check_out_date == date(2025, 1, 12)
    assert new.occupant_count == 3


@pytest.mark.parametrize("field", REQUIRED_FIELDS)
@pytest.mark.parametrize("missing", [None, "", "   "])
def test_missing_field_is_rejected(field, missing):
    with pytest.raises(ValidationError) as exc_info:
        validate_new_reservation(make_payload(**{field: missing}), today=TODAY)

    assert exc_info.value.reason == "all fields are required"


@pytest.mark.parametrize("email", [
    "ana.example.com",
    "ana@example",
    "ana@@example.com",
    "ana @example.com",
    "@example.com",
    "ana@.com",
])
def test_malformed_email_is_rejected(email):
    with pytest.raises(ValidationError) as exc_info:
        validate_new_reservation(make_payload(email=email), today=TODAY)

    assert exc_info.value.reason == "invalid email address"


def test_email_pattern_accepts_subdomains():
    assert EMAIL_PATTERN.match("guest.name@mail.hotel.co")


def test_check_in_today_is_allowed():
    new = validate_new_reservation(
        make_payload(check_in_date="2025-01-01", check_out_date="2025-01-02"),
        today=TODAY,
    )
    assert new.check_in_date == TODAY


def test_check_in_in_the_past_is_rejected():
    with pytest.raises(ValidationError) as exc_info:
        validate_new_reservation(
            make_payload(check_in_date="2024-12-31", check_out_date="2025-01-02"),
            today=TODAY,
        )

    assert exc_info.value.reason == "check-in date cannot be earlier than today"


def test_checkout_before_checkin_is_rejected():
    with pytest.raises(ValidationError) as exc_info:
        validate_new_reservation(
            make_payload(check_in_date="2025-01-10", check_out_date="2025-01-09"),
            today=TODAY,
        )

    assert exc_info.value.reason == "checkout must be after checkin"


def test_same_day_checkout_is_rejected():
    with pytest.raises(ValidationError) as exc_info:
        validate_new_reservation(
            make_payload(check_in_date="2025-01-10", check_out_date="2025-01-10"),
            today=TODAY,
        )

    assert exc_info.value.reason == "checkout must be after checkin"


@pytest.mark.parametrize("field,value,reason", [
    ("check_in_date", "10/01/2025", "invalid check-in date"),
    ("check_in_date", "2025-02-30", "invalid check-in date"),
    ("check_out_date", "tomorrow", "invalid check-out date"),
])
def test_unparseable_dates_are_rejected(field, value, reason):
    with pytest.raises(ValidationError) as exc_info:
        validate_new_reservation(make_payload(**{field: value}), today=TODAY)

    assert exc_info.value.reason == reason


@pytest.mark.parametrize("count", [0, -1, "0", "-2", "two", "1.5", "+-5", "--3", "-+2", True, False])
def test_non_positive_occupant_count_is_rejected(count):
    with pytest.raises(ValidationError) as exc_info:
        validate_new_reservation(make_payload(occupant_count=count), today=TODAY)

    assert exc_info.value.reason == "occupant count must be a positive integer"


def test_large_occupant_count_is_accepted():
    new = validate_new_reservation(make_payload(occupant_count=40), today=TODAY)
    assert new.occupant_count == 40


def test_first_failure_wins():
    # Bad email and past dates: the email check runs first
    with pytest.raises(ValidationError) as exc_info:
        validate_new_reservation(
            make_payload(email="nope", check_in_date="2020-01-01"),
            today=TODAY,
        )

    assert exc_info.value.reason == "invalid email address"


def test_any_room_type_is_accepted():
    new = validate_new_reservation(make_payload(room_type="treehouse"), today=TODAY)
    assert new.room_type == "treehouse"


def test_status_value_is_required():
    with pytest.raises(ValidationError) as exc_info:
        validate_status_value("  ")

    assert exc_info.value.reason == "status is required"
    assert validate_status_value(" completed ") == "completed"


def test_boolean_occupant_count_reaches_the_rules():
    payload = make_payload(occupant_count=True)

    assert payload.occupant_count is True
    with pytest.raises(ValidationError):
        validate_new_reservation(payload, today=TODAY)
