"""Error taxonomy for the reservation service.

Every error carries the HTTP status code it maps to at the API boundary and
a human-readable ``reason``.
"""


class ReservationServiceError(Exception):
    """Base exception for all reservation service errors."""
    status_code = 500

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason


class ValidationError(ReservationServiceError):
    """Raised when a request is malformed or violates a reservation rule."""
    status_code = 400


class NotFound(ReservationServiceError):
    """Raised when no reservation has the requested id."""
    status_code = 404

    def __init__(self, reservation_id: int):
        super().__init__(f"reservation {reservation_id} not found")
        self.reservation_id = reservation_id


class InvalidTransition(ReservationServiceError):
    """Raised when a status change is not allowed by the transition table."""
    status_code = 409

    def __init__(self, current: str, target: str):
        super().__init__(f"cannot change status from {current} to {target}")
        self.current = current
        self.target = target


class StoreUnavailable(ReservationServiceError):
    """Raised when the backing database cannot be reached."""
    status_code = 503

    def __init__(self, detail: str = ""):
        reason = "database unavailable"
        if detail:
            reason = f"{reason}: {detail}"
        super().__init__(reason)


class StoreOperationFailed(ReservationServiceError):
    """Raised when a persistence call fails for any other reason."""
    status_code = 500
