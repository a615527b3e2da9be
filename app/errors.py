"""Errors raised by the scheduling engine.

Each error carries the HTTP status the API layer should answer with.
"""


class SchedulerError(Exception):
    """Base class for scheduling failures reported to the caller."""

    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(SchedulerError):
    """Missing or malformed input. No state was changed."""

    status_code = 400


class ConflictError(SchedulerError):
    """The requested slot is not available (unknown or already booked)."""

    status_code = 409


class NotFoundError(SchedulerError):
    """No meeting with the given ID."""

    status_code = 404
