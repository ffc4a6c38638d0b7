"""Domain errors raised by the stores and services.

Storage failures are not wrapped: ``sqlalchemy.exc.SQLAlchemyError`` propagates
to the caller unchanged and is reported as an internal error.
"""


class ExpenseTrackerError(Exception):
    """Base class for domain errors."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(ExpenseTrackerError):
    """A session, expense or user lookup found nothing (expired sessions included)."""


class InvalidError(ExpenseTrackerError):
    """Malformed or missing input."""


class ConflictError(ExpenseTrackerError):
    """A uniqueness rule would be violated, e.g. a duplicate username."""
