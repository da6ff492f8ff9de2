"""Domain error codes for the booking workflow."""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover
    from shared.application.forms import Form
    from shared.domain.value_objects import DateRange


class ErrorCode(Enum):
    """Domain error codes."""

    VALIDATION_FAILED = "VALIDATION_FAILED"
    MISSING_DRAFT_STATE = "MISSING_DRAFT_STATE"
    ROOM_NOT_FOUND = "ROOM_NOT_FOUND"
    ROOM_NO_LONGER_AVAILABLE = "ROOM_NO_LONGER_AVAILABLE"
    PARTIAL_COMMIT = "PARTIAL_COMMIT"


class BookingError(Exception):
    """Base booking error with code and user-safe message."""

    def __init__(self, code: ErrorCode, message: str) -> None:
        super().__init__(message)
        self.code = code
        self.message = message

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


class ValidationFailedError(BookingError):
    """Raised when submitted guest details fail the form checks."""

    def __init__(self, form: "Form") -> None:
        super().__init__(
            code=ErrorCode.VALIDATION_FAILED,
            message="Please correct the highlighted fields",
        )
        self.form = form

    @property
    def errors(self) -> dict[str, list[str]]:
        return self.form.errors


class MissingDraftStateError(BookingError):
    """Raised when a step runs without the draft state it depends on."""

    def __init__(self, step: str = "", state: str = "") -> None:
        super().__init__(
            code=ErrorCode.MISSING_DRAFT_STATE,
            message="Can't get reservation from session",
        )
        self.step = step
        self.state = state


class RoomNotFoundError(BookingError):
    """Raised when the room referenced by a draft does not exist."""

    def __init__(self, room_id: int | None) -> None:
        super().__init__(
            code=ErrorCode.ROOM_NOT_FOUND,
            message="Can't find room",
        )
        self.room_id = room_id


class RoomNoLongerAvailableError(BookingError):
    """Raised when the room was booked by someone else after the search."""

    def __init__(self, room_id: int, dates: "DateRange") -> None:
        super().__init__(
            code=ErrorCode.ROOM_NO_LONGER_AVAILABLE,
            message="Sorry, this room is no longer available for the selected dates",
        )
        self.room_id = room_id
        self.dates = dates


class PartialCommitError(BookingError):
    """
    Raised when the reservation row was written but its restriction was not.

    The transaction is rolled back before this is raised. It is never shown
    to the guest as a recoverable problem.
    """

    def __init__(self, reservation_id: int | None) -> None:
        super().__init__(
            code=ErrorCode.PARTIAL_COMMIT,
            message="Reservation could not be stored consistently",
        )
        self.reservation_id = reservation_id
