"""Domain models for the booking workflow.

These are plain objects with no persistence concerns.
Django ORM models live in apps/rooms/models.py and apps/reservations/models.py.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from shared.domain.value_objects import DateRange


class RestrictionKind(Enum):
    RESERVATION = "reservation"
    OWNER_BLOCK = "owner_block"


@dataclass(frozen=True)
class Room:
    """Domain representation of a Room."""

    id: int
    name: str


@dataclass(frozen=True)
class GuestDetails:
    """Contact details submitted by the guest."""

    first_name: str
    last_name: str
    email: str
    phone: str = ""

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


@dataclass(frozen=True)
class NewReservation:
    """A reservation about to be inserted; storage assigns the id."""

    guest: GuestDetails
    room_id: int
    dates: DateRange


@dataclass(frozen=True)
class NewRoomRestriction:
    room_id: int
    dates: DateRange
    kind: RestrictionKind = RestrictionKind.RESERVATION
    reservation_id: int | None = None


@dataclass(frozen=True)
class Reservation:
    """Domain representation of a committed Reservation."""

    id: int
    guest: GuestDetails
    room: Room
    dates: DateRange
    created_at: datetime
    processed: bool = False
