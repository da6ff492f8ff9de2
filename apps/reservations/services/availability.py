"""Availability queries over room restrictions."""

from __future__ import annotations

from apps.reservations.domain import Room
from apps.reservations.domain.errors import RoomNotFoundError
from apps.reservations.stores.interfaces import ReservationStore
from shared.domain.value_objects import DateRange


class AvailabilityService:
    """Service for room search and availability checks."""

    def __init__(self, store: ReservationStore) -> None:
        self._store = store

    def rooms_available(self, dates: DateRange) -> list[Room]:
        """Return every room free for the whole of ``dates``."""
        return self._store.rooms_available(dates)

    def is_room_available(self, room_id: int, dates: DateRange) -> bool:
        return self._store.is_room_available(room_id, dates)

    def get_room(self, room_id: int) -> Room:
        """Return a room by ID.

        Raises:
            RoomNotFoundError: If the room does not exist.
        """
        room = self._store.get_room(room_id)
        if room is None:
            raise RoomNotFoundError(room_id)
        return room
