"""In-memory implementation of the ReservationStore.

Deterministic and dependency-free; used as the storage double in service
tests. The store lock plays the part of the database: a unit of work holds
it for its whole duration and restores a snapshot on rollback.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Iterable

from apps.reservations.domain import (
    NewReservation,
    NewRoomRestriction,
    Reservation,
    RestrictionKind,
    Room,
)
from apps.reservations.stores.interfaces import ReservationStore
from shared.application.uow import AbstractUnitOfWork
from shared.domain.value_objects import DateRange


@dataclass(frozen=True)
class StoredRestriction:
    id: int
    room_id: int
    dates: DateRange
    kind: RestrictionKind
    reservation_id: int | None


class InMemoryUnitOfWork(AbstractUnitOfWork):
    def __init__(self, store: "InMemoryReservationStore") -> None:
        self._store = store
        self._snapshot = None
        self.committed = False

    def __enter__(self):
        self._store._lock.acquire()
        self._snapshot = self._store._snapshot()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        try:
            super().__exit__(exc_type, exc_val, exc_tb)
        finally:
            self._snapshot = None
            self._store._lock.release()

    def commit(self):
        self.committed = True

    def rollback(self):
        self._store._restore(self._snapshot)
        self.committed = False


class InMemoryReservationStore(ReservationStore):
    def __init__(self, rooms: Iterable[Room] = ()) -> None:
        self._lock = threading.RLock()
        self._rooms: dict[int, Room] = {room.id: room for room in rooms}
        self._reservations: dict[int, Reservation] = {}
        self._restrictions: dict[int, StoredRestriction] = {}
        self._next_reservation_id = 1
        self._next_restriction_id = 1

    # ----- helpers -----

    def _snapshot(self):
        return (
            dict(self._reservations),
            dict(self._restrictions),
            self._next_reservation_id,
            self._next_restriction_id,
        )

    def _restore(self, snapshot) -> None:
        (
            self._reservations,
            self._restrictions,
            self._next_reservation_id,
            self._next_restriction_id,
        ) = snapshot

    def _busy_room_ids(self, dates: DateRange) -> set[int]:
        return {
            restriction.room_id
            for restriction in self._restrictions.values()
            if restriction.dates.overlaps_with(dates)
        }

    @property
    def restrictions(self) -> list[StoredRestriction]:
        with self._lock:
            return list(self._restrictions.values())

    # ----- Availability -----

    def get_room(self, room_id: int) -> Room | None:
        with self._lock:
            return self._rooms.get(room_id)

    def list_rooms(self) -> list[Room]:
        with self._lock:
            return [self._rooms[room_id] for room_id in sorted(self._rooms)]

    def rooms_available(self, dates: DateRange) -> list[Room]:
        with self._lock:
            busy = self._busy_room_ids(dates)
            return [self._rooms[room_id] for room_id in sorted(self._rooms) if room_id not in busy]

    def is_room_available(self, room_id: int, dates: DateRange) -> bool:
        with self._lock:
            return room_id not in self._busy_room_ids(dates)

    # ----- Writes -----

    def unit_of_work(self) -> InMemoryUnitOfWork:
        return InMemoryUnitOfWork(self)

    def insert_reservation(self, reservation: NewReservation) -> int:
        with self._lock:
            room = self._rooms.get(reservation.room_id)
            if room is None:
                raise LookupError(f"Room {reservation.room_id} does not exist")
            reservation_id = self._next_reservation_id
            self._next_reservation_id += 1
            self._reservations[reservation_id] = Reservation(
                id=reservation_id,
                guest=reservation.guest,
                room=room,
                dates=reservation.dates,
                created_at=datetime.now(),
            )
            return reservation_id

    def insert_room_restriction(self, restriction: NewRoomRestriction) -> int:
        with self._lock:
            if restriction.room_id not in self._rooms:
                raise LookupError(f"Room {restriction.room_id} does not exist")
            restriction_id = self._next_restriction_id
            self._next_restriction_id += 1
            self._restrictions[restriction_id] = StoredRestriction(
                id=restriction_id,
                room_id=restriction.room_id,
                dates=restriction.dates,
                kind=restriction.kind,
                reservation_id=restriction.reservation_id,
            )
            return restriction_id

    # ----- Back office -----

    def all_reservations(self) -> list[Reservation]:
        with self._lock:
            return sorted(self._reservations.values(), key=lambda r: (r.dates.start_date, r.id))

    def new_reservations(self) -> list[Reservation]:
        return [r for r in self.all_reservations() if not r.processed]

    def get_reservation(self, reservation_id: int) -> Reservation | None:
        with self._lock:
            return self._reservations.get(reservation_id)

    def mark_processed(self, reservation_id: int, processed: bool = True) -> bool:
        with self._lock:
            reservation = self._reservations.get(reservation_id)
            if reservation is None:
                return False
            self._reservations[reservation_id] = replace(reservation, processed=processed)
            return True
