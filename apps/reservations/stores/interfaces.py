"""Store interfaces (repository pattern).

Stores must be swappable and return domain models.
"""

from abc import ABC, abstractmethod

from apps.reservations.domain import NewReservation, NewRoomRestriction, Reservation, Room
from shared.application.uow import AbstractUnitOfWork
from shared.domain.value_objects import DateRange


class ReservationStore(ABC):
    """Interface for room availability and reservation persistence.

    Availability queries take a DateRange, so an empty or reversed range
    can never reach the store.
    """

    # ----- Availability -----

    @abstractmethod
    def get_room(self, room_id: int) -> Room | None:
        """Return a room by ID, or None if not found."""
        ...

    @abstractmethod
    def list_rooms(self) -> list[Room]:
        """Return all rooms ordered by id."""
        ...

    @abstractmethod
    def rooms_available(self, dates: DateRange) -> list[Room]:
        """Return rooms with no restriction overlapping ``dates``, ordered by id."""
        ...

    @abstractmethod
    def is_room_available(self, room_id: int, dates: DateRange) -> bool:
        """Check that no restriction of ``room_id`` overlaps ``dates``."""
        ...

    # ----- Writes -----

    @abstractmethod
    def unit_of_work(self) -> AbstractUnitOfWork:
        """Return a scoped transaction for a group of writes."""
        ...

    @abstractmethod
    def insert_reservation(self, reservation: NewReservation) -> int:
        """Insert a reservation row and return its new id."""
        ...

    @abstractmethod
    def insert_room_restriction(self, restriction: NewRoomRestriction) -> int:
        """Insert a restriction row and return its new id."""
        ...

    # ----- Back office -----

    @abstractmethod
    def all_reservations(self) -> list[Reservation]:
        ...

    @abstractmethod
    def new_reservations(self) -> list[Reservation]:
        """Reservations not yet marked as processed."""
        ...

    @abstractmethod
    def get_reservation(self, reservation_id: int) -> Reservation | None:
        ...

    @abstractmethod
    def mark_processed(self, reservation_id: int, processed: bool = True) -> bool:
        """Return False if the reservation does not exist."""
        ...
