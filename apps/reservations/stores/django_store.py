"""Django ORM implementation of the ReservationStore."""

from __future__ import annotations

from django.db import transaction  # type: ignore
from django.db.models import Q  # type: ignore
from django.db.utils import NotSupportedError  # type: ignore

from apps.reservations.domain import (
    GuestDetails,
    NewReservation,
    NewRoomRestriction,
    Reservation,
    Room,
)
from apps.reservations.models import Reservation as ReservationModel
from apps.reservations.stores.interfaces import ReservationStore
from apps.rooms.models import Room as RoomModel
from apps.rooms.models import RoomRestriction as RoomRestrictionModel
from shared.application.uow import DjangoUnitOfWork
from shared.domain.value_objects import DateRange


def _lock_queryset_if_possible(queryset):
    """Apply select_for_update when inside transaction.atomic()."""

    if not transaction.get_connection(queryset.db).in_atomic_block:
        return queryset

    try:
        return queryset.select_for_update()
    except NotSupportedError:
        return queryset


def _overlapping(dates: DateRange) -> Q:
    return Q(start_date__lt=dates.end_date) & Q(end_date__gt=dates.start_date)


def _to_room(obj: RoomModel) -> Room:
    return Room(id=obj.pk, name=obj.room_name)


def _to_reservation(obj: ReservationModel) -> Reservation:
    return Reservation(
        id=obj.pk,
        guest=GuestDetails(
            first_name=obj.first_name,
            last_name=obj.last_name,
            email=obj.email,
            phone=obj.phone,
        ),
        room=_to_room(obj.room),
        dates=DateRange(obj.start_date, obj.end_date),
        created_at=obj.created_at,
        processed=obj.processed,
    )


class DjangoReservationStore(ReservationStore):
    """SQL-backed store using the Django ORM."""

    def __init__(self, using: str | None = None) -> None:
        self._using = using

    def _rooms(self):
        return RoomModel.objects.using(self._using)

    def _restrictions(self):
        return RoomRestrictionModel.objects.using(self._using)

    def _reservations(self):
        return ReservationModel.objects.using(self._using)

    def get_room(self, room_id: int) -> Room | None:
        # Locks the room row when called inside a unit of work so that two
        # commits for the same room are serialized by the database.
        room = _lock_queryset_if_possible(self._rooms().filter(pk=room_id)).first()
        return _to_room(room) if room else None

    def list_rooms(self) -> list[Room]:
        return [_to_room(room) for room in self._rooms().order_by("id")]

    def rooms_available(self, dates: DateRange) -> list[Room]:
        busy_room_ids = self._restrictions().filter(_overlapping(dates)).values("room_id")
        rooms = self._rooms().exclude(pk__in=busy_room_ids).order_by("id")
        return [_to_room(room) for room in rooms]

    def is_room_available(self, room_id: int, dates: DateRange) -> bool:
        return not self._restrictions().filter(room_id=room_id).filter(_overlapping(dates)).exists()

    def unit_of_work(self) -> DjangoUnitOfWork:
        return DjangoUnitOfWork(using=self._using)

    def insert_reservation(self, reservation: NewReservation) -> int:
        obj = self._reservations().create(
            first_name=reservation.guest.first_name,
            last_name=reservation.guest.last_name,
            email=reservation.guest.email,
            phone=reservation.guest.phone,
            room_id=reservation.room_id,
            start_date=reservation.dates.start_date,
            end_date=reservation.dates.end_date,
        )
        return obj.pk

    def insert_room_restriction(self, restriction: NewRoomRestriction) -> int:
        obj = self._restrictions().create(
            room_id=restriction.room_id,
            start_date=restriction.dates.start_date,
            end_date=restriction.dates.end_date,
            reservation_id=restriction.reservation_id,
            kind=restriction.kind.value,
        )
        return obj.pk

    def all_reservations(self) -> list[Reservation]:
        qs = self._reservations().select_related("room").order_by("start_date", "id")
        return [_to_reservation(obj) for obj in qs]

    def new_reservations(self) -> list[Reservation]:
        qs = (
            self._reservations()
            .filter(processed=False)
            .select_related("room")
            .order_by("start_date", "id")
        )
        return [_to_reservation(obj) for obj in qs]

    def get_reservation(self, reservation_id: int) -> Reservation | None:
        obj = self._reservations().select_related("room").filter(pk=reservation_id).first()
        return _to_reservation(obj) if obj else None

    def mark_processed(self, reservation_id: int, processed: bool = True) -> bool:
        updated = self._reservations().filter(pk=reservation_id).update(processed=processed)
        return updated > 0
