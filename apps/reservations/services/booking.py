"""
Booking commit sequence.

Turns a completed draft into a persisted reservation plus the room
restriction that blocks its dates, then queues the guest confirmation
and the owner notice.

Gates, in order:
1. Guest details pass the form checks (no storage access otherwise)
2. The room still exists
3. The room is still free for the dates
4. Reservation and restriction are inserted in one unit of work
5. Notifications are queued after the unit of work has committed
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Protocol

from django.conf import settings  # type: ignore

from apps.notifications.jobs import (
    NotificationJob,
    build_guest_confirmation,
    build_owner_notice,
)
from apps.reservations.domain import (
    DetailsEntered,
    Draft,
    GuestDetails,
    NewReservation,
    NewRoomRestriction,
    Reservation,
    RestrictionKind,
)
from apps.reservations.domain.draft import require
from apps.reservations.domain.errors import (
    PartialCommitError,
    RoomNoLongerAvailableError,
    RoomNotFoundError,
    ValidationFailedError,
)
from apps.reservations.stores.interfaces import ReservationStore
from shared.application.forms import Form

logger = logging.getLogger(__name__)

GUEST_FIELDS = ("first_name", "last_name", "email", "phone")


class Notifier(Protocol):
    def enqueue(self, job: NotificationJob) -> None:
        ...


def guest_form(data: Mapping[str, str]) -> Form:
    """Run the guest detail checks over submitted data."""
    min_length = getattr(settings, "BOOKING_NAME_MIN_LENGTH", 3)
    form = Form(data)
    form.required("first_name", "last_name", "email")
    form.min_length("first_name", min_length)
    form.min_length("last_name", min_length)
    form.is_email("email")
    return form


class BookingService:
    """Service for validating guest details and committing drafts."""

    def __init__(self, store: ReservationStore, notifier: Notifier) -> None:
        self._store = store
        self._notifier = notifier

    def validate_guest(self, data: Mapping[str, str]) -> GuestDetails:
        """Return cleaned guest details.

        Raises:
            ValidationFailedError: With every field error found.
        """
        form = guest_form(data)
        if not form.valid():
            raise ValidationFailedError(form)
        return GuestDetails(**{field: form.value(field) for field in GUEST_FIELDS})

    def commit(self, draft: Draft) -> Reservation:
        """
        Persist a draft with guest details entered.

        Returns: the committed Reservation

        Raises:
            MissingDraftStateError: If the draft is not in DetailsEntered state
            ValidationFailedError: If the guest details do not pass the form checks
            RoomNotFoundError: If the room no longer exists
            RoomNoLongerAvailableError: If the dates were taken since the search
            PartialCommitError: If the restriction insert failed after the reservation insert
        """
        draft = require(draft, "commit", DetailsEntered)

        # Re-validates whatever the session carried, not just fresh POST data
        self.validate_guest({field: getattr(draft.guest, field) for field in GUEST_FIELDS})

        logger.info(
            f"Committing reservation for room {draft.room.id}, "
            f"guest {draft.guest.email}, dates {draft.dates}"
        )

        with self._store.unit_of_work():
            room = self._store.get_room(draft.room.id)
            if room is None:
                raise RoomNotFoundError(draft.room.id)

            if not self._store.is_room_available(room.id, draft.dates):
                raise RoomNoLongerAvailableError(room.id, draft.dates)

            reservation_id = self._store.insert_reservation(
                NewReservation(guest=draft.guest, room_id=room.id, dates=draft.dates)
            )
            try:
                self._store.insert_room_restriction(
                    NewRoomRestriction(
                        room_id=room.id,
                        dates=draft.dates,
                        kind=RestrictionKind.RESERVATION,
                        reservation_id=reservation_id,
                    )
                )
            except Exception as exc:
                logger.error(
                    f"Restriction insert failed for reservation {reservation_id} "
                    f"(room {room.id}, {draft.dates}); rolling back",
                    exc_info=True,
                )
                raise PartialCommitError(reservation_id) from exc

            reservation = self._store.get_reservation(reservation_id)

        logger.info(f"Reservation {reservation_id} committed for room {room.id}")

        self._notifier.enqueue(build_guest_confirmation(reservation))
        self._notifier.enqueue(build_owner_notice(reservation))

        return reservation
