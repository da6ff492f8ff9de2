"""Tests for the booking commit sequence."""

from __future__ import annotations

import threading
from datetime import date

import pytest
from django.test import SimpleTestCase

from apps.reservations.domain import (
    DetailsEntered,
    EmptyDraft,
    GuestDetails,
    NewRoomRestriction,
    RestrictionKind,
    Room,
    RoomChosen,
)
from apps.reservations.domain.errors import (
    ErrorCode,
    MissingDraftStateError,
    PartialCommitError,
    RoomNoLongerAvailableError,
    RoomNotFoundError,
    ValidationFailedError,
)
from apps.reservations.services import BookingService, guest_form
from apps.reservations.stores import InMemoryReservationStore
from shared.domain.value_objects import DateRange

GENERALS = Room(id=1, name="General's Quarters")
MAJORS = Room(id=2, name="Major's Suite")
DATES = DateRange(date(2050, 1, 1), date(2050, 1, 3))
GUEST = GuestDetails(first_name="John", last_name="Smith", email="john@example.com")


class RecordingNotifier:
    def __init__(self) -> None:
        self.jobs = []

    def enqueue(self, job) -> None:
        self.jobs.append(job)


class BrokenRestrictionStore(InMemoryReservationStore):
    def insert_room_restriction(self, restriction: NewRoomRestriction) -> int:
        raise RuntimeError("disk full")


class BookingServiceTests(SimpleTestCase):
    def setUp(self) -> None:
        self.store = InMemoryReservationStore(rooms=[GENERALS, MAJORS])
        self.notifier = RecordingNotifier()
        self.service = BookingService(self.store, self.notifier)

    def _draft(self, guest: GuestDetails = GUEST, room: Room = GENERALS) -> DetailsEntered:
        return DetailsEntered(dates=DATES, room=room, guest=guest)

    def test_commit_persists_reservation_and_restriction(self) -> None:
        reservation = self.service.commit(self._draft())

        self.assertEqual(reservation.room, GENERALS)
        self.assertEqual(reservation.guest, GUEST)
        self.assertEqual(reservation.dates, DATES)
        self.assertFalse(reservation.processed)

        [restriction] = self.store.restrictions
        self.assertEqual(restriction.reservation_id, reservation.id)
        self.assertEqual(restriction.kind, RestrictionKind.RESERVATION)
        self.assertEqual(restriction.dates, DATES)
        self.assertFalse(self.store.is_room_available(GENERALS.id, DATES))

    def test_commit_queues_guest_and_owner_notifications(self) -> None:
        self.service.commit(self._draft())

        subjects = [(job.recipient, job.subject) for job in self.notifier.jobs]
        self.assertEqual(
            subjects,
            [
                ("john@example.com", "Reservation Confirmation"),
                ("owner@example.com", "Reservation Notification"),
            ],
        )

    def test_second_commit_for_same_dates_is_refused(self) -> None:
        self.service.commit(self._draft())
        other_guest = GuestDetails(first_name="Jane", last_name="Doe", email="jane@example.com")

        with self.assertRaises(RoomNoLongerAvailableError) as ctx:
            self.service.commit(self._draft(guest=other_guest))

        self.assertEqual(ctx.exception.code, ErrorCode.ROOM_NO_LONGER_AVAILABLE)
        self.assertEqual(len(self.store.all_reservations()), 1)
        self.assertEqual(len(self.notifier.jobs), 2)

    def test_other_room_can_still_be_booked(self) -> None:
        self.service.commit(self._draft())
        reservation = self.service.commit(self._draft(room=MAJORS))
        self.assertEqual(reservation.room, MAJORS)

    def test_invalid_guest_details_touch_nothing(self) -> None:
        bad_guest = GuestDetails(first_name="J", last_name="", email="nope")

        with self.assertRaises(ValidationFailedError) as ctx:
            self.service.commit(self._draft(guest=bad_guest))

        errors = ctx.exception.errors
        self.assertEqual(set(errors), {"first_name", "last_name", "email"})
        self.assertEqual(self.store.all_reservations(), [])
        self.assertEqual(self.notifier.jobs, [])

    def test_missing_room(self) -> None:
        with self.assertRaises(RoomNotFoundError):
            self.service.commit(self._draft(room=Room(id=9, name="Attic")))
        self.assertEqual(self.store.all_reservations(), [])
        self.assertEqual(self.notifier.jobs, [])

    def test_draft_must_have_details(self) -> None:
        for draft in (EmptyDraft(), RoomChosen(dates=DATES, room=GENERALS)):
            with self.subTest(draft=draft):
                with self.assertRaises(MissingDraftStateError):
                    self.service.commit(draft)

    def test_failed_restriction_rolls_back_reservation(self) -> None:
        store = BrokenRestrictionStore(rooms=[GENERALS])
        service = BookingService(store, self.notifier)

        with self.assertRaises(PartialCommitError) as ctx:
            service.commit(self._draft())

        self.assertEqual(ctx.exception.reservation_id, 1)
        self.assertIsInstance(ctx.exception.__cause__, RuntimeError)
        self.assertEqual(store.all_reservations(), [])
        self.assertEqual(self.notifier.jobs, [])

    def test_validate_guest_strips_values(self) -> None:
        guest = self.service.validate_guest(
            {"first_name": " John ", "last_name": "Smith", "email": "john@example.com", "phone": " 555 "}
        )
        self.assertEqual(guest, GuestDetails("John", "Smith", "john@example.com", "555"))

    def test_concurrent_commits_book_the_room_once(self) -> None:
        guests = [
            GuestDetails(first_name=f"Guest{i}", last_name="Racer", email=f"guest{i}@example.com")
            for i in range(8)
        ]
        barrier = threading.Barrier(len(guests))
        outcomes: list[str] = []
        outcomes_lock = threading.Lock()

        def attempt(guest: GuestDetails) -> None:
            barrier.wait()
            try:
                self.service.commit(self._draft(guest=guest))
                result = "ok"
            except RoomNoLongerAvailableError:
                result = "taken"
            with outcomes_lock:
                outcomes.append(result)

        threads = [threading.Thread(target=attempt, args=(guest,)) for guest in guests]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        self.assertEqual(outcomes.count("ok"), 1)
        self.assertEqual(outcomes.count("taken"), len(guests) - 1)
        self.assertEqual(len(self.store.all_reservations()), 1)
        self.assertEqual(len(self.store.restrictions), 1)


@pytest.mark.parametrize("min_length, valid", [(3, False), (2, True)])
def test_name_min_length_follows_settings(settings, min_length: int, valid: bool) -> None:
    settings.BOOKING_NAME_MIN_LENGTH = min_length

    form = guest_form({"first_name": "Al", "last_name": "Ng", "email": "al@example.com"})

    assert form.valid() is valid
