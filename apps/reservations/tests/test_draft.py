"""Tests for draft reservation transitions and session round-trips."""

from __future__ import annotations

from datetime import date

from django.contrib.sessions.backends.signed_cookies import SessionStore
from django.test import SimpleTestCase

from apps.reservations.domain import (
    Committed,
    DatesChosen,
    DetailsEntered,
    EmptyDraft,
    GuestDetails,
    Room,
    RoomChosen,
)
from apps.reservations.domain import draft as drafts
from apps.reservations.domain.errors import MissingDraftStateError
from apps.reservations.drafts import DraftSession
from shared.domain.value_objects import DateRange

DATES = DateRange(date(2050, 1, 1), date(2050, 1, 3))
ROOM = Room(id=1, name="General's Quarters")
GUEST = GuestDetails(first_name="John", last_name="Smith", email="john@example.com")


class DraftTransitionTests(SimpleTestCase):
    def test_happy_path(self) -> None:
        draft = drafts.choose_dates(EmptyDraft(), DATES)
        self.assertIsInstance(draft, DatesChosen)

        draft = drafts.choose_room(draft, ROOM)
        self.assertIsInstance(draft, RoomChosen)
        self.assertEqual(draft.dates, DATES)

        draft = drafts.enter_details(draft, GUEST)
        self.assertIsInstance(draft, DetailsEntered)

        draft = drafts.commit_draft(draft, 42)
        self.assertIsInstance(draft, Committed)
        self.assertEqual(draft.reservation_id, 42)
        self.assertEqual(draft.guest, GUEST)

    def test_choose_room_without_dates_is_rejected(self) -> None:
        with self.assertRaises(MissingDraftStateError) as ctx:
            drafts.choose_room(EmptyDraft(), ROOM)
        self.assertEqual(ctx.exception.message, "Can't get reservation from session")
        self.assertEqual(ctx.exception.state, "empty")

    def test_enter_details_requires_a_room(self) -> None:
        with self.assertRaises(MissingDraftStateError):
            drafts.enter_details(DatesChosen(dates=DATES), GUEST)

    def test_commit_requires_details(self) -> None:
        with self.assertRaises(MissingDraftStateError):
            drafts.commit_draft(RoomChosen(dates=DATES, room=ROOM), 1)

    def test_new_search_replaces_draft(self) -> None:
        other = DateRange(date(2050, 2, 1), date(2050, 2, 2))
        draft = drafts.choose_dates(DetailsEntered(dates=DATES, room=ROOM, guest=GUEST), other)
        self.assertEqual(draft, DatesChosen(dates=other))

    def test_changing_room_keeps_guest_details(self) -> None:
        other_room = Room(id=2, name="Major's Suite")
        draft = drafts.choose_room(DetailsEntered(dates=DATES, room=ROOM, guest=GUEST), other_room)
        self.assertEqual(draft, DetailsEntered(dates=DATES, room=other_room, guest=GUEST))

    def test_book_room_starts_from_any_state(self) -> None:
        draft = drafts.book_room(Committed(7, DATES, ROOM, GUEST), ROOM, DATES)
        self.assertEqual(draft, RoomChosen(dates=DATES, room=ROOM))


class DraftSerializationTests(SimpleTestCase):
    def test_every_state_survives_a_round_trip(self) -> None:
        for draft in (
            EmptyDraft(),
            DatesChosen(dates=DATES),
            RoomChosen(dates=DATES, room=ROOM),
            DetailsEntered(dates=DATES, room=ROOM, guest=GUEST),
            Committed(reservation_id=3, dates=DATES, room=ROOM, guest=GUEST),
        ):
            with self.subTest(state=draft.state):
                self.assertEqual(drafts.load_draft(drafts.dump_draft(draft)), draft)

    def test_missing_payload_is_empty(self) -> None:
        self.assertEqual(drafts.load_draft(None), EmptyDraft())
        self.assertEqual(drafts.load_draft({}), EmptyDraft())

    def test_malformed_payloads_raise(self) -> None:
        for payload in (
            {"state": "teleported"},
            {"state": "room_chosen", "start_date": "2050-01-01", "end_date": "2050-01-03"},
            {"state": "dates_chosen", "start_date": "2050-01-03", "end_date": "2050-01-01"},
            {"state": "dates_chosen", "start_date": 1, "end_date": "2050-01-02"},
            {"state": "details_entered", "start_date": "2050-01-01", "end_date": "2050-01-03", "room_id": 1, "guest": "John"},
            "not-a-dict",
        ):
            with self.subTest(payload=payload):
                with self.assertRaises(ValueError):
                    drafts.load_draft(payload)


class DraftSessionTests(SimpleTestCase):
    def test_save_and_load(self) -> None:
        session = SessionStore()
        store = DraftSession(session)

        store.save(RoomChosen(dates=DATES, room=ROOM))

        self.assertEqual(DraftSession(session).load(), RoomChosen(dates=DATES, room=ROOM))

    def test_unreadable_draft_is_discarded(self) -> None:
        for payload in (
            {"state": "room_chosen"},
            {"state": "dates_chosen", "start_date": 1, "end_date": "2050-01-02"},
        ):
            with self.subTest(payload=payload):
                session = SessionStore()
                session["reservation"] = payload

                self.assertEqual(DraftSession(session).load(), EmptyDraft())
                self.assertNotIn("reservation", session)

    def test_saving_empty_clears_slot(self) -> None:
        session = SessionStore()
        store = DraftSession(session)
        store.save(DatesChosen(dates=DATES))

        store.save(EmptyDraft())

        self.assertNotIn("reservation", session)
