"""
Draft reservation state machine.

A draft is carried in the visitor's session across several independent
requests. Each variant holds only the fields that are valid in that
state:

    EmptyDraft -> DatesChosen -> RoomChosen -> DetailsEntered -> Committed

Transitions are plain functions returning a new draft. A transition
invoked from a state it does not accept raises MissingDraftStateError,
which handlers answer with a redirect to the search page.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar, Union

from shared.domain.value_objects import DateRange

from .errors import MissingDraftStateError
from .models import GuestDetails, Room


class DraftState(Enum):
    EMPTY = "empty"
    DATES_CHOSEN = "dates_chosen"
    ROOM_CHOSEN = "room_chosen"
    DETAILS_ENTERED = "details_entered"
    COMMITTED = "committed"


@dataclass(frozen=True)
class EmptyDraft:
    state: ClassVar[DraftState] = DraftState.EMPTY


@dataclass(frozen=True)
class DatesChosen:
    dates: DateRange

    state: ClassVar[DraftState] = DraftState.DATES_CHOSEN


@dataclass(frozen=True)
class RoomChosen:
    dates: DateRange
    room: Room

    state: ClassVar[DraftState] = DraftState.ROOM_CHOSEN


@dataclass(frozen=True)
class DetailsEntered:
    dates: DateRange
    room: Room
    guest: GuestDetails

    state: ClassVar[DraftState] = DraftState.DETAILS_ENTERED


@dataclass(frozen=True)
class Committed:
    reservation_id: int
    dates: DateRange
    room: Room
    guest: GuestDetails

    state: ClassVar[DraftState] = DraftState.COMMITTED


Draft = Union[EmptyDraft, DatesChosen, RoomChosen, DetailsEntered, Committed]


def require(draft: Draft, step: str, *accepted: type) -> Draft:
    """Return ``draft`` if it is one of ``accepted``, else raise."""
    if isinstance(draft, accepted):
        return draft
    raise MissingDraftStateError(step=step, state=draft.state.value)


# ===== Transitions =====

def choose_dates(draft: Draft, dates: DateRange) -> DatesChosen:
    """Start a new search. Replaces whatever was in the draft."""
    return DatesChosen(dates=dates)


def book_room(draft: Draft, room: Room, dates: DateRange) -> RoomChosen:
    """Direct booking link with room and dates. Replaces the draft."""
    return RoomChosen(dates=dates, room=room)


def choose_room(draft: Draft, room: Room) -> RoomChosen | DetailsEntered:
    """Record the chosen room, keeping dates and any guest details."""
    draft = require(draft, "choose_room", DatesChosen, RoomChosen, DetailsEntered)
    if isinstance(draft, DetailsEntered):
        return DetailsEntered(dates=draft.dates, room=room, guest=draft.guest)
    return RoomChosen(dates=draft.dates, room=room)


def enter_details(draft: Draft, guest: GuestDetails) -> DetailsEntered:
    draft = require(draft, "enter_details", RoomChosen, DetailsEntered)
    return DetailsEntered(dates=draft.dates, room=draft.room, guest=guest)


def commit_draft(draft: Draft, reservation_id: int) -> Committed:
    draft = require(draft, "commit", DetailsEntered)
    return Committed(
        reservation_id=reservation_id,
        dates=draft.dates,
        room=draft.room,
        guest=draft.guest,
    )


def clear(draft: Draft) -> EmptyDraft:
    return EmptyDraft()


# ===== Serialization =====

def dump_draft(draft: Draft) -> dict[str, Any]:
    """Convert a draft into a JSON-safe dict for session storage."""
    data: dict[str, Any] = {"state": draft.state.value}
    dates = getattr(draft, "dates", None)
    if dates is not None:
        data["start_date"], data["end_date"] = dates.isoformat()
    room = getattr(draft, "room", None)
    if room is not None:
        data["room_id"] = room.id
        data["room_name"] = room.name
    guest = getattr(draft, "guest", None)
    if guest is not None:
        data["guest"] = {
            "first_name": guest.first_name,
            "last_name": guest.last_name,
            "email": guest.email,
            "phone": guest.phone,
        }
    if isinstance(draft, Committed):
        data["reservation_id"] = draft.reservation_id
    return data


def load_draft(data: dict[str, Any] | None) -> Draft:
    """
    Rebuild a draft from its session dict.

    Raises:
        ValueError: If the payload is malformed (unknown state, missing keys, bad dates).
    """
    if not data:
        return EmptyDraft()
    if not isinstance(data, dict):
        raise ValueError(f"Draft payload must be a dict, got {type(data).__name__}")

    try:
        state = DraftState(data.get("state"))
        if state is DraftState.EMPTY:
            return EmptyDraft()

        dates = DateRange.from_strings(data["start_date"], data["end_date"])
        if state is DraftState.DATES_CHOSEN:
            return DatesChosen(dates=dates)

        room = Room(id=int(data["room_id"]), name=str(data.get("room_name", "")))
        if state is DraftState.ROOM_CHOSEN:
            return RoomChosen(dates=dates, room=room)

        guest = GuestDetails(**data["guest"])
        if state is DraftState.DETAILS_ENTERED:
            return DetailsEntered(dates=dates, room=room, guest=guest)

        return Committed(
            reservation_id=int(data["reservation_id"]),
            dates=dates,
            room=room,
            guest=guest,
        )
    except (KeyError, TypeError, AttributeError) as exc:
        raise ValueError(f"Malformed draft payload: {exc}") from exc
