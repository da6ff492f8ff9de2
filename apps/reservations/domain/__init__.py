from apps.reservations.domain.draft import (
    Committed,
    DatesChosen,
    DetailsEntered,
    Draft,
    DraftState,
    EmptyDraft,
    RoomChosen,
)
from apps.reservations.domain.models import (
    GuestDetails,
    NewReservation,
    NewRoomRestriction,
    Reservation,
    RestrictionKind,
    Room,
)

__all__ = [
    "Committed",
    "DatesChosen",
    "DetailsEntered",
    "Draft",
    "DraftState",
    "EmptyDraft",
    "RoomChosen",
    "GuestDetails",
    "NewReservation",
    "NewRoomRestriction",
    "Reservation",
    "RestrictionKind",
    "Room",
]
