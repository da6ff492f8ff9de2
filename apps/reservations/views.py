"""Views for the visitor booking flow.

Every step reads the draft from the session and accepts only the draft
states it can work with. Anything else is answered with a flash message
and a redirect to the search page, never with an error page.
"""

from __future__ import annotations

import logging

from django.contrib import messages  # type: ignore
from django.shortcuts import redirect, render  # type: ignore
from django.views import View  # type: ignore
from django.views.generic import TemplateView  # type: ignore

from apps.reservations.domain import Committed, DetailsEntered, RoomChosen
from apps.reservations.domain import draft as drafts
from apps.reservations.domain.errors import (
    BookingError,
    MissingDraftStateError,
    PartialCommitError,
    RoomNoLongerAvailableError,
    ValidationFailedError,
)
from apps.reservations.drafts import DraftSession
from apps.reservations.providers import get_availability_service, get_booking_service
from apps.rooms.models import Room as RoomModel
from shared.application.forms import Form
from shared.domain.value_objects import DateRange, InvalidDateRange, parse_iso_date

logger = logging.getLogger(__name__)

SEARCH_URL = "search-availability"
MAKE_RESERVATION_TEMPLATE = "reservations/make-reservation.html"


def _bounce(request, error: BookingError | str, to: str = SEARCH_URL):
    """Flash ``error`` and send the visitor back to the start of the flow."""
    message = error.message if isinstance(error, BookingError) else error
    if isinstance(error, BookingError):
        logger.warning(f"Booking flow interrupted: {error}")
    messages.error(request, message)
    return redirect(to)


def _parse_dates(request, start: str | None, end: str | None) -> tuple[DateRange | None, str]:
    """
    Parse a stay from request values, flashing the problem if there is one.

    Returns the range (or None) and where to send the visitor on failure:
    unreadable dates go back to the home page, a zero-night stay to the search.
    """
    try:
        start_date = parse_iso_date(start)
    except ValueError:
        messages.error(request, "Can't parse start date!")
        return None, "home"
    try:
        end_date = parse_iso_date(end)
    except ValueError:
        messages.error(request, "Can't parse end date!")
        return None, "home"
    try:
        return DateRange(start_date, end_date), SEARCH_URL
    except InvalidDateRange:
        messages.error(request, "You have to book at least one night")
        return None, SEARCH_URL


class RoomPageView(TemplateView):
    """Static room page with a live availability check."""

    slug = ""

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        context["room"] = RoomModel.objects.filter(slug=self.slug).first()
        return context


class SearchAvailabilityView(View):
    """Search form (GET) and room search for a date range (POST)."""

    template_name = "reservations/search-availability.html"

    def get(self, request):
        return render(request, self.template_name)

    def post(self, request):
        dates, on_error = _parse_dates(request, request.POST.get("start"), request.POST.get("end"))
        if dates is None:
            return redirect(on_error)

        rooms = get_availability_service().rooms_available(dates)
        if not rooms:
            messages.error(request, "No availability")
            return redirect(SEARCH_URL)

        session = DraftSession(request.session)
        session.save(drafts.choose_dates(session.load(), dates))

        start, end = dates.isoformat()
        return render(
            request,
            "reservations/choose-room.html",
            {"rooms": rooms, "start_date": start, "end_date": end},
        )


class ChooseRoomView(View):
    """Record the room picked from the search results."""

    def get(self, request, room_id: int):
        session = DraftSession(request.session)
        draft = session.load()
        availability = get_availability_service()
        try:
            room = availability.get_room(room_id)
            updated = drafts.choose_room(draft, room)
            if not availability.is_room_available(room.id, updated.dates):
                raise RoomNoLongerAvailableError(room.id, updated.dates)
        except BookingError as exc:
            return _bounce(request, exc)

        session.save(updated)
        return redirect("make-reservation")


class BookRoomView(View):
    """Direct booking link from a room page: ?id=<room>&s=<start>&e=<end>."""

    def get(self, request):
        try:
            room_id = int(request.GET.get("id", ""))
        except ValueError:
            return _bounce(request, "Missing room")

        dates, on_error = _parse_dates(request, request.GET.get("s"), request.GET.get("e"))
        if dates is None:
            return redirect(on_error)

        availability = get_availability_service()
        try:
            room = availability.get_room(room_id)
            if not availability.is_room_available(room.id, dates):
                raise RoomNoLongerAvailableError(room.id, dates)
        except BookingError as exc:
            return _bounce(request, exc)

        session = DraftSession(request.session)
        session.save(drafts.book_room(session.load(), room, dates))
        return redirect("make-reservation")


class MakeReservationView(View):
    """Guest details form (GET) and booking commit (POST)."""

    def _context(self, draft, form: Form) -> dict:
        start, end = draft.dates.isoformat()
        return {
            "form": form,
            "room": draft.room,
            "start_date": start,
            "end_date": end,
        }

    def get(self, request):
        session = DraftSession(request.session)
        try:
            draft = drafts.require(session.load(), "make_reservation", RoomChosen, DetailsEntered)
            room = get_availability_service().get_room(draft.room.id)
        except BookingError as exc:
            return _bounce(request, exc)

        draft = drafts.choose_room(draft, room)
        session.save(draft)

        initial = {}
        if isinstance(draft, DetailsEntered):
            initial = {
                "first_name": draft.guest.first_name,
                "last_name": draft.guest.last_name,
                "email": draft.guest.email,
                "phone": draft.guest.phone,
            }
        return render(request, MAKE_RESERVATION_TEMPLATE, self._context(draft, Form(initial)))

    def post(self, request):
        session = DraftSession(request.session)
        service = get_booking_service()
        draft = session.load()
        try:
            draft = drafts.require(draft, "make_reservation", RoomChosen, DetailsEntered)
            guest = service.validate_guest(request.POST)
        except ValidationFailedError as exc:
            return render(request, MAKE_RESERVATION_TEMPLATE, self._context(draft, exc.form))
        except MissingDraftStateError as exc:
            return _bounce(request, exc)

        draft = drafts.enter_details(draft, guest)
        session.save(draft)

        try:
            reservation = service.commit(draft)
        except ValidationFailedError as exc:
            return render(request, MAKE_RESERVATION_TEMPLATE, self._context(draft, exc.form))
        except PartialCommitError:
            raise
        except BookingError as exc:
            return _bounce(request, exc)

        session.save(drafts.commit_draft(draft, reservation.id))
        return redirect("reservation-summary")


class ReservationSummaryView(View):
    """Confirmation page. Shown once, then the draft slot is cleared."""

    def get(self, request):
        session = DraftSession(request.session)
        try:
            draft = drafts.require(session.load(), "reservation_summary", Committed)
        except MissingDraftStateError as exc:
            return _bounce(request, exc)

        session.clear()
        start, end = draft.dates.isoformat()
        return render(
            request,
            "reservations/reservation-summary.html",
            {
                "reservation_id": draft.reservation_id,
                "guest": draft.guest,
                "room": draft.room,
                "start_date": start,
                "end_date": end,
            },
        )
