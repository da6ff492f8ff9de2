"""Staff pages for reviewing reservations."""

from __future__ import annotations

from django.contrib import messages  # type: ignore
from django.contrib.auth.mixins import UserPassesTestMixin  # type: ignore
from django.http import Http404  # type: ignore
from django.shortcuts import redirect, render  # type: ignore
from django.urls import reverse_lazy  # type: ignore
from django.views import View  # type: ignore

from .providers import get_store


class StaffRequiredMixin(UserPassesTestMixin):
    login_url = reverse_lazy("users:login")

    def test_func(self) -> bool:
        user = self.request.user
        return user.is_authenticated and user.is_active and user.is_staff


class DashboardView(StaffRequiredMixin, View):
    def get(self, request):
        store = get_store()
        return render(
            request,
            "backoffice/dashboard.html",
            {
                "total_count": len(store.all_reservations()),
                "new_count": len(store.new_reservations()),
            },
        )


class AllReservationsView(StaffRequiredMixin, View):
    def get(self, request):
        return render(
            request,
            "backoffice/reservations.html",
            {"reservations": get_store().all_reservations(), "title": "All Reservations"},
        )


class NewReservationsView(StaffRequiredMixin, View):
    def get(self, request):
        return render(
            request,
            "backoffice/reservations.html",
            {"reservations": get_store().new_reservations(), "title": "New Reservations"},
        )


class ReservationDetailView(StaffRequiredMixin, View):
    def get(self, request, reservation_id: int):
        reservation = get_store().get_reservation(reservation_id)
        if reservation is None:
            raise Http404("Reservation not found")
        start, end = reservation.dates.isoformat()
        return render(
            request,
            "backoffice/reservation-detail.html",
            {"reservation": reservation, "start_date": start, "end_date": end},
        )


class MarkProcessedView(StaffRequiredMixin, View):
    def post(self, request, reservation_id: int):
        if not get_store().mark_processed(reservation_id):
            raise Http404("Reservation not found")
        messages.success(request, "Reservation marked as processed")
        return redirect("admin-reservations-new")
