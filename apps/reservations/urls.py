"""URL routing for the booking flow, back office and reservation API."""

from __future__ import annotations

from django.urls import include, path  # type: ignore
from django.views.generic import TemplateView  # type: ignore
from rest_framework.routers import DefaultRouter  # type: ignore

from . import api, backoffice, views

router = DefaultRouter()
router.register(r"reservations", api.ReservationViewSet, basename="reservation")

urlpatterns = [
    path("", TemplateView.as_view(template_name="pages/home.html"), name="home"),
    path("about", TemplateView.as_view(template_name="pages/about.html"), name="about"),
    path(
        "generals-quarters",
        views.RoomPageView.as_view(template_name="pages/generals.html", slug="generals-quarters"),
        name="generals-quarters",
    ),
    path(
        "majors-suite",
        views.RoomPageView.as_view(template_name="pages/majors.html", slug="majors-suite"),
        name="majors-suite",
    ),
    path("contact", TemplateView.as_view(template_name="pages/contact.html"), name="contact"),
    # Booking flow
    path("search-availability", views.SearchAvailabilityView.as_view(), name="search-availability"),
    path("search-availability-json", api.AvailabilityJSONView.as_view(), name="search-availability-json"),
    path("choose-room/<int:room_id>", views.ChooseRoomView.as_view(), name="choose-room"),
    path("book-room", views.BookRoomView.as_view(), name="book-room"),
    path("make-reservation", views.MakeReservationView.as_view(), name="make-reservation"),
    path("reservation-summary", views.ReservationSummaryView.as_view(), name="reservation-summary"),
    # Back office
    path("admin/dashboard", backoffice.DashboardView.as_view(), name="admin-dashboard"),
    path("admin/reservations-all", backoffice.AllReservationsView.as_view(), name="admin-reservations-all"),
    path("admin/reservations-new", backoffice.NewReservationsView.as_view(), name="admin-reservations-new"),
    path(
        "admin/reservations/<int:reservation_id>",
        backoffice.ReservationDetailView.as_view(),
        name="admin-reservation-detail",
    ),
    path(
        "admin/reservations/<int:reservation_id>/processed",
        backoffice.MarkProcessedView.as_view(),
        name="admin-reservation-processed",
    ),
    # API
    path("api/v1/", include(router.urls)),
]
