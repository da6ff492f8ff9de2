"""Wiring of stores and services for the web layer."""

from __future__ import annotations

from apps.notifications.dispatcher import get_dispatcher
from apps.reservations.services import AvailabilityService, BookingService
from apps.reservations.stores import DjangoReservationStore, ReservationStore


def get_store() -> ReservationStore:
    return DjangoReservationStore()


def get_availability_service() -> AvailabilityService:
    return AvailabilityService(get_store())


def get_booking_service() -> BookingService:
    return BookingService(store=get_store(), notifier=get_dispatcher())
