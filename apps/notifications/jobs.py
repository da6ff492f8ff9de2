"""Notification job value objects and builders."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from django.conf import settings  # type: ignore
from django.utils.html import format_html  # type: ignore

if TYPE_CHECKING:  # pragma: no cover
    from apps.reservations.domain import Reservation


@dataclass(frozen=True)
class NotificationJob:
    """One outbound message. Carries plain values only."""

    recipient: str
    sender: str
    subject: str
    body: str
    template: str | None = None


def _sender() -> str:
    return getattr(settings, "NOTIFICATIONS_FROM_EMAIL", settings.DEFAULT_FROM_EMAIL)


def build_guest_confirmation(reservation: "Reservation") -> NotificationJob:
    """Confirmation sent to the guest."""
    start, end = reservation.dates.isoformat()
    body = format_html(
        "<strong>Reservation Confirmation</strong><br>"
        "Dear {}: <br>"
        "This is to confirm your reservation from {} to {}.",
        reservation.guest.first_name,
        start,
        end,
    )
    return NotificationJob(
        recipient=reservation.guest.email,
        sender=_sender(),
        subject="Reservation Confirmation",
        body=body,
        template="notifications/basic.html",
    )


def build_owner_notice(reservation: "Reservation") -> NotificationJob:
    """Notice sent to the property owner."""
    start, end = reservation.dates.isoformat()
    body = format_html(
        "<strong>Reservation Notification</strong><br>"
        "A reservation has been made by {} for {} from {} to {} ({} night(s)).",
        reservation.guest.full_name,
        reservation.room.name,
        start,
        end,
        len(reservation.dates),
    )
    return NotificationJob(
        recipient=settings.NOTIFICATIONS_OWNER_EMAIL,
        sender=_sender(),
        subject="Reservation Notification",
        body=body,
    )
