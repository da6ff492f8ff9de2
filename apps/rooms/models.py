"""Room inventory models."""

from __future__ import annotations

from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore


class Room(models.Model):
    """A bookable room. Reference data, never changed by the booking flow."""

    room_name = models.CharField(max_length=255)
    slug = models.SlugField(max_length=255, unique=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["id"]

    def __str__(self) -> str:
        return self.room_name


class RoomRestriction(models.Model):
    """An interval [start_date, end_date) during which a room cannot be booked."""

    class Kind(models.TextChoices):
        RESERVATION = "reservation", _("Reservation")
        OWNER_BLOCK = "owner_block", _("Owner block")

    room = models.ForeignKey(
        Room,
        on_delete=models.CASCADE,
        related_name="restrictions",
    )
    start_date = models.DateField()
    end_date = models.DateField()
    reservation = models.OneToOneField(
        "reservations.Reservation",
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name="restriction",
    )
    kind = models.CharField(
        max_length=20,
        choices=Kind.choices,
        default=Kind.RESERVATION,
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        constraints = [
            models.CheckConstraint(
                condition=models.Q(end_date__gt=models.F("start_date")),
                name="room_restriction_valid_dates",
            ),
        ]
        indexes = [
            models.Index(fields=["room", "start_date", "end_date"]),
        ]

    def __str__(self) -> str:
        return f"{self.room} {self.start_date} - {self.end_date} ({self.kind})"
