"""Reservation persistence model."""

from __future__ import annotations

from django.db import models  # type: ignore


class Reservation(models.Model):
    """A committed guest reservation for one room."""

    first_name = models.CharField(max_length=255)
    last_name = models.CharField(max_length=255)
    email = models.EmailField(max_length=255)
    phone = models.CharField(max_length=255, blank=True)
    room = models.ForeignKey(
        "rooms.Room",
        on_delete=models.PROTECT,
        related_name="reservations",
    )
    start_date = models.DateField()
    end_date = models.DateField()
    processed = models.BooleanField(
        default=False,
        help_text="Set by staff once the reservation has been handled.",
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["start_date"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(end_date__gt=models.F("start_date")),
                name="reservation_valid_dates",
            ),
        ]
        indexes = [
            models.Index(fields=["room", "start_date", "end_date"]),
            models.Index(fields=["processed"]),
        ]

    def __str__(self) -> str:
        return f"Reservation #{self.pk} {self.first_name} {self.last_name}"
