"""Admin registration for reservations."""

from __future__ import annotations

from django.contrib import admin

from .models import Reservation


@admin.register(Reservation)
class ReservationAdmin(admin.ModelAdmin):
    list_display = (
        "id",
        "last_name",
        "first_name",
        "email",
        "room",
        "start_date",
        "end_date",
        "processed",
        "created_at",
    )
    list_filter = ("processed", "room", "start_date")
    search_fields = ("last_name", "first_name", "email")
    readonly_fields = ("created_at", "updated_at")
