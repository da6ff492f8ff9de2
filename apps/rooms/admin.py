"""Admin registration for rooms."""

from __future__ import annotations

from django.contrib import admin

from .models import Room, RoomRestriction


@admin.register(Room)
class RoomAdmin(admin.ModelAdmin):
    list_display = ("id", "room_name", "slug", "created_at")
    search_fields = ("room_name",)
    prepopulated_fields = {"slug": ("room_name",)}


@admin.register(RoomRestriction)
class RoomRestrictionAdmin(admin.ModelAdmin):
    list_display = ("room", "kind", "start_date", "end_date", "reservation")
    list_filter = ("kind", "room")
    readonly_fields = ("reservation", "created_at", "updated_at")
