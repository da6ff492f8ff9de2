"""Serializers for the reservation API surfaces."""

from __future__ import annotations

from rest_framework import serializers  # type: ignore

from .models import Reservation


class AvailabilityProbeSerializer(serializers.Serializer):
    """Response body of the JSON availability probe."""

    ok = serializers.BooleanField()
    message = serializers.CharField(allow_blank=True)
    room_id = serializers.CharField(allow_blank=True)
    start_date = serializers.CharField(allow_blank=True)
    end_date = serializers.CharField(allow_blank=True)


class ReservationSerializer(serializers.ModelSerializer):
    """Reservation as seen by staff."""

    room_id = serializers.ReadOnlyField(source="room.id")
    room_name = serializers.ReadOnlyField(source="room.room_name")

    class Meta:
        model = Reservation
        fields = [
            "id",
            "first_name",
            "last_name",
            "email",
            "phone",
            "room_id",
            "room_name",
            "start_date",
            "end_date",
            "processed",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields
