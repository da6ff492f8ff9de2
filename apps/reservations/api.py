"""JSON API views for availability and reservations."""

from __future__ import annotations

import logging

from django.db import DatabaseError  # type: ignore
from django_filters.rest_framework import DjangoFilterBackend  # type: ignore
from drf_spectacular.utils import extend_schema  # type: ignore
from rest_framework import permissions, status, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.response import Response  # type: ignore
from rest_framework.views import APIView  # type: ignore

from shared.domain.value_objects import DateRange, InvalidDateRange, parse_iso_date

from .domain.errors import RoomNotFoundError
from .models import Reservation
from .providers import get_availability_service
from .serializers import AvailabilityProbeSerializer, ReservationSerializer

logger = logging.getLogger(__name__)


def _probe(ok: bool, message: str, room_id: str = "", start: str = "", end: str = "") -> Response:
    serializer = AvailabilityProbeSerializer(
        {
            "ok": ok,
            "message": message,
            "room_id": room_id,
            "start_date": start,
            "end_date": end,
        }
    )
    return Response(serializer.data, status=status.HTTP_200_OK)


class AvailabilityJSONView(APIView):
    """
    Availability probe for one room.

    Always answers 200 with ``ok`` false and a message when the input is
    unusable or the lookup failed.
    """

    permission_classes = [permissions.AllowAny]
    authentication_classes: list = []

    @extend_schema(responses=AvailabilityProbeSerializer)
    def post(self, request):  # type: ignore
        return self._check(request.data)

    @extend_schema(responses=AvailabilityProbeSerializer)
    def get(self, request):  # type: ignore
        return self._check(request.query_params)

    def _check(self, params) -> Response:
        start = params.get("start", "")
        end = params.get("end", "")

        try:
            start_date = parse_iso_date(start)
        except ValueError:
            return _probe(False, "Invalid start date format. Please use yyyy-mm-dd.")
        try:
            end_date = parse_iso_date(end)
        except ValueError:
            return _probe(False, "Invalid end date format. Please use yyyy-mm-dd.")
        try:
            dates = DateRange(start_date, end_date)
        except InvalidDateRange:
            return _probe(False, "End date must be at least one day after start date.")
        try:
            room_id = int(params.get("room_id", ""))
        except (TypeError, ValueError):
            return _probe(False, "Invalid room id.")

        service = get_availability_service()
        try:
            service.get_room(room_id)
            available = service.is_room_available(room_id, dates)
        except RoomNotFoundError:
            return _probe(False, "Room not found.", str(room_id), start, end)
        except DatabaseError:
            logger.error(f"Availability probe failed for room {room_id}", exc_info=True)
            return _probe(False, "Error querying database")

        return _probe(available, "", str(room_id), start, end)


class ReservationViewSet(viewsets.ReadOnlyModelViewSet):
    """Back-office listing of reservations; staff only."""

    queryset = Reservation.objects.select_related("room").order_by("start_date", "id")
    serializer_class = ReservationSerializer
    permission_classes = [permissions.IsAdminUser]
    filter_backends = [DjangoFilterBackend]
    filterset_fields = ["processed", "room"]

    @action(detail=True, methods=["post"])
    def mark_processed(self, request, pk=None):  # type: ignore
        reservation: Reservation = self.get_object()  # type: ignore
        processed = request.data.get("processed", True)
        if isinstance(processed, str):
            processed = processed.lower() not in {"0", "false", "no"}
        reservation.processed = bool(processed)
        reservation.save(update_fields=["processed", "updated_at"])
        return Response(ReservationSerializer(reservation).data, status=status.HTTP_200_OK)
