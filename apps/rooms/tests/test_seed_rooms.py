"""Tests for the seed_rooms management command."""

from __future__ import annotations

from io import StringIO

import pytest
from django.core.management import call_command
from django.test import TestCase

from apps.rooms.models import Room


class SeedRoomsCommandTests(TestCase):
    def test_creates_rooms_once(self) -> None:
        out = StringIO()
        call_command("seed_rooms", stdout=out)
        call_command("seed_rooms", stdout=out)

        self.assertEqual(
            list(Room.objects.values_list("slug", "room_name")),
            [("generals-quarters", "General's Quarters"), ("majors-suite", "Major's Suite")],
        )
        self.assertIn("Rooms created: 2", out.getvalue())
        self.assertIn("Rooms created: 0", out.getvalue())


@pytest.mark.django_db
def test_existing_room_name_is_kept() -> None:
    Room.objects.create(slug="majors-suite", room_name="Major's Suite (renovated)")

    call_command("seed_rooms", stdout=StringIO())

    assert Room.objects.get(slug="majors-suite").room_name == "Major's Suite (renovated)"
    assert Room.objects.count() == 2
