from django.core.management.base import BaseCommand

from apps.rooms.models import Room

DEFAULT_ROOMS = (
    ("generals-quarters", "General's Quarters"),
    ("majors-suite", "Major's Suite"),
)


class Command(BaseCommand):
    help = "Create the hotel's rooms if they do not exist yet"

    def handle(self, *args, **options):
        created = 0
        for slug, name in DEFAULT_ROOMS:
            _, was_created = Room.objects.get_or_create(slug=slug, defaults={"room_name": name})
            if was_created:
                created += 1
        self.stdout.write(self.style.SUCCESS(f"Rooms created: {created}"))
