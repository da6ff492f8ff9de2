from apps.reservations.stores.django_store import DjangoReservationStore
from apps.reservations.stores.interfaces import ReservationStore
from apps.reservations.stores.memory_store import InMemoryReservationStore

__all__ = [
    "DjangoReservationStore",
    "InMemoryReservationStore",
    "ReservationStore",
]
