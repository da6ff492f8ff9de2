"""Booking services - all booking business logic lives here.

Services:
- Depend only on interfaces (stores, notifier)
- Validate domain invariants
- Perform orchestration and error mapping
- Return domain models or raise domain errors
"""

from apps.reservations.services.availability import AvailabilityService
from apps.reservations.services.booking import BookingService, guest_form

__all__ = ["AvailabilityService", "BookingService", "guest_form"]
