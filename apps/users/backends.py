"""Authentication backend that signs users in by email address."""

from __future__ import annotations

from django.contrib.auth import get_user_model  # type: ignore
from django.contrib.auth.backends import ModelBackend  # type: ignore

User = get_user_model()


class EmailBackend(ModelBackend):
    """Look the user up by email instead of username."""

    def authenticate(self, request, username=None, password=None, email=None, **kwargs):  # type: ignore
        email = email or username
        if not email or password is None:
            return None
        user = User.objects.filter(email__iexact=email).order_by("id").first()
        if user is None:
            # Run the hasher anyway so a missing account costs the same time
            User().set_password(password)
            return None
        if user.check_password(password) and self.user_can_authenticate(user):
            return user
        return None
