"""
Form validation helpers.

A ``Form`` wraps submitted key/value data and records every violation it
finds, so a page can be re-rendered with all field errors at once.
"""

from __future__ import annotations

from collections.abc import Mapping

from django.core.exceptions import ValidationError  # type: ignore
from django.core.validators import validate_email  # type: ignore


class FormErrors(dict):
    """Field name -> list of messages."""

    def add(self, field: str, message: str) -> None:
        self.setdefault(field, []).append(message)

    def first(self, field: str, default: str = "") -> str:
        """Return the first message recorded for ``field``."""
        messages = self.get(field)
        if not messages:
            return default
        return messages[0]


class Form:
    """Accumulating validator over submitted form data."""

    def __init__(self, data: Mapping[str, str] | None = None) -> None:
        self.data = data if data is not None else {}
        self.errors = FormErrors()

    def value(self, field: str) -> str:
        return (self.data.get(field) or "").strip()

    def has(self, field: str) -> bool:
        return self.value(field) != ""

    def required(self, *fields: str) -> "Form":
        for field in fields:
            if not self.has(field):
                self.errors.add(field, "This field cannot be blank")
        return self

    def min_length(self, field: str, length: int) -> bool:
        if len(self.value(field)) < length:
            self.errors.add(field, f"This field must be at least {length} characters long")
            return False
        return True

    def is_email(self, field: str) -> bool:
        try:
            validate_email(self.value(field))
        except ValidationError:
            self.errors.add(field, "Invalid email address")
            return False
        return True

    def valid(self) -> bool:
        return len(self.errors) == 0
