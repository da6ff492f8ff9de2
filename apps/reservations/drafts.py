"""Session storage for the draft reservation."""

from __future__ import annotations

import logging

from django.conf import settings  # type: ignore

from apps.reservations.domain.draft import Draft, EmptyDraft, dump_draft, load_draft

logger = logging.getLogger(__name__)


class DraftSession:
    """Reads and writes the visitor's draft under a fixed session key.

    The session may hold nothing, a stale payload, or something written by
    an older release; all of those load as an EmptyDraft.
    """

    def __init__(self, session, key: str | None = None) -> None:
        self._session = session
        self._key = key or getattr(settings, "BOOKING_SESSION_KEY", "reservation")

    def load(self) -> Draft:
        raw = self._session.get(self._key)
        try:
            return load_draft(raw)
        except ValueError as exc:
            logger.warning(f"Discarding unreadable draft from session: {exc}")
            self._session.pop(self._key, None)
            return EmptyDraft()

    def save(self, draft: Draft) -> None:
        if isinstance(draft, EmptyDraft):
            self.clear()
            return
        self._session[self._key] = dump_draft(draft)

    def clear(self) -> None:
        self._session.pop(self._key, None)
