"""
Notification Dispatcher

A single background worker draining an unbounded FIFO queue of
NotificationJob values. The web request only enqueues; delivery happens
on the worker thread, one job at a time, in submission order.

Lifecycle:
    NEW -> RUNNING -> CLOSED

Jobs enqueued while NEW are buffered and delivered once the worker
starts. Once CLOSED, enqueue raises DispatcherClosedError: a job
submitted during shutdown is a programming error, not a silent drop.
"""

from __future__ import annotations

import atexit
import logging
import queue
import threading
from enum import Enum
from typing import Callable

from django.conf import settings  # type: ignore

from .jobs import NotificationJob

logger = logging.getLogger(__name__)

Transport = Callable[[NotificationJob], bool]

_STOP = object()


class DispatcherState(Enum):
    NEW = "new"
    RUNNING = "running"
    CLOSED = "closed"


class DispatcherClosedError(RuntimeError):
    """Raised when a job is enqueued after the dispatcher was closed."""


class NotificationDispatcher:
    """
    Owns the job queue and its single consumer thread.

    Delivery is best-effort: a transport failure (False or an exception)
    is logged and the worker moves on to the next job. Nothing is retried
    and nothing is reported back to the producer.
    """

    def __init__(self, transport: Transport, name: str = "notification-dispatcher") -> None:
        self._transport = transport
        self._name = name
        self._queue: queue.Queue = queue.Queue()
        self._state = DispatcherState.NEW
        self._state_lock = threading.Lock()
        self._worker: threading.Thread | None = None
        self.delivered = 0
        self.failed = 0

    @property
    def state(self) -> DispatcherState:
        return self._state

    @property
    def pending(self) -> int:
        return self._queue.qsize()

    def start(self) -> "NotificationDispatcher":
        with self._state_lock:
            if self._state is DispatcherState.CLOSED:
                raise DispatcherClosedError("Cannot restart a closed dispatcher")
            if self._state is DispatcherState.RUNNING:
                return self
            self._worker = threading.Thread(target=self._run, name=self._name, daemon=True)
            self._state = DispatcherState.RUNNING
            self._worker.start()
        logger.info(f"Notification dispatcher '{self._name}' started")
        return self

    def enqueue(self, job: NotificationJob) -> None:
        """Queue a job for delivery. Never waits on the consumer."""
        with self._state_lock:
            if self._state is DispatcherState.CLOSED:
                raise DispatcherClosedError(
                    f"Dispatcher '{self._name}' is closed; refusing job '{job.subject}' to {job.recipient}"
                )
            self._queue.put(job)
        logger.debug(f"Queued notification '{job.subject}' to {job.recipient}")

    def join(self) -> None:
        """Block until every job queued so far has been processed."""
        if self._worker is None:
            return
        self._queue.join()

    def close(self, timeout: float | None = None) -> None:
        """
        Stop accepting jobs, deliver what is already queued, then stop the worker.

        Closing twice is a no-op. A dispatcher that never started is closed
        without delivering its buffered jobs.
        """
        with self._state_lock:
            if self._state is DispatcherState.CLOSED:
                return
            was_running = self._state is DispatcherState.RUNNING
            self._state = DispatcherState.CLOSED
            if was_running:
                self._queue.put(_STOP)

        if was_running and self._worker is not None:
            self._worker.join(timeout)
            if self._worker.is_alive():
                logger.warning(
                    f"Notification dispatcher '{self._name}' did not stop within {timeout}s; "
                    f"{self.pending} job(s) still queued"
                )
        elif self.pending:
            logger.warning(
                f"Notification dispatcher '{self._name}' closed before start; "
                f"dropping {self.pending} queued job(s)"
            )
            self._discard_pending()
        logger.info(f"Notification dispatcher '{self._name}' closed")

    def _discard_pending(self) -> None:
        while True:
            try:
                self._queue.get_nowait()
            except queue.Empty:
                return
            self._queue.task_done()

    def _run(self) -> None:
        while True:
            job = self._queue.get()
            try:
                if job is _STOP:
                    return
                self._deliver(job)
            finally:
                self._queue.task_done()

    def _deliver(self, job: NotificationJob) -> None:
        try:
            ok = self._transport(job)
        except Exception as e:
            ok = False
            logger.error(
                f"Notification transport raised for '{job.subject}' to {job.recipient}: {e}",
                exc_info=True,
            )
        else:
            if not ok:
                logger.error(f"Notification '{job.subject}' to {job.recipient} was not delivered")

        if ok:
            self.delivered += 1
        else:
            self.failed += 1


# Process-wide dispatcher

_dispatcher: NotificationDispatcher | None = None
_dispatcher_lock = threading.Lock()


def get_dispatcher() -> NotificationDispatcher:
    """Return the process-wide dispatcher, creating it on first use."""
    global _dispatcher
    with _dispatcher_lock:
        if _dispatcher is None:
            from .services import send_notification_email

            _dispatcher = NotificationDispatcher(transport=send_notification_email)
            if getattr(settings, "NOTIFICATIONS_DISPATCHER_AUTOSTART", True):
                _dispatcher.start()
            atexit.register(_dispatcher.close, 5.0)
        return _dispatcher

