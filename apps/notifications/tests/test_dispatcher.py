"""Tests for the background notification dispatcher."""

from __future__ import annotations

import threading

from django.core import mail
from django.test import SimpleTestCase

from apps.notifications.dispatcher import (
    DispatcherClosedError,
    DispatcherState,
    NotificationDispatcher,
)
from apps.notifications.jobs import NotificationJob
from apps.notifications.services import send_notification_email


def make_job(n: int) -> NotificationJob:
    return NotificationJob(
        recipient=f"guest{n}@example.com",
        sender="me@here.com",
        subject=f"Message {n}",
        body=f"<p>Body {n}</p>",
    )


class RecordingTransport:
    def __init__(self, fail_on: set[int] | None = None) -> None:
        self.seen: list[str] = []
        self.fail_on = fail_on or set()
        self.threads: set[str] = set()

    def __call__(self, job: NotificationJob) -> bool:
        self.seen.append(job.subject)
        self.threads.add(threading.current_thread().name)
        index = len(self.seen) - 1
        if index in self.fail_on:
            raise RuntimeError("smtp down")
        return True


class NotificationDispatcherTests(SimpleTestCase):
    def test_delivers_in_submission_order(self) -> None:
        transport = RecordingTransport()
        dispatcher = NotificationDispatcher(transport, name="test-dispatcher").start()

        for n in range(20):
            dispatcher.enqueue(make_job(n))
        dispatcher.close(timeout=5)

        self.assertEqual(transport.seen, [f"Message {n}" for n in range(20)])
        self.assertEqual(transport.threads, {"test-dispatcher"})
        self.assertEqual(dispatcher.delivered, 20)

    def test_jobs_queued_before_start_are_delivered(self) -> None:
        transport = RecordingTransport()
        dispatcher = NotificationDispatcher(transport)
        dispatcher.enqueue(make_job(1))
        self.assertEqual(dispatcher.pending, 1)

        dispatcher.start()
        dispatcher.join()

        self.assertEqual(transport.seen, ["Message 1"])
        dispatcher.close()

    def test_failed_delivery_does_not_stop_the_worker(self) -> None:
        transport = RecordingTransport(fail_on={0})
        dispatcher = NotificationDispatcher(transport).start()

        dispatcher.enqueue(make_job(1))
        dispatcher.enqueue(make_job(2))
        dispatcher.close(timeout=5)

        self.assertEqual(transport.seen, ["Message 1", "Message 2"])
        self.assertEqual(dispatcher.failed, 1)
        self.assertEqual(dispatcher.delivered, 1)

    def test_false_from_transport_counts_as_failure(self) -> None:
        dispatcher = NotificationDispatcher(lambda job: False).start()
        dispatcher.enqueue(make_job(1))
        dispatcher.close(timeout=5)
        self.assertEqual(dispatcher.failed, 1)

    def test_enqueue_after_close_raises(self) -> None:
        dispatcher = NotificationDispatcher(RecordingTransport()).start()
        dispatcher.close(timeout=5)

        self.assertIs(dispatcher.state, DispatcherState.CLOSED)
        with self.assertRaises(DispatcherClosedError):
            dispatcher.enqueue(make_job(1))
        with self.assertRaises(DispatcherClosedError):
            dispatcher.start()

    def test_close_is_idempotent(self) -> None:
        dispatcher = NotificationDispatcher(RecordingTransport()).start()
        dispatcher.close(timeout=5)
        dispatcher.close(timeout=5)
        self.assertIs(dispatcher.state, DispatcherState.CLOSED)

    def test_join_on_unstarted_dispatcher_returns(self) -> None:
        dispatcher = NotificationDispatcher(RecordingTransport())
        dispatcher.enqueue(make_job(1))
        dispatcher.join()
        dispatcher.close()
        self.assertIs(dispatcher.state, DispatcherState.CLOSED)

    def test_join_after_closing_unstarted_dispatcher_returns(self) -> None:
        transport = RecordingTransport()
        dispatcher = NotificationDispatcher(transport)
        dispatcher.enqueue(make_job(1))
        dispatcher.close()

        waiter = threading.Thread(target=dispatcher.join, daemon=True)
        waiter.start()
        waiter.join(timeout=2)

        self.assertFalse(waiter.is_alive())
        self.assertEqual(dispatcher.pending, 0)
        self.assertEqual(transport.seen, [])

    def test_sends_through_django_mail(self) -> None:
        dispatcher = NotificationDispatcher(send_notification_email).start()
        dispatcher.enqueue(make_job(1))
        dispatcher.close(timeout=5)

        self.assertEqual(len(mail.outbox), 1)
        message = mail.outbox[0]
        self.assertEqual(message.to, ["guest1@example.com"])
        self.assertEqual(message.from_email, "me@here.com")
        self.assertEqual(message.body, "Body 1")
