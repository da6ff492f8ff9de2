"""Mail transport for notification jobs."""

from __future__ import annotations

import logging

from django.core.mail import send_mail  # type: ignore
from django.template.loader import render_to_string  # type: ignore
from django.utils.html import strip_tags  # type: ignore

from .jobs import NotificationJob

logger = logging.getLogger(__name__)


def render_job(job: NotificationJob) -> str:
    """Return the HTML message for a job, wrapped in its template if it names one."""
    if job.template:
        return render_to_string(job.template, {"content": job.body, "subject": job.subject})
    return job.body


def send_notification_email(job: NotificationJob) -> bool:
    """
    Deliver one job through the configured Django email backend.

    Returns:
        bool: True if the message was handed to the backend
    """
    try:
        html_message = render_job(job)
        send_mail(
            subject=job.subject,
            message=strip_tags(html_message),
            from_email=job.sender,
            recipient_list=[job.recipient],
            html_message=html_message,
            fail_silently=False,
        )

        logger.info(f"Email sent successfully to {job.recipient}: {job.subject}")
        return True

    except Exception as e:
        logger.error(f"Failed to send email to {job.recipient}: {e}", exc_info=True)
        return False
