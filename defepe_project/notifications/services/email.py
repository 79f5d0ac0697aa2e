"""
notifications/services/email.py

Outbound email through Django's mail framework
(SMTP relay of the email provider in production).
"""

import logging
from html import escape

from django.conf import settings
from django.core.mail import send_mail

logger = logging.getLogger(__name__)


class EmailDispatchError(Exception):
    """A single email could not be handed to the mail provider."""

    def __init__(self, to, message):
        super().__init__(f"Failed to send email to {to}: {message}")
        self.to = to


def render_html_body(body):
    """The provider receives the plain body wrapped in a paragraph."""
    paragraphs = [
        escape(block.strip()).replace("\n", "<br>")
        for block in body.strip().split("\n\n")
        if block.strip()
    ]
    return "".join(f"<p>{paragraph}</p>" for paragraph in paragraphs)


def send_email(to, subject, body):
    """
    Send one email. Raises EmailDispatchError on any failure.
    """
    if not to or not subject or not body:
        raise EmailDispatchError(to, "Missing required fields: to, subject, or body.")

    try:
        delivered = send_mail(
            subject=subject,
            message=body,
            from_email=settings.DEFAULT_FROM_EMAIL,
            recipient_list=[to],
            html_message=render_html_body(body),
            fail_silently=False,
        )
    except Exception as exc:
        raise EmailDispatchError(to, str(exc)) from exc

    if not delivered:
        raise EmailDispatchError(to, "Mail backend accepted no messages.")

    logger.info("Email sent successfully to %s", to)
