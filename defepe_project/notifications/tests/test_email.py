from smtplib import SMTPException
from unittest import mock

import pytest
from django.core import mail

from notifications.services.email import EmailDispatchError, render_html_body, send_email


def test_send_email_uses_configured_sender(settings):
    settings.DEFAULT_FROM_EMAIL = "Defepe Pharmacy <onboarding@resend.dev>"

    send_email("ann@example.com", "Hello", "Line one\n\nLine two")

    assert len(mail.outbox) == 1
    message = mail.outbox[0]
    assert message.from_email == "Defepe Pharmacy <onboarding@resend.dev>"
    assert message.to == ["ann@example.com"]
    assert message.body == "Line one\n\nLine two"
    assert message.alternatives[0][0] == "<p>Line one</p><p>Line two</p>"


def test_html_body_is_escaped():
    assert render_html_body("a < b\nc") == "<p>a &lt; b<br>c</p>"


@pytest.mark.parametrize("to, subject, body", [("", "s", "b"), ("a@example.com", "", "b"), ("a@example.com", "s", "")])
def test_missing_fields_raise(to, subject, body):
    with pytest.raises(EmailDispatchError):
        send_email(to, subject, body)

    assert mail.outbox == []


def test_backend_failure_raises_dispatch_error():
    with mock.patch(
        "notifications.services.email.send_mail",
        side_effect=SMTPException("relay refused"),
    ):
        with pytest.raises(EmailDispatchError) as excinfo:
            send_email("ann@example.com", "Hello", "Body")

    assert excinfo.value.to == "ann@example.com"
    assert "relay refused" in str(excinfo.value)
