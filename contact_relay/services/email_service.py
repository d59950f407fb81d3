"""
Email service for the contact relay.

Outbound mail goes through a transport stored on
app.extensions["mail_transport"]. A transport has a single method,
send(email), which either returns or raises SendError. The SMTP transport
talks to a relay such as smtp.gmail.com; the console transport only logs.

Usage:
    from contact_relay.services.email_service import Email, send_email

    send_email(Email(
        sender='"Jane" <jane@example.com>',
        recipient="owner@example.com",
        subject="Hello",
        body="Plain text body",
    ))
"""

import logging
import smtplib
from dataclasses import dataclass
from email.mime.text import MIMEText
from email.utils import formataddr

from flask import current_app

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Email:
    sender: str
    recipient: str
    subject: str
    body: str
    reply_to: str = None

    def to_mime(self):
        msg = MIMEText(self.body, "plain", "utf-8")
        msg["Subject"] = self.subject
        msg["From"] = self.sender
        msg["To"] = self.recipient
        if self.reply_to:
            msg["Reply-To"] = self.reply_to
        return msg


class SendError(Exception):
    """The relay did not accept the message."""


class SmtpTransport:
    """Send through an SMTP relay with STARTTLS + login."""

    def __init__(self, host, port, username, password, timeout=30):
        self.host = host
        self.port = port
        self.username = username
        self.password = password
        self.timeout = timeout

    @classmethod
    def from_config(cls, config):
        return cls(
            host=config.get("MAIL_SMTP_HOST", "smtp.gmail.com"),
            port=config.get("MAIL_SMTP_PORT", 587),
            username=config.get("MAIL_USERNAME"),
            password=config.get("MAIL_PASSWORD"),
            timeout=config.get("MAIL_SMTP_TIMEOUT", 30),
        )

    def send(self, email):
        if not self.username or not self.password:
            raise SendError("MAIL_USERNAME or MAIL_PASSWORD not configured.")
        if not email.recipient:
            raise SendError("No recipient configured (MAIL_CONTACT_TO).")

        msg = email.to_mime()
        try:
            with smtplib.SMTP(self.host, self.port, timeout=self.timeout) as server:
                server.ehlo()
                server.starttls()
                server.ehlo()
                server.login(self.username, self.password)
                # Envelope sender is the authenticated account; the visitor
                # only appears in the From / Reply-To headers.
                server.send_message(
                    msg, from_addr=self.username, to_addrs=[email.recipient]
                )
        except (smtplib.SMTPException, OSError) as e:
            raise SendError(str(e)) from e

        logger.info(f"Email sent to {email.recipient}: {email.subject}")


class ConsoleTransport:
    """Log the message instead of sending it (development)."""

    def send(self, email):
        logger.info(
            "Console mail transport:\n%s", email.to_mime().as_string()
        )


def init_mail(app, transport=None):
    """Attach the mail transport to the app.

    Args:
        app:        Flask app.
        transport:  Ready-made transport (tests, custom relays). When None,
                    one is built from MAIL_BACKEND.
    """
    if transport is None:
        backend = app.config.get("MAIL_BACKEND", "smtp")
        if backend == "console":
            transport = ConsoleTransport()
        elif backend == "smtp":
            transport = SmtpTransport.from_config(app.config)
        else:
            raise RuntimeError(f"Unknown MAIL_BACKEND: {backend!r}")

    app.extensions["mail_transport"] = transport


def build_contact_email(submission, recipient, subject):
    """
    Compose the relay email for a sanitized submission.

    The visitor becomes the From display name/address and the Reply-To, so
    the owner can answer directly. Line breaks in the name are collapsed to
    keep the header on one line.
    """
    display_name = " ".join(submission.name.split())
    return Email(
        sender=formataddr((display_name, submission.email)),
        recipient=recipient,
        subject=subject,
        body=(
            f"Name: {submission.name}\n"
            f"Email: {submission.email}\n"
            f"Message: {submission.message}"
        ),
        reply_to=submission.email,
    )


def send_email(email):
    """
    Send one email through the app's transport and block until it is done.

    Raises:
        SendError: If the transport rejects or cannot deliver the message.
    """
    transport = current_app.extensions["mail_transport"]
    transport.send(email)
