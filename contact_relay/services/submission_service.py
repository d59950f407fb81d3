"""Submission service: validation and sanitization of contact form input.

validate() runs an ordered list of (field, check, message) rules and stops
at the first failure, so each rejected submission reports exactly one
problem. Nothing here touches Flask; the view passes in the configured
length bounds.

All fields are sanitized with bleach.clean() before they go anywhere near
an email, and the rules run again on the sanitized values. bleach escapes
what it keeps, so the plain-text email carries "fish &amp; chips" for
"fish & chips".
"""

import re
from dataclasses import dataclass, fields, replace

import bleach

# Simple email regex, not exhaustive, just sanity-check
EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


@dataclass(frozen=True)
class Submission:
    """One contact form submission. Lives for a single request."""

    name: str
    email: str
    message: str


class ValidationError(ValueError):
    """Raised for the first rule a submission breaks."""

    def __init__(self, field, message):
        super().__init__(message)
        self.field = field
        self.message = message


def _text(data, key):
    value = data.get(key)
    if not isinstance(value, str):
        return ""
    return value.strip()


def _length_between(bounds):
    low, high = bounds
    return lambda value: low <= len(value) <= high


def _rules(name_length, message_length):
    return [
        (
            "name",
            _length_between(name_length),
            f"Name must be between {name_length[0]} and {name_length[1]} characters.",
        ),
        (
            "email",
            lambda value: bool(EMAIL_RE.match(value)),
            "Invalid email address.",
        ),
        (
            "message",
            _length_between(message_length),
            f"Message must be between {message_length[0]} and {message_length[1]} characters.",
        ),
    ]


def _check(values, name_length, message_length):
    for field, check, message in _rules(name_length, message_length):
        if not values[field] or not check(values[field]):
            raise ValidationError(field, message)


def validate(data, name_length=(2, 50), message_length=(10, 1000)):
    """Check a raw submission and return it as a Submission.

    Args:
        data: Mapping decoded from the request body. Missing keys and
            non-string values count as empty.
        name_length: Inclusive (min, max) length for the name.
        message_length: Inclusive (min, max) length for the message.

    Returns:
        Submission with whitespace-trimmed fields (not yet sanitized).

    Raises:
        ValidationError: For the first rule that fails, in field order
            name, email, message.
    """
    if not isinstance(data, dict):
        data = {}

    values = {key: _text(data, key) for key in ("name", "email", "message")}
    _check(values, name_length, message_length)

    return Submission(**values)


def sanitize(text):
    """Strip all HTML tags and attributes, leaving plain text.

    The result is HTML-escaped ("&" becomes "&amp;", a stray "<" becomes
    "&lt;"), which keeps sanitize() idempotent.
    """
    return bleach.clean(text, tags=[], attributes={}, strip=True).strip()


def sanitize_submission(submission, name_length=(2, 50), message_length=(10, 1000)):
    """Sanitize every field and re-check the rules on the result.

    The email is relayed as validated; an address that sanitizing would
    alter (markup or escapable characters) is rejected instead.

    Raises:
        ValidationError: If a sanitized field no longer satisfies its rule,
            e.g. a markup-only message that cleans down to nothing.
    """
    values = {f.name: getattr(submission, f.name) for f in fields(submission)}
    clean = {key: sanitize(value) for key, value in values.items()}

    _check(clean, name_length, message_length)

    if clean["email"] != values["email"]:
        raise ValidationError("email", "Invalid email address.")

    return replace(submission, **clean)
