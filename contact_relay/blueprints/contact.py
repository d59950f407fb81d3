"""
Contact form blueprint (/api/*)

Receives contact form submissions from the site configured in CORS_ORIGIN,
re-validates them and relays them by email to MAIL_CONTACT_TO.

Route Map:
  GET  /api/csrf-token  Issue an anti-forgery token for the form
  POST /api/contact     Validate, sanitize and relay a submission
"""

import logging

from flask import Blueprint, current_app, jsonify, request
from flask_wtf.csrf import generate_csrf

from contact_relay.extensions import limiter
from contact_relay.services.email_service import (
    SendError,
    build_contact_email,
    send_email,
)
from contact_relay.services.submission_service import (
    ValidationError,
    sanitize_submission,
    validate,
)

contact_bp = Blueprint("contact", __name__, url_prefix="/api")

logger = logging.getLogger(__name__)


def _contact_rate_limit():
    return current_app.config["CONTACT_RATE_LIMIT"]


@contact_bp.route("/csrf-token", methods=["GET"])
def csrf_token():
    """Return a fresh CSRF token; the form echoes it in the CSRF-Token header."""
    return jsonify(csrfToken=generate_csrf())


@contact_bp.route("/contact", methods=["POST"])
@limiter.limit(_contact_rate_limit, methods=["POST"])
def send_contact():
    """
    Accept a JSON contact form submission.

    Expects: { name, email, message }
    Returns: { message: "..." } with 200, 400 or 500.
    """
    data = request.get_json(silent=True) or {}

    bounds = dict(
        name_length=current_app.config["CONTACT_NAME_LENGTH"],
        message_length=current_app.config["CONTACT_MESSAGE_LENGTH"],
    )

    # --- Validation, then sanitize and re-check ---
    try:
        clean = sanitize_submission(validate(data, **bounds), **bounds)
    except ValidationError as e:
        return jsonify(message=e.message), 400

    # --- Send email (one attempt, no retry) ---
    email = build_contact_email(
        clean,
        recipient=current_app.config["MAIL_CONTACT_TO"],
        subject=current_app.config["MAIL_CONTACT_SUBJECT"],
    )
    try:
        send_email(email)
    except SendError as e:
        logger.error(f"Failed to relay contact message from {clean.email}: {e}")
        return jsonify(
            message="Something went wrong while sending your message."
        ), 500

    logger.info(f"Contact form relayed for {clean.name} <{clean.email}>")

    return jsonify(message="Message received and forwarded. Thank you!"), 200
