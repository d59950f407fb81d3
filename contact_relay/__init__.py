import os
import logging

import click
from flask import Flask, jsonify, render_template
from flask_wtf.csrf import CSRFError, generate_csrf
from werkzeug.middleware.proxy_fix import ProxyFix

from contact_relay.config import config_by_name
from contact_relay.extensions import cors, csrf, limiter


def create_app(config_name=None, mail_transport=None):
    """Application factory.

    Args:
        config_name:     Key into config_by_name; defaults to $FLASK_ENV.
        mail_transport:  Optional transport object to use instead of the one
                         MAIL_BACKEND selects.
    """

    if config_name is None:
        config_name = os.environ.get("FLASK_ENV", "development")

    app = Flask(__name__)
    app.config.from_object(config_by_name[config_name])

    # --- Validate required env vars (skip in testing) ---
    if config_name != "testing":
        try:
            config_by_name[config_name].validate()
        except RuntimeError as e:
            app.logger.warning(f"Config validation: {e}")

    # --- Trust X-Forwarded-For from the reverse proxy ---
    proxy_count = app.config["TRUSTED_PROXY_COUNT"]
    if proxy_count:
        app.wsgi_app = ProxyFix(app.wsgi_app, x_for=proxy_count, x_proto=proxy_count)

    # --- Init extensions ---
    # Limiter hook first: requests rejected by CSRF still count against the budget
    limiter.init_app(app)
    csrf.init_app(app)
    cors.init_app(
        app,
        resources={r"/api/*": {"origins": [app.config["CORS_ORIGIN"]]}},
        methods=app.config["CORS_METHODS"],
        allow_headers=app.config["CORS_ALLOW_HEADERS"],
        supports_credentials=app.config["CORS_SUPPORTS_CREDENTIALS"],
    )

    from contact_relay.services.email_service import init_mail
    init_mail(app, transport=mail_transport)

    # --- Security headers ---
    from contact_relay.middleware.security_headers import init_security_headers
    init_security_headers(app)

    # --- Register blueprints ---
    from contact_relay.blueprints.contact import contact_bp

    app.register_blueprint(contact_bp)

    # --- Root route ---
    @app.route("/")
    def index():
        """Contact page with the CSRF token injected."""
        return render_template(
            "index.html",
            csrf_token=generate_csrf(),
            csrf_enabled=app.config["WTF_CSRF_ENABLED"],
        )

    # --- Error handlers ---
    @app.errorhandler(CSRFError)
    def csrf_error(e):
        return jsonify(message="Invalid or missing CSRF token."), 403

    @app.errorhandler(404)
    def not_found(e):
        return jsonify(message="Not found."), 404

    @app.errorhandler(405)
    def method_not_allowed(e):
        return jsonify(message="Method not allowed."), 405

    @app.errorhandler(413)
    def too_large(e):
        return jsonify(message="Request is too large."), 413

    @app.errorhandler(429)
    def rate_limited(e):
        return app.config["RATELIMIT_MESSAGE"], 429, {"Content-Type": "text/plain; charset=utf-8"}

    @app.errorhandler(500)
    def server_error(e):
        return jsonify(message="Something went wrong. Please try again later."), 500

    # --- CLI commands ---
    register_cli(app)

    # --- Logging ---
    if not app.debug:
        logging.basicConfig(level=logging.INFO)

    return app


def register_cli(app):
    """Register custom CLI commands with the Flask app."""

    @app.cli.command("send-test-email")
    @click.option("--to", "recipient", default=None, help="Recipient (defaults to MAIL_CONTACT_TO)")
    def send_test_email(recipient):
        """Send one message through the configured mail transport.

        Usage:
            flask send-test-email
            flask send-test-email --to someone@example.com
        """
        from contact_relay.services.email_service import Email, SendError, send_email

        recipient = recipient or app.config.get("MAIL_CONTACT_TO")
        if not recipient:
            click.echo("ERROR: no recipient. Set MAIL_CONTACT_TO or pass --to.")
            return

        sender = app.config.get("MAIL_USERNAME") or "contact-relay@localhost"
        email = Email(
            sender=sender,
            recipient=recipient,
            subject="Contact relay test message",
            body="If you can read this, the mail relay is configured correctly.",
        )

        try:
            send_email(email)
        except SendError as e:
            click.echo(f"ERROR: {e}")
            return

        click.echo(f"Test email sent to {recipient} via {app.config['MAIL_BACKEND']}.")
