"""Shared test fixtures for the contact relay test suite.

Provides:
- app: Flask app configured for testing (CSRF off, fake mail transport)
- client: Flask test client
- outbox: the fake transport; inspect .sent, set .error to make sends fail
- reset_limiter: clears rate-limit counters between tests
"""

import pytest

from contact_relay import create_app
from contact_relay.extensions import limiter
from contact_relay.services.email_service import SendError


class FakeTransport:
    """Records emails instead of sending them."""

    def __init__(self):
        self.sent = []
        self.error = None

    def send(self, email):
        if self.error is not None:
            raise SendError(self.error)
        self.sent.append(email)


@pytest.fixture(scope="session")
def transport():
    return FakeTransport()


@pytest.fixture(scope="session")
def app(transport):
    """Create the Flask application configured for testing."""
    app = create_app("testing", mail_transport=transport)
    yield app


@pytest.fixture
def outbox(transport):
    """Fresh outbox for each test."""
    transport.sent = []
    transport.error = None
    yield transport
    transport.sent = []
    transport.error = None


@pytest.fixture(autouse=True)
def reset_limiter(app):
    """Every test starts with empty rate-limit counters."""
    with app.app_context():
        limiter.reset()
    yield


@pytest.fixture
def client(app):
    """Flask test client."""
    return app.test_client()


@pytest.fixture
def valid_payload():
    return {
        "name": "Jo",
        "email": "jo@example.com",
        "message": "Hello there, this is ten+ chars",
    }
