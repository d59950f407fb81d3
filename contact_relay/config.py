import os


def _env_flag(name, default):
    return os.environ.get(name, default).lower() in ("1", "true", "yes")


class Config:
    """Base configuration. Shared across all environments."""

    # --- Required ---
    SECRET_KEY = os.environ.get("SECRET_KEY")

    PORT = int(os.environ.get("PORT", 3000))

    # Cap request bodies; a valid submission is a few KB at most.
    MAX_CONTENT_LENGTH = 64 * 1024

    # --- Email (SMTP relay) ---
    # "smtp" relays through MAIL_SMTP_HOST, "console" only logs the message.
    MAIL_BACKEND = os.environ.get("MAIL_BACKEND", "smtp")
    MAIL_SMTP_HOST = os.environ.get("MAIL_SMTP_HOST", "smtp.gmail.com")
    MAIL_SMTP_PORT = int(os.environ.get("MAIL_SMTP_PORT", 587))
    MAIL_SMTP_TIMEOUT = int(os.environ.get("MAIL_SMTP_TIMEOUT", 30))
    MAIL_USERNAME = os.environ.get("MAIL_USERNAME")
    MAIL_PASSWORD = os.environ.get("MAIL_PASSWORD")          # e.g. a Google App Password
    MAIL_CONTACT_TO = os.environ.get("MAIL_CONTACT_TO")
    MAIL_CONTACT_SUBJECT = os.environ.get(
        "MAIL_CONTACT_SUBJECT", "New contact form message"
    )

    # --- Contact form rules ---
    CONTACT_NAME_LENGTH = (2, 50)
    CONTACT_MESSAGE_LENGTH = (10, 1000)

    # --- Rate limiting (Flask-Limiter) ---
    CONTACT_RATE_LIMIT = os.environ.get("CONTACT_RATE_LIMIT", "10 per minute")
    RATELIMIT_MESSAGE = "Too many requests from this IP. Please try again later."

    # --- CORS (Flask-CORS) ---
    CORS_ORIGIN = os.environ.get("CORS_ORIGIN", "http://localhost:3000")
    CORS_METHODS = ["GET", "POST", "OPTIONS"]
    CORS_ALLOW_HEADERS = ["Content-Type", "CSRF-Token"]
    CORS_SUPPORTS_CREDENTIALS = True

    # --- Reverse proxy ---
    # Number of X-Forwarded-For hops to trust (0 = use the socket address).
    TRUSTED_PROXY_COUNT = int(os.environ.get("TRUSTED_PROXY_COUNT", 0))

    # --- Session / cookies ---
    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = "Strict"

    # --- WTF / CSRF ---
    WTF_CSRF_ENABLED = _env_flag("CSRF_ENABLED", "true")
    WTF_CSRF_HEADERS = ["CSRF-Token", "X-CSRFToken", "X-CSRF-Token"]
    # The form is usually hosted on CORS_ORIGIN, so the HTTPS Referer is
    # another host; origin is enforced by CORS instead.
    WTF_CSRF_SSL_STRICT = False

    @staticmethod
    def validate():
        """Fail fast if required env vars are missing."""
        required = [
            "SECRET_KEY",
            "MAIL_CONTACT_TO",
        ]
        if os.environ.get("MAIL_BACKEND", "smtp") == "smtp":
            required += ["MAIL_USERNAME", "MAIL_PASSWORD"]
        missing = [v for v in required if not os.environ.get(v)]
        if missing:
            raise RuntimeError(
                f"Missing required environment variables: {', '.join(missing)}"
            )


class DevConfig(Config):
    """Local development. Mail is logged, not sent, unless MAIL_BACKEND says otherwise."""

    DEBUG = True
    SECRET_KEY = os.environ.get("SECRET_KEY", "dev-secret-key-not-for-production")
    MAIL_BACKEND = os.environ.get("MAIL_BACKEND", "console")
    MAIL_CONTACT_TO = os.environ.get("MAIL_CONTACT_TO", "contact@localhost")
    SESSION_COOKIE_SECURE = False


class TestConfig(Config):
    """Testing: console mail, CSRF disabled, fixed origin."""

    TESTING = True
    DEBUG = True
    SECRET_KEY = "test-secret-key-not-for-production"
    MAIL_BACKEND = "console"
    MAIL_USERNAME = "relay@example.com"
    MAIL_PASSWORD = "app-password"
    MAIL_CONTACT_TO = "owner@example.com"
    MAIL_CONTACT_SUBJECT = "New contact form message"
    CONTACT_RATE_LIMIT = "10 per minute"
    CORS_ORIGIN = "https://www.example.com"
    TRUSTED_PROXY_COUNT = 0
    WTF_CSRF_ENABLED = False  # enabled per-test where CSRF is under test
    SESSION_COOKIE_SECURE = False
    SERVER_NAME = "localhost"

    @staticmethod
    def validate():
        """Skip validation in test mode, everything is hardcoded."""
        pass


class ProdConfig(Config):
    """Production behind a single reverse proxy."""

    DEBUG = False
    SESSION_COOKIE_SECURE = True
    TRUSTED_PROXY_COUNT = int(os.environ.get("TRUSTED_PROXY_COUNT", 1))


config_by_name = {
    "development": DevConfig,
    "production": ProdConfig,
    "testing": TestConfig,
}
