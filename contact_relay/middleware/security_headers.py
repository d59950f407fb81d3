"""Security headers middleware.

SecurityHeaders is built once from app config and applied to every
response by an after_request hook. Scripts and fetch/XHR may only come from
this host and the configured CORS origin (the site that embeds the form).
HSTS is sent outside debug mode only.
"""


class SecurityHeaders:
    """Static response headers derived from config at startup."""

    def __init__(self, allowed_origin, hsts=True):
        sources = "'self'"
        if allowed_origin:
            sources = f"'self' {allowed_origin}"

        self.headers = {
            # Prevent MIME type sniffing
            "X-Content-Type-Options": "nosniff",
            # Prevent clickjacking
            "X-Frame-Options": "DENY",
            # Control referrer information
            "Referrer-Policy": "strict-origin-when-cross-origin",
            "Content-Security-Policy": (
                "default-src 'self'; "
                f"script-src {sources}; "
                f"connect-src {sources}; "
                "base-uri 'self'; "
                "frame-ancestors 'none';"
            ),
        }
        if hsts:
            self.headers["Strict-Transport-Security"] = (
                "max-age=31536000; includeSubDomains; preload"
            )

    @classmethod
    def from_app(cls, app):
        return cls(app.config.get("CORS_ORIGIN"), hsts=not app.debug)

    def apply(self, response):
        for name, value in self.headers.items():
            response.headers[name] = value
        return response


def init_security_headers(app):
    """Register the security headers hook on the app."""
    policy = SecurityHeaders.from_app(app)
    app.extensions["security_headers"] = policy
    app.after_request(policy.apply)
