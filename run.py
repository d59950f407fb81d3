"""Local development entry point.

Usage:
    python run.py
    PORT=8080 python run.py

In production run it under a WSGI server instead, e.g.:
    gunicorn "contact_relay:create_app()"
"""

from dotenv import load_dotenv

load_dotenv()  # Load .env before anything else

from contact_relay import create_app

app = create_app()

if __name__ == "__main__":
    app.logger.info(f"Contact relay listening on port {app.config['PORT']}")
    app.run(debug=app.debug, host="0.0.0.0", port=app.config["PORT"])
