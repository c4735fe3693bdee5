"""Application factory and app-wide configuration."""

import logging
from typing import Optional

from flask import Flask
from flask_cors import CORS

from backend.app.api.email_routes import email_bp
from backend.app.api.routes import api_bp
from backend.config import Settings, get_settings
from backend.services.mailer import EmailService

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def create_app(
    settings: Optional[Settings] = None,
    email_service: Optional[EmailService] = None,
) -> Flask:
    """Build the Flask app instance."""
    settings = settings or get_settings()
    configure_logging(settings.LOG_LEVEL)

    app = Flask(__name__)
    app.config["SETTINGS"] = settings
    app.extensions["email_service"] = email_service or EmailService.from_settings(settings)

    CORS(
        app,
        resources={r"/api/*": {"origins": settings.CORS_ORIGINS}},
        supports_credentials=True,
    )

    app.register_blueprint(api_bp, url_prefix="/api")
    app.register_blueprint(email_bp, url_prefix="/api")

    if not settings.email_configured:
        logger.warning("SENDGRID_API_KEY is not set; email endpoints will report delivery failures")
    return app
