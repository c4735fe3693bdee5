from __future__ import annotations

from email.message import EmailMessage
from typing import List, Optional

import pytest
from flask import Flask
from flask.testing import FlaskClient

from backend.app import create_app
from backend.config import Settings
from backend.services.mailer import EmailService


class RecordingTransport:
    """Keeps sent messages in memory; raises `error` instead when one is set."""

    def __init__(self) -> None:
        self.sent: List[EmailMessage] = []
        self.error: Optional[Exception] = None

    def send(self, message: EmailMessage) -> None:
        if self.error is not None:
            raise self.error
        self.sent.append(message)


@pytest.fixture()
def settings() -> Settings:
    return Settings(_env_file=None, SENDGRID_API_KEY="SG.test-key", LOG_LEVEL="WARNING")


@pytest.fixture()
def transport() -> RecordingTransport:
    return RecordingTransport()


@pytest.fixture()
def app(settings: Settings, transport: RecordingTransport) -> Flask:
    flask_app = create_app(
        settings=settings,
        email_service=EmailService.from_settings(settings, transport=transport),
    )
    flask_app.config["TESTING"] = True
    return flask_app


@pytest.fixture()
def client(app: Flask) -> FlaskClient:
    with app.test_client() as test_client:
        yield test_client
