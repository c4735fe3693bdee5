"""Transactional email delivery through SendGrid's SMTP relay."""

from __future__ import annotations

import logging
import smtplib
from email.message import EmailMessage
from email.utils import formataddr
from typing import Any, Optional, Protocol
from urllib.parse import urlencode

from flask import render_template

from backend.config import Settings
from backend.schemas.email import (
    ConsultationDetails,
    EmailResponse,
    SignInCredentials,
)

logger = logging.getLogger(__name__)


class EmailDeliveryError(RuntimeError):
    """Raised by a transport that cannot hand the message over."""


class Transport(Protocol):
    def send(self, message: EmailMessage) -> None: ...


class SmtpTransport:
    def __init__(
        self,
        host: str,
        port: int,
        username: str,
        password: Optional[str],
        use_tls: bool = True,
        timeout: float = 10.0,
    ):
        self.host = host
        self.port = port
        self.username = username
        self.password = password
        self.use_tls = use_tls
        self.timeout = timeout

    @classmethod
    def from_settings(cls, settings: Settings) -> "SmtpTransport":
        return cls(
            host=settings.SMTP_HOST,
            port=settings.SMTP_PORT,
            username=settings.SMTP_USERNAME,
            password=settings.SENDGRID_API_KEY,
            use_tls=settings.SMTP_USE_TLS,
            timeout=settings.SMTP_TIMEOUT,
        )

    def send(self, message: EmailMessage) -> None:
        if not self.password:
            raise EmailDeliveryError("SendGrid API key is not configured")

        with smtplib.SMTP(self.host, self.port, timeout=self.timeout) as server:
            server.ehlo()
            if self.use_tls:
                server.starttls()
                server.ehlo()
            server.login(self.username, self.password)
            server.send_message(message)


class EmailService:
    """Builds each notification from its template and hands it to the transport.

    Every send_* method returns an EmailResponse; delivery failures are logged
    and reported as success=False with the error text, never raised.
    Rendering uses Flask templates, so calls need an application context.
    """

    def __init__(self, transport: Transport, from_email: str, from_name: str, app_url: str):
        self.transport = transport
        self.from_email = from_email
        self.from_name = from_name
        self.app_url = app_url.rstrip("/")

    @classmethod
    def from_settings(cls, settings: Settings, transport: Optional[Transport] = None) -> "EmailService":
        return cls(
            transport=transport or SmtpTransport.from_settings(settings),
            from_email=settings.MAIL_FROM_EMAIL,
            from_name=settings.MAIL_FROM_NAME,
            app_url=settings.APP_URL,
        )

    def _deliver(
        self,
        to_email: str,
        subject: str,
        template: str,
        success_message: str,
        **context: Any,
    ) -> EmailResponse:
        html = render_template(
            template,
            to_email=to_email,
            app_url=self.app_url,
            support_email=self.from_email,
            **context,
        )

        message = EmailMessage()
        message["Subject"] = subject
        message["From"] = formataddr((self.from_name, self.from_email))
        message["To"] = to_email
        message.set_content(html, subtype="html")

        try:
            self.transport.send(message)
        except (EmailDeliveryError, smtplib.SMTPException, OSError) as exc:
            logger.error("Sending %r to %s failed: %s", subject, to_email, exc)
            return EmailResponse(success=False, message=str(exc) or exc.__class__.__name__)

        logger.info("Sent %r to %s", subject, to_email)
        return EmailResponse(success=True, message=success_message)

    def send_welcome_email(self, to_email: str, name: str) -> EmailResponse:
        return self._deliver(
            to_email,
            "Welcome to Opessocius - Your Investment Journey Begins!",
            "email/welcome.html",
            "Welcome email sent successfully",
            name=name,
            dashboard_url=f"{self.app_url}/dashboard",
        )

    def send_password_reset_email(self, to_email: str, reset_token: str) -> EmailResponse:
        return self._deliver(
            to_email,
            "Reset Your Opessocius Password",
            "email/password_reset.html",
            "Password reset email sent successfully",
            reset_url=f"{self.app_url}/reset-password?{urlencode({'token': reset_token})}",
        )

    def send_password_reset_code(self, to_email: str, reset_code: str) -> EmailResponse:
        return self._deliver(
            to_email,
            "Your Password Reset Code - Opessocius",
            "email/password_reset_code.html",
            "Password reset code sent successfully",
            reset_code=reset_code,
        )

    def send_password_change_confirmation(self, to_email: str, name: str) -> EmailResponse:
        return self._deliver(
            to_email,
            "Password Changed Successfully - Opessocius",
            "email/password_changed.html",
            "Password change confirmation sent successfully",
            name=name,
        )

    def send_signin_confirmation(
        self,
        to_email: str,
        name: str,
        sign_in_time: str,
        credentials: Optional[SignInCredentials] = None,
    ) -> EmailResponse:
        return self._deliver(
            to_email,
            "Sign-In Confirmation - Opessocius",
            "email/signin_confirmation.html",
            "Sign-in confirmation sent successfully",
            name=name,
            sign_in_time=sign_in_time,
            credentials=credentials,
        )

    def send_consultation_confirmation(
        self,
        to_email: str,
        name: str,
        details: ConsultationDetails,
    ) -> EmailResponse:
        return self._deliver(
            to_email,
            "Consultation Confirmed - Opessocius",
            "email/consultation_confirmation.html",
            "Consultation confirmation sent successfully",
            name=name,
            details=details,
        )

    def send_google_meet_link(
        self,
        to_email: str,
        name: str,
        details: ConsultationDetails,
        meet_link: str,
    ) -> EmailResponse:
        return self._deliver(
            to_email,
            "Your Consultation is Starting Soon - Google Meet Link",
            "email/google_meet_link.html",
            "Google Meet link email sent successfully",
            name=name,
            details=details,
            meet_link=meet_link,
        )
