"""Email relay endpoints: validate required fields, send, report the outcome."""

import logging
from http import HTTPStatus
from typing import Any, Callable, Type, TypeVar

from flask import Blueprint, current_app, jsonify, request
from pydantic import ValidationError
from werkzeug.exceptions import HTTPException

from backend.schemas.email import (
    ConsultationConfirmationRequest,
    EmailRequest,
    EmailResponse,
    GoogleMeetLinkRequest,
    PasswordChangeConfirmationRequest,
    PasswordResetCodeRequest,
    PasswordResetEmailRequest,
    SignInConfirmationRequest,
    WelcomeEmailRequest,
)
from backend.services.mailer import EmailService

logger = logging.getLogger(__name__)

email_bp = Blueprint("email", __name__)

RequestT = TypeVar("RequestT", bound=EmailRequest)


@email_bp.errorhandler(Exception)
def _handle_unexpected_error(exc: Exception):
    if isinstance(exc, HTTPException):
        return exc
    logger.exception("Email relay endpoint failed")
    body = EmailResponse(success=False, message="Internal server error")
    return jsonify(body.model_dump()), HTTPStatus.INTERNAL_SERVER_ERROR


def _relay(
    schema: Type[RequestT],
    send: Callable[[EmailService, RequestT], EmailResponse],
) -> Any:
    raw_payload = request.get_json(silent=True)
    try:
        payload = schema.model_validate(raw_payload if isinstance(raw_payload, dict) else {})
    except ValidationError:
        body = EmailResponse(success=False, message=schema.missing_message)
        return jsonify(body.model_dump()), HTTPStatus.BAD_REQUEST

    result = send(current_app.extensions["email_service"], payload)
    status = HTTPStatus.OK if result.success else HTTPStatus.INTERNAL_SERVER_ERROR
    return jsonify(result.model_dump()), status


@email_bp.post("/send-welcome-email")
def send_welcome_email() -> Any:
    return _relay(
        WelcomeEmailRequest,
        lambda service, p: service.send_welcome_email(p.email, p.name),
    )


@email_bp.post("/send-password-reset-email")
def send_password_reset_email() -> Any:
    return _relay(
        PasswordResetEmailRequest,
        lambda service, p: service.send_password_reset_email(p.email, p.resetToken),
    )


@email_bp.post("/send-password-reset-code")
def send_password_reset_code() -> Any:
    return _relay(
        PasswordResetCodeRequest,
        lambda service, p: service.send_password_reset_code(p.email, p.resetCode),
    )


@email_bp.post("/send-signin-confirmation")
def send_signin_confirmation() -> Any:
    return _relay(
        SignInConfirmationRequest,
        lambda service, p: service.send_signin_confirmation(
            p.email, p.name, p.signInTime, p.credentials
        ),
    )


@email_bp.post("/send-consultation-confirmation")
def send_consultation_confirmation() -> Any:
    return _relay(
        ConsultationConfirmationRequest,
        lambda service, p: service.send_consultation_confirmation(
            p.email, p.name, p.consultationDetails
        ),
    )


@email_bp.post("/send-google-meet-link")
def send_google_meet_link() -> Any:
    return _relay(
        GoogleMeetLinkRequest,
        lambda service, p: service.send_google_meet_link(
            p.email, p.name, p.consultationDetails, p.meetLink
        ),
    )


@email_bp.post("/send-password-change-confirmation")
def send_password_change_confirmation() -> Any:
    return _relay(
        PasswordChangeConfirmationRequest,
        lambda service, p: service.send_password_change_confirmation(p.email, p.name),
    )
