"""Request and response contracts for the email relay endpoints."""

from typing import ClassVar, Optional

from pydantic import BaseModel, ConfigDict, Field


class EmailResponse(BaseModel):
    success: bool
    message: str


class ConsultationDetails(BaseModel):
    model_config = ConfigDict(extra="ignore")

    type: str = ""
    date: str = ""
    time: str = ""


class SignInCredentials(BaseModel):
    model_config = ConfigDict(extra="ignore")

    username: str = ""
    email: str = ""


class EmailRequest(BaseModel):
    """Base for relay payloads; missing_message is returned when validation fails."""

    # reset codes may arrive as JSON numbers
    model_config = ConfigDict(extra="ignore", str_strip_whitespace=True, coerce_numbers_to_str=True)

    missing_message: ClassVar[str] = "Email is required"

    # one bare address; header separators such as CR/LF never reach the message
    email: str = Field(..., min_length=1, pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


class WelcomeEmailRequest(EmailRequest):
    missing_message: ClassVar[str] = "Email and name are required"

    name: str = Field(..., min_length=1)


class PasswordChangeConfirmationRequest(WelcomeEmailRequest):
    pass


class PasswordResetEmailRequest(EmailRequest):
    missing_message: ClassVar[str] = "Email and reset token are required"

    resetToken: str = Field(..., min_length=1)


class PasswordResetCodeRequest(EmailRequest):
    missing_message: ClassVar[str] = "Email and reset code are required"

    resetCode: str = Field(..., min_length=1)


class SignInConfirmationRequest(EmailRequest):
    missing_message: ClassVar[str] = "Email, name, and sign-in time are required"

    name: str = Field(..., min_length=1)
    signInTime: str = Field(..., min_length=1)
    credentials: Optional[SignInCredentials] = None


class ConsultationConfirmationRequest(EmailRequest):
    missing_message: ClassVar[str] = "Email, name, and consultation details are required"

    name: str = Field(..., min_length=1)
    consultationDetails: ConsultationDetails


class GoogleMeetLinkRequest(EmailRequest):
    missing_message: ClassVar[str] = (
        "Email, name, consultation details, and meet link are required"
    )

    name: str = Field(..., min_length=1)
    consultationDetails: ConsultationDetails
    meetLink: str = Field(..., min_length=1)
