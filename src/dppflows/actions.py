"""Administrator portal actions returning success/error results."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from dppflows import logger
from dppflows.exceptions import QRCodeError
from dppflows.qr import generate_qr_code
from dppflows.typing.models import (
    ActionResult,
    EmailMessage,
    EmailTestRequest,
    NotificationRequest,
    QRCodeActionResult,
    QRCodeRequest,
)

if TYPE_CHECKING:
    from collections.abc import Mapping

    from dppflows.settings import Settings
    from dppflows.typing.protocol import EmailSender

INVALID_INPUT = "Invalid input."
INVALID_EMAIL = "Invalid email address."
QR_FAILED = "Failed to generate QR code image."
TEST_EMAIL_FAILED = "An unknown error occurred."

TEST_EMAIL_SUBJECT = "Test Email from Passportify"
TEST_EMAIL_HTML = "<h1>Success!</h1><p>This is a test email from your Passportify Email Engine configuration.</p>"


def send_test_email(payload: Mapping[str, Any], *, sender: EmailSender) -> ActionResult:
    """Send a configuration test email.

    Args:
        payload (Mapping[str, Any]): `{"email": ...}`.
        sender (EmailSender): Email provider.

    Returns:
        ActionResult: Result with the provider error message on failure.
    """
    try:
        request = EmailTestRequest.model_validate(payload)
    except ValidationError:
        return ActionResult(success=False, error=INVALID_EMAIL)

    try:
        sender.send(EmailMessage(to=request.email, subject=TEST_EMAIL_SUBJECT, html=TEST_EMAIL_HTML))
    except Exception as exc:
        logger.exception("Test email failed")
        return ActionResult(success=False, error=str(exc) or TEST_EMAIL_FAILED)
    return ActionResult(success=True)


def generate_qr_code_action(payload: Mapping[str, Any], *, settings: Settings) -> QRCodeActionResult:
    """Generate a passport QR code.

    Args:
        payload (Mapping[str, Any]): `{"productId": ..., "versionId": ...}`.
        settings (Settings): Runtime settings.

    Returns:
        QRCodeActionResult: Result carrying the QR code record on success.
    """
    try:
        request = QRCodeRequest.model_validate(payload)
    except ValidationError:
        return QRCodeActionResult(success=False, error=INVALID_INPUT)

    try:
        log = generate_qr_code(request, settings)
    except QRCodeError:
        logger.exception("QR code generation failed")
        return QRCodeActionResult(success=False, error=QR_FAILED)
    return QRCodeActionResult(success=True, data=log)


def send_notification(payload: Mapping[str, Any]) -> ActionResult:
    """Accept a broadcast notification.

    Notifications are only logged; nothing is delivered or stored.

    Args:
        payload (Mapping[str, Any]): Title, description, optional link and audience.

    Returns:
        ActionResult: Validation result.
    """
    try:
        request = NotificationRequest.model_validate(payload)
    except ValidationError:
        return ActionResult(success=False, error=INVALID_INPUT)

    logger.info("Sending notification", extra=request.model_dump(mode="json"))
    return ActionResult(success=True)
