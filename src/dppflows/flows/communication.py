"""Campaign email, email refinement and one-time password flows."""

from __future__ import annotations

import re
import secrets
from typing import TYPE_CHECKING, Any

from dppflows import logger
from dppflows.pipeline import FlowDefinition, run_flow
from dppflows.prompts import CAMPAIGN_EMAIL_TEMPLATE, REFINE_EMAIL_TEMPLATE
from dppflows.typing.enums import FlowName, ViolationKind
from dppflows.typing.models import (
    CampaignEmailInput,
    CampaignEmailOutput,
    EmailMessage,
    FieldViolation,
    RefineEmailTemplateInput,
    RefineEmailTemplateOutput,
    SendOtpInput,
    SendOtpOutput,
)
from dppflows.validation import validate_input

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping

    from dppflows.typing.protocol import CompletionBackend, EmailSender

_PLACEHOLDER_RE = re.compile(r"\{\{[^{}]+\}\}")

OTP_SUBJECT = "Your Passportify Verification Code"


def template_placeholders(body: str) -> list[str]:
    """Return the distinct `{{...}}` placeholders of an email body, sorted.

    Args:
        body (str): Email body.

    Returns:
        list[str]: Placeholders.
    """
    return sorted(set(_PLACEHOLDER_RE.findall(body)))


def _placeholders_preserved(
    request: RefineEmailTemplateInput,
    reply: RefineEmailTemplateOutput,
) -> list[FieldViolation]:
    return [
        FieldViolation(
            location="refinedBody",
            kind=ViolationKind.CONSTRAINT_VIOLATED,
            message=f"Placeholder {placeholder} was removed or altered",
        )
        for placeholder in template_placeholders(request.current_body)
        if placeholder not in reply.refined_body
    ]


CAMPAIGN_EMAIL_FLOW = FlowDefinition(
    name=FlowName.GENERATE_CAMPAIGN_EMAIL,
    description="Draft a supplier campaign email from an objective statement.",
    input_model=CampaignEmailInput,
    output_model=CampaignEmailOutput,
    template=CAMPAIGN_EMAIL_TEMPLATE,
)

REFINE_EMAIL_FLOW = FlowDefinition(
    name=FlowName.REFINE_EMAIL_TEMPLATE,
    description="Rewrite an email body under a style instruction, keeping its placeholders.",
    input_model=RefineEmailTemplateInput,
    output_model=RefineEmailTemplateOutput,
    template=REFINE_EMAIL_TEMPLATE,
    check=_placeholders_preserved,
)


def generate_campaign_email(
    request: CampaignEmailInput | Mapping[str, Any],
    *,
    backend: CompletionBackend,
) -> CampaignEmailOutput:
    """Draft a campaign email.

    Args:
        request (CampaignEmailInput | Mapping[str, Any]): Objective and sender company.
        backend (CompletionBackend): Generation backend.

    Returns:
        CampaignEmailOutput: Subject and markdown body.
    """
    return run_flow(CAMPAIGN_EMAIL_FLOW, request, backend=backend)


def refine_email_template(
    request: RefineEmailTemplateInput | Mapping[str, Any],
    *,
    backend: CompletionBackend,
) -> RefineEmailTemplateOutput:
    """Refine an email body.

    Args:
        request (RefineEmailTemplateInput | Mapping[str, Any]): Current body and instruction.
        backend (CompletionBackend): Generation backend.

    Raises:
        OutputValidationError: If the reply drops a placeholder of the current body.

    Returns:
        RefineEmailTemplateOutput: Refined body.
    """
    return run_flow(REFINE_EMAIL_FLOW, request, backend=backend)


def generate_otp() -> str:
    """Return a random 6-digit one-time password."""
    return str(100_000 + secrets.randbelow(900_000))


def build_otp_email(email: str, otp: str, *, ttl_minutes: int = 10) -> EmailMessage:
    """Build the verification code email.

    Args:
        email (str): Recipient.
        otp (str): One-time password.
        ttl_minutes (int): Validity window announced to the user.

    Returns:
        EmailMessage: Message to send.
    """
    html = (
        f"<h1>{OTP_SUBJECT}</h1>"
        f"<p>Your one-time password is: <strong>{otp}</strong></p>"
        f"<p>This code will expire in {ttl_minutes} minutes.</p>"
        "<p>If you did not request this, please ignore this email.</p>"
    )
    return EmailMessage(to=email, subject=OTP_SUBJECT, html=html)


def send_otp(
    request: SendOtpInput | Mapping[str, Any],
    *,
    sender: EmailSender,
    ttl_minutes: int = 10,
    otp_factory: Callable[[], str] = generate_otp,
) -> SendOtpOutput:
    """Generate a one-time password and email it.

    The code is returned for simulation purposes only; it is not stored.

    Args:
        request (SendOtpInput | Mapping[str, Any]): Recipient address.
        sender (EmailSender): Email provider.
        ttl_minutes (int): Validity window announced in the email.
        otp_factory (Callable[[], str]): Code generator.

    Returns:
        SendOtpOutput: `success=False` with an empty code when dispatch fails.
    """
    payload = validate_input("send-otp", SendOtpInput, request)
    otp = otp_factory()
    try:
        sender.send(build_otp_email(payload.email, otp, ttl_minutes=ttl_minutes))
    except Exception:
        logger.exception("Failed to send OTP email")
        return SendOtpOutput(success=False, otp="")

    logger.info("One-time password sent")
    return SendOtpOutput(success=True, otp=otp)
