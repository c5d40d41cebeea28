"""Email and notification models."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, HttpUrl

from dppflows.typing.enums import NotificationAudience
from dppflows.typing.models.common import EmailAddress, FlowModel


class CampaignEmailInput(FlowModel):
    """Request for a supplier campaign email draft."""

    campaign_objective: str = Field(
        description="The goal of the campaign, e.g. 'Request updated REACH certificates for all cobalt suppliers.'",
    )
    company_name: str = Field(description="The name of the company sending the email.")


class CampaignEmailOutput(FlowModel):
    """Drafted campaign email."""

    subject: str = Field(description="A concise and professional subject line.")
    body: str = Field(description="A professional email body formatted with markdown.")


class RefineEmailTemplateInput(FlowModel):
    """Request to rewrite an email body under a style instruction."""

    current_body: str = Field(description="The current markdown content of the email body.")
    instruction: str = Field(description="How to refine the email, e.g. 'Make it more formal.'")


class RefineEmailTemplateOutput(FlowModel):
    """Refined email body."""

    refined_body: str = Field(description="The refined email body in markdown, placeholders untouched.")


class SendOtpInput(FlowModel):
    """Recipient of a one-time password."""

    email: EmailAddress


class SendOtpOutput(FlowModel):
    """Outcome of a one-time password dispatch."""

    success: bool
    otp: str


class EmailMessage(BaseModel):
    """Transactional email handed to the email sender."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    to: EmailAddress
    subject: str
    html: str


class EmailTestRequest(FlowModel):
    """Payload of the email engine test action."""

    email: EmailAddress


class NotificationRequest(FlowModel):
    """Broadcast notification submitted by an administrator."""

    title: str = Field(min_length=5)
    description: str = Field(min_length=10)
    link: HttpUrl | Literal[""] | None = None
    audience: NotificationAudience
