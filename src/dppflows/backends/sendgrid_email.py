"""SendGrid transactional email backend."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import httpx

from dppflows import logger
from dppflows.exceptions import ConfigurationError, EmailDeliveryError
from dppflows.settings import build_httpx_client_kwargs

if TYPE_CHECKING:
    from dppflows.settings import Settings
    from dppflows.typing.models import EmailMessage

_DISABLED = "Email sending is disabled"


def _provider_error_message(response: httpx.Response) -> str:
    """Return the first error message reported by SendGrid.

    Args:
        response (httpx.Response): Rejected response.

    Returns:
        str: Provider message or a generic description.
    """
    try:
        body: Any = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict):
        errors = body.get("errors")
        if isinstance(errors, list) and errors and isinstance(errors[0], dict):
            message = errors[0].get("message")
            if message:
                return str(message)
    return "An error occurred with the SendGrid API."


class SendGridEmailBackend:
    """Send emails through the SendGrid v3 REST API."""

    def __init__(self, settings: Settings) -> None:
        """Initialize backend.

        Args:
            settings (Settings): Runtime settings.
        """
        self._settings = settings

    def _credentials(self) -> tuple[str, str]:
        """Return API key and sender address.

        Raises:
            ConfigurationError: If either value is not configured.

        Returns:
            tuple[str, str]: API key and sender address.
        """
        if not self._settings.sendgrid_api_key:
            raise ConfigurationError(setting="SENDGRID_API_KEY", message=_DISABLED)
        if not self._settings.sendgrid_from_email:
            raise ConfigurationError(setting="SENDGRID_FROM_EMAIL", message=_DISABLED)
        return self._settings.sendgrid_api_key, self._settings.sendgrid_from_email

    def send(self, message: EmailMessage) -> None:
        """Deliver one email.

        Args:
            message (EmailMessage): Recipient, subject and HTML body.

        Raises:
            EmailDeliveryError: If SendGrid rejects the message or cannot be reached.
        """
        api_key, from_email = self._credentials()
        url = f"{self._settings.sendgrid_base_url.rstrip('/')}/v3/mail/send"
        payload = {
            "personalizations": [{"to": [{"email": message.to}]}],
            "from": {"email": from_email},
            "subject": message.subject,
            "content": [{"type": "text/html", "value": message.html}],
        }

        try:
            client_kwargs = build_httpx_client_kwargs(self._settings, target_url=url)
            with httpx.Client(**client_kwargs) as client:
                response = client.post(url, json=payload, headers={"Authorization": f"Bearer {api_key}"})
        except (httpx.HTTPError, httpx.InvalidURL, OSError) as exc:
            raise EmailDeliveryError(message="Failed to send email. Check server logs for details.") from exc

        if response.is_error:
            raise EmailDeliveryError(message=f"SendGrid Error: {_provider_error_message(response)}")
        logger.info("Email sent", extra={"status_code": response.status_code})
