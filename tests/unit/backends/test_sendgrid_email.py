from __future__ import annotations

import json

import httpx
import pytest

from dppflows.backends.sendgrid_email import SendGridEmailBackend
from dppflows.exceptions import ConfigurationError, EmailDeliveryError
from dppflows.settings import Settings
from dppflows.typing.models import EmailMessage

MESSAGE = EmailMessage(to="user@example.com", subject="Hello", html="<p>Hi</p>")


def _settings(*, api_key: str | None = "SG.key", from_email: str | None = "noreply@passportify.online") -> Settings:
    settings = Settings()
    settings.sendgrid_api_key = api_key
    settings.sendgrid_from_email = from_email
    settings.sendgrid_base_url = "https://api.sendgrid.test"
    return settings


def _use_transport(monkeypatch, handler) -> None:  # noqa: ANN001
    monkeypatch.setattr(
        "dppflows.backends.sendgrid_email.build_httpx_client_kwargs",
        lambda settings, target_url=None: {"transport": httpx.MockTransport(handler)},
    )


def test_send_posts_v3_payload(monkeypatch) -> None:
    requests: list[httpx.Request] = []

    def _handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(202)

    _use_transport(monkeypatch, _handler)

    SendGridEmailBackend(_settings()).send(MESSAGE)

    (request,) = requests
    assert str(request.url) == "https://api.sendgrid.test/v3/mail/send"
    assert request.headers["Authorization"] == "Bearer SG.key"
    assert json.loads(request.content) == {
        "personalizations": [{"to": [{"email": "user@example.com"}]}],
        "from": {"email": "noreply@passportify.online"},
        "subject": "Hello",
        "content": [{"type": "text/html", "value": "<p>Hi</p>"}],
    }


@pytest.mark.parametrize(
    ("api_key", "from_email", "setting"),
    [(None, "noreply@passportify.online", "SENDGRID_API_KEY"), ("SG.key", None, "SENDGRID_FROM_EMAIL")],
)
def test_send_requires_credentials(api_key: str | None, from_email: str | None, setting: str) -> None:
    backend = SendGridEmailBackend(_settings(api_key=api_key, from_email=from_email))

    with pytest.raises(ConfigurationError, match=f"{setting} is not configured"):
        backend.send(MESSAGE)


def test_send_surfaces_provider_message(monkeypatch) -> None:
    _use_transport(
        monkeypatch,
        lambda request: httpx.Response(
            403,
            json={"errors": [{"message": "The from address does not match a verified Sender Identity."}]},
        ),
    )

    with pytest.raises(EmailDeliveryError, match="SendGrid Error: The from address does not match"):
        SendGridEmailBackend(_settings()).send(MESSAGE)


def test_send_uses_generic_message_without_error_body(monkeypatch) -> None:
    _use_transport(monkeypatch, lambda request: httpx.Response(500, text="oops"))

    with pytest.raises(EmailDeliveryError, match="An error occurred with the SendGrid API"):
        SendGridEmailBackend(_settings()).send(MESSAGE)


def test_send_wraps_transport_errors(monkeypatch) -> None:
    def _handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("refused", request=request)

    _use_transport(monkeypatch, _handler)

    with pytest.raises(EmailDeliveryError, match="Failed to send email"):
        SendGridEmailBackend(_settings()).send(MESSAGE)


def test_send_wraps_client_setup_errors(tmp_path) -> None:
    settings = _settings()
    settings.cert_path = str(tmp_path / "missing-ca.pem")

    with pytest.raises(EmailDeliveryError, match="Failed to send email"):
        SendGridEmailBackend(settings).send(MESSAGE)
