from __future__ import annotations

from dppflows.actions import (
    INVALID_EMAIL,
    INVALID_INPUT,
    QR_FAILED,
    TEST_EMAIL_SUBJECT,
    generate_qr_code_action,
    send_notification,
    send_test_email,
)
from dppflows.exceptions import EmailDeliveryError, QRCodeError
from dppflows.settings import Settings


def test_send_test_email(make_sender) -> None:
    sender = make_sender()

    result = send_test_email({"email": "admin@example.com"}, sender=sender)

    assert result.success is True
    assert result.error is None
    assert sender.sent[0].subject == TEST_EMAIL_SUBJECT


def test_send_test_email_rejects_invalid_address(make_sender) -> None:
    sender = make_sender()

    result = send_test_email({"email": "admin"}, sender=sender)

    assert (result.success, result.error) == (False, INVALID_EMAIL)
    assert sender.sent == []


def test_send_test_email_reports_provider_error(make_sender) -> None:
    sender = make_sender(error=EmailDeliveryError(message="SendGrid Error: Permission denied, wrong credentials"))

    result = send_test_email({"email": "admin@example.com"}, sender=sender)

    assert result.success is False
    assert result.error == "SendGrid Error: Permission denied, wrong credentials"


def test_send_test_email_reports_unexpected_error(make_sender) -> None:
    result = send_test_email({"email": "admin@example.com"}, sender=make_sender(error=RuntimeError("smtp down")))

    assert (result.success, result.error) == (False, "smtp down")


def test_generate_qr_code_action() -> None:
    result = generate_qr_code_action({"productId": "prod-1", "versionId": "v3"}, settings=Settings())

    assert result.success is True
    assert result.data is not None
    assert result.data.qr_code_value.endswith("/view/prod-1?v=v3")


def test_generate_qr_code_action_rejects_invalid_input() -> None:
    result = generate_qr_code_action({"productId": "prod-1"}, settings=Settings())

    assert (result.success, result.error, result.data) == (False, INVALID_INPUT, None)


def test_generate_qr_code_action_reports_render_failure(monkeypatch) -> None:
    def _raise(request: object, settings: object) -> None:
        raise QRCodeError(message="Data too large")

    monkeypatch.setattr("dppflows.actions.generate_qr_code", _raise)

    result = generate_qr_code_action({"productId": "prod-1", "versionId": "v3"}, settings=Settings())

    assert (result.success, result.error) == (False, QR_FAILED)


def test_send_notification() -> None:
    result = send_notification(
        {
            "title": "Scheduled maintenance",
            "description": "The portal will be offline on Sunday.",
            "link": "https://passportify.online/status",
            "audience": "suppliers",
        },
    )

    assert result.success is True


def test_send_notification_rejects_invalid_input() -> None:
    result = send_notification({"title": "Hi", "description": "short", "audience": "everyone"})

    assert (result.success, result.error) == (False, INVALID_INPUT)
