from __future__ import annotations

import json

from dppflows import logger as package_logger
from dppflows.logging import REDACTED, configure_logging, get_logger
from dppflows.settings import Settings


def test_stdlib_logger_is_configured(capsys) -> None:
    configure_logging(settings=Settings(log_json=False, log_level="INFO"), force=True)
    logger = get_logger("tests")
    logger.info("hello")

    captured = capsys.readouterr()
    assert "hello" in captured.err.lower()


def test_json_logs_merge_extra_and_redact_secrets(capsys) -> None:
    configure_logging(settings=Settings(log_json=True, log_level="INFO"), force=True)
    logger = get_logger("tests")
    logger.info("OTP generated", extra={"email": "user@example.com", "otp": "123456"})

    line = capsys.readouterr().err.strip().splitlines()[-1]
    payload = json.loads(line)
    assert payload["message"] == "OTP generated"
    assert payload["email"] == "user@example.com"
    assert payload["otp"] == REDACTED
    assert "extra" not in payload


def test_package_logger_created_on_import() -> None:
    assert callable(getattr(package_logger, "info", None))
