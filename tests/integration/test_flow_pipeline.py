from __future__ import annotations

import json
from types import SimpleNamespace
from typing import Any

import httpx

from dppflows.backends import OpenAICompletionBackend, SendGridEmailBackend
from dppflows.fallbacks import ANALYSIS_FAILED_SUMMARY
from dppflows.flows import FLOWS, analyze_product_compliance, extract_data_from_document, send_otp
from dppflows.prompts import sanitize_json_schema
from dppflows.settings import Settings
from dppflows.typing.enums import OverallComplianceStatus, RuleStatus

PDF_DATA_URI = "data:application/pdf;base64,JVBERi0xLjQK"
REQUEST = {
    "productName": "EV Battery Pack",
    "rules": [
        {"certificateName": "UN 38.3", "description": "Transport safety"},
        {"certificateName": "REACH Declaration", "description": "Chemical safety"},
    ],
    "documents": [{"documentName": "un38.3_report.pdf", "documentType": "Test Report", "dataUri": PDF_DATA_URI}],
}


def _openai_returning(content: str) -> type:
    class _FakeOpenAI:
        requests: list[dict[str, Any]] = []

        def __init__(self, **kwargs: Any) -> None:
            _ = kwargs
            self.chat = SimpleNamespace(completions=SimpleNamespace(create=self._create))

        def _create(self, **payload: Any) -> SimpleNamespace:
            _FakeOpenAI.requests.append(payload)
            data = {"model": "gpt-4o-mini", "choices": [{"message": {"content": content}}]}
            return SimpleNamespace(model_dump=lambda mode="python": data)

    return _FakeOpenAI


def _settings() -> Settings:
    settings = Settings()
    settings.openai_api_key = "secret"
    settings.openai_base_url = None
    return settings


def test_analysis_round_trip_through_openai_backend(monkeypatch) -> None:
    reply = {
        "overallStatus": "Missing Documents",
        "overallSummary": "REACH declaration missing.",
        "documentResults": [
            {"ruleName": "UN 38.3", "status": "Verified", "notes": "Transport report present."},
            {"ruleName": "REACH Declaration", "status": "Missing", "notes": "Not submitted."},
        ],
    }
    fake = _openai_returning(json.dumps(reply))
    monkeypatch.setattr("dppflows.backends.openai_completion.OpenAI", fake)

    result = analyze_product_compliance(REQUEST, backend=OpenAICompletionBackend(_settings()))

    assert result.to_json_dict() == reply
    content = fake.requests[0]["messages"][0]["content"]
    assert content[1] == {
        "type": "file",
        "file": {"filename": "attachment-0", "file_data": PDF_DATA_URI},
    }


def test_analysis_falls_back_when_openai_reply_is_not_json(monkeypatch) -> None:
    monkeypatch.setattr("dppflows.backends.openai_completion.OpenAI", _openai_returning("I cannot help"))

    result = analyze_product_compliance(REQUEST, backend=OpenAICompletionBackend(_settings()))

    assert result.overall_status == OverallComplianceStatus.ISSUES_FOUND
    assert result.overall_summary == ANALYSIS_FAILED_SUMMARY
    assert [item.status for item in result.document_results] == [RuleStatus.ISSUE_FOUND, RuleStatus.MISSING]


def test_every_registered_flow_has_a_strict_compatible_schema() -> None:
    for definition in FLOWS.values():
        schema = definition.response_format.json_schema
        assert schema["additionalProperties"] is False
        assert sorted(schema["properties"]) == schema["required"]
        assert sanitize_json_schema(schema) == schema


def test_send_otp_through_sendgrid_backend(monkeypatch) -> None:
    bodies: list[dict[str, Any]] = []

    def _handler(request: httpx.Request) -> httpx.Response:
        bodies.append(json.loads(request.content))
        return httpx.Response(202)

    monkeypatch.setattr(
        "dppflows.backends.sendgrid_email.build_httpx_client_kwargs",
        lambda settings, target_url=None: {"transport": httpx.MockTransport(_handler)},
    )
    settings = Settings()
    settings.sendgrid_api_key = "SG.key"
    settings.sendgrid_from_email = "noreply@passportify.online"

    result = send_otp({"email": "user@example.com"}, sender=SendGridEmailBackend(settings))

    assert result.success is True
    assert result.otp in bodies[0]["content"][0]["value"]
    assert bodies[0]["subject"] == "Your Passportify Verification Code"


def test_send_otp_without_sendgrid_credentials_does_not_crash() -> None:
    settings = Settings()
    settings.sendgrid_api_key = None

    result = send_otp({"email": "user@example.com"}, sender=SendGridEmailBackend(settings))

    assert (result.success, result.otp) == (False, "")


def test_analysis_falls_back_when_ca_bundle_is_missing(monkeypatch, tmp_path) -> None:
    monkeypatch.setattr("dppflows.backends.openai_completion.OpenAI", _openai_returning("{}"))
    settings = _settings()
    settings.cert_path = str(tmp_path / "missing-ca.pem")

    result = analyze_product_compliance(REQUEST, backend=OpenAICompletionBackend(settings))

    assert result.overall_summary == ANALYSIS_FAILED_SUMMARY


def test_extraction_falls_back_when_ca_bundle_is_missing(monkeypatch, tmp_path) -> None:
    monkeypatch.setattr("dppflows.backends.openai_completion.OpenAI", _openai_returning("{}"))
    settings = _settings()
    settings.cert_path = str(tmp_path / "missing-ca.pem")

    result = extract_data_from_document(
        {"documentDataUri": PDF_DATA_URI, "documentType": "application/pdf", "industry": "Battery"},
        backend=OpenAICompletionBackend(settings),
    )

    assert result.extracted_data["report_number"] == "UN-12345-XYZ"


def test_send_otp_with_missing_ca_bundle_does_not_crash(tmp_path) -> None:
    settings = Settings()
    settings.sendgrid_api_key = "SG.key"
    settings.sendgrid_from_email = "noreply@passportify.online"
    settings.cert_path = str(tmp_path / "missing-ca.pem")

    result = send_otp({"email": "user@example.com"}, sender=SendGridEmailBackend(settings))

    assert (result.success, result.otp) == (False, "")
