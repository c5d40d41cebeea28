from __future__ import annotations

import json
from typing import TYPE_CHECKING

import pytest

from dppflows import cli
from dppflows.exceptions import RemoteInvocationError
from dppflows.settings import Settings

if TYPE_CHECKING:
    from pathlib import Path


@pytest.fixture
def cli_env(mocker) -> Settings:
    settings = Settings()
    mocker.patch("dppflows.cli.get_settings", return_value=settings)
    mocker.patch("dppflows.cli.configure_logging")
    return settings


def test_build_parser_supports_version_flag(capsys) -> None:
    parser = cli.build_parser()

    with pytest.raises(SystemExit) as exc_info:
        parser.parse_args(["--version"])
    assert exc_info.value.code == 0

    captured = capsys.readouterr()
    assert "0.1.0" in captured.out


def test_build_parser_rejects_unknown_flow() -> None:
    with pytest.raises(SystemExit):
        cli.build_parser().parse_args(["run", "translate", "--input", "request.json"])


def test_main_without_command_prints_help(monkeypatch, capsys, cli_env) -> None:
    monkeypatch.setattr("sys.argv", ["dppflows"])

    assert cli.main() == 0
    assert "usage" in capsys.readouterr().out.lower()


def test_main_lists_flows(monkeypatch, capsys, cli_env) -> None:
    monkeypatch.setattr("sys.argv", ["dppflows", "flows"])

    assert cli.main() == 0
    output = capsys.readouterr().out
    assert "compliance-check\t" in output
    assert "analyze-traceability\t" in output


def test_main_runs_flow(mocker, monkeypatch, tmp_path: Path, make_backend, cli_env) -> None:
    request_path = tmp_path / "request.json"
    output_path = tmp_path / "out" / "result.json"
    request_path.write_text(
        json.dumps({"campaignObjective": "Collect REACH declarations", "companyName": "VoltCorp"}),
        encoding="utf-8",
    )
    backend = make_backend([{"subject": "REACH declarations", "body": "Dear supplier"}])
    mocker.patch("dppflows.cli.ensure_cli_dependencies_for_run")
    mocker.patch("dppflows.backends.OpenAICompletionBackend", return_value=backend)
    monkeypatch.setattr(
        "sys.argv",
        ["dppflows", "run", "generate-campaign-email", "--input", str(request_path), "--output", str(output_path)],
    )

    assert cli.main() == 0
    assert json.loads(output_path.read_text(encoding="utf-8")) == {
        "subject": "REACH declarations",
        "body": "Dear supplier",
    }


def test_main_returns_error_code_on_package_error(mocker, monkeypatch, tmp_path: Path, make_backend, cli_env) -> None:
    request_path = tmp_path / "request.json"
    request_path.write_text(
        json.dumps({"productData": "{}", "industry": "Battery", "regulatoryRequirements": "REACH"}),
        encoding="utf-8",
    )
    mocker.patch("dppflows.cli.ensure_cli_dependencies_for_run")
    mocker.patch(
        "dppflows.backends.OpenAICompletionBackend",
        return_value=make_backend(error=RemoteInvocationError(message="status 401")),
    )
    monkeypatch.setattr("sys.argv", ["dppflows", "run", "compliance-check", "--input", str(request_path)])

    assert cli.main() == 1


def test_main_returns_error_code_on_missing_request_file(mocker, monkeypatch, tmp_path: Path, cli_env) -> None:
    mocker.patch("dppflows.cli.ensure_cli_dependencies_for_run")
    monkeypatch.setattr(
        "sys.argv",
        ["dppflows", "run", "compliance-check", "--input", str(tmp_path / "missing.json")],
    )

    assert cli.main() == 1


def test_main_returns_130_on_keyboard_interrupt(mocker, monkeypatch, cli_env) -> None:
    mocker.patch("dppflows.cli.ensure_cli_dependencies_for_qr_code", side_effect=KeyboardInterrupt)
    monkeypatch.setattr("sys.argv", ["dppflows", "qr-code", "--product-id", "p", "--version-id", "v"])

    assert cli.main() == 130


def test_main_generates_qr_code(mocker, monkeypatch, tmp_path: Path, cli_env) -> None:
    output_path = tmp_path / "qr.json"
    mocker.patch("dppflows.cli.ensure_cli_dependencies_for_qr_code")
    monkeypatch.setattr(
        "sys.argv",
        ["dppflows", "qr-code", "--product-id", "prod-1", "--version-id", "v2", "--output", str(output_path)],
    )

    assert cli.main() == 0
    payload = json.loads(output_path.read_text(encoding="utf-8"))
    assert payload["success"] is True
    assert payload["data"]["qr_code_value"] == f"{cli_env.passport_base_url}/view/prod-1?v=v2"


def test_main_sends_otp(mocker, monkeypatch, capsys, make_sender, cli_env) -> None:
    sender = make_sender()
    mocker.patch("dppflows.cli.ensure_cli_dependencies_for_email")
    mocker.patch("dppflows.backends.SendGridEmailBackend", return_value=sender)
    monkeypatch.setattr("sys.argv", ["dppflows", "send-otp", "--email", "user@example.com"])

    assert cli.main() == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["success"] is True
    assert sender.sent[0].to == "user@example.com"
    assert f"expire in {cli_env.otp_ttl_minutes} minutes" in sender.sent[0].html
