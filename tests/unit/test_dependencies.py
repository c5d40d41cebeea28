from __future__ import annotations

import pytest

from dppflows.dependencies import (
    ensure_cli_dependencies_for_email,
    ensure_cli_dependencies_for_qr_code,
    ensure_cli_dependencies_for_run,
)
from dppflows.exceptions import DependencyError

CHECKS = [
    (ensure_cli_dependencies_for_run, "run"),
    (ensure_cli_dependencies_for_email, "send-otp"),
    (ensure_cli_dependencies_for_qr_code, "qr-code"),
]


@pytest.mark.parametrize(("check", "command"), CHECKS)
def test_cli_dependency_checks_succeed(monkeypatch, check, command: str) -> None:  # noqa: ANN001
    _ = command
    monkeypatch.setattr("dppflows.dependencies._is_module_available", lambda module_name: True)
    check()


@pytest.mark.parametrize(("check", "command"), CHECKS)
def test_cli_dependency_checks_raise(monkeypatch, check, command: str) -> None:  # noqa: ANN001
    monkeypatch.setattr("dppflows.dependencies._is_module_available", lambda module_name: False)
    with pytest.raises(DependencyError, match=f"Missing runtime dependencies for '{command}'"):
        check()


def test_qr_code_check_names_segno(monkeypatch) -> None:
    monkeypatch.setattr("dppflows.dependencies._is_module_available", lambda module_name: module_name != "segno")
    with pytest.raises(DependencyError, match="segno"):
        ensure_cli_dependencies_for_qr_code()
