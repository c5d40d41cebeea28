"""Runtime dependency checks for CLI commands."""

from __future__ import annotations

import importlib.util

from dppflows.exceptions import DependencyError


def _is_module_available(module_name: str) -> bool:
    """Check whether a module can be imported.

    Args:
        module_name (str): Python module name.

    Returns:
        bool: True if import spec exists.
    """
    return importlib.util.find_spec(module_name) is not None


def _collect_missing_dependencies(modules_by_package: dict[str, str]) -> list[str]:
    """Collect missing packages for a module mapping.

    Args:
        modules_by_package (dict[str, str]): Mapping of package name -> import module.

    Returns:
        list[str]: Missing package names.
    """
    return [package for package, module in modules_by_package.items() if not _is_module_available(module)]


def ensure_cli_dependencies_for_run() -> None:
    """Validate runtime dependencies for `dppflows run`.

    Raises:
        DependencyError: If one or more required modules are missing.
    """
    missing = _collect_missing_dependencies({"httpx": "httpx", "openai": "openai"})
    if missing:
        raise DependencyError(missing_package=missing, message="run")


def ensure_cli_dependencies_for_email() -> None:
    """Validate runtime dependencies for `dppflows send-otp`.

    Raises:
        DependencyError: If one or more required modules are missing.
    """
    missing = _collect_missing_dependencies({"httpx": "httpx"})
    if missing:
        raise DependencyError(missing_package=missing, message="send-otp")


def ensure_cli_dependencies_for_qr_code() -> None:
    """Validate runtime dependencies for `dppflows qr-code`.

    Raises:
        DependencyError: If one or more required modules are missing.
    """
    missing = _collect_missing_dependencies({"segno": "segno"})
    if missing:
        raise DependencyError(missing_package=missing, message="qr-code")
