"""Package exceptions."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from dppflows.typing.models import FieldViolation


class PackageError(Exception):
    """Root exception for the package."""


@dataclass(frozen=True)
class SettingsError(PackageError):
    """Raised when settings cannot be loaded or validated."""

    message: str = "Failed to load settings"
    exc: BaseException | None = None

    def __str__(self) -> str:
        """Return error message payload."""
        return f"{self.message}: {self.exc}" if self.exc else self.message


@dataclass(frozen=True)
class DependencyError(PackageError):
    """Raised when optional runtime dependencies are missing."""

    missing_package: list[str]
    message: str

    def __str__(self) -> str:
        """Return error message payload."""
        return f"Missing runtime dependencies for '{self.message}': {', '.join(self.missing_package)}"


class FlowError(PackageError):
    """Base class for failures raised by an AI flow stage."""


def _format_violations(violations: tuple[FieldViolation, ...]) -> str:
    return "; ".join(f"{violation.location}: {violation.message}" for violation in violations)


@dataclass(frozen=True)
class InputValidationError(FlowError):
    """Raised when a flow request does not conform to the flow input schema."""

    flow: str
    violations: tuple[FieldViolation, ...] = field(default=())

    def __str__(self) -> str:
        """Return error message payload."""
        return f"Invalid request for flow '{self.flow}': {_format_violations(self.violations)}"


@dataclass(frozen=True)
class TemplateError(FlowError):
    """Raised when a prompt template cannot be parsed or rendered."""

    message: str

    def __str__(self) -> str:
        """Return error message payload."""
        return self.message


@dataclass(frozen=True)
class RemoteInvocationError(FlowError):
    """Raised when the hosted generation service call fails."""

    message: str

    def __str__(self) -> str:
        """Return error message payload."""
        return self.message


@dataclass(frozen=True)
class OutputValidationError(FlowError):
    """Raised when a model reply does not conform to the flow output schema."""

    flow: str
    violations: tuple[FieldViolation, ...] = field(default=())

    def __str__(self) -> str:
        """Return error message payload."""
        return f"Invalid reply for flow '{self.flow}': {_format_violations(self.violations)}"


@dataclass(frozen=True)
class ConfigurationError(PackageError):
    """Raised when a collaborator service is missing credentials or identity."""

    setting: str
    message: str

    def __str__(self) -> str:
        """Return error message payload."""
        return f"{self.message}. {self.setting} is not configured."


@dataclass(frozen=True)
class EmailDeliveryError(PackageError):
    """Raised when the email provider rejects or cannot receive a message."""

    message: str

    def __str__(self) -> str:
        """Return error message payload."""
        return self.message


@dataclass(frozen=True)
class QRCodeError(PackageError):
    """Raised when a QR code image cannot be rendered."""

    message: str

    def __str__(self) -> str:
        """Return error message payload."""
        return self.message
