"""Digital Product Passport AI flows package."""

from dppflows.exceptions import (
    ConfigurationError,
    DependencyError,
    EmailDeliveryError,
    FlowError,
    InputValidationError,
    OutputValidationError,
    PackageError,
    QRCodeError,
    RemoteInvocationError,
    SettingsError,
    TemplateError,
)
from dppflows.logging import configure_logging, get_logger
from dppflows.settings import Settings, get_settings

__version__ = "0.1.0"

# Initialize package logger at import time via `get_logger`.
logger = get_logger("dppflows")

__all__ = [
    "ConfigurationError",
    "DependencyError",
    "EmailDeliveryError",
    "FlowError",
    "InputValidationError",
    "OutputValidationError",
    "PackageError",
    "QRCodeError",
    "RemoteInvocationError",
    "Settings",
    "SettingsError",
    "TemplateError",
    "__version__",
    "configure_logging",
    "get_logger",
    "get_settings",
    "logger",
]
