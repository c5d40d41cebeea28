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
from dppflows.typing.enums import ViolationKind
from dppflows.typing.models import FieldViolation


def test_root_exception_hierarchy() -> None:
    for error_type in (SettingsError, DependencyError, ConfigurationError, EmailDeliveryError, QRCodeError):
        assert issubclass(error_type, PackageError)
    for error_type in (InputValidationError, TemplateError, RemoteInvocationError, OutputValidationError):
        assert issubclass(error_type, FlowError)
    assert issubclass(FlowError, PackageError)


def test_validation_error_lists_violations() -> None:
    error = InputValidationError(
        flow="send-otp",
        violations=(FieldViolation(location="email", kind=ViolationKind.CONSTRAINT_VIOLATED, message="bad"),),
    )

    assert str(error) == "Invalid request for flow 'send-otp': email: bad"


def test_configuration_error_names_setting() -> None:
    error = ConfigurationError(setting="SENDGRID_FROM_EMAIL", message="Email sending is disabled")

    assert str(error) == "Email sending is disabled. SENDGRID_FROM_EMAIL is not configured."
