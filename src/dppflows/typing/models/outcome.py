"""Result types returned by the remote and validation steps."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from dppflows.exceptions import InputValidationError, OutputValidationError
from dppflows.typing.enums import FailureReason

if TYPE_CHECKING:
    from dppflows.exceptions import FlowError
    from dppflows.typing.models.common import FieldViolation


@dataclass(frozen=True)
class Success[T]:
    """Step produced a usable value."""

    value: T


@dataclass(frozen=True)
class Failure:
    """Step failed; carries enough detail to pick a fallback or raise."""

    reason: FailureReason
    message: str
    violations: tuple[FieldViolation, ...] = field(default=())
    error: FlowError | None = None

    def to_error(self, flow: str) -> FlowError:
        """Return the exception to raise when the flow has no fallback.

        Args:
            flow (str): Flow name.

        Returns:
            FlowError: Original error, or the input or output validation error built from violations.
        """
        if self.error is not None:
            return self.error
        if self.reason is FailureReason.INPUT_VALIDATION:
            return InputValidationError(flow=flow, violations=self.violations)
        return OutputValidationError(flow=flow, violations=self.violations)


type Outcome[T] = Success[T] | Failure
