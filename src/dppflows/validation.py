"""Schema validation of flow requests and model replies."""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ValidationError

from dppflows.exceptions import InputValidationError
from dppflows.typing.enums import FailureReason, ViolationKind
from dppflows.typing.models import Failure, FieldViolation, Success

if TYPE_CHECKING:
    from collections.abc import Callable

    from pydantic_core import ErrorDetails

    from dppflows.typing.models import Outcome

_ENUM_ERRORS = frozenset({"enum", "literal_error"})


def _violation_kind(error: ErrorDetails) -> ViolationKind:
    """Classify one pydantic error.

    Args:
        error (ErrorDetails): Pydantic error entry.

    Returns:
        ViolationKind: Violation category.
    """
    error_type = error["type"]
    if error_type == "missing":
        return ViolationKind.MISSING_FIELD
    if error_type in _ENUM_ERRORS:
        return ViolationKind.NOT_IN_ENUMERATION
    if error_type == "extra_forbidden":
        return ViolationKind.UNEXPECTED_FIELD
    if error_type.endswith(("_type", "_parsing")):
        location = error["loc"]
        if location and isinstance(location[-1], int):
            return ViolationKind.MALFORMED_LIST_ELEMENT
        return ViolationKind.WRONG_TYPE
    return ViolationKind.CONSTRAINT_VIOLATED


def violations_from_error(exc: ValidationError) -> tuple[FieldViolation, ...]:
    """Convert a pydantic validation error into field violations.

    Args:
        exc (ValidationError): Raised validation error.

    Returns:
        tuple[FieldViolation, ...]: One violation per failed constraint.
    """
    return tuple(
        FieldViolation(
            location=".".join(str(part) for part in error["loc"]) or "<root>",
            kind=_violation_kind(error),
            message=error["msg"],
        )
        for error in exc.errors()
    )


def validate_payload[M: BaseModel](
    model: type[M],
    value: object,
    *,
    reason: FailureReason = FailureReason.OUTPUT_VALIDATION,
) -> Outcome[M]:
    """Validate an arbitrary value against a model.

    Model instances of the exact type are accepted as-is; anything else must be
    a mapping that validates against the model.

    Args:
        model (type[M]): Target model.
        value (object): Candidate payload.
        reason (FailureReason): Reason recorded on failure.

    Returns:
        Outcome[M]: The typed value or the list of violations.
    """
    if type(value) is model:
        return Success(value)
    if isinstance(value, BaseModel):
        value = value.model_dump(mode="json", by_alias=True, exclude_none=True)
    if not isinstance(value, Mapping):
        violation = FieldViolation(
            location="<root>",
            kind=ViolationKind.WRONG_TYPE,
            message=f"Expected an object, got {type(value).__name__}",
        )
        return Failure(
            reason=reason,
            message=f"Payload does not match {model.__name__}",
            violations=(violation,),
        )
    try:
        return Success(model.model_validate(value))
    except ValidationError as exc:
        return Failure(
            reason=reason,
            message=f"Payload does not match {model.__name__}",
            violations=violations_from_error(exc),
        )


def validate_input[M: BaseModel](flow: str, model: type[M], request: object) -> M:
    """Validate a flow request before any remote call.

    Args:
        flow (str): Flow name.
        model (type[M]): Input model.
        request (object): Request model or JSON-shaped mapping.

    Raises:
        InputValidationError: If the request does not conform.

    Returns:
        M: Typed request.
    """
    outcome = validate_payload(model, request, reason=FailureReason.INPUT_VALIDATION)
    if isinstance(outcome, Failure):
        raise InputValidationError(flow=flow, violations=outcome.violations)
    return outcome.value


def validate_output[I: BaseModel, O: BaseModel](
    model: type[O],
    raw: Mapping[str, Any],
    *,
    request: I,
    check: Callable[[I, O], list[FieldViolation]] | None = None,
) -> Outcome[O]:
    """Re-validate a raw reply against the flow output schema.

    Args:
        model (type[O]): Output model.
        raw (Mapping[str, Any]): Raw reply content.
        request (I): Validated request the reply answers.
        check (Callable[[I, O], list[FieldViolation]] | None): Extra cross-field check.

    Returns:
        Outcome[O]: The typed response or the violations found.
    """
    outcome = validate_payload(model, raw)
    if isinstance(outcome, Failure) or check is None:
        return outcome

    violations = check(request, outcome.value)
    if violations:
        return Failure(
            reason=FailureReason.OUTPUT_VALIDATION,
            message=f"Reply failed {model.__name__} checks",
            violations=tuple(violations),
        )
    return outcome
