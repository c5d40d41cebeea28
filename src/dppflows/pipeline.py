"""Flow orchestration: validate, render, invoke, re-validate, fall back."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from pydantic import BaseModel

from dppflows import logger
from dppflows.exceptions import RemoteInvocationError
from dppflows.prompts import schema_response_format
from dppflows.templating import render_template
from dppflows.typing.enums import FailureReason
from dppflows.typing.models import Failure, Success
from dppflows.validation import validate_input, validate_output

if TYPE_CHECKING:
    from collections.abc import Callable

    from dppflows.templating import PromptTemplate
    from dppflows.typing.enums import FlowName
    from dppflows.typing.models import (
        FieldViolation,
        Outcome,
        RemoteReply,
        RenderedPrompt,
        SanitizedJsonSchema,
    )
    from dppflows.typing.protocol import CompletionBackend


@dataclass(frozen=True)
class FlowDefinition[I: BaseModel, O: BaseModel]:
    """Schema pair, prompt template and failure policy of one flow."""

    name: FlowName
    description: str
    input_model: type[I]
    output_model: type[O]
    template: PromptTemplate
    fallback: Callable[[I, Failure], O] | None = None
    check: Callable[[I, O], list[FieldViolation]] | None = None
    strict_output: bool = True

    @property
    def response_format(self) -> SanitizedJsonSchema:
        """Return the output schema descriptor sent to the provider."""
        return schema_response_format(
            self.name.replace("-", "_"),
            self.output_model.model_json_schema(by_alias=True),
            strict=self.strict_output,
        )


def invoke_remote(
    backend: CompletionBackend,
    prompt: RenderedPrompt,
    response_format: SanitizedJsonSchema,
) -> Outcome[RemoteReply]:
    """Call the generation backend, capturing provider failures.

    Args:
        backend (CompletionBackend): Generation backend.
        prompt (RenderedPrompt): Rendered prompt.
        response_format (SanitizedJsonSchema): Output schema descriptor.

    Returns:
        Outcome[RemoteReply]: Reply or remote failure.
    """
    try:
        return Success(backend.complete(prompt, response_format))
    except RemoteInvocationError as exc:
        return Failure(reason=FailureReason.REMOTE_INVOCATION, message=str(exc), error=exc)


def run_flow[I: BaseModel, O: BaseModel](
    definition: FlowDefinition[I, O],
    request: I | object,
    *,
    backend: CompletionBackend,
) -> O:
    """Run one flow end to end.

    Args:
        definition (FlowDefinition[I, O]): Flow to run.
        request (I | object): Request model or JSON-shaped mapping.
        backend (CompletionBackend): Generation backend.

    Raises:
        FlowError: On invalid input or template errors, and on remote or
            output failures when the flow has no fallback.

    Returns:
        O: Schema-conformant response.
    """
    validated = validate_input(definition.name, definition.input_model, request)
    prompt = render_template(definition.template, validated)
    logger.debug("Prompt rendered", extra={"flow": definition.name, "attachments": len(prompt.media)})

    remote = invoke_remote(backend, prompt, definition.response_format)
    outcome: Outcome[O]
    if isinstance(remote, Success):
        outcome = validate_output(
            definition.output_model,
            remote.value.content,
            request=validated,
            check=definition.check,
        )
    else:
        outcome = remote

    if isinstance(outcome, Success):
        logger.info("Flow completed", extra={"flow": definition.name})
        return outcome.value

    if definition.fallback is None:
        logger.error(
            "Flow failed",
            extra={"flow": definition.name, "reason": outcome.reason, "detail": outcome.message},
        )
        raise outcome.to_error(definition.name)

    logger.warning(
        "Flow failed, returning fallback payload",
        extra={"flow": definition.name, "reason": outcome.reason, "detail": outcome.message},
    )
    return definition.fallback(validated, outcome)
