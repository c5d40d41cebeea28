"""Form template generation and certificate rule suggestion flows."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from dppflows.pipeline import FlowDefinition, run_flow
from dppflows.prompts import CERTIFICATE_RULES_TEMPLATE, FORM_TEMPLATE_TEMPLATE
from dppflows.typing.enums import FlowName, ViolationKind
from dppflows.typing.models import (
    CertificateSuggestionInput,
    CertificateSuggestionOutput,
    FieldViolation,
    FormTemplateInput,
    FormTemplateOutput,
)

if TYPE_CHECKING:
    from collections.abc import Mapping

    from dppflows.typing.protocol import CompletionBackend


def _unique_field_ids(request: FormTemplateInput, reply: FormTemplateOutput) -> list[FieldViolation]:  # noqa: ARG001
    """Reject generated forms that reuse a field id."""
    seen: set[str] = set()
    violations = []
    for index, form_field in enumerate(reply.fields_schema):
        if form_field.field_id in seen:
            violations.append(
                FieldViolation(
                    location=f"fields_schema.{index}.field_id",
                    kind=ViolationKind.CONSTRAINT_VIOLATED,
                    message=f"Duplicate field id '{form_field.field_id}'",
                ),
            )
        seen.add(form_field.field_id)
    return violations


FORM_TEMPLATE_FLOW = FlowDefinition(
    name=FlowName.GENERATE_FORM_TEMPLATE,
    description="Generate the passport form fields for an industry and product category.",
    input_model=FormTemplateInput,
    output_model=FormTemplateOutput,
    template=FORM_TEMPLATE_TEMPLATE,
    check=_unique_field_ids,
)

CERTIFICATE_RULES_FLOW = FlowDefinition(
    name=FlowName.SUGGEST_CERTIFICATE_RULES,
    description="Suggest required certificates from a product description and target region.",
    input_model=CertificateSuggestionInput,
    output_model=CertificateSuggestionOutput,
    template=CERTIFICATE_RULES_TEMPLATE,
)


def generate_form_template(
    request: FormTemplateInput | Mapping[str, Any],
    *,
    backend: CompletionBackend,
) -> FormTemplateOutput:
    """Generate a passport form schema.

    Args:
        request (FormTemplateInput | Mapping[str, Any]): Industry and category names.
        backend (CompletionBackend): Generation backend.

    Returns:
        FormTemplateOutput: Generated fields.
    """
    return run_flow(FORM_TEMPLATE_FLOW, request, backend=backend)


def suggest_certificate_rules(
    request: CertificateSuggestionInput | Mapping[str, Any],
    *,
    backend: CompletionBackend,
) -> CertificateSuggestionOutput:
    """Suggest certificate requirements for a product.

    Args:
        request (CertificateSuggestionInput | Mapping[str, Any]): Product description and target region.
        backend (CompletionBackend): Generation backend.

    Returns:
        CertificateSuggestionOutput: Suggested certificates.
    """
    return run_flow(CERTIFICATE_RULES_FLOW, request, backend=backend)
