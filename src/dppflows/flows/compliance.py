"""Compliance gap check and multi-document compliance analysis flows."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from dppflows.fallbacks import compliance_analysis_fallback
from dppflows.pipeline import FlowDefinition, run_flow
from dppflows.prompts import COMPLIANCE_CHECK_TEMPLATE, PRODUCT_COMPLIANCE_TEMPLATE
from dppflows.typing.enums import FlowName
from dppflows.typing.models import (
    ComplianceCheckInput,
    ComplianceCheckOutput,
    ProductComplianceAnalysisInput,
    ProductComplianceAnalysisOutput,
)

if TYPE_CHECKING:
    from collections.abc import Mapping

    from dppflows.typing.protocol import CompletionBackend

COMPLIANCE_CHECK_FLOW = FlowDefinition(
    name=FlowName.COMPLIANCE_CHECK,
    description="Identify compliance gaps in product data against stated regulatory requirements.",
    input_model=ComplianceCheckInput,
    output_model=ComplianceCheckOutput,
    template=COMPLIANCE_CHECK_TEMPLATE,
)

PRODUCT_COMPLIANCE_FLOW = FlowDefinition(
    name=FlowName.ANALYZE_PRODUCT_COMPLIANCE,
    description="Check a product's submitted documents against its required compliance rules.",
    input_model=ProductComplianceAnalysisInput,
    output_model=ProductComplianceAnalysisOutput,
    template=PRODUCT_COMPLIANCE_TEMPLATE,
    fallback=compliance_analysis_fallback,
)


def compliance_check(
    request: ComplianceCheckInput | Mapping[str, Any],
    *,
    backend: CompletionBackend,
) -> ComplianceCheckOutput:
    """Identify compliance issues in product data.

    Args:
        request (ComplianceCheckInput | Mapping[str, Any]): Product data, industry and requirements.
        backend (CompletionBackend): Generation backend.

    Returns:
        ComplianceCheckOutput: Issues and summary.
    """
    return run_flow(COMPLIANCE_CHECK_FLOW, request, backend=backend)


def analyze_product_compliance(
    request: ProductComplianceAnalysisInput | Mapping[str, Any],
    *,
    backend: CompletionBackend,
) -> ProductComplianceAnalysisOutput:
    """Analyze submitted documents against required rules.

    Never raises for provider or reply failures: a substitute analysis built
    from document names is returned instead.

    Args:
        request (ProductComplianceAnalysisInput | Mapping[str, Any]): Product, rules and documents.
        backend (CompletionBackend): Generation backend.

    Returns:
        ProductComplianceAnalysisOutput: Per-rule results and overall status.
    """
    return run_flow(PRODUCT_COMPLIANCE_FLOW, request, backend=backend)
