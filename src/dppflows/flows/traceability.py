"""Bill of materials risk analysis flow."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from dppflows.pipeline import FlowDefinition, run_flow
from dppflows.prompts import TRACEABILITY_TEMPLATE
from dppflows.typing.enums import FlowName
from dppflows.typing.models import TraceabilityAnalysisInput, TraceabilityAnalysisOutput

if TYPE_CHECKING:
    from collections.abc import Mapping

    from dppflows.typing.protocol import CompletionBackend

TRACEABILITY_FLOW = FlowDefinition(
    name=FlowName.ANALYZE_TRACEABILITY,
    description="Assess data gaps, conflict minerals and supplier validity across BOM tiers.",
    input_model=TraceabilityAnalysisInput,
    output_model=TraceabilityAnalysisOutput,
    template=TRACEABILITY_TEMPLATE,
)


def analyze_traceability(
    request: TraceabilityAnalysisInput | Mapping[str, Any],
    *,
    backend: CompletionBackend,
) -> TraceabilityAnalysisOutput:
    """Analyze a multi-tier bill of materials for supply chain risks.

    Args:
        request (TraceabilityAnalysisInput | Mapping[str, Any]): Product name and BOM entries.
        backend (CompletionBackend): Generation backend.

    Returns:
        TraceabilityAnalysisOutput: Risk level, summary and issues.
    """
    return run_flow(TRACEABILITY_FLOW, request, backend=backend)
