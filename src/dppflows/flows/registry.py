"""Read-only registry of prompt-backed flows."""

from __future__ import annotations

from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from dppflows.flows.catalog import CERTIFICATE_RULES_FLOW, FORM_TEMPLATE_FLOW
from dppflows.flows.communication import CAMPAIGN_EMAIL_FLOW, REFINE_EMAIL_FLOW
from dppflows.flows.compliance import COMPLIANCE_CHECK_FLOW, PRODUCT_COMPLIANCE_FLOW
from dppflows.flows.documents import EXTRACT_DOCUMENT_DATA_FLOW
from dppflows.flows.traceability import TRACEABILITY_FLOW
from dppflows.pipeline import run_flow
from dppflows.typing.enums import FlowName

if TYPE_CHECKING:
    from collections.abc import Mapping

    from pydantic import BaseModel

    from dppflows.pipeline import FlowDefinition
    from dppflows.typing.protocol import CompletionBackend

FLOWS: Mapping[FlowName, FlowDefinition[Any, Any]] = MappingProxyType(
    {
        definition.name: definition
        for definition in (
            COMPLIANCE_CHECK_FLOW,
            EXTRACT_DOCUMENT_DATA_FLOW,
            CAMPAIGN_EMAIL_FLOW,
            FORM_TEMPLATE_FLOW,
            CERTIFICATE_RULES_FLOW,
            REFINE_EMAIL_FLOW,
            PRODUCT_COMPLIANCE_FLOW,
            TRACEABILITY_FLOW,
        )
    },
)


def get_flow(name: str) -> FlowDefinition[Any, Any]:
    """Return a registered flow by name.

    Args:
        name (str): Flow name, e.g. `compliance-check`.

    Raises:
        ValueError: If the name is not registered.

    Returns:
        FlowDefinition[Any, Any]: Flow definition.
    """
    return FLOWS[FlowName.from_str(name)]


def run_named_flow(name: str, request: Mapping[str, Any], *, backend: CompletionBackend) -> BaseModel:
    """Run a registered flow from a JSON-shaped request.

    Args:
        name (str): Flow name.
        request (Mapping[str, Any]): JSON-shaped request.
        backend (CompletionBackend): Generation backend.

    Returns:
        BaseModel: Flow response.
    """
    return run_flow(get_flow(name), request, backend=backend)
