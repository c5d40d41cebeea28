"""Bill of materials and traceability risk models."""

from __future__ import annotations

from typing import Self

from pydantic import Field, model_validator

from dppflows.typing.enums import RiskLevel
from dppflows.typing.models.common import FlowModel


class BomEntry(FlowModel):
    """Material or component at one tier of a product's supply chain."""

    entry_id: str
    name: str
    tier: int = Field(ge=1)
    parent_id: str | None = None
    supplier_id: str | None = None
    supplier_name: str | None = None
    supplier_status: str | None = None
    compliance_status: str | None = None
    origin_country: str | None = None
    conflict_minerals_flag: bool = False


class TraceabilityAnalysisInput(FlowModel):
    """Request for a multi-tier bill of materials risk analysis."""

    product_name: str
    bill_of_materials: list[BomEntry]

    @model_validator(mode="after")
    def _check_tiers(self) -> Self:
        """Ensure entry ids are unique and each child sits one tier below its parent.

        Raises:
            ValueError: If the hierarchy is inconsistent.

        Returns:
            Self: The validated request.
        """
        by_id: dict[str, BomEntry] = {}
        for entry in self.bill_of_materials:
            if entry.entry_id in by_id:
                raise ValueError(f"Duplicate bill of materials entry '{entry.entry_id}'")  # noqa: TRY003
            by_id[entry.entry_id] = entry

        for entry in self.bill_of_materials:
            if entry.parent_id is None:
                if entry.tier != 1:
                    raise ValueError(f"Root entry '{entry.entry_id}' must be tier 1")  # noqa: TRY003
                continue
            parent = by_id.get(entry.parent_id)
            if parent is None:
                raise ValueError(  # noqa: TRY003
                    f"Entry '{entry.entry_id}' references unknown parent '{entry.parent_id}'",
                )
            if entry.tier != parent.tier + 1:
                raise ValueError(  # noqa: TRY003
                    f"Entry '{entry.entry_id}' must be tier {parent.tier + 1} under '{parent.entry_id}'",
                )
        return self


class TraceabilityIssue(FlowModel):
    """Risk found in the supply chain data."""

    risk_category: str = Field(description="e.g. 'Data Gaps', 'Conflict Minerals', 'Supplier Validity'.")
    description: str = Field(description="A detailed description of the identified issue.")
    recommendation: str = Field(description="How to mitigate this issue.")


class TraceabilityAnalysisOutput(FlowModel):
    """Supply chain risk assessment."""

    overall_risk_level: RiskLevel = Field(description="High-level assessment of the supply chain risk.")
    summary: str = Field(description="A one or two sentence summary of the findings.")
    issues: list[TraceabilityIssue] = Field(description="Specific issues found in the traceability data.")
