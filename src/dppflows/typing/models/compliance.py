"""Compliance flow models."""

from __future__ import annotations

from pydantic import Field

from dppflows.typing.enums import OverallComplianceStatus, RuleStatus
from dppflows.typing.models.common import DataUri, FlowModel


class ComplianceCheckInput(FlowModel):
    """Request for a compliance gap check against regulatory text."""

    product_data: str = Field(description="The product data to validate against regulatory requirements.")
    industry: str = Field(description="The industry of the product.")
    regulatory_requirements: str = Field(description="The regulatory requirements to check against.")


class ComplianceCheckOutput(FlowModel):
    """Issues found by a compliance gap check."""

    compliance_issues: list[str] = Field(description="Compliance issues found in the product data.")
    summary: str = Field(description="A summary of the compliance check results.")


class ComplianceRule(FlowModel):
    """Certificate or document required for a product."""

    certificate_name: str = Field(description="The name of the required certificate or document.")
    description: str = Field(description="What the certificate is for.")


class SubmittedDocument(FlowModel):
    """Document uploaded for a product."""

    document_name: str = Field(description="The name of the submitted document file.")
    document_type: str = Field(description="The type of document, e.g. 'Test Report', 'Declaration'.")
    data_uri: DataUri = Field(description="The document content as a base64 data URI.")


class ProductComplianceAnalysisInput(FlowModel):
    """Request for a multi-document compliance analysis."""

    product_name: str = Field(description="The name of the product being analyzed.")
    rules: list[ComplianceRule] = Field(description="All compliance rules required for this product.")
    documents: list[SubmittedDocument] = Field(description="All documents submitted for this product.")


class DocumentResult(FlowModel):
    """Analysis outcome for one required rule."""

    rule_name: str = Field(description="The name of the rule this result pertains to.")
    status: RuleStatus = Field(description="The status for this specific document rule.")
    notes: str = Field(description="Why the status was given, or which document fulfilled the rule.")


class ProductComplianceAnalysisOutput(FlowModel):
    """Result of a multi-document compliance analysis."""

    overall_status: OverallComplianceStatus = Field(description="High-level compliance status.")
    overall_summary: str = Field(description="A one or two sentence summary of the findings.")
    document_results: list[DocumentResult] = Field(description="One result per required rule.")
