"""Flow entry points."""

from dppflows.flows.catalog import generate_form_template, suggest_certificate_rules
from dppflows.flows.communication import (
    generate_campaign_email,
    generate_otp,
    refine_email_template,
    send_otp,
)
from dppflows.flows.compliance import analyze_product_compliance, compliance_check
from dppflows.flows.documents import extract_data_from_document, review_extracted_data
from dppflows.flows.registry import FLOWS, get_flow, run_named_flow
from dppflows.flows.traceability import analyze_traceability

__all__ = [
    "FLOWS",
    "analyze_product_compliance",
    "analyze_traceability",
    "compliance_check",
    "extract_data_from_document",
    "generate_campaign_email",
    "generate_form_template",
    "generate_otp",
    "get_flow",
    "refine_email_template",
    "review_extracted_data",
    "run_named_flow",
    "send_otp",
    "suggest_certificate_rules",
]
