"""Prompt templates and response schema helpers."""

from __future__ import annotations

from copy import deepcopy
from typing import Any, cast

from dppflows.templating import parse_template
from dppflows.typing.models import SanitizedJsonSchema

_SCHEMA_MAPS = frozenset({"properties", "$defs", "definitions"})


def sanitize_json_schema(schema: dict[str, Any]) -> dict[str, Any]:
    """Sanitize a JSON schema to maximize strict compatibility.

    Every object lists all of its properties as required and forbids
    additional properties; `default` keywords are dropped.

    Args:
        schema (dict[str, Any]): Raw JSON schema.

    Returns:
        dict[str, Any]: Sanitized JSON schema.
    """
    cleaned = deepcopy(schema)

    def _walk(node: object) -> None:
        if isinstance(node, dict):
            node_dict = cast("dict[str, Any]", node)
            node_dict.pop("default", None)
            if "properties" in node_dict:
                node_dict.setdefault("type", "object")
                props = node_dict["properties"]
                if isinstance(props, dict):
                    node_dict["required"] = sorted(str(key) for key in props)
                    node_dict["additionalProperties"] = False
            for key, value in node_dict.items():
                if key in _SCHEMA_MAPS and isinstance(value, dict):
                    for sub_schema in value.values():
                        _walk(sub_schema)
                else:
                    _walk(value)
        elif isinstance(node, list):
            for item in node:
                _walk(item)

    _walk(cleaned)
    return cleaned


def schema_response_format(name: str, schema: dict[str, Any], *, strict: bool = True) -> SanitizedJsonSchema:
    """Build the structured-output response format payload.

    Args:
        name (str): Schema name in response format.
        schema (dict[str, Any]): Raw schema payload.
        strict (bool): Whether the provider must enforce the schema.

    Returns:
        SanitizedJsonSchema: Response schema wrapper.
    """
    return SanitizedJsonSchema(
        name=name,
        schema=sanitize_json_schema(schema),
        strict=strict,
    )


COMPLIANCE_CHECK_TEMPLATE = parse_template(
    "compliance_check",
    """You are an expert in regulatory compliance.

You will use the product data, industry, and regulatory requirements to identify any potential compliance issues.

Product Data: {{product_data}}
Industry: {{industry}}
Regulatory Requirements: {{regulatory_requirements}}

List every compliance issue found, then summarize the results.""",
)

EXTRACT_DOCUMENT_DATA_TEMPLATE = parse_template(
    "extract_document_data",
    """You are an expert data extraction agent specializing in compliance documents for the {{industry}} industry.
Your task is to analyze the provided document and extract key-value pairs.

Document ({{document_type}}):
{{media url=document_data_uri}}

Based on the document's content, extract all relevant fields. Common fields include 'Certificate Number', \
'Issue Date', 'Expiry Date', 'Test Standard', 'Manufacturer Name', 'Product Model'.
Generate a summary of the document and provide a confidence score between 0 and 1 for each extracted field.
The output must be a valid JSON object.""",
)

CAMPAIGN_EMAIL_TEMPLATE = parse_template(
    "generate_campaign_email",
    """You are an expert supply chain communication assistant. Your task is to draft a professional and clear \
email to a supplier based on a campaign objective.

The email should be sent from {{company_name}}.

The tone should be professional, courteous, and clear. The email should state the request, explain why it's \
important, and provide a clear call to action (e.g., "Please log in to the portal to fulfill this request.").

Use markdown for formatting. Ensure there are appropriate line breaks to make the email readable.

Campaign Objective: {{campaign_objective}}
""",
)

FORM_TEMPLATE_TEMPLATE = parse_template(
    "generate_form_template",
    """You are an expert in regulatory compliance and data modeling for Digital Product Passports (DPP).
Your task is to generate an exhaustive and accurate list of metadata fields required for a DPP for the given product.

Industry: {{industry_name}}
Product Category: {{category_name}}

Based on this, create a comprehensive schema. Include fields for identification, manufacturer details, \
technical specifications, materials, circularity (recycling, repair), and compliance.
For each field, provide a unique snake_case 'field_id', a human-readable 'label', a 'type' (from text, float, \
select, boolean, textarea, date), whether it is 'required', and an optional 'placeholder'.
For 'select' fields, provide a list of 'options'. The field_id should be concise and programmatic.

The output must be a JSON object with a single key "fields_schema" containing an array of these field objects.""",
)

CERTIFICATE_RULES_TEMPLATE = parse_template(
    "suggest_certificate_rules",
    """You are an expert in global product compliance and regulations, with a deep specialization in EU Digital \
Product Passport (DPP) requirements.

Your task is to analyze the provided product description and target region to suggest the most relevant and \
mandatory certificates.

Focus on regulations like the EU Battery Regulation, REACH, RoHS, WEEE, and other relevant directives for the \
specified product type.

Product Description: {{product_description}}
Target Region: {{target_region}}

Based on this information, provide a list of suggested certificates. For each suggestion, include the \
certificate name, a brief description of its purpose, and the primary regulation it is tied to.""",
)

REFINE_EMAIL_TEMPLATE = parse_template(
    "refine_email_template",
    """You are an expert in writing professional business communications. Your task is to refine the following \
email body based on the user's instruction.

It is critical that you keep the Handlebars-style placeholders (e.g., \\{{user.name}}, \\{{product.link}}) intact \
in your response. Do not change them.

Refinement Instruction: {{instruction}}

Current Email Body:
---
{{current_body}}
---
""",
)

PRODUCT_COMPLIANCE_TEMPLATE = parse_template(
    "analyze_product_compliance",
    """You are an expert compliance auditor for Digital Product Passports. Your task is to analyze a product's \
submitted documents against its list of required compliance rules.

Product Name: {{product_name}}

Required Rules:
{{#each rules}}
- Rule: "{{this.certificate_name}}". Description: {{this.description}}
{{/each}}

Submitted Documents:
{{#each documents}}
---
Document File Name: {{this.document_name}}
Document Type: {{this.document_type}}
Content:
{{media url=this.data_uri}}
---
{{else}}
No documents have been submitted.
{{/each}}

Please perform the following analysis:
1.  For each required rule, check if a corresponding document has been submitted.
2.  If a document is submitted for a rule, briefly assess if its content is relevant to the rule. For example, \
does a "UN 38.3" document look like a transport safety report?
3.  Based on your analysis, provide an overall status and summary.
4.  Provide a detailed breakdown for each rule, stating whether the document is 'Verified' (submitted and seems \
correct), 'Missing' (no document submitted), or 'Issue Found' (submitted document seems incorrect or \
irrelevant). Provide brief notes for your reasoning.""",
)

TRACEABILITY_TEMPLATE = parse_template(
    "analyze_traceability",
    """You are an expert supply chain analyst specializing in risk assessment for digital product passports. \
Your task is to analyze the following Bill of Materials (BOM) for a product and identify potential risks.

Product Name: {{product_name}}

Bill of Materials (one line per entry; tier 1 is supplied directly to the manufacturer):
{{#each bill_of_materials}}
- [{{this.entry_id}}] Tier {{this.tier}}{{#if this.parent_id}} (component of {{this.parent_id}}){{/if}}: \
{{this.name}}
  Supplier: {{#if this.supplier_id}}{{this.supplier_id}}{{#if this.supplier_name}} ({{this.supplier_name}}){{/if}}\
{{else}}MISSING{{/if}}; supplier status: {{#if this.supplier_status}}{{this.supplier_status}}{{else}}unknown{{/if}}
  Compliance status: {{#if this.compliance_status}}{{this.compliance_status}}{{else}}unknown{{/if}}; \
origin: {{#if this.origin_country}}{{this.origin_country}}{{else}}unknown{{/if}}; \
conflict minerals flag: {{this.conflict_minerals_flag}}
{{else}}
No bill of materials entries were provided.
{{/each}}

Analyze the data for the following types of risks:
-   **Data Gaps**: Look for missing suppliers, incomplete lower tiers, or materials with a 'Pending' or \
'Invited' compliance status which indicates unverified data.
-   **Conflict Minerals**: Identify any materials flagged with a conflict minerals flag that come from \
high-risk regions (e.g., 'CD' for Congo) without a 'Verified' compliance status.
-   **Supplier Validity**: Note any suppliers that are still in an 'Invited' status, as their data cannot be \
trusted until they are fully onboarded.

Based on your analysis, provide an overall risk level, a brief summary, and a detailed list of issues with \
recommendations for how to fix them.""",
)
