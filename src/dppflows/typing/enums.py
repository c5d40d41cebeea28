"""Project enums."""

from __future__ import annotations

from enum import StrEnum


class _EnumMixin(StrEnum):
    """Shared conversion helpers for user-facing enums."""

    @classmethod
    def from_str(cls, value: str) -> _EnumMixin:
        """Parse enum from string.

        Args:
            value: Raw string value.

        Raises:
            ValueError: If the value is not supported.

        Returns:
            _EnumMixin: Parsed enum value.
        """
        try:
            return cls(value)
        except ValueError as exc:
            supported = ", ".join(member.value for member in cls)
            message = f"Unsupported {cls.__name__} value '{value}'. Expected one of: {supported}"
            raise ValueError(message) from exc

    def to_str(self) -> str:
        """Return string representation.

        Returns:
            str: Enum string value.
        """
        return self.value


class FlowName(_EnumMixin):
    """Registered prompt-backed flows."""

    COMPLIANCE_CHECK = "compliance-check"
    EXTRACT_DOCUMENT_DATA = "extract-document-data"
    GENERATE_CAMPAIGN_EMAIL = "generate-campaign-email"
    GENERATE_FORM_TEMPLATE = "generate-form-template"
    SUGGEST_CERTIFICATE_RULES = "suggest-certificate-rules"
    REFINE_EMAIL_TEMPLATE = "refine-email-template"
    ANALYZE_PRODUCT_COMPLIANCE = "analyze-product-compliance"
    ANALYZE_TRACEABILITY = "analyze-traceability"


class RuleStatus(_EnumMixin):
    """Outcome for one required compliance rule."""

    VERIFIED = "Verified"
    MISSING = "Missing"
    ISSUE_FOUND = "Issue Found"


class OverallComplianceStatus(_EnumMixin):
    """Product-level compliance outcome."""

    COMPLIANT = "Compliant"
    ISSUES_FOUND = "Issues Found"
    MISSING_DOCUMENTS = "Missing Documents"


class RiskLevel(_EnumMixin):
    """Supply chain risk level."""

    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


class FormFieldType(_EnumMixin):
    """Input types available to passport form templates."""

    TEXT = "text"
    FLOAT = "float"
    SELECT = "select"
    BOOLEAN = "boolean"
    TEXTAREA = "textarea"
    DATE = "date"


class ReviewStatus(_EnumMixin):
    """Final status of a human review session."""

    APPROVED = "Approved"
    PARTIALLY_APPROVED = "Partially Approved"
    REJECTED = "Rejected"


class NotificationAudience(_EnumMixin):
    """Recipients of a broadcast notification."""

    ALL = "all"
    SUPPLIERS = "suppliers"
    MANUFACTURERS = "manufacturers"
    VERIFIERS = "verifiers"


class FailureReason(_EnumMixin):
    """Why a flow step did not produce a usable value."""

    INPUT_VALIDATION = "input_validation"
    REMOTE_INVOCATION = "remote_invocation"
    OUTPUT_VALIDATION = "output_validation"


class ViolationKind(_EnumMixin):
    """Category of a schema violation."""

    MISSING_FIELD = "missing_field"
    WRONG_TYPE = "wrong_type"
    NOT_IN_ENUMERATION = "not_in_enumeration"
    MALFORMED_LIST_ELEMENT = "malformed_list_element"
    UNEXPECTED_FIELD = "unexpected_field"
    CONSTRAINT_VIOLATED = "constraint_violated"
