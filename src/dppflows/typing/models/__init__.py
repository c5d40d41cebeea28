"""Core domain model exports."""

from dppflows.typing.models.catalog import (
    CertificateSuggestion,
    CertificateSuggestionInput,
    CertificateSuggestionOutput,
    FormTemplateField,
    FormTemplateInput,
    FormTemplateOutput,
)
from dppflows.typing.models.common import DataUri, EmailAddress, FieldViolation, FlowModel
from dppflows.typing.models.communication import (
    CampaignEmailInput,
    CampaignEmailOutput,
    EmailMessage,
    EmailTestRequest,
    NotificationRequest,
    RefineEmailTemplateInput,
    RefineEmailTemplateOutput,
    SendOtpInput,
    SendOtpOutput,
)
from dppflows.typing.models.compliance import (
    ComplianceCheckInput,
    ComplianceCheckOutput,
    ComplianceRule,
    DocumentResult,
    ProductComplianceAnalysisInput,
    ProductComplianceAnalysisOutput,
    SubmittedDocument,
)
from dppflows.typing.models.documents import (
    ExtractDataFromDocumentInput,
    ExtractDataFromDocumentOutput,
    ReviewExtractedDataInput,
    ReviewExtractedDataOutput,
)
from dppflows.typing.models.json_schema import RemoteReply, SanitizedJsonSchema
from dppflows.typing.models.outcome import Failure, Outcome, Success
from dppflows.typing.models.prompt import MediaReference, RenderedPrompt
from dppflows.typing.models.qr import ActionResult, QRCodeActionResult, QRCodeLog, QRCodeRequest
from dppflows.typing.models.traceability import (
    BomEntry,
    TraceabilityAnalysisInput,
    TraceabilityAnalysisOutput,
    TraceabilityIssue,
)

__all__ = [
    "ActionResult",
    "BomEntry",
    "CampaignEmailInput",
    "CampaignEmailOutput",
    "CertificateSuggestion",
    "CertificateSuggestionInput",
    "CertificateSuggestionOutput",
    "ComplianceCheckInput",
    "ComplianceCheckOutput",
    "ComplianceRule",
    "DataUri",
    "DocumentResult",
    "EmailAddress",
    "EmailMessage",
    "EmailTestRequest",
    "ExtractDataFromDocumentInput",
    "ExtractDataFromDocumentOutput",
    "Failure",
    "FieldViolation",
    "FlowModel",
    "FormTemplateField",
    "FormTemplateInput",
    "FormTemplateOutput",
    "MediaReference",
    "NotificationRequest",
    "Outcome",
    "ProductComplianceAnalysisInput",
    "ProductComplianceAnalysisOutput",
    "QRCodeActionResult",
    "QRCodeLog",
    "QRCodeRequest",
    "RefineEmailTemplateInput",
    "RefineEmailTemplateOutput",
    "RemoteReply",
    "RenderedPrompt",
    "ReviewExtractedDataInput",
    "ReviewExtractedDataOutput",
    "SanitizedJsonSchema",
    "SendOtpInput",
    "SendOtpOutput",
    "Success",
    "SubmittedDocument",
    "TraceabilityAnalysisInput",
    "TraceabilityAnalysisOutput",
    "TraceabilityIssue",
]
