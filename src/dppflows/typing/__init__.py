"""Typing-centric domain modules."""

from dppflows.typing.enums import (
    FailureReason,
    FlowName,
    FormFieldType,
    NotificationAudience,
    OverallComplianceStatus,
    ReviewStatus,
    RiskLevel,
    RuleStatus,
    ViolationKind,
)
from dppflows.typing.protocol import CompletionBackend, EmailSender

__all__ = [
    "CompletionBackend",
    "EmailSender",
    "FailureReason",
    "FlowName",
    "FormFieldType",
    "NotificationAudience",
    "OverallComplianceStatus",
    "ReviewStatus",
    "RiskLevel",
    "RuleStatus",
    "ViolationKind",
]
