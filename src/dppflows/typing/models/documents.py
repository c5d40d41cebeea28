"""Document intelligence and review models."""

from __future__ import annotations

from typing import Annotated, Any

from pydantic import Field

from dppflows.typing.enums import ReviewStatus
from dppflows.typing.models.common import DataUri, FlowModel

Confidence = Annotated[float, Field(ge=0.0, le=1.0)]


class ExtractDataFromDocumentInput(FlowModel):
    """Request for structured field extraction from an uploaded document."""

    document_data_uri: DataUri = Field(description="The document as a base64 data URI including its MIME type.")
    document_type: str = Field(description="The MIME type of the document, e.g. 'application/pdf'.")
    industry: str = Field(description="The industry context, e.g. 'Battery'.")


class ExtractDataFromDocumentOutput(FlowModel):
    """Fields extracted from a document."""

    extracted_data: dict[str, str] = Field(description="Key-value pairs extracted from the document.")
    confidence_scores: dict[str, Confidence] = Field(
        description="Confidence score between 0 and 1 for each extracted key.",
    )
    summary: str = Field(description="A brief summary of the document's content.")


class ReviewExtractedDataInput(FlowModel):
    """Human review of AI-extracted document data."""

    document_id: str
    ai_extracted_data: dict[str, Any]
    human_corrected_data: dict[str, Any]
    review_status: ReviewStatus
    reviewer_id: str
    notes: str | None = None


class ReviewExtractedDataOutput(FlowModel):
    """Outcome of a logged review session."""

    review_session_id: str
    final_data: dict[str, Any]
    status_message: str
