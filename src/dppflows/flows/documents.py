"""Document intelligence and human review flows."""

from __future__ import annotations

import time
from typing import TYPE_CHECKING, Any

from dppflows import logger
from dppflows.fallbacks import document_extraction_fallback
from dppflows.pipeline import FlowDefinition, run_flow
from dppflows.prompts import EXTRACT_DOCUMENT_DATA_TEMPLATE
from dppflows.typing.enums import FlowName
from dppflows.typing.models import (
    ExtractDataFromDocumentInput,
    ExtractDataFromDocumentOutput,
    ReviewExtractedDataInput,
    ReviewExtractedDataOutput,
)
from dppflows.validation import validate_input

if TYPE_CHECKING:
    from collections.abc import Mapping

    from dppflows.typing.protocol import CompletionBackend

REVIEW_LOGGED_MESSAGE = "Review session logged successfully. Validated data is now the ground truth."

EXTRACT_DOCUMENT_DATA_FLOW = FlowDefinition(
    name=FlowName.EXTRACT_DOCUMENT_DATA,
    description="Extract key-value fields, confidence scores and a summary from an uploaded document.",
    input_model=ExtractDataFromDocumentInput,
    output_model=ExtractDataFromDocumentOutput,
    template=EXTRACT_DOCUMENT_DATA_TEMPLATE,
    fallback=document_extraction_fallback,
    strict_output=False,
)


def extract_data_from_document(
    request: ExtractDataFromDocumentInput | Mapping[str, Any],
    *,
    backend: CompletionBackend,
) -> ExtractDataFromDocumentOutput:
    """Extract structured fields from a document.

    Args:
        request (ExtractDataFromDocumentInput | Mapping[str, Any]): Document data URI, type and industry.
        backend (CompletionBackend): Generation backend.

    Returns:
        ExtractDataFromDocumentOutput: Extracted fields, or the sample payload when the model fails.
    """
    return run_flow(EXTRACT_DOCUMENT_DATA_FLOW, request, backend=backend)


def review_extracted_data(request: ReviewExtractedDataInput | Mapping[str, Any]) -> ReviewExtractedDataOutput:
    """Record a human review of extracted data; the corrected data becomes final.

    Args:
        request (ReviewExtractedDataInput | Mapping[str, Any]): Review session details.

    Returns:
        ReviewExtractedDataOutput: Session id and final data.
    """
    review = validate_input("review-extracted-data", ReviewExtractedDataInput, request)
    logger.info(
        "Human-in-the-loop review session",
        extra={
            "document_id": review.document_id,
            "reviewer_id": review.reviewer_id,
            "review_status": review.review_status,
            "notes": review.notes or "N/A",
        },
    )
    return ReviewExtractedDataOutput(
        review_session_id=f"review_{time.time_ns() // 1_000_000}",
        final_data=review.human_corrected_data,
        status_message=REVIEW_LOGGED_MESSAGE,
    )
