"""Passport QR code generation."""

from __future__ import annotations

import hashlib
import uuid
from datetime import UTC, datetime
from typing import TYPE_CHECKING
from urllib.parse import quote

import segno

from dppflows import logger
from dppflows.exceptions import QRCodeError
from dppflows.typing.models import QRCodeLog

if TYPE_CHECKING:
    from dppflows.settings import Settings
    from dppflows.typing.models import QRCodeRequest

QR_SCALE = 8


def build_passport_url(base_url: str, product_id: str, version_id: str) -> str:
    """Build the public viewer URL of a passport version.

    Args:
        base_url (str): Public root of the passport viewer.
        product_id (str): Product identifier.
        version_id (str): Passport version identifier.

    Returns:
        str: Viewer URL.
    """
    return f"{base_url.rstrip('/')}/view/{quote(product_id, safe='')}?v={quote(version_id, safe='')}"


def hash_signature(value: str) -> str:
    """Return the integrity signature of an encoded QR value."""
    return f"sha256_{hashlib.sha256(value.encode('utf-8')).hexdigest()}"


def render_qr_data_uri(value: str, *, scale: int = QR_SCALE) -> str:
    """Render a value as a PNG data URI.

    Args:
        value (str): Value to encode.
        scale (int): Pixel size of one module.

    Raises:
        QRCodeError: If the value cannot be encoded.

    Returns:
        str: `data:image/png;base64,...` URI.
    """
    try:
        return segno.make_qr(value, error="m").png_data_uri(scale=scale)
    except ValueError as exc:
        raise QRCodeError(message=f"Failed to generate QR code image: {exc}") from exc


def generate_qr_code(request: QRCodeRequest, settings: Settings) -> QRCodeLog:
    """Generate the QR code record of a passport version.

    Args:
        request (QRCodeRequest): Product and version identifiers.
        settings (Settings): Runtime settings.

    Returns:
        QRCodeLog: Generated record.
    """
    value = build_passport_url(settings.passport_base_url, request.product_id, request.version_id)
    log = QRCodeLog(
        qr_code_id=f"qr_{uuid.uuid4()}",
        product_id=request.product_id,
        version_id=request.version_id,
        qr_code_value=value,
        hash_signature=hash_signature(value),
        rendered_image_base64=render_qr_data_uri(value),
        last_updated_at=datetime.now(UTC),
    )
    logger.info("QR code generated", extra={"qr_code_id": log.qr_code_id, "product_id": request.product_id})
    return log
