"""QR code and portal action models."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from dppflows.typing.models.common import FlowModel


class QRCodeRequest(FlowModel):
    """Passport version a QR code is generated for."""

    product_id: str = Field(min_length=1)
    version_id: str = Field(min_length=1)


class QRCodeLog(BaseModel):
    """Generated QR code record."""

    model_config = ConfigDict(extra="forbid")

    qr_code_id: str
    product_id: str
    version_id: str
    qr_code_value: str
    hash_signature: str
    rendered_image_base64: str
    last_updated_at: datetime
    generated_by: str = "system"
    status: str = "Active"
    redirect_mode: str = "Direct Link"


class ActionResult(BaseModel):
    """Outcome of a portal action."""

    model_config = ConfigDict(extra="forbid")

    success: bool
    error: str | None = None


class QRCodeActionResult(ActionResult):
    """Outcome of the QR code generation action."""

    data: QRCodeLog | None = None
