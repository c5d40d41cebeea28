"""Rendered prompt models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class MediaReference(BaseModel):
    """Document attachment referenced from a rendered prompt."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    index: int
    mime_type: str
    data_base64: str

    @property
    def data_uri(self) -> str:
        """Return the attachment as a base64 data URI."""
        return f"data:{self.mime_type};base64,{self.data_base64}"

    @property
    def token(self) -> str:
        """Return the placeholder shown in the textual prompt."""
        return f"<media:{self.index} {self.mime_type}>"


class RenderedPrompt(BaseModel):
    """Prompt text interleaved with attachment references."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    parts: tuple[str | MediaReference, ...]

    @property
    def text(self) -> str:
        """Return the prompt with attachments replaced by reference tokens."""
        return "".join(part if isinstance(part, str) else part.token for part in self.parts)

    @property
    def media(self) -> list[MediaReference]:
        """Return attachments in prompt order."""
        return [part for part in self.parts if isinstance(part, MediaReference)]
