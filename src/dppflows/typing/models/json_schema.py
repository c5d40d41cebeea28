"""Structured-output schema and provider reply models."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class SanitizedJsonSchema(BaseModel):
    """Schema payload used for structured output."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    name: str
    json_schema: dict[str, Any] = Field(alias="schema")
    strict: bool = True


class RemoteReply(BaseModel):
    """Parsed reply of one completion call."""

    model_config = ConfigDict(extra="forbid")

    content: dict[str, Any]
    model: str
    input_tokens: int | None = None
    output_tokens: int | None = None
