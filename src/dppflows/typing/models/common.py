"""Shared model bases and constrained types."""

from __future__ import annotations

from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from dppflows.typing.enums import ViolationKind

DATA_URI_PATTERN = r"^data:([\w.+-]+/[\w.+-]+)((?:;[\w.+-]+=[^;,]*)*);base64,([A-Za-z0-9+/=\r\n]*)$"
EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"

DataUri = Annotated[str, Field(pattern=DATA_URI_PATTERN)]
EmailAddress = Annotated[str, Field(pattern=EMAIL_PATTERN)]


class FlowModel(BaseModel):
    """Base for flow requests and responses exchanged as camelCase JSON."""

    model_config = ConfigDict(extra="forbid", alias_generator=to_camel, populate_by_name=True)

    def to_json_dict(self) -> dict[str, Any]:
        """Return the JSON-shaped payload with camelCase keys.

        Returns:
            dict[str, Any]: Serialized model.
        """
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class FieldViolation(BaseModel):
    """One schema constraint broken by a payload."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    location: str
    kind: ViolationKind
    message: str
