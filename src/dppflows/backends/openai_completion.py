"""OpenAI-compatible structured completion backend."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

import httpx
from openai import APIConnectionError, APIStatusError, APITimeoutError, OpenAI

from dppflows import logger
from dppflows.exceptions import RemoteInvocationError
from dppflows.settings import build_httpx_client_kwargs
from dppflows.typing.models import MediaReference, RemoteReply

if TYPE_CHECKING:
    from dppflows.settings import Settings
    from dppflows.typing.models import RenderedPrompt, SanitizedJsonSchema

_DEFAULT_BASE_URL = "https://api.openai.com/v1"


class OpenAICompletionBackend:
    """Chat-completions backend returning JSON shaped by a response schema."""

    def __init__(self, settings: Settings) -> None:
        """Initialize backend.

        Args:
            settings (Settings): Runtime settings.
        """
        self._settings = settings

    @property
    def settings(self) -> Settings:
        """Return runtime settings."""
        return self._settings

    def _post_chat_completions(self, payload: dict[str, Any]) -> dict[str, Any]:
        """Send one completion request.

        A dedicated HTTP client is opened for the call and closed afterwards.

        Args:
            payload (dict[str, Any]): Request payload.

        Raises:
            RemoteInvocationError: If the request fails or the backend is misconfigured.

        Returns:
            dict[str, Any]: Completion payload.
        """
        if not self._settings.openai_api_key:
            raise RemoteInvocationError(message="OPENAI_API_KEY is required for the completion backend")

        base_url = self._settings.openai_base_url or _DEFAULT_BASE_URL

        try:
            client_kwargs = build_httpx_client_kwargs(self._settings, target_url=base_url)
            with httpx.Client(**client_kwargs) as http_client:
                openai_client = OpenAI(
                    api_key=self._settings.openai_api_key,
                    base_url=base_url,
                    http_client=http_client,
                    max_retries=0,
                )
                completion = openai_client.chat.completions.create(**payload)
                return completion.model_dump(mode="json")
        except APIStatusError as exc:
            raise RemoteInvocationError(
                message=f"Chat completion request failed with status {exc.status_code}",
            ) from exc
        except APITimeoutError as exc:
            raise RemoteInvocationError(message="Chat completion request timed out") from exc
        except APIConnectionError as exc:
            raise RemoteInvocationError(message=f"Chat completion request failed: {exc}") from exc
        except Exception as exc:
            raise RemoteInvocationError(message=f"Chat completion request failed: {exc}") from exc

    @staticmethod
    def _media_content(media: MediaReference) -> dict[str, Any]:
        """Build the content block for an attachment.

        Args:
            media (MediaReference): Attachment.

        Returns:
            dict[str, Any]: OpenAI content block.
        """
        if media.mime_type.startswith("image/"):
            return {"type": "image_url", "image_url": {"url": media.data_uri}}
        return {
            "type": "file",
            "file": {"filename": f"attachment-{media.index}", "file_data": media.data_uri},
        }

    @classmethod
    def _message_content(cls, prompt: RenderedPrompt) -> list[dict[str, Any]]:
        """Resolve prompt parts into ordered content blocks.

        Args:
            prompt (RenderedPrompt): Rendered prompt.

        Returns:
            list[dict[str, Any]]: Text and attachment blocks in prompt order.
        """
        return [
            cls._media_content(part) if isinstance(part, MediaReference) else {"type": "text", "text": part}
            for part in prompt.parts
        ]

    @staticmethod
    def _parse_content(data: dict[str, Any]) -> dict[str, Any]:
        """Extract the JSON object returned by the model.

        Args:
            data (dict[str, Any]): Completion payload.

        Raises:
            RemoteInvocationError: If the reply is empty, not JSON, or not an object.

        Returns:
            dict[str, Any]: Parsed reply.
        """
        try:
            content_text = data["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError) as exc:
            raise RemoteInvocationError(message="Chat completion reply has no message content") from exc
        if not content_text:
            raise RemoteInvocationError(message="Chat completion reply is empty")

        try:
            parsed = json.loads(content_text)
        except json.JSONDecodeError as exc:
            raise RemoteInvocationError(message="Chat completion reply is not valid JSON") from exc
        if not isinstance(parsed, dict):
            raise RemoteInvocationError(message="Chat completion reply is not a JSON object")
        return parsed

    def complete(self, prompt: RenderedPrompt, response_format: SanitizedJsonSchema) -> RemoteReply:
        """Send a rendered prompt and return the parsed JSON reply.

        Args:
            prompt (RenderedPrompt): Rendered prompt with attachments.
            response_format (SanitizedJsonSchema): Output schema descriptor.

        Returns:
            RemoteReply: Parsed reply and token usage.
        """
        payload = {
            "model": self._settings.openai_model,
            "messages": [{"role": "user", "content": self._message_content(prompt)}],
            "response_format": {
                "type": "json_schema",
                "json_schema": response_format.model_dump(mode="json", by_alias=True),
            },
        }

        data = self._post_chat_completions(payload)
        content = self._parse_content(data)
        usage = data.get("usage") or {}
        reply = RemoteReply(
            content=content,
            model=data.get("model") or self._settings.openai_model,
            input_tokens=usage.get("prompt_tokens"),
            output_tokens=usage.get("completion_tokens"),
        )
        logger.info(
            "Completion received",
            extra={
                "schema": response_format.name,
                "input_tokens": reply.input_tokens,
                "output_tokens": reply.output_tokens,
            },
        )
        return reply
