"""Collaborator interfaces."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from dppflows.typing.models import EmailMessage, RemoteReply, RenderedPrompt, SanitizedJsonSchema


class CompletionBackend(Protocol):
    """Hosted generation service returning schema-shaped JSON."""

    def complete(self, prompt: RenderedPrompt, response_format: SanitizedJsonSchema) -> RemoteReply:
        """Send one prompt and return the parsed reply.

        Args:
            prompt: Rendered prompt with attachments.
            response_format: Output schema descriptor.

        Returns:
            RemoteReply: Parsed JSON reply.
        """


class EmailSender(Protocol):
    """Transactional email provider."""

    def send(self, message: EmailMessage) -> None:
        """Deliver one email.

        Args:
            message: Recipient, subject and HTML body.
        """
