"""Remote collaborator backends."""

from dppflows.backends.openai_completion import OpenAICompletionBackend
from dppflows.backends.sendgrid_email import SendGridEmailBackend
from dppflows.typing.protocol import CompletionBackend, EmailSender

__all__ = [
    "CompletionBackend",
    "EmailSender",
    "OpenAICompletionBackend",
    "SendGridEmailBackend",
]
