from __future__ import annotations

from dppflows.backends import CompletionBackend, EmailSender, OpenAICompletionBackend, SendGridEmailBackend
from dppflows.settings import Settings


def _accepts_backend(backend: CompletionBackend) -> CompletionBackend:
    return backend


def _accepts_sender(sender: EmailSender) -> EmailSender:
    return sender


def test_backends_satisfy_protocols() -> None:
    settings = Settings()

    assert callable(_accepts_backend(OpenAICompletionBackend(settings)).complete)
    assert callable(_accepts_sender(SendGridEmailBackend(settings)).send)
    assert OpenAICompletionBackend(settings).settings is settings
