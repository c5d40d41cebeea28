"""Pytest marker auto-assignment by folder and shared test doubles."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Any

import pytest

from dppflows import logger
from dppflows.typing.models import RemoteReply

if TYPE_CHECKING:
    from collections.abc import Callable

    from dppflows.typing.models import EmailMessage, RenderedPrompt, SanitizedJsonSchema

PDF_DATA_URI = "data:application/pdf;base64,JVBERi0xLjQK"
PNG_DATA_URI = "data:image/png;base64,iVBORw0KGgo="


class FakeCompletionBackend:
    """Completion backend returning canned replies and recording calls."""

    def __init__(self, replies: list[dict[str, Any]] | None = None, error: Exception | None = None) -> None:
        self.replies = list(replies or [])
        self.error = error
        self.calls: list[tuple[RenderedPrompt, SanitizedJsonSchema]] = []

    def complete(self, prompt: RenderedPrompt, response_format: SanitizedJsonSchema) -> RemoteReply:
        self.calls.append((prompt, response_format))
        if self.error is not None:
            raise self.error
        return RemoteReply(content=self.replies.pop(0), model="fake-model", input_tokens=12, output_tokens=5)


class RecordingEmailSender:
    """Email sender keeping messages in memory."""

    def __init__(self, error: Exception | None = None) -> None:
        self.error = error
        self.sent: list[EmailMessage] = []

    def send(self, message: EmailMessage) -> None:
        if self.error is not None:
            raise self.error
        self.sent.append(message)


@pytest.fixture
def make_backend() -> Callable[..., FakeCompletionBackend]:
    return FakeCompletionBackend


@pytest.fixture
def make_sender() -> Callable[..., RecordingEmailSender]:
    return RecordingEmailSender


def _mark_tests_by_directory(
    config: pytest.Config,
    items: list[pytest.Item],
    marker: str,
) -> None:
    """Mark collected tests located under tests/<marker>/."""
    target_dir = Path(config.rootpath) / "tests" / marker
    target_dir = target_dir.resolve()

    for item in items:
        try:
            path = Path(str(item.fspath)).resolve()
        except Exception:
            logger.warning(
                f"Could not resolve path for test item {item.name!s}; skipping {marker!s} marker assignment",
            )
            continue

        if path == target_dir or target_dir in path.parents:
            item.add_marker(getattr(pytest.mark, marker))


def pytest_collection_modifyitems(
    config: pytest.Config,
    items: list[pytest.Item],
) -> None:
    """Apply directory-based markers to test items."""
    _mark_tests_by_directory(config, items, "unit")
    _mark_tests_by_directory(config, items, "integration")
    _mark_tests_by_directory(config, items, "end2end")
