"""Shared fixtures for textshape tests."""

from collections.abc import Iterable

import pytest

from textshape.extraction.clients import BaseCompletionClient
from textshape.extraction.models import Message

VALID_CLAUDE_KEY = "sk-ant-REDACTED"
VALID_GEMINI_KEY = "AIzaTestKey0123456789abcdefghij"


class ScriptedClient(BaseCompletionClient):
    """Completion client that replays canned responses in order.

    An item that is an exception instance is raised instead of returned.
    The last item repeats once the script runs out.
    """

    name = "scripted"

    def __init__(self, responses: Iterable[str | Exception]) -> None:
        self.responses = list(responses)
        self.calls: list[list[Message]] = []

    async def complete(self, messages: list[Message]) -> str:
        self.calls.append(messages)
        index = min(len(self.calls), len(self.responses)) - 1
        response = self.responses[index]
        if isinstance(response, Exception):
            raise response
        return response


@pytest.fixture
def scripted_client():
    """Factory for ScriptedClient instances."""
    return ScriptedClient


@pytest.fixture
def mock_api_keys(monkeypatch: pytest.MonkeyPatch) -> None:
    """Set well-formed API keys in the environment."""
    monkeypatch.setenv("ANTHROPIC_API_KEY", VALID_CLAUDE_KEY)
    monkeypatch.setenv("GOOGLE_API_KEY", VALID_GEMINI_KEY)


@pytest.fixture
def sample_config_dict() -> dict:
    """Sample configuration dictionary."""
    return {
        "version": "1",
        "log_level": "INFO",
        "extraction": {
            "provider": "gemini",
            "model": "gemini-1.5-pro",
            "max_retries": 3,
        },
    }
