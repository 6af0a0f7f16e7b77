"""Completion provider implementations.

This package contains concrete implementations of BaseCompletionClient
for the supported providers (Claude, Gemini).
"""

from ...config.schema import ExtractionConfig
from .base import BaseCompletionClient
from .claude import ClaudeCompletionClient
from .gemini import GeminiCompletionClient


def create_client(config: ExtractionConfig) -> BaseCompletionClient:
    """Create the completion client selected by ``config.provider``.

    Raises:
        APIKeyError: If the provider's API key is missing or invalid
        ValueError: If the provider is unknown
    """
    if config.provider == "claude":
        return ClaudeCompletionClient(
            api_key=config.claude_api_key,
            model=config.model,
            max_tokens=config.max_tokens,
            temperature=config.temperature,
        )
    if config.provider == "gemini":
        return GeminiCompletionClient(
            api_key=config.gemini_api_key,
            model=config.model,
            max_tokens=config.max_tokens,
            temperature=config.temperature,
        )
    raise ValueError(f"Unknown provider: {config.provider}")


__all__ = [
    "BaseCompletionClient",
    "ClaudeCompletionClient",
    "GeminiCompletionClient",
    "create_client",
]
