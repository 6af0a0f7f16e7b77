"""Claude (Anthropic) completion client."""

from typing import Any

from anthropic import AsyncAnthropic
from anthropic.types import Message as AnthropicMessage

from ...utils.api_keys import get_validated_api_key
from ..errors import ProviderError
from ..models import Message
from .base import BaseCompletionClient


class ClaudeCompletionClient(BaseCompletionClient):
    """Completion client using the Anthropic Messages API."""

    name = "claude"

    # Model to use when none is configured
    MODEL = "claude-3-5-haiku-latest"

    def __init__(
        self,
        api_key: str | None = None,
        model: str | None = None,
        max_tokens: int = 2048,
        temperature: float = 0.0,
    ) -> None:
        """Initialize Claude client.

        Args:
            api_key: Anthropic API key (defaults to ANTHROPIC_API_KEY env var)
            model: Model name (defaults to MODEL)
            max_tokens: Maximum tokens in a completion
            temperature: Sampling temperature

        Raises:
            APIKeyError: If API key not provided or invalid
        """
        self.api_key = get_validated_api_key("ANTHROPIC_API_KEY", "claude", api_key)
        self.model = model or self.MODEL
        self.max_tokens = max_tokens
        self.temperature = temperature

        self.client = AsyncAnthropic(api_key=self.api_key)

    async def complete(self, messages: list[Message]) -> str:
        """Request a completion from Claude.

        Args:
            messages: Role-tagged messages; system messages become the system prompt

        Returns:
            Concatenated text blocks of the response

        Raises:
            ProviderError: If API call fails or returns no text
        """
        system, turns = self.split_system(messages)

        request_params: dict[str, Any] = {
            "model": self.model,
            "max_tokens": self.max_tokens,
            "temperature": self.temperature,
            "messages": [{"role": m.role, "content": m.content} for m in turns],
        }
        if system:
            request_params["system"] = system

        try:
            response: AnthropicMessage = await self.client.messages.create(**request_params)
        except Exception as e:
            status_code = getattr(e, "status_code", None)
            raise ProviderError(
                f"Claude API error: {str(e)}", provider=self.name, status_code=status_code
            ) from e

        # Claude returns list of content blocks
        text = "".join(block.text for block in response.content if hasattr(block, "text"))
        if not text:
            raise ProviderError("Empty response from Claude", provider=self.name)

        return text
