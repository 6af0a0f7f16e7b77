"""Gemini (Google AI) completion client."""

from typing import Any

import google.generativeai as genai
from google.generativeai import GenerativeModel
from google.generativeai.types import GenerateContentResponse

from ...utils.api_keys import get_validated_api_key
from ..errors import ProviderError
from ..models import Message
from .base import BaseCompletionClient

# Gemini calls the assistant role "model"
_ROLE_MAP = {"user": "user", "assistant": "model"}


class GeminiCompletionClient(BaseCompletionClient):
    """Completion client using the Gemini API with JSON response mode."""

    name = "gemini"

    # Model to use when none is configured
    MODEL = "gemini-1.5-flash-latest"

    def __init__(
        self,
        api_key: str | None = None,
        model: str | None = None,
        max_tokens: int = 2048,
        temperature: float = 0.0,
    ) -> None:
        """Initialize Gemini client.

        Args:
            api_key: Google AI API key (defaults to GOOGLE_API_KEY env var)
            model: Model name (defaults to MODEL)
            max_tokens: Maximum tokens in a completion
            temperature: Sampling temperature

        Raises:
            APIKeyError: If API key not provided or invalid
        """
        self.api_key = get_validated_api_key("GOOGLE_API_KEY", "gemini", api_key)
        self.model_name = model or self.MODEL
        self.generation_config: dict[str, Any] = {
            "temperature": temperature,
            "max_output_tokens": max_tokens,
            "response_mime_type": "application/json",
        }

        genai.configure(api_key=self.api_key)

    async def complete(self, messages: list[Message]) -> str:
        """Request a completion from Gemini.

        Args:
            messages: Role-tagged messages; system messages become the system instruction

        Returns:
            Response text

        Raises:
            ProviderError: If API call fails or returns no text
        """
        system, turns = self.split_system(messages)

        model = GenerativeModel(self.model_name, system_instruction=system or None)
        contents = [{"role": _ROLE_MAP[m.role], "parts": [m.content]} for m in turns]

        try:
            response: GenerateContentResponse = await model.generate_content_async(
                contents, generation_config=self.generation_config
            )
            text = response.text
        except Exception as e:
            raise ProviderError(f"Gemini API error: {str(e)}", provider=self.name) from e

        if not text:
            raise ProviderError("Empty response from Gemini", provider=self.name)

        return text
