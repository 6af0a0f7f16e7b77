"""Base class for completion providers."""

from abc import ABC, abstractmethod

from ..models import Message


class BaseCompletionClient(ABC):
    """Sends an ordered list of messages to a provider and returns its text.

    Implementations are stateless per call: the same client may serve every
    attempt of an extraction and many extractions at once.
    """

    #: Provider name used in logs and errors
    name: str = "base"

    @abstractmethod
    async def complete(self, messages: list[Message]) -> str:
        """Request one completion.

        Args:
            messages: System instruction, examples and live message, in order

        Returns:
            Raw completion text

        Raises:
            ProviderError: If the provider call fails
        """

    @staticmethod
    def split_system(messages: list[Message]) -> tuple[str, list[Message]]:
        """Separate system messages from the conversation turns."""
        system = "\n\n".join(m.content for m in messages if m.role == "system")
        turns = [m for m in messages if m.role != "system"]
        return system, turns
