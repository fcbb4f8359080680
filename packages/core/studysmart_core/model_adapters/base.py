"""Base model adapter interface."""

from abc import ABC, abstractmethod

from studysmart_core.schemas.cards import QAPair


class BaseModelAdapter(ABC):
    """Abstract base class for generation-service adapters."""

    @abstractmethod
    async def summarize(self, text: str) -> str:
        """Summarize study material.

        Args:
            text: Source text (the adapter applies the length cap)

        Returns:
            Non-empty summary

        Raises:
            GenerationError: If the service fails or returns no content
        """
        pass

    @abstractmethod
    async def generate_flashcards(self, text: str) -> list[QAPair]:
        """Generate question/answer pairs from study material.

        Args:
            text: Source text (the adapter applies the length cap)

        Returns:
            Parsed question/answer pairs

        Raises:
            GenerationError: If the service fails or the response cannot be parsed
        """
        pass
