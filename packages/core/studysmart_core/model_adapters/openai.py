"""OpenAI model adapter."""

from typing import Any

from openai import AsyncOpenAI, OpenAIError

from studysmart_core.errors import ConfigurationError, GenerationError
from studysmart_core.model_adapters.base import BaseModelAdapter
from studysmart_core.model_adapters.parsing import parse_flashcards
from studysmart_core.prompts import (
    FLASHCARDS_PROMPT,
    FLASHCARDS_SYSTEM_PROMPT,
    SUMMARY_PROMPT,
    SUMMARY_SYSTEM_PROMPT,
    truncate_text,
)
from studysmart_core.schemas.cards import QAPair
from studysmart_core.utils.logging import get_logger

logger = get_logger(__name__)

# Default timeout for API calls (seconds)
DEFAULT_TIMEOUT = 120.0
DEFAULT_MAX_INPUT_CHARS = 12000


class OpenAIAdapter(BaseModelAdapter):
    """Adapter for OpenAI chat-completion models.

    Each call is a single attempt; failures surface as GenerationError and
    retrying is left to the caller.
    """

    def __init__(
        self,
        api_key: str | None,
        model: str = "gpt-3.5-turbo",
        base_url: str | None = None,
        timeout: float = DEFAULT_TIMEOUT,
        max_input_chars: int = DEFAULT_MAX_INPUT_CHARS,
        summary_max_tokens: int = 1000,
        flashcards_max_tokens: int = 1500,
    ):
        """Initialize the OpenAI adapter.

        Args:
            api_key: OpenAI API key
            model: Chat model identifier
            base_url: Optional custom base URL
            timeout: Request timeout in seconds, enforced by the client
            max_input_chars: Input is capped at this many characters
            summary_max_tokens: Completion cap for summaries
            flashcards_max_tokens: Completion cap for flashcards

        Raises:
            ConfigurationError: If no API key is provided
        """
        if not api_key:
            raise ConfigurationError("OPENAI_API_KEY is not configured")

        self.api_key = api_key
        self.model = model
        self.base_url = base_url
        self.timeout = timeout
        self.max_input_chars = max_input_chars
        self.summary_max_tokens = summary_max_tokens
        self.flashcards_max_tokens = flashcards_max_tokens

        self._client: AsyncOpenAI | None = None
        logger.info(f"Initialized OpenAI adapter (model={model})")

    @property
    def client(self) -> AsyncOpenAI:
        """Lazy-load the OpenAI client."""
        if self._client is None:
            self._client = AsyncOpenAI(
                api_key=self.api_key,
                base_url=self.base_url,
                timeout=self.timeout,
            )
        return self._client

    async def _call_api(
        self,
        messages: list[dict[str, Any]],
        operation_name: str,
        max_tokens: int,
        json_mode: bool = False,
    ) -> str:
        """Call the chat-completions API once.

        Args:
            messages: Chat messages
            operation_name: Name for logging
            max_tokens: Completion cap
            json_mode: Request a JSON object response

        Returns:
            Response content string (may be empty)

        Raises:
            GenerationError: If the request fails
        """
        request: dict[str, Any] = {
            "model": self.model,
            "messages": messages,
            "max_tokens": max_tokens,
            "temperature": 0.3,
        }
        if json_mode:
            request["response_format"] = {"type": "json_object"}

        logger.debug(f"Starting {operation_name} with model {self.model}")
        try:
            response = await self.client.chat.completions.create(**request)
        except OpenAIError as e:
            logger.error(f"{operation_name} failed: {e}")
            raise GenerationError(f"Generation service error: {e}") from e

        if not response.choices:
            return ""
        logger.debug(f"Completed {operation_name}")
        return response.choices[0].message.content or ""

    async def summarize(self, text: str) -> str:
        """Summarize text as revision bullet points."""
        capped = truncate_text(text, self.max_input_chars)
        if len(capped) < len(text):
            logger.info(f"Truncated summary input from {len(text)} to {len(capped)} chars")

        messages = [
            {"role": "system", "content": SUMMARY_SYSTEM_PROMPT},
            {"role": "user", "content": SUMMARY_PROMPT.format(text=capped)},
        ]
        content = await self._call_api(
            messages,
            operation_name="summarize",
            max_tokens=self.summary_max_tokens,
        )

        summary = content.strip()
        if not summary:
            raise GenerationError("Generation service returned an empty summary")
        logger.info(f"Generated summary ({len(summary)} chars)")
        return summary

    async def generate_flashcards(self, text: str) -> list[QAPair]:
        """Generate question/answer flashcards from text."""
        capped = truncate_text(text, self.max_input_chars)
        if len(capped) < len(text):
            logger.info(
                f"Truncated flashcard input from {len(text)} to {len(capped)} chars"
            )

        messages = [
            {"role": "system", "content": FLASHCARDS_SYSTEM_PROMPT},
            {"role": "user", "content": FLASHCARDS_PROMPT.format(text=capped)},
        ]
        content = await self._call_api(
            messages,
            operation_name="generate_flashcards",
            max_tokens=self.flashcards_max_tokens,
            json_mode=True,
        )

        cards = parse_flashcards(content)
        logger.info(f"Generated {len(cards)} flashcards")
        return cards
