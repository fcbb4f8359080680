"""Strict parsing of structured generation output."""

import json
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from studysmart_core.errors import FlashcardParseError
from studysmart_core.schemas.cards import QAPair
from studysmart_core.utils.logging import get_logger

logger = get_logger(__name__)

# Wrapper keys the service is known to use around the card array
WRAPPER_KEYS = ("cards", "flashcards")


def _normalize_keys(item: dict[str, Any]) -> dict[str, Any]:
    """Lower-case keys so ``Question``/``Answer`` are accepted."""
    return {str(key).lower(): value for key, value in item.items()}


def _unwrap(data: Any) -> list[Any]:
    """Return the card array from a bare list or a known wrapper object."""
    if isinstance(data, list):
        return data
    if isinstance(data, dict):
        for key in WRAPPER_KEYS:
            if key in data:
                cards = data[key]
                if isinstance(cards, list):
                    return cards
                raise FlashcardParseError(
                    f"Field '{key}' in flashcard response is not an array"
                )
        raise FlashcardParseError(
            f"Flashcard response object has none of the fields {list(WRAPPER_KEYS)}"
        )
    raise FlashcardParseError(
        f"Flashcard response must be an array or object, got {type(data).__name__}"
    )


def parse_flashcards(content: str) -> list[QAPair]:
    """Parse the service's flashcard response into question/answer pairs.

    Accepts a JSON array, or an object exposing the array under ``cards`` or
    ``flashcards``. Anything else is rejected instead of being coerced into
    an empty result.

    Args:
        content: Raw response content string

    Returns:
        Parsed pairs (possibly empty when the service returned an empty array)

    Raises:
        FlashcardParseError: If the content is not valid JSON of the expected shape
    """
    if not content or not content.strip():
        raise FlashcardParseError("Empty flashcard response from generation service")

    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        logger.error(f"Failed to parse JSON response: {e}. Content: {content[:200]}...")
        raise FlashcardParseError(f"Flashcard response is not valid JSON: {e}") from e

    pairs: list[QAPair] = []
    for index, item in enumerate(_unwrap(data)):
        if not isinstance(item, dict):
            raise FlashcardParseError(f"Flashcard {index} is not an object")
        try:
            pairs.append(QAPair.model_validate(_normalize_keys(item)))
        except PydanticValidationError as e:
            raise FlashcardParseError(
                f"Flashcard {index} is missing a question or answer"
            ) from e

    return pairs
