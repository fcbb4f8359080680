"""Model adapters for text-generation backends."""

from studysmart_core.model_adapters.base import BaseModelAdapter
from studysmart_core.model_adapters.openai import OpenAIAdapter
from studysmart_core.model_adapters.parsing import parse_flashcards

__all__ = ["BaseModelAdapter", "OpenAIAdapter", "parse_flashcards"]
