"""studysmart-core: text extraction, AI generation and export for study notes.

The core package has no web or database dependencies. It turns PDF bytes into
text, asks a generation service for summaries and flashcards, and renders
notes into Markdown, Anki CSV and Anki packages.

    >>> from studysmart_core import OpenAIAdapter, extract_text
    >>> text = extract_text(pdf_bytes)
    >>> summary = await OpenAIAdapter(api_key).summarize(text)
"""

from studysmart_core.extraction import NO_TEXT_EXTRACTED, extract_text
from studysmart_core.model_adapters import BaseModelAdapter, OpenAIAdapter
from studysmart_core.schemas import NoteDocument, QAPair

__version__ = "0.1.0"

__all__ = [
    "BaseModelAdapter",
    "NO_TEXT_EXTRACTED",
    "NoteDocument",
    "OpenAIAdapter",
    "QAPair",
    "extract_text",
]
