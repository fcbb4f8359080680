"""Pydantic schemas shared across the pipeline."""

from studysmart_core.schemas.cards import QAPair
from studysmart_core.schemas.notes import NoteDocument

__all__ = ["NoteDocument", "QAPair"]
