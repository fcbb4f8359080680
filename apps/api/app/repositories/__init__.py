"""Data access for notes and flashcards."""

from app.repositories.flashcards import FlashcardRepository
from app.repositories.notes import NoteRepository

__all__ = ["FlashcardRepository", "NoteRepository"]
