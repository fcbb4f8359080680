"""Flashcard save workflow."""

from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from app.db import models
from app.db.session import transaction
from app.repositories import FlashcardRepository, NoteRepository
from studysmart_core.errors import NotFoundError
from studysmart_core.schemas.cards import QAPair
from studysmart_core.utils.logging import get_logger

logger = get_logger(__name__)


async def save_flashcards(
    db: AsyncSession,
    user_id: str,
    note_id: UUID,
    pairs: list[QAPair],
) -> list[models.Flashcard]:
    """Replace a note's flashcards with new ones built from ``pairs``.

    The note's previous flashcards are deleted, one flashcard is created per
    pair and the membership list is set to exactly the new identifiers. All
    of it commits together or not at all. The note row is locked for the
    duration, so a concurrent save for the same note waits for this one.

    Raises:
        NotFoundError: If the note does not exist for this user
        PersistenceError: If any write fails; nothing is persisted
    """
    async with transaction(db):
        notes = NoteRepository(db)
        # Row lock serializes concurrent saves for the same note
        note = await notes.get(note_id, user_id=user_id, for_update=True)
        if note is None:
            raise NotFoundError("Note not found")

        cards_repo = FlashcardRepository(db)
        removed = await cards_repo.delete_by_note(note.id)
        cards = await cards_repo.create_many(user_id, note.id, pairs)
        await notes.replace_flashcards(note, [card.id for card in cards])

    logger.info(
        f"Saved {len(cards)} flashcards for note {note_id} (replaced {removed})"
    )
    return cards
