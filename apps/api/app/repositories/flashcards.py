"""Flashcard store."""

from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.db import models
from app.repositories.notes import NoteRepository
from studysmart_core.schemas.cards import QAPair


class FlashcardRepository:
    """Data access layer for flashcards.

    The flashcards table is the source of truth for flashcard existence.
    Methods flush but never commit.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create_many(
        self,
        user_id: str,
        note_id: UUID,
        pairs: list[QAPair],
    ) -> list[models.Flashcard]:
        cards = [
            models.Flashcard(
                user_id=user_id,
                note_id=note_id,
                question=pair.question,
                answer=pair.answer,
            )
            for pair in pairs
        ]
        self.session.add_all(cards)
        await self.session.flush()
        return cards

    async def get(
        self, flashcard_id: UUID, user_id: str | None = None
    ) -> models.Flashcard | None:
        query = select(models.Flashcard).where(models.Flashcard.id == flashcard_id)
        if user_id is not None:
            query = query.where(models.Flashcard.user_id == user_id)
        result = await self.session.execute(query)
        return result.scalar_one_or_none()

    async def list_by_note(self, note_id: UUID) -> list[models.Flashcard]:
        """Every flashcard that references a note, oldest first."""
        result = await self.session.execute(
            select(models.Flashcard)
            .where(models.Flashcard.note_id == note_id)
            .order_by(models.Flashcard.created_at)
        )
        return list(result.scalars().all())

    async def resolve(self, note: models.Note) -> list[models.Flashcard]:
        """Flashcards a note claims to own, in membership order.

        Identifiers that no longer resolve to a flashcard of this note are
        skipped.
        """
        ids = [UUID(card_id) for card_id in note.flashcard_ids or []]
        if not ids:
            return []
        result = await self.session.execute(
            select(models.Flashcard).where(
                models.Flashcard.id.in_(ids),
                models.Flashcard.note_id == note.id,
            )
        )
        by_id = {card.id: card for card in result.scalars().all()}
        return [by_id[card_id] for card_id in ids if card_id in by_id]

    async def update(
        self,
        flashcard_id: UUID,
        question: str | None = None,
        answer: str | None = None,
        user_id: str | None = None,
    ) -> models.Flashcard | None:
        """Change only the supplied fields."""
        card = await self.get(flashcard_id, user_id=user_id)
        if card is None:
            return None
        if question is not None:
            card.question = question
        if answer is not None:
            card.answer = answer
        await self.session.flush()
        return card

    async def delete(
        self, flashcard_id: UUID, user_id: str | None = None
    ) -> models.Flashcard | None:
        """Delete a flashcard and drop it from its note's membership list."""
        card = await self.get(flashcard_id, user_id=user_id)
        if card is None:
            return None
        await self.session.delete(card)
        await NoteRepository(self.session).remove_flashcard(card.note_id, card.id)
        await self.session.flush()
        return card

    async def delete_by_note(self, note_id: UUID) -> int:
        """Delete every flashcard that references a note."""
        result = await self.session.execute(
            delete(models.Flashcard).where(models.Flashcard.note_id == note_id)
        )
        return result.rowcount or 0
