"""Note store."""

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.db import models


class NoteRepository:
    """Data access layer for notes.

    Methods flush but never commit; callers own the transaction boundary.
    Reads return ``None`` for absent notes. When ``user_id`` is given, notes
    owned by another user are treated as absent.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(
        self,
        user_id: str,
        title: str,
        raw_text: str,
        summary: str,
        pdf_url: str | None = None,
    ) -> models.Note:
        note = models.Note(
            user_id=user_id,
            title=title,
            raw_text=raw_text,
            summary=summary,
            pdf_url=pdf_url,
            flashcard_ids=[],
        )
        self.session.add(note)
        await self.session.flush()
        return note

    async def get(
        self,
        note_id: UUID,
        user_id: str | None = None,
        for_update: bool = False,
    ) -> models.Note | None:
        """Fetch a note, optionally locking its row until the transaction ends."""
        query = select(models.Note).where(models.Note.id == note_id)
        if user_id is not None:
            query = query.where(models.Note.user_id == user_id)
        if for_update:
            query = query.with_for_update()
        result = await self.session.execute(query)
        return result.scalar_one_or_none()

    async def list_by_user(self, user_id: str) -> list[models.Note]:
        """Notes owned by a user, most recently updated first."""
        result = await self.session.execute(
            select(models.Note)
            .where(models.Note.user_id == user_id)
            .order_by(models.Note.updated_at.desc(), models.Note.created_at.desc())
        )
        return list(result.scalars().all())

    async def update(
        self,
        note_id: UUID,
        title: str | None = None,
        summary: str | None = None,
        user_id: str | None = None,
    ) -> models.Note | None:
        """Change only the supplied fields."""
        note = await self.get(note_id, user_id=user_id)
        if note is None:
            return None
        if title is not None:
            note.title = title
        if summary is not None:
            note.summary = summary
        await self.session.flush()
        return note

    async def replace_flashcards(
        self, note: models.Note, flashcard_ids: list[UUID]
    ) -> models.Note:
        """Replace the membership list with exactly the given identifiers."""
        note.flashcard_ids = [str(card_id) for card_id in flashcard_ids]
        await self.session.flush()
        return note

    async def remove_flashcard(self, note_id: UUID, flashcard_id: UUID) -> None:
        """Drop one identifier from a note's membership list."""
        note = await self.get(note_id)
        if note is None:
            return
        target = str(flashcard_id)
        # Assign a new list so the JSON column is marked dirty
        note.flashcard_ids = [i for i in note.flashcard_ids or [] if i != target]
        await self.session.flush()

    async def delete(self, note_id: UUID, user_id: str | None = None) -> bool:
        """Delete a note and every flashcard that references it."""
        note = await self.get(note_id, user_id=user_id)
        if note is None:
            return False
        from app.repositories.flashcards import FlashcardRepository

        await FlashcardRepository(self.session).delete_by_note(note.id)
        await self.session.delete(note)
        await self.session.flush()
        return True
