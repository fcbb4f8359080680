"""Render notes to export formats and persist the artifacts."""

from pathlib import Path
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from app.repositories import FlashcardRepository, NoteRepository
from app.services.storage import reserve_export_path, write_export
from studysmart_core.errors import NotFoundError
from studysmart_core.exporters import (
    export_anki_csv,
    export_apkg,
    export_filename,
    export_markdown,
)
from studysmart_core.schemas import NoteDocument, QAPair
from studysmart_core.utils.logging import get_logger

logger = get_logger(__name__)


async def load_note_document(
    db: AsyncSession,
    note_id: UUID,
    user_id: str | None = None,
) -> NoteDocument:
    """Load a note with its flashcards resolved in membership order.

    Raises:
        NotFoundError: If the note does not exist
    """
    note = await NoteRepository(db).get(note_id, user_id=user_id)
    if note is None:
        raise NotFoundError("Note not found")

    cards = await FlashcardRepository(db).resolve(note)
    return NoteDocument(
        title=note.title,
        summary=note.summary,
        cards=[QAPair(question=card.question, answer=card.answer) for card in cards],
    )


async def export_note_markdown(
    db: AsyncSession, note_id: UUID, user_id: str | None = None
) -> tuple[str, Path]:
    """Render a note as Markdown and persist it. Returns content and path."""
    document = await load_note_document(db, note_id, user_id)
    content = export_markdown(document)
    path = await write_export(export_filename(document.title, "md"), content)
    return content, path


async def export_note_anki(
    db: AsyncSession, note_id: UUID, user_id: str | None = None
) -> tuple[str, Path]:
    """Render a note's flashcards as Anki CSV and persist it.

    Raises:
        NotFoundError: If the note does not exist or has no flashcards
    """
    document = await load_note_document(db, note_id, user_id)
    content = export_anki_csv(document)
    path = await write_export(export_filename(document.title, "csv"), content)
    return content, path


async def export_note_apkg(
    db: AsyncSession, note_id: UUID, user_id: str | None = None
) -> tuple[int, Path]:
    """Build an Anki package for a note. Returns card count and path.

    Raises:
        NotFoundError: If the note does not exist or has no flashcards
    """
    document = await load_note_document(db, note_id, user_id)
    if not document.cards:
        raise NotFoundError("No flashcards found for this note")

    path = reserve_export_path(export_filename(document.title, "apkg"))
    export_apkg(document, path)
    logger.info(f"Wrote export {path.name} ({len(document.cards)} cards)")
    return len(document.cards), path
