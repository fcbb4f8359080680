"""CSV export for Anki import."""

import csv
from io import StringIO
from pathlib import Path

from studysmart_core.errors import NotFoundError
from studysmart_core.schemas.notes import NoteDocument


def export_anki_csv(
    note: NoteDocument,
    output: str | Path | None = None,
) -> str:
    """Export a note's flashcards as Anki-importable CSV.

    Every field is quoted and embedded double quotes are doubled. One row
    per card: question, answer, tags (the note title).

    Args:
        note: Note with resolved flashcards
        output: Optional output path (if None, returns string only)

    Returns:
        CSV content as string

    Raises:
        NotFoundError: If the note has no flashcards
    """
    if not note.cards:
        raise NotFoundError("No flashcards found for this note")

    buffer = StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")

    for card in note.cards:
        writer.writerow([card.question, card.answer, note.title])

    content = buffer.getvalue()

    if output:
        Path(output).write_text(content, encoding="utf-8")

    return content
