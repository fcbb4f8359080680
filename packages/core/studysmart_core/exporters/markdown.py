"""Markdown export for notes."""

from pathlib import Path

from studysmart_core.schemas.notes import NoteDocument

NO_FLASHCARDS_LINE = "No flashcards available for this note."


def export_markdown(
    note: NoteDocument,
    output: str | Path | None = None,
) -> str:
    """Render a note and its flashcards as Markdown.

    Args:
        note: Note with resolved flashcards
        output: Optional output path (if None, returns string only)

    Returns:
        Markdown content as string
    """
    parts = [
        f"# {note.title}\n\n",
        f"## Summary\n\n{note.summary}\n\n",
        "## Flashcards\n\n",
    ]

    if note.cards:
        for index, card in enumerate(note.cards, start=1):
            parts.append(f"### Card {index}\n\n")
            parts.append(f"**Q:** {card.question}\n\n")
            parts.append(f"**A:** {card.answer}\n\n")
    else:
        parts.append(f"{NO_FLASHCARDS_LINE}\n\n")

    content = "".join(parts)

    if output:
        Path(output).write_text(content, encoding="utf-8")

    return content
