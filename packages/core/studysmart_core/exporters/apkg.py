"""APKG export for Anki decks."""

import hashlib
import html
from pathlib import Path

import genanki

from studysmart_core.errors import NotFoundError
from studysmart_core.schemas.notes import NoteDocument
from studysmart_core.utils.logging import get_logger

logger = get_logger(__name__)

CARD_CSS = """
.card {
    font-family: arial;
    font-size: 20px;
    text-align: center;
    color: black;
    background-color: white;
}
.source {
    margin-top: 12px;
    font-size: 14px;
    color: #777;
}
"""


def export_apkg(note: NoteDocument, output: str | Path) -> Path:
    """Export a note's flashcards as an Anki deck package.

    The deck is named after the note title and every card is tagged with the
    sanitized title.

    Args:
        note: Note with resolved flashcards
        output: Output file path

    Returns:
        Path to the created APKG file

    Raises:
        NotFoundError: If the note has no flashcards
    """
    if not note.cards:
        raise NotFoundError("No flashcards found for this note")

    logger.info(f"Exporting APKG: {note.title} ({len(note.cards)} cards)")

    deck_id = _generate_id(note.title)
    model = _create_basic_model(_generate_id(f"{note.title}_model"), note.title)
    deck = genanki.Deck(deck_id, note.title)
    tag = "_".join(note.title.split()) or "studysmart"

    for card in note.cards:
        deck.add_note(
            genanki.Note(
                model=model,
                fields=[
                    html.escape(card.question),
                    html.escape(card.answer),
                    html.escape(note.title),
                ],
                tags=[tag],
            )
        )

    output_path = Path(output)
    genanki.Package(deck).write_to_file(str(output_path))
    logger.info(f"Created APKG at {output_path}")
    return output_path


def _create_basic_model(model_id: int, deck_name: str) -> genanki.Model:
    """Question/answer note type that shows the source note under the answer."""
    return genanki.Model(
        model_id,
        f"studysmart: {deck_name}",
        fields=[{"name": "Question"}, {"name": "Answer"}, {"name": "Note"}],
        templates=[
            {
                "name": "Recall",
                "qfmt": "{{Question}}",
                "afmt": (
                    '{{FrontSide}}<hr id="answer">{{Answer}}'
                    '<div class="source">{{Note}}</div>'
                ),
            },
        ],
        css=CARD_CSS,
    )


def _generate_id(name: str) -> int:
    """Generate a deterministic 31-bit ID from a string."""
    hash_bytes = hashlib.md5(name.encode()).digest()
    return int.from_bytes(hash_bytes[:4], "big") & 0x7FFFFFFF
