"""Export formats for notes and flashcards."""

from studysmart_core.exporters.anki_csv import export_anki_csv
from studysmart_core.exporters.apkg import export_apkg
from studysmart_core.exporters.filenames import export_filename, sanitize_title
from studysmart_core.exporters.markdown import NO_FLASHCARDS_LINE, export_markdown

__all__ = [
    "NO_FLASHCARDS_LINE",
    "export_anki_csv",
    "export_apkg",
    "export_filename",
    "export_markdown",
    "sanitize_title",
]
