"""Pydantic schemas for API request and response models.

Field names are snake_case in Python and camelCase on the wire. Every
response is an envelope with ``success`` and an optional ``message``.
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from studysmart_core.schemas.cards import QAPair


class CamelModel(BaseModel):
    """Base model that reads and writes camelCase JSON."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class ApiEnvelope(CamelModel):
    """Common response envelope."""

    success: bool = True
    message: str | None = None


class ErrorResponse(ApiEnvelope):
    """Failure envelope. ``step`` is set when an ingestion step failed."""

    success: bool = False
    step: str | None = None


# Uploads and extraction


class StoredFileResponse(CamelModel):
    """Reference to an uploaded file."""

    filename: str
    original_name: str
    path: str
    size: int
    content_type: str


class UploadResponse(ApiEnvelope):
    """Response returned after uploading a PDF."""

    file: StoredFileResponse


class ExtractRequest(CamelModel):
    """Request payload for extracting text from an uploaded file."""

    file_path: str = Field(..., min_length=1)


class ExtractResponse(ApiEnvelope):
    """Extracted text."""

    text: str


class SummaryRequest(CamelModel):
    """Request payload for summarizing text."""

    text: str = Field(..., min_length=1)
    title: str | None = None


class SummaryResponse(ApiEnvelope):
    """Generated summary with the text it was generated from."""

    summary: str
    title: str
    raw_text: str


# Notes


class NoteCreate(CamelModel):
    """Payload for saving a note."""

    model_config = ConfigDict(str_strip_whitespace=True)

    user_id: str = Field(..., min_length=1)
    title: str = Field(..., min_length=1)
    raw_text: str = Field(..., min_length=1)
    summary: str = Field(..., min_length=1)
    pdf_url: str | None = None


class NoteUpdate(CamelModel):
    """Edit payload for a note. Empty strings count as not supplied."""

    title: str | None = None
    summary: str | None = None


class FlashcardResponse(CamelModel):
    """Flashcard response payload."""

    id: UUID
    user_id: str
    note_id: UUID
    question: str
    answer: str
    created_at: datetime
    updated_at: datetime


class NoteResponse(CamelModel):
    """Note response payload."""

    id: UUID
    user_id: str
    title: str
    raw_text: str
    summary: str
    pdf_url: str | None = None
    flashcard_ids: list[UUID] = []
    created_at: datetime
    updated_at: datetime


class NoteDetailResponse(NoteResponse):
    """Note with its flashcards resolved in membership order."""

    flashcards: list[FlashcardResponse] = []


class NoteListItem(CamelModel):
    """Summary fields of a note for listings."""

    id: UUID
    user_id: str
    title: str
    summary: str
    flashcard_count: int = 0
    created_at: datetime
    updated_at: datetime


class NoteEnvelope(ApiEnvelope):
    """Single note response."""

    note: NoteResponse


class NoteDetailEnvelope(ApiEnvelope):
    """Single note with flashcards."""

    note: NoteDetailResponse


class NoteListEnvelope(ApiEnvelope):
    """List response for notes."""

    notes: list[NoteListItem]


# Flashcards


class FlashcardGenerateRequest(CamelModel):
    """Request payload for generating flashcards from text."""

    text: str = Field(..., min_length=1)


class GeneratedFlashcardsResponse(ApiEnvelope):
    """Generated question/answer pairs (not persisted)."""

    flashcards: list[QAPair]


class FlashcardSaveRequest(CamelModel):
    """Request payload for the flashcard save workflow.

    Either ``flashcards`` is supplied, or ``generate`` asks for pairs to be
    generated from the note's raw text.
    """

    user_id: str = Field(..., min_length=1)
    note_id: UUID
    flashcards: list[QAPair] | None = None
    generate: bool = False


class FlashcardUpdate(CamelModel):
    """Edit payload for a flashcard. Empty strings count as not supplied."""

    question: str | None = None
    answer: str | None = None


class FlashcardEnvelope(ApiEnvelope):
    """Single flashcard response."""

    flashcard: FlashcardResponse


class FlashcardListEnvelope(ApiEnvelope):
    """List response for flashcards."""

    flashcards: list[FlashcardResponse]


class FlashcardGroup(CamelModel):
    """Flashcards of one note."""

    note_id: UUID
    note_title: str
    flashcards: list[FlashcardResponse]


class FlashcardGroupsEnvelope(ApiEnvelope):
    """A user's flashcards grouped by note."""

    groups: list[FlashcardGroup]


# Exports


class ExportRequest(CamelModel):
    """Request payload for exporting a note."""

    note_id: UUID


class ExportResponse(ApiEnvelope):
    """Common fields of a persisted export."""

    filename: str
    file_path: str


class MarkdownExportResponse(ExportResponse):
    """Markdown export with its content."""

    markdown: str


class AnkiExportResponse(ExportResponse):
    """Anki CSV export with its content."""

    csv_content: str


class ApkgExportResponse(ExportResponse):
    """Anki package export."""

    card_count: int
