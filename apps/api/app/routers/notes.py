"""Note routes: upload, extraction, summarization and note CRUD."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, File, Form, UploadFile

from app.db.session import transaction
from app.dependencies import AdapterDep, CallerDep, DbDep
from app.repositories import FlashcardRepository, NoteRepository
from app.schemas.api import (
    ApiEnvelope,
    ExtractRequest,
    ExtractResponse,
    FlashcardResponse,
    NoteCreate,
    NoteDetailEnvelope,
    NoteDetailResponse,
    NoteEnvelope,
    NoteListEnvelope,
    NoteListItem,
    NoteResponse,
    NoteUpdate,
    StoredFileResponse,
    SummaryRequest,
    SummaryResponse,
    UploadResponse,
)
from app.services.ingestion import IngestionWorkflow
from app.services.storage import read_upload, upload_file
from app.settings import settings
from studysmart_core.errors import NotFoundError, PayloadTooLargeError, ValidationError
from studysmart_core.extraction import extract_text_async
from studysmart_core.utils.logging import get_logger

logger = get_logger(__name__)

router = APIRouter()

PDF_CONTENT_TYPE = "application/pdf"
DEFAULT_TITLE = "Untitled Note"


def _preview(summary: str) -> str:
    """Truncate a summary for listings."""
    limit = settings.summary_preview_chars
    if len(summary) <= limit:
        return summary
    return summary[:limit] + "..."


async def _read_pdf_upload(pdf: UploadFile) -> bytes:
    """Read an uploaded PDF, enforcing content type and size cap."""
    if pdf.content_type != PDF_CONTENT_TYPE:
        raise ValidationError("Only PDF files are allowed")

    data = await pdf.read(settings.max_upload_size + 1)
    if len(data) > settings.max_upload_size:
        raise PayloadTooLargeError(
            f"File exceeds the {settings.max_upload_size // (1024 * 1024)}MB limit"
        )
    if not data:
        raise ValidationError("Uploaded file is empty")
    return data


@router.post("/notes/upload", response_model=UploadResponse)
async def upload_pdf(pdf: Annotated[UploadFile, File()]) -> UploadResponse:
    """Store an uploaded PDF and return a reference to it."""
    data = await _read_pdf_upload(pdf)
    stored = await upload_file(pdf.filename or "upload.pdf", data, PDF_CONTENT_TYPE)
    return UploadResponse(
        message="File uploaded successfully",
        file=StoredFileResponse.model_validate(stored),
    )


@router.post("/notes/extract", response_model=ExtractResponse)
async def extract_from_upload(payload: ExtractRequest) -> ExtractResponse:
    """Extract text from a previously uploaded PDF."""
    data = await read_upload(payload.file_path)
    text = await extract_text_async(data)
    return ExtractResponse(text=text)


@router.post("/notes/generate-summary", response_model=SummaryResponse)
async def generate_summary(
    payload: SummaryRequest,
    adapter: AdapterDep,
) -> SummaryResponse:
    """Summarize text with the generation service."""
    summary = await adapter.summarize(payload.text)
    return SummaryResponse(
        summary=summary,
        title=(payload.title or "").strip() or DEFAULT_TITLE,
        raw_text=payload.text,
    )


@router.post("/notes/save", response_model=NoteEnvelope, status_code=201)
async def save_note(payload: NoteCreate, db: DbDep) -> NoteEnvelope:
    """Persist a new note."""
    async with transaction(db):
        note = await NoteRepository(db).create(
            user_id=payload.user_id,
            title=payload.title,
            raw_text=payload.raw_text,
            summary=payload.summary,
            pdf_url=payload.pdf_url,
        )
    logger.info(f"Saved note {note.id} for user {note.user_id}")
    return NoteEnvelope(
        message="Note saved successfully",
        note=NoteResponse.model_validate(note),
    )


@router.post("/notes/ingest", response_model=NoteEnvelope, status_code=201)
async def ingest_pdf(
    pdf: Annotated[UploadFile, File()],
    user_id: Annotated[str, Form(alias="userId", min_length=1)],
    db: DbDep,
    adapter: AdapterDep,
    pdf_url: Annotated[str | None, Form(alias="pdfUrl")] = None,
) -> NoteEnvelope:
    """Upload, extract, summarize and save a PDF in one request."""
    user_id = user_id.strip()
    if not user_id:
        raise ValidationError("User ID is required")
    data = await _read_pdf_upload(pdf)
    stored = await upload_file(pdf.filename or "upload.pdf", data, PDF_CONTENT_TYPE)

    workflow = IngestionWorkflow(db, adapter)
    note = await workflow.run(
        user_id=user_id,
        filename=stored.original_name,
        pdf_data=data,
        pdf_url=pdf_url or stored.path,
    )
    return NoteEnvelope(
        message="Note created successfully",
        note=NoteResponse.model_validate(note),
    )


@router.get("/notes/user/{user_id}", response_model=NoteListEnvelope)
async def list_user_notes(user_id: str, db: DbDep) -> NoteListEnvelope:
    """List a user's notes, most recently updated first."""
    notes = await NoteRepository(db).list_by_user(user_id)
    return NoteListEnvelope(
        notes=[
            NoteListItem(
                id=note.id,
                user_id=note.user_id,
                title=note.title,
                summary=_preview(note.summary),
                flashcard_count=len(note.flashcard_ids or []),
                created_at=note.created_at,
                updated_at=note.updated_at,
            )
            for note in notes
        ]
    )


@router.get("/notes/{note_id}", response_model=NoteDetailEnvelope)
async def get_note(note_id: UUID, db: DbDep, caller: CallerDep) -> NoteDetailEnvelope:
    """Fetch a note with its flashcards in membership order."""
    note = await NoteRepository(db).get(note_id, user_id=caller)
    if note is None:
        raise NotFoundError("Note not found")

    cards = await FlashcardRepository(db).resolve(note)
    detail = NoteDetailResponse.model_validate(note)
    detail.flashcards = [FlashcardResponse.model_validate(card) for card in cards]
    return NoteDetailEnvelope(note=detail)


@router.patch("/notes/{note_id}", response_model=NoteEnvelope)
async def update_note(
    note_id: UUID,
    payload: NoteUpdate,
    db: DbDep,
    caller: CallerDep,
) -> NoteEnvelope:
    """Edit a note's title and/or summary."""
    title = (payload.title or "").strip() or None
    summary = (payload.summary or "").strip() or None
    if title is None and summary is None:
        raise ValidationError("Provide a title or summary to update")

    async with transaction(db):
        note = await NoteRepository(db).update(
            note_id, title=title, summary=summary, user_id=caller
        )
        if note is None:
            raise NotFoundError("Note not found")

    return NoteEnvelope(
        message="Note updated successfully",
        note=NoteResponse.model_validate(note),
    )


@router.delete("/notes/{note_id}", response_model=ApiEnvelope)
async def delete_note(note_id: UUID, db: DbDep, caller: CallerDep) -> ApiEnvelope:
    """Delete a note together with its flashcards."""
    async with transaction(db):
        deleted = await NoteRepository(db).delete(note_id, user_id=caller)
        if not deleted:
            raise NotFoundError("Note not found")

    logger.info(f"Deleted note {note_id}")
    return ApiEnvelope(message="Note and associated flashcards deleted successfully")
