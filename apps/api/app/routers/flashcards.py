"""Flashcard routes."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Query

from app.db.session import transaction
from app.dependencies import AdapterDep, CallerDep, DbDep
from app.repositories import FlashcardRepository, NoteRepository
from app.schemas.api import (
    ApiEnvelope,
    FlashcardEnvelope,
    FlashcardGenerateRequest,
    FlashcardGroup,
    FlashcardGroupsEnvelope,
    FlashcardListEnvelope,
    FlashcardResponse,
    FlashcardSaveRequest,
    FlashcardUpdate,
    GeneratedFlashcardsResponse,
)
from app.services.flashcards import save_flashcards
from studysmart_core.errors import NotFoundError, ValidationError

router = APIRouter()


@router.post("/flashcards/generate", response_model=GeneratedFlashcardsResponse)
async def generate_flashcards(
    payload: FlashcardGenerateRequest,
    adapter: AdapterDep,
) -> GeneratedFlashcardsResponse:
    """Generate question/answer pairs from text without saving them."""
    pairs = await adapter.generate_flashcards(payload.text)
    return GeneratedFlashcardsResponse(flashcards=pairs)


@router.post("/flashcards/save", response_model=FlashcardListEnvelope, status_code=201)
async def save_note_flashcards(
    payload: FlashcardSaveRequest,
    db: DbDep,
    adapter: AdapterDep,
) -> FlashcardListEnvelope:
    """Replace a note's flashcards with supplied or generated pairs."""
    pairs = payload.flashcards
    if pairs is None:
        if not payload.generate:
            raise ValidationError("Provide flashcards or set generate to true")
        note = await NoteRepository(db).get(payload.note_id, user_id=payload.user_id)
        if note is None:
            raise NotFoundError("Note not found")
        pairs = await adapter.generate_flashcards(note.raw_text)

    cards = await save_flashcards(db, payload.user_id, payload.note_id, pairs)
    return FlashcardListEnvelope(
        message="Flashcards saved successfully",
        flashcards=[FlashcardResponse.model_validate(card) for card in cards],
    )


@router.get("/flashcards", response_model=FlashcardListEnvelope)
async def list_note_flashcards(
    note_id: Annotated[UUID, Query(alias="noteId")],
    db: DbDep,
    caller: CallerDep,
) -> FlashcardListEnvelope:
    """List one note's flashcards in membership order."""
    note = await NoteRepository(db).get(note_id, user_id=caller)
    if note is None:
        raise NotFoundError("Note not found")

    cards = await FlashcardRepository(db).resolve(note)
    return FlashcardListEnvelope(
        flashcards=[FlashcardResponse.model_validate(card) for card in cards]
    )


@router.get("/flashcards/user/{user_id}", response_model=FlashcardGroupsEnvelope)
async def list_user_flashcards(user_id: str, db: DbDep) -> FlashcardGroupsEnvelope:
    """List a user's flashcards grouped by note. Notes without cards are omitted."""
    notes = await NoteRepository(db).list_by_user(user_id)
    cards_repo = FlashcardRepository(db)

    groups = []
    for note in notes:
        cards = await cards_repo.resolve(note)
        if not cards:
            continue
        groups.append(
            FlashcardGroup(
                note_id=note.id,
                note_title=note.title,
                flashcards=[FlashcardResponse.model_validate(card) for card in cards],
            )
        )
    return FlashcardGroupsEnvelope(groups=groups)


@router.api_route(
    "/flashcards/{flashcard_id}",
    methods=["PUT", "PATCH"],
    response_model=FlashcardEnvelope,
)
async def update_flashcard(
    flashcard_id: UUID,
    payload: FlashcardUpdate,
    db: DbDep,
    caller: CallerDep,
) -> FlashcardEnvelope:
    """Edit a flashcard's question and/or answer."""
    question = (payload.question or "").strip() or None
    answer = (payload.answer or "").strip() or None
    if question is None and answer is None:
        raise ValidationError("Provide a question or answer to update")

    async with transaction(db):
        card = await FlashcardRepository(db).update(
            flashcard_id, question=question, answer=answer, user_id=caller
        )
        if card is None:
            raise NotFoundError("Flashcard not found")

    return FlashcardEnvelope(
        message="Flashcard updated successfully",
        flashcard=FlashcardResponse.model_validate(card),
    )


@router.delete("/flashcards/{flashcard_id}", response_model=ApiEnvelope)
async def delete_flashcard(
    flashcard_id: UUID,
    db: DbDep,
    caller: CallerDep,
) -> ApiEnvelope:
    """Delete a flashcard and drop it from its note."""
    async with transaction(db):
        card = await FlashcardRepository(db).delete(flashcard_id, user_id=caller)
        if card is None:
            raise NotFoundError("Flashcard not found")

    return ApiEnvelope(message="Flashcard deleted successfully")
