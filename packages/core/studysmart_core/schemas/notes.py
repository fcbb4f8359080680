"""Note schemas consumed by the exporters."""

from pydantic import BaseModel, Field

from studysmart_core.schemas.cards import QAPair


class NoteDocument(BaseModel):
    """A note with its flashcards resolved, in membership order."""

    title: str = Field(..., description="Note title")
    summary: str = Field(..., description="AI-generated summary")
    cards: list[QAPair] = Field(default_factory=list, description="Flashcards")
