"""Flashcard content schemas."""

from pydantic import BaseModel, ConfigDict, Field


class QAPair(BaseModel):
    """A question/answer pair, either generated or supplied by a caller."""

    model_config = ConfigDict(str_strip_whitespace=True)

    question: str = Field(..., min_length=1, description="Question side")
    answer: str = Field(..., min_length=1, description="Answer side")
