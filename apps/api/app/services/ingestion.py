"""Ingestion workflow: uploaded PDF to persisted note."""

from enum import Enum
from pathlib import Path

from sqlalchemy.ext.asyncio import AsyncSession

from app.db import models
from app.db.session import transaction
from app.repositories import NoteRepository
from studysmart_core.errors import IngestionError, StudySmartError
from studysmart_core.extraction import extract_text_async
from studysmart_core.model_adapters.base import BaseModelAdapter
from studysmart_core.utils.logging import get_logger

logger = get_logger(__name__)


class IngestionStage(str, Enum):
    """Where an ingestion run currently stands."""

    UPLOADED = "uploaded"
    EXTRACTED = "extracted"
    SUMMARIZED = "summarized"
    SAVED = "saved"
    FAILED = "failed"


def derive_title(filename: str) -> str:
    """Title for a note ingested from a file: the name minus its extension."""
    return Path(filename).stem or filename


class IngestionWorkflow:
    """Runs extraction, summarization and persistence for one upload.

    Each step runs once. A failure stops the run, moves it to ``FAILED`` and
    raises ``IngestionError`` naming the step. Resubmitting creates a new
    note.
    """

    def __init__(self, db: AsyncSession, adapter: BaseModelAdapter):
        self.db = db
        self.adapter = adapter
        self.stage = IngestionStage.UPLOADED

    def _advance(self, stage: IngestionStage, filename: str) -> None:
        logger.info(f"Ingestion of {filename}: {self.stage.value} -> {stage.value}")
        self.stage = stage

    def _fail(self, step: str, filename: str, error: StudySmartError) -> IngestionError:
        logger.error(f"Ingestion of {filename} failed during {step}: {error.message}")
        self.stage = IngestionStage.FAILED
        return IngestionError(step, error)

    async def run(
        self,
        user_id: str,
        filename: str,
        pdf_data: bytes,
        pdf_url: str | None = None,
    ) -> models.Note:
        """Ingest one PDF and return the saved note.

        Raises:
            IngestionError: If any step fails
        """
        try:
            text = await extract_text_async(pdf_data)
        except StudySmartError as e:
            raise self._fail("extraction", filename, e) from e
        self._advance(IngestionStage.EXTRACTED, filename)

        title = derive_title(filename)
        try:
            summary = await self.adapter.summarize(text)
        except StudySmartError as e:
            raise self._fail("summarization", filename, e) from e
        self._advance(IngestionStage.SUMMARIZED, filename)

        try:
            async with transaction(self.db):
                note = await NoteRepository(self.db).create(
                    user_id=user_id,
                    title=title,
                    raw_text=text,
                    summary=summary,
                    pdf_url=pdf_url,
                )
        except StudySmartError as e:
            raise self._fail("persistence", filename, e) from e
        self._advance(IngestionStage.SAVED, filename)

        return note
