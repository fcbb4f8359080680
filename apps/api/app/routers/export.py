"""Export routes."""

from fastapi import APIRouter, Request
from fastapi.responses import FileResponse

from app.dependencies import CallerDep, DbDep
from app.schemas.api import (
    AnkiExportResponse,
    ApkgExportResponse,
    ExportRequest,
    MarkdownExportResponse,
)
from app.services.exports import export_note_anki, export_note_apkg, export_note_markdown
from app.services.storage import get_export

router = APIRouter()

MEDIA_TYPES = {
    ".md": "text/markdown",
    ".csv": "text/csv",
    ".apkg": "application/octet-stream",
}


def _download_path(request: Request, filename: str) -> str:
    return request.url_for("download_export", filename=filename).path


@router.post("/export/markdown", response_model=MarkdownExportResponse)
async def export_markdown(
    payload: ExportRequest, db: DbDep, caller: CallerDep, request: Request
) -> MarkdownExportResponse:
    """Render a note as Markdown and keep a copy on disk."""
    content, path = await export_note_markdown(db, payload.note_id, caller)
    return MarkdownExportResponse(
        message="Content exported to Markdown successfully",
        filename=path.name,
        file_path=_download_path(request, path.name),
        markdown=content,
    )


@router.post("/export/anki", response_model=AnkiExportResponse)
async def export_anki(
    payload: ExportRequest, db: DbDep, caller: CallerDep, request: Request
) -> AnkiExportResponse:
    """Render a note's flashcards as Anki CSV and keep a copy on disk."""
    content, path = await export_note_anki(db, payload.note_id, caller)
    return AnkiExportResponse(
        message="Content exported to Anki-compatible format successfully",
        filename=path.name,
        file_path=_download_path(request, path.name),
        csv_content=content,
    )


@router.post("/export/apkg", response_model=ApkgExportResponse)
async def export_apkg(
    payload: ExportRequest, db: DbDep, caller: CallerDep, request: Request
) -> ApkgExportResponse:
    """Build an Anki package for a note."""
    card_count, path = await export_note_apkg(db, payload.note_id, caller)
    return ApkgExportResponse(
        message="Content exported to Anki package successfully",
        filename=path.name,
        file_path=_download_path(request, path.name),
        card_count=card_count,
    )


@router.get("/export/files/{filename}")
async def download_export(filename: str) -> FileResponse:
    """Download a persisted export."""
    path = await get_export(filename)
    return FileResponse(
        path,
        media_type=MEDIA_TYPES.get(path.suffix, "application/octet-stream"),
        filename=path.name,
    )
