"""Tests for upload, extraction and ingestion routes."""

from pathlib import Path

import pytest
from httpx import AsyncClient

from app.settings import settings
from studysmart_core.errors import GenerationError
from studysmart_core.extraction import NO_TEXT_EXTRACTED

API = "/api/v1"


def pdf_upload(data: bytes, name: str = "Geography.pdf") -> dict:
    return {"pdf": (name, data, "application/pdf")}


class TestUpload:
    """Tests for POST /notes/upload."""

    @pytest.mark.asyncio
    async def test_upload_returns_file_reference(
        self,
        client: AsyncClient,
        text_pdf: bytes,
        storage_dirs: tuple[Path, Path],
    ) -> None:
        """Test that an upload is stored under a timestamped name."""
        response = await client.post(f"{API}/notes/upload", files=pdf_upload(text_pdf))

        assert response.status_code == 200
        stored = response.json()["file"]
        assert stored["originalName"] == "Geography.pdf"
        assert stored["filename"].endswith("-Geography.pdf")
        assert ":" not in stored["filename"]
        assert stored["size"] == len(text_pdf)
        assert stored["contentType"] == "application/pdf"
        assert stored["path"] == f"uploads/{stored['filename']}"
        upload_dir, _ = storage_dirs
        assert (upload_dir / stored["filename"]).read_bytes() == text_pdf

    @pytest.mark.asyncio
    async def test_non_pdf_is_400(self, client: AsyncClient) -> None:
        """Test that other content types are rejected."""
        response = await client.post(
            f"{API}/notes/upload",
            files={"pdf": ("notes.txt", b"plain text", "text/plain")},
        )

        assert response.status_code == 400
        assert response.json()["success"] is False

    @pytest.mark.asyncio
    async def test_missing_file_is_400(self, client: AsyncClient) -> None:
        """Test that a request without the file field is rejected."""
        response = await client.post(f"{API}/notes/upload", data={"other": "x"})

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_oversized_file_is_413(
        self,
        client: AsyncClient,
        text_pdf: bytes,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        """Test that files over the size cap are rejected."""
        monkeypatch.setattr(settings, "max_upload_size", len(text_pdf) - 1)

        response = await client.post(f"{API}/notes/upload", files=pdf_upload(text_pdf))

        assert response.status_code == 413
        assert response.json()["success"] is False


class TestExtract:
    """Tests for POST /notes/extract."""

    @pytest.mark.asyncio
    async def test_extract_uploaded_file(
        self, client: AsyncClient, text_pdf: bytes
    ) -> None:
        """Test extracting text from a stored upload."""
        upload = await client.post(f"{API}/notes/upload", files=pdf_upload(text_pdf))
        path = upload.json()["file"]["path"]

        response = await client.post(f"{API}/notes/extract", json={"filePath": path})

        assert response.status_code == 200
        assert "Paris is the capital of France." in response.json()["text"]

    @pytest.mark.asyncio
    async def test_image_only_pdf_returns_sentinel(
        self, client: AsyncClient, blank_pdf: bytes
    ) -> None:
        """Test that a PDF without text is accepted."""
        upload = await client.post(f"{API}/notes/upload", files=pdf_upload(blank_pdf))

        response = await client.post(
            f"{API}/notes/extract", json={"filePath": upload.json()["file"]["filename"]}
        )

        assert response.status_code == 200
        assert response.json()["text"] == NO_TEXT_EXTRACTED

    @pytest.mark.asyncio
    async def test_missing_path_is_400(self, client: AsyncClient) -> None:
        """Test that a file path is required."""
        response = await client.post(f"{API}/notes/extract", json={})

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_unknown_file_is_404(self, client: AsyncClient) -> None:
        """Test that a missing file is reported as not found."""
        response = await client.post(
            f"{API}/notes/extract", json={"filePath": "uploads/missing.pdf"}
        )

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_path_outside_uploads_is_400(self, client: AsyncClient) -> None:
        """Test that paths cannot escape the upload directory."""
        response = await client.post(
            f"{API}/notes/extract", json={"filePath": "../../etc/passwd"}
        )

        assert response.status_code == 400


class TestIngest:
    """Tests for the full ingestion workflow."""

    @pytest.mark.asyncio
    async def test_step_by_step_scenario(
        self, client: AsyncClient, text_pdf: bytes
    ) -> None:
        """Test upload, extract, summarize, save and list."""
        upload = await client.post(f"{API}/notes/upload", files=pdf_upload(text_pdf))
        extracted = await client.post(
            f"{API}/notes/extract", json={"filePath": upload.json()["file"]["path"]}
        )
        text = extracted.json()["text"]
        summary = await client.post(
            f"{API}/notes/generate-summary", json={"text": text, "title": "Geography"}
        )
        saved = await client.post(
            f"{API}/notes/save",
            json={
                "userId": "user-1",
                "title": summary.json()["title"],
                "rawText": summary.json()["rawText"],
                "summary": summary.json()["summary"],
            },
        )

        assert saved.status_code == 201
        note = saved.json()["note"]
        assert "Paris" in note["rawText"]
        assert note["summary"]

        listing = await client.get(f"{API}/notes/user/user-1")
        assert [item["id"] for item in listing.json()["notes"]] == [note["id"]]

    @pytest.mark.asyncio
    async def test_ingest_creates_note(
        self, client: AsyncClient, text_pdf: bytes
    ) -> None:
        """Test the single-request workflow."""
        response = await client.post(
            f"{API}/notes/ingest",
            files=pdf_upload(text_pdf),
            data={"userId": "user-1"},
        )

        assert response.status_code == 201
        note = response.json()["note"]
        assert note["title"] == "Geography"
        assert "Paris" in note["rawText"]
        assert note["summary"].startswith("- Key point")
        assert note["pdfUrl"].startswith("uploads/")

    @pytest.mark.asyncio
    async def test_resubmission_creates_new_note(
        self, client: AsyncClient, text_pdf: bytes
    ) -> None:
        """Test that ingestion does not deduplicate by content."""
        for _ in range(2):
            await client.post(
                f"{API}/notes/ingest",
                files=pdf_upload(text_pdf),
                data={"userId": "user-1"},
            )

        listing = await client.get(f"{API}/notes/user/user-1")
        assert len(listing.json()["notes"]) == 2

    @pytest.mark.asyncio
    async def test_extraction_failure_reports_step(self, client: AsyncClient) -> None:
        """Test that a corrupt PDF fails at the extraction step."""
        corrupt = b"%PDF-1.4\n" + b"\x00garbage" * 20

        response = await client.post(
            f"{API}/notes/ingest",
            files=pdf_upload(corrupt),
            data={"userId": "user-1"},
        )

        assert response.status_code == 500
        body = response.json()
        assert body["success"] is False
        assert body["step"] == "extraction"

    @pytest.mark.asyncio
    async def test_summarization_failure_reports_step(
        self, client: AsyncClient, text_pdf: bytes, fake_adapter
    ) -> None:
        """Test that a generation failure stops before anything is saved."""
        fake_adapter.summary_error = GenerationError("service unavailable")

        response = await client.post(
            f"{API}/notes/ingest",
            files=pdf_upload(text_pdf),
            data={"userId": "user-1"},
        )

        assert response.status_code == 500
        body = response.json()
        assert body["step"] == "summarization"
        assert "service unavailable" in body["message"]
        listing = await client.get(f"{API}/notes/user/user-1")
        assert listing.json()["notes"] == []

    @pytest.mark.asyncio
    async def test_missing_user_is_400(
        self, client: AsyncClient, text_pdf: bytes
    ) -> None:
        """Test that the owner is required."""
        response = await client.post(f"{API}/notes/ingest", files=pdf_upload(text_pdf))

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_blank_user_is_400_and_nothing_saved(
        self,
        client: AsyncClient,
        text_pdf: bytes,
        storage_dirs: tuple[Path, Path],
        fake_adapter,
    ) -> None:
        """Test that a whitespace-only owner is rejected before any work."""
        response = await client.post(
            f"{API}/notes/ingest",
            files=pdf_upload(text_pdf),
            data={"userId": "   "},
        )

        assert response.status_code == 400
        assert response.json()["success"] is False
        assert fake_adapter.summarized == []
        upload_dir, _ = storage_dirs
        assert not upload_dir.exists() or not list(upload_dir.iterdir())

    @pytest.mark.asyncio
    async def test_user_is_stripped(self, client: AsyncClient, text_pdf: bytes) -> None:
        """Test that surrounding whitespace is dropped from the owner."""
        response = await client.post(
            f"{API}/notes/ingest",
            files=pdf_upload(text_pdf),
            data={"userId": "  user-1  "},
        )

        assert response.status_code == 201
        assert response.json()["note"]["userId"] == "user-1"
