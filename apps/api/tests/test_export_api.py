"""Tests for export routes."""

import zipfile
from pathlib import Path
from uuid import uuid4

import pytest
from httpx import AsyncClient

from app.services.storage import reserve_export_path

API = "/api/v1"


async def add_cards(client: AsyncClient, note_id: str) -> None:
    response = await client.post(
        f"{API}/flashcards/save",
        json={
            "userId": "user-1",
            "noteId": note_id,
            "flashcards": [
                {"question": "What is the capital of France?", "answer": "Paris"},
                {"question": "What did she say?", "answer": 'He said "hi"'},
            ],
        },
    )
    assert response.status_code == 201


class TestMarkdownExport:
    """Tests for POST /export/markdown."""

    @pytest.mark.asyncio
    async def test_exports_and_persists(
        self,
        client: AsyncClient,
        saved_note: dict,
        storage_dirs: tuple[Path, Path],
    ) -> None:
        """Test that the Markdown is returned and written to disk."""
        await add_cards(client, saved_note["id"])

        response = await client.post(
            f"{API}/export/markdown", json={"noteId": saved_note["id"]}
        )

        assert response.status_code == 200
        body = response.json()
        assert body["markdown"].startswith("# French Geography\n\n## Summary\n\n")
        assert "### Card 1\n\n**Q:** What is the capital of France?" in body["markdown"]
        assert "### Card 2" in body["markdown"]
        assert body["filename"].startswith("French_Geography_")
        assert body["filename"].endswith("Z.md")
        assert ":" not in body["filename"]
        assert body["message"] == "Content exported to Markdown successfully"
        assert body["filePath"] == f"{API}/export/files/{body['filename']}"
        _, export_dir = storage_dirs
        assert (export_dir / body["filename"]).read_text() == body["markdown"]

    @pytest.mark.asyncio
    async def test_no_flashcards_line(
        self, client: AsyncClient, saved_note: dict
    ) -> None:
        """Test Markdown for a note without flashcards."""
        response = await client.post(
            f"{API}/export/markdown", json={"noteId": saved_note["id"]}
        )

        assert response.status_code == 200
        markdown = response.json()["markdown"]
        assert "No flashcards available" in markdown
        assert "### Card" not in markdown

    @pytest.mark.asyncio
    async def test_unknown_note_is_404(self, client: AsyncClient) -> None:
        """Test that exporting a missing note is not found."""
        response = await client.post(
            f"{API}/export/markdown", json={"noteId": str(uuid4())}
        )

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_repeated_exports_create_new_files(
        self,
        client: AsyncClient,
        saved_note: dict,
        storage_dirs: tuple[Path, Path],
    ) -> None:
        """Test that exports never overwrite each other."""
        for _ in range(3):
            await client.post(f"{API}/export/markdown", json={"noteId": saved_note["id"]})

        _, export_dir = storage_dirs
        assert len(list(export_dir.glob("*.md"))) == 3


class TestAnkiExport:
    """Tests for POST /export/anki."""

    @pytest.mark.asyncio
    async def test_exports_csv(self, client: AsyncClient, saved_note: dict) -> None:
        """Test the CSV content and quote escaping."""
        await add_cards(client, saved_note["id"])

        response = await client.post(f"{API}/export/anki", json={"noteId": saved_note["id"]})

        assert response.status_code == 200
        body = response.json()
        lines = body["csvContent"].splitlines()
        assert lines[0] == '"What is the capital of France?","Paris","French Geography"'
        assert '"He said ""hi"""' in lines[1]
        assert body["filename"].endswith(".csv")
        assert body["message"] == "Content exported to Anki-compatible format successfully"

    @pytest.mark.asyncio
    async def test_no_flashcards_is_404(
        self,
        client: AsyncClient,
        saved_note: dict,
        storage_dirs: tuple[Path, Path],
    ) -> None:
        """Test that an empty note is not exported as an empty CSV."""
        response = await client.post(f"{API}/export/anki", json={"noteId": saved_note["id"]})

        assert response.status_code == 404
        assert response.json()["success"] is False
        _, export_dir = storage_dirs
        assert not list(export_dir.glob("*.csv"))


class TestApkgExport:
    """Tests for POST /export/apkg and downloads."""

    @pytest.mark.asyncio
    async def test_exports_package_and_downloads(
        self,
        client: AsyncClient,
        saved_note: dict,
        storage_dirs: tuple[Path, Path],
    ) -> None:
        """Test building a package and fetching it back."""
        await add_cards(client, saved_note["id"])

        response = await client.post(f"{API}/export/apkg", json={"noteId": saved_note["id"]})

        assert response.status_code == 200
        body = response.json()
        assert body["cardCount"] == 2
        _, export_dir = storage_dirs
        assert zipfile.is_zipfile(export_dir / body["filename"])

        download = await client.get(body["filePath"])
        assert download.status_code == 200
        assert download.content == (export_dir / body["filename"]).read_bytes()

    @pytest.mark.asyncio
    async def test_no_flashcards_is_404(
        self, client: AsyncClient, saved_note: dict
    ) -> None:
        """Test that an empty note cannot be packaged."""
        response = await client.post(f"{API}/export/apkg", json={"noteId": saved_note["id"]})

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_download_unknown_file_is_404(self, client: AsyncClient) -> None:
        """Test that a missing export is not found."""
        response = await client.get(f"{API}/export/files/missing.md")

        assert response.status_code == 404


class TestReserveExportPath:
    """Tests for exclusive export file creation."""

    def test_clash_gets_numeric_suffix(self, storage_dirs: tuple[Path, Path]) -> None:
        """Test that an existing export is never reused."""
        first = reserve_export_path("note_2024-05-01T12-30-45.123Z.md")
        second = reserve_export_path("note_2024-05-01T12-30-45.123Z.md")

        assert first.name == "note_2024-05-01T12-30-45.123Z.md"
        assert second.name == "note_2024-05-01T12-30-45.123Z-1.md"
