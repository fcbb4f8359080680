"""Fixtures for API tests: in-memory database, fake generation, HTTP client."""

from collections.abc import AsyncGenerator
from pathlib import Path

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from app.db.models import Base
from app.db.session import create_in_memory_engine, get_db
from app.main import app
from app.settings import settings
from studysmart_core.errors import StudySmartError
from studysmart_core.model_adapters.base import BaseModelAdapter
from studysmart_core.schemas.cards import QAPair

API = "/api/v1"


class FakeAdapter(BaseModelAdapter):
    """Deterministic stand-in for the generation service."""

    def __init__(self) -> None:
        self.summary_error: StudySmartError | None = None
        self.flashcards_error: StudySmartError | None = None
        self.flashcards = [
            QAPair(question="What is the capital of France?", answer="Paris"),
            QAPair(question="Which river flows through Paris?", answer="The Seine"),
        ]
        self.summarized: list[str] = []
        self.generated_from: list[str] = []

    async def summarize(self, text: str) -> str:
        self.summarized.append(text)
        if self.summary_error is not None:
            raise self.summary_error
        return f"- Key point: {text[:40]}"

    async def generate_flashcards(self, text: str) -> list[QAPair]:
        self.generated_from.append(text)
        if self.flashcards_error is not None:
            raise self.flashcards_error
        return list(self.flashcards)


@pytest_asyncio.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """In-memory database with all tables created."""
    engine = create_in_memory_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_maker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, expire_on_commit=False)


@pytest_asyncio.fixture
async def db_session(
    session_maker: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession, None]:
    async with session_maker() as session:
        yield session


@pytest.fixture
def storage_dirs(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> tuple[Path, Path]:
    """Point uploads and exports at temporary directories."""
    upload_dir = tmp_path / "uploads"
    export_dir = tmp_path / "exports"
    monkeypatch.setattr(settings, "upload_dir", upload_dir)
    monkeypatch.setattr(settings, "export_dir", export_dir)
    return upload_dir, export_dir


@pytest.fixture
def fake_adapter() -> FakeAdapter:
    return FakeAdapter()


@pytest_asyncio.fixture
async def client(
    session_maker: async_sessionmaker[AsyncSession],
    storage_dirs: tuple[Path, Path],
    fake_adapter: FakeAdapter,
) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client wired to the app with test dependencies."""

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        async with session_maker() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.state.model_adapter = fake_adapter
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()
    app.state.model_adapter = None


@pytest_asyncio.fixture
async def saved_note(client: AsyncClient) -> dict:
    """A note saved through the API."""
    response = await client.post(
        f"{API}/notes/save",
        json={
            "userId": "user-1",
            "title": "French Geography",
            "rawText": "Paris is the capital of France. The Seine flows through it.",
            "summary": "- Paris is the capital of France",
        },
    )
    assert response.status_code == 201
    return response.json()["note"]
