"""FastAPI application entry point."""

from collections.abc import AsyncGenerator, Awaitable, Callable
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware

from app.db.session import dispose_db, init_db
from app.errors import register_exception_handlers
from app.routers import export, flashcards, health, notes
from app.services.storage import init_storage
from app.settings import settings
from studysmart_core.model_adapters import OpenAIAdapter
from studysmart_core.utils.logging import get_logger

logger = get_logger(__name__)

API_PREFIX = "/api/v1"


def build_model_adapter() -> OpenAIAdapter:
    """Build the generation adapter from settings.

    Raises:
        ConfigurationError: If the API key is missing
    """
    return OpenAIAdapter(
        api_key=settings.openai_api_key,
        model=settings.openai_model,
        base_url=settings.openai_base_url,
        timeout=settings.openai_timeout,
        max_input_chars=settings.generation_max_input_chars,
        summary_max_tokens=settings.summary_max_tokens,
        flashcards_max_tokens=settings.flashcards_max_tokens,
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Initialize services on startup and cleanup on shutdown."""
    # Startup - configuration errors here stop the process
    app.state.model_adapter = build_model_adapter()
    await init_db()
    await init_storage()
    logger.info("studysmart API started")
    yield
    # Shutdown
    await dispose_db()


app = FastAPI(
    title="studysmart API",
    description="API for turning PDF notes into summaries and flashcards",
    version="0.1.0",
    lifespan=lifespan,
)

# CORS middleware - allow all origins in dev, restrict in production
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"] if settings.cors_allow_all else settings.cors_origins,
    allow_credentials=not settings.cors_allow_all,  # credentials require specific origins
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def log_requests(
    request: Request, call_next: Callable[[Request], Awaitable[Response]]
) -> Response:
    """Log method, path and status of every request."""
    response = await call_next(request)
    logger.info(f"{request.method} {request.url.path} {response.status_code}")
    return response


register_exception_handlers(app)

# Include routers
app.include_router(health.router, prefix=API_PREFIX, tags=["health"])
app.include_router(notes.router, prefix=API_PREFIX, tags=["notes"])
app.include_router(flashcards.router, prefix=API_PREFIX, tags=["flashcards"])
app.include_router(export.router, prefix=API_PREFIX, tags=["export"])


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.debug,
    )
