from collections.abc import AsyncGenerator, AsyncIterator
from contextlib import asynccontextmanager

from sqlalchemy import text
from sqlalchemy.engine import make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from app.settings import settings
from studysmart_core.errors import ConfigurationError, PersistenceError
from studysmart_core.utils.logging import get_logger
from studysmart_core.utils.retry import with_retry

logger = get_logger(__name__)

IN_MEMORY_URL = "sqlite+aiosqlite://"

engine: AsyncEngine | None = None
async_session_maker: async_sessionmaker[AsyncSession] | None = None


def _redact(url: str) -> str:
    """Hide the password in a connection string for logging."""
    return make_url(url).render_as_string(hide_password=True)


def create_in_memory_engine() -> AsyncEngine:
    """Create a single-connection in-process SQLite engine."""
    return create_async_engine(
        IN_MEMORY_URL,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )


async def _probe(candidate: AsyncEngine) -> None:
    """Open a connection and run a trivial query."""
    async with candidate.connect() as conn:
        await conn.execute(text("SELECT 1"))


async def connect_with_fallback(
    candidates: list[str],
    attempts_per_candidate: int = 1,
    in_memory_fallback: bool = False,
) -> AsyncEngine:
    """Return an engine for the first reachable connection target.

    Args:
        candidates: Connection strings, tried in order
        attempts_per_candidate: Attempts per target before moving on
        in_memory_fallback: Use a non-durable SQLite database when every
            target fails instead of raising

    Raises:
        ConfigurationError: If no target is reachable and the in-memory
            fallback is disabled
    """
    for url in candidates:
        logger.info(f"Attempting database connection: {_redact(url)}")
        candidate = create_async_engine(url, echo=settings.debug, pool_pre_ping=True)
        try:
            await with_retry(
                _probe,
                candidate,
                max_attempts=attempts_per_candidate,
                operation_name="database_connect",
                retry_on=(SQLAlchemyError, OSError),
                max_wait=5,
            )
        except (SQLAlchemyError, OSError) as e:
            logger.error(f"Connection attempt failed for {_redact(url)}: {e}")
            await candidate.dispose()
            continue
        logger.info(f"Database connected: {_redact(url)}")
        return candidate

    if in_memory_fallback:
        logger.warning(
            "All database connection attempts failed; using in-memory database. "
            "Data will not survive a restart."
        )
        return create_in_memory_engine()

    raise ConfigurationError(
        "All database connection attempts failed. Cannot start without a database."
    )


async def init_db() -> None:
    """Connect to the store and create tables."""
    global engine, async_session_maker
    from app.db.models import Base

    engine = await connect_with_fallback(
        settings.database_candidates(),
        attempts_per_candidate=settings.database_connect_attempts,
        in_memory_fallback=settings.database_in_memory_fallback,
    )
    async_session_maker = async_sessionmaker(engine, expire_on_commit=False)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def dispose_db() -> None:
    """Release the connection pool."""
    global engine, async_session_maker
    if engine is not None:
        await engine.dispose()
    engine = None
    async_session_maker = None


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Dependency that provides a database session."""
    if async_session_maker is None:
        raise PersistenceError("Database is not initialized")
    async with async_session_maker() as session:
        try:
            yield session
        finally:
            await session.close()


@asynccontextmanager
async def transaction(db: AsyncSession) -> AsyncIterator[AsyncSession]:
    """Commit everything done in the block as one unit, or roll it all back.

    Raises:
        PersistenceError: If the store rejects any statement or the commit
    """
    try:
        yield db
        await db.commit()
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error(f"Transaction rolled back: {e}")
        raise PersistenceError("Failed to write to the database") from e
    except BaseException:
        await db.rollback()
        raise
