from fastapi import APIRouter
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from app.dependencies import DbDep
from studysmart_core.errors import PersistenceError

router = APIRouter()


@router.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "ok"}


@router.get("/health/ready")
async def readiness_check(db: DbDep) -> dict[str, str]:
    """Readiness check - verifies the database answers queries."""
    try:
        await db.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        raise PersistenceError("Database is not reachable") from e
    return {"status": "ready"}
