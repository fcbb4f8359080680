"""Dependency injection utilities."""

from typing import Annotated

from fastapi import Depends, Header, Request
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.session import get_db
from studysmart_core.errors import ConfigurationError
from studysmart_core.model_adapters.base import BaseModelAdapter


def get_model_adapter(request: Request) -> BaseModelAdapter:
    """Return the generation adapter built at startup."""
    adapter = getattr(request.app.state, "model_adapter", None)
    if adapter is None:
        raise ConfigurationError("Generation service is not configured")
    return adapter


def get_caller_id(
    x_user_id: Annotated[str | None, Header(alias="X-User-Id")] = None,
) -> str | None:
    """Caller identity for id-addressed routes; ``None`` when not supplied."""
    if x_user_id is None:
        return None
    return x_user_id.strip() or None


# Type aliases for dependency injection
DbDep = Annotated[AsyncSession, Depends(get_db)]
AdapterDep = Annotated[BaseModelAdapter, Depends(get_model_adapter)]
CallerDep = Annotated[str | None, Depends(get_caller_id)]
