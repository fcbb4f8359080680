"""Translate errors into the JSON response envelope."""

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.schemas.api import ErrorResponse
from studysmart_core.errors import (
    ConfigurationError,
    ExtractionError,
    GenerationError,
    IngestionError,
    NotFoundError,
    PayloadTooLargeError,
    PersistenceError,
    StudySmartError,
    ValidationError,
)
from studysmart_core.utils.logging import get_logger

logger = get_logger(__name__)

# Most specific first
STATUS_CODES: list[tuple[type[StudySmartError], int]] = [
    (PayloadTooLargeError, 413),
    (ValidationError, 400),
    (NotFoundError, 404),
    (ExtractionError, 500),
    (GenerationError, 500),
    (PersistenceError, 500),
    (ConfigurationError, 500),
]


def status_for(error: StudySmartError) -> int:
    """HTTP status for a core error."""
    if isinstance(error, IngestionError):
        return status_for(error.cause)
    for error_type, status_code in STATUS_CODES:
        if isinstance(error, error_type):
            return status_code
    return 500


def error_response(
    request: Request,
    status_code: int,
    message: str,
    step: str | None = None,
) -> JSONResponse:
    """Log a failure and render it as an error envelope."""
    log = logger.warning if status_code < 500 else logger.error
    log(f"{request.method} {request.url.path} -> {status_code}: {message}")
    body = ErrorResponse(message=message, step=step)
    return JSONResponse(
        status_code=status_code,
        content=jsonable_encoder(body, by_alias=True, exclude_none=True),
    )


def _describe_validation_error(exc: RequestValidationError) -> str:
    """Human-readable summary of request validation failures."""
    problems = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        problems.append(f"{location}: {error.get('msg')}" if location else error.get("msg"))
    return "Invalid request: " + "; ".join(problems)


def register_exception_handlers(app: FastAPI) -> None:
    """Install the handlers that turn errors into envelopes."""

    @app.exception_handler(StudySmartError)
    async def handle_studysmart_error(
        request: Request, exc: StudySmartError
    ) -> JSONResponse:
        step = exc.step if isinstance(exc, IngestionError) else None
        return error_response(request, status_for(exc), exc.message, step=step)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        return error_response(request, 400, _describe_validation_error(exc))

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        return error_response(request, exc.status_code, str(exc.detail))

    @app.exception_handler(SQLAlchemyError)
    async def handle_database_error(
        request: Request, exc: SQLAlchemyError
    ) -> JSONResponse:
        logger.error(f"Database error: {exc}")
        return error_response(request, 500, "Database operation failed")

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
        logger.exception(f"Unhandled error in {request.method} {request.url.path}")
        return error_response(request, 500, "Internal server error")
