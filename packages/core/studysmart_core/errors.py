"""Error taxonomy shared by the core package and the API."""


class StudySmartError(Exception):
    """Base class for all studysmart errors."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(StudySmartError):
    """A required field is missing or malformed."""


class PayloadTooLargeError(ValidationError):
    """An uploaded file exceeds the configured size cap."""


class NotFoundError(StudySmartError):
    """A referenced entity or file does not exist."""


class ExtractionError(StudySmartError):
    """Text could not be extracted from a PDF."""


class GenerationError(StudySmartError):
    """The text-generation service failed or returned no usable content."""


class FlashcardParseError(GenerationError):
    """The generation service returned flashcards in an unexpected shape."""


class PersistenceError(StudySmartError):
    """The store is unavailable or a write failed."""


class ConfigurationError(StudySmartError):
    """Credentials or connection settings are missing or unusable.

    Raised at process start; never recovered per request.
    """


class IngestionError(StudySmartError):
    """An ingestion run failed at a specific step.

    Attributes:
        step: One of ``extraction``, ``summarization`` or ``persistence``
        cause: The underlying error
    """

    def __init__(self, step: str, cause: StudySmartError) -> None:
        super().__init__(f"Ingestion failed during {step}: {cause.message}")
        self.step = step
        self.cause = cause
