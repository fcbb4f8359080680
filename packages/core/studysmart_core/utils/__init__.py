"""Utility functions."""

from studysmart_core.utils.logging import get_logger, log_exceptions
from studysmart_core.utils.pdf import PDFValidationError, get_pdf_info, validate_pdf
from studysmart_core.utils.retry import with_retry

__all__ = [
    "get_logger",
    "log_exceptions",
    "PDFValidationError",
    "get_pdf_info",
    "validate_pdf",
    "with_retry",
]
