"""PDF sanity checks run before text extraction."""

import re

from studysmart_core.utils.logging import get_logger

logger = get_logger(__name__)

PDF_MAGIC = b"%PDF-"
EOF_MARKER = b"%%EOF"
# The trailer normally sits in the last kilobyte
EOF_SEARCH_WINDOW = 1024

_VERSION_RE = re.compile(rb"^%PDF-(\d+\.\d+)")


class PDFValidationError(Exception):
    """Raised when bytes cannot be a PDF document."""


def validate_pdf(data: bytes) -> bool:
    """Check that ``data`` starts like a PDF document.

    A missing end-of-file marker only logs a warning, since truncated but
    readable files are common in uploads.

    Raises:
        PDFValidationError: If the data is empty, too short, or lacks the
            ``%PDF-`` header
    """
    if not data:
        raise PDFValidationError("Empty file data")

    if len(data) < len(PDF_MAGIC):
        raise PDFValidationError(f"File too small to be a valid PDF ({len(data)} bytes)")

    if not data.startswith(PDF_MAGIC):
        raise PDFValidationError(
            f"Not a PDF: expected magic bytes {PDF_MAGIC!r}, got {data[:len(PDF_MAGIC)]!r}"
        )

    if EOF_MARKER not in data[-EOF_SEARCH_WINDOW:]:
        logger.warning("PDF has no %%EOF marker near the end; it may be truncated")

    return True


def get_pdf_info(data: bytes) -> dict[str, str | int | bool | None]:
    """Describe a PDF for logging: size, header version and EOF marker presence."""
    match = _VERSION_RE.match(data[:16])
    return {
        "size_bytes": len(data),
        "version": match.group(1).decode("ascii") if match else None,
        "has_eof_marker": EOF_MARKER in data[-EOF_SEARCH_WINDOW:],
    }
