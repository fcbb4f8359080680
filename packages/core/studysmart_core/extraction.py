"""Text extraction from PDF bytes."""

import asyncio
from io import BytesIO

import pdfplumber

from studysmart_core.errors import ExtractionError
from studysmart_core.utils.logging import get_logger, log_exceptions
from studysmart_core.utils.pdf import PDFValidationError, get_pdf_info, validate_pdf

logger = get_logger(__name__)

# Returned instead of failing when a PDF has no text layer (scans, images)
NO_TEXT_EXTRACTED = (
    "No text could be extracted from the PDF. "
    "The file might be scanned images or protected."
)


@log_exceptions(logger)
def extract_text(pdf_data: bytes) -> str:
    """Extract plain text from every page of a PDF.

    Args:
        pdf_data: Raw PDF bytes

    Returns:
        Page texts joined by newlines, or NO_TEXT_EXTRACTED when the
        document has no extractable text

    Raises:
        ExtractionError: If the data is empty, not a PDF, or cannot be parsed
    """
    try:
        validate_pdf(pdf_data)
    except PDFValidationError as e:
        raise ExtractionError(f"Failed to extract text from PDF: {e}") from e

    info = get_pdf_info(pdf_data)
    logger.info(
        f"Extracting text (version={info.get('version')}, size={info.get('size_bytes')} bytes)"
    )

    pages: list[str] = []
    try:
        with pdfplumber.open(BytesIO(pdf_data)) as pdf:
            for page in pdf.pages:
                page_text = page.extract_text() or ""
                if page_text.strip():
                    pages.append(page_text.strip())
    except Exception as e:
        raise ExtractionError(f"Failed to extract text from PDF: {e}") from e

    text = "\n".join(pages).strip()
    if not text:
        logger.warning("Extracted text is empty")
        return NO_TEXT_EXTRACTED

    logger.info(f"Extracted {len(text)} characters from {len(pages)} pages")
    return text


async def extract_text_async(pdf_data: bytes) -> str:
    """Run extract_text in a worker thread so the event loop is not blocked."""
    return await asyncio.to_thread(extract_text, pdf_data)
