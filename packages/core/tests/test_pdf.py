"""Tests for PDF sanity checks."""

import pytest

from studysmart_core.utils.pdf import PDFValidationError, get_pdf_info, validate_pdf


class TestValidatePdf:
    """Tests for validate_pdf."""

    def test_generated_document_passes(self, text_pdf: bytes) -> None:
        """Test that a complete PDF passes."""
        assert validate_pdf(text_pdf) is True

    def test_truncated_document_still_passes(self) -> None:
        """Test that a missing EOF marker is tolerated."""
        assert validate_pdf(b"%PDF-1.4\n1 0 obj") is True

    @pytest.mark.parametrize(
        ("data", "message"),
        [
            (b"", "Empty file data"),
            (b"%PD", "too small"),
            (b"Hello, this is text", "magic bytes"),
            (b"\x89PNG\r\n\x1a\n", "magic bytes"),
        ],
    )
    def test_rejects_non_pdf(self, data: bytes, message: str) -> None:
        """Test the rejection reason for non-PDF input."""
        with pytest.raises(PDFValidationError, match=message):
            validate_pdf(data)


class TestPdfInfo:
    """Tests for get_pdf_info."""

    def test_describes_generated_document(self, text_pdf: bytes) -> None:
        """Test size, version and EOF marker of a complete PDF."""
        info = get_pdf_info(text_pdf)

        assert info == {
            "size_bytes": len(text_pdf),
            "version": "1.4",
            "has_eof_marker": True,
        }

    def test_truncated_document(self) -> None:
        """Test that a missing EOF marker is reported."""
        info = get_pdf_info(b"%PDF-1.7\r\n1 0 obj")

        assert info["version"] == "1.7"
        assert info["has_eof_marker"] is False

    def test_non_pdf_has_no_version(self) -> None:
        """Test that data without a PDF header reports no version."""
        assert get_pdf_info(b"plain text")["version"] is None
