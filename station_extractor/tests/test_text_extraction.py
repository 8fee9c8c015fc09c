"""Tests for station_extractor.core.text_extraction.

Covers:
- PyMuPDF backend on a real in-memory PDF
- Lazy, one-time backend loading and cached load failure
- Per-document parse failures absorbed as empty text
"""

import sys

import fitz
import pytest

from station_extractor.core.errors import ConfigurationError
from station_extractor.core.text_extraction import PyMuPDFBackend, TextExtractor


def make_pdf(*pages: str) -> bytes:
    doc = fitz.open()
    for text in pages:
        page = doc.new_page()
        page.insert_text((72, 72), text)
    data = doc.tobytes()
    doc.close()
    return data


# =============================================================================
# PyMuPDFBackend
# =============================================================================


class TestPyMuPDFBackend:

    def test_extracts_text_from_every_page(self):
        backend = PyMuPDFBackend()
        text = backend.extract(make_pdf("Alpha Primary School", "Kingston College"))
        assert "Alpha Primary School" in text
        assert "Kingston College" in text
        assert text.index("Alpha") < text.index("Kingston College")

    def test_library_not_loaded_until_first_use(self):
        backend = PyMuPDFBackend()
        assert backend._fitz is None
        backend.extract(make_pdf("x"))
        assert backend._fitz is fitz

    def test_load_failure_raises_configuration_error(self, monkeypatch):
        monkeypatch.setitem(sys.modules, "fitz", None)
        backend = PyMuPDFBackend()

        with pytest.raises(ConfigurationError, match="PDF parsing library not available"):
            backend.extract(b"%PDF")

    def test_load_failure_is_cached(self, monkeypatch):
        monkeypatch.setitem(sys.modules, "fitz", None)
        backend = PyMuPDFBackend()

        with pytest.raises(ConfigurationError) as first:
            backend.extract(b"%PDF")
        # Even with the library back, the first failure sticks
        monkeypatch.setitem(sys.modules, "fitz", fitz)
        with pytest.raises(ConfigurationError) as second:
            backend.extract(b"%PDF")

        assert first.value is second.value

    def test_corrupt_document_raises(self):
        with pytest.raises(Exception):
            PyMuPDFBackend().extract(b"this is not a pdf")


# =============================================================================
# TextExtractor
# =============================================================================


class FailingBackend:
    def extract(self, data: bytes) -> str:
        raise ValueError("cannot open broken document")


class BrokenBackend:
    def extract(self, data: bytes) -> str:
        raise ConfigurationError("PDF parsing library not available")


class TestTextExtractor:

    def test_returns_backend_text(self):
        extractor = TextExtractor(PyMuPDFBackend())
        assert "Beta Hall" in extractor.extract(make_pdf("Beta Hall"), "Source B")

    def test_empty_payload_returns_empty_text(self):
        extractor = TextExtractor(FailingBackend())
        assert extractor.extract(b"") == ""
        assert extractor.extract(None) == ""

    def test_parse_failure_returns_empty_text(self):
        assert TextExtractor(FailingBackend()).extract(b"garbage", "Source A") == ""

    def test_corrupt_pdf_returns_empty_text(self):
        assert TextExtractor(PyMuPDFBackend()).extract(b"this is not a pdf") == ""

    def test_configuration_error_propagates(self):
        with pytest.raises(ConfigurationError):
            TextExtractor(BrokenBackend()).extract(b"%PDF")
