"""Plain-text extraction from retrieved PDF documents.

Pure Python + PyMuPDF. The backend is an injected dependency: construct one
PyMuPDFBackend at startup and hand it to the TextExtractor (tests pass a
fake implementing the same ``extract(bytes) -> str`` interface).
"""

import logging
import threading
from typing import Protocol

from station_extractor.core.errors import ConfigurationError

logger = logging.getLogger(__name__)


class TextExtractorBackend(Protocol):
    """Anything that turns document bytes into plain text."""

    def extract(self, data: bytes) -> str:
        ...


class PyMuPDFBackend:
    """PDF text backend using PyMuPDF (``fitz``).

    The library is loaded lazily on first use, at most once, even when
    several sources are extracted concurrently. If loading fails the
    ConfigurationError is cached and re-raised on every later call.
    """

    def __init__(self):
        self._fitz = None
        self._load_error: ConfigurationError | None = None
        self._lock = threading.Lock()

    def _ensure_loaded(self):
        if self._fitz is not None:
            return self._fitz

        with self._lock:
            if self._load_error is not None:
                raise self._load_error
            if self._fitz is None:
                try:
                    import fitz  # PyMuPDF
                except ImportError as e:
                    logger.error(f"Error loading PyMuPDF: {e}")
                    self._load_error = ConfigurationError("PDF parsing library not available")
                    raise self._load_error from e
                self._fitz = fitz
        return self._fitz

    def extract(self, data: bytes) -> str:
        """Extract the text of every page, joined with blank lines.

        Raises:
            ConfigurationError: PyMuPDF cannot be loaded.
            Exception: Whatever PyMuPDF raises for an unreadable document.
        """
        fitz = self._ensure_loaded()
        with fitz.open(stream=data, filetype="pdf") as doc:
            return "\n\n".join(page.get_text() for page in doc)


class TextExtractor:
    """Turns document bytes into text, absorbing per-document failures."""

    def __init__(self, backend: TextExtractorBackend):
        self.backend = backend

    def extract(self, data: bytes | None, document_name: str = "document") -> str:
        """Extract plain text.

        Args:
            data: Raw document bytes (None or empty yields "").
            document_name: Name used in log messages.

        Returns:
            Extracted text, or "" when the document cannot be parsed.

        Raises:
            ConfigurationError: The backend itself is unusable.
        """
        if not data:
            return ""

        try:
            text = self.backend.extract(data)
        except ConfigurationError:
            raise
        except Exception as e:
            logger.warning(f"Could not extract text from {document_name}: {type(e).__name__}: {e}")
            return ""

        logger.info(f"Extracted {len(text)} characters from {document_name}")
        return text
