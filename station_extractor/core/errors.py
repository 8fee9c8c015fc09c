"""Structured error types for the polling-station pipeline.

Two kinds of failure exist:
- Source errors (network, HTTP status, malformed PDF, empty or malformed AI
  output) are recorded as ExtractionError entries and the run continues.
- Configuration errors (e.g. the PDF backend cannot be loaded) raise
  ConfigurationError, because no fallback compensates for them.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ConfigurationError(RuntimeError):
    """A structurally broken dependency, fatal at first use."""


class ErrorSeverity(Enum):
    """Severity levels for pipeline errors."""
    WARNING = "warning"   # Data dropped, source still contributed
    ERROR = "error"       # Source contributed nothing at this stage
    CRITICAL = "critical" # Pipeline halted


class ErrorCategory(Enum):
    """Categories of pipeline errors."""
    FETCH = "fetch"                 # Network / HTTP status errors
    PDF_READ = "pdf_read"           # Document text extraction errors
    LLM_API = "llm_api"             # Model call errors (quota, auth, network)
    LLM_PARSE = "llm_parse"         # No JSON array in the model response
    VALIDATION = "validation"       # Record failed schema validation
    TIMEOUT = "timeout"             # Operation timeout
    CONFIGURATION = "configuration" # Missing backend or credentials
    UNKNOWN = "unknown"             # Unclassified errors


@dataclass
class ExtractionError:
    """Structured pipeline error with source context."""

    category: ErrorCategory
    severity: ErrorSeverity
    message: str
    phase: str                      # Pipeline phase where error occurred
    source_name: str | None = None  # Logical name of the source document
    url: str | None = None
    original_error: Exception | None = None
    context: dict[str, Any] = field(default_factory=dict)

    def __str__(self) -> str:
        parts = [f"[{self.severity.value.upper()}] {self.category.value}: {self.message}"]
        if self.source_name:
            parts.append(f"source={self.source_name}")
        if self.phase:
            parts.append(f"phase={self.phase}")
        return " | ".join(parts)

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "category": self.category.value,
            "severity": self.severity.value,
            "message": self.message,
            "phase": self.phase,
            "source_name": self.source_name,
            "url": self.url,
            "context": self.context,
        }


@dataclass
class PipelineErrors:
    """Aggregate errors across an entire pipeline run."""

    errors: list[ExtractionError] = field(default_factory=list)
    warnings: list[ExtractionError] = field(default_factory=list)
    failed_sources: list[str] = field(default_factory=list)

    def add(self, error: ExtractionError):
        """Add an error or warning."""
        if error.severity == ErrorSeverity.WARNING:
            self.warnings.append(error)
        else:
            self.errors.append(error)
            if error.source_name and error.source_name not in self.failed_sources:
                self.failed_sources.append(error.source_name)

    @property
    def error_count(self) -> int:
        return len(self.errors)

    @property
    def warning_count(self) -> int:
        return len(self.warnings)

    def summary(self) -> dict:
        """Get summary statistics."""
        by_category = {}
        for error in self.errors:
            cat = error.category.value
            by_category[cat] = by_category.get(cat, 0) + 1

        return {
            "total_errors": self.error_count,
            "total_warnings": self.warning_count,
            "failed_sources": len(self.failed_sources),
            "errors_by_category": by_category,
        }

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "errors": [e.to_dict() for e in self.errors],
            "warnings": [w.to_dict() for w in self.warnings],
            "failed_sources": self.failed_sources,
            "summary": self.summary(),
        }


# Factory functions for common error types

def fetch_error(
    message: str,
    source_name: str,
    url: str | None = None,
    original: Exception | None = None,
    status_code: int | None = None,
) -> ExtractionError:
    """Create a document retrieval error."""
    return ExtractionError(
        category=ErrorCategory.FETCH,
        severity=ErrorSeverity.ERROR,
        message=message,
        phase="fetch",
        source_name=source_name,
        url=url,
        original_error=original,
        context={"status_code": status_code} if status_code is not None else {},
    )


def text_extraction_error(
    message: str,
    source_name: str,
    original: Exception | None = None,
) -> ExtractionError:
    """Create a text extraction (PDF parse) error."""
    return ExtractionError(
        category=ErrorCategory.PDF_READ,
        severity=ErrorSeverity.ERROR,
        message=message,
        phase="extract_text",
        source_name=source_name,
        original_error=original,
    )


def llm_api_error(
    message: str,
    source_name: str,
    original: Exception | None = None,
) -> ExtractionError:
    """Create an LLM API error."""
    return ExtractionError(
        category=ErrorCategory.LLM_API,
        severity=ErrorSeverity.ERROR,
        message=message,
        phase="ai_extract",
        source_name=source_name,
        original_error=original,
    )


def llm_parse_error(
    message: str,
    source_name: str,
    raw_response: str | None = None,
) -> ExtractionError:
    """Create an LLM parse error."""
    return ExtractionError(
        category=ErrorCategory.LLM_PARSE,
        severity=ErrorSeverity.ERROR,
        message=message,
        phase="ai_extract",
        source_name=source_name,
        context={"raw_response": raw_response[:500] if raw_response else None},
    )


def validation_error(
    message: str,
    source_name: str,
    dropped: int = 0,
) -> ExtractionError:
    """Create a validation warning for records dropped by schema checks."""
    return ExtractionError(
        category=ErrorCategory.VALIDATION,
        severity=ErrorSeverity.WARNING,
        message=message,
        phase="ai_extract",
        source_name=source_name,
        context={"dropped": dropped},
    )


def timeout_error(
    phase: str,
    source_name: str | None = None,
    timeout_seconds: float | None = None,
    url: str | None = None,
) -> ExtractionError:
    """Create a timeout error."""
    return ExtractionError(
        category=ErrorCategory.TIMEOUT,
        severity=ErrorSeverity.ERROR,
        message=f"Operation timed out after {timeout_seconds}s" if timeout_seconds else "Operation timed out",
        phase=phase,
        source_name=source_name,
        url=url,
    )
