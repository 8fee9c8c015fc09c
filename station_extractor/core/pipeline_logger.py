"""Structured logging for the polling-station pipeline.

Wraps a stdlib logger with:
- Phase headers and per-phase elapsed time
- Per-source progress ticks
- key=value structured data on any message
- Optional per-run log file (captures DEBUG)
"""

import logging
import re
import sys
import time
from datetime import datetime
from pathlib import Path
from typing import Any


class PipelineLogger:
    """Structured logger for the extraction pipeline."""

    def __init__(self, name: str = "station_extractor", verbose: bool = False, log_dir: str | Path | None = None):
        """Initialize the pipeline logger.

        Args:
            name: Logger name.
            verbose: If True, show DEBUG level logs.
            log_dir: Directory for log files. If None, no file logging.
        """
        self.logger = logging.getLogger(name)
        self.verbose = verbose
        self._phase: str = ""
        self._phase_start: float = 0
        self._pipeline_start: float = 0
        self._log_file: Path | None = None
        self._log_dir = Path(log_dir) if log_dir else None
        self._tick_count: int = 0
        self._tick_total: int = 0

        if not self.logger.handlers:
            console_handler = logging.StreamHandler(sys.stdout)
            console_handler.setFormatter(ConsoleFormatter())
            console_handler.setLevel(logging.DEBUG if verbose else logging.INFO)
            self.logger.addHandler(console_handler)

        self.logger.setLevel(logging.DEBUG)

    @property
    def log_file(self) -> Path | None:
        return self._log_file

    def set_verbose(self, verbose: bool):
        """Update verbose setting on the console handler."""
        self.verbose = verbose
        for handler in self.logger.handlers:
            if isinstance(handler, logging.StreamHandler) and handler.stream == sys.stdout:
                handler.setLevel(logging.DEBUG if verbose else logging.INFO)

    def _ts(self) -> str:
        return datetime.now().strftime("%H:%M:%S")

    def _elapsed(self) -> str:
        """Elapsed time since phase start."""
        if self._phase_start:
            return f"{time.monotonic() - self._phase_start:.1f}s"
        return ""

    def _total_elapsed(self) -> str:
        """Elapsed time since pipeline start."""
        if not self._pipeline_start:
            return ""
        elapsed = time.monotonic() - self._pipeline_start
        mins = int(elapsed // 60)
        secs = elapsed % 60
        if mins > 0:
            return f"{mins}m {secs:.0f}s"
        return f"{secs:.1f}s"

    def start_pipeline(self, label: str, sources: int = 0):
        """Mark pipeline start and set up file logging."""
        self._pipeline_start = time.monotonic()

        if self._log_dir:
            self._close_file_handlers()
            self._log_dir.mkdir(parents=True, exist_ok=True)
            stem = re.sub(r"[^A-Za-z0-9]+", "_", label).strip("_").lower() or "run"
            timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
            self._log_file = self._log_dir / f"{stem}_{timestamp}.log"

            file_handler = logging.FileHandler(self._log_file, encoding="utf-8")
            file_handler.setFormatter(FileFormatter())
            file_handler.setLevel(logging.DEBUG)
            self.logger.addHandler(file_handler)

        suffix = f" ({sources} sources)" if sources else ""
        self.logger.info(f"[{self._ts()}] Starting pipeline: {label}{suffix}")

    def _close_file_handlers(self):
        """Detach file handlers left by an earlier run."""
        for handler in self.logger.handlers[:]:
            if isinstance(handler, logging.FileHandler):
                handler.close()
                self.logger.removeHandler(handler)

    def end_pipeline(self, success: bool = True, stats: dict | None = None):
        """Mark pipeline end."""
        elapsed = self._total_elapsed()
        status = "COMPLETE" if success else "FAILED"

        self.logger.info("")
        if stats:
            self.summary(stats)

        self.logger.info(f"\n{'='*50}")
        self.logger.info(f"Pipeline {status} [{elapsed}]")
        self.logger.info(f"{'='*50}")

        if self._log_file:
            self.logger.info(f"Log: {self._log_file}")

    def start_phase(self, phase: str, total: int = 0, model: str = ""):
        """Start a new pipeline phase."""
        self._phase = phase
        self._phase_start = time.monotonic()
        self._tick_count = 0
        self._tick_total = total

        parts = [phase.upper()]
        if total > 0:
            parts.append(f"{total} items")
        if model:
            parts.append(model.split("/")[-1])

        header = parts[0]
        if len(parts) > 1:
            header += f" ({', '.join(parts[1:])})"

        self.logger.info("")
        self.logger.info(header)

    def end_phase(self):
        """End current phase."""
        self._phase = ""

    def tick(self, item: str = ""):
        """Log a visible progress tick (INFO level).

        Call when an item completes; the counter is managed internally.
        Shows:   [2/4] Portmore Municipality Document: 37 records (8.1s)
        """
        self._tick_count += 1
        if self._tick_total <= 0:
            return
        elapsed = time.monotonic() - self._phase_start
        count = f"[{self._tick_count}/{self._tick_total}]"
        if item:
            self.logger.info(f"  {count} {item} ({elapsed:.1f}s)")
        else:
            self.logger.info(f"  {count} ({elapsed:.1f}s)")

    def debug(self, message: str, **data):
        """Log debug message (only shown in verbose mode)."""
        if data:
            message = f"{message} | {_format_data(data)}"
        self.logger.debug(f"[{self._ts()}] {message}")

    def info(self, message: str, **data):
        if data:
            message = f"{message} | {_format_data(data)}"
        self.logger.info(f"  {message}")

    def warning(self, message: str, **data):
        if data:
            message = f"{message} | {_format_data(data)}"
        self.logger.warning(f"[{self._ts()}] WARN: {message}")

    def error(self, message: str, exc: Exception | None = None, **data):
        if data:
            message = f"{message} | {_format_data(data)}"
        if exc:
            message = f"{message} | {type(exc).__name__}: {exc}"
        self.logger.error(f"[{self._ts()}] ERROR: {message}")

    def milestone(self, message: str, **data):
        """Log a high-level decision (always visible, highlighted)."""
        if data:
            message = f"{message} | {_format_data(data)}"
        self.logger.info(f"  -> {message}")

    def summary(self, stats: dict):
        """Log a summary block for end-of-pipeline stats."""
        lines = ["SUMMARY"]
        for key, value in stats.items():
            if isinstance(value, dict):
                lines.append(f"  {key}:")
                for k, v in value.items():
                    lines.append(f"    {k}: {v}")
            else:
                lines.append(f"  {key}: {value}")
        self.logger.info("\n".join(lines))

    def phase_result(self, phase: str, result: str, **metrics):
        """Log phase completion with key metrics.

        Args:
            phase: Phase name (e.g., "Merge")
            result: Brief result description
            **metrics: Key-value metrics to display
        """
        elapsed = self._elapsed()
        parts = [result]
        if metrics:
            parts.append(", ".join(f"{k}={v}" for k, v in metrics.items()))
        if elapsed:
            parts.append(f"[{elapsed}]")
        self.logger.info(f"  Done: {' | '.join(parts)}")


class ConsoleFormatter(logging.Formatter):
    """Console formatter - the message already carries its own timestamp."""

    def format(self, record: logging.LogRecord) -> str:
        return record.getMessage()


class FileFormatter(logging.Formatter):
    """File formatter - full timestamp and level for later analysis."""

    def format(self, record: logging.LogRecord) -> str:
        ts = datetime.now().strftime("%Y-%m-%d %H:%M:%S.%f")[:-3]
        level = record.levelname[:4]
        return f"{ts} [{level}] {record.getMessage()}"


def _format_data(data: dict[str, Any]) -> str:
    """Format structured data for logging."""
    parts = []
    for k, v in data.items():
        if isinstance(v, str) and len(v) > 80:
            v = v[:77] + "..."
        elif isinstance(v, (list, tuple)) and len(v) > 5:
            v = f"[{len(v)} items]"
        parts.append(f"{k}={v}")
    return ", ".join(parts)


# Global logger instance
_logger: PipelineLogger | None = None


def get_logger(verbose: bool = False, log_dir: str | Path | None = None) -> PipelineLogger:
    """Get or create the global pipeline logger.

    Args:
        verbose: If True, show DEBUG level logs in console.
        log_dir: Directory for log files. If the logger already exists
                 without one, it is used for future file logging.
    """
    global _logger
    if _logger is None:
        _logger = PipelineLogger(verbose=verbose, log_dir=log_dir)
    else:
        if verbose and not _logger.verbose:
            _logger.set_verbose(True)
        if log_dir and not _logger._log_dir:
            _logger._log_dir = Path(log_dir)
    return _logger


def reset_logger():
    """Reset the global logger (for testing)."""
    global _logger
    if _logger:
        _logger._close_file_handlers()
    _logger = None
