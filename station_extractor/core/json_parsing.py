"""Locate and parse a JSON array inside free-form model output.

Models wrap JSON in prose, markdown fences or both, so the response is
scanned for balanced, string-aware bracket runs, left to right.
"""

import json
import logging
from collections.abc import Iterator
from typing import Any

logger = logging.getLogger(__name__)


def iter_json_array_candidates(text: str) -> Iterator[str]:
    """Yield every balanced ``[...]`` substring of ``text``, left to right.

    A candidate is not re-entered: after yielding one, the scan resumes
    past its closing bracket.
    """
    if not text:
        return

    start = text.find("[")
    while start != -1:
        end = _matching_bracket(text, start)
        if end is None:
            start = text.find("[", start + 1)
            continue
        yield text[start:end + 1]
        start = text.find("[", end + 1)


def find_first_json_array(text: str) -> str | None:
    """Return the first top-level ``[...]`` substring of ``text``.

    Brackets inside JSON string literals are ignored. Returns None when no
    ``[`` is ever closed.
    """
    return next(iter_json_array_candidates(text), None)


def _matching_bracket(text: str, start: int) -> int | None:
    """Index of the ``]`` closing the ``[`` at ``start``, or None."""
    depth = 0
    in_string = False
    escaped = False

    for i in range(start, len(text)):
        ch = text[i]
        if in_string:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_string = False
            continue

        if ch == '"':
            in_string = True
        elif ch in "[{":
            depth += 1
        elif ch in "]}":
            depth -= 1
            if depth == 0:
                return i if ch == "]" else None
            if depth < 0:
                return None
    return None


def parse_first_json_array(text: str) -> list[Any] | None:
    """Parse the first JSON array found in ``text``.

    Bracketed prose that is not valid JSON (``"[see note]"``) is skipped;
    the first candidate that parses as a JSON list wins.

    Args:
        text: Raw model response.

    Returns:
        The parsed list, or None when no array is present or it is not
        valid JSON.
    """
    for candidate in iter_json_array_candidates(text):
        try:
            parsed = json.loads(candidate)
        except json.JSONDecodeError as e:
            logger.debug(f"JSON array candidate did not parse: {e}")
            continue
        if isinstance(parsed, list):
            return parsed
    return None
