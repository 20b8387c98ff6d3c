"""Recover JSON payloads embedded in free-form text.

Model replies and tool responses often wrap the JSON we need in narrative,
e.g. ``"Result for graph API - get /organization:\\n\\n{...}"``. The
extractor tries, in order: the whole text, the text from the first ``{``/``[``
onwards, and finally a string-aware balanced-bracket scan from that position.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Optional

logger = logging.getLogger(__name__)

PREVIEW_LENGTH = 100


def _preview(text: str) -> str:
    if len(text) <= PREVIEW_LENGTH:
        return text
    return text[:PREVIEW_LENGTH] + "..."


class PayloadExtractionError(ValueError):
    """Base class for recoverable extraction failures."""

    kind = "PayloadExtractionError"

    def __init__(self, message: str, *, text: str = "") -> None:
        super().__init__(message)
        self.preview = _preview(text or "")

    def to_dict(self) -> dict:
        return {"kind": self.kind, "message": str(self), "preview": self.preview}


class NoJsonFound(PayloadExtractionError):
    """Raised when the text contains no ``{`` or ``[`` at all."""

    kind = "NoJsonFound"


class UnbalancedStructure(PayloadExtractionError):
    """Raised when the bracket scan never returns to depth zero."""

    kind = "UnbalancedStructure"


class ParseFailure(PayloadExtractionError):
    """Raised when an isolated candidate is still rejected by the JSON parser."""

    kind = "ParseFailure"

    def __init__(self, message: str, *, text: str = "", cause: Optional[json.JSONDecodeError] = None) -> None:
        super().__init__(message, text=text)
        self.cause = cause


def extract_structured_payload(text: str) -> Any:
    """Return the JSON value carried by ``text``.

    Raises ``NoJsonFound``, ``UnbalancedStructure`` or ``ParseFailure``.
    """
    source = text or ""
    try:
        return json.loads(source)
    except json.JSONDecodeError:
        logger.debug("Direct JSON parse failed; looking for an embedded structure.")

    start = find_structure_start(source)
    if start == -1:
        raise NoJsonFound(f"No JSON data found in text: {_preview(source)}", text=source)

    candidate_text = source[start:]
    try:
        return json.loads(candidate_text)
    except json.JSONDecodeError:
        logger.debug("Parsing from index %d to end failed; scanning for a balanced structure.", start)

    candidate = find_balanced_structure(candidate_text)
    if candidate is None:
        raise UnbalancedStructure(
            f"Unbalanced JSON structure starting at index {start}: {_preview(candidate_text)}",
            text=candidate_text,
        )

    try:
        return json.loads(candidate)
    except json.JSONDecodeError as exc:
        raise ParseFailure(f"Failed to parse extracted JSON: {exc}", text=candidate, cause=exc) from exc


def find_structure_start(text: str) -> int:
    """Index of the first ``{`` or ``[``, or -1."""
    for index, char in enumerate(text):
        if char in "{[":
            return index
    return -1


def find_balanced_structure(text: str) -> Optional[str]:
    """Return the prefix of ``text`` that closes its opening bracket, or ``None``.

    Only the bracket kind found at position 0 is counted; brackets of the other
    kind are ignored, so ``{[}`` is reported as balanced. Quoted content,
    including escaped quotes and backslashes, never affects the depth.
    """
    if not text or text[0] not in "{[":
        return None
    open_char = text[0]
    close_char = "}" if open_char == "{" else "]"

    depth = 0
    in_string = False
    escaped = False
    for index, char in enumerate(text):
        if escaped:
            escaped = False
            continue
        if char == "\\" and in_string:
            escaped = True
            continue
        if char == '"':
            in_string = not in_string
            continue
        if in_string:
            continue
        if char == open_char:
            depth += 1
        elif char == close_char:
            depth -= 1
            if depth == 0:
                return text[: index + 1]
    return None


__all__ = [
    "NoJsonFound",
    "ParseFailure",
    "PayloadExtractionError",
    "UnbalancedStructure",
    "extract_structured_payload",
    "find_balanced_structure",
    "find_structure_start",
]
