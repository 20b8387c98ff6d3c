"""Pull structured payloads out of tool/service response envelopes.

Two envelope shapes are accepted::

    {"id": ..., "result": {"content": [item, ...]}}
    {"content": [item, ...]}

Only the first content item is inspected. An explicit ``json`` field wins
regardless of the declared ``type``; otherwise a textual item (``type ==
"text"``, or no type at all) is run through ``extract_structured_payload``.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Mapping

from core.payload_extractor import PayloadExtractionError, extract_structured_payload

logger = logging.getLogger(__name__)

TEXT_KIND = "text"
PAYLOAD_FIELD = "json"
TEXT_FIELD = "text"


class InvalidEnvelope(PayloadExtractionError):
    """Raised when the envelope has no content list (or it is not a list)."""

    kind = "InvalidEnvelope"


class EmptyContent(PayloadExtractionError):
    """Raised when the content list is present but empty."""

    kind = "EmptyContent"


class UnsupportedContentFormat(PayloadExtractionError):
    """Raised when the first item carries neither a payload nor usable text."""

    kind = "UnsupportedContentFormat"


def _describe(value: Any) -> str:
    try:
        return json.dumps(value, default=str)
    except (TypeError, ValueError):
        return repr(value)


def _content_list(envelope: Any) -> Any:
    if not isinstance(envelope, Mapping):
        return None
    result = envelope.get("result")
    if isinstance(result, Mapping) and isinstance(result.get("content"), list):
        return result["content"]
    return envelope.get("content")


def validate_envelope(envelope: Any) -> None:
    """Check an envelope before unwrapping it; raises on the first problem found."""

    if envelope is None:
        raise InvalidEnvelope("Response is undefined")
    if not isinstance(envelope, Mapping):
        raise InvalidEnvelope("Response must be a mapping", text=_describe(envelope))
    if envelope.get("error"):
        raise InvalidEnvelope(
            f"Response contains error: {_describe(envelope['error'])}",
            text=_describe(envelope["error"]),
        )
    result = envelope.get("result")
    if not isinstance(result, Mapping):
        raise InvalidEnvelope("Response missing result", text=_describe(envelope))
    content = result.get("content")
    if not isinstance(content, list):
        raise InvalidEnvelope("Response missing content array", text=_describe(result))
    if not content:
        raise EmptyContent("Response content array is empty", text=_describe(result))


def unwrap_envelope(envelope: Any) -> Any:
    """Return the structured payload carried by ``envelope``'s first content item."""

    content = _content_list(envelope)
    if not isinstance(content, list):
        raise InvalidEnvelope("Invalid response format: missing content array", text=_describe(envelope))
    if not content:
        raise EmptyContent("Invalid response format: empty content array", text=_describe(envelope))

    item = content[0]
    if not isinstance(item, Mapping):
        raise UnsupportedContentFormat(
            f"Unsupported response content format: {_describe(item)}",
            text=_describe(item),
        )

    if PAYLOAD_FIELD in item:
        logger.debug("Using direct %s payload from content item.", PAYLOAD_FIELD)
        return item[PAYLOAD_FIELD]

    kind = item.get("type")
    text = item.get(TEXT_FIELD)
    if (kind == TEXT_KIND or kind is None) and isinstance(text, str) and text:
        logger.debug("Extracting payload from text content (%d chars).", len(text))
        return extract_structured_payload(text)

    raise UnsupportedContentFormat(
        f"Unsupported response content format: {_describe(item)}",
        text=_describe(item),
    )


__all__ = [
    "EmptyContent",
    "InvalidEnvelope",
    "UnsupportedContentFormat",
    "unwrap_envelope",
    "validate_envelope",
]
