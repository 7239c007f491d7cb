"""Normalisation and decoding of JSON responses emitted by shinylive tools.

Tools may print log noise before their payload (for instance R start-up
messages), so the response is trimmed to the earliest ``{`` or ``[`` before it
is decoded. The scan does not understand the preamble: a stray brace in the
noise moves the start point too early and surfaces as a decode error.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from .exceptions import JsonDecodeError, MalformedToolOutputError


logger = logging.getLogger(__name__)

EXCERPT_LIMIT = 100
TRUNCATION_MARKER = "... [truncated]"


def find_json_start(raw: str) -> int | None:
    """Return the offset of the earliest JSON object or array delimiter."""
    offsets = [offset for offset in (raw.find("{"), raw.find("[")) if offset >= 0]
    return min(offsets) if offsets else None


def excerpt(raw: str, limit: int = EXCERPT_LIMIT) -> str:
    """Return at most ``limit`` characters of ``raw`` for diagnostics."""
    if len(raw) > limit:
        return raw[:limit] + TRUNCATION_MARKER
    return raw


def strip_preamble(raw: str, label: str) -> str:
    """Drop everything preceding the JSON payload of a tool response."""
    start = find_json_start(raw)
    if start is None:
        snippet = excerpt(raw)
        raise MalformedToolOutputError(
            "\nCould not find start curly brace or start brace in "
            f"{label} shinylive response:\n{snippet}",
            excerpt=snippet,
        )
    if start > 0:
        logger.debug("Discarding %d preamble characters from %s response", start, label)
        return raw[start:]
    return raw


def decode_tool_response(raw: str, label: str) -> Any:
    """Decode the JSON object or array carried by a tool response."""
    payload = strip_preamble(raw, label)
    try:
        return json.loads(payload)
    except json.JSONDecodeError as exc:
        raise JsonDecodeError(
            f"Error decoding JSON response from `shinylive` {label} package.\n"
            f"JSON string being parsed:\n{payload}\nError:\n{exc}",
            payload=payload,
            detail=str(exc),
        ) from exc


__all__ = [
    "EXCERPT_LIMIT",
    "TRUNCATION_MARKER",
    "decode_tool_response",
    "excerpt",
    "find_json_start",
    "strip_preamble",
]
