"""
Fault-tolerant decoder for LLM grading replies.

LLMs treat formatting instructions as a hint rather than a contract, so the
reply is decoded by an ordered chain of clean-up stages. Each stage builds on
the text produced by the previous one and is followed by a parse attempt; the
first stage that yields a JSON object wins. When every stage fails the parser
returns an empty dict and logs the intermediate texts, leaving the normalizer
to produce a default result.
"""

import json
import logging
import re
from collections.abc import Callable
from typing import Any, NamedTuple

logger = logging.getLogger(__name__)

_FENCE_OPEN = re.compile(r"^```[\w-]*[ \t]*\n?")
_FENCE_CLOSE = re.compile(r"\n?```\s*$")

_SMART_QUOTES = str.maketrans(
    {
        "\u201c": '"',
        "\u201d": '"',
        "\u2018": "'",
        "\u2019": "'",
    }
)

_ZERO_WIDTH = re.compile("[\u200b-\u200d\ufeff]")

_PICTOGRAPHS = re.compile("[\U0001f300-\U0001f9ff\u2600-\u26ff\u2700-\u27bf]")


class ParseOutcome(NamedTuple):
    """Decoded object and the stage that produced it (None on failure)."""

    data: dict[str, Any]
    stage: str | None


# ==============================================================================
# Text Transforms
# ==============================================================================


def strip_code_fence(text: str) -> str:
    """Remove a surrounding ``` fence, with or without a language tag."""
    cleaned = text.strip()
    if cleaned.startswith("```"):
        cleaned = _FENCE_OPEN.sub("", cleaned)
        cleaned = _FENCE_CLOSE.sub("", cleaned)
        cleaned = cleaned.strip()
    return cleaned


def normalize_quotes(text: str) -> str:
    """Replace typographic quotation marks with ASCII quotes."""
    return text.translate(_SMART_QUOTES)


def strip_invisible(text: str) -> str:
    """Drop a leading byte-order mark and zero-width characters."""
    return _ZERO_WIDTH.sub("", text.lstrip("\ufeff"))


def strip_pictographs(text: str) -> str:
    """Drop emoji and symbol characters that break escaping mid-string."""
    return _PICTOGRAPHS.sub("", text)


def extract_outer_braces(text: str) -> str | None:
    """Return the span from the first '{' to the last '}', if any."""
    start = text.find("{")
    end = text.rfind("}")
    if start == -1 or end <= start:
        return None
    return text[start : end + 1]


def _prepare(text: str) -> str:
    return normalize_quotes(strip_code_fence(text))


# Applied in order, each to the previous stage's output
_STAGES: tuple[tuple[str, Callable[[str], str | None]], ...] = (
    ("direct", _prepare),
    ("invisible", strip_invisible),
    ("pictographs", strip_pictographs),
    ("braces", extract_outer_braces),
)


# ==============================================================================
# Parsing
# ==============================================================================


def _try_load(text: str) -> dict[str, Any] | None:
    try:
        data = json.loads(text)
    except ValueError:
        return None
    if not isinstance(data, dict):
        return None
    return data


def parse_with_stage(raw_text: str | None) -> ParseOutcome:
    """
    Decode an LLM reply, reporting which stage succeeded.

    Args:
        raw_text: The raw text returned by the LLM.

    Returns:
        ParseOutcome with the decoded object, or an empty dict and
        stage None if no stage could decode it.
    """
    raw = raw_text or ""
    text = raw
    attempts: list[tuple[str, str]] = []

    for name, transform in _STAGES:
        transformed = transform(text)
        if transformed is None:
            logger.debug("Stage '%s' not applicable, skipping", name)
            continue

        text = transformed
        attempts.append((name, text))

        data = _try_load(text)
        if data is not None:
            if name != "direct":
                logger.debug("Response decoded at stage '%s'", name)
            return ParseOutcome(data, name)

        logger.debug("JSON decode failed at stage '%s'", name)

    logger.error(
        "Could not decode LLM response as JSON (raw length %d)\nraw: %r\n%s",
        len(raw),
        raw,
        "\n".join(f"{name} (length {len(cleaned)}): {cleaned!r}" for name, cleaned in attempts),
    )
    return ParseOutcome({}, None)


def parse_response(raw_text: str | None) -> dict[str, Any]:
    """
    Decode an LLM reply into a dict.

    Never raises; returns an empty dict when nothing can be decoded.
    """
    return parse_with_stage(raw_text).data
