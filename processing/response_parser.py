# processing/response_parser.py
"""Parse and normalize the JSON analysis returned by a provider."""

from __future__ import annotations

import json
import re
from typing import Any

import structlog

from core.exceptions import ResponseValidationError
from models import DIRECTION_COUNT, AnalysisResult, Direction
from processing.entity_extractor import MAX_ENTITIES
from processing.keyword_classifier import DEFAULT_GENRE, DEFAULT_TONE

logger = structlog.get_logger(__name__)

_LEADING_FENCE = re.compile(r"^```[A-Za-z0-9_+-]*[ \t]*\n?")
_TRAILING_FENCE = re.compile(r"\n?[ \t]*```$")


def strip_code_fences(text: str) -> str:
    """Remove one leading and one trailing markdown code fence, if present."""
    cleaned = text.strip()
    cleaned = _LEADING_FENCE.sub("", cleaned, count=1)
    cleaned = _TRAILING_FENCE.sub("", cleaned, count=1)
    return cleaned.strip()


def _text_field(data: dict[str, Any], key: str, default: str) -> str:
    value = data.get(key)
    if value is None:
        return default
    if not isinstance(value, str):
        raise ResponseValidationError(
            f"'{key}' should be a string, got {type(value).__name__}"
        )
    return value.strip() or default


def _entities(data: dict[str, Any], limit: int) -> list[str]:
    raw = data.get("key_entities")
    if raw is None:
        return []
    if not isinstance(raw, list):
        raise ResponseValidationError("'key_entities' should be a list")
    seen: dict[str, None] = {}
    for item in raw:
        if isinstance(item, str) and item.strip():
            seen.setdefault(item.strip(), None)
    return list(seen)[:limit]


def _directions(data: dict[str, Any]) -> list[Direction]:
    raw = data.get("directions")
    if not isinstance(raw, list):
        raise ResponseValidationError("'directions' is missing or not a list")

    directions: list[Direction] = []
    for item in raw:
        positional_name = f"Path {len(directions) + 1}"
        if isinstance(item, dict):
            description = item.get("description")
            name = item.get("name")
        elif isinstance(item, str):
            description, name = item, None
        else:
            logger.debug("Skipping direction with unsupported shape.", item=item)
            continue
        if not isinstance(description, str) or not description.strip():
            logger.debug("Skipping direction without a description.", item=item)
            continue
        if not isinstance(name, str) or not name.strip():
            name = positional_name
        directions.append(Direction(name=name.strip(), description=description.strip()))
    return directions


def parse_analysis_response(
    raw_text: str | None, max_entities: int = MAX_ENTITIES
) -> AnalysisResult | None:
    """Turn raw provider text into an ``AnalysisResult``.

    Returns None when the text is empty, is not a JSON object, or yields fewer
    than three usable directions. Extra directions are dropped in order.
    """
    if raw_text is None or not raw_text.strip():
        return None

    cleaned = strip_code_fences(raw_text)
    logger.debug(f"Parsing provider analysis: {cleaned[:300]}")

    try:
        data = json.loads(cleaned)
        if not isinstance(data, dict):
            raise ResponseValidationError(
                f"Expected a JSON object, got {type(data).__name__}"
            )
        directions = _directions(data)
        if len(directions) < DIRECTION_COUNT:
            raise ResponseValidationError(
                f"Provider returned fewer than {DIRECTION_COUNT} directions: "
                f"{len(directions)}"
            )
        return AnalysisResult(
            genre=_text_field(data, "genre_detected", DEFAULT_GENRE),
            tone=_text_field(data, "tone_detected", DEFAULT_TONE),
            key_entities=_entities(data, min(max_entities, MAX_ENTITIES)),
            narrative_bridge=_text_field(data, "narrative_bridge", ""),
            directions=directions[:DIRECTION_COUNT],
            source="ai",
        )
    except json.JSONDecodeError as exc:
        logger.warning(f"Provider analysis is not valid JSON: {exc}")
    except ResponseValidationError as exc:
        logger.warning(f"Provider analysis rejected: {exc}")
    except (ValueError, TypeError, RecursionError) as exc:
        logger.warning(f"Provider analysis could not be normalized: {exc}")
    return None
