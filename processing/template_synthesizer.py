# processing/template_synthesizer.py
"""Deterministic story analysis used when no provider produced a result."""

from __future__ import annotations

import structlog

from models import AnalysisRequest, AnalysisResult, Direction
from processing.entity_extractor import MAX_ENTITIES, extract_entities
from processing.keyword_classifier import detect_genre, detect_tone

logger = structlog.get_logger(__name__)

DEFAULT_LEAD = "The protagonist"
DEFAULT_TEMPLATE_KEY = "default"

# "{entity}" is replaced with the lead entity name.
DIRECTION_TEMPLATES: dict[str, tuple[tuple[str, str], ...]] = {
    "Fantasy": (
        ("The Chosen Path", "{entity} discovers the prophecy was meant for someone else entirely"),
        ("The Betrayer's Path", "A trusted ally reveals a secret allegiance to the enemy forces"),
        ("The Forbidden Path", "{entity} unlocks ancient magic at the cost of their memories"),
    ),
    "Sci-Fi": (
        ("The Override Path", "{entity} discovers they can rewrite the system's core protocols"),
        ("The Signal Path", "A mysterious transmission reveals another consciousness within the network"),
        ("The Glitch Path", "{entity} realizes the simulation has been running their decisions in reverse"),
    ),
    "Horror": (
        ("The Descent", "{entity} follows the sounds deeper into the darkness against all reason"),
        ("The Mirror's Truth", "The reflection begins moving independently, revealing a darker version"),
        ("The Escape", "{entity} finds a way out only to realize they were never truly trapped"),
    ),
    "Thriller": (
        ("The Hunter's Path", "{entity} turns from prey to predator, setting a trap for the pursuer"),
        ("The Insider", "The real threat is revealed to come from within their own circle"),
        ("The Clock Path", "A countdown begins that forces an impossible choice between two lives"),
    ),
    "Drama": (
        ("The Confession", "{entity} finally speaks the truth that has been weighing on them"),
        ("The Departure", "Someone leaves without warning, forcing everyone to confront what was unsaid"),
        ("The Return", "A figure from the past reappears, reopening old wounds and old hopes"),
    ),
    DEFAULT_TEMPLATE_KEY: (
        ("The Revelation", "{entity} uncovers a truth that changes everything they believed"),
        ("The Alliance", "An unlikely partnership forms to face a shared and growing threat"),
        ("The Sacrifice", "{entity} must give up something precious to protect what matters most"),
    ),
}


def build_directions(genre: str, entity: str) -> list[Direction]:
    """Fill the genre's direction templates, or the default set, with ``entity``."""
    templates = DIRECTION_TEMPLATES.get(genre, DIRECTION_TEMPLATES[DEFAULT_TEMPLATE_KEY])
    return [
        Direction(name=name, description=description.format(entity=entity))
        for name, description in templates
    ]


def narrative_bridge(entity: str) -> str:
    return f"{entity}'s story reaches a critical turning point. Three paths lie ahead:"


def synthesize_analysis(
    request: AnalysisRequest, max_entities: int = MAX_ENTITIES
) -> AnalysisResult:
    """Build a complete analysis from keyword tables and canned templates."""
    corpus = request.corpus()
    genre = detect_genre(corpus)
    tone = detect_tone(corpus)
    entities = extract_entities(corpus, limit=min(max_entities, MAX_ENTITIES))
    lead = entities[0] if entities else DEFAULT_LEAD

    logger.info(
        "Template analysis synthesized.",
        genre=genre,
        tone=tone,
        entity_count=len(entities),
    )
    return AnalysisResult(
        genre=genre,
        tone=tone,
        key_entities=entities,
        narrative_bridge=narrative_bridge(lead),
        directions=build_directions(genre, lead),
        source="template",
    )
