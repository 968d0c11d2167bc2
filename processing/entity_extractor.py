# processing/entity_extractor.py
"""Lightweight proper-noun detection for story text."""

from __future__ import annotations

import re

MAX_ENTITIES = 8

# A capitalized word of three or more letters after whitespace, a quote,
# an opening parenthesis or an opening bracket.
_CAPITALIZED_WORD = re.compile(r"(?<=[\s\"'(\[])([A-Z][a-z]{2,})")
_LEADING_WORD = re.compile(r"^([A-Z][a-z]{2,})")

STOP_WORDS = frozenset(
    {
        "The", "This", "That", "Then", "They", "There", "Their", "These",
        "Those", "When", "Where", "What", "Which", "While", "With", "After",
        "Before", "Because", "Since", "About", "From", "Into", "Through",
        "During", "Without", "Between", "Each", "Every", "Some", "Many",
        "Most", "Other", "Another", "Such", "Only", "Just", "Also", "Even",
        "Still", "Already", "Here", "Never", "Always", "Sometimes", "Perhaps",
        "Maybe", "However", "Although", "Though", "But", "And", "For", "Not",
        "She", "His", "Her", "Its", "Our", "Has", "Had", "Was", "Were", "Are",
        "Been", "Being", "Have", "Did", "Does", "Could", "Would", "Should",
        "Must", "Shall", "Will", "May", "Might", "Like", "Okay", "Either",
        "Outside", "Inside", "Below", "Above", "Near", "Except",
    }
)


def extract_entities(text: str, limit: int = MAX_ENTITIES) -> list[str]:
    """Return up to ``limit`` candidate proper nouns in first-seen order.

    Words inside the text are scanned first; the opening word of the text is
    considered last, since it is capitalized whether or not it is a name.
    """
    seen: dict[str, None] = {}
    for match in _CAPITALIZED_WORD.finditer(text):
        word = match.group(1)
        if word not in STOP_WORDS:
            seen.setdefault(word, None)

    if len(text) > 3:
        leading = _LEADING_WORD.match(text.strip())
        if leading and leading.group(1) not in STOP_WORDS:
            seen.setdefault(leading.group(1), None)

    return list(seen)[:limit]
