# processing/keyword_classifier.py
"""Keyword scoring used to guess a story's genre and tone without an LLM."""

from __future__ import annotations

from collections.abc import Mapping

DEFAULT_GENRE = "Drama"
DEFAULT_TONE = "Neutral"

# Declaration order matters: on equal scores the earlier entry wins.
GENRE_KEYWORDS: dict[str, tuple[str, ...]] = {
    "Fantasy": (
        "dragon", "wizard", "magic", "kingdom", "sword", "spell", "throne",
        "castle", "prophecy", "quest", "warrior", "knight", "curse",
    ),
    "Sci-Fi": (
        "spaceship", "galaxy", "robot", "android", "planet", "alien", "quantum",
        "starship", "code", "simulation", "matrix", "program", "system", "grid",
        "node", "cursor", "root", "access", "hack", "digital", "console",
        "algorithm", "terminal", "data",
    ),
    "Horror": (
        "blood", "scream", "shadow", "ghost", "dead", "terror", "nightmare",
        "monster", "demon", "haunted", "dark",
    ),
    "Romance": (
        "love", "heart", "kiss", "passion", "embrace", "desire", "romance",
        "beloved", "longing", "wedding",
    ),
    "Thriller": (
        "chase", "escape", "gun", "danger", "suspect", "detective", "crime",
        "murder", "spy", "assassin", "bomb",
    ),
    "Mystery": (
        "clue", "mystery", "secret", "hidden", "disappear", "puzzle", "riddle",
        "detective", "cryptic", "investigate",
    ),
    "Adventure": (
        "journey", "explore", "treasure", "map", "expedition", "discover",
        "wilderness", "mountain", "brave",
    ),
    "Drama": (
        "family", "struggle", "emotion", "conflict", "relationship", "betrayal",
        "forgive", "grief", "sacrifice", "choice",
    ),
}

TONE_KEYWORDS: dict[str, tuple[str, ...]] = {
    "Dark": (
        "shadow", "blood", "death", "darkness", "grim", "cold", "despair",
        "sinister",
    ),
    "Suspenseful": (
        "suddenly", "watched", "silence", "waiting", "nervous", "tense",
        "frozen", "suspended", "stopped", "pause",
    ),
    "Emotional": (
        "tears", "cry", "heart", "pain", "loss", "remember", "lonely", "hope",
        "scared", "scariest",
    ),
    "Epic": (
        "destiny", "kingdom", "war", "battle", "glory", "legend", "army",
        "throne", "empire",
    ),
    "Lighthearted": (
        "smile", "laugh", "bright", "cheerful", "warm", "happy", "playful",
    ),
}


def score_categories(
    text: str, table: Mapping[str, tuple[str, ...]]
) -> dict[str, int]:
    """Score each category by how many of its keywords appear in ``text``.

    A keyword counts once however often it repeats.
    """
    lowered = text.lower()
    return {
        category: sum(1 for keyword in keywords if keyword.lower() in lowered)
        for category, keywords in table.items()
    }


def classify(
    text: str, table: Mapping[str, tuple[str, ...]], default: str
) -> str:
    """Return the category with the strictly highest score, or ``default``."""
    best = default
    best_score = 0
    for category, score in score_categories(text, table).items():
        if score > best_score:
            best, best_score = category, score
    return best


def detect_genre(text: str) -> str:
    return classify(text, GENRE_KEYWORDS, DEFAULT_GENRE)


def detect_tone(text: str) -> str:
    return classify(text, TONE_KEYWORDS, DEFAULT_TONE)
