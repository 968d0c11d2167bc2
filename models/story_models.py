# models/story_models.py
"""Request and result models exchanged with the story director."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

DIRECTION_COUNT = 3

ResultSource = Literal["ai", "template"]


class AnalysisRequest(BaseModel):
    """Story text submitted for analysis. Every field is optional."""

    full_context: str | None = None
    short_memory: str | None = None
    last_paragraph: str | None = None

    def corpus(self) -> str:
        """Join all fields into one searchable text, missing fields as ''."""
        return " ".join(
            part or "" for part in (self.full_context, self.short_memory, self.last_paragraph)
        )


class Direction(BaseModel):
    """One named branching continuation of a story."""

    model_config = ConfigDict(frozen=True)

    name: str
    description: str


class AnalysisResult(BaseModel):
    """Structured story direction suggestions.

    ``directions`` always holds exactly three entries, whichever stage
    produced the result.
    """

    genre: str = "Drama"
    tone: str = "Neutral"
    key_entities: list[str] = Field(default_factory=list, max_length=8)
    narrative_bridge: str = ""
    directions: list[Direction] = Field(
        min_length=DIRECTION_COUNT, max_length=DIRECTION_COUNT
    )
    source: ResultSource = "ai"


class ExpansionRequest(BaseModel):
    """A chosen direction to expand into a short preview."""

    story_context: str = ""
    path_name: str = ""
    path_description: str = ""

    @field_validator("story_context", "path_name", "path_description", mode="before")
    @classmethod
    def _none_to_empty(cls, value: Any) -> Any:
        return "" if value is None else value


class ExpansionResult(BaseModel):
    preview: str
    source: ResultSource = "ai"
