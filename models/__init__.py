"""Central package for Forkpoint data models."""

from .story_models import (
    DIRECTION_COUNT,
    AnalysisRequest,
    AnalysisResult,
    Direction,
    ExpansionRequest,
    ExpansionResult,
    ResultSource,
)

__all__ = [
    "DIRECTION_COUNT",
    "AnalysisRequest",
    "AnalysisResult",
    "Direction",
    "ExpansionRequest",
    "ExpansionResult",
    "ResultSource",
]
