# orchestration/stages.py
"""Concrete stages for the analysis and path-expansion fallback chains."""

from __future__ import annotations

import structlog

from core.llm_interface import ProviderAdapter
from models import AnalysisRequest, AnalysisResult, ExpansionRequest, ExpansionResult
from processing.response_parser import parse_analysis_response
from processing.template_synthesizer import synthesize_analysis

logger = structlog.get_logger(__name__)

EXPANSION_CONTINUATION = (
    "The consequences of this choice ripple through the story, revealing new "
    "truths and challenging everything the characters thought they knew."
)


class ProviderAnalysisStage:
    """Ask one provider for an analysis and validate what comes back."""

    def __init__(self, provider: ProviderAdapter, max_entities: int) -> None:
        self.provider = provider
        self.max_entities = max_entities
        self.name = f"{provider.name}-analysis"

    async def try_resolve(self, request: AnalysisRequest) -> AnalysisResult | None:
        if not self.provider.is_available:
            logger.debug(f"Provider '{self.provider.name}' unavailable; not attempted.")
            return None
        raw = await self.provider.generate_analysis(request)
        result = parse_analysis_response(raw, self.max_entities)
        if result is None:
            return None
        return result.model_copy(update={"source": "ai"})


class TemplateAnalysisStage:
    name = "template-analysis"

    def __init__(self, max_entities: int) -> None:
        self.max_entities = max_entities

    async def resolve(self, request: AnalysisRequest) -> AnalysisResult:
        return synthesize_analysis(request, self.max_entities)


class ProviderExpansionStage:
    """Ask one provider to expand a chosen path into a short preview."""

    def __init__(self, provider: ProviderAdapter) -> None:
        self.provider = provider
        self.name = f"{provider.name}-expansion"

    async def try_resolve(self, request: ExpansionRequest) -> ExpansionResult | None:
        if not self.provider.is_available:
            logger.debug(f"Provider '{self.provider.name}' unavailable; not attempted.")
            return None
        preview = await self.provider.expand_path(request)
        if preview is None or not preview.strip():
            return None
        return ExpansionResult(preview=preview.strip(), source="ai")


def static_preview(path_name: str, path_description: str) -> str:
    description = path_description.strip().lower().rstrip(".")
    return f"{path_name} unfolds as {description}. {EXPANSION_CONTINUATION}"


class StaticExpansionStage:
    name = "static-expansion"

    async def resolve(self, request: ExpansionRequest) -> ExpansionResult:
        return ExpansionResult(
            preview=static_preview(request.path_name, request.path_description),
            source="template",
        )
