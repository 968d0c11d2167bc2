# orchestration/story_director.py
"""Entry point for story analysis and path expansion."""

from __future__ import annotations

from collections.abc import Sequence
from types import TracebackType

import httpx
import structlog

from config import ForkpointSettings
from core.llm_interface import ProviderAdapter, build_providers
from models import AnalysisRequest, AnalysisResult, ExpansionRequest, ExpansionResult
from orchestration.fallback_chain import FallbackChain
from orchestration.stages import (
    ProviderAnalysisStage,
    ProviderExpansionStage,
    StaticExpansionStage,
    TemplateAnalysisStage,
)

logger = structlog.get_logger(__name__)


class StoryDirector:
    """Resolve analysis and expansion requests through their fallback chains.

    Providers are tried in the order given, then the deterministic fallback.
    Neither public coroutine raises for provider problems.
    """

    def __init__(
        self,
        providers: Sequence[ProviderAdapter],
        max_entities: int = 8,
        deadline_seconds: float | None = None,
    ) -> None:
        self.providers = list(providers)
        self.analysis_chain: FallbackChain[AnalysisRequest, AnalysisResult] = (
            FallbackChain(
                "analysis",
                [ProviderAnalysisStage(p, max_entities) for p in self.providers],
                TemplateAnalysisStage(max_entities),
                deadline_seconds=deadline_seconds,
            )
        )
        self.expansion_chain: FallbackChain[ExpansionRequest, ExpansionResult] = (
            FallbackChain(
                "expansion",
                [ProviderExpansionStage(p) for p in self.providers],
                StaticExpansionStage(),
                deadline_seconds=deadline_seconds,
            )
        )
        available = [p.name for p in self.providers if p.is_available]
        logger.info(
            "StoryDirector initialized.",
            providers=[p.name for p in self.providers],
            available=available,
        )

    @classmethod
    def from_settings(
        cls, settings: ForkpointSettings, client: httpx.AsyncClient | None = None
    ) -> StoryDirector:
        return cls(
            build_providers(settings, client=client),
            max_entities=settings.MAX_KEY_ENTITIES,
            deadline_seconds=settings.REQUEST_DEADLINE_SECONDS,
        )

    async def analyze(self, request: AnalysisRequest) -> AnalysisResult:
        return await self.analysis_chain.resolve(request)

    async def expand_path(self, request: ExpansionRequest) -> ExpansionResult:
        return await self.expansion_chain.resolve(request)

    async def aclose(self) -> None:
        for provider in self.providers:
            await provider.aclose()

    async def __aenter__(self) -> StoryDirector:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()
