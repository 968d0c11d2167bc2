# orchestration/fallback_chain.py
"""Run an ordered list of resolution stages until one produces a result."""

from __future__ import annotations

import asyncio
import time
from collections.abc import Sequence
from typing import Generic, Protocol, TypeVar

import structlog

logger = structlog.get_logger(__name__)

RequestT = TypeVar("RequestT")
ResultT = TypeVar("ResultT")
RequestT_contra = TypeVar("RequestT_contra", contravariant=True)
ResultT_co = TypeVar("ResultT_co", covariant=True)


class Stage(Protocol[RequestT_contra, ResultT_co]):
    """One strategy in a fallback chain."""

    name: str

    async def try_resolve(self, request: RequestT_contra) -> ResultT_co | None: ...


class TerminalStage(Protocol[RequestT_contra, ResultT_co]):
    """The last strategy of a chain. It always returns a value."""

    name: str

    async def resolve(self, request: RequestT_contra) -> ResultT_co: ...


class FallbackChain(Generic[RequestT, ResultT]):
    """Try each stage in order; the terminal stage guarantees an answer.

    Stages run strictly one after another. A stage that raises is logged and
    treated as having produced nothing. When ``deadline_seconds`` is set the
    non-terminal stages share that budget; a stage still running when it
    expires is cancelled and the chain jumps to the terminal stage.
    """

    def __init__(
        self,
        name: str,
        stages: Sequence[Stage[RequestT, ResultT]],
        terminal: TerminalStage[RequestT, ResultT],
        deadline_seconds: float | None = None,
    ) -> None:
        self.name = name
        self.stages = list(stages)
        self.terminal = terminal
        self.deadline_seconds = deadline_seconds

    async def resolve(self, request: RequestT) -> ResultT:
        started = time.monotonic()
        for stage in self.stages:
            remaining = self._remaining(started)
            if remaining is not None and remaining <= 0:
                logger.warning(
                    f"[{self.name}] Deadline reached; skipping remaining stages.",
                    skipped_from=stage.name,
                )
                break
            result = await self._run_stage(stage, request, remaining)
            if result is not None:
                logger.info(f"[{self.name}] Resolved by stage '{stage.name}'.")
                return result
            logger.info(f"[{self.name}] Stage '{stage.name}' produced no result.")

        logger.info(f"[{self.name}] Falling back to '{self.terminal.name}'.")
        return await self.terminal.resolve(request)

    def _remaining(self, started: float) -> float | None:
        if self.deadline_seconds is None:
            return None
        return self.deadline_seconds - (time.monotonic() - started)

    async def _run_stage(
        self,
        stage: Stage[RequestT, ResultT],
        request: RequestT,
        timeout: float | None,
    ) -> ResultT | None:
        try:
            if timeout is None:
                return await stage.try_resolve(request)
            return await asyncio.wait_for(stage.try_resolve(request), timeout=timeout)
        except asyncio.TimeoutError:
            logger.warning(
                f"[{self.name}] Stage '{stage.name}' cancelled at the request deadline."
            )
        except Exception as exc:
            logger.error(
                f"[{self.name}] Stage '{stage.name}' failed unexpectedly: {exc}",
                exc_info=True,
            )
        return None
