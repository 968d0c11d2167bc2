# core/retry.py
"""Bounded retry with a pluggable backoff schedule."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import TypeVar

import structlog

from core.exceptions import TransientProviderError

logger = structlog.get_logger(__name__)

T = TypeVar("T")

SleepFunc = Callable[[float], Awaitable[None]]


def linear_backoff(step_seconds: float) -> Callable[[int], float]:
    """Return a schedule waiting ``attempt * step_seconds`` after each failure."""

    def _delay(attempt: int) -> float:
        return attempt * step_seconds

    return _delay


@dataclass(frozen=True)
class RetryPolicy:
    """How many times to try, how long to wait, and which errors qualify."""

    max_attempts: int = 3
    backoff: Callable[[int], float] = field(default=linear_backoff(2.0))
    retry_on: tuple[type[BaseException], ...] = (TransientProviderError,)


async def retry_async(
    operation: Callable[[], Awaitable[T]],
    policy: RetryPolicy,
    *,
    sleep: SleepFunc = asyncio.sleep,
    description: str = "operation",
) -> T:
    """Run ``operation`` until it succeeds or the policy gives up.

    Only exceptions listed in ``policy.retry_on`` are retried; anything else
    propagates immediately. When the last attempt fails with a retryable error
    that error is re-raised.
    """
    if policy.max_attempts < 1:
        raise ValueError("max_attempts must be at least 1")

    for attempt in range(1, policy.max_attempts + 1):
        try:
            return await operation()
        except policy.retry_on as exc:
            if attempt >= policy.max_attempts:
                logger.warning(
                    f"{description}: giving up after {attempt} attempts.",
                    error=str(exc),
                )
                raise
            delay = policy.backoff(attempt)
            logger.info(
                f"{description}: attempt {attempt}/{policy.max_attempts} failed "
                f"({type(exc).__name__}). Retrying in {delay:.2f} seconds."
            )
            await sleep(delay)
    raise AssertionError("unreachable")  # pragma: no cover
