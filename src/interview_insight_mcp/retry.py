"""Geometric backoff retry for transient Gemini API errors."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import TypeVar

from .config import get_config

logger = logging.getLogger(__name__)

T = TypeVar("T")

_RETRYABLE_PATTERNS: tuple[str, ...] = (
    "429",
    "503",
    "overloaded",
    "resource",
    "quota",
    "exhausted",
)


def _is_retryable(exc: Exception) -> bool:
    """Check if an exception message matches known transient patterns."""
    msg = str(exc).lower()
    return any(p in msg for p in _RETRYABLE_PATTERNS)


def backoff_delays(max_attempts: int, base_delay: float, factor: float) -> list[float]:
    """Return the waits between ``max_attempts`` attempts (one fewer than attempts)."""
    return [base_delay * factor**i for i in range(max(max_attempts - 1, 0))]


async def with_retry(coro_factory: Callable[[], Awaitable[T]]) -> T:
    """Execute an async callable, retrying transient errors with geometric backoff.

    The first wait is ``retry_base_delay`` seconds and each later wait is
    multiplied by ``retry_backoff_factor``. There is no jitter and no cap.

    Args:
        coro_factory: Zero-arg callable that returns a fresh awaitable each attempt.

    Returns:
        The result of the first successful call.

    Raises:
        The last exception if all attempts are exhausted or non-retryable.
    """
    cfg = get_config()
    max_attempts = cfg.retry_max_attempts
    delays = backoff_delays(max_attempts, cfg.retry_base_delay, cfg.retry_backoff_factor)

    last_exc: Exception | None = None
    for attempt in range(max_attempts):
        try:
            return await coro_factory()
        except Exception as exc:
            last_exc = exc
            if not _is_retryable(exc) or attempt == max_attempts - 1:
                raise
            delay = delays[attempt]
            logger.warning(
                "Model overloaded or rate limited. Retrying in %.2fs (attempts left: %d): %s",
                delay,
                max_attempts - attempt - 1,
                exc,
            )
            await asyncio.sleep(delay)
    raise last_exc  # unreachable but satisfies type checker
