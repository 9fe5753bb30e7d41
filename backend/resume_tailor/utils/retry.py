"""Bounded retry with jitter for transport-level failures of outbound HTTP calls."""

from __future__ import annotations

import asyncio
import logging
import random
from dataclasses import dataclass
from typing import Awaitable, Callable, TypeVar

import httpx

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class RetryConfig:
    """Configuration for retry behavior."""

    max_retries: int = 0
    base_delay: float = 0.5
    jitter_factor: float = 0.2  # ±20% random variation


def is_transient_error(error: BaseException) -> bool:
    """
    Only transport failures (connection reset, refused, DNS, read errors) are
    transient. Timeouts are excluded: the caller already waited the full budget.
    HTTP status errors are never transient here.
    """
    return isinstance(error, httpx.TransportError) and not isinstance(error, httpx.TimeoutException)


async def retry_transport(
    func: Callable[[], Awaitable[T]],
    config: RetryConfig,
    *,
    label: str = "request",
) -> T:
    """
    Await ``func()``, retrying up to ``config.max_retries`` extra times on
    transient transport errors. Anything else propagates immediately.
    """
    attempts = config.max_retries + 1
    for attempt in range(attempts):
        try:
            return await func()
        except asyncio.CancelledError:
            raise
        except Exception as e:
            if not is_transient_error(e) or attempt == attempts - 1:
                raise

            base = config.base_delay * (2**attempt)
            jitter = base * config.jitter_factor * (2 * random.random() - 1)
            delay = max(0.0, base + jitter)
            logger.warning(
                f"{label} attempt {attempt + 1}/{attempts} failed: {type(e).__name__}: {e}. "
                f"Retrying in {delay:.2f}s..."
            )
            await asyncio.sleep(delay)

    raise RuntimeError("unreachable")  # pragma: no cover
