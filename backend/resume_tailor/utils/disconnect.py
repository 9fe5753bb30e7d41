"""
Abandon in-flight work when the HTTP client goes away.

Starlette keeps running a handler after the client disconnects; for a flow
that spends quota on a generation call that is pure waste, so the flow runs
as a task that is cancelled as soon as a disconnect is observed.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, TypeVar

from fastapi import Request

from resume_tailor.utils.errors import ClientDisconnected

logger = logging.getLogger(__name__)

T = TypeVar("T")

DISCONNECT_POLL_SECONDS = 0.5


async def run_until_disconnected(
    request: Request,
    work: Awaitable[T],
    *,
    poll_interval: float = DISCONNECT_POLL_SECONDS,
) -> T:
    """Await ``work``; cancel it and raise ClientDisconnected if the client leaves first."""
    work_task = asyncio.ensure_future(work)
    watcher = asyncio.ensure_future(_wait_for_disconnect(request, poll_interval))
    try:
        await asyncio.wait({work_task, watcher}, return_when=asyncio.FIRST_COMPLETED)
        if work_task.done():
            return work_task.result()

        logger.warning(f"Client disconnected from {request.url.path}; cancelling in-flight work")
        work_task.cancel()
        try:
            await work_task
        except asyncio.CancelledError:
            pass
        raise ClientDisconnected()
    finally:
        watcher.cancel()
        if not work_task.done():
            work_task.cancel()


async def _wait_for_disconnect(request: Request, poll_interval: float) -> None:
    while not await request.is_disconnected():
        await asyncio.sleep(poll_interval)
