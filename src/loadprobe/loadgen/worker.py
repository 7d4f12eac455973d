from __future__ import annotations

import asyncio
import logging
import time

import httpx

from loadprobe.loadgen.client import describe_error
from loadprobe.metrics import Outcome

logger = logging.getLogger(__name__)

OutcomeSink = asyncio.Queue

DEADLINE_EXCEEDED = "run deadline exceeded"


async def run_worker(
    client: httpx.AsyncClient,
    method: str,
    url: str,
    deadline: float,
    sink: OutcomeSink,
    *,
    worker_id: int = 0,
) -> int:
    """Send requests back to back until ``deadline`` (event loop clock).

    Returns the number of outcomes delivered to ``sink``.
    """
    loop = asyncio.get_running_loop()
    delivered = 0
    while loop.time() < deadline:
        start = time.perf_counter()
        try:
            request = client.build_request(method, url)
        except (httpx.InvalidURL, ValueError) as exc:
            if loop.time() >= deadline:
                return delivered
            outcome = Outcome(
                elapsed_sec=time.perf_counter() - start,
                error=describe_error(method, url, exc),
            )
        else:
            try:
                async with asyncio.timeout_at(deadline):
                    # send() reads the whole body and releases the connection.
                    response = await client.send(request)
            except TimeoutError:
                logger.debug(f"Worker {worker_id}: in-flight request cut off by run deadline")
                cut_off = Outcome(
                    elapsed_sec=time.perf_counter() - start,
                    error=describe_error(method, url, TimeoutError(DEADLINE_EXCEEDED)),
                )
                if await deliver(sink, cut_off, deadline):
                    delivered += 1
                return delivered
            except httpx.HTTPError as exc:
                outcome = Outcome(
                    elapsed_sec=time.perf_counter() - start,
                    error=describe_error(method, url, exc),
                )
            else:
                outcome = Outcome(
                    elapsed_sec=time.perf_counter() - start,
                    status_code=response.status_code,
                )

        if not await deliver(sink, outcome, deadline):
            logger.debug(f"Worker {worker_id}: outcome dropped, queue full at deadline")
            return delivered
        delivered += 1
    return delivered


async def deliver(sink: OutcomeSink, outcome: Outcome, deadline: float) -> bool:
    """Best-effort put: wait for space only until the run deadline."""
    try:
        sink.put_nowait(outcome)
        return True
    except asyncio.QueueFull:
        pass
    try:
        async with asyncio.timeout_at(deadline):
            await sink.put(outcome)
    except TimeoutError:
        return False
    return True
