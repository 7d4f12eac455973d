from __future__ import annotations

import asyncio
import logging
import time

import httpx

from loadprobe.config import RunConfig
from loadprobe.loadgen.client import build_client
from loadprobe.loadgen.worker import run_worker
from loadprobe.metrics import AggregateResult, Outcome

logger = logging.getLogger(__name__)

# Outcome queue capacity per worker.
QUEUE_SLACK = 100


async def run_load(
    config: RunConfig,
    *,
    client: httpx.AsyncClient | None = None,
) -> AggregateResult:
    """Run ``config.concurrency`` workers until the shared deadline and fold
    every outcome into one :class:`AggregateResult`.

    The returned result is frozen; its ``duration_sec`` is the measured span
    of the run, which can exceed the configured duration.
    """
    loop = asyncio.get_running_loop()
    result = AggregateResult()
    started = time.perf_counter()
    deadline = loop.time() + config.duration_sec
    queue: asyncio.Queue[Outcome | None] = asyncio.Queue(maxsize=config.concurrency * QUEUE_SLACK)

    owns_client = client is None
    if client is None:
        client = build_client(config)

    logger.info(
        f"Starting run: {config.method} {config.url} | "
        f"concurrency={config.concurrency} duration={config.duration_sec}s timeout={config.timeout_sec}s"
    )
    workers: list[asyncio.Task[int]] = []
    watcher: asyncio.Task[None] | None = None
    try:
        workers = [
            asyncio.create_task(
                run_worker(client, config.method, config.url, deadline, queue, worker_id=i),
                name=f"loadprobe-worker-{i}",
            )
            for i in range(config.concurrency)
        ]
        watcher = asyncio.create_task(_close_when_done(workers, queue), name="loadprobe-watcher")

        while True:
            outcome = await queue.get()
            if outcome is None:
                break
            result.record(outcome)

        await watcher
    finally:
        # Only reached with live tasks when collection was cancelled or failed.
        pending = [task for task in (*workers, watcher) if task is not None and not task.done()]
        for task in pending:
            task.cancel()
        if pending:
            await asyncio.gather(*pending, return_exceptions=True)
        if owns_client:
            await client.aclose()

    result.freeze(time.perf_counter() - started)
    logger.info(
        f"Run finished: {result.total} requests, {result.succeeded} succeeded, "
        f"{result.failed} failed in {result.duration_sec:.3f}s"
    )
    return result


async def _close_when_done(
    workers: list[asyncio.Task[int]],
    queue: asyncio.Queue[Outcome | None],
) -> None:
    # The sentinel goes in only after every worker has stopped sending.
    outcomes = await asyncio.gather(*workers, return_exceptions=True)
    await queue.put(None)

    failure: BaseException | None = None
    for worker_id, outcome in enumerate(outcomes):
        if isinstance(outcome, BaseException):
            logger.error(f"Worker {worker_id} crashed", exc_info=outcome)
            failure = failure or outcome
        else:
            logger.debug(f"Worker {worker_id} delivered {outcome} outcomes")
    if failure is not None:
        raise failure


def run(config: RunConfig) -> AggregateResult:
    return asyncio.run(run_load(config))
