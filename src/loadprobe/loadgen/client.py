from __future__ import annotations

import httpx

from loadprobe.config import RunConfig


def build_client(config: RunConfig) -> httpx.AsyncClient:
    """One pooled client per run, shared by every worker."""
    limits = httpx.Limits(
        max_connections=config.concurrency,
        max_keepalive_connections=config.concurrency,
    )
    return httpx.AsyncClient(
        limits=limits,
        timeout=httpx.Timeout(config.timeout_sec),
        follow_redirects=False,
    )


def describe_error(method: str, url: str, exc: BaseException) -> str:
    # Keyed verbatim in the error histogram. httpx often wraps the socket error
    # in an exception with no message of its own.
    text = _error_text(exc)
    if text:
        return f"{method} {url}: {type(exc).__name__}: {text}"
    return f"{method} {url}: {type(exc).__name__}"


def _error_text(exc: BaseException) -> str:
    seen: set[int] = set()
    current: BaseException | None = exc
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        text = str(current)
        if text:
            return text
        current = current.__cause__ or current.__context__
    return ""
