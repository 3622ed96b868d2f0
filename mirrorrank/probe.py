from __future__ import annotations

import asyncio
import time
from typing import List, Optional, Sequence

import httpx
from loguru import logger

from .config import (
    HTTP_USER_AGENT,
    PROBE_CONNECT_TIMEOUT,
    PROBE_PATH,
    PROBE_READ_TIMEOUT,
    Candidate,
)
from .pipeline_types import ProbeOutcome


def probe_target(base_url: str, probe_path: str = PROBE_PATH) -> str:
    """Mirror base URL + the well-known probe file."""
    if not base_url.endswith("/"):
        base_url += "/"
    return base_url + probe_path.lstrip("/")


def _probe_client(timeout: float) -> httpx.AsyncClient:
    # no pool cap: every probe gets its own connection right away, so time
    # spent waiting for a free slot never counts as mirror latency
    return httpx.AsyncClient(
        headers={"User-Agent": HTTP_USER_AGENT},
        timeout=httpx.Timeout(PROBE_READ_TIMEOUT, connect=timeout),
        limits=httpx.Limits(max_connections=None, max_keepalive_connections=None),
        follow_redirects=True,
    )


async def probe_one(
    client: httpx.AsyncClient,
    candidate: Candidate,
    probe_path: str = PROBE_PATH,
) -> ProbeOutcome:
    """
    Time a single GET of the probe file, start of request to full body.

    Redirects are followed, so the time covers the final response. Transport
    errors, timeouts and any non-2xx final status become a failed outcome.
    Anything that is not an httpx error propagates.
    """
    url = probe_target(candidate.base_url, probe_path)
    t0 = time.perf_counter()
    try:
        r = await client.get(url, follow_redirects=True)
        elapsed_ms = (time.perf_counter() - t0) * 1000.0
    except (httpx.HTTPError, httpx.InvalidURL) as e:
        logger.debug("Probe failed for {}: {!r}", url, e)
        return ProbeOutcome(candidate=candidate, succeeded=False, error=repr(e))

    if not r.is_success:
        logger.debug("Probe got HTTP {} for {}", r.status_code, url)
        return ProbeOutcome(candidate=candidate, succeeded=False, error=f"HTTP {r.status_code}")

    logger.debug("Probe {} took {:.1f} ms", url, elapsed_ms)
    return ProbeOutcome(candidate=candidate, succeeded=True, elapsed_ms=elapsed_ms)


async def probe_all(
    candidates: Sequence[Candidate],
    timeout: float = PROBE_CONNECT_TIMEOUT,
    *,
    client: Optional[httpx.AsyncClient] = None,
    probe_path: str = PROBE_PATH,
) -> List[ProbeOutcome]:
    """
    Probe every candidate concurrently and wait for all of them.

    Returns one outcome per candidate, ``outcomes[i]`` for ``candidates[i]``,
    whatever order the probes finish in. ``timeout`` bounds connection
    establishment of each request. When ``client`` is given it is used as-is
    (and left open); otherwise a client is created for this call.
    """
    if timeout <= 0:
        raise ValueError("timeout must be > 0")
    if not candidates:
        return []

    logger.info("Probing {} mirrors (connect timeout {}s)", len(candidates), timeout)

    if client is not None:
        outcomes = await asyncio.gather(*(probe_one(client, c, probe_path) for c in candidates))
    else:
        async with _probe_client(timeout) as own_client:
            outcomes = await asyncio.gather(
                *(probe_one(own_client, c, probe_path) for c in candidates)
            )

    ok = sum(1 for o in outcomes if o.succeeded)
    logger.info("Probing complete: {} ok, {} failed", ok, len(outcomes) - ok)
    return list(outcomes)
