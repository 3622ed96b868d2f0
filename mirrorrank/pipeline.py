"""
End-to-end ranking: filter -> (probe ->) score -> rank -> render.

- Normal mode probes every eligible mirror once, scores successful probes
  with the latency/score blend and drops anything at or below ``min_rank``.
- Fast mode never touches the network; it ranks by ``1 / score`` with no cutoff.
- Failed probes simply have no entry in the output.
"""

from __future__ import annotations

import asyncio
from typing import Iterable, List, Optional, Sequence

import httpx
from loguru import logger

from .catalog_filter import filter_candidates
from .config import MIN_RANK, PROBE_CONNECT_TIMEOUT, Candidate
from .output import render, render_server_line
from .pipeline_types import RankedEntry
from .probe import probe_all
from .ranker import rank_entries
from .scoring import fast_score, weighted_score


def _fast_entries(candidates: Sequence[Candidate]) -> List[RankedEntry]:
    entries: List[RankedEntry] = []
    for c in candidates:
        if c.prior_score == 0:
            # 1/score is undefined here
            logger.warning("Skipping {} in fast mode: mirror score is 0", c.base_url)
            continue
        entries.append(
            RankedEntry(
                rendered_url=render_server_line(c.base_url),
                rank=fast_score(c.prior_score),
                base_url=c.base_url,
            )
        )
    return entries


async def _probed_entries(
    candidates: Sequence[Candidate],
    timeout: float,
    client: Optional[httpx.AsyncClient],
) -> List[RankedEntry]:
    outcomes = await probe_all(candidates, timeout, client=client)

    entries: List[RankedEntry] = []
    for o in outcomes:
        if not o.succeeded:
            continue
        entries.append(
            RankedEntry(
                rendered_url=render_server_line(o.candidate.base_url),
                rank=weighted_score(o.candidate.prior_score, o.elapsed_ms),
                base_url=o.candidate.base_url,
            )
        )
    return entries


async def score_candidates(
    candidates: Sequence[Candidate],
    fast_mode: bool = False,
    timeout: float = PROBE_CONNECT_TIMEOUT,
    client: Optional[httpx.AsyncClient] = None,
) -> List[RankedEntry]:
    """Unsorted entries for already-filtered candidates."""
    if fast_mode:
        return _fast_entries(candidates)
    return await _probed_entries(candidates, timeout, client)


async def run_pipeline(
    catalog: Iterable[Candidate],
    fast_mode: bool = False,
    timeout: float = PROBE_CONNECT_TIMEOUT,
    min_rank: float = MIN_RANK,
    client: Optional[httpx.AsyncClient] = None,
) -> List[str]:
    """
    Rank a raw catalog and return mirrorlist lines, best first.
    ``min_rank`` applies in normal mode only.
    """
    eligible = filter_candidates(catalog)
    entries = await score_candidates(eligible, fast_mode=fast_mode, timeout=timeout, client=client)
    ranked = rank_entries(entries, None if fast_mode else min_rank)

    if ranked:
        logger.info("Top mirror: {} (rank={:.4f})", ranked[0].base_url, ranked[0].rank)
    else:
        logger.warning("No mirrors left after ranking")
    return render(ranked)


def rank_mirrors(
    catalog: Iterable[Candidate],
    fast_mode: bool = False,
    timeout: float = PROBE_CONNECT_TIMEOUT,
    min_rank: float = MIN_RANK,
) -> List[str]:
    """Synchronous entry point around :func:`run_pipeline`."""
    return asyncio.run(
        run_pipeline(catalog, fast_mode=fast_mode, timeout=timeout, min_rank=min_rank)
    )
