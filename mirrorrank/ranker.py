from __future__ import annotations

import math
from typing import Iterable, List, Optional

from loguru import logger

from .config import MIN_RANK
from .errors import PreconditionViolation
from .pipeline_types import RankedEntry


def rank_entries(
    entries: Iterable[RankedEntry],
    min_rank: Optional[float] = MIN_RANK,
) -> List[RankedEntry]:
    """
    Drop entries with ``rank <= min_rank`` and sort the rest best-first.

    ``min_rank=None`` keeps everything (fast mode). The sort is stable, so
    equal ranks keep their input order.
    """
    entries = list(entries)
    for e in entries:
        if math.isnan(e.rank):
            raise PreconditionViolation(f"NaN rank for {e.base_url or e.rendered_url}")

    if min_rank is not None:
        kept = [e for e in entries if e.rank > min_rank]
        logger.info("Rank cutoff {}: kept {} of {} mirrors", min_rank, len(kept), len(entries))
    else:
        kept = entries

    return sorted(kept, key=lambda e: e.rank, reverse=True)
