"""
Rank values for mirrors.

Normal mode blends two gaussian-like decay terms, one for the measured
latency (in seconds) and one for the status feed's mirror score, each in
(0, 1] and weighted equally:

    rank = 0.5 * exp(-(t ** 2) / 100) + 0.5 * exp(-(score ** 2) / 100)

Lower latency and lower mirror score both push their term toward 1, so the
result is in (0, 1] and higher is better.

Fast mode skips probing and ranks by ``1 / score`` alone. The two formulas
use the mirror score differently; both are kept as they are.
"""

from __future__ import annotations

import math
from typing import Optional

from .config import SCORE_DECAY, SCORE_WEIGHT
from .errors import PreconditionViolation


def _decay(x: float) -> float:
    return math.exp(-(x * x) / SCORE_DECAY)


def weighted_score(prior_score: Optional[float], elapsed_ms: float) -> float:
    if prior_score is None:
        raise PreconditionViolation("weighted_score called without a mirror score")
    if elapsed_ms is None or elapsed_ms < 0:
        raise PreconditionViolation(f"invalid elapsed time: {elapsed_ms!r}")

    seconds = elapsed_ms / 1000.0
    return SCORE_WEIGHT * _decay(seconds) + SCORE_WEIGHT * _decay(prior_score)


def fast_score(prior_score: Optional[float]) -> float:
    """Connection-independent rank: inverse of the published mirror score."""
    if prior_score is None:
        raise PreconditionViolation("fast_score called without a mirror score")
    if prior_score == 0:
        raise PreconditionViolation("fast_score called with a zero mirror score")
    return 1.0 / prior_score
