from __future__ import annotations

from typing import Iterable, List

from loguru import logger

from .config import ELIGIBLE_PROTOCOL, Candidate


def is_eligible(candidate: Candidate) -> bool:
    """https, IPv4, active, and carrying a published score."""
    return (
        candidate.transport_protocol == ELIGIBLE_PROTOCOL
        and candidate.supports_ipv4
        and candidate.is_active
        and candidate.prior_score is not None
    )


def filter_candidates(catalog: Iterable[Candidate]) -> List[Candidate]:
    """
    Keep eligible mirrors in their original order.

    Pure and idempotent. An empty result is not an error; it just produces
    an empty mirrorlist downstream.
    """
    catalog = list(catalog)
    kept = [c for c in catalog if is_eligible(c)]
    logger.info("Catalog filter: kept {} of {} mirrors", len(kept), len(catalog))
    return kept
