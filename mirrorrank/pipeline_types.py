"""Typed containers shared across pipeline modules."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .config import Candidate


@dataclass(frozen=True)
class ProbeOutcome:
    """Result of timing one mirror; ``elapsed_ms`` is set only on success."""

    candidate: Candidate
    succeeded: bool
    elapsed_ms: Optional[float] = None
    error: Optional[str] = None


@dataclass(frozen=True)
class RankedEntry:
    """One scored mirrorlist line. Higher ``rank`` is preferred."""

    rendered_url: str
    rank: float
    base_url: str = ""
