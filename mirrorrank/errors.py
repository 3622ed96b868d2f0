"""Exception types raised across the ranking pipeline."""

from __future__ import annotations


class MirrorRankError(Exception):
    """Base class for mirrorrank errors."""


class SourceUnavailable(MirrorRankError):
    """The mirror status feed could not be fetched or parsed. Fatal for the run."""


class PreconditionViolation(MirrorRankError, AssertionError):
    """
    A value reached the scoring/ranking stage that upstream filtering should
    have removed (missing score, zero score in fast mode, NaN rank).
    """
