from .catalog_filter import filter_candidates, is_eligible
from .config import Candidate, StatusDocument
from .errors import MirrorRankError, PreconditionViolation, SourceUnavailable
from .pipeline import rank_mirrors, run_pipeline
from .pipeline_types import ProbeOutcome, RankedEntry
from .probe import probe_all
from .ranker import rank_entries
from .scoring import fast_score, weighted_score

__all__ = [
    "Candidate",
    "StatusDocument",
    "ProbeOutcome",
    "RankedEntry",
    "MirrorRankError",
    "SourceUnavailable",
    "PreconditionViolation",
    "is_eligible",
    "filter_candidates",
    "probe_all",
    "weighted_score",
    "fast_score",
    "rank_entries",
    "run_pipeline",
    "rank_mirrors",
]
