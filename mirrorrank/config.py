from __future__ import annotations

import os
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field


# ---------------------------
# Catalog source
# ---------------------------

DEFAULT_STATUS_URL = "https://archlinux.org/mirrors/status/json/"
STATUS_URL = os.getenv("MIRRORRANK_STATUS_URL", DEFAULT_STATUS_URL)


# ---------------------------
# Catalog fetch / HTTP hardening
# ---------------------------

HTTP_CONNECT_TIMEOUT = 10.0
HTTP_READ_TIMEOUT = 30.0
HTTP_MAX_REDIRECTS = 3
HTTP_MAX_BYTES = 5_000_000  # status feed is ~300 kB today

HTTP_USER_AGENT = "mirrorrank/1.0 (+https://archlinux.org/mirrors/status/)"


# ---------------------------
# Probing
# ---------------------------

# Small file every healthy mirror carries.
DEFAULT_PROBE_PATH = "core/os/x86_64/core.db.tar.gz"
PROBE_PATH = os.getenv("MIRRORRANK_PROBE_PATH", DEFAULT_PROBE_PATH)

DEFAULT_PROBE_CONNECT_TIMEOUT = 15.0
PROBE_CONNECT_TIMEOUT = float(
    os.getenv("MIRRORRANK_CONNECT_TIMEOUT", str(DEFAULT_PROBE_CONNECT_TIMEOUT))
)

# Unset means no read limit; only the connect phase is bounded.
_read_timeout_env = os.getenv("MIRRORRANK_READ_TIMEOUT")
PROBE_READ_TIMEOUT: Optional[float] = float(_read_timeout_env) if _read_timeout_env else None


# ---------------------------
# Scoring & ranking
# ---------------------------

SCORE_WEIGHT = 0.5        # equal weight for latency and mirror score terms
SCORE_DECAY = 100.0       # denominator of both gaussian-like terms

DEFAULT_MIN_RANK = 0.5
MIN_RANK = float(os.getenv("MIRRORRANK_MIN_RANK", str(DEFAULT_MIN_RANK)))

SERVER_LINE_TEMPLATE = "Server = {url}$repo/os/$arch"

ELIGIBLE_PROTOCOL = "https"


# ---------------------------
# Logging
# ---------------------------

LOG_LEVEL = os.getenv("MIRRORRANK_LOG_LEVEL", "WARNING")


# ---------------------------
# Pydantic models for the status feed
# ---------------------------

class Candidate(BaseModel):
    """
    One mirror entry from the status feed.
    Only the fields the ranker reads are validated; country info is kept as-is
    and anything else is dropped.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    base_url: str = Field(alias="url")
    transport_protocol: str = Field(alias="protocol")
    prior_score: Optional[float] = Field(default=None, alias="score")
    supports_ipv4: bool = Field(alias="ipv4")
    is_active: bool = Field(alias="active")
    country: Any = None
    country_code: Any = None


class StatusDocument(BaseModel):
    """
    Top-level status feed payload. Metadata is carried as-is for logging only.
    """

    model_config = ConfigDict(extra="ignore")

    urls: List[Candidate]
    cutoff: Any = None
    last_check: Any = None
    num_checks: Any = None
    check_frequency: Any = None
    version: Any = None
