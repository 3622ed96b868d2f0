from __future__ import annotations

from typing import List, Optional

import httpx
from loguru import logger
from pydantic import ValidationError

from .config import (
    HTTP_CONNECT_TIMEOUT,
    HTTP_MAX_BYTES,
    HTTP_MAX_REDIRECTS,
    HTTP_READ_TIMEOUT,
    HTTP_USER_AGENT,
    STATUS_URL,
    Candidate,
    StatusDocument,
)
from .errors import SourceUnavailable


def _http_client() -> httpx.Client:
    return httpx.Client(
        headers={"User-Agent": HTTP_USER_AGENT, "Accept": "application/json"},
        follow_redirects=True,
        timeout=httpx.Timeout(HTTP_READ_TIMEOUT, connect=HTTP_CONNECT_TIMEOUT),
        max_redirects=HTTP_MAX_REDIRECTS,
    )


def _fetch_json_text(client: httpx.Client, url: str) -> str:
    logger.info("Fetching mirror status: {}", url)
    try:
        r = client.get(url)
    except httpx.HTTPError as e:
        raise SourceUnavailable(f"Request to {url} failed: {e}") from e
    if r.status_code >= 400:
        raise SourceUnavailable(f"HTTP {r.status_code} for {url}")
    if len(r.content) > HTTP_MAX_BYTES:
        raise SourceUnavailable(f"Status feed too large ({len(r.content)} bytes) for {url}")
    return r.text


def parse_status_document(text: str) -> StatusDocument:
    """Validate a raw status feed payload."""
    try:
        return StatusDocument.model_validate_json(text)
    except ValidationError as e:
        raise SourceUnavailable(f"Malformed mirror status feed: {e}") from e


def fetch_status_document(
    url: str = STATUS_URL,
    client: Optional[httpx.Client] = None,
) -> StatusDocument:
    """
    GET the mirror status feed once and parse it.

    Any failure (network, HTTP status, size cap, JSON/schema) is raised as
    SourceUnavailable; there is nothing to rank without the feed.
    """
    if client is not None:
        text = _fetch_json_text(client, url)
    else:
        with _http_client() as own_client:
            text = _fetch_json_text(own_client, url)

    doc = parse_status_document(text)
    logger.info(
        "Status feed: {} mirrors (last_check={}, version={})",
        len(doc.urls),
        doc.last_check,
        doc.version,
    )
    return doc


def load_candidates(
    url: str = STATUS_URL,
    client: Optional[httpx.Client] = None,
) -> List[Candidate]:
    return list(fetch_status_document(url, client=client).urls)
