from __future__ import annotations

import sys
from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Union

from loguru import logger

from .config import SERVER_LINE_TEMPLATE
from .pipeline_types import RankedEntry


def render_server_line(base_url: str) -> str:
    """pacman mirrorlist line for a mirror base URL."""
    return SERVER_LINE_TEMPLATE.format(url=base_url)


def render(entries: Iterable[RankedEntry]) -> List[str]:
    """One line per entry, in the order given."""
    return [e.rendered_url for e in entries]


def write_lines(lines: Sequence[str], path: Optional[Union[str, Path]] = None) -> None:
    """
    Write the mirrorlist to ``path``, or to stdout when no path is given.
    """
    if path is None:
        for line in lines:
            print(line, file=sys.stdout)
        return

    out = Path(path)
    text = "\n".join(lines)
    if lines:
        text += "\n"
    out.write_text(text, encoding="utf-8")
    logger.info("Mirrorlist with {} entries written to {}", len(lines), out)
