from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from loguru import logger

from .catalog_fetch import load_candidates
from .config import LOG_LEVEL, MIN_RANK, PROBE_CONNECT_TIMEOUT, STATUS_URL
from .errors import SourceUnavailable
from .output import write_lines
from .pipeline import rank_mirrors


def _positive_float(value: str) -> float:
    try:
        f = float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not a number: {value!r}")
    if f <= 0:
        raise argparse.ArgumentTypeError("must be > 0")
    return f


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="mirrorrank",
        description="Rank Arch Linux mirrors by response time and mirror score.",
    )
    ap.add_argument("-f", "--fast", action="store_true",
                    help="fast ranking; ranked independently of your connection speed")
    ap.add_argument("--save", type=Path, default=None, metavar="FILE",
                    help="name of file to write mirrorlist to (default: stdout)")
    ap.add_argument("--timeout", type=_positive_float, default=PROBE_CONNECT_TIMEOUT,
                    help="per-mirror connection timeout in seconds (default: %(default)s)")
    ap.add_argument("--min-rank", type=float, default=MIN_RANK,
                    help="drop mirrors at or below this rank; ignored with --fast (default: %(default)s)")
    ap.add_argument("--status-url", default=STATUS_URL,
                    help="mirror status JSON feed (default: %(default)s)")
    ap.add_argument("-v", "--verbose", action="store_true", help="debug logging on stderr")
    return ap


def configure_logging(verbose: bool = False) -> None:
    # stdout carries the mirrorlist; logs go to stderr only
    logger.remove()
    logger.add(sys.stderr, level="DEBUG" if verbose else LOG_LEVEL)


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose)

    try:
        catalog = load_candidates(args.status_url)
    except SourceUnavailable as e:
        logger.error("Cannot rank mirrors: {}", e)
        return 1

    lines = rank_mirrors(
        catalog,
        fast_mode=args.fast,
        timeout=args.timeout,
        min_rank=args.min_rank,
    )
    write_lines(lines, args.save)
    return 0


if __name__ == "__main__":
    sys.exit(main())
