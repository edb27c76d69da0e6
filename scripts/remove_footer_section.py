#!/usr/bin/env python3
"""Strip the cluttered footer section from every page, keeping Google Translate."""
from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path
from typing import List

# --- ensure repo root on sys.path ---
THIS_FILE = Path(__file__).resolve()
REPO_ROOT = THIS_FILE.parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from dotenv import load_dotenv

from logging_setup import setup_logging, get_logger
from utils.footer_remover import DEFAULT_PROGRESS_EVERY, remove_footers


def _parse_args(argv: List[str] | None) -> tuple[argparse.ArgumentParser, argparse.Namespace]:
    parser = argparse.ArgumentParser(
        description="Remove the footer section from mirrored HTML pages and re-home the translate widget.",
    )
    parser.add_argument(
        "root",
        nargs="?",
        type=Path,
        default=None,
        help="Site root to scan (defaults to $MIRROR_SITE_ROOT or the current directory)",
    )
    parser.add_argument("--dry-run", action="store_true", help="Count pages that would change without writing.")
    parser.add_argument(
        "--progress-every",
        type=int,
        default=DEFAULT_PROGRESS_EVERY,
        help="Log progress every N files (0 to disable).",
    )
    parser.add_argument("-v", "--verbose", action="count", default=1, help="Increase verbosity (-v, -vv).")
    return parser, parser.parse_args(argv)


def main(argv: List[str] | None = None) -> int:
    load_dotenv()
    parser, args = _parse_args(argv)

    root: Path = args.root or Path(os.getenv("MIRROR_SITE_ROOT") or ".")
    root = root.expanduser().resolve()
    if not root.is_dir():
        parser.error(f"root {root} is not a directory")

    setup_logging(verbosity=args.verbose)
    log = get_logger(step="footer-runner", site=root.name)

    stats = remove_footers(root, dry_run=args.dry_run, progress_every=args.progress_every)

    log.info(
        "Summary: processed=%d cleaned=%d errors=%d",
        stats.processed,
        stats.changed,
        stats.failed,
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
