#!/usr/bin/env python3
"""Flatten an HTTrack mirror into its root folder and fix paths in every HTML file."""
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
from utils.mirror_restructure import DEFAULT_MIRROR_SUBDIR, analyze_structure, move_and_fix_structure
from utils.path_rewriter import fix_paths

DEFAULT_SITE_ROOT = "./IslamicBlogSite"


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Move an HTTrack mirror's domain folder up to the site root and fix relative paths.",
    )
    parser.add_argument(
        "root",
        nargs="?",
        type=Path,
        default=None,
        help=f"Site root (defaults to $MIRROR_SITE_ROOT or {DEFAULT_SITE_ROOT})",
    )
    parser.add_argument(
        "--subdir",
        default=DEFAULT_MIRROR_SUBDIR,
        help=f"Domain-named folder created by the mirror (default: {DEFAULT_MIRROR_SUBDIR})",
    )
    parser.add_argument(
        "--rewrite-only",
        action="store_true",
        help="Skip restructuring and only rewrite paths (use when the folder was already moved).",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help=(
            "Report files whose paths would change without writing them. Implies --rewrite-only, so on "
            "a mirror that was not flattened yet depths are measured on the nested layout and the "
            "counts differ from a real run."
        ),
    )
    parser.add_argument("-v", "--verbose", action="count", default=1, help="Increase verbosity (-v, -vv).")
    return parser


def main(argv: List[str] | None = None) -> int:
    load_dotenv()
    parser = _build_parser()
    args = parser.parse_args(argv)

    root: Path = args.root or Path(os.getenv("MIRROR_SITE_ROOT") or DEFAULT_SITE_ROOT)
    root = root.expanduser().resolve()
    if not root.is_dir():
        parser.error(f"root {root} is not a directory")

    setup_logging(verbosity=args.verbose)
    log = get_logger(step="fix-paths-runner", site=root.name)
    log.info("Starting path fixing process root=%s", root)

    if not (args.rewrite_only or args.dry_run):
        if not analyze_structure(root, args.subdir):
            log.error("Expected subdirectory structure not found. Check the HTTrack download.")
            return 0

        report = move_and_fix_structure(root, args.subdir)
        if report is None:
            log.error("Failed to move files")
            return 0
        if report.conflict is not None and report.conflict.needs_review:
            log.warning("Review %s: the homepage choice was a guess", report.conflict.backup_path.name)

    log.info("Fixing paths in HTML files")
    stats = fix_paths(root, subdir_name=args.subdir, dry_run=args.dry_run)

    if args.dry_run:
        log.info("dry-run complete: %d of %d files would change", stats.changed, stats.scanned)
    else:
        log.info(
            "Path fixing complete: fixed %d of %d HTML files, %d errors",
            stats.changed,
            stats.scanned,
            stats.failed,
        )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
