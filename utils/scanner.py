"""Recursive HTML file discovery for a mirrored site tree."""
from __future__ import annotations

from pathlib import Path
from typing import List, Set

from logging_setup import get_logger

# --- Tunables ---------------------------------------------------------------
HTML_SUFFIX = ".html"
HIDDEN_PREFIX = "."
DEPENDENCY_DIR = "node_modules"
MIRROR_CACHE_DIR = "hts-cache"
BACKUP_MARKER = "backup"


def is_excluded(name: str) -> bool:
    """True for hidden entries, dependency/cache dirs and anything backup-named."""
    return (
        name.startswith(HIDDEN_PREFIX)
        or name == DEPENDENCY_DIR
        or name == MIRROR_CACHE_DIR
        or BACKUP_MARKER in name
    )


def _walk(directory: Path, suffix: str, visited: Set[Path], found: List[Path], log) -> None:
    abs_dir = directory.resolve()
    if abs_dir in visited:
        log.warning("Skipping circular reference: %s", abs_dir)
        return
    visited.add(abs_dir)

    try:
        entries = sorted(directory.iterdir(), key=lambda p: p.name)
    except OSError as exc:
        log.warning("Could not read directory %s: %s", directory, exc)
        return

    for entry in entries:
        if is_excluded(entry.name):
            continue
        if entry.is_dir():
            _walk(entry, suffix, visited, found, log)
        elif entry.name.endswith(suffix):
            found.append(entry)


def collect_html_files(root: Path, *, suffix: str = HTML_SUFFIX, log=None) -> List[Path]:
    """
    Depth-first list of files under root ending in suffix.

    Symlinked directories are followed once; a directory whose resolved path
    was already visited is skipped with a warning. Unreadable directories are
    logged and contribute nothing.
    """
    log = log or get_logger(step="scan", site=root.name)
    found: List[Path] = []
    _walk(root, suffix, set(), found, log)
    log.debug("scan found %d %s files under %s", len(found), suffix, root)
    return found


__all__ = ["collect_html_files", "is_excluded", "HTML_SUFFIX"]
